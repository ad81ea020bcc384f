"""Unit tests for data models."""

import pytest
from pydantic import ValidationError

from load_planner.models import (
    CargoGeometry,
    CargoItem,
    CargoUnit,
    EscortBand,
    EscortPosition,
    LoadEnvelope,
    PermitRequirement,
    PermitType,
    StatePermitRules,
    StateSegment,
    TrailerCategory,
    TruckType,
    escort_positions_for,
    expand_manifest,
    route_miles,
)


class TestCargoItem:
    """Tests for CargoItem model."""

    def test_valid_item(self, box_item):
        """Test creating a valid cargo item."""
        assert box_item.id == "BOX"
        assert box_item.quantity == 3
        assert box_item.geometry == CargoGeometry.BOX
        assert box_item.total_weight == 30_000.0
        assert box_item.unit_volume == 100.0 * 48.0 * 48.0

    def test_defaults(self):
        """Test default quantity, geometry and flags."""
        item = CargoItem(id="A", length=10, width=10, height=10, weight=5)
        assert item.quantity == 1
        assert item.geometry == CargoGeometry.BOX
        assert item.stackable is False
        assert item.fragile is False

    @pytest.mark.parametrize("field", ["length", "width", "height", "weight"])
    def test_non_positive_values_rejected(self, field):
        """Test that zero or negative measurements are rejected."""
        values = dict(id="A", length=10, width=10, height=10, weight=5)
        values[field] = 0
        with pytest.raises(ValidationError):
            CargoItem(**values)

    def test_zero_quantity_rejected(self):
        """Test that quantity must be at least 1."""
        with pytest.raises(ValidationError):
            CargoItem(id="A", length=10, width=10, height=10, weight=5, quantity=0)

    def test_items_are_frozen(self, box_item):
        """Test that items can't be mutated."""
        with pytest.raises(ValidationError):
            box_item.weight = 1.0

    def test_expand_creates_numbered_units(self, box_item):
        """Test quantity expansion into identical units."""
        units = box_item.expand()

        assert [u.unit_id for u in units] == ["BOX#1", "BOX#2", "BOX#3"]
        assert all(u.item_id == "BOX" for u in units)
        assert all(u.dimensions == (100.0, 48.0, 48.0) for u in units)
        assert all(u.weight == 10_000.0 for u in units)

    def test_expand_manifest_preserves_order(self, box_item):
        """Test manifest expansion keeps item order."""
        other = CargoItem(id="PIPE", length=240, width=24, height=24, weight=800,
                          geometry=CargoGeometry.CYLINDER)
        units = expand_manifest([other, box_item])

        assert [u.unit_id for u in units] == ["PIPE#1", "BOX#1", "BOX#2", "BOX#3"]
        assert units[0].geometry == CargoGeometry.CYLINDER

    def test_expand_manifest_rejects_duplicate_ids(self, box_item):
        """Test that duplicate item ids are a programmer error."""
        with pytest.raises(ValueError, match="Duplicate cargo item id"):
            expand_manifest([box_item, box_item])


class TestCargoUnit:
    """Tests for CargoUnit stacking rules."""

    def _unit(self, **overrides):
        values = dict(unit_id="U#1", item_id="U", length=48, width=40, height=30, weight=500)
        values.update(overrides)
        return CargoUnit(**values)

    def test_non_stackable_unit(self):
        """Test that the default unit can't stack or support."""
        unit = self._unit()
        assert not unit.can_stack()
        assert not unit.can_support()

    def test_stackable_unit_supports(self):
        """Test that a stackable unit can carry another unit."""
        unit = self._unit(stackable=True)
        assert unit.can_stack()
        assert unit.can_support()

    def test_fragile_unit_does_not_support(self):
        """Test that fragile units can be stacked but carry nothing."""
        unit = self._unit(stackable=True, fragile=True)
        assert unit.can_stack()
        assert not unit.can_support()

    def test_irregular_unit_never_stacks(self):
        """Test that irregular units are excluded from stacking."""
        unit = self._unit(stackable=True, geometry=CargoGeometry.IRREGULAR)
        assert not unit.can_stack()
        assert not unit.can_support()

    def test_footprint_and_volume(self):
        """Test derived areas."""
        unit = self._unit()
        assert unit.footprint_area == 48 * 40
        assert unit.volume == 48 * 40 * 30


class TestTruckType:
    """Tests for TruckType model."""

    def test_legal_thresholds_default_from_federal_limits(self, flatbed_40):
        """Test omitted legal thresholds are filled in."""
        assert flatbed_40.legal_length == 480.0
        assert flatbed_40.legal_width == 102.0
        assert flatbed_40.legal_height == 162.0
        assert flatbed_40.legal_weight == 80_000.0

    def test_legal_thresholds_account_for_elevation_and_tare(self, lowboy):
        """Test legal height and weight subtract deck elevation and tare."""
        assert lowboy.legal_height == 162.0 - 18.0
        assert lowboy.legal_weight == 80_000.0 - 40_000.0

    def test_explicit_legal_thresholds_are_kept(self):
        """Test explicit thresholds override the defaults."""
        truck = TruckType(
            id="T", name="T", category=TrailerCategory.OTHER,
            deck_length=100, deck_width=100, deck_height=100, max_payload=1000,
            legal_width=96, legal_weight=900,
        )
        assert truck.legal_width == 96
        assert truck.legal_weight == 900

    def test_derived_properties(self, lowboy):
        """Test deck area, volume and usable length."""
        assert lowboy.deck_area == 288.0 * 144.0
        assert lowboy.deck_volume == 288.0 * 144.0 * 160.0
        assert lowboy.usable_length == 288.0

    def test_invalid_deck_rejected(self):
        """Test that a zero deck dimension is rejected."""
        with pytest.raises(ValidationError):
            TruckType(
                id="T", name="T", category=TrailerCategory.OTHER,
                deck_length=0, deck_width=100, deck_height=100, max_payload=1000,
            )


class TestRouteAndEnvelope:
    """Tests for StateSegment and LoadEnvelope."""

    def test_state_code_normalized(self):
        """Test state codes are upper-cased and stripped."""
        segment = StateSegment(state_code=" tx ", miles_in_state=12)
        assert segment.state_code == "TX"

    def test_negative_miles_rejected(self):
        """Test miles can't be negative."""
        with pytest.raises(ValidationError):
            StateSegment(state_code="TX", miles_in_state=-1)

    def test_route_miles(self, tx_ok_route):
        """Test total route miles."""
        assert route_miles(tx_ok_route) == 80
        assert route_miles([]) == 0

    def test_envelope_on_truck(self, lowboy):
        """Test the transport envelope adds deck elevation and tare weight."""
        envelope = LoadEnvelope(length=200, width=120, height=110, weight=30_000)
        transport = envelope.on_truck(lowboy)

        assert transport.length == 200
        assert transport.width == 120
        assert transport.height == 128
        assert transport.weight == 70_000


class TestPermitModels:
    """Tests for permit rule and requirement models."""

    def test_escort_positions(self):
        """Test escort positions per escort count."""
        assert escort_positions_for(0) == []
        assert escort_positions_for(1) == [EscortPosition.FRONT]
        assert escort_positions_for(2) == [EscortPosition.FRONT, EscortPosition.REAR]

    def test_escort_count_capped_at_two(self):
        """Test requirement rejects more than two escorts."""
        with pytest.raises(ValidationError):
            PermitRequirement(state_code="TX", escort_count=3)

    def test_requirement_flags(self):
        """Test oversize and overweight flags."""
        requirement = PermitRequirement(
            state_code="TX",
            permits=[PermitType.OVERSIZE_WIDTH, PermitType.OVERWEIGHT],
        )
        assert requirement.requires_permit
        assert requirement.is_oversize
        assert requirement.is_overweight
        assert not PermitRequirement(state_code="TX").requires_permit

    def test_bands_sorted_by_excess(self, texas_rules):
        """Test bands_for returns bands for one dimension in ascending order."""
        rules = texas_rules.model_copy(update={"escort_bands": [
            EscortBand(dimension=PermitType.OVERSIZE_WIDTH, min_excess=90, escorts=2),
            EscortBand(dimension=PermitType.OVERSIZE_LENGTH, min_excess=10, escorts=1),
            EscortBand(dimension=PermitType.OVERSIZE_WIDTH, min_excess=42, escorts=1),
        ]})

        bands = rules.bands_for(PermitType.OVERSIZE_WIDTH)
        assert [b.min_excess for b in bands] == [42, 90]

    def test_rules_state_code_normalized(self):
        """Test rule state codes are normalized."""
        rules = StatePermitRules(
            state_code="ok", legal_length=1, legal_width=1, legal_height=1, legal_weight=1
        )
        assert rules.state_code == "OK"
