"""Tests for fit analysis and shelf packing."""

import random

import pytest

from load_planner.fitting import (
    FitAnalyzer,
    ShelfPacker,
    candidate_orientations,
    deck_orientations,
    packing_order,
)
from load_planner.models import (
    CargoGeometry,
    CargoItem,
    CargoUnit,
    FitFailureReason,
    PermitType,
    TrailerCategory,
    TruckType,
)
from load_planner.models.fit_result import FitFlag


def make_unit(unit_id, length, width, height, weight=1_000.0, **kwargs):
    """Build a cargo unit for packing tests."""
    return CargoUnit(
        unit_id=unit_id,
        item_id=unit_id.split("#")[0],
        length=length,
        width=width,
        height=height,
        weight=weight,
        **kwargs,
    )


@pytest.fixture
def analyzer():
    """Fixture for a fit analyzer."""
    return FitAnalyzer()


class TestOrientations:
    """Tests for candidate orientations."""

    def test_box_has_six_orientations(self):
        """Test a box with distinct sides gets all six rotations."""
        orientations = candidate_orientations(make_unit("A#1", 10, 20, 30))
        assert len(orientations) == 6
        assert orientations[0] == (10, 20, 30)

    def test_duplicates_removed(self):
        """Test a cube has only one distinct orientation."""
        assert candidate_orientations(make_unit("A#1", 10, 10, 10)) == [(10, 10, 10)]

    def test_cylinder_keeps_rolling_axis_horizontal(self):
        """Test cylinder length is never vertical."""
        unit = make_unit("P#1", 240, 24, 30, geometry=CargoGeometry.CYLINDER)
        orientations = candidate_orientations(unit)

        assert len(orientations) == 4
        assert all(h != 240 for _, _, h in orientations)

    def test_irregular_not_rotated(self):
        """Test irregular units keep their given orientation."""
        unit = make_unit("X#1", 10, 20, 30, geometry=CargoGeometry.IRREGULAR)
        assert candidate_orientations(unit) == [(10, 20, 30)]

    def test_deck_orientations_filters_by_deck(self, flatbed_40):
        """Test only orientations fitting the empty deck are returned."""
        unit = make_unit("A#1", 40, 100, 30)
        fitting = deck_orientations(unit, flatbed_40)

        assert fitting[0] == (1, (100, 40, 30))
        assert all(w <= 96 and h <= 108 for _, (_, w, h) in fitting)


class TestShelfPacker:
    """Tests for the shelf packer."""

    def test_packing_order(self):
        """Test units are taken by item id, then unit number, whatever their size."""
        units = [
            make_unit("S#1", 90, 90, 90),
            make_unit("B#10", 10, 10, 10),
            make_unit("B#2", 50, 50, 10),
        ]
        assert [u.unit_id for u in packing_order(units)] == ["B#2", "B#10", "S#1"]

    def test_units_fill_shelf_across_then_open_new_shelf(self, flatbed_40):
        """Test shelves fill left to right before a new shelf opens behind."""
        units = [make_unit(f"BOX#{n}", 100, 48, 48) for n in (1, 2, 3)]
        outcome = ShelfPacker(flatbed_40).pack(units)

        assert outcome.success
        positions = {p.unit_id: (p.x, p.y, p.z, p.shelf) for p in outcome.placements}
        assert positions["BOX#1"] == (0.0, 0.0, 0.0, 0)
        assert positions["BOX#2"] == (0.0, 48.0, 0.0, 0)
        assert positions["BOX#3"] == (100.0, 0.0, 0.0, 1)

    def test_stackable_units_stack(self, flatbed_40):
        """Test a stackable unit goes on top of a supporting column."""
        units = [make_unit(f"S#{n}", 48, 40, 40, stackable=True) for n in (1, 2)]
        outcome = ShelfPacker(flatbed_40).pack(units)

        top = outcome.placements[1]
        assert top.z == 40.0
        assert top.stacked_on == "S#1"
        assert (top.x, top.y) == (0.0, 0.0)

    def test_fragile_units_carry_nothing(self, flatbed_40):
        """Test nothing is stacked on a fragile unit."""
        units = [make_unit(f"F#{n}", 48, 40, 40, stackable=True, fragile=True) for n in (1, 2)]
        outcome = ShelfPacker(flatbed_40).pack(units)

        assert all(p.z == 0.0 for p in outcome.placements)
        assert all(p.stacked_on is None for p in outcome.placements)

    def test_stack_respects_deck_height(self, flatbed_40):
        """Test stacks never exceed the deck height."""
        units = [make_unit(f"T#{n}", 48, 40, 60, stackable=True) for n in (1, 2)]
        outcome = ShelfPacker(flatbed_40).pack(units)

        assert outcome.success
        assert all(p.top <= flatbed_40.deck_height for p in outcome.placements)

    def test_reports_unit_that_does_not_fit(self, flatbed_40):
        """Test the first unit without room is reported."""
        units = [make_unit(f"L#{n}", 200, 96, 100) for n in (1, 2, 3)]
        outcome = ShelfPacker(flatbed_40).pack(units)

        assert not outcome.success
        assert outcome.failed_unit.unit_id == "L#3"
        assert len(outcome.placements) == 2

    def test_packing_is_deterministic(self, flatbed_40):
        """Test identical inputs give identical placements."""
        units = [make_unit(f"M#{n}", 60 + n, 30 + n, 20, stackable=n % 2 == 0) for n in range(1, 9)]
        first = ShelfPacker(flatbed_40).pack(units).placements
        second = ShelfPacker(flatbed_40).pack(list(reversed(units))).placements
        assert first == second


class TestFitAnalyzer:
    """Tests for FitAnalyzer."""

    def test_three_boxes_on_flatbed(self, analyzer, box_item, flatbed_40):
        """Test three 100x48x48 in boxes fit a 480x96x108 flatbed."""
        result = analyzer.analyze([box_item], flatbed_40)

        assert result.feasible
        assert result.reason is None
        assert sorted(result.unit_ids) == ["BOX#1", "BOX#2", "BOX#3"]
        assert result.utilization.weight_pct == pytest.approx(62.5)
        assert result.utilization.floor_area_pct == pytest.approx(31.25)
        assert result.envelope.length == 200.0
        assert result.envelope.width == 96.0
        assert result.envelope.height == 48.0
        assert result.envelope.weight == 30_000.0

    def test_empty_cargo_is_feasible(self, analyzer, flatbed_40):
        """Test no cargo trivially fits."""
        result = analyzer.analyze([], flatbed_40)
        assert result.feasible
        assert result.placements == []

    def test_too_wide_in_every_orientation(self, analyzer, flatbed_40):
        """Test a 110 in cube can't fit a 96 in deck."""
        item = CargoItem(id="BIG", length=110, width=110, height=110, weight=5_000)
        result = analyzer.analyze([item], flatbed_40)

        assert not result.feasible
        assert result.reason == FitFailureReason.EXCEEDS_WIDTH
        assert "BIG#1" in result.detail

    def test_too_tall(self, analyzer, flatbed_40):
        """Test an irregular unit taller than the deck allows."""
        item = CargoItem(id="TALL", length=200, width=90, height=120, weight=5_000,
                         geometry=CargoGeometry.IRREGULAR)
        result = analyzer.analyze([item], flatbed_40)
        assert result.reason == FitFailureReason.EXCEEDS_HEIGHT

    def test_too_long(self, analyzer, flatbed_40):
        """Test an irregular unit longer than the deck."""
        item = CargoItem(id="LONG", length=500, width=90, height=90, weight=5_000,
                         geometry=CargoGeometry.IRREGULAR)
        result = analyzer.analyze([item], flatbed_40)
        assert result.reason == FitFailureReason.EXCEEDS_LENGTH

    def test_exceeds_payload(self, analyzer, flatbed_40):
        """Test total weight above payload is infeasible."""
        item = CargoItem(id="HEAVY", length=50, width=40, height=40, weight=10_000, quantity=5)
        result = analyzer.analyze([item], flatbed_40)

        assert result.reason == FitFailureReason.EXCEEDS_WEIGHT
        assert result.placements == []

    def test_exceeds_axle_limit(self, analyzer):
        """Test a single piece above the axle limit is infeasible."""
        truck = TruckType(
            id="AX", name="Axle", category=TrailerCategory.FLATBED,
            deck_length=480, deck_width=102, deck_height=100, max_payload=48_000,
            axle_weight_limit=20_000,
        )
        item = CargoItem(id="DENSE", length=50, width=40, height=40, weight=25_000)
        result = analyzer.analyze([item], truck)
        assert result.reason == FitFailureReason.EXCEEDS_AXLE_WEIGHT

    def test_packing_failure_reports_length(self, analyzer, flatbed_40):
        """Test units fitting alone but not together exceed length."""
        item = CargoItem(id="L", length=200, width=96, height=100, weight=1_000, quantity=3)
        result = analyzer.analyze([item], flatbed_40)
        assert result.reason == FitFailureReason.EXCEEDS_LENGTH

    def test_rotation_is_flagged(self, analyzer, flatbed_40):
        """Test a unit placed turned on the deck is flagged."""
        item = CargoItem(id="R", length=40, width=100, height=30, weight=1_000)
        result = analyzer.analyze([item], flatbed_40)

        assert result.feasible
        placement = result.placements[0]
        assert placement.rotated
        assert (placement.length, placement.width) == (100, 40)
        assert [f.flag for f in result.flagged] == [FitFlag.ROTATED]

    def test_geometry_flags(self, analyzer, flatbed_40):
        """Test cylinders and irregular units are flagged."""
        items = [
            CargoItem(id="PIPE", length=240, width=24, height=24, weight=800,
                      geometry=CargoGeometry.CYLINDER),
            CargoItem(id="SKID", length=60, width=50, height=40, weight=900,
                      geometry=CargoGeometry.IRREGULAR),
        ]
        result = analyzer.analyze(items, flatbed_40)
        flags = {(f.unit_id, f.flag) for f in result.flagged}

        assert ("PIPE#1", FitFlag.CYLINDER_BOUNDING_BOX) in flags
        assert ("SKID#1", FitFlag.IRREGULAR_APPROXIMATED) in flags

    def test_overhang_is_flagged(self, analyzer):
        """Test cargo using the allowed rear overhang."""
        truck = TruckType(
            id="OH", name="Overhang", category=TrailerCategory.FLATBED,
            deck_length=480, deck_width=102, deck_height=100, max_payload=48_000,
            max_overhang=48,
        )
        item = CargoItem(id="BEAM", length=500, width=20, height=20, weight=2_000,
                         geometry=CargoGeometry.IRREGULAR)
        result = analyzer.analyze([item], truck)

        assert result.feasible
        assert FitFlag.OVERHANG in [f.flag for f in result.flagged]
        assert result.utilization.length_pct > 100

    def test_legal_exceedances(self, analyzer, lowboy):
        """Test cargo wider than the truck's legal width is flagged for permits."""
        item = CargoItem(id="WIDE", length=200, width=120, height=100, weight=30_000)
        result = analyzer.analyze([item], lowboy)

        assert result.feasible
        assert result.legal_exceedances == [PermitType.OVERSIZE_WIDTH]
        assert not result.is_legal

    def test_accepts_units_and_items(self, analyzer, box_item, flatbed_40):
        """Test items and pre-expanded units give the same fit."""
        from_items = analyzer.analyze([box_item], flatbed_40)
        from_units = analyzer.analyze(box_item.expand(), flatbed_40)
        assert from_items.placements == from_units.placements

    def test_placements_within_deck(self, analyzer, flatbed_40):
        """Test every placement lies within the deck bounds."""
        items = [
            CargoItem(id="A", length=120, width=48, height=40, weight=2_000, quantity=4, stackable=True),
            CargoItem(id="B", length=96, width=40, height=30, weight=1_000, quantity=3),
        ]
        result = analyzer.analyze(items, flatbed_40)

        assert result.feasible
        for p in result.placements:
            assert p.rear <= flatbed_40.usable_length
            assert p.y + p.width <= flatbed_40.deck_width
            assert p.top <= flatbed_40.deck_height


class TestFitMonotonicity:
    """Enlarging cargo never turns an infeasible truck feasible."""

    @pytest.fixture
    def cube_deck(self):
        """Fixture for a 100 in cube deck."""
        return TruckType(
            id="CUBE100", name="Cube Deck", category=TrailerCategory.OTHER,
            deck_length=100, deck_width=100, deck_height=100, max_payload=50_000,
        )

    def test_layout_found_beyond_first_fit(self, analyzer, cube_deck):
        """Test side-by-side pieces share a shelf instead of running out of deck."""
        items = [
            CargoItem(id="A", length=25, width=88, height=98, weight=1_000, stackable=True),
            CargoItem(id="B", length=38, width=61, height=39, weight=1_000),
            CargoItem(id="C", length=58, width=31, height=39, weight=1_000, stackable=True),
        ]
        result = analyzer.analyze(items, cube_deck)

        assert result.feasible
        assert result.envelope.length == 83.0
        shelves = {p.unit_id: p.shelf for p in result.placements}
        assert shelves == {"A#1": 0, "B#1": 1, "C#1": 1}

    def test_widening_one_item_keeps_fit(self, analyzer, cube_deck):
        """Test widening B still fits, with A turned to make room."""
        items = [
            CargoItem(id="A", length=25, width=88, height=98, weight=1_000, stackable=True),
            CargoItem(id="B", length=38, width=79, height=39, weight=1_000),
            CargoItem(id="C", length=58, width=31, height=39, weight=1_000, stackable=True),
        ]
        result = analyzer.analyze(items, cube_deck)

        assert result.feasible
        assert all(p.top <= 100 and p.rear <= 100 and p.y + p.width <= 100 for p in result.placements)

    def test_growing_never_makes_infeasible_feasible(self, analyzer, cube_deck):
        """Test random cargo sets: growing one dimension or weight never helps."""
        rng = random.Random(1987)
        geometries = list(CargoGeometry)
        infeasible_seen = 0

        for trial in range(200):
            items = [
                CargoItem(
                    id=f"I{n}",
                    length=rng.randint(10, 95),
                    width=rng.randint(10, 95),
                    height=rng.randint(10, 95),
                    weight=rng.randint(500, 20_000),
                    quantity=rng.randint(1, 2),
                    geometry=rng.choice(geometries),
                    stackable=rng.random() < 0.5,
                )
                for n in range(rng.randint(2, 4))
            ]
            before = analyzer.analyze(items, cube_deck)
            if before.feasible:
                continue
            infeasible_seen += 1

            index = rng.randrange(len(items))
            attribute = rng.choice(["length", "width", "height", "weight"])
            grown = list(items)
            grown[index] = items[index].model_copy(
                update={attribute: getattr(items[index], attribute) + rng.randint(1, 40)}
            )
            after = analyzer.analyze(grown, cube_deck)

            assert not after.feasible, (
                f"trial {trial}: growing {attribute} of {items[index].id} made the set fit"
            )

        assert infeasible_seen > 0

    def test_shrinking_keeps_feasible_sets_feasible(self, analyzer, flatbed_40):
        """Test every feasible set stays feasible when one piece shrinks."""
        rng = random.Random(42)

        for trial in range(100):
            items = [
                CargoItem(
                    id=f"P{n}",
                    length=rng.randint(20, 200),
                    width=rng.randint(20, 96),
                    height=rng.randint(20, 108),
                    weight=rng.randint(500, 8_000),
                    stackable=rng.random() < 0.5,
                )
                for n in range(rng.randint(2, 5))
            ]
            before = analyzer.analyze(items, flatbed_40)
            if not before.feasible:
                continue

            index = rng.randrange(len(items))
            attribute = rng.choice(["length", "width", "height"])
            shrunk = list(items)
            shrunk[index] = items[index].model_copy(
                update={attribute: getattr(items[index], attribute) * 0.5}
            )

            assert analyzer.analyze(shrunk, flatbed_40).feasible, f"trial {trial}"
