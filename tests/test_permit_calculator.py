"""Tests for state permit and escort computation."""

import pytest

from load_planner.catalog import PermitRuleTable
from load_planner.exceptions import UnknownJurisdictionError
from load_planner.models import (
    EscortBand,
    EscortPosition,
    LoadEnvelope,
    PermitType,
    StateSegment,
    TravelRestriction,
)
from load_planner.permits import PermitCalculator, envelope_value, merge_requirements


def envelope(length=480.0, width=96.0, height=150.0, weight=60_000.0):
    """Build a transport envelope."""
    return LoadEnvelope(length=length, width=width, height=height, weight=weight)


@pytest.fixture
def default_calculator(default_rule_table):
    """Fixture for a calculator on the built-in rules."""
    return PermitCalculator(default_rule_table)


class TestPermitCalculatorBasics:
    """Tests for permit triggering per state."""

    def test_width_at_limit_needs_no_permit(self, two_state_table, tx_ok_route):
        """Test 102 in wide cargo needs a permit in OK (96 in) but not TX (102 in)."""
        calculator = PermitCalculator(two_state_table)
        load = LoadEnvelope(length=600, width=102, height=102, weight=45_000)

        requirements = calculator.compute_permits(load, tx_ok_route)

        assert [r.state_code for r in requirements] == ["OK"]
        assert requirements[0].permits == [PermitType.OVERSIZE_WIDTH]
        assert requirements[0].excess[PermitType.OVERSIZE_WIDTH] == 6.0
        assert requirements[0].miles == 30

    def test_legal_load_needs_nothing(self, default_calculator, tx_ok_route):
        """Test a load within every limit yields no requirements."""
        assert default_calculator.compute_permits(envelope(), tx_ok_route) == []

    def test_empty_route(self, default_calculator):
        """Test an empty route yields no requirements."""
        assert default_calculator.compute_permits(envelope(width=200), []) == []

    def test_permits_in_canonical_order(self, default_calculator):
        """Test every exceeded dimension is listed in canonical order."""
        rules = default_calculator.rule_table.get("TX")
        requirement = default_calculator.evaluate_state(
            envelope(length=900, width=120, height=180, weight=100_000), rules
        )
        assert requirement.permits == [
            PermitType.OVERSIZE_LENGTH,
            PermitType.OVERSIZE_WIDTH,
            PermitType.OVERSIZE_HEIGHT,
            PermitType.OVERWEIGHT,
        ]
        assert len(requirement.reasons) == 4

    def test_envelope_value(self):
        """Test envelope values per permit type."""
        load = envelope(length=1, width=2, height=3, weight=4)
        assert envelope_value(load, PermitType.OVERSIZE_LENGTH) == 1
        assert envelope_value(load, PermitType.OVERWEIGHT) == 4


class TestEscortsAndRestrictions:
    """Tests for escort bands and travel restrictions on built-in rules."""

    def test_one_escort_width_band(self, default_calculator):
        """Test 150 in wide in Texas triggers one front escort."""
        rules = default_calculator.rule_table.get("TX")
        requirement = default_calculator.evaluate_state(envelope(width=150), rules)

        assert requirement.escort_count == 1
        assert requirement.escort_positions == [EscortPosition.FRONT]
        assert requirement.travel_restrictions == [
            TravelRestriction.DAYLIGHT_ONLY,
            TravelRestriction.NO_HOLIDAY,
        ]
        assert not requirement.superload

    def test_two_escort_width_band(self, default_calculator):
        """Test 200 in wide in Texas triggers two escorts and is a superload."""
        rules = default_calculator.rule_table.get("TX")
        requirement = default_calculator.evaluate_state(envelope(width=200), rules)

        assert requirement.escort_count == 2
        assert requirement.escort_positions == [EscortPosition.FRONT, EscortPosition.REAR]
        assert requirement.superload

    def test_height_pole_car(self, default_calculator):
        """Test overheight past the pole car threshold."""
        rules = default_calculator.rule_table.get("TX")
        requirement = default_calculator.evaluate_state(envelope(height=210), rules)

        assert requirement.permits == [PermitType.OVERSIZE_HEIGHT]
        assert requirement.pole_car_required
        assert requirement.escort_count == 1

    def test_overweight_only_gets_no_oversize_restrictions(self, default_calculator):
        """Test state oversize restrictions apply only to oversize permits."""
        rules = default_calculator.rule_table.get("TX")
        requirement = default_calculator.evaluate_state(envelope(weight=90_000), rules)

        assert requirement.permits == [PermitType.OVERWEIGHT]
        assert requirement.travel_restrictions == []
        assert requirement.escort_count == 0

    def test_escorts_capped_at_two(self, texas_rules):
        """Test escorts never exceed two whatever the bands say."""
        rules = texas_rules.model_copy(update={"escort_bands": [
            EscortBand(dimension=PermitType.OVERSIZE_WIDTH, min_excess=0, escorts=2),
            EscortBand(dimension=PermitType.OVERSIZE_LENGTH, min_excess=0, escorts=2),
        ]})
        calculator = PermitCalculator(PermitRuleTable([rules]))
        requirement = calculator.evaluate_state(envelope(length=900, width=120), rules)
        assert requirement.escort_count == 2

    def test_width_monotonic(self, default_calculator):
        """Test more width never reduces permits or escorts."""
        previous_permits = set()
        previous_escorts = 0
        rules = default_calculator.rule_table.get("CA")
        for width in range(90, 240, 6):
            requirement = default_calculator.evaluate_state(envelope(width=float(width)), rules)
            permits = set(requirement.permits)
            assert previous_permits <= permits
            assert requirement.escort_count >= previous_escorts
            previous_permits, previous_escorts = permits, requirement.escort_count


class TestRouteHandling:
    """Tests for route resolution and state independence."""

    def test_unknown_state_aborts(self, default_calculator):
        """Test an unknown state raises with its route position."""
        route = [StateSegment(state_code="TX", miles_in_state=10),
                 StateSegment(state_code="ZZ", miles_in_state=5)]

        with pytest.raises(UnknownJurisdictionError) as exc_info:
            default_calculator.compute_permits(envelope(width=150), route)

        assert exc_info.value.state_code == "ZZ"
        assert exc_info.value.context["route_position"] == 1

    def test_repeated_state_merged(self, default_calculator):
        """Test a state visited twice is reported once with summed miles."""
        route = [
            StateSegment(state_code="TX", miles_in_state=50),
            StateSegment(state_code="OK", miles_in_state=30),
            StateSegment(state_code="TX", miles_in_state=20),
        ]
        requirements = default_calculator.compute_permits(envelope(width=120), route)

        assert [r.state_code for r in requirements] == ["TX", "OK"]
        assert requirements[0].miles == 70

    def test_states_evaluated_independently(self, default_calculator):
        """Test a state's requirement doesn't depend on its neighbours."""
        load = envelope(width=150, weight=85_000)
        alone = default_calculator.compute_permits(
            load, [StateSegment(state_code="OK", miles_in_state=30)]
        )
        on_route = default_calculator.compute_permits(
            load,
            [StateSegment(state_code="NJ", miles_in_state=10),
             StateSegment(state_code="OK", miles_in_state=30)],
        )
        assert on_route[-1] == alone[0]

    def test_overweight_threshold_differs_by_state(self, default_calculator, tx_ok_route):
        """Test 85,000 lbs is overweight in TX but legal in OK."""
        requirements = default_calculator.compute_permits(envelope(weight=85_000), tx_ok_route)
        assert [r.state_code for r in requirements] == ["TX"]


class TestMergeRequirements:
    """Tests for merging requirements across loads."""

    def test_merge_two_loads(self, default_calculator, tx_ok_route):
        """Test permits combine per state and escorts take the maximum."""
        wide = default_calculator.compute_permits(envelope(width=150), tx_ok_route)
        heavy = default_calculator.compute_permits(envelope(weight=95_000), tx_ok_route)

        merged = merge_requirements([wide, heavy], tx_ok_route)

        assert [r.state_code for r in merged] == ["TX", "OK"]
        texas = merged[0]
        assert texas.permits == [PermitType.OVERSIZE_WIDTH, PermitType.OVERWEIGHT]
        assert texas.escort_count == 1
        assert texas.miles == 50

    def test_merge_nothing(self, tx_ok_route):
        """Test merging no requirements gives nothing."""
        assert merge_requirements([[], []], tx_ok_route) == []
