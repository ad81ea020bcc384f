"""Tests for tie-down planning and loading instructions."""

import pytest

from load_planner.fitting import FitAnalyzer
from load_planner.loading import SecurementPlanner, effective_wll, loading_instructions
from load_planner.models import CargoGeometry, CargoItem, CargoUnit, TieDownType


@pytest.fixture
def securement_planner():
    """Fixture for a securement planner."""
    return SecurementPlanner()


def make_unit(length=100.0, weight=1_000.0, **kwargs):
    return CargoUnit(
        unit_id=kwargs.pop("unit_id", "U#1"),
        item_id="U",
        length=length,
        width=kwargs.pop("width", 48.0),
        height=kwargs.pop("height", 48.0),
        weight=weight,
        **kwargs,
    )


class TestTieDowns:
    """Tests for tie-down counts and equipment."""

    @pytest.mark.parametrize("length,weight,expected", [
        (100, 1_000, 2),
        (600, 1_000, 5),
        (100, 12_000, 4),
        (100, 25_000, 6),
        (100, 45_000, 8),
        (50, 6_000, 4),
        (50, 4_000, 2),
    ])
    def test_required_tie_downs(self, securement_planner, length, weight, expected):
        """Test length spacing and weight minimums."""
        assert securement_planner.required_tie_downs(make_unit(length, weight)) == expected

    @pytest.mark.parametrize("weight,tie_down_type,wll", [
        (3_000, TieDownType.STRAP, 3_333),
        (8_000, TieDownType.STRAP, 5_400),
        (15_000, TieDownType.CHAIN, 6_600),
        (25_000, TieDownType.CHAIN, 11_300),
    ])
    def test_equipment_by_weight(self, securement_planner, weight, tie_down_type, wll):
        """Test straps below 10,000 lbs and heavier chain above 20,000 lbs."""
        assert securement_planner.tie_down_type(weight) == tie_down_type
        assert securement_planner.tie_down_wll(tie_down_type, weight) == wll

    def test_effective_wll(self):
        """Test angle adjustment of working load limits."""
        assert effective_wll(5_400, 45.0) == 3_818
        assert effective_wll(11_300, 30.0) == 9_786
        assert effective_wll(5_400, 0.0) == 5_400

    def test_box_plan(self, securement_planner):
        """Test a 10,000 lb box gets two 4 in straps."""
        plan = securement_planner.plan_unit(make_unit(100, 10_000, unit_id="BOX#1"))

        assert plan.tie_down_type == TieDownType.STRAP
        assert plan.side_tie_downs == 2
        assert plan.corner_chains == 0
        assert plan.rated_wll == 10_800
        assert plan.effective_wll == 7_636
        assert plan.required_wll == 5_000
        assert plan.is_compliant

    def test_heavy_piece_gets_corner_chains(self, securement_planner):
        """Test a 45,000 lb tank gets eight chains plus four corner chains."""
        tank = make_unit(600, 45_000, unit_id="TANK#1", width=102.0, height=102.0)
        plan = securement_planner.plan_unit(tank)

        assert plan.side_tie_downs == 8
        assert plan.corner_chains == 4
        assert plan.tie_down_count == 12
        assert plan.chain_count == 12
        assert plan.strap_count == 0
        assert plan.rated_wll == 135_600
        assert plan.effective_wll == 103_064
        assert plan.required_wll == 22_500
        assert any("blocking" in note for note in plan.notes)

    def test_handling_notes(self, securement_planner):
        """Test notes for rolling and fragile cargo."""
        pipe = make_unit(240, 800, geometry=CargoGeometry.CYLINDER, fragile=True)
        notes = securement_planner.plan_unit(pipe).notes

        assert any("rolling" in note for note in notes)
        assert any("Fragile" in note for note in notes)

    def test_extreme_weight_not_compliant(self, securement_planner):
        """Test the standard plan falls short for a 250,000 lb piece."""
        plan = securement_planner.plan_load([make_unit(100, 250_000)])

        assert not plan.is_compliant()
        assert [unit.unit_id for unit in plan.non_compliant] == ["U#1"]

    def test_load_totals(self, securement_planner, box_item):
        """Test totals across three boxes."""
        plan = securement_planner.plan_load(box_item.expand())

        assert plan.total_tie_downs == 6
        assert plan.strap_count == 6
        assert plan.chain_count == 0
        assert plan.total_effective_wll == 22_908
        assert plan.total_required_wll == 15_000
        assert plan.is_compliant()
        assert str(plan) == (
            "Securement: 6 tie-downs (0 chains, 6 straps), "
            "effective WLL 22,908 lbs of 15,000 lbs required"
        )


class TestLoadingInstructions:
    """Tests for the loading sequence."""

    def test_rear_first_then_secure(self, box_item, flatbed_40):
        """Test the rear box goes on first and the load is secured last."""
        units = box_item.expand()
        fit = FitAnalyzer().analyze(units, flatbed_40)
        steps = loading_instructions(units, fit.placements, flatbed_40)

        assert [step.unit_id for step in steps] == ["BOX#3", "BOX#1", "BOX#2", "ALL"]
        assert [step.sequence for step in steps] == [1, 2, 3, 4]
        assert steps[0].position == "front, driver side, on deck"
        assert steps[1].position == "front, driver side, on deck"
        assert steps[2].position == "front, passenger side, on deck"
        assert steps[-1].action == "Secure"
        assert str(steps[0]) == "1. Load BOX#3: front, driver side, on deck (nothing goes on top)"

    def test_stacked_units(self, flatbed_40):
        """Test stacked units are loaded after the unit below them."""
        item = CargoItem(id="P", length=48, width=40, height=50, weight=500, quantity=2,
                         stackable=True, fragile=False)
        units = item.expand()
        fit = FitAnalyzer().analyze(units, flatbed_40)
        steps = loading_instructions(units, fit.placements, flatbed_40)

        stacked = [step for step in steps if step.action.startswith("Stack on")]
        assert len(stacked) == 1
        base = stacked[0].action.split()[-1]
        assert [step.unit_id for step in steps].index(base) < stacked[0].sequence - 1
        assert stacked[0].position.endswith("layer 2")

    def test_no_placements(self, flatbed_40):
        """Test an empty fit gives no steps."""
        assert loading_instructions([], [], flatbed_40) == []
