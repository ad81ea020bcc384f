"""Pytest configuration and shared fixtures."""

import pytest

from load_planner.catalog import PermitRuleTable, TruckCatalog
from load_planner.models import (
    CargoItem,
    StatePermitRules,
    StateSegment,
    TrailerCategory,
    TruckType,
)


@pytest.fixture
def flatbed_40():
    """Fixture for a 40 ft flatbed with no elevation or tare."""
    return TruckType(
        id="FB40",
        name="40' Test Flatbed",
        category=TrailerCategory.FLATBED,
        deck_length=480.0,
        deck_width=96.0,
        deck_height=108.0,
        max_payload=48_000.0,
        cost_per_mile=3.0,
    )


@pytest.fixture
def small_van():
    """Fixture for a small, cheap van."""
    return TruckType(
        id="VAN20",
        name="20' Van",
        category=TrailerCategory.DRY_VAN,
        deck_length=240.0,
        deck_width=96.0,
        deck_height=96.0,
        max_payload=20_000.0,
        cost_per_mile=2.0,
    )


@pytest.fixture
def lowboy():
    """Fixture for a wide heavy-haul lowboy."""
    return TruckType(
        id="LB24",
        name="Lowboy",
        category=TrailerCategory.LOWBOY,
        deck_length=288.0,
        deck_width=144.0,
        deck_height=160.0,
        max_payload=80_000.0,
        cost_per_mile=6.0,
        deck_elevation=18.0,
        tare_weight=40_000.0,
    )


@pytest.fixture
def box_item():
    """Fixture for three 100x48x48 in boxes of 10,000 lbs each."""
    return CargoItem(
        id="BOX",
        description="Crated pump",
        length=100.0,
        width=48.0,
        height=48.0,
        weight=10_000.0,
        quantity=3,
    )


@pytest.fixture
def texas_rules():
    """Fixture for Texas rules with a 102 in legal width."""
    return StatePermitRules(
        state_code="TX",
        state_name="Texas",
        legal_length=780.0,
        legal_width=102.0,
        legal_height=168.0,
        legal_weight=80_000.0,
    )


@pytest.fixture
def oklahoma_rules():
    """Fixture for Oklahoma rules with a 96 in legal width."""
    return StatePermitRules(
        state_code="OK",
        state_name="Oklahoma",
        legal_length=780.0,
        legal_width=96.0,
        legal_height=162.0,
        legal_weight=80_000.0,
    )


@pytest.fixture
def two_state_table(texas_rules, oklahoma_rules):
    """Fixture for a rule table with only TX and OK."""
    return PermitRuleTable([texas_rules, oklahoma_rules])


@pytest.fixture
def tx_ok_route():
    """Fixture for a TX then OK route."""
    return [
        StateSegment(state_code="TX", miles_in_state=50),
        StateSegment(state_code="OK", miles_in_state=30),
    ]


@pytest.fixture
def default_rule_table():
    """Fixture for the built-in state rule table."""
    return PermitRuleTable.default()


@pytest.fixture
def default_catalog():
    """Fixture for the built-in truck catalog."""
    return TruckCatalog.default()
