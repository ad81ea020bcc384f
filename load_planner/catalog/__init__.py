"""Reference data registries: truck types and state permit rules."""

from .truck_catalog import TruckCatalog
from .permit_rule_table import PermitRuleTable
from .default_fleet import default_fleet
from .default_state_rules import default_state_rules

__all__ = [
    "TruckCatalog",
    "PermitRuleTable",
    "default_fleet",
    "default_state_rules",
]
