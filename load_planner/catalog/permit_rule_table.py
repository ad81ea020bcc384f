"""Permit rule table: per-state legal limits and escort rules."""

import logging
from typing import Dict, Iterable, List, Optional

from load_planner.constants import (
    FEDERAL_LEGAL_GROSS_WEIGHT,
    FEDERAL_LEGAL_HEIGHT,
    FEDERAL_LEGAL_LENGTH,
    FEDERAL_LEGAL_WIDTH,
)
from load_planner.exceptions import UnknownJurisdictionError
from load_planner.models.envelope import LoadEnvelope
from load_planner.models.permit_rule import StatePermitRules
from .default_state_rules import default_state_rules

logger = logging.getLogger(__name__)


class PermitRuleTable:
    """
    Read-only lookup of StatePermitRules keyed by jurisdiction code.

    Lookups are case-insensitive. An unknown code raises
    UnknownJurisdictionError: permits can never be skipped for a state the
    table does not know.
    """

    def __init__(self, rules: Iterable[StatePermitRules]):
        """
        Initialize rule table.

        Args:
            rules: One StatePermitRules per jurisdiction

        Raises:
            ValueError: If a state code appears twice
        """
        self._rules: Dict[str, StatePermitRules] = {}
        for rule in rules:
            if rule.state_code in self._rules:
                raise ValueError(f"Duplicate permit rules for state: {rule.state_code}")
            self._rules[rule.state_code] = rule

    @classmethod
    def default(cls) -> "PermitRuleTable":
        """Rule table backed by the built-in state data."""
        return cls(default_state_rules().values())

    @property
    def state_codes(self) -> List[str]:
        """Known jurisdiction codes, sorted."""
        return sorted(self._rules)

    def get(self, state_code: str) -> StatePermitRules:
        """
        Rules for one jurisdiction.

        Args:
            state_code: Jurisdiction code (any case, surrounding spaces ignored)

        Raises:
            UnknownJurisdictionError: If the table has no rules for the code
        """
        key = state_code.strip().upper()
        rules = self._rules.get(key)
        if rules is None:
            raise UnknownJurisdictionError(state_code)
        return rules

    def find(self, state_code: str) -> Optional[StatePermitRules]:
        """Rules for one jurisdiction, or None when unknown."""
        return self._rules.get(state_code.strip().upper())

    def replace(self, rules: StatePermitRules) -> "PermitRuleTable":
        """
        Copy of this table with one state's rules replaced or added.

        The table itself is never mutated.
        """
        updated = dict(self._rules)
        updated[rules.state_code] = rules
        return PermitRuleTable(updated.values())

    def most_permissive_limits(self) -> LoadEnvelope:
        """
        Largest legal threshold per dimension across all states.

        Used as a route-independent permit proxy when ranking trucks. Falls
        back to federal limits for an empty table.
        """
        if not self._rules:
            logger.warning("Permit rule table is empty, using federal limits")
            return LoadEnvelope(
                length=FEDERAL_LEGAL_LENGTH,
                width=FEDERAL_LEGAL_WIDTH,
                height=FEDERAL_LEGAL_HEIGHT,
                weight=FEDERAL_LEGAL_GROSS_WEIGHT,
            )
        rules = list(self._rules.values())
        return LoadEnvelope(
            length=max(r.legal_length for r in rules),
            width=max(r.legal_width for r in rules),
            height=max(r.legal_height for r in rules),
            weight=max(r.legal_weight for r in rules),
        )

    def __contains__(self, state_code: object) -> bool:
        if not isinstance(state_code, str):
            return False
        return state_code.strip().upper() in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def __str__(self) -> str:
        """String representation."""
        return f"PermitRuleTable: {len(self._rules)} jurisdictions"
