"""Validation of extracted cargo records.

Cargo extracted from free text, spreadsheets or photos arrives as loosely
typed records. This module converts units, checks the CargoItem invariants
and reports every problem found instead of trusting the extractor.
"""

import logging
import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError as PydanticValidationError

from load_planner.constants import (
    INCHES_PER_CENTIMETER,
    INCHES_PER_FOOT,
    INCHES_PER_METER,
    INCHES_PER_MILLIMETER,
    POUNDS_PER_KILOGRAM,
    POUNDS_PER_SHORT_TON,
    POUNDS_PER_TONNE,
)
from load_planner.exceptions import CargoValidationError
from load_planner.models.cargo_item import CargoGeometry, CargoItem

logger = logging.getLogger(__name__)

#: Inches per dimension unit, keyed by accepted spellings
DIMENSION_UNITS = {
    "in": 1.0, "inch": 1.0, "inches": 1.0, '"': 1.0,
    "ft": INCHES_PER_FOOT, "foot": INCHES_PER_FOOT, "feet": INCHES_PER_FOOT, "'": INCHES_PER_FOOT,
    "cm": INCHES_PER_CENTIMETER, "centimeter": INCHES_PER_CENTIMETER, "centimeters": INCHES_PER_CENTIMETER,
    "mm": INCHES_PER_MILLIMETER, "millimeter": INCHES_PER_MILLIMETER, "millimeters": INCHES_PER_MILLIMETER,
    "m": INCHES_PER_METER, "meter": INCHES_PER_METER, "meters": INCHES_PER_METER,
}

#: Pounds per weight unit, keyed by accepted spellings
WEIGHT_UNITS = {
    "lb": 1.0, "lbs": 1.0, "pound": 1.0, "pounds": 1.0,
    "kg": POUNDS_PER_KILOGRAM, "kgs": POUNDS_PER_KILOGRAM, "kilogram": POUNDS_PER_KILOGRAM,
    "kilograms": POUNDS_PER_KILOGRAM,
    "ton": POUNDS_PER_SHORT_TON, "tons": POUNDS_PER_SHORT_TON,
    "t": POUNDS_PER_TONNE, "tonne": POUNDS_PER_TONNE, "tonnes": POUNDS_PER_TONNE,
}

_FEET_INCHES = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*'\s*(?:(\d+(?:\.\d+)?)\s*\"?)?\s*$")
_NUMBER_WITH_UNIT = re.compile(r"^\s*(-?\d+(?:,\d{3})*(?:\.\d+)?)\s*([a-zA-Z\"']*)\s*$")

_DIMENSION_FIELDS = ("length", "width", "height")

#: Single pieces beyond these sizes are almost always extraction mistakes
SUSPICIOUS_DIMENSION = 1_800.0
SUSPICIOUS_WEIGHT = 500_000.0


class ValidationSeverity(Enum):
    """Severity levels for validation issues."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class ValidationIssue:
    """A single problem found in an extracted cargo record.

    Attributes:
        severity: Severity level (INFO, WARNING, ERROR)
        message: What is wrong
        record_index: Position of the record in the input
        item_id: Item id when known
        field: Offending field when known
    """
    severity: ValidationSeverity
    message: str
    record_index: Optional[int] = None
    item_id: Optional[str] = None
    field: Optional[str] = None

    def __str__(self) -> str:
        """String representation."""
        where = self.item_id or (f"record {self.record_index}" if self.record_index is not None else "manifest")
        field_info = f".{self.field}" if self.field else ""
        return f"[{self.severity.value.upper()}] {where}{field_info}: {self.message}"


class CargoValidator:
    """
    Turns extracted cargo records into validated CargoItems.

    Records are dicts with `length`, `width`, `height`, `weight` and
    optionally `id`, `description`, `quantity`, `geometry`, `stackable`,
    `fragile`, `dimension_unit` and `weight_unit`. Values may be numbers or
    strings carrying their own unit ("3.2 m", "10'6\"", "4500 kg").

    Example:
        validator = CargoValidator()
        items, issues = validator.parse_items(extracted_records)
        for issue in issues:
            print(issue)
    """

    def __init__(self, default_dimension_unit: str = "in", default_weight_unit: str = "lbs"):
        """
        Initialize validator.

        Args:
            default_dimension_unit: Unit for bare dimension numbers
            default_weight_unit: Unit for bare weight numbers

        Raises:
            ValueError: If a default unit is not recognized
        """
        if default_dimension_unit.lower() not in DIMENSION_UNITS:
            raise ValueError(f"Unknown dimension unit: {default_dimension_unit}")
        if default_weight_unit.lower() not in WEIGHT_UNITS:
            raise ValueError(f"Unknown weight unit: {default_weight_unit}")
        self.default_dimension_unit = default_dimension_unit.lower()
        self.default_weight_unit = default_weight_unit.lower()

    def parse_items(self, records: List[Dict[str, Any]]) -> Tuple[List[CargoItem], List[ValidationIssue]]:
        """
        Validate records and build CargoItems from the valid ones.

        Args:
            records: Extracted cargo records

        Returns:
            (valid items in input order, all issues found)
        """
        items: List[CargoItem] = []
        issues: List[ValidationIssue] = []
        seen_ids = set()

        for index, record in enumerate(records):
            item_id = str(record.get("id") or f"item-{index + 1}").strip()
            record_issues: List[ValidationIssue] = []

            if item_id in seen_ids:
                record_issues.append(ValidationIssue(
                    ValidationSeverity.ERROR, "duplicate item id", index, item_id, "id"
                ))
            seen_ids.add(item_id)

            dimension_unit = str(record.get("dimension_unit") or self.default_dimension_unit).lower()
            weight_unit = str(record.get("weight_unit") or self.default_weight_unit).lower()

            values: Dict[str, Any] = {}
            for name in _DIMENSION_FIELDS:
                values[name] = self._convert(
                    record.get(name), dimension_unit, DIMENSION_UNITS, index, item_id, name, record_issues
                )
            values["weight"] = self._convert(
                record.get("weight"), weight_unit, WEIGHT_UNITS, index, item_id, "weight", record_issues
            )

            quantity = self._quantity(record.get("quantity", 1), index, item_id, record_issues)
            geometry = self._geometry(record.get("geometry"), index, item_id, record_issues)

            for name, value in values.items():
                limit = SUSPICIOUS_WEIGHT if name == "weight" else SUSPICIOUS_DIMENSION
                if value is not None and value > limit:
                    record_issues.append(ValidationIssue(
                        ValidationSeverity.WARNING,
                        f"unusually large value {value:,.0f}, check the source units",
                        index, item_id, name,
                    ))

            issues.extend(record_issues)
            if any(issue.severity == ValidationSeverity.ERROR for issue in record_issues):
                continue

            try:
                items.append(CargoItem(
                    id=item_id,
                    description=record.get("description"),
                    length=values["length"],
                    width=values["width"],
                    height=values["height"],
                    weight=values["weight"],
                    quantity=quantity,
                    geometry=geometry,
                    stackable=_as_bool(record.get("stackable", False)),
                    fragile=_as_bool(record.get("fragile", False)),
                ))
            except PydanticValidationError as e:
                issues.append(ValidationIssue(ValidationSeverity.ERROR, str(e), index, item_id))

        if issues:
            errors = sum(1 for issue in issues if issue.severity == ValidationSeverity.ERROR)
            logger.info(f"Cargo validation: {len(items)}/{len(records)} records valid, {errors} errors")
        return items, issues

    def parse_items_strict(self, records: List[Dict[str, Any]]) -> List[CargoItem]:
        """
        Validate records, failing on any error.

        Returns:
            CargoItems for all records

        Raises:
            CargoValidationError: If any record has an ERROR issue
        """
        items, issues = self.parse_items(records)
        errors = [issue for issue in issues if issue.severity == ValidationSeverity.ERROR]
        if errors:
            raise CargoValidationError(
                f"{len(errors)} cargo validation error(s) in {len(records)} records",
                errors,
            )
        return items

    def _convert(
        self,
        raw: Any,
        default_unit: str,
        units: Dict[str, float],
        index: int,
        item_id: str,
        field: str,
        issues: List[ValidationIssue],
    ) -> Optional[float]:
        """Parse a measurement and convert it to inches or pounds."""
        if raw is None or (isinstance(raw, str) and not raw.strip()):
            issues.append(ValidationIssue(ValidationSeverity.ERROR, "missing value", index, item_id, field))
            return None

        value, unit = _split_measurement(raw)
        if value is None:
            issues.append(ValidationIssue(
                ValidationSeverity.ERROR, f"can't parse '{raw}'", index, item_id, field
            ))
            return None

        unit = unit or default_unit
        if unit not in units:
            issues.append(ValidationIssue(
                ValidationSeverity.ERROR, f"unknown unit '{unit}'", index, item_id, field
            ))
            return None

        if value <= 0 or math.isnan(value) or math.isinf(value):
            issues.append(ValidationIssue(
                ValidationSeverity.ERROR, f"must be positive, got {raw}", index, item_id, field
            ))
            return None

        converted = value * units[unit]
        if units[unit] != 1.0:
            issues.append(ValidationIssue(
                ValidationSeverity.INFO,
                f"converted {value:g} {unit} to {converted:.2f}",
                index, item_id, field,
            ))
        return converted

    def _quantity(self, raw: Any, index: int, item_id: str, issues: List[ValidationIssue]) -> int:
        if raw is None or raw == "":
            return 1
        try:
            quantity = float(raw)
        except (TypeError, ValueError):
            issues.append(ValidationIssue(
                ValidationSeverity.ERROR, f"can't parse quantity '{raw}'", index, item_id, "quantity"
            ))
            return 1
        if not math.isfinite(quantity) or quantity < 1 or quantity != int(quantity):
            issues.append(ValidationIssue(
                ValidationSeverity.ERROR, f"quantity must be a whole number >= 1, got {raw}",
                index, item_id, "quantity",
            ))
            return 1
        return int(quantity)

    def _geometry(self, raw: Any, index: int, item_id: str, issues: List[ValidationIssue]) -> CargoGeometry:
        if raw is None or raw == "":
            return CargoGeometry.BOX
        try:
            return CargoGeometry(str(raw).strip().lower())
        except ValueError:
            issues.append(ValidationIssue(
                ValidationSeverity.WARNING, f"unknown geometry '{raw}', treated as box",
                index, item_id, "geometry",
            ))
            return CargoGeometry.BOX


def _split_measurement(raw: Any) -> Tuple[Optional[float], Optional[str]]:
    """Split "3.5 m" into (3.5, "m"); feet-inches like 10'6" become inches."""
    if isinstance(raw, bool):
        return None, None
    if isinstance(raw, (int, float)):
        return float(raw), None

    text = str(raw).strip()
    match = _FEET_INCHES.match(text)
    if match:
        feet = float(match.group(1))
        inches = float(match.group(2) or 0.0)
        return feet * INCHES_PER_FOOT + inches, "in"

    match = _NUMBER_WITH_UNIT.match(text)
    if not match:
        return None, None
    value = float(match.group(1).replace(",", ""))
    unit = match.group(2).lower() or None
    return value, unit


def _as_bool(raw: Any) -> bool:
    if isinstance(raw, str):
        return raw.strip().lower() in ("true", "yes", "y", "1", "x")
    return bool(raw)
