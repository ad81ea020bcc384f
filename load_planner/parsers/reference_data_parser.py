"""Excel parser for load planning reference data (.xlsx/.xlsm).

Operators maintain their fleet, state permit tables and scoring policy in a
workbook. This parser reads it into the engine's reference data objects.
"""

import warnings
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from ..catalog import PermitRuleTable, TruckCatalog
from ..costs import EscortCostRates
from ..models import (
    EscortBand,
    PermitFeeSchedule,
    PermitType,
    StatePermitRules,
    SuperloadThresholds,
    TrailerCategory,
    TravelRestriction,
    TruckType,
)
from ..selection import SelectionWeights


class ReferenceDataParser:
    """
    Parser for reference data workbooks.

    Expected file format (dimensions in inches, weights in pounds):
    - Sheet 'TruckTypes': columns [id, name, category, deck_length, deck_width,
      deck_height, max_payload, legal_length?, legal_width?, legal_height?,
      legal_weight?, axle_count?, axle_weight_limit?, cost_per_mile?,
      deck_elevation?, tare_weight?, max_overhang?]
    - Sheet 'StateRules': columns [state_code, legal_length, legal_width,
      legal_height, legal_weight, state_name?, restrictions?, oversize_fee?,
      overweight_fee?, overweight_per_mile_fee?, superload_length?,
      superload_width?, superload_height?, superload_weight?]
    - Sheet 'EscortBands' (optional): columns [state_code, dimension,
      min_excess, escorts, pole_car?, restrictions?]
    - Sheets 'SelectionWeights' and 'EscortCostRates' (optional): columns
      [parameter, value]

    `restrictions` cells hold comma-separated values such as
    "daylight_only, no_holiday". `dimension` is one of width, height,
    length, weight (or the permit type name).
    """

    #: Accepted spellings of escort band dimensions
    DIMENSION_ALIASES = {
        "length": PermitType.OVERSIZE_LENGTH,
        "width": PermitType.OVERSIZE_WIDTH,
        "height": PermitType.OVERSIZE_HEIGHT,
        "weight": PermitType.OVERWEIGHT,
        **{pt.value: pt for pt in PermitType},
    }

    def __init__(self, file_path: Path | str):
        """
        Initialize parser with Excel file path.

        Args:
            file_path: Path to the Excel file (.xlsm or .xlsx)

        Raises:
            FileNotFoundError: If file does not exist
            ValueError: If file is not .xlsm or .xlsx
        """
        self.file_path = Path(file_path)
        if not self.file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")
        if self.file_path.suffix.lower() not in [".xlsm", ".xlsx"]:
            raise ValueError(f"File must be .xlsm or .xlsx: {file_path}")

    def sheet_names(self) -> List[str]:
        """Names of the sheets in the workbook."""
        with pd.ExcelFile(self.file_path, engine="openpyxl") as xl:
            return list(xl.sheet_names)

    def _read_sheet(self, sheet_name: str, required_cols: set) -> pd.DataFrame:
        df = pd.read_excel(
            self.file_path,
            sheet_name=sheet_name,
            engine="openpyxl"
        )
        df.columns = [str(col).strip() for col in df.columns]

        if not required_cols.issubset(df.columns):
            missing = required_cols - set(df.columns)
            raise ValueError(f"Missing required columns in '{sheet_name}': {missing}")
        return df

    def parse_truck_types(self, sheet_name: str = "TruckTypes") -> List[TruckType]:
        """
        Parse truck type definitions.

        Args:
            sheet_name: Name of the sheet containing truck types

        Returns:
            List of TruckType objects in sheet order

        Raises:
            ValueError: If sheet is missing or malformed
        """
        df = self._read_sheet(
            sheet_name,
            {"id", "name", "category", "deck_length", "deck_width", "deck_height", "max_payload"},
        )

        trucks = []
        unknown_categories = set()
        for _, row in df.iterrows():
            category_str = str(row["category"]).strip().lower().replace(" ", "_").replace("-", "_")
            try:
                category = TrailerCategory(category_str)
            except ValueError:
                unknown_categories.add(str(row["category"]))
                category = TrailerCategory.OTHER

            trucks.append(TruckType(
                id=str(row["id"]).strip(),
                name=str(row["name"]),
                category=category,
                deck_length=float(row["deck_length"]),
                deck_width=float(row["deck_width"]),
                deck_height=float(row["deck_height"]),
                max_payload=float(row["max_payload"]),
                legal_length=_optional_float(row, "legal_length"),
                legal_width=_optional_float(row, "legal_width"),
                legal_height=_optional_float(row, "legal_height"),
                legal_weight=_optional_float(row, "legal_weight"),
                axle_count=int(row["axle_count"]) if "axle_count" in row and pd.notna(row["axle_count"]) else 2,
                axle_weight_limit=_optional_float(row, "axle_weight_limit"),
                cost_per_mile=_optional_float(row, "cost_per_mile") or 0.0,
                deck_elevation=_optional_float(row, "deck_elevation") or 0.0,
                tare_weight=_optional_float(row, "tare_weight") or 0.0,
                max_overhang=_optional_float(row, "max_overhang") or 0.0,
            ))

        if unknown_categories:
            warnings.warn(
                f"Unknown trailer categories {sorted(unknown_categories)} in '{sheet_name}' "
                f"were read as 'other'",
                UserWarning
            )
        return trucks

    def parse_truck_catalog(self, sheet_name: str = "TruckTypes") -> TruckCatalog:
        """Parse truck types into a TruckCatalog."""
        return TruckCatalog(self.parse_truck_types(sheet_name))

    def parse_state_rules(
        self,
        sheet_name: str = "StateRules",
        bands_sheet_name: str = "EscortBands",
    ) -> List[StatePermitRules]:
        """
        Parse state permit rules and their escort bands.

        Band rows with an unknown dimension or for a state missing from the
        rules sheet are skipped with a warning.

        Args:
            sheet_name: Name of the sheet containing per-state limits
            bands_sheet_name: Name of the optional escort band sheet

        Returns:
            List of StatePermitRules in sheet order

        Raises:
            ValueError: If a sheet is malformed
        """
        df = self._read_sheet(
            sheet_name,
            {"state_code", "legal_length", "legal_width", "legal_height", "legal_weight"},
        )

        bands = self._parse_escort_bands(bands_sheet_name, set(df["state_code"].astype(str).str.strip().str.upper()))

        rules = []
        for _, row in df.iterrows():
            state_code = str(row["state_code"]).strip().upper()
            default_superload = SuperloadThresholds()
            rules.append(StatePermitRules(
                state_code=state_code,
                state_name=str(row["state_name"]) if "state_name" in row and pd.notna(row["state_name"]) else "",
                legal_length=float(row["legal_length"]),
                legal_width=float(row["legal_width"]),
                legal_height=float(row["legal_height"]),
                legal_weight=float(row["legal_weight"]),
                escort_bands=bands.get(state_code, []),
                oversize_restrictions=_parse_restrictions(row.get("restrictions")),
                fees=PermitFeeSchedule(
                    oversize_base_fee=_optional_float(row, "oversize_fee") or 0.0,
                    overweight_base_fee=_optional_float(row, "overweight_fee") or 0.0,
                    overweight_per_mile_fee=_optional_float(row, "overweight_per_mile_fee") or 0.0,
                ),
                superload=SuperloadThresholds(
                    length=_optional_float(row, "superload_length") or default_superload.length,
                    width=_optional_float(row, "superload_width") or default_superload.width,
                    height=_optional_float(row, "superload_height") or default_superload.height,
                    weight=_optional_float(row, "superload_weight") or default_superload.weight,
                ),
            ))
        return rules

    def parse_permit_rule_table(
        self,
        sheet_name: str = "StateRules",
        bands_sheet_name: str = "EscortBands",
    ) -> PermitRuleTable:
        """Parse state rules into a PermitRuleTable."""
        return PermitRuleTable(self.parse_state_rules(sheet_name, bands_sheet_name))

    def _parse_escort_bands(self, sheet_name: str, known_states: set) -> Dict[str, List[EscortBand]]:
        if sheet_name not in self.sheet_names():
            return {}

        df = self._read_sheet(sheet_name, {"state_code", "dimension", "min_excess", "escorts"})

        bands: Dict[str, List[EscortBand]] = {}
        skipped = []
        for _, row in df.iterrows():
            state_code = str(row["state_code"]).strip().upper()
            dimension = self.DIMENSION_ALIASES.get(str(row["dimension"]).strip().lower())
            if dimension is None or state_code not in known_states:
                skipped.append(f"{state_code}/{row['dimension']}")
                continue

            pole_car = False
            if "pole_car" in row and pd.notna(row["pole_car"]):
                pole_car = str(row["pole_car"]).strip().lower() in ("true", "yes", "1", "x")

            bands.setdefault(state_code, []).append(EscortBand(
                dimension=dimension,
                min_excess=float(row["min_excess"]),
                escorts=int(row["escorts"]),
                pole_car=pole_car,
                restrictions=_parse_restrictions(row.get("restrictions")),
            ))

        if skipped:
            warnings.warn(
                f"Skipped {len(skipped)} escort band rows with unknown state or dimension: "
                f"{skipped[:5]}{'...' if len(skipped) > 5 else ''}",
                UserWarning
            )
        return bands

    def _parse_parameters(self, sheet_name: str) -> Dict[str, float]:
        df = self._read_sheet(sheet_name, {"parameter", "value"})
        params = {}
        for _, row in df.iterrows():
            if pd.isna(row["parameter"]) or pd.isna(row["value"]):
                continue
            params[str(row["parameter"]).strip()] = float(row["value"])
        return params

    def parse_selection_weights(self, sheet_name: str = "SelectionWeights") -> SelectionWeights:
        """
        Parse truck selection weights.

        Expected parameters: utilization, cost, permit, max_workers (all
        optional, defaults apply).

        Raises:
            ValueError: If sheet is missing or malformed
        """
        params = self._parse_parameters(sheet_name)
        defaults = SelectionWeights()
        return SelectionWeights(
            utilization=params.get("utilization", defaults.utilization),
            cost=params.get("cost", defaults.cost),
            permit=params.get("permit", defaults.permit),
            max_workers=int(params["max_workers"]) if "max_workers" in params else None,
        )

    def parse_escort_cost_rates(self, sheet_name: str = "EscortCostRates") -> EscortCostRates:
        """
        Parse pilot car pricing.

        Expected parameters: pilot_car_day_rate, mobilization_fee,
        average_speed_mph, driving_hours_per_day (all optional).

        Raises:
            ValueError: If sheet is missing or malformed
        """
        params = self._parse_parameters(sheet_name)
        known = set(EscortCostRates.model_fields)
        unknown = sorted(set(params) - known)
        if unknown:
            warnings.warn(f"Ignoring unknown escort cost parameters: {unknown}", UserWarning)
        return EscortCostRates(**{k: v for k, v in params.items() if k in known})


def _optional_float(row: pd.Series, column: str) -> Optional[float]:
    if column in row and pd.notna(row[column]):
        return float(row[column])
    return None


def _parse_restrictions(cell) -> List[TravelRestriction]:
    if cell is None or (not isinstance(cell, str) and pd.isna(cell)):
        return []
    restrictions = []
    for part in str(cell).split(","):
        name = part.strip().lower().replace(" ", "_").replace("-", "_")
        if not name:
            continue
        try:
            restriction = TravelRestriction(name)
        except ValueError:
            warnings.warn(f"Unknown travel restriction '{part.strip()}' ignored", UserWarning)
            continue
        if restriction not in restrictions:
            restrictions.append(restriction)
    return restrictions
