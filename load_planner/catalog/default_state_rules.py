"""Built-in state permit rules for the 48 contiguous states, Alaska and Hawaii.

Values follow published state DOT oversize/overweight summaries and are
illustrative defaults: operators should load verified tables through
ReferenceDataParser before quoting. The table below is in feet and pounds,
as the DOT summaries publish it, and is converted to inches when the rules
are built. Escort thresholds are absolute dimensions and become escort bands
expressed as excess over the state's legal limit.
"""

from typing import Dict, List, Optional

from load_planner.constants import INCHES_PER_FOOT
from load_planner.models.permit_requirement import PermitType, TravelRestriction
from load_planner.models.permit_rule import (
    EscortBand,
    PermitFeeSchedule,
    StatePermitRules,
    SuperloadThresholds,
)

#: Restriction codes used in the table's last column
_RESTRICTION_CODES = {
    "D": TravelRestriction.DAYLIGHT_ONLY,
    "W": TravelRestriction.NO_WEEKEND,
    "H": TravelRestriction.NO_HOLIDAY,
}

# (code, name, legal width ft, legal height ft, legal length ft, gross lbs,
#  oversize fee, overweight fee, overweight $/mile,
#  width 1-escort ft, width 2-escort ft, height pole car ft,
#  length 1-escort ft, length 2-escort ft, restriction codes)
_STATE_TABLE = [
    ("AL", "Alabama", 8.5, 13.5, 57, 80000, 20, 50, 0.04, 12, 16, 15, 100, 120, "DH"),
    ("AK", "Alaska", 8.5, 14, 75, 105500, 30, 50, 0, 12, 16, 15, None, None, "H"),
    ("AZ", "Arizona", 8.5, 14, 65, 80000, 15, 15, 0, 12, 16, 16, 100, 125, "DH"),
    ("AR", "Arkansas", 8.5, 13.5, 65, 80000, 30, 30, 0, 12, 14.5, 15, 110, None, "DH"),
    ("CA", "California", 8.5, 14, 65, 80000, 16, 16, 0, 12, 14, 15, 100, 120, "DWH"),
    ("CO", "Colorado", 8.5, 14.5, 70, 85000, 15, 20, 0, 12, 16, 15.5, 100, 120, "DH"),
    ("CT", "Connecticut", 8.5, 13.5, 65, 80000, 35, 35, 0.10, 12, 14, 14.5, 90, None, "DWH"),
    ("DE", "Delaware", 8.5, 13.5, 60, 80000, 30, 30, 0.15, 12, 14, 14, None, None, "DWH"),
    ("FL", "Florida", 8.5, 13.5, 75, 80000, 15, 30, 0, 12, 14.5, 15, 95, 110, "DH"),
    ("GA", "Georgia", 8.5, 13.5, 65, 80000, 30, 50, 0.035, 12, 16, 15, 100, 130, "DH"),
    ("HI", "Hawaii", 9, 14, 65, 80000, 25, 50, 0, 12, 15, None, None, None, "D"),
    ("ID", "Idaho", 8.5, 14, 75, 105500, 27, 27, 0.03, 12, 16, 15, 105, 115, "DH"),
    ("IL", "Illinois", 8.5, 13.5, 65, 80000, 50, 60, 0.14, 11, 14.5, 15, 85, 115, "DH"),
    ("IN", "Indiana", 8.5, 13.5, 60, 80000, 20, 20, 0.25, 12, 16, 15, 100, 120, "DH"),
    ("IA", "Iowa", 8.5, 13.5, 65, 80000, 10, 10, 0.06, 12.5, 16, 15.5, 100, 120, "DH"),
    ("KS", "Kansas", 8.5, 14, 65, 85500, 25, 25, 0.10, 11, 16, 16, 100, None, "DH"),
    ("KY", "Kentucky", 8.5, 13.5, 65, 80000, 30, 60, 0.035, 12, 14.5, 14.5, 100, 120, "DH"),
    ("LA", "Louisiana", 8.5, 13.5, 65, 80000, 20, 35, 0.10, 12, 16, 15, 100, None, "DH"),
    ("ME", "Maine", 8.5, 13.5, 74, 100000, 50, 100, 0.15, 12, 14, 14, None, None, "DWH"),
    ("MD", "Maryland", 8.5, 13.5, 60, 80000, 25, 25, 0.10, 12, 14, 14, None, None, "DWH"),
    ("MA", "Massachusetts", 8.5, 13.5, 65, 80000, 60, 100, 0.15, 11, 14, 14, None, None, "DWH"),
    ("MI", "Michigan", 8.5, 13.5, 65, 164000, 50, 50, 0.06, 12, 14, 14.5, 85, 110, "DH"),
    ("MN", "Minnesota", 8.5, 13.5, 75, 80000, 15, 15, 0.05, 12, 14.5, 15, 100, None, "DH"),
    ("MS", "Mississippi", 8.5, 13.5, 65, 80000, 20, 30, 0.05, 12, 16, 15, 100, None, "DH"),
    ("MO", "Missouri", 8.5, 14, 65, 80000, 15, 15, 0.03, 12, 16, 15, 100, 120, "DH"),
    ("MT", "Montana", 8.5, 14, 93, 131060, 20, 25, 0.03, 12, 16, 16, 110, None, "H"),
    ("NE", "Nebraska", 8.5, 14.5, 65, 95000, 25, 25, 0.05, 12.5, 16, 16, 100, None, "DH"),
    ("NV", "Nevada", 8.5, 14, 70, 129000, 20, 30, 0.04, 12, 16, 16, 100, None, "DH"),
    ("NH", "New Hampshire", 8.5, 13.5, 68, 80000, 50, 75, 0.10, 12, 14, 14, None, None, "DWH"),
    ("NJ", "New Jersey", 8.5, 13.5, 65, 80000, 100, 200, 0.25, 10, 14, 14, 80, 100, "DWH"),
    ("NM", "New Mexico", 8.5, 14, 65, 86400, 25, 25, 0.035, 12, 16, 16, 110, None, "DH"),
    ("NY", "New York", 8.5, 13.5, 65, 80000, 75, 100, 0.15, 12, 14, 14, None, None, "DWH"),
    ("NC", "North Carolina", 8.5, 13.5, 65, 80000, 30, 100, 0.10, 11, 14, 14.5, 100, None, "DH"),
    ("ND", "North Dakota", 8.5, 14, 75, 105500, 20, 20, 0.03, 14.5, 18, 16, 110, None, "H"),
    ("OH", "Ohio", 8.5, 13.5, 65, 80000, 40, 65, 0.08, 12, 14.5, 15, 100, 120, "DH"),
    ("OK", "Oklahoma", 8.5, 13.5, 65, 90000, 35, 60, 0.20, 12, 16, 16, 110, None, "DH"),
    ("OR", "Oregon", 8.5, 14, 75, 105500, 30, 40, 0.05, 12, 16, 15.5, 105, 120, "DH"),
    ("PA", "Pennsylvania", 8.5, 13.5, 60, 80000, 60, 75, 0.12, 11, 14, 14.5, 80, 100, "DH"),
    ("RI", "Rhode Island", 8.5, 13.5, 60, 80000, 50, 75, 0.20, 11, 13, 14, None, None, "DWH"),
    ("SC", "South Carolina", 8.5, 13.5, 60, 80000, 30, 65, 0.05, 12, 14, 14.5, 100, None, "DH"),
    ("SD", "South Dakota", 8.5, 14, 80, 129000, 25, 25, 0.03, 14.5, 18, 17, 120, None, "H"),
    ("TN", "Tennessee", 8.5, 13.5, 65, 80000, 25, 25, 0, 12, 14.5, 14.5, 95, 115, "DH"),
    ("TX", "Texas", 8.5, 14, 65, 80000, 60, 75, 0, 12, 16, 17, 110, 125, "DH"),
    ("UT", "Utah", 8.5, 14, 65, 80000, 30, 35, 0.04, 12, 16, 15.5, 105, 120, "DH"),
    ("VT", "Vermont", 8.5, 13.5, 68, 80000, 40, 60, 0.10, 11, 14, 14, None, None, "DWH"),
    ("VA", "Virginia", 8.5, 13.5, 65, 80000, 20, 25, 0.05, 12, 14, 14.5, 90, 110, "DH"),
    ("WA", "Washington", 8.5, 14, 75, 105500, 30, 30, 0.04, 12, 16, 15.5, 105, 125, "DH"),
    ("WV", "West Virginia", 8.5, 13.5, 65, 80000, 30, 50, 0.08, 12, 14, 14.5, 80, None, "DH"),
    ("WI", "Wisconsin", 8.5, 13.5, 75, 80000, 20, 20, 0.06, 12, 14.5, 15, 100, None, "DH"),
    ("WY", "Wyoming", 8.5, 14, 85, 117000, 25, 25, 0.02, 14.5, 18, 16, 120, None, "H"),
]

#: States publishing their own superload thresholds (width ft, height ft,
#: length ft, gross lbs)
_SUPERLOAD_OVERRIDES = {
    "CA": (16, 16.5, 125, 200000),
    "NJ": (14, 15.5, 100, 120000),
    "TX": (16, 18, 125, 200000),
}


def _band(
    dimension: PermitType,
    threshold_ft: Optional[float],
    legal_in: float,
    escorts: int,
    pole_car: bool = False,
    restrictions: Optional[List[TravelRestriction]] = None,
) -> Optional[EscortBand]:
    if threshold_ft is None:
        return None
    return EscortBand(
        dimension=dimension,
        min_excess=max(threshold_ft * INCHES_PER_FOOT - legal_in, 0.0),
        escorts=escorts,
        pole_car=pole_car,
        restrictions=restrictions or [],
    )


def _build_rules(row: tuple) -> StatePermitRules:
    (code, name, width_ft, height_ft, length_ft, gross,
     oversize_fee, overweight_fee, per_mile,
     width_one, width_two, pole_car, length_one, length_two, flags) = row

    legal_width = width_ft * INCHES_PER_FOOT
    legal_height = height_ft * INCHES_PER_FOOT
    legal_length = length_ft * INCHES_PER_FOOT
    restrictions = [_RESTRICTION_CODES[flag] for flag in flags]

    # Two-escort width moves are daylight only in every state
    candidates = [
        _band(PermitType.OVERSIZE_WIDTH, width_one, legal_width, 1),
        _band(PermitType.OVERSIZE_WIDTH, width_two, legal_width, 2,
              restrictions=[TravelRestriction.DAYLIGHT_ONLY]),
        _band(PermitType.OVERSIZE_HEIGHT, pole_car, legal_height, 1, pole_car=True),
        _band(PermitType.OVERSIZE_LENGTH, length_one, legal_length, 1),
        _band(PermitType.OVERSIZE_LENGTH, length_two, legal_length, 2),
    ]

    superload = SuperloadThresholds()
    if code in _SUPERLOAD_OVERRIDES:
        s_width, s_height, s_length, s_weight = _SUPERLOAD_OVERRIDES[code]
        superload = SuperloadThresholds(
            width=s_width * INCHES_PER_FOOT,
            height=s_height * INCHES_PER_FOOT,
            length=s_length * INCHES_PER_FOOT,
            weight=s_weight,
        )

    return StatePermitRules(
        state_code=code,
        state_name=name,
        legal_length=legal_length,
        legal_width=legal_width,
        legal_height=legal_height,
        legal_weight=float(gross),
        escort_bands=[band for band in candidates if band is not None],
        oversize_restrictions=restrictions,
        fees=PermitFeeSchedule(
            oversize_base_fee=oversize_fee or 0.0,
            overweight_base_fee=overweight_fee or 0.0,
            overweight_per_mile_fee=per_mile or 0.0,
        ),
        superload=superload,
    )


def default_state_rules() -> Dict[str, StatePermitRules]:
    """Return the built-in rules keyed by state code."""
    return {row[0]: _build_rules(row) for row in _STATE_TABLE}
