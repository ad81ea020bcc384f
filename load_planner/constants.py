"""Centralized constants for load planning.

This module contains the reference values shared across the fit analyzer,
permit calculator and cost estimators: federal legal limits, default
superload thresholds and escort cost rates. Dimensions are in inches,
weights in pounds, money in US dollars.
"""

# ============================================================================
# FEDERAL LEGAL LIMITS (no-permit thresholds)
# ============================================================================

#: Maximum legal width of a vehicle and its load (8.5 ft)
FEDERAL_LEGAL_WIDTH = 102.0

#: Maximum legal overall height from the road surface (13.5 ft)
FEDERAL_LEGAL_HEIGHT = 162.0

#: Maximum legal length of a single trailer (53 ft)
FEDERAL_LEGAL_LENGTH = 636.0

#: Maximum legal gross vehicle weight
FEDERAL_LEGAL_GROSS_WEIGHT = 80_000.0

#: Typical single-axle weight limit
FEDERAL_SINGLE_AXLE_LIMIT = 20_000.0

#: Typical tandem-axle group weight limit
FEDERAL_TANDEM_AXLE_LIMIT = 34_000.0


# ============================================================================
# SUPERLOAD THRESHOLDS (used when a state does not publish its own)
# ============================================================================

#: Width at or above which a load is treated as a superload (16 ft)
DEFAULT_SUPERLOAD_WIDTH = 192.0

#: Overall height at or above which a load is treated as a superload (16 ft)
DEFAULT_SUPERLOAD_HEIGHT = 192.0

#: Length at or above which a load is treated as a superload (120 ft)
DEFAULT_SUPERLOAD_LENGTH = 1_440.0

#: Gross weight at or above which a load is treated as a superload
DEFAULT_SUPERLOAD_WEIGHT = 200_000.0


# ============================================================================
# ESCORT COSTS
# ============================================================================

#: Pilot car cost per day
PILOT_CAR_DAY_RATE = 800.0

#: Mobilization/demobilization fee per escort vehicle
ESCORT_MOBILIZATION_FEE = 350.0

#: Average travel speed of an oversize load (mph)
OVERSIZE_AVG_SPEED_MPH = 35.0

#: Driving hours per day for oversize loads (daylight only)
OVERSIZE_DRIVING_HOURS_PER_DAY = 10.0

#: Maximum number of pilot/escort vehicles a state can require
MAX_ESCORTS = 2


# ============================================================================
# UNIT CONVERSIONS
# ============================================================================

INCHES_PER_FOOT = 12.0
INCHES_PER_METER = 39.3701
INCHES_PER_CENTIMETER = 0.393701
POUNDS_PER_KILOGRAM = 2.20462
INCHES_PER_MILLIMETER = 0.0393701
POUNDS_PER_SHORT_TON = 2_000.0
POUNDS_PER_TONNE = 2_204.62


# ============================================================================
# DECK PACKING LIMITS
# ============================================================================

#: Most units placed side by side and stacked within one shelf
MAX_SHELF_UNITS = 24

#: Most units in one stacked column
MAX_STACK_UNITS = 6


# ============================================================================
# CARGO SECUREMENT (49 CFR 393)
# ============================================================================

#: Cargo length covered by one tie-down (10 ft)
TIE_DOWN_SPACING = 120.0

#: Fewest tie-downs on any piece
MIN_TIE_DOWNS = 2

#: Aggregate working load limit as a fraction of cargo weight
REQUIRED_WLL_FRACTION = 0.5

#: Working load limits (lbs) of common securement equipment
WLL_STRAP_2IN = 3_333.0
WLL_STRAP_4IN = 5_400.0
WLL_CHAIN_3_8 = 6_600.0
WLL_CHAIN_1_2 = 11_300.0

#: Angle (degrees from horizontal) of over-the-top tie-downs
SIDE_TIE_DOWN_ANGLE = 45.0

#: Angle of direct corner chains on very heavy pieces
CORNER_TIE_DOWN_ANGLE = 30.0
