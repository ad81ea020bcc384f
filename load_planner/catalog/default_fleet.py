"""Built-in reference fleet of common trailer configurations.

Dimensions are in inches, weights in pounds. `deck_height` is the cargo
height the trailer can physically carry (permitted loads included), while
the legal thresholds default from federal limits and the deck elevation.
Heavy-haul trailers list a deck width above 102 in because wide loads are
carried overhanging the deck sides under permit.
"""

from typing import List

from load_planner.models.truck_type import TrailerCategory, TruckType

#: Tandem-group proxy used as the per-piece axle limit on standard trailers
STANDARD_AXLE_LIMIT = 34_000.0


def default_fleet() -> List[TruckType]:
    """Return the built-in fleet, ordered from lightest to heaviest haul."""
    return [
        TruckType(
            id="dry-van-53",
            name="53' Dry Van",
            category=TrailerCategory.DRY_VAN,
            deck_length=630.0,
            deck_width=98.0,
            deck_height=108.0,
            max_payload=45_000.0,
            axle_count=5,
            axle_weight_limit=STANDARD_AXLE_LIMIT,
            cost_per_mile=2.60,
            deck_elevation=48.0,
            tare_weight=35_000.0,
        ),
        TruckType(
            id="container-chassis-40",
            name="40' Container Chassis (High Cube)",
            category=TrailerCategory.CONTAINER_CHASSIS,
            deck_length=473.0,
            deck_width=92.0,
            deck_height=106.0,
            max_payload=44_500.0,
            axle_count=5,
            axle_weight_limit=STANDARD_AXLE_LIMIT,
            cost_per_mile=2.75,
            deck_elevation=54.0,
            tare_weight=35_500.0,
        ),
        TruckType(
            id="flatbed-48",
            name="48' Flatbed",
            category=TrailerCategory.FLATBED,
            deck_length=576.0,
            deck_width=102.0,
            deck_height=132.0,
            max_payload=48_000.0,
            axle_count=5,
            axle_weight_limit=STANDARD_AXLE_LIMIT,
            cost_per_mile=3.25,
            deck_elevation=60.0,
            tare_weight=32_000.0,
            max_overhang=48.0,
        ),
        TruckType(
            id="flatbed-53",
            name="53' Flatbed",
            category=TrailerCategory.FLATBED,
            deck_length=636.0,
            deck_width=102.0,
            deck_height=132.0,
            max_payload=47_000.0,
            axle_count=5,
            axle_weight_limit=STANDARD_AXLE_LIMIT,
            cost_per_mile=3.50,
            deck_elevation=60.0,
            tare_weight=33_000.0,
            max_overhang=48.0,
        ),
        TruckType(
            id="conestoga-53",
            name="53' Conestoga",
            category=TrailerCategory.CONESTOGA,
            deck_length=636.0,
            deck_width=100.0,
            deck_height=102.0,
            max_payload=44_000.0,
            axle_count=5,
            axle_weight_limit=STANDARD_AXLE_LIMIT,
            cost_per_mile=4.00,
            deck_elevation=60.0,
            tare_weight=36_000.0,
        ),
        TruckType(
            id="step-deck-48",
            name="48' Step Deck",
            category=TrailerCategory.STEP_DECK,
            deck_length=576.0,
            deck_width=102.0,
            deck_height=150.0,
            max_payload=48_000.0,
            axle_count=5,
            axle_weight_limit=STANDARD_AXLE_LIMIT,
            cost_per_mile=3.75,
            deck_elevation=40.0,
            tare_weight=32_000.0,
            max_overhang=48.0,
        ),
        TruckType(
            id="step-deck-53",
            name="53' Step Deck",
            category=TrailerCategory.STEP_DECK,
            deck_length=636.0,
            deck_width=102.0,
            deck_height=150.0,
            max_payload=47_000.0,
            axle_count=5,
            axle_weight_limit=STANDARD_AXLE_LIMIT,
            cost_per_mile=4.00,
            deck_elevation=40.0,
            tare_weight=33_000.0,
            max_overhang=48.0,
        ),
        TruckType(
            id="double-drop-29",
            name="Double Drop (29' well)",
            category=TrailerCategory.DOUBLE_DROP,
            deck_length=348.0,
            deck_width=144.0,
            deck_height=170.0,
            max_payload=45_000.0,
            axle_count=5,
            axle_weight_limit=40_000.0,
            cost_per_mile=5.25,
            deck_elevation=22.0,
            tare_weight=35_000.0,
        ),
        TruckType(
            id="rgn-29",
            name="Removable Gooseneck (29' well)",
            category=TrailerCategory.RGN,
            deck_length=348.0,
            deck_width=144.0,
            deck_height=168.0,
            max_payload=42_000.0,
            axle_count=6,
            axle_weight_limit=42_000.0,
            cost_per_mile=5.75,
            deck_elevation=24.0,
            tare_weight=38_000.0,
        ),
        TruckType(
            id="lowboy-24",
            name="Multi-Axle Lowboy (24' well)",
            category=TrailerCategory.LOWBOY,
            deck_length=288.0,
            deck_width=144.0,
            deck_height=174.0,
            max_payload=80_000.0,
            axle_count=7,
            axle_weight_limit=80_000.0,
            cost_per_mile=6.50,
            deck_elevation=18.0,
            tare_weight=45_000.0,
        ),
    ]
