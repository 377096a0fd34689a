"""
Motor Calc Configuration Module
===============================

This module contains configuration settings and physical constants
for the Motor Calc. All unit conversions, search tolerances and default
settings are centralized here for easy modification.

Configuration Classes:
---------------------
- MotorCalcConfig: Main configuration class with all settings

Physical Constants:
------------------
- KT_FROM_KV_FACTOR: Kt [ozf-in/A] = 1352 / Kv [RPM/V]
- OZF_IN_TO_NM: Ounce-force inch to Newton-meter conversion
- RPM_TO_RAD_S: Angular velocity conversion (2π/60)
- WATTS_PER_HP: Mechanical horsepower in Watts (display only)

Usage:
------
    from src.motor_calc.config import MotorCalcConfig

    config = MotorCalcConfig()
    print(config.kt_from_kv(1000))
"""

from dataclasses import dataclass
from enum import Enum
import math


# =============================================================================
# Physical Constants
# =============================================================================

# Conversion factor from Kv to Kt in imperial units
# Kt [ozf-in/A] = 1352 / Kv [RPM/V]
# Kt × Kv is constant for a given winding (torque/velocity duality)
KT_FROM_KV_FACTOR = 1352.0

# Ounce-force inch to Newton-meter
OZF_IN_TO_NM = 0.00706

# RPM to rad/s
RPM_TO_RAD_S = 2.0 * math.pi / 60.0

# Mechanical horsepower (W/HP)
# Used for display only, never inside the motor model
WATTS_PER_HP = 745.69987158227022

# Armature resistance is entered in milliohms
MILLIOHM_PER_OHM = 1000.0


# =============================================================================
# Search Defaults
# =============================================================================

# Offset above no-load current for the lowest searched current (A)
# Avoids zero or negative torque at the domain floor
DEFAULT_CURRENT_EPSILON = 0.0001

# Minimum usable gap between no-load and maximum current (A)
DEFAULT_DOMAIN_TOLERANCE = 0.01

# Grid search: steps per pass and absolute current tolerance (A)
DEFAULT_GRID_STEPS = 10
DEFAULT_GRID_TOLERANCE = 0.0001


class Metric(Enum):
    """Quantity to maximize over the current domain."""
    POWER = "power"
    EFFICIENCY = "efficiency"


class SearchStrategy(Enum):
    """
    Algorithm used to locate a maximum.

    CLOSED_FORM is exact for the series-resistance motor model and is the
    default. GRID_SEARCH and BOUNDED work for any smooth metric and are kept
    as substitutes for metrics without an analytic maximum.
    """
    CLOSED_FORM = "closed_form"
    GRID_SEARCH = "grid_search"
    BOUNDED = "bounded"


@dataclass
class MotorCalcConfig:
    """
    Configuration settings for the Motor Calc module.

    Attributes:
    ----------
    current_epsilon : float
        Offset added to the no-load current to form the lowest searched
        current (A). Also added to the voltage-limited current when the
        maximum current is clamped.

    domain_tolerance : float
        Smallest accepted gap between maximum and no-load current (A).
        A gap at or below this is a degenerate domain.

    grid_steps : int
        Number of steps per grid search pass.

    grid_tolerance : float
        Grid search stops once the window half-width on both sides of the
        best point is below this (A). Also used as the bounded solver's
        absolute tolerance.

    grid_max_passes : int
        Hard cap on grid search refinement passes.

    default_strategy : SearchStrategy
        Strategy used when a caller does not name one.

    verbose : bool
        Print warnings (e.g. maximum current clamping) as they happen.

    use_color : bool
        Emit ANSI colour codes in console reports.

    Example:
    -------
        config = MotorCalcConfig(default_strategy=SearchStrategy.GRID_SEARCH)
        print(config.kt_from_kv(1000))  # 1.352 ozf-in/A
    """

    # -------------------------------------------------------------------------
    # Domain Configuration
    # -------------------------------------------------------------------------

    current_epsilon: float = DEFAULT_CURRENT_EPSILON

    domain_tolerance: float = DEFAULT_DOMAIN_TOLERANCE

    # -------------------------------------------------------------------------
    # Solver Configuration
    # -------------------------------------------------------------------------

    grid_steps: int = DEFAULT_GRID_STEPS

    grid_tolerance: float = DEFAULT_GRID_TOLERANCE

    # Passes shrink the window 10x each, so ~10 passes cover any sane range
    grid_max_passes: int = 50

    default_strategy: SearchStrategy = SearchStrategy.CLOSED_FORM

    # -------------------------------------------------------------------------
    # Output Configuration
    # -------------------------------------------------------------------------

    verbose: bool = True

    use_color: bool = True

    def __post_init__(self):
        """Validate settings after dataclass initialization."""
        if isinstance(self.default_strategy, str):
            self.default_strategy = SearchStrategy(self.default_strategy)

        if self.grid_steps < 1:
            raise ValueError(f"grid_steps must be at least 1, got {self.grid_steps}")
        if self.current_epsilon <= 0:
            raise ValueError(
                f"current_epsilon must be positive, got {self.current_epsilon}"
            )

    # -------------------------------------------------------------------------
    # Calculation Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def kt_from_kv(kv: float) -> float:
        """
        Calculate torque constant (Kt) from velocity constant (Kv).

            Kt [ozf-in/A] = 1352 / Kv [RPM/V]

        Parameters:
        ----------
        kv : float
            Motor velocity constant in RPM/V.

        Returns:
        -------
        float
            Torque constant in ozf-in/A.

        Example:
        -------
            kt = MotorCalcConfig.kt_from_kv(1000)
            # kt = 1.352 ozf-in/A
        """
        return KT_FROM_KV_FACTOR / kv

    @staticmethod
    def watts_to_hp(watts: float) -> float:
        """Convert Watts to mechanical horsepower."""
        return watts / WATTS_PER_HP


# =============================================================================
# Default Configuration Instance
# =============================================================================

DEFAULT_CONFIG = MotorCalcConfig()
