"""
Motor Calc Module
=================

This module computes the characteristic operating points of a DC motor
from five nameplate parameters: velocity constant (Kv), supply voltage,
no-load current, maximum current and armature resistance.

The module enables:
- Operating point evaluation (RPM, torque, power, efficiency) at any current
- Maximum output power and maximum efficiency search
- Input validation with open-circuit clamping of the maximum current
- Console and GUI report formatting

Key Classes:
------------
- MotorCalculator: Validation plus both extremum searches
- ExtremumFinder: Closed-form, grid and bounded maximum search
- MotorParameters / OperatingPoint: Model inputs and outputs
- SearchTrace: Record of every search step (MotorCalculator.trace)

Key Functions:
--------------
- evaluate(): Motor state at a given current
- find_max_current(): Current maximizing power or efficiency
- validate_parameters(): Domain checks and maximum current clamping

Example Usage:
-------------
    from src.motor_calc import MotorCalculator, MotorParameters

    calculator = MotorCalculator()
    params = MotorParameters(
        kv=1000,
        voltage=11.1,
        no_load_current=0.5,
        max_current=20,
        armature_r=100
    )

    analysis = calculator.analyze(params)
    print(f"{analysis.max_efficiency.current:.2f} A at "
          f"{analysis.max_efficiency.efficiency:.1f}%")

Units Convention:
----------------
- Voltage: Volts (V)
- Current: Amperes (A)
- Power: Watts (W)
- Torque: Newton-meters (Nm), reported in Ncm
- RPM: revolutions per minute
- Armature resistance: milliohms (mΩ)
- Efficiency: percent (%)
"""

from .config import MotorCalcConfig, Metric, SearchStrategy, DEFAULT_CONFIG
from .model import MotorParameters, OperatingPoint, evaluate
from .extremum import ExtremumFinder, find_max_current
from .validation import (
    MotorInputError,
    InvalidInputError,
    DegenerateDomainError,
    OpenCircuitError,
    ValidationResult,
    parse_parameter,
    build_parameters,
    validate_parameters,
)
from .core import MotorAnalysis, MotorCalculator
from .trace import SearchStep, SearchTrace, get_trace, set_trace

__all__ = [
    # Core classes
    "MotorCalculator",
    "MotorAnalysis",
    "ExtremumFinder",
    "MotorParameters",
    "OperatingPoint",
    # Enums
    "Metric",
    "SearchStrategy",
    # Functions
    "evaluate",
    "find_max_current",
    "parse_parameter",
    "build_parameters",
    "validate_parameters",
    # Errors
    "MotorInputError",
    "InvalidInputError",
    "DegenerateDomainError",
    "OpenCircuitError",
    "ValidationResult",
    # Config
    "MotorCalcConfig",
    "DEFAULT_CONFIG",
    # Tracing
    "SearchStep",
    "SearchTrace",
    "get_trace",
    "set_trace",
]
