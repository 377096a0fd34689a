"""
Input Validation Module
=======================

Turns user-entered values into validated MotorParameters before any
search runs.

Checks:
------
- Each value parses as a finite number, positive or non-negative per field
- Degenerate domain: maximum current at or below no-load current + 0.01 A
- Open circuit at minimum: resistive drop at the domain floor already
  exceeds the supply voltage
- Open circuit at maximum: resistive drop at maximum current reaches the
  supply voltage. Not fatal: the maximum current is reduced to the
  voltage-limited current and a warning is returned.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .config import DEFAULT_CONFIG, MotorCalcConfig
from .model import MotorParameters


class MotorInputError(ValueError):
    """Base class for rejected motor inputs."""


class InvalidInputError(MotorInputError):
    """A value could not be parsed or is out of range."""


class DegenerateDomainError(MotorInputError):
    """Maximum current is below, equal to, or very close to no-load current."""


class OpenCircuitError(MotorInputError):
    """The motor would be an open circuit across the whole current domain."""


# name, label, zero allowed
PARAMETER_FIELDS = [
    ("kv", "Kv", False),
    ("voltage", "voltage", False),
    ("no_load_current", "unloaded current (A)", True),
    ("max_current", "maximum current (A)", False),
    ("armature_r", "armature resistance (mΩ)", True),
]


@dataclass
class ValidationResult:
    """
    Outcome of a successful validation.

    Attributes:
    ----------
    params : MotorParameters
        Parameters to search with (maximum current possibly clamped).

    warnings : list of str
        Non-fatal problems found, in the order they were detected.

    clamped : bool
        True if the maximum current was reduced.
    """
    params: MotorParameters
    warnings: List[str] = field(default_factory=list)
    clamped: bool = False


def parse_parameter(text: str, name: str, allow_zero: bool = False) -> float:
    """
    Parse a user-typed parameter value.

    Parameters:
    ----------
    text : str
        Raw text as typed.

    name : str
        Parameter label, used in error messages.

    allow_zero : bool
        Accept zero (non-negative fields) instead of requiring > 0.

    Returns:
    -------
    float
        Parsed value.

    Raises:
    ------
    InvalidInputError
        If the text is not a finite number or is out of range.
    """
    try:
        value = float(str(text).strip())
    except ValueError:
        raise InvalidInputError(f"{name}: '{text}' is not a number")

    if not math.isfinite(value):
        raise InvalidInputError(f"{name}: value must be finite, got {text}")

    if allow_zero and value < 0:
        raise InvalidInputError(f"{name}: value must be zero or positive, got {value}")
    if not allow_zero and value <= 0:
        raise InvalidInputError(f"{name}: value must be positive, got {value}")

    return value


def build_parameters(raw: Dict[str, str]) -> MotorParameters:
    """
    Parse all five motor parameters from raw strings.

    Parameters:
    ----------
    raw : dict
        Keys: kv, voltage, no_load_current, max_current, armature_r.

    Raises:
    ------
    InvalidInputError
        On the first value that fails to parse.
    """
    values = {
        name: parse_parameter(raw[name], label, allow_zero)
        for name, label, allow_zero in PARAMETER_FIELDS
    }
    return MotorParameters(**values)


def validate_parameters(
    params: MotorParameters,
    config: Optional[MotorCalcConfig] = None
) -> ValidationResult:
    """
    Check that a current domain exists and clamp it to the voltage limit.

    Parameters:
    ----------
    params : MotorParameters
        Parsed motor parameters.

    config : MotorCalcConfig, optional
        Supplies epsilon and domain tolerance. Uses the default if None.

    Returns:
    -------
    ValidationResult
        Parameters to search with and any warnings.

    Raises:
    ------
    DegenerateDomainError
        If max_current - no_load_current <= domain tolerance.

    OpenCircuitError
        If the resistive drop at no_load_current + ε exceeds the voltage.
    """
    if config is None:
        config = DEFAULT_CONFIG

    gap = params.max_current - params.no_load_current
    if gap < config.domain_tolerance or math.isclose(
        gap, config.domain_tolerance, rel_tol=0.0, abs_tol=1e-9
    ):
        raise DegenerateDomainError(
            "Maximum current is less than, equal to, or very close to unloaded current."
        )

    min_current = params.no_load_current + config.current_epsilon
    if min_current * params.armature_r_ohm > params.voltage:
        raise OpenCircuitError(
            "At minimum current or barely above, the motor would be an "
            "open circuit (Vdrop > Vin)."
        )

    result = ValidationResult(params=params)

    if params.max_current * params.armature_r_ohm >= params.voltage:
        clamped_max = params.voltage / params.armature_r_ohm + config.current_epsilon
        result.params = params.with_max_current(clamped_max)
        result.clamped = True
        result.warnings.append(
            "At maximum current, the motor would be an open circuit (Vdrop > Vin). "
            f"Maximum current has been reduced to {clamped_max:.2f} A."
        )

    return result
