"""
Motor Model Module
==================

Pure functions mapping an armature current to the operating quantities of
a DC motor described by five nameplate parameters.

Theory Background:
-----------------
The motor is modeled as a back-EMF source behind a series armature
resistance:

    V_supply ── Ra ── V_bemf

Where:
- RPM = Kv × (V_supply - I × Ra)
- Torque = Kt × (I - I0)   (Kt in ozf-in/A, converted to Nm)
- P_out = Torque × RPM × 2π/60
- P_in = V_supply × I
- Efficiency = 100 × P_out / P_in

Every function here accepts either a float or a numpy array of currents
and returns the same shape, so a whole search grid can be evaluated in
one call. Nothing here raises for currents inside the documented domain;
outside it the results may be physically meaningless (negative).
"""

import math
from dataclasses import dataclass, replace
from typing import Any, Dict, Tuple

from .config import (
    DEFAULT_CURRENT_EPSILON,
    MILLIOHM_PER_OHM,
    OZF_IN_TO_NM,
    RPM_TO_RAD_S,
    WATTS_PER_HP,
    Metric,
    MotorCalcConfig,
)


@dataclass(frozen=True)
class MotorParameters:
    """
    Nameplate parameters of a DC motor.

    Attributes:
    ----------
    kv : float
        Motor velocity constant (RPM/V), > 0

    voltage : float
        Supply voltage (V), > 0

    no_load_current : float
        Current drawn with zero mechanical load (A), >= 0

    max_current : float
        Upper bound of the current domain (A), > 0

    armature_r : float
        Armature resistance (mΩ), >= 0
    """
    kv: float
    voltage: float
    no_load_current: float
    max_current: float
    armature_r: float

    @classmethod
    def from_dict(cls, params: Dict[str, Any]) -> "MotorParameters":
        """
        Create parameters from a dict of numbers or numeric strings.

        Example:
        -------
            params = MotorParameters.from_dict({
                "kv": 1000,
                "voltage": 11.1,
                "no_load_current": 0.5,
                "max_current": 20,
                "armature_r": 100
            })
        """
        return cls(
            kv=float(params["kv"]),
            voltage=float(params["voltage"]),
            no_load_current=float(params["no_load_current"]),
            max_current=float(params["max_current"]),
            armature_r=float(params["armature_r"]),
        )

    @property
    def kt(self) -> float:
        """Torque constant in ozf-in/A."""
        return MotorCalcConfig.kt_from_kv(self.kv)

    @property
    def armature_r_ohm(self) -> float:
        """Armature resistance in Ohms."""
        return self.armature_r / MILLIOHM_PER_OHM

    @property
    def short_circuit_current(self) -> float:
        """
        Current at which the resistive drop equals the supply voltage (A).

        Infinite for a zero-resistance armature.
        """
        if self.armature_r <= 0:
            return math.inf
        return self.voltage / self.armature_r_ohm

    def current_domain(self, epsilon: float = DEFAULT_CURRENT_EPSILON) -> Tuple[float, float]:
        """Return the (min, max) current window searched for maxima."""
        return self.no_load_current + epsilon, self.max_current

    def with_max_current(self, max_current: float) -> "MotorParameters":
        """Return a copy with a different maximum current."""
        return replace(self, max_current=max_current)


@dataclass(frozen=True)
class OperatingPoint:
    """
    Motor state at a single armature current.

    Attributes:
    ----------
    current : float
        Armature current (A)

    rpm : float
        Shaft speed (RPM)

    torque : float
        Output torque (Nm)

    power_in : float
        Electrical input power (W)

    power_out : float
        Mechanical output power (W)

    efficiency : float
        Efficiency (%)
    """
    current: float
    rpm: float
    torque: float
    power_in: float
    power_out: float
    efficiency: float

    @property
    def torque_ncm(self) -> float:
        """Torque in Ncm, as shown in reports."""
        return self.torque * 100.0

    @property
    def power_in_hp(self) -> float:
        return self.power_in / WATTS_PER_HP

    @property
    def power_out_hp(self) -> float:
        return self.power_out / WATTS_PER_HP

    def to_dict(self) -> Dict[str, float]:
        return {
            "current": self.current,
            "rpm": self.rpm,
            "torque": self.torque,
            "power_in": self.power_in,
            "power_out": self.power_out,
            "efficiency": self.efficiency,
        }


# =============================================================================
# Operating Quantities
# =============================================================================

def rpm_at_current(params: MotorParameters, current):
    """
    Shaft speed at a given current.

        RPM = Kv × (V - I × Ra)
    """
    return params.kv * (params.voltage - current * params.armature_r_ohm)


def torque_at_current(params: MotorParameters, current):
    """
    Output torque (Nm) at a given current.

        Q = Kt × (I - I0) × 0.00706
    """
    return params.kt * (current - params.no_load_current) * OZF_IN_TO_NM


def power_in_at_current(params: MotorParameters, current):
    """Electrical input power (W)."""
    return params.voltage * current


def power_out_at_current(params: MotorParameters, current):
    """Mechanical output power (W) from torque and angular velocity."""
    return (
        torque_at_current(params, current)
        * rpm_at_current(params, current)
        * RPM_TO_RAD_S
    )


def efficiency_at_current(params: MotorParameters, current):
    """Efficiency (%) at a given current."""
    return 100.0 * power_out_at_current(params, current) / power_in_at_current(params, current)


def metric_at_current(params: MotorParameters, metric: Metric, current):
    """Evaluate the selected metric (output power or efficiency)."""
    if metric is Metric.POWER:
        return power_out_at_current(params, current)
    return efficiency_at_current(params, current)


def evaluate(params: MotorParameters, current: float) -> OperatingPoint:
    """
    Calculate the full operating point at a given current.

    Parameters:
    ----------
    params : MotorParameters
        Motor nameplate parameters.

    current : float
        Armature current (A). Should lie in the current domain.

    Returns:
    -------
    OperatingPoint
        Current, RPM, torque, input/output power and efficiency.

    Example:
    -------
        point = evaluate(params, 7.45)
        print(f"{point.rpm:.0f} RPM at {point.efficiency:.1f}%")
    """
    current = float(current)

    rpm = rpm_at_current(params, current)
    torque = torque_at_current(params, current)

    power_out = torque * rpm * RPM_TO_RAD_S
    power_in = power_in_at_current(params, current)
    efficiency = 100.0 * power_out / power_in

    return OperatingPoint(
        current=current,
        rpm=rpm,
        torque=torque,
        power_in=power_in,
        power_out=power_out,
        efficiency=efficiency,
    )
