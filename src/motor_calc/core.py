"""
Motor Calc Core Module
======================

This module provides the calculator that ties the motor model, input
validation and extremum search together.

Classes:
--------
- MotorAnalysis: Result of a full calculation (both operating points)
- MotorCalculator: Validates parameters and finds the maximum output
  power and maximum efficiency operating points

Calculation Flow:
----------------
1. Validate parameters (may raise, may clamp maximum current)
2. Find the current of maximum output power
3. Find the current of maximum efficiency
4. Evaluate the motor model at both currents

Each call is independent; the calculator keeps no state between runs
besides its configuration.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .config import MotorCalcConfig, DEFAULT_CONFIG, Metric, SearchStrategy
from .extremum import ExtremumFinder
from .model import MotorParameters, OperatingPoint, evaluate
from .trace import SearchTrace, get_trace, set_trace, trace_metric
from .validation import ValidationResult, validate_parameters


@dataclass(frozen=True)
class MotorAnalysis:
    """
    Both characteristic operating points of a motor.

    Attributes:
    ----------
    params : MotorParameters
        Parameters used for the search (after any clamping).

    max_power : OperatingPoint
        Operating point of maximum output power.

    max_efficiency : OperatingPoint
        Operating point of maximum efficiency.

    strategy : SearchStrategy
        Search algorithm that produced the points.

    warnings : list of str
        Validation warnings to surface to the user.
    """
    params: MotorParameters
    max_power: OperatingPoint
    max_efficiency: OperatingPoint
    strategy: SearchStrategy
    warnings: List[str] = field(default_factory=list)


class MotorCalculator:
    """
    DC motor operating point calculator.

    Attributes:
    ----------
    config : MotorCalcConfig
        Configuration object containing settings and tolerances.

    finder : ExtremumFinder
        Search engine used for both metrics.

    Example:
    -------
        calculator = MotorCalculator()

        params = MotorParameters(
            kv=1000, voltage=11.1, no_load_current=0.5,
            max_current=20, armature_r=100
        )

        analysis = calculator.analyze(params)
        print(f"Max power: {analysis.max_power.power_out:.1f} W")
        print(f"Max efficiency: {analysis.max_efficiency.efficiency:.1f} %")
    """

    def __init__(self, config: Optional[MotorCalcConfig] = None):
        """
        Initialize the calculator with configuration settings.

        Parameters:
        ----------
        config : MotorCalcConfig, optional
            Configuration object specifying settings.
            If None, uses the default configuration.
        """
        self.config = config if config is not None else DEFAULT_CONFIG
        self.finder = ExtremumFinder(self.config)

    def validate(self, params: MotorParameters) -> ValidationResult:
        """Validate parameters; see validate_parameters()."""
        return validate_parameters(params, self.config)

    def find_operating_point(
        self,
        params: MotorParameters,
        metric: Metric,
        strategy: Optional[SearchStrategy] = None
    ) -> OperatingPoint:
        """
        Find and evaluate the operating point that maximizes ``metric``.

        The parameters are assumed to be validated already.

        Parameters:
        ----------
        params : MotorParameters
            Validated motor parameters.

        metric : Metric
            Quantity to maximize.

        strategy : SearchStrategy, optional
            Search algorithm. Uses the config default if not specified.

        Returns:
        -------
        OperatingPoint
            Motor state at the maximizing current.
        """
        current = self.finder.find(params, metric, strategy)
        return evaluate(params, current)

    def analyze(
        self,
        params: MotorParameters,
        strategy: Optional[SearchStrategy] = None
    ) -> MotorAnalysis:
        """
        Validate parameters and compute both characteristic points.

        Parameters:
        ----------
        params : MotorParameters
            Motor parameters as entered.

        strategy : SearchStrategy, optional
            Search algorithm. Uses the config default if not specified.

        Returns:
        -------
        MotorAnalysis
            Maximum power and maximum efficiency operating points.

        Raises:
        ------
        DegenerateDomainError, OpenCircuitError
            If no valid current domain exists.
        """
        if strategy is None:
            strategy = self.config.default_strategy

        validation = self.validate(params)

        if self.config.verbose:
            for warning in validation.warnings:
                print(f"Warning: {warning}")

        trace_metric("Maximum Output Power")
        max_power = self.find_operating_point(validation.params, Metric.POWER, strategy)

        trace_metric("Maximum Efficiency")
        max_efficiency = self.find_operating_point(
            validation.params, Metric.EFFICIENCY, strategy
        )

        return MotorAnalysis(
            params=validation.params,
            max_power=max_power,
            max_efficiency=max_efficiency,
            strategy=strategy,
            warnings=list(validation.warnings),
        )

    def trace(
        self,
        params: MotorParameters,
        strategy: Optional[SearchStrategy] = None
    ) -> Tuple[MotorAnalysis, SearchTrace]:
        """
        Run analyze() while recording every search step.

        The previously active trace (normally none) is restored afterwards,
        also when validation raises.

        Returns:
        -------
        (MotorAnalysis, SearchTrace)
            The analysis and the recorded search trace.
        """
        trace = SearchTrace()
        trace.start(params)

        previous = get_trace()
        set_trace(trace)
        try:
            analysis = self.analyze(params, strategy)
        finally:
            set_trace(previous)
            trace.finish()

        return analysis, trace
