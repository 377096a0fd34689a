"""
Extremum Finder Module
======================

Locates the armature current at which output power or efficiency is
maximized, within the current domain [I0 + ε, I_max].

Strategies:
----------
- CLOSED_FORM: exact maxima of the series-resistance model.
    Power peaks halfway between I0 and the short-circuit current:
        I_pmax = (I0 + I_sc) / 2
    Efficiency peaks at their geometric mean:
        I_emax = sqrt(I0 × I_sc)
    Both are clamped to the domain, so a maximum beyond I_max is reported
    at I_max (the metric is still rising there).

- GRID_SEARCH: coarse-to-fine hill climbing. Each pass samples the window
    in fixed steps plus its upper bound, keeps the best current, narrows
    the window to ±1 step around it and divides the step by 10. Stops when
    a pass finds no improvement or both half-widths drop below tolerance.
    Works for any metric but can plateau if a step skips a narrow feature.

- BOUNDED: scipy's bounded Brent minimizer on the negated metric.

Example Usage:
-------------
    from src.motor_calc.extremum import ExtremumFinder
    from src.motor_calc.config import Metric, SearchStrategy

    finder = ExtremumFinder()
    i_eff = finder.find(params, Metric.EFFICIENCY)
    i_pwr = finder.find(params, Metric.POWER, SearchStrategy.GRID_SEARCH)
"""

import math
from typing import List, Optional

import numpy as np
from scipy import optimize

from .config import DEFAULT_CONFIG, Metric, MotorCalcConfig, SearchStrategy
from .trace import trace_step
from .model import MotorParameters, metric_at_current


class ExtremumFinder:
    """
    Finds the current that maximizes a motor metric.

    Attributes:
    ----------
    config : MotorCalcConfig
        Supplies the domain epsilon, grid settings and default strategy.
    """

    def __init__(self, config: Optional[MotorCalcConfig] = None):
        self.config = config if config is not None else DEFAULT_CONFIG

    def find(
        self,
        params: MotorParameters,
        metric: Metric,
        strategy: Optional[SearchStrategy] = None
    ) -> float:
        """
        Return the current (A) maximizing ``metric`` over the domain.

        Parameters:
        ----------
        params : MotorParameters
            Validated motor parameters.

        metric : Metric
            POWER maximizes output power, EFFICIENCY maximizes efficiency.

        strategy : SearchStrategy, optional
            Search algorithm. Uses the config default if not specified.

        Returns:
        -------
        float
            Current in Amps, always inside [I0 + ε, I_max]. When the domain
            is empty the lower bound is returned.
        """
        if strategy is None:
            strategy = self.config.default_strategy

        if strategy is SearchStrategy.CLOSED_FORM:
            return self.closed_form(params, metric)
        if strategy is SearchStrategy.GRID_SEARCH:
            return self.grid_search(params, metric)
        if strategy is SearchStrategy.BOUNDED:
            return self.bounded_search(params, metric)

        raise ValueError(f"Unknown search strategy: {strategy}")

    # =========================================================================
    # Strategies
    # =========================================================================

    def closed_form(self, params: MotorParameters, metric: Metric) -> float:
        """Analytic maximum, clamped to the current domain."""
        lo, hi = params.current_domain(self.config.current_epsilon)
        if hi <= lo:
            return lo

        i0 = params.no_load_current
        i_sc = params.short_circuit_current

        if math.isinf(i_sc):
            # Zero resistance: both metrics rise all the way to I_max
            target = hi
            formula = "I_sc = inf -> I_max"
        elif metric is Metric.POWER:
            target = (i0 + i_sc) / 2.0
            formula = "(I0 + I_sc) / 2"
        else:
            target = math.sqrt(i0 * i_sc)
            formula = "sqrt(I0 × I_sc)"

        current = min(max(target, lo), hi)

        trace_step(
            strategy="Closed Form",
            label=f"maximum {metric.value}",
            inputs={"I0": i0, "I_sc": i_sc, "I_min": lo, "I_max": hi},
            current=current,
            formula=formula,
            note="clamped to domain" if current != target else ""
        )

        return current

    def grid_search(self, params: MotorParameters, metric: Metric) -> float:
        """Coarse-to-fine grid search (hill climbing refinement)."""
        hard_min, hard_max = params.current_domain(self.config.current_epsilon)
        if hard_max <= hard_min:
            return hard_min

        tolerance = self.config.grid_tolerance

        window_min = hard_min
        window_max = hard_max
        step = (hard_max - hard_min) / self.config.grid_steps

        # Highest value and the current at which it is reached
        best = 0.0
        best_current = hard_min

        for pass_num in range(1, self.config.grid_max_passes + 1):
            candidates = np.array(_grid_candidates(window_min, window_max, step))
            values = metric_at_current(params, metric, candidates)

            idx = int(np.argmax(values))
            improved = values[idx] > best

            if improved:
                best = float(values[idx])
                best_current = float(candidates[idx])

            trace_step(
                strategy="Grid Search",
                label=f"pass {pass_num} ({metric.value})",
                inputs={
                    "window_min": window_min,
                    "window_max": window_max,
                    "step": step,
                    "samples": len(candidates),
                },
                current=best_current,
                note=f"best={best:.6g}" if improved else "no improvement"
            )

            # No change: hit the maximum or ran into float resolution
            if not improved:
                break

            window_min = max(best_current - step, hard_min)
            window_max = min(best_current + step, hard_max)
            step /= 10.0

            if (window_max - best_current < tolerance
                    and best_current - window_min < tolerance):
                break

        return best_current

    def bounded_search(self, params: MotorParameters, metric: Metric) -> float:
        """Bounded Brent search via scipy, checked against the endpoints."""
        lo, hi = params.current_domain(self.config.current_epsilon)
        if hi <= lo:
            return lo

        def negated_metric(current: float) -> float:
            return -float(metric_at_current(params, metric, current))

        result = optimize.minimize_scalar(
            negated_metric,
            bounds=(lo, hi),
            method="bounded",
            options={"xatol": self.config.grid_tolerance}
        )

        # Brent never lands exactly on a bound, so compare them explicitly
        candidates = [float(result.x), lo, hi]
        best_current = max(candidates, key=lambda i: -negated_metric(i))

        trace_step(
            strategy="Bounded",
            label=f"maximum {metric.value}",
            inputs={"I_min": lo, "I_max": hi, "evaluations": int(result.nfev)},
            current=best_current,
            formula="minimize_scalar(-f, bounds, method='bounded')"
        )

        return best_current


def _grid_candidates(window_min: float, window_max: float, step: float) -> List[float]:
    """
    Currents sampled in one grid pass.

    Steps from window_min by ``step`` while below window_max, then ends
    with window_max itself (exactly once).
    """
    candidates = []
    current = window_min
    while current < window_max:
        candidates.append(current)
        if current + step == current:
            # Step below float resolution
            break
        current += step
    candidates.append(window_max)
    return candidates


def find_max_current(
    params: MotorParameters,
    metric: Metric,
    strategy: Optional[SearchStrategy] = None,
    config: Optional[MotorCalcConfig] = None
) -> float:
    """Convenience wrapper around ExtremumFinder.find()."""
    return ExtremumFinder(config).find(params, metric, strategy)
