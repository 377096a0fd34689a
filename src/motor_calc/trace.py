"""
Search Trace
============

Records what each extremum search did: the closed-form target and clamp,
every grid refinement pass (window, step, sample count, best current) and
the bounded solver call. A trace is only collected while one is installed
with set_trace(); searches run untraced otherwise and give the same
results either way.

Usage:
------
    from src.motor_calc.core import MotorCalculator

    analysis, trace = MotorCalculator().trace(params, SearchStrategy.GRID_SEARCH)
    print(trace.get_report())
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from .model import MotorParameters


@dataclass
class SearchStep:
    """One recorded search step."""
    strategy: str                   # "Closed Form", "Grid Search", "Bounded"
    label: str                      # e.g. "Pass 2 (efficiency)"
    inputs: Dict[str, float]
    current: float                  # best current after this step (A)
    formula: str = ""
    note: str = ""


@dataclass
class SearchTrace:
    """
    Ordered record of the search steps taken for one motor.

    Steps are grouped under the metric being searched ("Maximum Output
    Power", "Maximum Efficiency"), opened with begin_metric().
    """
    params: Optional[MotorParameters] = None
    steps: List[SearchStep] = field(default_factory=list)
    metrics: List[Tuple[int, str]] = field(default_factory=list)
    started: Optional[datetime] = None
    finished: Optional[datetime] = None

    def start(self, params: Optional[MotorParameters] = None):
        """Reset the trace for a new run."""
        self.params = params
        self.steps = []
        self.metrics = []
        self.started = datetime.now()
        self.finished = None

    def finish(self):
        self.finished = datetime.now()

    def begin_metric(self, title: str):
        """Group the following steps under ``title``."""
        self.metrics.append((len(self.steps), title))

    def record(self, step: SearchStep):
        self.steps.append(step)

    def steps_for(self, strategy: str) -> List[SearchStep]:
        """Steps recorded by one strategy, in order."""
        return [s for s in self.steps if s.strategy == strategy]

    @property
    def metric_titles(self) -> List[str]:
        return [title for _, title in self.metrics]

    def get_report(self) -> str:
        """Render the trace as plain text."""
        rule = "=" * 60
        lines = [rule, "SEARCH TRACE", rule]

        if self.started:
            lines.append(f"Started: {self.started.strftime('%Y-%m-%d %H:%M:%S')}")

        if self.params is not None:
            p = self.params
            lines.append(
                f"Motor: Kv={p.kv:g}, V={p.voltage:g}, I0={p.no_load_current:g} A, "
                f"Imax={p.max_current:g} A, Ra={p.armature_r:g} mΩ"
            )

        titles = dict(self.metrics)

        for index, step in enumerate(self.steps):
            if index in titles:
                lines.extend(["", f">>> {titles[index]}", "-" * 60])

            lines.append(f"[{index + 1}] {step.strategy}: {step.label}")
            if step.inputs:
                lines.append("    " + ", ".join(
                    f"{name}={_fmt(value)}" for name, value in step.inputs.items()
                ))
            if step.formula:
                lines.append(f"    {step.formula}")

            result = f"    -> I = {step.current:.4f} A"
            if step.note:
                result += f"  ({step.note})"
            lines.append(result)

        lines.extend(["", rule, f"Steps: {len(self.steps)}"])
        if self.started and self.finished:
            elapsed = (self.finished - self.started).total_seconds()
            lines.append(f"Elapsed: {elapsed:.3f} s")
        lines.append(rule)

        return "\n".join(lines)


def _fmt(value) -> str:
    if isinstance(value, float):
        return f"{value:.6g}"
    return str(value)


# Active trace, None while tracing is off
_active: Optional[SearchTrace] = None


def get_trace() -> Optional[SearchTrace]:
    return _active


def set_trace(trace: Optional[SearchTrace]):
    """Install ``trace`` as the active trace (None turns tracing off)."""
    global _active
    _active = trace


def trace_step(
    strategy: str,
    label: str,
    inputs: Dict[str, float],
    current: float,
    formula: str = "",
    note: str = ""
):
    """Record a step in the active trace, if any."""
    if _active is not None:
        _active.record(SearchStep(strategy, label, inputs, current, formula, note))


def trace_metric(title: str):
    """Open a metric group in the active trace, if any."""
    if _active is not None:
        _active.begin_metric(title)
