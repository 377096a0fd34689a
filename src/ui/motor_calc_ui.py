"""
Motor Calc User Interface
=========================

This module provides a graphical user interface (GUI) for the Motor Calc.

Features:
---------
- Entry of the five motor nameplate parameters
- Search strategy selection (closed form, grid search, bounded)
- Maximum output power and maximum efficiency operating points
- Open-circuit clamping warnings
- Search trace window showing every search step

Usage:
------
    from src.ui.motor_calc_ui import MotorCalcUI

    app = MotorCalcUI()
    app.run()
"""

import tkinter as tk
from tkinter import ttk, messagebox
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from src.motor_calc.config import MotorCalcConfig, SearchStrategy
from src.motor_calc.core import MotorCalculator
from src.motor_calc.report import format_operating_point
from src.motor_calc.validation import (
    PARAMETER_FIELDS,
    MotorInputError,
    build_parameters,
)


class MotorCalcUI:
    """
    Graphical user interface for the Motor Calc.

    Provides:
    - Motor parameter entry
    - Strategy selection
    - Operating point results
    """

    WINDOW_TITLE = "MotorCalc - DC Motor Operating Points"
    WINDOW_MIN_WIDTH = 760
    WINDOW_MIN_HEIGHT = 480

    FRAME_PADDING = 10
    WIDGET_PADDING = 3

    STRATEGY_LABELS = {
        "Closed Form": SearchStrategy.CLOSED_FORM,
        "Grid Search": SearchStrategy.GRID_SEARCH,
        "Bounded (scipy)": SearchStrategy.BOUNDED,
    }

    DEFAULTS = {
        "kv": "1000",
        "voltage": "11.1",
        "no_load_current": "0.5",
        "max_current": "20",
        "armature_r": "100",
    }

    def __init__(self):
        """Initialize the Motor Calc UI."""
        # Initialize backend
        self.config = MotorCalcConfig(verbose=False, use_color=False)
        self.calculator = MotorCalculator(self.config)

        # Create main window
        self.root = tk.Tk()
        self.root.title(self.WINDOW_TITLE)
        self.root.minsize(self.WINDOW_MIN_WIDTH, self.WINDOW_MIN_HEIGHT)

        self.root.columnconfigure(0, weight=1)
        self.root.rowconfigure(0, weight=1)

        # Main container
        self.main_frame = ttk.Frame(self.root, padding=self.FRAME_PADDING)
        self.main_frame.grid(row=0, column=0, sticky="nsew")

        self.main_frame.columnconfigure(0, weight=1)
        self.main_frame.columnconfigure(1, weight=2)
        self.main_frame.rowconfigure(1, weight=1)

        # Build UI
        self._create_header()
        self._create_input_panel()
        self._create_results_panel()
        self._create_status_bar()

    def _create_header(self):
        """Create header section."""
        header_frame = ttk.Frame(self.main_frame)
        header_frame.grid(row=0, column=0, columnspan=2, sticky="ew", pady=(0, 10))

        title_label = ttk.Label(
            header_frame,
            text="DC Motor Operating Point Calculator",
            font=("Helvetica", 16, "bold")
        )
        title_label.pack(anchor="w")

        desc_label = ttk.Label(
            header_frame,
            text="Find the maximum output power and maximum efficiency points",
            font=("Helvetica", 10)
        )
        desc_label.pack(anchor="w")

        ttk.Separator(header_frame, orient="horizontal").pack(fill="x", pady=5)

    def _create_input_panel(self):
        """Create input controls panel."""
        input_frame = ttk.LabelFrame(
            self.main_frame,
            text="Motor Parameters",
            padding=self.FRAME_PADDING
        )
        input_frame.grid(row=1, column=0, sticky="nsew", padx=(0, 5), pady=5)

        self.param_vars = {}

        for param_id, label_text, _ in PARAMETER_FIELDS:
            frame = ttk.Frame(input_frame)
            frame.pack(fill="x", pady=1)

            label = ttk.Label(frame, text=f"{label_text[0].upper()}{label_text[1:]}:", width=24)
            label.pack(side="left")

            var = tk.StringVar(value=self.DEFAULTS[param_id])
            entry = ttk.Entry(frame, textvariable=var, width=12)
            entry.pack(side="left", padx=5)

            self.param_vars[param_id] = var

        # =====================================================================
        # Strategy Selection
        # =====================================================================
        strategy_section = ttk.LabelFrame(input_frame, text="Search", padding=5)
        strategy_section.pack(fill="x", pady=self.WIDGET_PADDING)

        ttk.Label(strategy_section, text="Strategy:").pack(anchor="w")
        self.strategy_var = tk.StringVar(value="Closed Form")
        strategy_combo = ttk.Combobox(
            strategy_section,
            textvariable=self.strategy_var,
            values=list(self.STRATEGY_LABELS.keys()),
            state="readonly",
            width=20
        )
        strategy_combo.pack(fill="x")

        ttk.Button(
            input_frame,
            text="Calculate",
            command=self._calculate
        ).pack(fill="x", pady=5)

    def _create_results_panel(self):
        """Create results display panel."""
        results_frame = ttk.LabelFrame(
            self.main_frame,
            text="Results",
            padding=self.FRAME_PADDING
        )
        results_frame.grid(row=1, column=1, sticky="nsew", padx=(5, 0), pady=5)

        self.results_text = tk.Text(
            results_frame,
            height=22,
            width=55,
            font=("Courier", 10),
            state="disabled"
        )
        self.results_text.pack(fill="both", expand=True)

        scrollbar = ttk.Scrollbar(
            results_frame,
            orient="vertical",
            command=self.results_text.yview
        )
        scrollbar.pack(side="right", fill="y")
        self.results_text.configure(yscrollcommand=scrollbar.set)

        btn_frame = ttk.Frame(results_frame)
        btn_frame.pack(fill="x", pady=(5, 0))

        ttk.Button(
            btn_frame, text="Clear Results",
            command=self._clear_results
        ).pack(side="left")

        ttk.Button(
            btn_frame, text="Show Search Trace",
            command=self._show_trace
        ).pack(side="left", padx=5)

    def _create_status_bar(self):
        """Create status bar."""
        status_frame = ttk.Frame(self.main_frame)
        status_frame.grid(row=2, column=0, columnspan=2, sticky="ew", pady=(5, 0))

        self.status_var = tk.StringVar()
        self.status_var.set("Ready - enter motor parameters")

        status_label = ttk.Label(
            status_frame,
            textvariable=self.status_var,
            relief="sunken",
            anchor="w"
        )
        status_label.pack(fill="x")

    def _calculate(self):
        """Validate inputs and compute both operating points."""
        raw = {param_id: var.get() for param_id, var in self.param_vars.items()}
        strategy = self.STRATEGY_LABELS[self.strategy_var.get()]

        try:
            params = build_parameters(raw)
            analysis = self.calculator.analyze(params, strategy)
        except MotorInputError as e:
            messagebox.showerror("Invalid Parameters", f"{e}")
            self.status_var.set("Calculation failed - check parameters")
            return

        result = (
            f"{'='*55}\n"
            f"OPERATING POINTS ({self.strategy_var.get()})\n"
            f"{'='*55}\n"
            f"Kv:               {params.kv:g} RPM/V\n"
            f"Supply Voltage:   {params.voltage:g} V\n"
            f"Unloaded Current: {params.no_load_current:g} A\n"
            f"Max Current:      {analysis.params.max_current:.2f} A\n"
            f"Armature R:       {params.armature_r:g} mΩ\n"
        )

        for warning in analysis.warnings:
            result += f"WARNING: {warning}\n"
            messagebox.showwarning("Warning", warning)

        result += (
            f"{'-'*55}\n"
            + format_operating_point("At maximum output power", analysis.max_power, color=False)
            + f"{'-'*55}\n"
            + format_operating_point("At maximum efficiency", analysis.max_efficiency, color=False)
            + f"{'='*55}\n\n"
        )

        self._append_results(result)
        self.status_var.set(
            f"Max power {analysis.max_power.power_out:.1f} W @ "
            f"{analysis.max_power.current:.2f} A, "
            f"max efficiency {analysis.max_efficiency.efficiency:.1f}% @ "
            f"{analysis.max_efficiency.current:.2f} A"
        )

    def _show_trace(self):
        """Re-run the search with tracing and show the trace report."""
        raw = {param_id: var.get() for param_id, var in self.param_vars.items()}
        strategy = self.STRATEGY_LABELS[self.strategy_var.get()]

        try:
            params = build_parameters(raw)
            _, trace = self.calculator.trace(params, strategy)
        except MotorInputError as e:
            messagebox.showerror("Invalid Parameters", f"{e}")
            self.status_var.set("Trace failed - check parameters")
            return

        window = tk.Toplevel(self.root)
        window.title(f"Search Trace ({self.strategy_var.get()})")

        trace_text = tk.Text(window, height=35, width=90, font=("Courier", 9), wrap="none")
        trace_scroll = ttk.Scrollbar(window, orient="vertical", command=trace_text.yview)
        trace_text.configure(yscrollcommand=trace_scroll.set)

        trace_scroll.pack(side="right", fill="y")
        trace_text.pack(side="left", fill="both", expand=True)

        trace_text.insert("1.0", trace.get_report())
        trace_text.configure(state="disabled")
        trace_text.see("1.0")

        self.status_var.set(f"Search trace: {len(trace.steps)} steps")

    def _append_results(self, text: str):
        """Append text to results."""
        self.results_text.configure(state="normal")
        self.results_text.insert("end", text)
        self.results_text.see("end")
        self.results_text.configure(state="disabled")

    def _clear_results(self):
        """Clear results."""
        self.results_text.configure(state="normal")
        self.results_text.delete("1.0", "end")
        self.results_text.configure(state="disabled")
        self.status_var.set("Results cleared")

    def run(self):
        """Start the UI application."""
        self.root.mainloop()


def main():
    """Main entry point."""
    print("Starting Motor Calc UI...")
    app = MotorCalcUI()
    app.run()


if __name__ == "__main__":
    main()
