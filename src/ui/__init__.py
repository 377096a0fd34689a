"""
Motor Calc UI Module
====================

This module contains user interface components for the Motor Calc:

- MotorCalcConsole: Interactive terminal session (prompt, report, restart)
- MotorCalcUI: Tkinter graphical interface (src.ui.motor_calc_ui)

The GUI is imported from its own module so the console works on
Python builds without Tk.

Usage:
------
    from src.ui import MotorCalcConsole
    MotorCalcConsole().run()

    from src.ui.motor_calc_ui import MotorCalcUI
    MotorCalcUI().run()
"""

from .console import MotorCalcConsole

__all__ = [
    "MotorCalcConsole",
]
