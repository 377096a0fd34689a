"""
Motor Calc - Main Package
=========================

DC motor operating point calculator.

This package provides modules for:
- Motor Calc (motor_calc): Motor model, maximum power / efficiency search
- User Interfaces (ui): Interactive console and Tkinter GUI
"""

__version__ = "0.1.0"
