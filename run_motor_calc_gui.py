#!/usr/bin/env python3
"""
Motor Calc GUI Launcher
=======================

This script launches the Motor Calc graphical user interface.

Usage:
------
    python run_motor_calc_gui.py

Requirements:
------------
- Python 3.8+
- tkinter (usually included with Python)
- numpy, scipy
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.resolve()
sys.path.insert(0, str(project_root))


def main():
    """Launch the Motor Calc UI."""
    print("=" * 60)
    print("  Motor Calc - DC Motor Operating Points")
    print("=" * 60)
    print()
    print("Initializing...")

    # Check dependencies
    try:
        import numpy
        import scipy
        print(f"  [OK] numpy {numpy.__version__}")
        print(f"  [OK] scipy {scipy.__version__}")
    except ImportError as e:
        print(f"\n[ERROR] Missing dependency: {e}")
        print("\nInstall with: pip install -e .")
        sys.exit(1)

    try:
        import tkinter
        print(f"  [OK] tkinter (Tcl/Tk {tkinter.TclVersion})")
    except ImportError:
        print("\n[ERROR] tkinter not available")
        print("\nPlease install tkinter:")
        print("  Ubuntu/Debian: sudo apt-get install python3-tk")
        print("  Fedora: sudo dnf install python3-tkinter")
        print("  macOS: brew install python-tk")
        sys.exit(1)

    print()
    print("Launching Motor Calc UI...")
    print("-" * 60)

    try:
        from src.ui.motor_calc_ui import MotorCalcUI
        app = MotorCalcUI()
        app.run()
    except Exception as e:
        print(f"\n[ERROR] Failed to start UI: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
