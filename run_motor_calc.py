#!/usr/bin/env python3
"""
Motor Calc Console Launcher
===========================

This script launches the interactive Motor Calc in a terminal.

Usage:
------
    # From the project root directory:
    python run_motor_calc.py

    # Stay in the current process even without a terminal attached:
    python run_motor_calc.py --no-spawn

    # Print the search trace (every grid pass) after each report:
    python run_motor_calc.py --trace

Requirements:
------------
- Python 3.8+
- numpy, scipy

When started without a terminal (e.g. from a file manager) the script
reopens itself in the first available terminal emulator.
"""

import sys
from pathlib import Path

# -------------------------------------------------------------------------
# Path Configuration
# -------------------------------------------------------------------------

# Add the project root to the Python path
project_root = Path(__file__).parent.resolve()
sys.path.insert(0, str(project_root))


def main():
    """Launch the Motor Calc console session."""
    try:
        from src.ui.console import main as console_main
    except ImportError as e:
        print(f"\n[ERROR] Missing dependency: {e}")
        print("\nInstall with: pip install -e .")
        sys.exit(1)

    sys.exit(console_main(sys.argv))


if __name__ == "__main__":
    main()
