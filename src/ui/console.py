"""
Motor Calc Console Interface
============================

Interactive terminal front-end for the Motor Calc.

Flow:
-----
1. Ask for Kv, voltage, unloaded current, maximum current and armature
   resistance, re-prompting until each value is valid
2. Validate, search both operating points and print them
3. Wait for [Enter] (restart from step 1) or [Esc] (quit)

When started without a terminal (e.g. double-clicked from a file manager)
the launcher reopens itself inside the first terminal emulator found.

Usage:
------
    from src.ui.console import MotorCalcConsole

    MotorCalcConsole().run()
"""

import os
import sys
from contextlib import contextmanager
from typing import Callable, List, Optional, Sequence

try:
    import termios
except ImportError:  # Windows has no termios; keys are read line-buffered
    termios = None

from src.motor_calc.config import MotorCalcConfig
from src.motor_calc.core import MotorAnalysis, MotorCalculator
from src.motor_calc.model import MotorParameters
from src.motor_calc.report import (
    RED,
    RESET,
    format_analysis,
    format_clamp_warning,
    format_error,
)
from src.motor_calc.validation import (
    PARAMETER_FIELDS,
    InvalidInputError,
    MotorInputError,
    parse_parameter,
)


WINDOW_TITLE = "MotorCalc"

ESCAPE = "\x1b"

# Tried in order; the script is appended after the execute flag
TERMINAL_OPTIONS = [
    ["x-terminal-emulator", f"--title={WINDOW_TITLE}", "-x"],
    ["gnome-terminal", "-t", WINDOW_TITLE, "-x"],
    ["konsole", "-p", f"tabtitle={WINDOW_TITLE}", "-e"],
    ["xfce4-terminal", f"-T={WINDOW_TITLE}", "-x"],
    ["xterm", "-T", WINDOW_TITLE, "-e"],
]


@contextmanager
def raw_terminal(stream=None):
    """
    Put a terminal into non-canonical, no-echo mode for the block.

    The previous mode is always restored. Does nothing when the stream is
    not a terminal or the platform has no termios.
    """
    if stream is None:
        stream = sys.stdin

    if termios is None or not stream.isatty():
        yield
        return

    fd = stream.fileno()
    old_attrs = termios.tcgetattr(fd)

    new_attrs = termios.tcgetattr(fd)
    new_attrs[3] &= ~(termios.ICANON | termios.ECHO)
    termios.tcsetattr(fd, termios.TCSANOW, new_attrs)
    try:
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSANOW, old_attrs)


def spawn_terminal(
    program: Sequence[str],
    execvp: Callable = os.execvp
) -> bool:
    """
    Re-run ``program`` inside a terminal emulator.

    On success the current process is replaced and this never returns.
    Emulators that are not installed are skipped.

    Parameters:
    ----------
    program : sequence of str
        Command line to run inside the terminal.

    execvp : callable
        Process replacement function (os.execvp).

    Returns:
    -------
    bool
        False if no terminal emulator could be started.

    Raises:
    ------
    OSError
        If an installed emulator fails to start for another reason.
    """
    for option in TERMINAL_OPTIONS:
        command = option + list(program)
        try:
            execvp(command[0], command)
        except FileNotFoundError:
            continue
    return False


class MotorCalcConsole:
    """
    Interactive console session.

    Attributes:
    ----------
    config : MotorCalcConfig
        Configuration; ``use_color`` controls ANSI output.

    calculator : MotorCalculator
        Backend used for every run.

    Example:
    -------
        console = MotorCalcConsole()
        console.run()
    """

    def __init__(
        self,
        config: Optional[MotorCalcConfig] = None,
        input_func: Callable[[str], str] = input,
        output=None,
        key_reader: Optional[Callable[[], str]] = None,
        interactive: Optional[bool] = None,
        trace: bool = False
    ):
        """
        Initialize the console session.

        Parameters:
        ----------
        config : MotorCalcConfig, optional
            Configuration. Defaults to a colour, non-verbose config (the
            console prints warnings itself).

        input_func : callable
            Line reader, ``input`` by default.

        output : file-like, optional
            Where text is written. Defaults to sys.stdout.

        key_reader : callable, optional
            Reads a single key press. Defaults to one character from stdin
            in raw terminal mode.

        interactive : bool, optional
            Rewrite accepted prompt lines with cursor escapes. Defaults to
            whether ``output`` is a terminal.

        trace : bool
            Print the search trace after each report.
        """
        self.config = config if config is not None else MotorCalcConfig(verbose=False)
        self.calculator = MotorCalculator(self.config)
        self.input_func = input_func
        self.output = output if output is not None else sys.stdout
        self.key_reader = key_reader
        if interactive is None:
            interactive = self.output.isatty()
        self.interactive = interactive
        self.trace = trace

    # =========================================================================
    # Output Helpers
    # =========================================================================

    def _write(self, text: str):
        self.output.write(text)
        self.output.flush()

    def _clear_lines(self, count: int):
        """Move the cursor up ``count`` lines and clear below."""
        if self.interactive and count > 0:
            self._write(f"\x1b[{count}A\x1b[J")

    # =========================================================================
    # Input
    # =========================================================================

    def request_number(self, name: str, allow_zero: bool = False) -> float:
        """
        Prompt until a valid number is entered.

        Empty input re-prompts silently; anything else that fails to parse
        prints an error and re-prompts. The prompt lines are replaced by a
        one-line summary once a value is accepted.

        Raises:
        ------
        EOFError
            If input ends before a valid value is entered.
        """
        printed_lines = 0

        while True:
            text = self.input_func(f"Enter {name}: ")
            printed_lines += 1

            if not text.strip():
                continue

            try:
                value = parse_parameter(text, name, allow_zero)
            except InvalidInputError:
                if self.config.use_color:
                    self._write(f"{RED}Invalid entry, try again.{RESET}\n")
                else:
                    self._write("Invalid entry, try again.\n")
                printed_lines += 1
                continue

            self._clear_lines(printed_lines)
            self._write(f"{name[0].upper()}{name[1:]}: {value:g}\n")
            return value

    def request_parameters(self) -> MotorParameters:
        """Ask for all five motor parameters in order."""
        values = {
            field_name: self.request_number(label, allow_zero)
            for field_name, label, allow_zero in PARAMETER_FIELDS
        }
        return MotorParameters(**values)

    def wait_for_restart(self) -> bool:
        """
        Wait for [Enter] (restart) or [Esc] (quit).

        Returns:
        -------
        bool
            True to restart, False to quit (also on end of input).
        """
        self._write("Press [Esc] to quit or [Enter] to restart... \n")

        if self.key_reader is not None:
            return self._wait_for_key(self.key_reader)

        with raw_terminal(sys.stdin):
            return self._wait_for_key(lambda: sys.stdin.read(1))

    @staticmethod
    def _wait_for_key(read_key: Callable[[], str]) -> bool:
        while True:
            key = read_key()
            if key == "":
                return False
            if key == ESCAPE:
                return False
            if key in ("\n", "\r"):
                return True

    # =========================================================================
    # Session
    # =========================================================================

    def run_once(self, params: MotorParameters) -> Optional[MotorAnalysis]:
        """
        Analyze one motor and print the report.

        Returns:
        -------
        MotorAnalysis or None
            None if validation rejected the parameters.
        """
        color = self.config.use_color

        try:
            if self.trace:
                analysis, trace = self.calculator.trace(params)
            else:
                analysis, trace = self.calculator.analyze(params), None
        except MotorInputError as e:
            self._write(format_error(str(e), color))
            return None

        if analysis.params.max_current != params.max_current:
            self._write(format_clamp_warning(analysis.params.max_current, color))

        self._write(format_analysis(analysis, color))
        if trace is not None:
            self._write(trace.get_report() + "\n")
        return analysis

    def run(self) -> int:
        """
        Run sessions until the user quits.

        Returns:
        -------
        int
            Process exit code.
        """
        while True:
            try:
                params = self.request_parameters()
            except (EOFError, KeyboardInterrupt):
                self._write("\n")
                return 0

            self.run_once(params)

            if not self.wait_for_restart():
                return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Console entry point.

    Pass ``--no-spawn`` to stay in the current process even without a
    terminal attached, and ``--trace`` to print the search trace after
    each report.
    """
    if argv is None:
        argv = sys.argv

    no_spawn = "--no-spawn" in argv[1:]
    trace = "--trace" in argv[1:]

    if not no_spawn and not (sys.stdin.isatty() and sys.stdout.isatty()):
        # Not connected to a terminal, probably started directly. Open one.
        program = [sys.executable, os.path.abspath(argv[0]), "--no-spawn"]
        if trace:
            program.append("--trace")
        try:
            spawned = spawn_terminal(program)
        except OSError as e:
            print(f"[ERROR] Could not start a terminal emulator: {e}", file=sys.stderr)
            return 1
        if not spawned:
            print("[ERROR] No usable terminal emulator found", file=sys.stderr)
            return 1

    return MotorCalcConsole(trace=trace).run()
