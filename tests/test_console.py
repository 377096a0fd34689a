"""
Console Interface Tests
=======================

Drives the interactive console with scripted input and key presses.
"""

import io
import sys
from contextlib import redirect_stderr
from pathlib import Path
import unittest
from unittest import mock

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.motor_calc import MotorCalcConfig, MotorParameters
from src.ui.console import (
    MotorCalcConsole,
    TERMINAL_OPTIONS,
    main as console_main,
    raw_terminal,
    spawn_terminal,
)


REFERENCE_INPUTS = ["1000", "11.1", "0.5", "20", "100"]


def scripted(lines):
    """Return an input() replacement that raises EOFError when exhausted."""
    remaining = iter(lines)

    def read(prompt=""):
        try:
            return next(remaining)
        except StopIteration:
            raise EOFError

    return read


class TestConsoleSession(unittest.TestCase):
    """Test prompting, reporting and restart flow."""

    def make_console(self, lines, keys=""):
        self.output = io.StringIO()
        key_iter = iter(keys)
        return MotorCalcConsole(
            config=MotorCalcConfig(verbose=False, use_color=False),
            input_func=scripted(lines),
            output=self.output,
            key_reader=lambda: next(key_iter, ""),
        )

    def test_single_run_then_quit(self):
        console = self.make_console(REFERENCE_INPUTS, keys="\x1b")
        self.assertEqual(console.run(), 0)

        text = self.output.getvalue()
        self.assertIn("Kv: 1000", text)
        self.assertIn("Armature resistance (mΩ): 100", text)
        self.assertIn("At maximum output power:", text)
        self.assertIn("20.00 A current", text)
        self.assertIn("7.45 A current", text)
        self.assertIn("Press [Esc] to quit or [Enter] to restart", text)

    def test_restart(self):
        lines = REFERENCE_INPUTS + ["2300", "7.4", "1.5", "40", "85"]
        console = self.make_console(lines, keys="\n\x1b")
        console.run()
        self.assertEqual(self.output.getvalue().count("At maximum efficiency:"), 2)

    def test_end_of_input_quits(self):
        console = self.make_console(["1000", "11.1"])
        self.assertEqual(console.run(), 0)
        self.assertNotIn("At maximum output power:", self.output.getvalue())

    def test_invalid_entry_reprompts(self):
        console = self.make_console(["abc", "-5", "1000"])
        self.assertEqual(console.request_number("Kv"), 1000.0)
        self.assertEqual(self.output.getvalue().count("Invalid entry, try again."), 2)

    def test_empty_entry_reprompts_silently(self):
        console = self.make_console(["", "  ", "12"])
        self.assertEqual(console.request_number("voltage"), 12.0)
        self.assertNotIn("Invalid entry", self.output.getvalue())

    def test_zero_allowed_for_resistance(self):
        console = self.make_console(["0"])
        self.assertEqual(console.request_number("armature resistance (mΩ)", allow_zero=True), 0.0)

    def test_request_parameters_order(self):
        console = self.make_console(REFERENCE_INPUTS)
        params = console.request_parameters()
        self.assertEqual(params, MotorParameters(
            kv=1000.0, voltage=11.1, no_load_current=0.5,
            max_current=20.0, armature_r=100.0
        ))

    def test_degenerate_domain_reported(self):
        console = self.make_console([])
        params = MotorParameters(
            kv=1000.0, voltage=11.1, no_load_current=0.5,
            max_current=0.505, armature_r=100.0
        )
        self.assertIsNone(console.run_once(params))

        text = self.output.getvalue()
        self.assertIn("Error: Maximum current is less than", text)
        self.assertNotIn("At maximum output power:", text)

    def test_open_circuit_reported(self):
        console = self.make_console([])
        params = MotorParameters(
            kv=1000.0, voltage=11.1, no_load_current=200.0,
            max_current=300.0, armature_r=100.0
        )
        self.assertIsNone(console.run_once(params))
        self.assertIn("open circuit", self.output.getvalue())

    def test_clamp_warning_reported(self):
        console = self.make_console([])
        params = MotorParameters(
            kv=1000.0, voltage=11.1, no_load_current=0.5,
            max_current=200.0, armature_r=100.0
        )
        analysis = console.run_once(params)
        self.assertIsNotNone(analysis)

        text = self.output.getvalue()
        self.assertIn("Maximum current has been reduced to 111.00 A.", text)
        self.assertIn("55.75 A current", text)

    def test_colored_output(self):
        output = io.StringIO()
        console = MotorCalcConsole(
            config=MotorCalcConfig(verbose=False, use_color=True),
            input_func=scripted(["x", "1000"]),
            output=output,
            interactive=True,
        )
        console.request_number("Kv")
        text = output.getvalue()
        self.assertIn("\x1b[31mInvalid entry, try again.\x1b[0m", text)
        # Two prompts and one error line are cleared
        self.assertIn("\x1b[3A\x1b[J", text)

    def test_prompt_rewrite_without_color(self):
        """Prompt lines are rewritten on a terminal even with colour off."""
        output = io.StringIO()
        console = MotorCalcConsole(
            config=MotorCalcConfig(verbose=False, use_color=False),
            input_func=scripted(["", "1000"]),
            output=output,
            interactive=True,
        )
        console.request_number("Kv")
        self.assertIn("\x1b[2A\x1b[J", output.getvalue())

    def test_no_prompt_rewrite_when_not_a_terminal(self):
        output = io.StringIO()
        console = MotorCalcConsole(
            config=MotorCalcConfig(verbose=False, use_color=True),
            input_func=scripted(["x", "1000"]),
            output=output,
        )
        self.assertFalse(console.interactive)
        console.request_number("Kv")
        self.assertNotIn("A\x1b[J", output.getvalue())

    def test_trace_printed_after_report(self):
        output = io.StringIO()
        console = MotorCalcConsole(
            config=MotorCalcConfig(verbose=False, use_color=False),
            output=output,
            trace=True,
        )
        console.run_once(MotorParameters(
            kv=1000.0, voltage=11.1, no_load_current=0.5,
            max_current=20.0, armature_r=100.0
        ))
        text = output.getvalue()
        self.assertIn("SEARCH TRACE", text)
        self.assertLess(text.index("At maximum efficiency:"), text.index("SEARCH TRACE"))
        self.assertIn(">>> Maximum Efficiency", text)

    def test_no_trace_by_default(self):
        console = self.make_console([])
        console.run_once(MotorParameters(
            kv=1000.0, voltage=11.1, no_load_current=0.5,
            max_current=20.0, armature_r=100.0
        ))
        self.assertNotIn("SEARCH TRACE", self.output.getvalue())


class TestKeyWait(unittest.TestCase):
    """Test the restart/quit key wait."""

    def wait(self, keys):
        key_iter = iter(keys)
        console = MotorCalcConsole(
            config=MotorCalcConfig(verbose=False, use_color=False),
            output=io.StringIO(),
            key_reader=lambda: next(key_iter, ""),
        )
        return console.wait_for_restart()

    def test_enter_restarts(self):
        self.assertTrue(self.wait("\n"))
        self.assertTrue(self.wait("\r"))

    def test_escape_quits(self):
        self.assertFalse(self.wait("\x1b"))

    def test_other_keys_ignored(self):
        self.assertTrue(self.wait("abc\n"))

    def test_end_of_input_quits(self):
        self.assertFalse(self.wait(""))


class TestTerminal(unittest.TestCase):
    """Test terminal mode switching and emulator spawning."""

    def test_raw_terminal_without_tty(self):
        entered = False
        with raw_terminal(io.StringIO()):
            entered = True
        self.assertTrue(entered)

    def test_spawn_tries_every_emulator(self):
        commands = []

        def missing(file, args):
            commands.append(args)
            raise FileNotFoundError(file)

        self.assertFalse(spawn_terminal(["python3", "run_motor_calc.py"], execvp=missing))
        self.assertEqual(len(commands), len(TERMINAL_OPTIONS))
        self.assertEqual(
            commands[0],
            ["x-terminal-emulator", "--title=MotorCalc", "-x", "python3", "run_motor_calc.py"]
        )
        self.assertEqual(commands[-1][0], "xterm")

    def test_spawn_stops_at_first_available(self):
        commands = []

        class Replaced(Exception):
            pass

        def second_available(file, args):
            commands.append(file)
            if len(commands) < 2:
                raise FileNotFoundError(file)
            raise Replaced()

        with self.assertRaises(Replaced):
            spawn_terminal(["prog"], execvp=second_available)
        self.assertEqual(commands, ["x-terminal-emulator", "gnome-terminal"])

    def test_spawn_propagates_other_errors(self):
        def denied(file, args):
            raise PermissionError(file)

        with self.assertRaises(PermissionError):
            spawn_terminal(["prog"], execvp=denied)


class TestMain(unittest.TestCase):
    """Test the console entry point without a terminal attached."""

    def run_main(self, argv, spawn):
        stderr = io.StringIO()
        with mock.patch("sys.stdin", io.StringIO()), \
                mock.patch("src.ui.console.spawn_terminal", spawn), \
                redirect_stderr(stderr):
            code = console_main(argv)
        return code, stderr.getvalue()

    def test_emulator_start_failure(self):
        """An installed emulator that fails to start is reported, not raised."""
        spawn = mock.Mock(side_effect=PermissionError(13, "Permission denied"))
        code, err = self.run_main(["run_motor_calc.py"], spawn)

        self.assertEqual(code, 1)
        self.assertIn("[ERROR] Could not start a terminal emulator", err)
        self.assertIn("Permission denied", err)

    def test_no_emulator_found(self):
        code, err = self.run_main(["run_motor_calc.py"], mock.Mock(return_value=False))
        self.assertEqual(code, 1)
        self.assertIn("[ERROR] No usable terminal emulator found", err)

    def test_trace_flag_forwarded(self):
        spawn = mock.Mock(return_value=False)
        self.run_main(["run_motor_calc.py", "--trace"], spawn)

        program = spawn.call_args[0][0]
        self.assertEqual(program[-2:], ["--no-spawn", "--trace"])


if __name__ == "__main__":
    unittest.main()
