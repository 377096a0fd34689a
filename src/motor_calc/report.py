"""
Report Formatting Module
========================

Text rendering of operating points, warnings and errors for the console
and GUI front-ends. Values are shown with two decimals; torque in Ncm.
Power lines can carry a horsepower conversion (W / 745.7).
"""

from .config import MotorCalcConfig
from .core import MotorAnalysis
from .model import OperatingPoint


# ANSI escape sequences
RESET = "\x1b[0m"
RED = "\x1b[31m"
WARNING_YELLOW = "\x1b[1;33m"
YELLOW = "\x1b[33m"
CYAN = "\x1b[36m"
VALUE_CYAN = "\x1b[1;36m"


def _value(text: str, color: bool) -> str:
    if color:
        return f"{VALUE_CYAN}{text}{RESET}"
    return text


def format_operating_point(
    title: str,
    point: OperatingPoint,
    color: bool = True,
    show_hp: bool = True
) -> str:
    """
    Format one operating point as a block of lines.

    Parameters:
    ----------
    title : str
        Heading, e.g. "At maximum output power".

    point : OperatingPoint
        Point to render.

    color : bool
        Highlight values with ANSI colour codes.

    show_hp : bool
        Append horsepower to the power lines.

    Returns:
    -------
    str
        Multi-line text ending with a newline.
    """
    power_in = f"{point.power_in:.2f} W"
    power_out = f"{point.power_out:.2f} W"

    power_in_suffix = ""
    power_out_suffix = ""
    if show_hp:
        power_in_suffix = f" ({MotorCalcConfig.watts_to_hp(point.power_in):.2f} HP)"
        power_out_suffix = f" ({MotorCalcConfig.watts_to_hp(point.power_out):.2f} HP)"

    lines = [
        f"{title}:",
        f"{_value(f'{point.current:.2f} A', color)} current",
        f"{_value(f'{point.rpm:.2f} RPM', color)}",
        f"{_value(f'{point.torque_ncm:.2f} Ncm', color)} torque",
        f"{_value(power_in, color)} in{power_in_suffix}",
        f"{_value(power_out, color)} out{power_out_suffix}",
        f"{_value(f'{point.efficiency:.2f}%', color)} efficiency",
    ]
    return "\n".join(lines) + "\n"


def format_analysis(analysis: MotorAnalysis, color: bool = True, show_hp: bool = True) -> str:
    """Format both operating points of an analysis."""
    return (
        "\n\n"
        + format_operating_point("At maximum output power", analysis.max_power, color, show_hp)
        + "\n\n"
        + format_operating_point("At maximum efficiency", analysis.max_efficiency, color, show_hp)
        + "\n\n"
    )


def format_error(message: str, color: bool = True) -> str:
    """Format a fatal validation error."""
    if color:
        return f"\n\n{RED}Error: {message}{RESET}\n\n\n"
    return f"\n\nError: {message}\n\n\n"


def format_clamp_warning(max_current: float, color: bool = True) -> str:
    """Format the warning shown when maximum current was reduced."""
    if color:
        return (
            f"\n\n{WARNING_YELLOW}Warning: At maximum current, the motor would be an "
            f"open circuit (Vdrop > Vin).\n"
            f"Maximum current has been reduced to {CYAN}{max_current:.2f} A"
            f"{YELLOW}.{RESET}\n"
        )
    return (
        "\n\nWarning: At maximum current, the motor would be an open circuit "
        "(Vdrop > Vin).\n"
        f"Maximum current has been reduced to {max_current:.2f} A.\n"
    )
