"""
cmdtable help rendering.

The help text is derived from the tables only; nothing is written to any
destination. Layout (columns are fixed so tables line up in a narrow shell):

    <blank>
    <description>                       (when given)
    <blank>
    Usage: <program> <name> [<name>] [options]
    <blank>
     Parameters:
      <name><pad>     <description>
    <blank>
     Options:
      -s, -long <name><pad><description> (a|b|c)
      -b, -break             enable page break mode
      -h, -help              display this help and exit

Argument names come from the help strings: "[count]number of runs" shows
"count" and describes it as "number of runs". Without a leading bracket the
name falls back to "arg" (parameters and value switches) or nothing (flags).
Optional parameters are shown bracketed, "[count]".
"""
import re
from collections import defaultdict

from rich.text import Text

from .schema import builtins
from .values import ValueType

DEFAULT_ARGNAME = "arg"
COLUMN = 19  # width of the name column (switch lines: long spelling + name)

_ARGNAME = re.compile(r"\[(?P<name>[^\]]*)\](?P<descr>.*)", re.DOTALL)


def argname(help, /, *, mandatory=True, default=DEFAULT_ARGNAME):
    """
    Split a help string into (display name, description).

    - "[name]rest" gives ("name", "rest"), or ("[name]", "rest") when not mandatory.
    - no leading bracket, or one that is never closed, gives the default name and
      the whole string as description.
    - a None default yields an empty name (flags have no argument to show).
    """
    help = help or ""
    if match := _ARGNAME.match(help):
        name, descr = match["name"], match["descr"]
    else:
        name, descr = default, help

    if name is None:
        return "", descr
    if not mandatory:
        name = f"[{name}]"
    return name, descr


def _styler(colorful):
    styles = defaultdict(str, {
        "usage-label": "bold #00E6FF",  # cyan signature label
        "program-name": "bold #FF4D94",  # magenta-pink program
        "description-section": "italic #A3A3A3",
        "section-label": "bold #FFFFFF",
        "switch-name": "bold #22C55E",  # green switches
        "metavar": "bold #FFD600",  # amber argument names
        "argument-description": "#9CA3AF",
        "choice": "bold #FF4D94",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    return styler


def _switch_line(switch, styler):
    name, descr = argname(switch.help, default=None if switch.type is ValueType.NONE else DEFAULT_ARGNAME)

    short = switch.short or "  "
    long = switch.long or ""
    separator = "," if switch.short and switch.long else " "

    total = len(long) + len(name)
    padding = " " if total > COLUMN else " " * (COLUMN - total)

    line = Text("  ")
    line.append(short, styler("switch-name") if switch.short else "")
    line.append(separator + " ")
    line.append(long, styler("switch-name"))
    line.append(" ")
    line.append(name, styler("metavar"))
    line.append(padding)
    line.append(descr, styler("argument-description"))

    if switch.type is ValueType.ENUM:
        line.append(" (")
        line.append_text(Text("|").join(Text(choice, styler("choice")) for choice in switch.mapping.names))
        line.append(")")
    return line


def render(program, parameters=(), switches=(), mandatory=0, description=None, *, help=True, colorful=False):
    """
    Render the help text of a command.

    Parameters
    - program: str, name shown in the usage line.
    - parameters: sequence of Parameter, in positional order.
    - switches: sequence of Switch, in declaration order.
    - mandatory: number of leading parameters that are mandatory.
    - description: optional program description shown first.
    - help: include the -h/-help line (disabled with the help switch itself).
    - colorful: apply the palette; the plain text is the same either way.

    Returns a rich Text (use .plain for the bare string). Built-in switches are
    always listed last, whatever the declaration order.
    """
    styler = _styler(colorful)
    lines = [Text()]

    if description:
        lines.append(Text(str(description), styler("description-section")))
        lines.append(Text())

    usage = Text.assemble(("Usage", styler("usage-label")), ": ", (str(program), styler("program-name")))
    for index, parameter in enumerate(parameters, 1):
        name, _ = argname(parameter.help, mandatory=index <= mandatory)
        usage.append(" ")
        usage.append(name, styler("metavar"))
    usage.append(" [options]")
    lines.append(usage)

    lines.append(Text())
    lines.append(Text(" Parameters:", styler("section-label")))
    for index, parameter in enumerate(parameters, 1):
        name, descr = argname(parameter.help, mandatory=index <= mandatory)
        lines.append(Text.assemble(
            "  ",
            (name, styler("metavar")),
            " " * max(COLUMN - len(name), 0),
            "     ",
            (descr, styler("argument-description")),
        ))

    lines.append(Text())
    lines.append(Text(" Options:", styler("section-label")))
    for switch in switches:
        lines.append(_switch_line(switch, styler))
    for switch in builtins(help=help):
        lines.append(_switch_line(switch, styler))

    lines.append(Text())
    return Text("\n").join(lines)


__all__ = (
    "DEFAULT_ARGNAME",
    "argname",
    "render",
)
