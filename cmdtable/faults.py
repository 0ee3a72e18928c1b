"""
cmdtable faults (errors raised while building schemas and parsing command lines) and rendering.

Scope
- Status: the outcome of one parse, valued with the shell status codes so it can
  be returned as a process exit code as-is.
- FaultCode: stable numeric identifiers for every fault, grouped by domain.
- ParseException: base type carrying a message plus options, rendering itself
  through rich in the "prog: message" shape shell users expect.
- The taxonomy
  • SchemaError (configuration defects: fix the table, do not retry)
  • InputError (bad command line: report it to the user)
  • ResourceExhaustedError (system degraded)
- ConversionError: raised by the value converter, translated by the engine.
- trigger(): print a fault in shell mode, raise it otherwise.

Integration
- The engine raises faults as soon as it meets one (nothing is accumulated)
  and hands them to trigger() with its runtime options (program, shell,
  colorful, fancy, console).
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class Status(IntEnum):
    """
    outcome of a parse call (terminal states of the engine).

    values follow the shell status codes of the host environment, so a host can
    `sys.exit(result.status)` directly.
    """
    SUCCESS          = 0
    INVALID_INPUT    = 2
    OUT_OF_RESOURCES = 9
    ABORTED          = 21


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - command line (1110x): MALFORMED_COMMAND_LINE
    - switches (1111x): UNKNOWN_SWITCH, DUPLICATED_SWITCH, SWITCH_VALUE_REQUIRED, MISSING_SWITCH
    - parameters (1112x): TOO_MANY_PARAMETERS, TOO_FEW_PARAMETERS
    - values (1113x): INVALID_VALUE
    - schema (2110x): NULL_DESTINATION, INVALID_TYPE, CAPACITY_EXCEEDED
    - resources (2210x): RESOURCE_EXHAUSTED
    """
    # --- command line errors (11xxx) ---
    MALFORMED_COMMAND_LINE = 11101

    # --- switch errors (11xxx) ---
    UNKNOWN_SWITCH        = 11111
    DUPLICATED_SWITCH     = 11112
    SWITCH_VALUE_REQUIRED = 11113
    MISSING_SWITCH        = 11114

    # --- parameter errors (11xxx) ---
    TOO_MANY_PARAMETERS   = 11121
    TOO_FEW_PARAMETERS    = 11122

    # --- value errors (11xxx) ---
    INVALID_VALUE         = 11131

    # --- schema errors (21xxx) ---
    NULL_DESTINATION      = 21101
    INVALID_TYPE          = 21102
    CAPACITY_EXCEEDED     = 21103

    # --- resource errors (22xxx) ---
    RESOURCE_EXHAUSTED    = 22101

    def normalize(self):
        """
        return a host-normalized label for this code.

        a __codes__ mapping in __main__ may remap codes to friendlier labels;
        otherwise the numeric value is used.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ParseException(Exception):
    status = Status.INVALID_INPUT
    code = Unset

    def __init__(self, message="", /, **options):
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)

        styles = defaultdict(str, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # pinky title
            "error-message": "#C8C8D0",  # soft gray body
            "error-token": "bold #FFD600",  # amber quoted token
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        message = Text(self.message, styler("error-message"))
        if colorful:
            message.highlight_regex(r"'[^']*'", styler("error-token"))

        if program := self.options.get("program"):
            message = Text.assemble((str(program), styler("prog-name")), ": ", message)

        renders = [message]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble((" → ", styler("hint-arrow")), (hint, styler("hint"))))

        if self.options.get("fancy", False):
            code = coalesce_code(self)
            header = Text.assemble(
                "[ ",
                (code.normalize() if code else "-", styler("code")),
                " | ",
                (self.options.get("title", type(self).__name__).title(), styler("error-title")),
                " ]",
            )
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(*renders)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        self.options.get("console", console).print(self)
        return self.status

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


def coalesce_code(fault, /):
    """
    the fault code of an instance: an explicit `code` option wins over the class default.
    """
    return fault.options.get("code", type(fault).code)


class SchemaError(ParseException):
    """configuration defect in a parameter or switch table."""


class NullDestinationError(SchemaError):
    code = FaultCode.NULL_DESTINATION


class InvalidTypeError(SchemaError, TypeError):
    code = FaultCode.INVALID_TYPE


class CapacityExceededError(SchemaError):
    status = Status.OUT_OF_RESOURCES
    code = FaultCode.CAPACITY_EXCEEDED


class ResourceExhaustedError(ParseException):
    status = Status.OUT_OF_RESOURCES
    code = FaultCode.RESOURCE_EXHAUSTED


class InputError(ParseException):
    """malformed command line."""


class MalformedCommandLineError(InputError):
    code = FaultCode.MALFORMED_COMMAND_LINE


class UnknownSwitchError(InputError):
    code = FaultCode.UNKNOWN_SWITCH


class DuplicatedSwitchError(InputError):
    code = FaultCode.DUPLICATED_SWITCH


class SwitchValueRequiredError(InputError):
    code = FaultCode.SWITCH_VALUE_REQUIRED


class MissingSwitchError(InputError):
    code = FaultCode.MISSING_SWITCH


class TooManyParametersError(InputError):
    code = FaultCode.TOO_MANY_PARAMETERS


class TooFewParametersError(InputError):
    code = FaultCode.TOO_FEW_PARAMETERS


class InvalidValueError(InputError):
    code = FaultCode.INVALID_VALUE


class ConversionError(ValueError):
    """
    raw token rejected by the value converter.

    carries the offending token and the declared type so the engine can word a
    type-specific message; it never reaches the user as-is.
    """

    def __init__(self, token, type, /):
        super().__init__("%r is not a valid %s" % (token, type.name.lower()))
        self.token = token
        self.type = type


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ParseException).
    - options are merged into the fault before triggering.
    - shell mode prints the fault on `console` (stderr by default) and returns
      its status; otherwise the merged fault is raised.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    return fault.__replace__(**options).__trigger__()


__all__ = (
    "Status",
    "FaultCode",
    "ParseException",
    "SchemaError",
    "NullDestinationError",
    "InvalidTypeError",
    "CapacityExceededError",
    "ResourceExhaustedError",
    "InputError",
    "MalformedCommandLineError",
    "UnknownSwitchError",
    "DuplicatedSwitchError",
    "SwitchValueRequiredError",
    "MissingSwitchError",
    "TooManyParametersError",
    "TooFewParametersError",
    "InvalidValueError",
    "ConversionError",
    "trigger",
)
