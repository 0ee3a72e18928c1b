r"""
cmdtable parse engine.

Overview
- Parser: binds a parameter table, a switch table and runtime options; each
  parse(argv) call validates one command line against them, writes the
  destinations of the entries it resolved and returns a Result.
- parse(...): one-shot convenience over Parser.

Flow (the first fault ends the parse; nothing is accumulated)
0. split a string command line; an unbalanced quote is malformed input.
1. expand the switch table (built-ins included); overflow ends the parse
   before anything is tokenized.
2. tokenize; an unregistered switch-like token is an unknown option.
3. -b/-break (or paged=True) routes help through the console pager.
4. -h/-help renders help and aborts, before any validation.
5. positional count (recorded in the result from here on), then each
   supplied positional is converted into its destination.
6. duplicates: a spelling typed twice, or both spellings of one switch.
7. each present switch: value requirement, then flag write or conversion.
8. mandatory switches that were not supplied.
The token set is released on every path.

Reporting
- shell=True (default): faults are printed on the error console in the
  "prog: message" shape and their status is returned.
- shell=False: faults raise (see faults.ParseException); help still returns
  Result(Status.ABORTED).

Quick example:
    >>> from cmdtable import Parser, Parameter, Switch, Number, Boolean
    >>> count, force = Number(), Boolean()
    >>> parser = Parser(
    ...     "tool",
    ...     [Parameter.decimal(count, "[count]number of runs")],
    ...     [Switch.flag("-f", "-force", force, "ignore errors")],
    ...     mandatory=1,
    ... )
    >>> parser.parse(["tool", "5", "-f"]).status
    <Status.SUCCESS: 0>
"""
import os
import shlex
import sys
from collections import namedtuple
from collections.abc import Iterable

from rich.console import Console
from rich.table import Table

from .faults import *
from .faults import console as _errors
from .helper import render
from .schema import MAX_SWITCHES, Parameter, Requirement, Switch, expand
from .tokenizer import Tokenizer
from .utils import *
from .values import ValueType, convert

Result = namedtuple("Result", ("status", "count", "paged"))
Result.__doc__ = """
Outcome of one parse: the Status, the number of positional arguments supplied
(program name excluded, None when the parse ended before they were counted)
and whether pager mode was applied.
"""

_WORDING = {
    ValueType.STRING: "string",
    ValueType.DECIMAL: "decimal value",
    ValueType.HEXADECIMAL: "hex value",
    ValueType.INTEGER: "integer value",
}


def _wording(type):
    return "option" if type is ValueType.ENUM else _WORDING[type]


def _sanitize_tables(metadata, /):
    """
    Internal: validate the parameter and switch tables and the mandatory count.

    Raises
    - TypeError: a table item of the wrong kind, or a non-integer count.
    - ValueError: a negative count, or more mandatory parameters than declared.
    """
    for key, kind in (("parameters", Parameter), ("switches", Switch)):
        if not isinstance(table := metadata[key], Iterable) or isinstance(table, str):
            raise TypeError(f"parser '{key}' must be an iterable of {kind.__typename__}s")
        metadata[key] = table = tuple(table)
        if not all(isinstance(item, kind) for item in table):
            raise TypeError(f"parser '{key}' must be an iterable of {kind.__typename__}s")

    if not isinstance(mandatory := metadata["mandatory"], int) or isinstance(mandatory, bool):
        raise TypeError("parser 'mandatory' must be an integer")
    if mandatory < 0:
        raise ValueError("parser 'mandatory' cannot be negative")
    if mandatory > len(metadata["parameters"]):
        raise ValueError("parser 'mandatory' cannot exceed the number of parameters")

    if not isinstance(metadata["capacity"], int) or metadata["capacity"] < 0:
        raise TypeError("parser 'capacity' must be a non-negative integer")

    if not isinstance(description := metadata["description"], str | None | Unset):
        raise TypeError("parser 'description' must be a string")
    metadata["description"] = coalesce(description, None)


class Parser:
    """
    Schema-driven command line parser.

    Parameters
    - program: str | Unset, name used in messages and help (defaults to the
      basename of argv[0]).
    - parameters: iterable of Parameter, in positional order.
    - switches: iterable of Switch (at most `capacity` of them).
    - mandatory: int, number of leading parameters that must be supplied.
    - description: str | None, shown at the top of the help.

    Options (keyword only)
    - console: Console receiving help output (stdout).
    - errors: Console receiving faults and the debug trace (stderr).
    - tokenizer: object providing parse(entries, tokens) -> token set.
    - capacity: maximum number of declared switches.
    - help: register -h/-help; when False, help is never shown.
    - paged: always page the help (as if -b were given).
    - shell, colorful, fancy: fault rendering (see faults.ParseException).
    - debug: log the registration table before tokenizing.
    """

    __introspectable__ = (
        "program",
        "parameters",
        "switches",
        "mandatory",
        "description",
        "capacity",
        "help",
        "paged",
        "shell",
        "colorful",
        "fancy",
        "debug",
    )

    program = mirror("program")
    parameters = mirror("parameters")
    switches = mirror("switches")
    mandatory = mirror("mandatory")
    description = mirror("description")
    capacity = mirror("capacity")
    help = mirror("help")
    paged = mirror("paged")
    shell = mirror("shell")
    colorful = mirror("colorful")
    fancy = mirror("fancy")
    debug = mirror("debug")

    def __init__(
            self,
            program=Unset,
            parameters=(),
            switches=(),
            mandatory=0,
            description=None,
            *,
            console=Unset,
            errors=Unset,
            tokenizer=Unset,
            capacity=MAX_SWITCHES,
            help=True,
            paged=False,
            shell=True,
            colorful=True,
            fancy=False,
            debug=False
    ):
        if not isinstance(program, str | None | Unset):
            raise TypeError("parser 'program' must be a string")

        metadata = {
            "parameters": parameters,
            "switches": switches,
            "mandatory": mandatory,
            "description": description,
            "capacity": capacity,
        }
        _sanitize_tables(metadata)

        tokenizer = coalesce(tokenizer, Tokenizer())
        if not callable(getattr(tokenizer, "parse", None)):
            raise TypeError("parser 'tokenizer' must provide a parse() method")

        self._program = coalesce(program, None)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        self._console = Console() if console is Unset else console
        self._errors = coalesce(errors, _errors)
        self._tokenizer = tokenizer
        self._help = bool(help)
        self._paged = bool(paged)
        self._shell = bool(shell)
        self._colorful = bool(colorful)
        self._fancy = bool(fancy)
        self._debug = bool(debug)

    def __repr__(self):
        return f"parser({', '.join('%s=%r' % field for field in self.__rich_repr__())})"

    def __rich_repr__(self):
        for field in self.__introspectable__:
            yield field, getattr(self, field)

    def render(self, program=Unset):
        """
        Return the help text of this parser as a rich Text.
        """
        return render(
            coalesce(program, self._program) or "",
            self._parameters,
            self._switches,
            self._mandatory,
            self._description,
            help=self._help,
            colorful=self._colorful,
        )

    def _tokens(self, argv):
        if argv is Unset:
            return list(sys.argv)
        if isinstance(argv, str):
            try:
                return shlex.split(argv)
            except ValueError as error:
                raise MalformedCommandLineError(
                    "Malformed command line - %s" % str(error).lower(),
                    title="malformed command line",
                    hint="check the quotes",
                ) from None
        if isinstance(argv, Iterable):
            tokens = list(argv)
            if not all(isinstance(token, str) for token in tokens):
                raise TypeError("parse() argument must be a string or an iterable of strings")
            return tokens
        raise TypeError("parse() argument must be a string or an iterable of strings")

    def _trace(self, entries):
        table = Table(title="switch registration", show_edge=False)
        table.add_column("#", justify="right")
        table.add_column("spelling")
        table.add_column("kind")
        for index, entry in enumerate(entries):
            table.add_row(str(index), entry.name, entry.kind.value)
        self._errors.log(table)

    def _show(self, text, paged):
        if paged:
            with self._console.pager(styles=self._colorful):
                self._console.print(text)
        else:
            self._console.print(text)

    def _parameters_of(self, tokens):
        count = tokens.count
        if count > len(self._parameters):
            raise TooManyParametersError(
                "Too many parameters",
                title="too many parameters",
                hint="expected at most %d" % len(self._parameters),
            )
        if count < self._mandatory:
            raise TooFewParametersError(
                "Too few parameters",
                title="too few parameters",
                hint="expected at least %d" % self._mandatory,
            )

        for index, parameter in enumerate(self._parameters[:count]):
            if parameter.destination is Unset:
                raise NullDestinationError(
                    "TBLERR(%d): Parameter: Null destination" % index,
                    title="null destination",
                )
            raw = tokens.raw(index + 1)
            try:
                value = convert(raw, parameter.type, size=parameter.size, mapping=parameter.mapping)
            except ConversionError:
                raise InvalidValueError(
                    "Parameter %d is not a valid %s - '%s'" % (index + 1, _wording(parameter.type), raw),
                    title="invalid value",
                    token=raw,
                ) from None
            except InvalidTypeError:
                raise InvalidTypeError(
                    "TBLERR(%d): Parameter: Invalid value type" % index,
                    title="invalid value type",
                ) from None
            parameter.destination.assign(value)

    def _switches_of(self, tokens):
        if (token := tokens.duplicate()) is not None:
            raise DuplicatedSwitchError(
                "Duplicate switch - '%s'" % token,
                title="duplicate switch",
                token=token,
            )

        present = [False] * len(self._switches)
        for index, switch in enumerate(self._switches):
            supplied = [name for name in switch.names if tokens.flag(name)]
            if not supplied:
                continue
            if len(supplied) > 1:
                raise DuplicatedSwitchError(
                    "Duplicate switch - '%s'" % supplied[0],
                    title="duplicate switch",
                    token=supplied[0],
                    hint="%s and %s are the same switch" % tuple(switch.names),
                )

            present[index] = True
            spelling = supplied[0]
            raw = tokens.value(spelling)
            if raw is None and switch.requirement is Requirement.MANDATORY:
                raise SwitchValueRequiredError(
                    "Switch '%s' requires a value" % spelling,
                    title="value required",
                    token=spelling,
                )
            if switch.destination is Unset:
                raise NullDestinationError(
                    "TBLERR(%d): Switch: Null destination" % index,
                    title="null destination",
                )

            if switch.type is ValueType.NONE:
                switch.destination.assign(True if switch.flagvalue is Unset else switch.flagvalue)
                continue
            if raw is None:
                continue

            try:
                value = convert(raw, switch.type, size=switch.size, mapping=switch.mapping)
            except ConversionError:
                raise InvalidValueError(
                    "Switch '%s' has invalid %s - '%s'" % (spelling, _wording(switch.type), raw),
                    title="invalid value",
                    token=raw,
                    hint=(
                        "expected one of %s" % ", ".join(switch.mapping.names)
                        if switch.type is ValueType.ENUM else None
                    ),
                ) from None
            except InvalidTypeError:
                raise InvalidTypeError(
                    "TBLERR(%d): Switch: Invalid value type" % index,
                    title="invalid value type",
                ) from None
            switch.destination.assign(value)

        for switch, found in zip(self._switches, present):
            if switch.mandatory and not found:
                raise MissingSwitchError(
                    "Missing switch - '%s'" % switch.primary,
                    title="missing switch",
                    token=switch.primary,
                )

    def parse(self, argv=Unset, /):
        """
        Validate one command line and write the destinations it resolves.

        Parameters
        - argv:
          • Unset: sys.argv.
          • str: shell-like string, split with shlex.split (program name first);
            an unbalanced quote is a MalformedCommandLineError.
          • Iterable[str]: tokens, program name first.

        Returns a Result. In shell mode faults are printed and mapped to their
        status; otherwise they raise.

        Raises
        - TypeError: argv is not a string nor an iterable of strings.
        - ParseException: any fault, when shell mode is off.
        """
        program = self._program
        count = None
        paged = self._paged
        try:
            argv = self._tokens(argv)
            if program is None:
                program = os.path.basename(argv[0]) if argv else ""

            entries = expand(self._switches, capacity=self._capacity, help=self._help)
            if self._debug:
                self._trace(entries)

            with self._tokenizer.parse(entries, argv) as tokens:
                paged = paged or tokens.flag("-b") or tokens.flag("-break")
                if self._help and (tokens.flag("-h") or tokens.flag("-help")):
                    self._show(self.render(program), paged)
                    return Result(Status.ABORTED, count, paged)

                count = tokens.count
                self._parameters_of(tokens)
                self._switches_of(tokens)

        except ParseException as fault:
            status = trigger(
                fault,
                program=program if isinstance(fault, InputError) else None,
                shell=self._shell,
                colorful=self._colorful,
                fancy=self._fancy,
                console=self._errors,
            )
            return Result(status, count, paged)

        return Result(Status.SUCCESS, count, paged)


def parse(argv=Unset, program=Unset, mandatory=0, parameters=(), switches=(), description=None, /, **options):
    """
    Parse one command line against the given tables (see Parser for the options).

    Returns a Result.
    """
    return Parser(program, parameters, switches, mandatory, description, **options).parse(argv)


__all__ = (
    "Status",
    "Result",
    "Parser",
    "parse",
)
