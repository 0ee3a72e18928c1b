import enum
import sys

from rich.console import Console
from rich.pretty import pprint

from cmdtable import *


class Colour(enum.IntEnum):
    BLACK = 0
    RED   = 1
    GREEN = 2
    BLUE  = 3
    WHITE = 4


text = String("default string")
first = Number()
second = Number()

flag = Boolean()
constant = Number()
colour = Code(Colour.BLACK)
dec = Number()
hexvalue = Number()
integer = Number()
string = String("not initialised")

parser = Parser(
    "CmdLine",
    [
        Parameter.string(text, 20, "[str]string parameter"),
        Parameter.hexadecimal(first, "[num1]hexidecimal parameter"),
        Parameter.decimal(second, "[num2]decimal parameter"),
    ],
    [
        Switch.flag("-f", None, flag, "boolean flag"),
        Switch.constant(None, "-flag2", constant, 12345678, "flag with default value assigned"),
        Switch.enum("-c", "-colour", colour, EnumMapping.fromenum(Colour), "[val]named option"),
        Switch.decimal("-d", "-dec", dec, "[num]decimal value", mandatory=True),
        Switch.hexadecimal("-x", "-hex", hexvalue, "[num]hexidecimal value"),
        Switch.integer("-i", None, integer, "[num]integer value"),
        Switch.string("-s", "-string", string, 20, "[str]string value"),
    ],
    mandatory=1,
    description="Application to test command line parser",
)


if __name__ == '__main__':
    result = parser.parse()

    console = Console()
    console.rule()
    if result.status is Status.SUCCESS:
        console.print("Parameters (%d):" % result.count)
        pprint({"text": text, "first": first, "second": second}, expand_all=True)
        console.print("Options:")
        pprint({
            "flag": flag,
            "constant": constant,
            "colour": Colour(colour.value),
            "dec": dec,
            "hex": hexvalue,
            "integer": integer,
            "string": string,
        }, expand_all=True)
    console.print("Status = %s" % result.status.name)
    console.rule()

    sys.exit(result.status)
