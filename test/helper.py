"""
Help renderer tests.

Scope
- argname(): "[name]" extraction, defaults, optional brackets.
- render(): exact layout of usage, parameter and option listings, built-ins,
  enum names, padding overflow, description and help toggles.

Conventions
- Test method names follow CamelCase per project convention.
- Layouts are compared on the plain text; styling never changes it.
"""
import io
import unittest
from unittest import TestCase

from rich.console import Console
from rich.text import Text

from cmdtable.helper import *
from cmdtable.schema import Parameter, Switch
from cmdtable.values import *


class TestArgname(TestCase):

    def testBracketedName(self):
        self.assertEqual(argname("[count]number of runs"), ("count", "number of runs"))

    def testOptionalName(self):
        self.assertEqual(argname("[count]number of runs", mandatory=False), ("[count]", "number of runs"))

    def testDefaultName(self):
        self.assertEqual(argname("number of runs"), ("arg", "number of runs"))
        self.assertEqual(argname("number of runs", mandatory=False), ("[arg]", "number of runs"))

    def testNoDefaultName(self):
        self.assertEqual(argname("boolean flag", default=None), ("", "boolean flag"))

    def testUnterminatedBracket(self):
        self.assertEqual(argname("[count number of runs"), ("arg", "[count number of runs"))

    def testBracketNotLeading(self):
        self.assertEqual(argname("number [of] runs"), ("arg", "number [of] runs"))

    def testEmptyHelp(self):
        self.assertEqual(argname(""), ("arg", ""))


class TestRender(TestCase):

    def setUp(self):
        self.parameters = [
            Parameter.decimal(Number(), "[count]number of runs"),
            Parameter.string(String(), 16, "name"),
        ]
        self.switches = [
            Switch.flag("-f", "-force", Boolean(), "ignore errors"),
            Switch(None, "-level", ValueType.DECIMAL, Number(), "[n]verbosity"),
            Switch.enum("-c", "-colour", Code(), [(0, "off"), (1, "on")], "[mode]colour mode"),
        ]

    def testLayout(self):
        text = render("tool", self.parameters, self.switches, 1, "Tool description")
        self.assertIsInstance(text, Text)
        self.assertEqual(text.plain, "\n".join([
            "",
            "Tool description",
            "",
            "Usage: tool count [arg] [options]",
            "",
            " Parameters:",
            "  count" + " " * 14 + "     " + "number of runs",
            "  [arg]" + " " * 14 + "     " + "name",
            "",
            " Options:",
            "  -f, -force " + " " * 13 + "ignore errors",
            "      -level n" + " " * 12 + "verbosity",
            "  -c, -colour mode" + " " * 8 + "colour mode (off|on)",
            "  -b, -break " + " " * 13 + "enable page break mode",
            "  -h, -help " + " " * 14 + "display this help and exit",
            "",
        ]))

    def testWithoutDescription(self):
        lines = render("tool", self.parameters, self.switches, 1).plain.split("\n")
        self.assertEqual(lines[:2], ["", "Usage: tool count [arg] [options]"])

    def testWithoutHelpSwitch(self):
        lines = render("tool", help=False).plain.split("\n")
        self.assertEqual(lines[-2], "  -b, -break " + " " * 13 + "enable page break mode")
        self.assertNotIn("display this help and exit", "\n".join(lines))

    def testEmptyTables(self):
        self.assertEqual(render("tool").plain, "\n".join([
            "",
            "Usage: tool [options]",
            "",
            " Parameters:",
            "",
            " Options:",
            "  -b, -break " + " " * 13 + "enable page break mode",
            "  -h, -help " + " " * 14 + "display this help and exit",
            "",
        ]))

    def testShortOnlySwitch(self):
        switches = [Switch.flag("-f", None, Boolean(), "boolean flag")]
        lines = render("tool", switches=switches).plain.split("\n")
        self.assertIn("  -f   " + " " * 19 + "boolean flag", lines)

    def testValueSwitchDefaultName(self):
        switches = [Switch.integer("-i", None, Number(), "integer value")]
        lines = render("tool", switches=switches).plain.split("\n")
        self.assertIn("  -i   arg" + " " * 16 + "integer value", lines)

    def testPaddingOverflow(self):
        switches = [Switch.string(None, "-averyveryverylongname", String(), 8, "[text]long one")]
        lines = render("tool", switches=switches).plain.split("\n")
        self.assertIn("      -averyveryverylongname text long one", lines)

    def testAllOptionalParameters(self):
        parameters = [Parameter.decimal(Number(), "[a]first"), Parameter.decimal(Number(), "[b]second")]
        self.assertIn("Usage: tool [a] [b] [options]", render("tool", parameters).plain)

    def testColorfulKeepsPlainText(self):
        plain = render("tool", self.parameters, self.switches, 1, "Tool description")
        colorful = render("tool", self.parameters, self.switches, 1, "Tool description", colorful=True)
        self.assertEqual(plain.plain, colorful.plain)
        self.assertTrue(colorful.spans)
        self.assertFalse([span for span in plain.spans if span.style])

    def testPrintable(self):
        console = Console(file=io.StringIO(), width=120, color_system=None)
        console.print(render("tool", self.parameters, self.switches, 1))
        self.assertIn("Usage: tool count [arg] [options]", console.file.getvalue())


if __name__ == '__main__':
    unittest.main()
