"""
Default tokenizer tests.

Scope
- Positional/switch split, value capture, program name handling.
- Unknown switches (with their hints), duplicates, release semantics.

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from cmdtable.faults import UnknownSwitchError
from cmdtable.schema import Entry, Kind
from cmdtable.tokenizer import *

ENTRIES = (
    Entry("-f", Kind.FLAG),
    Entry("-flag", Kind.FLAG),
    Entry("-d", Kind.VALUE),
    Entry("-dec", Kind.VALUE),
    Entry("-h", Kind.FLAG),
    Entry("-help", Kind.FLAG),
)


class TestTokenizer(TestCase):

    def setUp(self):
        self.tokenizer = Tokenizer()

    def testPositionals(self):
        with self.tokenizer.parse(ENTRIES, ["prog", "a", "b"]) as tokens:
            self.assertEqual(tokens.count, 2)
            self.assertEqual(tokens.raw(0), "prog")
            self.assertEqual(tokens.raw(1), "a")
            self.assertEqual(tokens.raw(2), "b")

    def testEmptyCommandLine(self):
        with self.tokenizer.parse(ENTRIES, []) as tokens:
            self.assertEqual(tokens.count, 0)
            self.assertEqual(tokens.raw(0), "")

    def testProgramNameIsNeverASwitch(self):
        with self.tokenizer.parse(ENTRIES, ["-prog"]) as tokens:
            self.assertEqual(tokens.count, 0)

    def testFlag(self):
        with self.tokenizer.parse(ENTRIES, ["prog", "-f", "x"]) as tokens:
            self.assertTrue(tokens.flag("-f"))
            self.assertFalse(tokens.flag("-flag"))
            self.assertIsNone(tokens.value("-f"))
            self.assertEqual(tokens.count, 1)

    def testValue(self):
        with self.tokenizer.parse(ENTRIES, ["prog", "-d", "12", "x"]) as tokens:
            self.assertTrue(tokens.flag("-d"))
            self.assertEqual(tokens.value("-d"), "12")
            self.assertEqual(tokens.count, 1)
            self.assertEqual(tokens.raw(1), "x")

    def testValueIsNotTakenFromSwitch(self):
        with self.tokenizer.parse(ENTRIES, ["prog", "-d", "-f"]) as tokens:
            self.assertTrue(tokens.flag("-d"))
            self.assertIsNone(tokens.value("-d"))
            self.assertTrue(tokens.flag("-f"))

    def testMissingTrailingValue(self):
        with self.tokenizer.parse(ENTRIES, ["prog", "-dec"]) as tokens:
            self.assertTrue(tokens.flag("-dec"))
            self.assertIsNone(tokens.value("-dec"))

    def testLoneDashIsPositional(self):
        with self.tokenizer.parse(ENTRIES, ["prog", "-"]) as tokens:
            self.assertEqual(tokens.count, 1)
            self.assertEqual(tokens.raw(1), "-")

    def testCaseInsensitiveSpellings(self):
        with self.tokenizer.parse(ENTRIES, ["prog", "-FLAG"]) as tokens:
            self.assertTrue(tokens.flag("-flag"))

    def testUnknownSwitch(self):
        with self.assertRaises(UnknownSwitchError) as context:
            self.tokenizer.parse(ENTRIES, ["prog", "-unknown"])
        self.assertEqual(context.exception.message, "Unknown option - '-unknown'")
        self.assertEqual(context.exception.options["token"], "-unknown")

    def testUnknownSwitchSuggestion(self):
        with self.assertRaises(UnknownSwitchError) as context:
            self.tokenizer.parse(ENTRIES, ["prog", "-flga"])
        self.assertEqual(context.exception.options["hint"], "did you mean '-flag'?")

    def testNegativeNumberIsASwitch(self):
        with self.assertRaises(UnknownSwitchError):
            self.tokenizer.parse(ENTRIES, ["prog", "-5"])

    def testDuplicate(self):
        with self.tokenizer.parse(ENTRIES, ["prog", "-f", "-d", "1", "-F"]) as tokens:
            self.assertEqual(tokens.duplicate(), "-F")

    def testSynonymsAreNotDuplicates(self):
        with self.tokenizer.parse(ENTRIES, ["prog", "-f", "-flag"]) as tokens:
            self.assertIsNone(tokens.duplicate())

    def testFirstOccurrenceValue(self):
        with self.tokenizer.parse(ENTRIES, ["prog", "-d", "1", "-d", "2"]) as tokens:
            self.assertEqual(tokens.value("-d"), "1")
            self.assertEqual(tokens.duplicate(), "-d")


class TestTokenSet(TestCase):

    def testReleaseOnExit(self):
        with Tokenizer().parse(ENTRIES, ["prog"]) as tokens:
            self.assertFalse(tokens.released)
        self.assertTrue(tokens.released)

    def testReleaseOnError(self):
        with self.assertRaises(KeyError):
            with Tokenizer().parse(ENTRIES, ["prog"]) as tokens:
                raise KeyError("boom")
        self.assertTrue(tokens.released)

    def testReleaseIsIdempotent(self):
        tokens = TokenSet(["prog"], [])
        tokens.release()
        tokens.release()
        self.assertTrue(tokens.released)

    def testReadingReleasedSetFails(self):
        tokens = TokenSet(["prog", "a"], [])
        tokens.release()
        with self.assertRaises(RuntimeError):
            tokens.count
        with self.assertRaises(RuntimeError):
            tokens.flag("-f")


if __name__ == '__main__':
    unittest.main()
