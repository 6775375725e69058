# python
"""
Fault taxonomy, rendering and early-exit tests.

Scope
- FaultCode values are stable and can be remapped by the host (__codes__).
- Faults render a "[ prog — code | title ]" header, the message and the hint.
- EarlyExit is a plain value with equality and a readable representation.
"""

from __future__ import annotations

import io
import sys
import unittest
from unittest import TestCase
from unittest.mock import patch

from rich.console import Console

from optline import (
    FaultCode,
    OptlineException,
    RegistrationError,
    EmptyNameError,
    DuplicateNameError,
    ParseError,
    UnknownOptionError,
    UnexpectedOptionError,
    MissingParameterError,
    ConversionError,
    EarlyExit,
    report,
)


def render(renderable, width=120):
    buffer = io.StringIO()
    Console(file=buffer, width=width, color_system=None).print(renderable)
    return buffer.getvalue()


class TestFaultCodes(TestCase):
    """Numeric identifiers and host remapping."""

    def testStableValues(self):
        self.assertEqual(FaultCode.EMPTY_NAME, 11101)
        self.assertEqual(FaultCode.DUPLICATE_NAME, 11102)
        self.assertEqual(FaultCode.UNKNOWN_OPTION, 11111)
        self.assertEqual(FaultCode.UNEXPECTED_OPTION, 11112)
        self.assertEqual(FaultCode.MISSING_PARAMETER, 11113)
        self.assertEqual(FaultCode.UNCONVERTIBLE_PARAMETER, 11121)

    def testNormalizeDefaultsToNumber(self):
        self.assertEqual(FaultCode.UNKNOWN_OPTION.normalize(), "11111")

    def testNormalizeUsesHostCodes(self):
        main = sys.modules["__main__"]
        with patch.object(main, "__codes__", {FaultCode.UNKNOWN_OPTION: "E-UNKNOWN"}, create=True):
            self.assertEqual(FaultCode.UNKNOWN_OPTION.normalize(), "E-UNKNOWN")
            self.assertEqual(FaultCode.MISSING_PARAMETER.normalize(), "11113")


class TestHierarchy(TestCase):
    """Fault families."""

    def testRegistrationFaults(self):
        for kind in (EmptyNameError, DuplicateNameError):
            with self.subTest(kind=kind):
                self.assertTrue(issubclass(kind, RegistrationError))
                self.assertTrue(issubclass(kind, ValueError))
                self.assertTrue(issubclass(kind, OptlineException))

    def testParseFaults(self):
        for kind in (UnknownOptionError, UnexpectedOptionError, MissingParameterError):
            with self.subTest(kind=kind):
                self.assertTrue(issubclass(kind, ParseError))
                self.assertFalse(issubclass(kind, RegistrationError))

    def testConversionFault(self):
        self.assertTrue(issubclass(ConversionError, ValueError))
        self.assertFalse(issubclass(ConversionError, ParseError))

    def testOptionsAreReadOnly(self):
        fault = ParseError("boom", code=FaultCode.UNKNOWN_OPTION, hint="try again", input="x")
        self.assertEqual(str(fault), "boom")
        self.assertIs(fault.code, FaultCode.UNKNOWN_OPTION)
        self.assertEqual(fault.hint, "try again")
        self.assertEqual(fault.options["input"], "x")
        with self.assertRaises(TypeError):
            fault.options["input"] = "y"

    def testMissingOptions(self):
        fault = OptlineException()
        self.assertEqual(str(fault), "")
        self.assertIsNone(fault.code)
        self.assertIsNone(fault.hint)


class TestRendering(TestCase):
    """Rich rendering of faults."""

    def testHeaderMessageAndHint(self):
        fault = UnknownOptionError(
            "unknown option '-x' at first position",
            prog="tool",
            title="unknown option",
            code=FaultCode.UNKNOWN_OPTION,
            hint="run 'tool --help' to see all available options",
        )
        output = render(fault)
        self.assertIn("[ tool — 11111 | Unknown Option ]", output)
        self.assertIn("unknown option '-x' at first position", output)
        self.assertIn("→ run 'tool --help' to see all available options", output)

    def testPlainRenderingWithoutCode(self):
        output = render(ParseError("plain", prog="tool", colorful=False))
        self.assertIn("[ tool — - | Parseerror ]", output)
        self.assertIn("plain", output)
        self.assertNotIn("→", output)

    def testFancyRenderingUsesPanel(self):
        fault = MissingParameterError("missing", prog="tool", title="missing parameter", fancy=True)
        output = render(fault)
        self.assertIn("Missing Parameter", output)
        self.assertIn("missing", output)
        self.assertIn("╭", output)

    def testReportWritesToFile(self):
        buffer = io.StringIO()
        report(ConversionError("bad value", prog="tool", title="unconvertible parameter"), file=buffer)
        self.assertIn("bad value", buffer.getvalue())
        self.assertIn("Unconvertible Parameter", buffer.getvalue())

    def testReportRejectsForeignExceptions(self):
        with self.assertRaises(TypeError):
            report(ValueError("nope"), file=io.StringIO())


class TestEarlyExit(TestCase):
    """The success-semantics stop value."""

    def testFields(self):
        signal = EarlyExit("help")
        self.assertEqual(signal.option, "help")
        self.assertEqual(signal.status, 0)
        self.assertEqual(EarlyExit("version", status=2).status, 2)

    def testEquality(self):
        self.assertEqual(EarlyExit("help"), EarlyExit("help", 0))
        self.assertNotEqual(EarlyExit("help"), EarlyExit("help", 1))
        self.assertNotEqual(EarlyExit("help"), "help")
        self.assertEqual(len({EarlyExit("help"), EarlyExit("help")}), 1)

    def testRepr(self):
        self.assertEqual(repr(EarlyExit("help")), "early-exit(option='help', status=0)")

    def testTypeChecks(self):
        with self.assertRaises(TypeError):
            EarlyExit(1)
        with self.assertRaises(TypeError):
            EarlyExit("help", "0")

    def testIsNotAnException(self):
        self.assertFalse(isinstance(EarlyExit("help"), BaseException))

    def testSealed(self):
        with self.assertRaises(AttributeError):
            EarlyExit("help").extra = 1


if __name__ == "__main__":
    unittest.main()
