"""
Optline faults (errors and the early-exit signal) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
  Codes are grouped by domain (registration, parsing, conversion) to keep copy
  consistent and make logs/searches predictable.
- OptlineException: base type that carries message + options and knows how to
  render itself in a friendly, lowercased, and actionable way.
- RegistrationError / ParseError / ConversionError: the three fault families.
- EarlyExit: not a fault; a value returned from parsing when an action asks to stop
  with success semantics (the built-in help does this).
- report(): print any fault to stderr through rich.

UX goals
- Position-first messages: parse faults include the ordinal position of the token
  (“at third position”) so users can learn by trying.
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.
- Lowercased tone with readable styling (configurable via __styles__ in __main__).

Integration
- The registry and the parser raise these faults; nothing is caught or logged on
  the way out. Hosts decide whether to print them (report) or let them propagate.
"""
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType
from typing import final

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce, mirror

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping (by high-level domain)
    - registration (1110x)
      • EMPTY_NAME, DUPLICATE_NAME
    - parsing (1111x)
      • UNKNOWN_OPTION, UNEXPECTED_OPTION, MISSING_PARAMETER
    - conversion (1112x)
      • UNCONVERTIBLE_PARAMETER

    rationale
    - codes are discoverable (searchable in logs and docs) and normalized to a string
      via normalize() so hosts can remap them if desired.
    """
    # --- registration errors (11xxx) ---
    EMPTY_NAME                  = 11101
    DUPLICATE_NAME              = 11102

    # --- parsing errors (11xxx) ---
    UNKNOWN_OPTION              = 11111
    UNEXPECTED_OPTION           = 11112
    MISSING_PARAMETER           = 11113

    # --- conversion errors (11xxx) ---
    UNCONVERTIBLE_PARAMETER     = 11121

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(sys.modules["__main__"], "__codes__", {}).get(self, self.value))


class OptlineException(Exception):
    """
    base fault: a message plus read-only rendering/context options.

    recognized options
    - title, code, hint: header and footer copy.
    - prog: program name shown in the header (falls back to __main__.__prog__).
    - colorful (default True), fancy (default False): rendering switches.
    - anything else is context (input, index, spelling, ...) kept for the host.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    @property
    def hint(self):
        return self.options.get("hint")

    def __rich__(self):
        main = sys.modules["__main__"]
        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = text(self.options.get("prog", getattr(main, "__prog__", "optline")), styler("prog-name"))
        code = self.options.get("code")

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code.normalize() if code else "-", styler("code")),
            " | ",
            text(str(self.options.get("title", type(self).__name__)).title(), styler("error-title")),
            " ]"
        )
        message = text(coalesce(self.message, ""), styler("error-message"))
        renders = [message]
        if self.hint:
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(self.hint, styler("hint"))))

        if fancy:
            return Panel(Group(*renders), title=header, title_align="left", width=console.width - 4)

        return Group(header, *renders)


class RegistrationError(OptlineException, ValueError): ...
class EmptyNameError(RegistrationError): ...
class DuplicateNameError(RegistrationError): ...

class ParseError(OptlineException): ...
class UnknownOptionError(ParseError): ...
class UnexpectedOptionError(ParseError): ...
class MissingParameterError(ParseError): ...

class ConversionError(OptlineException, ValueError): ...


@final
class EarlyExit:
    """
    success-semantics stop signal.

    an action returns an EarlyExit to ask the dispatcher to stop immediately; the
    parser then hands the same value back to the host instead of the positional
    arguments. the host decides what to do (usually exit with 'status').
    """
    __slots__ = ("_option", "_status")

    option = mirror("option")
    status = mirror("status")

    def __init__(self, option, /, status=0):
        if not isinstance(option, str):
            raise TypeError("EarlyExit() option must be a string")
        if not isinstance(status, int):
            raise TypeError("EarlyExit() status must be an integer")
        self._option = option
        self._status = status

    def __eq__(self, other):
        if not isinstance(other, EarlyExit):
            return NotImplemented
        return (self.option, self.status) == (other.option, other.status)

    def __hash__(self):
        return hash((EarlyExit, self.option, self.status))

    def __repr__(self):
        return "early-exit(option=%r, status=%r)" % (self.option, self.status)

    def __rich_repr__(self):
        yield "option", self.option
        yield "status", self.status


def report(fault, /, *, file=Unset):
    """
    print a fault through rich (stderr unless 'file' is given).

    contract
    - fault must be an OptlineException (it renders itself via __rich__).
    - nothing is raised or swallowed here; this is presentation only.
    """
    if not isinstance(fault, OptlineException):
        raise TypeError("report() argument must be an optline fault")
    (console if file is Unset else Console(file=file)).print(fault)


__all__ = (
    "FaultCode",
    "OptlineException",
    "RegistrationError",
    "EmptyNameError",
    "DuplicateNameError",
    "ParseError",
    "UnknownOptionError",
    "UnexpectedOptionError",
    "MissingParameterError",
    "ConversionError",
    "EarlyExit",
    "report",
)
