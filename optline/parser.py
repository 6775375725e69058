"""
Optline parser: classify tokens, dispatch option actions, hand back positionals.

What this module provides
- Parser: owns a Registry and exposes
  • registration helpers: add_option(), flag()/option() decorators, store() sinks.
  • parse(tokens): the token-classification state machine.
  • parse_argv()/parse_argv_inplace(): argv-shaped conveniences.
  • print_usage()/format_usage(): usage text through optline.usage.
  • a built-in "help|h" switch (opt-out) that prints usage and returns EarlyExit.

Token grammar (evaluated per token, left to right)
- "--"                → terminator: everything after it is positional.
- "--name[=value]"    → long option; a with-arg option takes 'value' or the next token.
- "-abc" / "-fvalue"  → bundle of short options; a with-arg option ends the bundle and
                        takes the rest of the token or the next token.
- anything else       → parameter of the pending option, or a positional.

Quick start
    from optline import Parser, Sink

    parser = Parser("demo")
    dub = parser.store("dub", float, description="a double value")

    @parser.flag("verbose|v", "talk more")
    def on_verbose():
        ...

    positionals = parser.parse(["--dub=3.5", "-v", "file.txt"])  # ["file.txt"], dub.value == 3.5

Design notes
- Parse state (the pending option and the positional list) lives in the call, never on
  the parser, so one frozen parser can serve several parses.
- Every fault aborts the call; actions invoked before the failing token stay invoked.
"""
import logging
import os.path
import sys
from collections import deque
from collections.abc import Iterable

from .faults import *
from .options import NoArg, WithArg, Sink, OPTION_LEAD, LONG_LEAD, TERMINATOR, VALUE_DELIMITER
from .registry import Registry, DIVIDER
from .usage import format_usage, print_usage
from .utils import *

log = logging.getLogger(__name__)


class Parser:
    """
    High-level option parser bound to one program name and one registry.

    Parameters
    - prog: Unset | str
      Program name for usage and fault headers. Defaults to __main__.__prog__ when the
      host defines it, otherwise to the basename of sys.argv[0].
    - help: bool
      Register the built-in "help|h" switch.
    - divider: str
      Character separating spellings at registration ("|" by default).
    - colorful / fancy: bool
      Rendering switches for usage text and faults.
    """

    prog = mirror("prog")
    registry = mirror("registry")
    colorful = mirror("colorful")
    fancy = mirror("fancy")

    def __init__(self, prog=Unset, /, *, help=True, divider=DIVIDER, colorful=True, fancy=False):
        if prog is Unset:
            prog = getattr(sys.modules["__main__"], "__prog__", Unset)
        if prog is Unset:
            prog = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "optline"
        if not isinstance(prog, str):
            raise TypeError("parser 'prog' must be a string")
        elif not (prog := prog.strip()):
            raise ValueError("parser 'prog' cannot be empty")

        self._prog = prog
        self._registry = Registry(divider)
        self._colorful = bool(colorful)
        self._fancy = bool(fancy)

        if help:
            self.add_option("help|h", NoArg(self._helper), "Show this help message.")

    def _helper(self):
        self.print_usage()
        return EarlyExit("help")

    def add_option(self, spellings, action, description=""):
        """
        register an action under divider-separated spellings; returns the parser.

        'action' is a NoArg, a WithArg or a Sink (see Registry.register).
        """
        self._registry.register(spellings, action, description)
        return self

    def flag(self, spellings, description=""):
        """
        decorator: register the decorated zero-argument function as a NoArg option.

            @parser.flag("b|p|q")
            def bang(): ...
        """
        @rename("flag")
        def wrapper(callback, /):
            if not callable(callback):
                raise TypeError("@flag() must be applied to a callable")
            self.add_option(spellings, NoArg(callback), description)
            return callback
        return wrapper

    def option(self, spellings, description=""):
        """
        decorator: register the decorated one-argument function as a WithArg option.

            @parser.option("down|d")
            def round_down(value): ...
        """
        @rename("option")
        def wrapper(callback, /):
            if not callable(callback):
                raise TypeError("@option() must be applied to a callable")
            self.add_option(spellings, WithArg(callback), description)
            return callback
        return wrapper

    def store(self, spellings, type=str, /, default=None, description=""):
        """
        register a typed destination and return it; read the result from sink.value.
        """
        sink = Sink(type, default)
        self.add_option(spellings, sink, description)
        return sink

    def _fault(self, exception, message, /, **options):
        hint = "run '%s --help' to see all available options" % self._prog if "help" in self._registry else None
        return exception(
            message,
            prog=self._prog,
            colorful=self._colorful,
            fancy=self._fancy,
            **({"hint": hint} | options),
        )

    def _dispatch_long(self, token, index):
        """
        handle "--name" / "--name=value"; return (outcome, pending).
        """
        name, delimiter, value = token[len(LONG_LEAD):].partition(VALUE_DELIMITER)
        log.debug("token %d: long option %r", index, name)

        if (option := self._registry.resolve_long(name)) is None:
            raise self._fault(
                UnknownOptionError,
                "unknown option %r at %s position" % (LONG_LEAD + name, ordinal(index)),
                title="unknown option",
                code=FaultCode.UNKNOWN_OPTION,
                input=name,
                index=index,
            )

        if not option.takes_parameter:
            # an inline value on a switch is ignored
            return option.action(), None
        if delimiter:
            return option.action(value), None
        log.debug("token %d: %r waits for its parameter", index, name)
        return None, (LONG_LEAD + name, option)

    def _dispatch_short(self, token, index):
        """
        walk a bundle of short spellings; return (outcome, pending).
        """
        for position in range(1, len(token)):
            char = token[position]
            log.debug("token %d: short option %r", index, char)

            if (option := self._registry.resolve_short(char)) is None:
                raise self._fault(
                    UnknownOptionError,
                    "unknown option %r at %s position" % (OPTION_LEAD + char, ordinal(index)),
                    title="unknown option",
                    code=FaultCode.UNKNOWN_OPTION,
                    input=char,
                    index=index,
                )

            if option.takes_parameter:
                if rest := token[position + 1:]:
                    return option.action(rest), None
                log.debug("token %d: %r waits for its parameter", index, char)
                return None, (OPTION_LEAD + char, option)

            if isinstance(outcome := option.action(), EarlyExit):
                return outcome, None
        return None, None

    def parse(self, tokens, /):
        """
        classify tokens once, left to right, and return the positional ones.

        parameters
        - tokens: Iterable[str]
          raw command-line tokens without the program name.

        returns
        - list[str]: tokens that were neither options nor option parameters, in order.
        - EarlyExit: when an action asked to stop (e.g. the built-in help).

        raises
        - UnknownOptionError: an option spelling is not registered.
        - UnexpectedOptionError: an option follows one still waiting for its parameter.
        - MissingParameterError: the tokens end while an option waits for its parameter.
        - whatever an action raises (e.g. ConversionError from a Sink), unchanged.
        """
        if isinstance(tokens, str) or not isinstance(tokens, Iterable):
            raise TypeError("parse() argument must be an iterable of strings")
        tokens = deque(tokens)
        for token in tokens:
            if not isinstance(token, str):
                raise TypeError("parse() argument must be an iterable of strings")

        unparsed = []
        pending = None
        index = 0

        while tokens:
            token = tokens.popleft()
            index += 1
            log.debug("token %d/%d: %r", index, index + len(tokens), token)

            if token == TERMINATOR and pending is None:
                log.debug("token %d: terminator, %d positional(s) follow", index, len(tokens))
                unparsed.extend(tokens)
                break

            if token.startswith(OPTION_LEAD) and len(token) > 1:
                if pending is not None:
                    raise self._fault(
                        UnexpectedOptionError,
                        "option %r at %s position follows %r which expects a parameter" % (
                            token, ordinal(index), pending[0]
                        ),
                        title="unexpected option",
                        code=FaultCode.UNEXPECTED_OPTION,
                        hint="pass a value right after %r (or use %s=<value>)" % (pending[0], pending[0]),
                        input=token,
                        index=index,
                        spelling=pending[0],
                    )
                if token[1] == OPTION_LEAD and len(token) > 2:
                    outcome, pending = self._dispatch_long(token, index)
                else:
                    outcome, pending = self._dispatch_short(token, index)
            elif pending is not None:
                log.debug("token %d: parameter of %r", index, pending[0])
                (_, option), pending = pending, None
                outcome = option.action(token)
            else:
                unparsed.append(token)
                continue

            if isinstance(outcome, EarlyExit):
                log.debug("token %d: early exit requested by %r", index, outcome.option)
                return outcome

        if pending is not None:
            raise self._fault(
                MissingParameterError,
                "option %r at %s position expects a parameter" % (pending[0], ordinal(index)),
                title="missing parameter",
                code=FaultCode.MISSING_PARAMETER,
                hint="add a value after %r (for example: %s <value>)" % (pending[0], pending[0]),
                input=pending[0],
                index=index,
            )

        return unparsed

    def parse_argv(self, argv=Unset, /, offset=1):
        """
        parse an argv-shaped sequence, skipping the first 'offset' slots (program name).

        argv defaults to sys.argv.
        """
        argv = coalesce(argv, sys.argv)
        if not isinstance(offset, int) or offset < 0:
            raise ValueError("parse_argv() offset must be a non-negative integer")
        return self.parse(list(argv)[offset:])

    def parse_argv_inplace(self, argv, /):
        """
        parse argv and compact it down to the program name plus the positionals.

        returns argv itself, or the EarlyExit (argv left untouched).
        """
        if not isinstance(argv, list):
            raise TypeError("parse_argv_inplace() argument must be a list")
        if isinstance(result := self.parse_argv(argv), EarlyExit):
            return result
        argv[1:] = result
        return argv

    def format_usage(self, *, width=Unset):
        return format_usage(self, width=width)

    def print_usage(self, file=Unset):
        print_usage(self, file=file)

    def __repr__(self):
        return "parser(prog=%r, registry=%r)" % (self._prog, self._registry)


__all__ = (
    "Parser",
)
