"""
Optline registry: spellings → options.

What this module provides
- Registry: owns every registered Option (an ordered arena) and three spelling tables
  that point into it by index:
  • canonical: first spelling of each registration (long-form key, even when short).
  • alternates: every other multi-character spelling.
  • shorts: every single-character spelling (a one-character canonical name too).
- Entry: the introspection record yielded when iterating a registry.

Registration rules
- "file|in|f" registers one option under three spellings; "file" is canonical.
- Empty spellings ("a||b") fail with EmptyNameError.
- Repeats within a call or collisions with earlier registrations fail with
  DuplicateNameError; the registry is left exactly as it was.

Lookups are pure: resolve_short/resolve_long return the Option or None.
"""
import logging
from typing import NamedTuple

from .faults import EmptyNameError, DuplicateNameError, FaultCode
from .options import Option, NoArg, WithArg, Sink
from .utils import mirror

log = logging.getLogger(__name__)

DIVIDER = "|"


class Entry(NamedTuple):
    """
    one registered option as seen by collaborators (usage rendering, hosts).

    - name: canonical spelling.
    - short: first single-character spelling, or None.
    - spellings: every spelling, in declaration order.
    - option: the stored Option.
    """
    name: str
    short: str | None
    spellings: tuple[str, ...]
    option: Option


class Registry:
    """
    Spelling-to-option mapping with registration-time validation.

    Lifecycle
    - Register everything first, then parse. Nothing enforces the freeze; parsing
      only reads, so a registry may back several parses at once.
    """

    divider = mirror("divider")

    def __init__(self, divider=DIVIDER):
        if not isinstance(divider, str):
            raise TypeError("registry divider must be a string")
        if len(divider) != 1:
            raise ValueError("registry divider must be a single character")
        self._divider = divider
        self._options = []
        self._spellings = []
        self._canonical = {}
        self._alternates = {}
        self._shorts = {}

    def _taken(self, name):
        if name in self._canonical or name in self._alternates:
            return True
        return len(name) == 1 and name in self._shorts

    def register(self, spellings, action, description=""):
        """
        register one option under one or more divider-separated spellings.

        parameters
        - spellings: str
          e.g. "help|h", "down|d", "b|p|q". the first one is canonical.
        - action: NoArg | WithArg | Sink
          a Sink is wrapped into WithArg.
        - description: str
          display text for usage output.

        returns
        - the stored Option.

        raises
        - TypeError on wrong argument types.
        - EmptyNameError / DuplicateNameError (registry unchanged).
        """
        if not isinstance(spellings, str):
            raise TypeError("register() spellings must be a string")
        if isinstance(action, Sink):
            action = WithArg(action)
        if not isinstance(action, NoArg | WithArg):
            raise TypeError("register() action must be a NoArg, a WithArg or a Sink")
        if not isinstance(description, str):
            raise TypeError("register() description must be a string")

        names = []
        for name in spellings.split(self._divider):
            if not name:
                raise EmptyNameError(
                    "option name cannot be empty in %r" % spellings,
                    title="empty option name",
                    code=FaultCode.EMPTY_NAME,
                    hint="remove the extra %r or put a name between dividers" % self._divider,
                    input=spellings,
                )
            if name in names or self._taken(name):
                raise DuplicateNameError(
                    "duplicate option name %r in %r" % (name, spellings),
                    title="duplicate option name",
                    code=FaultCode.DUPLICATE_NAME,
                    hint="each spelling can be registered only once",
                    input=spellings,
                    name=name,
                )
            names.append(name)

        index = len(self._options)
        self._options.append(option := Option(action, description))
        self._spellings.append(tuple(names))

        canonical, *others = names
        self._canonical[canonical] = index
        # one-character canonical names double as short aliases
        if len(canonical) == 1:
            self._shorts[canonical] = index
        for name in others:
            if len(name) == 1:
                self._shorts[name] = index
            else:
                self._alternates[name] = index

        log.debug("registered option %r as %r", names, option)
        return option

    def resolve_short(self, char):
        """
        return the option bound to a one-character spelling, or None.
        """
        try:
            return self._options[self._shorts[char]]
        except KeyError:
            return None

    def resolve_long(self, name):
        """
        return the option bound to a long spelling, or None.

        canonical names win over alternate names.
        """
        try:
            return self._options[self._canonical[name]]
        except KeyError:
            pass
        try:
            return self._options[self._alternates[name]]
        except KeyError:
            return None

    def __iter__(self):
        """
        yield an Entry per option in registration order.
        """
        for names, option in zip(self._spellings, self._options):
            short = next((name for name in names if len(name) == 1), None)
            yield Entry(names[0], short, names, option)

    def __len__(self):
        return len(self._options)

    def __contains__(self, name):
        return isinstance(name, str) and self._taken(name)

    def __repr__(self):
        return "registry(%s)" % ", ".join(map(repr, (entry.name for entry in self)))


__all__ = (
    "Registry",
    "Entry",
    "DIVIDER",
)
