r"""
Optline option values, action variants and the typed parameter sink.

Overview
- Actions (exactly one per Option, fixed at registration)
  • NoArg: wraps a zero-argument callback (a switch such as --verbose).
  • WithArg: wraps a one-string-argument callback (a parameter-taking option such as --file).
  Both are callable and forward to the wrapped callback; whatever the callback returns
  is handed back to the dispatcher (an EarlyExit stops parsing).

- Option
  • description + action. Created by the registry, immutable afterwards. The Option
    does not know which spellings point to it.

- Sink
  • Typed destination adapter: converts the raw parameter with a converter and keeps
    the last value. Conversion failures surface as ConversionError.

- Introspection & representation
  • OptionType metaclass provides stable __repr__/__rich_repr__ and exposes the fields
    listed in __introspectable__ as read-only properties.

Example
    >>> verbose = NoArg(lambda: print("!!"))
    >>> dub = Sink(float)
    >>> WithArg(dub)("3.5"); dub.value
    3.5

Public API
- Classes: Option, NoArg, WithArg, Sink
"""
import builtins
import functools
import operator
import re

from .faults import ConversionError, FaultCode
from .utils import *

# command-line spelling of options
OPTION_LEAD = "-"
LONG_LEAD = OPTION_LEAD * 2
TERMINATOR = "--"
VALUE_DELIMITER = "="


class OptionType(type):
    """
    Metaclass that turns option values into introspectable, read-only records.

    Responsibilities
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.
    - Provide stable, readable __repr__/__rich_repr__ implementations.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - option(description='Show this help message.', action=no-arg(...))
            """
            return "%s(%s)" % (
                type(self).__typename__,
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            )
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


class NoArg(metaclass=OptionType):
    """
    Action variant invoked with no input.
    """

    __introspectable__ = ("callback",)

    def __init__(self, callback, /):
        if not callable(callback):
            raise TypeError(f"{type(self).__typename__} callback must be callable")
        self._callback = callback

    def __call__(self):
        return self._callback()


class WithArg(metaclass=OptionType):
    """
    Action variant invoked with one string input (the option parameter).

    The payload is forwarded untouched; converting it is the callback's job (see Sink).
    """

    __introspectable__ = ("callback",)

    def __init__(self, callback, /):
        if not callable(callback):
            raise TypeError(f"{type(self).__typename__} callback must be callable")
        self._callback = callback

    def __call__(self, param, /):
        return self._callback(param)


class Option(metaclass=OptionType):
    """
    A registered action identity: description plus exactly one action variant.

    Options are built by the registry; hosts only read them back (lookups and
    iteration). Both fields are read-only.
    """

    __introspectable__ = ("description", "action")

    def __init__(self, action, /, description=""):
        if not isinstance(action, NoArg | WithArg):
            raise TypeError(f"{type(self).__typename__} action must be a no-arg or a with-arg action")
        if not isinstance(description, str):
            raise TypeError(f"{type(self).__typename__} description must be a string")
        self._action = action
        self._description = description

    @property
    def takes_parameter(self):
        """
        True when the option consumes a parameter (WithArg action).
        """
        return isinstance(self._action, WithArg)


class Sink(metaclass=OptionType):
    """
    Typed parameter destination.

    Calling a sink with the raw parameter converts it through 'type' and stores the
    result in 'value'. Any ValueError/TypeError raised by the converter is re-raised
    as ConversionError (chained), so the parse call fails with a typed fault.

    Parameters
    - type: Callable[[str], T]
      Converter applied to the raw string (str by default).
    - default: T | None
      Value exposed until the first successful conversion.
    """

    __introspectable__ = ("type", "value")

    def __init__(self, type=str, /, default=None):
        if not callable(type):
            raise TypeError(f"{builtins.type(self).__typename__} 'type' must be callable")
        self._type = type
        self._value = default

    def __call__(self, param, /):
        try:
            self._value = self._type(param)
        except (TypeError, ValueError) as exception:
            name = getattr(self._type, "__name__", repr(self._type))
            raise ConversionError(
                "failed to parse parameter %r as %s" % (param, name),
                title="unconvertible parameter",
                code=FaultCode.UNCONVERTIBLE_PARAMETER,
                hint="pass a value that %s() accepts" % name,
                input=param,
            ) from exception


__all__ = (
    # Classes (values and actions)
    "Option",
    "NoArg",
    "WithArg",

    # Collaborators
    "Sink",

    # Constants
    "OPTION_LEAD",
    "LONG_LEAD",
    "TERMINATOR",
    "VALUE_DELIMITER",
)

# Remove the internal metaclass from the module namespace to avoid accidental
# exposure in docs, autocompletion, or star-imports. Not part of the public API.
del OptionType
