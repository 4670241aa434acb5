"""
Resolved flag values (closed sum type).

A flag occurrence resolves to exactly one of four variants:

- Absent            the flag was not supplied (never stored in a parse result).
- Present           a zero-arity flag was supplied.
- Single(value)     a one-value flag was supplied.
- Many(values)      an N-value flag (N >= 2) was supplied; values is a tuple of length N.

The set of variants is closed: FlagValue cannot be subclassed outside this
module and every variant is final. Consumers are expected to dispatch with
structural pattern matching:

    match arguments.get("pkg-begin"):
        case Many((name, path)):
            ...
        case Absent():
            ...

Absent and Present carry no payload; calling them returns a per-process
singleton, so identity and equality agree.
"""
import functools
from typing import final

from rich.text import Text


class FlagValue:
    """
    Base of the resolved flag value variants (sealed).
    """
    __slots__ = ()

    def __init_subclass__(cls, **options):
        if cls.__module__ != __name__:
            raise TypeError("type 'FlagValue' is not an acceptable base type")
        super().__init_subclass__(**options)

    @staticmethod
    def resolve(arity, values=(), /):
        """
        Build the variant dictated by a flag arity.

        parameters
        - arity: int
          the arity of the matched flag (0, 1 or N >= 2).
        - values: Sequence[str]
          the consumed tokens; its length must equal the arity.

        returns
        - Present() for arity 0, Single for arity 1, Many for anything larger.
        """
        if not isinstance(arity, int) or isinstance(arity, bool):
            raise TypeError("resolve() arity must be an integer")
        if arity < 0:
            raise ValueError("resolve() arity must be a non-negative integer")
        if len(values := tuple(values)) != arity:
            raise ValueError("resolve() expected %d values, got %d" % (arity, len(values)))

        match arity:
            case 0:
                return Present()
            case 1:
                return Single(values[0])
            case _:
                return Many(values)


@final
class Absent(FlagValue):
    """
    The flag was not supplied.
    """
    __slots__ = ()

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Absent()"

    def __rich__(self):
        return Text(repr(self), style="dim")

    def __reduce__(self):
        return Absent, ()


@final
class Present(FlagValue):
    """
    A zero-arity flag was supplied.
    """
    __slots__ = ()

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __repr__(self):
        return "Present()"

    def __rich__(self):
        return Text(repr(self), style="green")

    def __reduce__(self):
        return Present, ()


@final
class Single(FlagValue):
    """
    A one-value flag was supplied; `value` is the consumed token, verbatim.
    """
    __slots__ = ("_value",)
    __match_args__ = ("value",)

    def __init__(self, value, /):
        if not isinstance(value, str):
            raise TypeError("single flag value must be a string")
        self._value = value

    @property
    def value(self):
        return self._value

    def __eq__(self, other):
        if not isinstance(other, Single):
            return NotImplemented
        return self._value == other._value

    def __hash__(self):
        return hash((Single, self._value))

    def __repr__(self):
        return "Single(%r)" % self._value

    def __rich_repr__(self):
        yield self._value


@final
class Many(FlagValue):
    """
    An N-value flag was supplied; `values` holds the consumed tokens in input order.
    """
    __slots__ = ("_values",)
    __match_args__ = ("values",)

    def __init__(self, values, /):
        if isinstance(values, str):
            raise TypeError("many flag values must be a sequence of strings, not a string")
        values = tuple(values)
        if not all(isinstance(value, str) for value in values):
            raise TypeError("many flag values must be strings")
        self._values = values

    @property
    def values(self):
        return self._values

    def __len__(self):
        return len(self._values)

    def __eq__(self, other):
        if not isinstance(other, Many):
            return NotImplemented
        return self._values == other._values

    def __hash__(self):
        return hash((Many, self._values))

    def __repr__(self):
        return "Many(%r)" % (self._values,)

    def __rich_repr__(self):
        yield self._values


__all__ = (
    "FlagValue",
    "Absent",
    "Present",
    "Single",
    "Many",
)
