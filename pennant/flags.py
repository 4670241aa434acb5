r"""
Pennant flag specifications.

Overview
- Flag: one recognized command-line flag, described by
  • name: the canonical token including its marker (e.g., "--verbose", "-isystem").
  • arity: how many trailing tokens it consumes (0 = presence only, 1 = single value, N = fixed count).
  • allowed: optional closed set of strings every consumed token must belong to.

- Constructors
  • Flag.boolean(name)          presence-only flag (arity 0)
  • Flag.single(name)           one trailing value (arity 1)
  • Flag.many(name, n)          n trailing values
  • Flag.option(name, allowed)  one trailing value restricted to an allowed set
  • Flag(name, arity, allowed)  general form

- Tables
  • A flag table is any ordered iterable of Flag; the parser reads it and never mutates it.
  • table(*flags, unique=False) builds a tuple and can reject duplicate names.
    By default duplicates are legal: lookup is first-match, later entries are shadowed.

Metadata (sanitized on construction)
- name must match r"--?[^\W\d_](-?[^\W_]+)*" (unicode letters allowed, no underscores).
- arity must be a non-negative integer (bool is rejected).
- allowed, when given, must be a non-empty collection of strings:
  • a Set is kept as a frozenset,
  • any other iterable is normalized to a tuple and cannot contain duplicates,
  • it is meaningless (and rejected) on a zero-arity flag.

Quick example:
    >>> from pennant import Flag, table
    >>> spec = table(
    ...     Flag.boolean("--help"),
    ...     Flag.single("--build-file"),
    ...     Flag.many("--pkg-begin", 2),
    ...     Flag.option("--color", ("auto", "off", "on")),
    ... )
"""
import functools
import operator
import re
from collections.abc import Iterable, Set

from .utils import *

NAME_PATTERN = re.compile(r"--?[^\W\d_](-?[^\W_]+)*")


class FlagType(type):
    """
    Metaclass that turns flag specs into introspectable, read-only descriptors.

    Responsibilities
    - Expose the fields listed in __introspectable__ as read-only properties
      backed by "_{field}" attributes (see mirror()).
    - Provide stable __repr__/__rich_repr__ implementations for diagnostics.
    - Derive __typename__ from the class name for messages.
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
                field: mirror(field) for field in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Example
            - flag(name='--color', arity=1, allowed=('auto', 'off', 'on'))
            """
            return "%s(%s)" % (
                type(self).__typename__,
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            )
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for field in type(self).__introspectable__:
                yield field, getattr(self, field)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_name(cls, metadata, /):
    """
    Internal: validate and normalize the flag name.

    Raises
    - TypeError: when the name is not a string.
    - ValueError: when the name is empty after trimming or is not a valid
      shell-style flag token.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} name must be a string")
    elif not (name := name.strip()):
        raise ValueError(f"{cls.__typename__} name cannot be an empty-string")
    elif not NAME_PATTERN.fullmatch(name):
        raise ValueError(f"{cls.__typename__} name {name!r} must be a valid shell-style flag (unicodes are allowed)")
    metadata["name"] = name


def _sanitize_arity(cls, metadata, /):
    """
    Internal: arity must be a plain non-negative integer.
    """
    if not isinstance(arity := metadata["arity"], int) or isinstance(arity, bool):
        raise TypeError(f"{cls.__typename__} 'arity' must be an integer")
    if arity < 0:
        raise ValueError(f"{cls.__typename__} 'arity' must be a non-negative integer")


def _sanitize_allowed(cls, metadata, /):
    """
    Internal: validate and normalize the allowed-value set.

    Behavior
    - Unset stays unrestricted (None once materialized).
    - A Set becomes a frozenset.
    - Any other iterable becomes a tuple, rejecting duplicates to keep help and
      hints stable.
    """
    if (allowed := metadata["allowed"]) is Unset:
        metadata["allowed"] = None
        return

    if isinstance(allowed, str) or not isinstance(allowed, Iterable):
        raise TypeError(f"{cls.__typename__} 'allowed' must be an iterable of strings")

    if isinstance(allowed, Set):
        allowed = frozenset(allowed)
    else:
        sanitized = []
        for value in allowed:
            if value in sanitized:
                raise ValueError(f"{cls.__typename__} 'allowed' cannot contain duplicates")
            sanitized.append(value)
        allowed = tuple(sanitized)

    if not all(isinstance(value, str) for value in allowed):
        raise TypeError(f"{cls.__typename__} 'allowed' values must be strings")
    if not allowed:
        raise ValueError(f"{cls.__typename__} 'allowed' cannot be empty")
    if metadata["arity"] == 0:
        raise ValueError(f"boolean {cls.__typename__} cannot restrict its values")

    metadata["allowed"] = allowed


class Flag(metaclass=FlagType):
    """
    Specification for how one flag is recognized and how many values it consumes.

    Highlights
    - Pure data: constructed once by the caller, read-only afterwards, never
      retained by the parser beyond a call.
    - key is the name without its leading markers ("--cache-dir" → "cache-dir");
      parse results are stored and queried under this key.

    Properties
    - name, arity, allowed (read-only, sanitized), key (derived).
    """

    __introspectable__ = (
        "name",
        "arity",
        "allowed",
    )

    def __new__(cls, name, /, arity=0, allowed=Unset):
        """
        Construct a Flag spec.

        Parameters
        - name: str
          Canonical token, e.g. "--output" or "-rpath".
        - arity: int
          Number of trailing tokens the flag consumes.
        - allowed: Unset | Iterable[str]
          Optional allowed-value set checked against every consumed token.
        """
        metadata = {
            "name": name,
            "arity": arity,
            "allowed": allowed,
        }
        _sanitize_name(cls, metadata)
        _sanitize_arity(cls, metadata)
        _sanitize_allowed(cls, metadata)

        self = super().__new__(cls)
        for field, object in metadata.items():
            setattr(self, "_" + field, object)
        return self

    def __init_subclass__(cls, **options):
        raise TypeError("type 'Flag' is not an acceptable base type")

    @property
    def key(self):
        return self._name.lstrip("-")

    def allows(self, value, /):
        """
        True when value satisfies the allowed set (always, for unrestricted flags).
        """
        return self._allowed is None or value in self._allowed

    @classmethod
    def boolean(cls, name, /):
        """
        e.g. --help
        """
        return cls(name, 0)

    @classmethod
    def single(cls, name, /):
        """
        e.g. --name value
        """
        return cls(name, 1)

    @classmethod
    def many(cls, name, count, /):
        """
        e.g. --pkg-begin name path
        """
        return cls(name, count)

    @classmethod
    def option(cls, name, allowed, /):
        """
        e.g. --color auto (single value restricted to the allowed set)
        """
        return cls(name, 1, allowed)


def table(*flags, unique=False):
    """
    Collect flags into an ordered, immutable flag table.

    parameters
    - flags: Flag
      entries in lookup order.
    - unique: bool (keyword-only)
      reject tables that list the same name twice. When False (default),
      duplicates are kept and the parser resolves them first-match.

    returns
    - tuple[Flag, ...]

    raises
    - TypeError: when an entry is not a Flag.
    - ValueError: on a duplicate name while unique is True.
    """
    names = set()
    for flag in flags:
        if not isinstance(flag, Flag):
            raise TypeError("table() entries must be flags, not %s" % type(flag).__name__)
        if unique and flag.name in names:
            raise ValueError("table() cannot contain duplicate flag %r" % flag.name)
        names.add(flag.name)
    return flags


__all__ = (
    "Flag",
    "table",
)

# Remove the internal metaclass from the module namespace; not part of the public API.
del FlagType
