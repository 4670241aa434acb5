"""
Pennant parsing engine: split an argument vector into flags and positionals.

What this module provides
- parse(spec, args): scan the tokens once, left to right, and return an
  Arguments result or raise one of the ParseError kinds.
- Arguments: the parsed result, queried with present()/single()/many()/get().

Scan rules
- A flag token is a non-empty string starting with "-". Anything else (the
  empty string included) is a positional and is kept verbatim, in order.
- A flag token is looked up by exact name; the first table entry with that
  name wins, later duplicates are shadowed.
- A flag of arity k consumes the next k tokens as they are, even when they
  start with "-". Each consumed token is checked against the allowed set.
- A flag seen twice keeps its last value.
- There is no end-of-options marker: callers split off "--" and pass-through
  arguments before calling parse().

Errors are terminal: the first failure raises and nothing is returned. The
engine never prints; see pennant.faults.report() for caller-side rendering.

Quick example
    >>> from pennant import Flag, parse
    >>> arguments = parse(
    ...     [Flag.boolean("--help"), Flag.single("--build-file"), Flag.many("--pkg-begin", 2)],
    ...     ["--build-file", "b.cfg", "x", "--pkg-begin", "pkgname", "pkgpath", "y"],
    ... )
    >>> arguments.single("build-file"), arguments.many("pkg-begin"), arguments.positionals
    ('b.cfg', ('pkgname', 'pkgpath'), ('x', 'y'))
"""
import difflib
import shlex
from collections import deque
from collections.abc import Iterable

from .faults import *
from .flags import Flag
from .utils import *
from .values import *


def _normalize(name, /):
    """
    query key for a flag name: leading markers are optional ("--output" == "output").
    """
    if not isinstance(name, str):
        raise TypeError("flag name must be a string")
    return name.lstrip("-")


class Arguments:
    """
    Result of one parse() call.

    Properties
    - flags: Mapping[str, FlagValue]
      read-only view keyed by flag key (name without leading markers); only
      flags actually seen in the input have an entry.
    - positionals: tuple[str, ...]
      non-flag tokens in input order.

    Accessors accept names with or without leading markers.
    """

    flags = mirror("flags")
    positionals = mirror("positionals")

    def __init__(self, flags=Unset, positionals=Unset, /):
        self._flags = dict(coalesce(flags, {}))
        self._positionals = list(coalesce(positionals, ()))

    def get(self, name, /):
        """
        the resolved value of a flag, Absent() when it was not supplied.
        """
        return self._flags.get(_normalize(name), Absent())

    # e.g. --help
    def present(self, name, /):
        return _normalize(name) in self._flags

    # e.g. --name value
    def single(self, name, /):
        """
        the value of a one-value flag, None when absent.

        raises TypeError when the flag resolved to another variant, which means
        the query does not match the flag table.
        """
        match self.get(name):
            case Absent():
                return None
            case Single(value):
                return value
            case other:
                raise TypeError("flag %r resolved to %r, not to a single value" % (name, other))

    # e.g. --names value1 value2 value3
    def many(self, name, /):
        """
        the values of an N-value flag, None when absent.

        raises TypeError when the flag resolved to another variant.
        """
        match self.get(name):
            case Absent():
                return None
            case Many(values):
                return values
            case other:
                raise TypeError("flag %r resolved to %r, not to many values" % (name, other))

    def __eq__(self, other):
        if not isinstance(other, Arguments):
            return NotImplemented
        return self._flags == other._flags and self._positionals == other._positionals

    __hash__ = None

    def __repr__(self):
        return "arguments(flags=%r, positionals=%r)" % (self._flags, tuple(self._positionals))

    def __rich_repr__(self):
        yield "flags", dict(self._flags)
        yield "positionals", tuple(self._positionals)


def _switches(spec, /):
    """
    build the per-call name → flag lookup (first entry for a name wins).
    """
    if isinstance(spec, str) or not isinstance(spec, Iterable):
        raise TypeError("parse() spec must be an iterable of flags")

    switches = {}
    for flag in spec:
        if not isinstance(flag, Flag):
            raise TypeError("parse() spec entries must be flags, not %s" % type(flag).__name__)
        switches.setdefault(flag.name, flag)
    return switches


def _tokens(args, /):
    """
    materialize the argument vector; a single string is split shell-style.
    """
    if isinstance(args, str):
        args = shlex.split(args)
    elif not isinstance(args, Iterable):
        raise TypeError("parse() args must be a string or an iterable of strings")

    tokens = deque()
    for token in args:
        if not isinstance(token, str):
            raise TypeError("parse() args must contain only strings, not %s" % type(token).__name__)
        tokens.append(token)
    return tokens


def _example(flag, /):
    return " ".join([flag.name] + ["<value>"] * flag.arity)


def _enumerate(allowed, /):
    ordered = sorted(allowed) if isinstance(allowed, frozenset) else allowed
    return ", ".join(map(repr, ordered))


def _consume(flag, tokens, position, /):
    """
    consume the trailing values of a matched flag.

    parameters
    - flag: Flag
      the matched spec.
    - tokens: deque[str]
      the remaining tokens, right after the flag token.
    - position: int
      1-based position of the flag token, used in fault messages.

    returns
    - list[str]: exactly flag.arity values.

    raises
    - MissingFlagArgumentsError: the stream ran out before arity values were read.
    - ArgumentNotInAllowedSetError: a value failed the allowed set (checked as
      each value is read, so the first offending value is reported).
    """
    values = []
    for offset in range(1, flag.arity + 1):
        if not tokens:
            raise MissingFlagArgumentsError(
                "flag %r at %s position expects %d %s but only %d %s left" % (
                    flag.name,
                    ordinal(position),
                    flag.arity,
                    pluralize("value", flag.arity),
                    len(values),
                    "was" if len(values) == 1 else "were",
                ),
                title="missing flag arguments",
                code=FaultCode.MISSING_FLAG_ARGUMENTS,
                hint="pass %d %s after the flag (for example: %s)" % (
                    flag.arity, pluralize("value", flag.arity), _example(flag)
                ),
                token=flag.name,
                index=position,
                flag=flag,
                required=flag.arity,
                received=tuple(values),
            )

        value = tokens.popleft()
        if not flag.allows(value):
            raise ArgumentNotInAllowedSetError(
                "value %r at %s position is not allowed for flag %r" % (
                    value, ordinal(position + offset), flag.name
                ),
                title="argument not in allowed set",
                code=FaultCode.ARGUMENT_NOT_IN_ALLOWED_SET,
                hint="allowed values for %s are %s" % (flag.name, _enumerate(flag.allowed)),
                token=value,
                index=position + offset,
                flag=flag,
                value=value,
                allowed=flag.allowed,
            )
        values.append(value)
    return values


def parse(spec, args, /):
    """
    separate recognized flags from positionals and validate them.

    parameters
    - spec: Iterable[Flag]
      the flag table, read in order; not retained after the call.
    - args: Iterable[str] | str
      the argument vector without program name and subcommand. a string is
      split with shlex first.

    returns
    - Arguments: fresh per call, owned by the caller.

    raises
    - UnknownFlagError: a flag token matched no entry of the table.
    - MissingFlagArgumentsError: not enough tokens for the flag's arity.
    - ArgumentNotInAllowedSetError: a consumed value is outside the allowed set.
    - TypeError: the spec or args are not of the expected shape.
    """
    switches = _switches(spec)
    tokens = _tokens(args)

    flags = {}
    positionals = []
    position = 1

    while tokens:
        token = tokens.popleft()

        if not token.startswith("-"):
            positionals.append(token)
            position += 1
            continue

        try:
            flag = switches[token]
        except KeyError:
            suggestions = difflib.get_close_matches(token, switches.keys(), 5)
            try:
                hint = "did you mean %r?" % suggestions[0]
            except IndexError:
                hint = "remove it or check the flags this command accepts"
            raise UnknownFlagError(
                "unknown flag %r at %s position" % (token, ordinal(position)),
                title="unknown flag",
                code=FaultCode.UNKNOWN_FLAG,
                hint=hint,
                token=token,
                index=position,
                suggestions=tuple(suggestions),
            ) from None

        # last occurrence wins
        flags[flag.key] = FlagValue.resolve(flag.arity, _consume(flag, tokens, position))
        position += 1 + flag.arity

    return Arguments(flags, positionals)


__all__ = (
    "Arguments",
    "parse",
)
