"""
Pennant parse faults and their rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every parse failure.
- ParseError: base type carrying a message plus structured options, and able to
  render itself with rich in a friendly, lowercased, actionable way.
- UnknownFlagError / MissingFlagArgumentsError / ArgumentNotInAllowedSetError:
  the complete taxonomy raised by pennant.parser.parse().
- report(): caller-side helper printing a fault to an explicit writer.

UX goals
- Position-first messages: every message names the ordinal position of the
  offending token (“at third position”).
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.
- Lowercased tone with readable styling (configurable via __styles__ in __main__).

Integration
- The parser only raises; it never prints. Callers catch ParseError, inspect
  `options` (token, index, flag, allowed, ...) or hand the fault to report(),
  then exit with a non-zero status.
"""
import os.path
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import *


class FaultCode(IntEnum):
    """
    canonical fault codes for parse failures (stable identifiers).

    numbering follows the Seralix Fault Codes convention used by the switch
    domain (1111x/1112x), leaving room for future additions.

    normalize() allows host remapping to custom labels while keeping code-stability.
    """
    UNKNOWN_FLAG                = 11112
    MISSING_FLAG_ARGUMENTS      = 11122
    ARGUMENT_NOT_IN_ALLOWED_SET = 11124

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _program():
    main = __import__("__main__")
    if hasattr(main, "__prog__"):
        return main.__prog__
    if sys.argv and sys.argv[0]:
        return os.path.basename(sys.argv[0])
    return "pennant"


class ParseError(Exception):
    """
    base of every parse failure.

    attributes
    - message: str
      position-first, lowercased description of what went wrong.
    - options: MappingProxyType
      structured context; always contains code, title, hint, token and index,
      plus flag/required/received/value/allowed where they apply.
    """

    def __init__(self, message, /, **options):
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    @property
    def token(self):
        return self.options.get("token")

    @property
    def index(self):
        return self.options.get("index")

    @property
    def flag(self):
        return self.options.get("flag")

    def __str__(self):
        return self.message

    def render(self, *, colorful=True, fancy=False, prog=Unset, width=Unset):
        """
        build a rich renderable for this fault.

        layout
        - header: [ prog — code | title ]
        - body:   the message
        - hint:   → hint
        with fancy=True the body and hint are wrapped in a Panel titled by the header.
        """
        main = __import__("__main__")

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

        header = Text.assemble(
            "[ ",
            text(coalesce(prog, _program()), styler("prog-name")),
            " — ",
            text(self.options["code"].normalize(), styler("code")),
            " | ",
            text(self.options["title"].title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))
        hint = Text.assemble(text(" → ", styler("hint-arrow")), text(self.options["hint"], styler("hint")))

        if fancy:
            return Panel(Group(message, hint), title=header, title_align="left", width=coalesce(width))

        return Group(header, message, hint)

    def __rich__(self):
        return self.render()


class UnknownFlagError(ParseError):
    """a token looked like a flag but matched no entry of the flag table."""


class MissingFlagArgumentsError(ParseError):
    """fewer tokens remained than the matched flag's arity requires."""


class ArgumentNotInAllowedSetError(ParseError):
    """a consumed value is not a member of the flag's allowed set."""


def report(fault, /, *, file=Unset, colorful=True, fancy=False, prog=Unset):
    """
    print a parse fault to an explicit writer.

    parameters
    - fault: ParseError
    - file: Unset | TextIO
      destination stream; a stderr console is used when omitted. nothing is
      shared between calls, so independent callers never contend for a handle.
    - colorful: bool
      emit styles; when False the fault renders as plain text.
    - fancy: bool
      wrap the body in a rich Panel.
    - prog: Unset | str
      program name for the header (defaults to __main__.__prog__, then argv[0]).

    notes
    - this is a caller-layer helper: the parser itself never prints.
    """
    if not isinstance(fault, ParseError):
        raise TypeError("report() argument must be a parse error")

    if file is Unset:
        console = Console(stderr=True, no_color=not colorful)
    else:
        console = Console(file=file, no_color=not colorful)

    width = console.width - 4 * fancy
    console.print(fault.render(colorful=colorful, fancy=fancy, prog=prog, width=width))


__all__ = (
    "FaultCode",
    "ParseError",
    "UnknownFlagError",
    "MissingFlagArgumentsError",
    "ArgumentNotInAllowedSetError",
    "report",
)
