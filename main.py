import sys

from rich.pretty import pprint

from pennant import *

__prog__ = "zig build-exe"

spec = table(
    Flag.boolean("--help"),
    Flag.option("--color", ("auto", "off", "on")),

    Flag.single("--cache-dir"),
    Flag.option("--emit", ("asm", "bin", "llvm-ir")),
    Flag.single("--name"),
    Flag.single("--output"),
    Flag.many("--pkg-begin", 2),
    Flag.boolean("--pkg-end"),
    Flag.boolean("--release-fast"),
    Flag.boolean("--release-safe"),
    Flag.boolean("--static"),
    Flag.boolean("--strip"),
    Flag.single("--target-arch"),
    Flag.single("--target-os"),
    Flag.boolean("--verbose-tokenize"),
    Flag.boolean("--verbose-ast"),
    Flag.boolean("--verbose-link"),
    Flag.single("-isystem"),
    Flag.single("-mllvm"),

    Flag.single("--library"),
    Flag.single("--library-path"),
    Flag.boolean("-rdynamic"),
    Flag.single("-rpath"),
    unique=True,
)


if __name__ == '__main__':
    try:
        arguments = parse(spec, sys.argv[1:])
    except ParseError as fault:
        report(fault, file=sys.stderr)
        sys.exit(1)
    pprint(arguments)
