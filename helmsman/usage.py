"""
Helmsman usage renderer.

Two render modes, both producing a single rich Text that the caller prints once
to a stderr-bound console:

- listing mode (render_listing): the program's usage line, an optional
  description, and every registered command with its short help;
- detail mode (render_command): one command's usage line followed by its
  "Arguments:" table and its long help.

Columns are aligned on display width (rich.cells.cell_len), so wide characters
in names or flags do not break the layout. Nothing is wrapped; long help text is
left to the terminal.
"""
import os.path
import sys

from rich.cells import cell_len
from rich.text import Text

GAP = 3
LISTING_MARGIN = 4
DETAIL_MARGIN = 3


def columnize(rows, /, margin=DETAIL_MARGIN, gap=GAP):
    """
    Align (left, right) pairs into two columns.

    Every left entry is padded to the widest left entry plus `gap` spaces and
    prefixed by `margin` spaces; the right entry is appended unmodified.
    """
    rows = list(rows)
    width = max((cell_len(left) for left, _ in rows), default=0)
    text = Text()
    for left, right in rows:
        padding = " " * (width - cell_len(left) + gap)
        text.append(" " * margin + left + padding + right + "\n")
    return text


def program_name(name, /):
    """Return `name` when non-empty, else the base name of sys.argv[0]; never cached."""
    if name:
        return name
    return os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else ""


def render_flag(option, /):
    """Render one option as "-v=false", "--output=\\"\\"" or "--count=3"."""
    return f"{option.flag}={option.default_text()}"


def render_listing(registry, /):
    """Listing mode: every registered command with its one-line help."""
    program = program_name(registry.name)
    text = Text(f"usage: {program} <command> [arguments]\n\n")

    if names := registry.names():
        if registry.descr:
            text.append(f"{registry.descr}\n\n")
        text.append("Available commands:\n")
        text.append(columnize(
            [(name, registry.lookup(name).short) for name in names],
            margin=LISTING_MARGIN,
        ))
        text.append(f"\nUse '{program} help <command>' for more information on a specific command.\n\n")

    return text


def render_command(registry, command, /):
    """Detail mode: usage line, option table, and long help of one command."""
    text = Text(f"usage: {program_name(registry.name)} {command.usage}\n\n")
    text.append("Arguments:\n")
    text.append(columnize(
        [(render_flag(option), option.usage) for option in command.options],
        margin=DETAIL_MARGIN,
    ))
    if command.long:
        text.append(f"\n{command.long}\n")
    return text


__all__ = (
    "columnize",
    "program_name",
    "render_flag",
    "render_listing",
    "render_command",
)
