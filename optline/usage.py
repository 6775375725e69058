"""
Optline usage rendering (rich-based).

Layout
    Usage: prog [options]
      -h, --help                 Show this help message.
          --up                   Round a value up.
      -d, --down                 Round a value down.

- Options appear in registration order.
- Two-space indent plus "-s," when the option has a short alias, five spaces otherwise,
  then " --<canonical>".
- Descriptions start at column 30 (on the next line when the names overflow it) and
  wrap at the given width (80 by default).

Palette keys
- usage-label, program-name, options-label, short-name, long-name, description
- panel-title

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- When the parser is not colorful, styling is suppressed.
"""
import sys
from collections import defaultdict

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from .options import OPTION_LEAD, LONG_LEAD
from .utils import Unset, coalesce

COLUMN_WRAP = 80
COLUMN_DESC = 30


def _palette(parser):
    styles = defaultdict(str, {
        "usage-label": "bold #00E6FF",  # CYAN → signature info color
        "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
        "options-label": "bold #36C5F0",  # SKY-BLUE → softer than cyan
        "short-name": "bold #22C55E",  # GREEN for short aliases
        "long-name": "bold #00E6FF",  # CYAN for long names
        "description": "#9CA3AF",  # Muted gray
        "panel-title": "bold #FF4D94",  # Magenta branding
    } | getattr(sys.modules["__main__"], "__styles__", {}))

    def styler(style):
        return styles[style] if parser.colorful else ""

    return styler


def format_usage(parser, *, width=Unset):
    """
    build the usage text for a parser as a rich Text.

    parameters
    - parser: Parser (anything exposing prog, colorful and an iterable registry of entries)
    - width: int
      wrap column for descriptions (80 by default).
    """
    width = coalesce(width, COLUMN_WRAP)
    if not isinstance(width, int) or width <= COLUMN_DESC:
        raise ValueError("format_usage() width must be an integer greater than %d" % COLUMN_DESC)

    styler = _palette(parser)
    console = Console(width=width)

    usage = Text()
    usage.append("Usage", styler("usage-label")).append(": ")
    usage.append(parser.prog, styler("program-name"))
    usage.append(" ").append("[options]", styler("options-label"))

    for entry in parser.registry:
        line = Text()
        if entry.short:
            line.append("  ").append(OPTION_LEAD + entry.short, styler("short-name")).append(",")
        else:
            line.append("     ")
        line.append(" ").append(LONG_LEAD + entry.name, styler("long-name"))

        if description := entry.option.description:
            # hanging indent: description column, or a fresh line when the names overflow it
            if len(line) + 1 > COLUMN_DESC:
                line.append("\n").append(" " * COLUMN_DESC)
            else:
                line.append(" " * (COLUMN_DESC - len(line)))
            wrapped = Text(description, styler("description")).wrap(console, width - COLUMN_DESC)
            for segment in wrapped:
                segment.rstrip()
            try:
                line.append(wrapped.pop(0))
            except IndexError:
                pass
            for segment in wrapped:
                line.append("\n").append(" " * COLUMN_DESC).append(segment)

        usage.append("\n").append(line)

    return usage


def print_usage(parser, file=Unset):
    """
    print the usage text with a rich Console (stdout unless 'file' is given).

    fancy parsers get their usage inside a titled panel.
    """
    styler = _palette(parser)
    renderable = format_usage(parser)
    if parser.fancy:
        renderable = Panel(
            renderable,
            title=Text.assemble("[", " ", f"{parser.prog} HELP".upper(), " ", "]", style=styler("panel-title")),
            title_align="left",
        )
    Console(file=coalesce(file, None), no_color=not parser.colorful).print(renderable)


__all__ = (
    "format_usage",
    "print_usage",
    "COLUMN_WRAP",
    "COLUMN_DESC",
)
