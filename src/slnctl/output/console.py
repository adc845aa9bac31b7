"""Rich console plumbing for slnctl output.

Renderers draw into an in-memory console and hand back the text, so the CLI
decides where it goes (stdout or stderr). Rich drops colour codes on its own
when the real stream is not a terminal.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

CONSOLE_WIDTH = 120

SLN_THEME = Theme(
    {
        "sln.ok": "bold green",
        "sln.error": "bold red",
        "sln.op": "bold cyan",
        "sln.key": "dim",
        "sln.path": "bold blue",
        "sln.folder": "magenta",
        "sln.skipped": "yellow",
        "sln.hint": "italic",
    }
)


def create_console(*, width: int = CONSOLE_WIDTH) -> Console:
    """A themed console writing into a fresh StringIO buffer."""
    return Console(file=StringIO(), theme=SLN_THEME, highlight=False, width=width)


def get_output(console: Console) -> str:
    """Everything printed to a console made by :func:`create_console`."""
    buffer = console.file
    if not isinstance(buffer, StringIO):
        msg = "console is not backed by a StringIO buffer"
        raise TypeError(msg)
    return buffer.getvalue()
