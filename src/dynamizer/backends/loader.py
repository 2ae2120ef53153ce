"""
Dynamic loader code backend.

Turns the loader entries collected by the transform engine into the text
pasted into a BindBC loader function:

    import foo.bar;
    lib.bindSymbol(cast(void**)&x_init, "x_init");
    lib.bindSymbol(cast(void**)&x_quit, "x_quit");

Entries are written in the order given, one per line. Module entries
carry their own leading blank line.
"""

import sys
from typing import Iterable, Optional, TextIO


def render_loader_code(entries: Iterable[str]) -> str:
    """
    Join loader entries into loader code.

    Args:
        entries: Loader entries in processing order

    Returns:
        One entry per line, no trailing newline
    """
    return "\n".join(entries)


def write_loader_code(entries: Iterable[str], stream: Optional[TextIO] = None) -> None:
    """Write loader entries to stream (stdout by default), one per line."""
    if stream is None:
        stream = sys.stdout
    for entry in entries:
        stream.write(entry + "\n")


def save_loader_file(entries: Iterable[str], filename: str) -> None:
    """
    Render loader code and save it to a file.

    Args:
        entries: Loader entries in processing order
        filename: Output file path
    """
    code = render_loader_code(entries)
    with open(filename, "w", encoding="utf-8") as f:
        f.write(code + "\n")


__all__ = ["render_loader_code", "save_loader_file", "write_loader_code"]
