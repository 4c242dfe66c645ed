#!/usr/bin/env python3
"""
Reader for peripheral list files.

Format:
    <header_lines lines of licence / copyright text, always skipped>
    name name ...
    # comment

Names are whitespace delimited and may share a line. A token starting
with '#' is dropped; only that token, the words after it on the same
line are still read as names.
"""

from typing import Iterator, TextIO

from .errors import ChainIOError, ConfigFormatError

# Lines of licence header at the top of every peripheral list
HEADER_LINES = 8

COMMENT_PREFIX = "#"


def read_peripheral_names(stream: TextIO, header_lines: int = HEADER_LINES) -> Iterator[str]:
    """
    Yield peripheral names from a peripheral list, in file order.

    Args:
        stream: Open text stream positioned at the start of the file
        header_lines: Number of leading lines to skip

    Raises:
        ConfigFormatError: If the file has fewer than header_lines lines
        ChainIOError: If reading the stream fails
    """
    try:
        for _ in range(header_lines):
            if not stream.readline():
                raise ConfigFormatError(
                    f"Not enough ROM strings: expected {header_lines} header lines")

        for line in stream:
            for token in line.split():
                if token.startswith(COMMENT_PREFIX):
                    continue
                yield token
    except (OSError, UnicodeDecodeError) as e:
        raise ChainIOError(f"Read error: {e}") from e
