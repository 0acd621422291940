"""
# mdbook: scanners.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Escape-aware delimiter scanning.

Both scanners start at the index just after an opening delimiter
and stop at the first closing delimiter not immediately preceded by a backslash.
The cursor is returned alongside the content rather than mutated in place:
`position` is the index of the last character of the closing delimiter,
so the caller resumes at `position + 1`.
If the closing delimiter is never found, the content is the remainder of the text
and `position` is `len(text)`.
"""

from typing import NamedTuple


class ScanResult(NamedTuple):
    content: str
    position: int


def is_escaped(text: str, index: int) -> bool:
    return index > 0 and text[index - 1] == '\\'


def scan_to_character(text: str, start: int, delimiter: str) -> ScanResult:
    """
    Scan for a single-character closing delimiter.
    """
    for index in range(start, len(text)):
        if text[index] == delimiter and not is_escaped(text, index):
            return ScanResult(text[start:index], index)

    return ScanResult(text[start:], len(text))


def scan_to_string(text: str, start: int, delimiter: str) -> ScanResult:
    """
    Scan for a multi-character closing delimiter.

    An escaped occurrence is skipped in its entirety,
    so that scanning resumes after the whole occurrence.
    """
    search_index = start
    while True:
        index = text.find(delimiter, search_index)
        if index < 0:
            return ScanResult(text[start:], len(text))

        if is_escaped(text, index):
            search_index = index + len(delimiter)
            continue

        return ScanResult(text[start:index], index + len(delimiter) - 1)
