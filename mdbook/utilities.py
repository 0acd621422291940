"""
# mdbook: utilities.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Common utility functions.
"""

import re


def is_word_character(character: str) -> bool:
    return character.isalnum() or character == '_'


def escape_html(value: str) -> str:
    """
    Escape plain text for element content or a double-quoted attribute value.
    """
    return (
        value
            .replace('&', '&amp;')
            .replace('<', '&lt;')
            .replace('>', '&gt;')
            .replace('"', '&quot;')
    )


def strip_css(css: str) -> str:
    """
    Strip comments and redundant whitespace from a style sheet.

    A comment is `/* ... */`; an unterminated comment swallows the rest of the style sheet.
    A run of whitespace is kept (as a single space) only when it directly follows a word character,
    where it may be separating two words (e.g. `1px solid`).
    """
    css = re.sub(
        pattern=r'/ \* [\s\S]*? (?: \* / | \Z )',
        repl='',
        string=css,
        flags=re.VERBOSE,
    )
    css = re.sub(
        pattern=r'(?P<word_character> \w )? \s+',
        repl=_whitespace_substitute_function,
        string=css,
        flags=re.VERBOSE,
    )

    return css


def _whitespace_substitute_function(match: re.Match) -> str:
    word_character = match.group('word_character')
    if word_character is None:
        return ''

    return f'{word_character} '
