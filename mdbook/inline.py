"""
# mdbook: inline.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Inline rendering of the text within a line.

Inline syntax:
````
\«character»        «character» literally, for characters in ESCAPABLE_CHARACTERS
"«content»"         <span class="quote">"«content»"</span>
`«content»`         <span class="code">«content»</span>
**«content»**       <b>«content»</b>
*«content»*         <i>«content»</i>
````
Contents are emitted verbatim (spans do not nest) and ambient text is not HTML-escaped.
An unterminated span runs to the end of the line but is closed nonetheless.
"""

from typing import Optional

from mdbook.constants import ESCAPABLE_CHARACTERS
from mdbook.scanners import scan_to_character, scan_to_string
from mdbook.translations import Translator, create_error


class InlineRenderer:
    """
    Object rendering inline syntax, after substituting translation keys.
    """
    _translator: 'Translator'

    def __init__(self, translator: Optional['Translator'] = None):
        if translator is None:
            translator = Translator()
        self._translator = translator

    @property
    def translator(self) -> 'Translator':
        return self._translator

    def render(self, text: str) -> str:
        return InlineRenderer.render_markup(self._translator.apply(text))

    @staticmethod
    def render_markup(text: str) -> str:
        """
        Render inline syntax in already-translated text.
        """
        output = []
        index = 0
        length = len(text)

        while index < length:
            character = text[index]

            if character == '\\':
                index += 1
                if index >= length:
                    break

                escaped_character = text[index]
                if escaped_character in ESCAPABLE_CHARACTERS:
                    output.append(escaped_character)
                else:
                    output.append(create_error(f'\\{escaped_character}'))

            elif character == '"':
                content, index = scan_to_character(text, index + 1, '"')
                output.append(f'<span class="quote">"{content}"</span>')

            elif character == '`':
                content, index = scan_to_character(text, index + 1, '`')
                output.append(f'<span class="code">{content}</span>')

            elif character == '*':
                if index + 1 >= length:
                    output.append(character)
                elif text[index + 1] == '*':
                    content, index = scan_to_string(text, index + 2, '**')
                    output.append(f'<b>{content}</b>')
                else:
                    content, index = scan_to_character(text, index + 1, '*')
                    output.append(f'<i>{content}</i>')

            else:
                output.append(character)

            index += 1

        return ''.join(output)
