"""
# mdbook: translations.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Translation tables and the translator that applies them.

Translations are loaded from a CSV file of the form
````
key,«LANGUAGE_CODE»,[...]
«key»,«text»,[...]
[...]
````
where the first header cell is literally `key` (case-insensitive),
fields may be double-quoted, and lines beginning with `//` are comments.
"""

import csv
import io
import os
from types import MappingProxyType
from typing import Iterator, Mapping, Optional

from mdbook.constants import TRANSLATIONS_COMMENT_TOKEN, TRANSLATIONS_EXTENSION, TRANSLATIONS_KEY_HEADER
from mdbook.exceptions import TranslationLoadException, UnrecognisedLanguageException
from mdbook.utilities import is_word_character


def create_error(token: str) -> str:
    return f'<span class="error">Unexpected character: {token}</span>'


class Translator:
    """
    Object resolving translation keys against (at most) one active translation table.

    Without an active table, `apply(...)` is the identity, `filter_line(...)` keeps every line,
    and `get(...)` yields an error marker.
    """
    _table: Optional[Mapping[str, str]]

    def __init__(self, table: Optional[Mapping[str, str]] = None):
        if table is not None:
            table = MappingProxyType(dict(table))
        self._table = table

    @property
    def table(self) -> Optional[Mapping[str, str]]:
        return self._table

    @property
    def is_active(self) -> bool:
        return self._table is not None

    def get(self, key: str) -> str:
        if self._table is None:
            return create_error(key)

        try:
            return self._table[key]
        except KeyError:
            return create_error(key)

    def apply(self, raw: str) -> str:
        """
        Substitute translation keys in a string.

        A string equal to a key in its entirety is replaced by that key's text.
        Otherwise every occurrence of every key is replaced,
        provided the occurrence is not immediately followed by a word character.
        Note that no such check is made on the character before the occurrence,
        so that `cat` is substituted in `bobcat` but not in `category`.
        """
        table = self._table
        if table is None:
            return raw

        try:
            return table[raw]
        except KeyError:
            pass

        for key, value in table.items():
            if key == '':
                continue

            index = 0
            while True:
                index = raw.find(key, index)
                if index < 0:
                    break

                index_after_match = index + len(key)
                if index_after_match < len(raw) and is_word_character(raw[index_after_match]):
                    index = index_after_match
                    continue

                raw = raw[:index] + value + raw[index_after_match:]
                index += len(value)

        return raw

    def filter_line(self, raw: str) -> tuple[bool, str]:
        """
        Translate a whole line, reporting whether it is to be kept.

        A line is dropped when it translates to nothing,
        which happens when it consists of keys whose text in the active language is empty.
        """
        if self._table is None:
            return True, raw

        text = self.apply(raw)
        keep = text.strip() != ''

        return keep, text


class TranslationCatalogue:
    """
    Object storing the translation table of every language, by upper-case language code.
    """
    _table_from_language: dict[str, Mapping[str, str]]

    def __init__(self, table_from_language: Optional[Mapping[str, Mapping[str, str]]] = None):
        self._table_from_language = {}
        if table_from_language is not None:
            for language_code, table in table_from_language.items():
                normalised_code = TranslationCatalogue.normalise_language_code(language_code)
                self._table_from_language[normalised_code] = MappingProxyType(dict(table))

    @property
    def language_codes(self) -> list[str]:
        return list(self._table_from_language)

    @property
    def is_empty(self) -> bool:
        return len(self._table_from_language) == 0

    def select(self, language_code: Optional[str]) -> 'Translator':
        """
        Build a translator for a language.

        An empty catalogue (no translations loaded) accepts any language, translating nothing.
        """
        if self.is_empty or language_code is None:
            return Translator()

        try:
            table = self._table_from_language[TranslationCatalogue.normalise_language_code(language_code)]
        except KeyError:
            raise UnrecognisedLanguageException(language_code)

        return Translator(table)

    @staticmethod
    def normalise_language_code(language_code: str) -> str:
        return language_code.strip().upper()


def is_comment(line: str) -> bool:
    return line.lstrip().startswith(TRANSLATIONS_COMMENT_TOKEN)


class RecordLines:
    """
    Iterator over the physical lines of CSV text, for feeding to `csv.reader`.

    Comment lines are skipped only where a record begins,
    so that a quoted field may continue onto a line beginning with `//`.
    The caller marks each record boundary by calling `start_record()`.
    """
    _lines: Iterator[str]
    _at_record_start: bool
    _line_number: int
    _record_line_number: int

    def __init__(self, text: str):
        self._lines = iter(io.StringIO(text, newline=''))
        self._at_record_start = True
        self._line_number = 0
        self._record_line_number = 0

    @property
    def record_line_number(self) -> int:
        return self._record_line_number

    def start_record(self):
        self._at_record_start = True

    def __iter__(self) -> 'RecordLines':
        return self

    def __next__(self) -> str:
        line = next(self._lines)
        self._line_number += 1

        if self._at_record_start:
            while is_comment(line):
                line = next(self._lines)
                self._line_number += 1
            self._record_line_number = self._line_number
            self._at_record_start = False

        return line


def parse_translations(text: str, file_name: str = '<string>') -> 'TranslationCatalogue':
    """
    Parse CSV translations into a catalogue.

    Errors report the line on which the offending record begins.
    Raises TranslationLoadException upon the first problem found.
    """
    text = text.removeprefix('\ufeff')

    record_lines = RecordLines(text)
    rows = []
    for row in csv.reader(record_lines):
        if len(row) > 0:
            rows.append((record_lines.record_line_number, row))
        record_lines.start_record()

    if len(rows) == 0:
        raise TranslationLoadException(f'`{file_name}`: could not load the translation headers')

    _, header_cells = rows[0]
    if header_cells[0].strip().lower() != TRANSLATIONS_KEY_HEADER:
        raise TranslationLoadException(f'`{file_name}`: no key found in the first translation header cell')
    if len(header_cells) == 1:
        raise TranslationLoadException(f'`{file_name}`: no languages found in the translation headers')

    language_codes = [
        TranslationCatalogue.normalise_language_code(header_cell)
        for header_cell in header_cells[1:]
    ]
    table_from_language: dict[str, dict[str, str]] = {
        language_code: {}
        for language_code in language_codes
    }

    parsed_keys: set[str] = set()
    for line_number, cells in rows[1:]:
        key = cells[0]
        if key in parsed_keys:
            raise TranslationLoadException(
                f'`{file_name}`: translation on line {line_number} (key `{key}`) is a duplicate, '
                f'that key already exists'
            )
        parsed_keys.add(key)

        if len(cells) > len(header_cells):
            raise TranslationLoadException(
                f'`{file_name}`: translation on line {line_number} (key `{key}`) has {len(cells)} cells '
                f'but only {len(header_cells)} header cells exist'
            )

        for language_code, value in zip(language_codes, cells[1:]):
            table_from_language[language_code][key] = value

    return TranslationCatalogue(table_from_language)


def load_translations(file_name: str) -> 'TranslationCatalogue':
    if os.path.splitext(file_name)[1].lower() != TRANSLATIONS_EXTENSION:
        raise TranslationLoadException(f'`{file_name}`: invalid translation file, expected a .csv file')

    try:
        with open(file_name, 'r', encoding='utf-8-sig', newline='') as translations_file:
            text = translations_file.read()
    except FileNotFoundError as file_not_found_error:
        raise TranslationLoadException(f'`{file_name}`: translation file not found') from file_not_found_error

    return parse_translations(text, file_name)
