"""
# mdbook: cli.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Command-line interface.
"""

import argparse
import os
import sys
import time
from typing import Optional

from mdbook._version import __version__
from mdbook.constants import COMMAND_LINE_ERROR_EXIT_CODE, GENERIC_ERROR_EXIT_CODE, REALTIME_POLL_INTERVAL_SECONDS
from mdbook.core import book_to_html, default_output_file_name, list_document_files, resolve_input
from mdbook.exceptions import InputPathException, TranslationLoadException, UnrecognisedLanguageException
from mdbook.translations import TranslationCatalogue, Translator, load_translations

DESCRIPTION = '''
    Compile a directory of markdown documents (or a single one) into one HTML book.
'''
INPUT_HELP = '''
    input directory (all `*.md` files therein) or markdown file to compile
'''
OUTPUT_HELP = '''
    HTML file to write (default: the input name with extension `.html`)
'''
STYLE_HELP = '''
    CSS file to embed, if any (comments and redundant whitespace are stripped)
'''
TRANSLATIONS_HELP = '''
    CSV file of translations, with header `key,«LANGUAGE_CODE»,[...]`
'''
LANGUAGE_HELP = '''
    code of the language to translate to (requires --translations)
'''
TITLE_HELP = '''
    document title (default: the input name)
'''
REALTIME_MODE_HELP = '''
    keep running, recompiling on any change to the input or style
'''
VERBOSE_MODE_HELP = '''
    run in verbose mode (prints every document compiled)
'''


def print_error(message: str):
    print(f'error: {message}', file=sys.stderr)


def parse_command_line_arguments(arguments: Optional[list[str]] = None) -> argparse.Namespace:
    argument_parser = argparse.ArgumentParser(description=DESCRIPTION)
    argument_parser.add_argument(
        '-v', '--version',
        action='version',
        version=f'{argument_parser.prog} version {__version__}',
    )
    argument_parser.add_argument(
        '-i', '--input',
        dest='input_option',
        help=INPUT_HELP,
        metavar='path',
    )
    argument_parser.add_argument(
        '-o', '--output',
        dest='output_file_name',
        help=OUTPUT_HELP,
        metavar='file.html',
    )
    argument_parser.add_argument(
        '-s', '--style',
        dest='style_file_name',
        help=STYLE_HELP,
        metavar='file.css',
    )
    argument_parser.add_argument(
        '-t', '--translations',
        dest='translations_file_name',
        help=TRANSLATIONS_HELP,
        metavar='file.csv',
    )
    argument_parser.add_argument(
        '-l', '--language',
        dest='language_code',
        help=LANGUAGE_HELP,
        metavar='code',
    )
    argument_parser.add_argument(
        '--title',
        dest='title',
        help=TITLE_HELP,
    )
    argument_parser.add_argument(
        '-r', '--realtime',
        dest='realtime_mode_enabled',
        action='store_true',
        help=REALTIME_MODE_HELP,
    )
    argument_parser.add_argument(
        '-x', '--verbose',
        dest='verbose_mode_enabled',
        action='store_true',
        help=VERBOSE_MODE_HELP,
    )
    argument_parser.add_argument(
        'input_argument',
        help=INPUT_HELP,
        metavar='path',
        nargs='?',
    )

    return argument_parser.parse_args(arguments)


def extract_title(input_path: str) -> str:
    """
    Extract the default title from an input path, being its base name without extension.
    """
    base_name = os.path.basename(os.path.normpath(input_path))

    return os.path.splitext(base_name)[0]


def read_style(style_file_name: Optional[str]) -> Optional[str]:
    if style_file_name is None:
        return None

    with open(style_file_name, 'r', encoding='utf-8') as style_file:
        return style_file.read()


def collect_watched_file_names(directory: str, pattern: str, *other_file_names: Optional[str]) -> list[str]:
    watched_file_names = list_document_files(directory, pattern)
    watched_file_names.extend(
        file_name
        for file_name in other_file_names
        if file_name is not None
    )

    return watched_file_names


def compute_modification_snapshot(file_names: list[str]) -> dict[str, Optional[float]]:
    snapshot: dict[str, Optional[float]] = {}
    for file_name in file_names:
        try:
            snapshot[file_name] = os.stat(file_name).st_mtime
        except FileNotFoundError:
            snapshot[file_name] = None

    return snapshot


def generate_html_file(directory: str, pattern: str, output_file_name: str, title: str,
                       translator: 'Translator', style_file_name: Optional[str], language_code: Optional[str],
                       verbose_mode_enabled: bool, realtime_mode_enabled: bool = False):
    if verbose_mode_enabled:
        for document_file_name in list_document_files(directory, pattern):
            print(f'info: compiling `{document_file_name}`')

    try:
        css = read_style(style_file_name)
    except FileNotFoundError:
        if not realtime_mode_enabled:
            print_error(f'style file `{style_file_name}` not found')
            sys.exit(COMMAND_LINE_ERROR_EXIT_CODE)
        print(f'warning: style file `{style_file_name}` not found; skipped', file=sys.stderr)
        css = None

    if not translator.is_active:
        language_code = None

    html = book_to_html(directory, pattern, title, translator, css, language_code)

    try:
        with open(output_file_name, 'w', encoding='utf-8') as html_file:
            html_file.write(html)
        print(f'success: wrote to `{output_file_name}`')
    except IOError:
        print_error(f'cannot write to `{output_file_name}`')
        sys.exit(GENERIC_ERROR_EXIT_CODE)


def main(arguments: Optional[list[str]] = None):
    parsed_arguments = parse_command_line_arguments(arguments)
    input_option = parsed_arguments.input_option
    input_argument = parsed_arguments.input_argument
    style_file_name = parsed_arguments.style_file_name
    translations_file_name = parsed_arguments.translations_file_name
    language_code = parsed_arguments.language_code
    realtime_mode_enabled = parsed_arguments.realtime_mode_enabled
    verbose_mode_enabled = parsed_arguments.verbose_mode_enabled

    if input_option is not None and input_argument is not None:
        print_error('option -i (or --input) cannot be used with positional argument')
        sys.exit(COMMAND_LINE_ERROR_EXIT_CODE)

    input_path = input_option if input_option is not None else input_argument
    if input_path is None or input_path.strip() == '':
        print_error('empty input')
        sys.exit(COMMAND_LINE_ERROR_EXIT_CODE)

    try:
        directory, pattern = resolve_input(input_path)
    except InputPathException as input_path_exception:
        print_error(str(input_path_exception))
        sys.exit(COMMAND_LINE_ERROR_EXIT_CODE)

    if style_file_name is not None and not os.path.isfile(style_file_name):
        print_error(f'invalid style, path `{style_file_name}` not found')
        sys.exit(COMMAND_LINE_ERROR_EXIT_CODE)

    if language_code is not None and translations_file_name is None:
        print_error('option -l (or --language) requires option -t (or --translations)')
        sys.exit(COMMAND_LINE_ERROR_EXIT_CODE)

    if translations_file_name is not None:
        try:
            translation_catalogue = load_translations(translations_file_name)
        except TranslationLoadException as translation_load_exception:
            print_error(translation_load_exception.message)
            sys.exit(GENERIC_ERROR_EXIT_CODE)
    else:
        translation_catalogue = TranslationCatalogue()

    try:
        translator = translation_catalogue.select(language_code)
    except UnrecognisedLanguageException as unrecognised_language_exception:
        print_error(str(unrecognised_language_exception))
        sys.exit(COMMAND_LINE_ERROR_EXIT_CODE)

    output_file_name = parsed_arguments.output_file_name
    if output_file_name is None:
        output_file_name = default_output_file_name(input_path)

    title = parsed_arguments.title
    if title is None:
        title = extract_title(input_path)

    generate_html_file(directory, pattern, output_file_name, title,
                       translator, style_file_name, language_code, verbose_mode_enabled, realtime_mode_enabled)

    if not realtime_mode_enabled:
        return

    watched_file_names = collect_watched_file_names(directory, pattern, style_file_name)
    snapshot = compute_modification_snapshot(watched_file_names)
    print('info: watching for changes (press Ctrl+C to stop)')
    try:
        while True:
            time.sleep(REALTIME_POLL_INTERVAL_SECONDS)
            watched_file_names = collect_watched_file_names(directory, pattern, style_file_name)
            new_snapshot = compute_modification_snapshot(watched_file_names)
            if new_snapshot == snapshot:
                continue

            snapshot = new_snapshot
            generate_html_file(directory, pattern, output_file_name, title,
                               translator, style_file_name, language_code, verbose_mode_enabled, realtime_mode_enabled)
    except KeyboardInterrupt:
        print('info: stopped watching')


if __name__ == '__main__':
    main()
