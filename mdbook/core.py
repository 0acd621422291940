"""
# mdbook: core.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Core conversion logic.

A book is a document set: the files in one directory matching a file name pattern
(by default `*.md`), taken in directory enumeration order.
The documents are rendered to one HTML fragment, which is then wrapped in an HTML document.
"""

import fnmatch
import glob
import os
import warnings
from typing import Optional

from mdbook.blocks import BlockRenderer
from mdbook.constants import DEFAULT_DOCUMENT_PATTERN, DEFAULT_LANGUAGE, DOCUMENT_EXTENSION, HTML_EXTENSION
from mdbook.exceptions import InputPathException
from mdbook.inline import InlineRenderer
from mdbook.translations import Translator
from mdbook.utilities import escape_html, strip_css


def resolve_input(input_path: str) -> tuple[str, str]:
    """
    Resolve an input path to (directory, file name pattern).

    A file is a document set of one, its name escaped so that it only matches itself;
    a directory is the set of its `*.md` files.
    """
    if os.path.isfile(input_path):
        return os.path.dirname(input_path) or os.curdir, glob.escape(os.path.basename(input_path))

    if os.path.isdir(input_path):
        return input_path, DEFAULT_DOCUMENT_PATTERN

    raise InputPathException(f'invalid input, path `{input_path}` not found')


def default_output_file_name(input_path: str) -> str:
    input_path = os.path.normpath(input_path)
    root, extension = os.path.splitext(input_path)
    if extension == DOCUMENT_EXTENSION:
        input_path = root

    return f'{input_path}{HTML_EXTENSION}'


def list_document_files(directory: str, pattern: str) -> list[str]:
    return [
        os.path.join(directory, file_name)
        for file_name in os.listdir(directory)
        if fnmatch.fnmatch(file_name, pattern) and os.path.isfile(os.path.join(directory, file_name))
    ]


def read_document_set(directory: str, pattern: str) -> list[list[str]]:
    documents = []
    for document_file_name in list_document_files(directory, pattern):
        try:
            with open(document_file_name, 'r', encoding='utf-8-sig', errors='replace') as document_file:
                documents.append(document_file.read().splitlines())
        except FileNotFoundError:
            warnings.warn(f'warning: file `{document_file_name}` vanished before it could be read; skipped')

    return documents


def documents_to_html(documents: list[list[str]], translator: Optional['Translator'] = None) -> str:
    """
    Convert documents (lists of lines) to an HTML fragment.
    """
    block_renderer = BlockRenderer(InlineRenderer(translator))

    return block_renderer.render_documents(documents)


def markdown_to_html(markdown: str, translator: Optional['Translator'] = None) -> str:
    """
    Convert the text of a single document to an HTML fragment.
    """
    return documents_to_html([markdown.splitlines()], translator)


def build_html_document(content: str, title: str, css: Optional[str] = None, language: Optional[str] = None) -> str:
    if language is None:
        language = DEFAULT_LANGUAGE

    if css is None:
        styling = ''
    else:
        styling = f'<style>{strip_css(css)}</style>'

    return ''.join([
        '<!DOCTYPE html>',
        f'<html lang="{escape_html(language.lower())}">',
        '<head>',
        '<meta charset="UTF-8">',
        '<meta name="viewport" content="width=device-width, initial-scale=1">',
        f'<title>{escape_html(title)}</title>',
        styling,
        '</head>',
        '<body>',
        content,
        '</body>',
        '</html>',
    ])


def book_to_html(directory: str, pattern: str, title: str,
                 translator: Optional['Translator'] = None,
                 css: Optional[str] = None, language: Optional[str] = None) -> str:
    """
    Convert a document set to an HTML document.
    """
    documents = read_document_set(directory, pattern)
    content = documents_to_html(documents, translator)

    return build_html_document(content, title, css, language)
