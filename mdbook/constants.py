"""
# mdbook: constants.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Constants.
"""

GENERIC_ERROR_EXIT_CODE = 1
COMMAND_LINE_ERROR_EXIT_CODE = 2
REALTIME_POLL_INTERVAL_SECONDS = 1.0

DEFAULT_DOCUMENT_PATTERN = '*.md'
DEFAULT_LANGUAGE = 'en'
DOCUMENT_EXTENSION = '.md'
HTML_EXTENSION = '.html'

TRANSLATIONS_EXTENSION = '.csv'
TRANSLATIONS_KEY_HEADER = 'key'
TRANSLATIONS_COMMENT_TOKEN = '//'

ESCAPABLE_CHARACTERS = frozenset('"\'{}()[]><`\\')
PAGE_BREAK_HTML = '<p style="page-break-after: always;"></p>'
TABLE_SEPARATOR_MARKER = '---'
RULE_MARKER = '---'
