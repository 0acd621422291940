"""
# mdbook: exceptions.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Exception classes.
"""


class TranslationLoadException(Exception):
    _message: str

    def __init__(self, message: str):
        super().__init__(message)
        self._message = message

    @property
    def message(self) -> str:
        return self._message


class UnrecognisedLanguageException(Exception):
    _language_code: str

    def __init__(self, language_code: str):
        super().__init__(f'could not find a language called `{language_code}`')
        self._language_code = language_code

    @property
    def language_code(self) -> str:
        return self._language_code


class InputPathException(Exception):
    pass
