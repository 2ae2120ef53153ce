"""
Configuration objects for the dynamizer.

Two groups of settings:
    - DynamizerConfig: consumed by the pattern compiler and transform engine
    - ConvertOptions: consumed by the file converter only

Both are frozen. Derived values are created with dataclasses.replace(),
never by mutating an existing instance.
"""

import os
import re
import warnings
from dataclasses import dataclass, replace
from typing import Optional


DEFAULT_SEARCH_PREFIX = "x_"
DEFAULT_STATIC_VERSION_STRING = "BindX_Static"
DEFAULT_INDENT = "    "
DEFAULT_FUNCTION_POINTER_PREFIX = "fp_"

DEFAULT_OUTPUT_POSTFIX = "-converted"
DEFAULT_FILE_GLOB = "*.d"

# D accepts any Unicode letter in identifiers
IDENTIFIER_PATTERN = r"[^\W\d]\w*"
_IDENTIFIER_RE = re.compile(IDENTIFIER_PATTERN)


class DynamizerError(Exception):
    """Base class for dynamizer errors."""
    pass


class ConfigError(DynamizerError):
    """Raised when a configuration source cannot be used."""
    pass


def is_identifier(value: str) -> bool:
    """
    Return True if value is a legal D identifier.

    The first character must be a letter or underscore. Numeric characters
    such as superscript two or roman numerals are word characters to re,
    but not letters.
    """
    if not value or _IDENTIFIER_RE.fullmatch(value) is None:
        return False
    return value[0] == "_" or value[0].isalpha()


def is_legal_output_dir(value: str) -> bool:
    return "\0" not in value


def is_legal_output_postfix(value: str) -> bool:
    """A postfix is part of a file name: no NUL and no path separators."""
    return not any(c in value for c in ("\0", "/", os.sep))


@dataclass(frozen=True)
class DynamizerConfig:
    """
    Settings of a single conversion run.

    Properties:
        search_prefix:
            Only functions whose name starts with this literal text are
            converted. Examples: "FT_" (FreeType), "gl" (OpenGL),
            "SDL_" (SDL).

        static_version_string:
            Identifier used inside version() blocks.
            Example: "BindFT_Static"

        indent:
            Indentation unit of the generated blocks.

        function_pointer_prefix:
            Prepended to the function name to name its pointer alias.
    """

    search_prefix: str = DEFAULT_SEARCH_PREFIX
    static_version_string: str = DEFAULT_STATIC_VERSION_STRING
    indent: str = DEFAULT_INDENT
    function_pointer_prefix: str = DEFAULT_FUNCTION_POINTER_PREFIX

    def with_search_prefix(self, prefix: str) -> "DynamizerConfig":
        return replace(self, search_prefix=prefix)

    def with_static_version_string(self, value: str) -> "DynamizerConfig":
        """
        Return a copy using value as the version identifier.

        An illegal identifier is reported with a UserWarning and the
        current configuration is returned unchanged.
        """
        if not is_identifier(value):
            warnings.warn(
                f"Static version string is not a legal identifier: {value!r}",
                UserWarning,
            )
            return self
        return replace(self, static_version_string=value)


@dataclass(frozen=True)
class ConvertOptions:
    """
    File layer settings.

    Properties:
        recursive: Convert files in sub-folders of folder inputs
        output_dir: Destination folder (None writes next to each input)
        output_postfix: Appended to the file name stem of converted files
        file_glob: Files picked from folder inputs
    """

    recursive: bool = False
    output_dir: Optional[str] = None
    output_postfix: str = DEFAULT_OUTPUT_POSTFIX
    file_glob: str = DEFAULT_FILE_GLOB

    def with_output_dir(self, value: str) -> "ConvertOptions":
        """Return a copy writing to value; illegal paths warn and keep the current one."""
        if not is_legal_output_dir(value):
            warnings.warn(f"Output directory contains illegal characters: {value!r}", UserWarning)
            return self
        return replace(self, output_dir=value)

    def with_output_postfix(self, value: str) -> "ConvertOptions":
        """Return a copy using value as postfix; illegal postfixes warn and keep the current one."""
        if not is_legal_output_postfix(value):
            warnings.warn(f"Output postfix contains illegal characters: {value!r}", UserWarning)
            return self
        return replace(self, output_postfix=value)


__all__ = [
    "DynamizerConfig",
    "ConvertOptions",
    "DynamizerError",
    "ConfigError",
    "is_identifier",
    "is_legal_output_dir",
    "is_legal_output_postfix",
    "IDENTIFIER_PATTERN",
]
