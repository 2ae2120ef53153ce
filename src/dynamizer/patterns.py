"""
Pattern Compiler (Layer 1: Source Text -> Recognized Spans).

Builds one combined matcher from a DynamizerConfig. At each scan position
the alternatives are tried in this order:

    1. Block comment        /* ... */            (spans newlines)
    2. Line comment         // ...               (to end of line)
    3. Module declaration   module a.b.c;
    4. Function declaration <ret> <prefix><suffix> (<params>);

Comments come first so that commented-out or documented declarations are
consumed as comments and never rewritten.

This is pattern matching, not parsing:
    - A parameter list ends at the first ');' after the name.
      Trailing attributes after ')' run on to the next declaration.
    - The return type is whatever precedes the name on the same line,
      leading indentation and closed inline comments included.
"""

import re
from dataclasses import dataclass
from typing import Iterator

from dynamizer.config import DynamizerConfig, IDENTIFIER_PATTERN
from dynamizer.model import DeclarationMatch, LiteralSpan, MatchKind, ScanItem


IDENTIFIER_POSTFIX_PATTERN = r"\w+"

_COMMENT_PATTERN = r"/\*.*?\*/|//[^\n]*"
_MODULE_PATTERN = rf"module\s+(?P<module>{IDENTIFIER_PATTERN}(?:\.{IDENTIFIER_PATTERN})*);"
# The return type may hold closed /* */ comments of its own line but never
# runs into an open comment, so a signature in a trailing comment is left to
# the comment alternatives.
_FUNCTION_PATTERN = (
    r"(?P<return_type>(?:/\*[^\n]*?\*/|(?!/[/*])[^\n])*?) "
    r"(?P<name>{prefix}" + IDENTIFIER_POSTFIX_PATTERN + r") ?"
    r"(?P<parameters>\(.*?\));"
)


def build_pattern(config: DynamizerConfig) -> str:
    """
    Build the combined alternation source for a configuration.

    The search prefix is matched literally.

    Args:
        config: Configuration supplying the search prefix

    Returns:
        Regular expression source string
    """
    function_pattern = _FUNCTION_PATTERN.replace("{prefix}", re.escape(config.search_prefix))
    return "|".join([_COMMENT_PATTERN, _MODULE_PATTERN, function_pattern])


@dataclass(frozen=True)
class Matcher:
    """
    Compiled recognizer for one configuration.

    Immutable. Build it once per run with compile_matcher().
    """

    config: DynamizerConfig
    pattern: "re.Pattern[str]"

    def matches(self, text: str) -> Iterator[DeclarationMatch]:
        """Yield every recognized span of text, leftmost first, non-overlapping."""
        for m in self.pattern.finditer(text):
            yield _to_declaration(m)

    def scan(self, text: str) -> Iterator[ScanItem]:
        """
        Yield literal spans and recognized spans covering all of text.

        Concatenating the .text of every yielded item gives back text.
        """
        pos = 0
        for m in self.pattern.finditer(text):
            if m.start() > pos:
                yield LiteralSpan(text[pos:m.start()])
            yield _to_declaration(m)
            pos = m.end()
        if pos < len(text):
            yield LiteralSpan(text[pos:])


def _to_declaration(m: "re.Match[str]") -> DeclarationMatch:
    if m.group("name") is not None:
        return DeclarationMatch(
            kind=MatchKind.FUNCTION,
            text=m.group(0),
            return_type=m.group("return_type"),
            name=m.group("name"),
            parameters=m.group("parameters"),
        )
    if m.group("module") is not None:
        return DeclarationMatch(kind=MatchKind.MODULE, text=m.group(0), module=m.group("module"))
    return DeclarationMatch(kind=MatchKind.COMMENT, text=m.group(0))


def compile_matcher(config: DynamizerConfig | None = None) -> Matcher:
    """
    Compile the matcher for a configuration.

    Pure function: the same configuration always yields an equivalent
    matcher, and the configuration is not modified.

    Args:
        config: Configuration (defaults to DynamizerConfig())

    Returns:
        Matcher ready to scan documents
    """
    if config is None:
        config = DynamizerConfig()
    # str patterns are Unicode aware and never locale dependent
    pattern = re.compile(build_pattern(config), re.DOTALL)
    return Matcher(config=config, pattern=pattern)


__all__ = ["Matcher", "build_pattern", "compile_matcher"]
