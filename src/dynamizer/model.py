"""
Core data objects of the dynamizer.

Defines:
    - MatchKind / DeclarationMatch (what the scanner recognized)
    - LiteralSpan (text between recognized spans)
    - TransformResult (one converted document)
    - ConversionRecord / ConversionReport (one converter run)

ARCHITECTURAL RULE:
    These objects carry text and counts only.
    They know nothing about regular expressions or files.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union


class MatchKind(Enum):
    """Kinds of spans recognized by the matcher, in priority order."""
    COMMENT = "comment"
    MODULE = "module"
    FUNCTION = "function"


@dataclass(frozen=True)
class LiteralSpan:
    """Input text not covered by any match. Copied through unchanged."""
    text: str


@dataclass(frozen=True)
class DeclarationMatch:
    """
    A recognized span of input.

    Properties:
        kind: COMMENT, MODULE or FUNCTION
        text: Full matched text
        return_type: Captured return type (FUNCTION only)
        name: Full function name, prefix included (FUNCTION only)
        parameters: Parameter list with its parentheses (FUNCTION only)
        module: Dotted module path (MODULE only)
    """

    kind: MatchKind
    text: str
    return_type: Optional[str] = None
    name: Optional[str] = None
    parameters: Optional[str] = None
    module: Optional[str] = None


ScanItem = Union[LiteralSpan, DeclarationMatch]


@dataclass(frozen=True)
class TransformResult:
    """
    Output of the transform engine for one document.

    loader_entries keeps document order and is never deduplicated.
    """

    text: str
    loader_entries: Tuple[str, ...] = ()
    function_count: int = 0
    module_count: int = 0


@dataclass
class ConversionRecord:
    """One converted file."""
    source: str
    destination: str
    function_count: int = 0
    module_count: int = 0


@dataclass
class ConversionReport:
    """
    Result of a converter run over several inputs.

    INVARIANTS:
        - records are in processing order
        - loader_entries is the concatenation of every document's
          entries in that same order
    """

    records: List[ConversionRecord] = field(default_factory=list)
    loader_entries: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    def add(self, record: ConversionRecord, result: TransformResult) -> None:
        self.records.append(record)
        self.loader_entries.extend(result.loader_entries)

    @property
    def function_count(self) -> int:
        return sum(r.function_count for r in self.records)

    @property
    def module_count(self) -> int:
        return sum(r.module_count for r in self.records)


__all__ = [
    "MatchKind",
    "LiteralSpan",
    "DeclarationMatch",
    "ScanItem",
    "TransformResult",
    "ConversionRecord",
    "ConversionReport",
]
