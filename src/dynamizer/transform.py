"""
Transform Engine (Layer 2: Recognized Spans -> Dynamic Bindings).

Rewrites every matched function declaration into a version/else block:

    version(BindX_Static)
        int x_init (int a, int b);
    else
    {
        private alias fp_x_init = int function (int a, int b);
        __gshared fp_x_init x_init;
    }

and collects one loader entry per function (and per module declaration)
in document order. Comments and unmatched text are copied unchanged.

ARCHITECTURAL RULE:
    No shared state. Loader entries are returned, never appended to a
    module level list. Callers aggregate them across documents.
"""

from typing import Iterable, List, Optional, Tuple

from dynamizer.config import DynamizerConfig
from dynamizer.model import DeclarationMatch, MatchKind, TransformResult
from dynamizer.patterns import Matcher, compile_matcher


LOADER_FORMAT = 'lib.bindSymbol(cast(void**)&{0}, "{0}");'
MODULE_LOADER_FORMAT = "\nimport {0};"


def render_loader_entry(name: str) -> str:
    """Runtime symbol binding statement for one function."""
    return LOADER_FORMAT.format(name)


def render_module_entry(module: str) -> str:
    """Loader code import for one module declaration."""
    return MODULE_LOADER_FORMAT.format(module)


def _reindent(text: str, indent: str) -> str:
    return text.replace("\n", "\n" + indent)


def render_function_block(match: DeclarationMatch, config: DynamizerConfig) -> str:
    """
    Render the static/dynamic block replacing one function declaration.

    Every newline inside the original declaration and inside the dynamic
    part gets one extra indent unit.

    Args:
        match: FUNCTION match
        config: Supplies version string, indent and pointer prefix

    Returns:
        Replacement text
    """
    if match.kind is not MatchKind.FUNCTION:
        raise ValueError(f"Expected a function match, got {match.kind.value}")

    indent = config.indent
    pointer_type = f"{config.function_pointer_prefix}{match.name}"

    static_part = (
        f"version({config.static_version_string})\n"
        f"{indent}{_reindent(match.text, indent)}\n"
    )
    dynamic_part = (
        f"\nprivate alias {pointer_type} = {match.return_type} function {match.parameters};"
        f"\n__gshared {pointer_type} {match.name};"
    )
    return f"{static_part}else\n{{{_reindent(dynamic_part, indent)}\n}}"


def transform_text(
    text: str,
    config: Optional[DynamizerConfig] = None,
    matcher: Optional[Matcher] = None,
) -> TransformResult:
    """
    Convert one document.

    Args:
        text: Full source text
        config: Configuration (defaults to matcher.config, then DynamizerConfig())
        matcher: Precompiled matcher; compiled from config when omitted

    Returns:
        TransformResult with the rewritten text and its loader entries
    """
    if config is None:
        config = matcher.config if matcher is not None else DynamizerConfig()
    if matcher is None:
        matcher = compile_matcher(config)

    pieces: List[str] = []
    entries: List[str] = []
    functions = 0
    modules = 0

    for item in matcher.scan(text):
        if isinstance(item, DeclarationMatch) and item.kind is MatchKind.FUNCTION:
            pieces.append(render_function_block(item, config))
            entries.append(render_loader_entry(item.name))
            functions += 1
            continue

        if isinstance(item, DeclarationMatch) and item.kind is MatchKind.MODULE:
            entries.append(render_module_entry(item.module))
            modules += 1

        pieces.append(item.text)

    return TransformResult(
        text="".join(pieces),
        loader_entries=tuple(entries),
        function_count=functions,
        module_count=modules,
    )


def transform_documents(
    texts: Iterable[str],
    config: Optional[DynamizerConfig] = None,
) -> Tuple[List[TransformResult], List[str]]:
    """
    Convert several documents with one matcher.

    Returns:
        (per-document results, all loader entries in processing order)
    """
    matcher = compile_matcher(config)
    results: List[TransformResult] = []
    entries: List[str] = []
    for text in texts:
        result = transform_text(text, matcher.config, matcher)
        results.append(result)
        entries.extend(result.loader_entries)
    return results, entries


__all__ = [
    "LOADER_FORMAT",
    "MODULE_LOADER_FORMAT",
    "render_loader_entry",
    "render_module_entry",
    "render_function_block",
    "transform_text",
    "transform_documents",
]
