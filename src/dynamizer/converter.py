"""
File converter (Layer 3: Files and Folders -> Converted Files).

Reads each input, runs the transform engine with a single matcher and
writes the converted text next to the input or under an output folder.
Loader entries of all documents are aggregated in processing order.

Output naming:
    <dir>/<stem><postfix><ext>        e.g. freetype.d -> freetype-converted.d

For files found inside a folder input, the path relative to that folder
is kept below the output folder.
"""

import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from dynamizer.config import ConvertOptions, DynamizerConfig
from dynamizer.model import ConversionRecord, ConversionReport, TransformResult
from dynamizer.patterns import Matcher, compile_matcher
from dynamizer.transform import transform_text


logger = logging.getLogger(__name__)


def output_path_for(source: str, options: ConvertOptions, base_dir: Optional[str] = None) -> str:
    """
    Compute the destination of a converted file.

    Args:
        source: Input file path
        options: Supplies output_dir and output_postfix
        base_dir: Folder input the file was found in (None for file inputs)

    Returns:
        Destination file path
    """
    stem, ext = os.path.splitext(os.path.basename(source))
    file_name = f"{stem}{options.output_postfix}{ext}"

    if options.output_dir is None:
        out_dir = os.path.dirname(source) or "."
    elif base_dir is None:
        out_dir = options.output_dir
    else:
        relative_dir = os.path.relpath(os.path.dirname(os.path.abspath(source)), os.path.abspath(base_dir))
        out_dir = os.path.normpath(os.path.join(options.output_dir, relative_dir))

    return os.path.join(out_dir, file_name)


def find_sources(folder: str, options: ConvertOptions) -> List[str]:
    """List files matching options.file_glob in folder, sorted for stable order."""
    root = Path(folder)
    found = root.rglob(options.file_glob) if options.recursive else root.glob(options.file_glob)
    return sorted(str(p) for p in found if p.is_file())


def convert_file(
    source: str,
    destination: str,
    matcher: Matcher,
) -> Tuple[ConversionRecord, TransformResult]:
    """
    Convert one file and write the result.

    Raises:
        OSError: If the source can't be read or the destination written
        UnicodeDecodeError: If the source is not valid UTF-8
    """
    # newline="" on both ends keeps the line endings of the source
    with open(source, "r", encoding="utf-8", newline="") as f:
        code = f.read()

    result = transform_text(code, matcher.config, matcher)

    out_dir = os.path.dirname(destination)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    with open(destination, "w", encoding="utf-8", newline="") as f:
        f.write(result.text)

    record = ConversionRecord(
        source=source,
        destination=destination,
        function_count=result.function_count,
        module_count=result.module_count,
    )
    return record, result


def convert_paths(
    inputs: Iterable[str],
    config: Optional[DynamizerConfig] = None,
    options: Optional[ConvertOptions] = None,
) -> ConversionReport:
    """
    Convert every file and folder input, in the order given.

    Inputs that are neither a file nor a folder, and files that are not
    valid UTF-8, are logged and skipped.

    Args:
        inputs: File or folder paths
        config: Transform configuration
        options: File layer options

    Returns:
        ConversionReport with one record per converted file
    """
    if options is None:
        options = ConvertOptions()
    matcher = compile_matcher(config)
    report = ConversionReport()

    for input_path in inputs:
        if os.path.isfile(input_path):
            jobs = [(input_path, output_path_for(input_path, options))]
        elif os.path.isdir(input_path):
            jobs = [
                (source, output_path_for(source, options, base_dir=input_path))
                for source in find_sources(input_path, options)
            ]
            if not jobs:
                logger.warning("No %s files in %s", options.file_glob, input_path)
        else:
            logger.error("Input not found: %s", input_path)
            report.skipped.append(input_path)
            continue

        for source, destination in jobs:
            logger.info("Converting %s -> %s", source, destination)
            try:
                record, result = convert_file(source, destination, matcher)
            except UnicodeDecodeError as e:
                logger.error("Cannot decode %s as UTF-8: %s", source, e)
                report.skipped.append(source)
                continue
            logger.debug(
                "Converted %s: %d function(s), %d module(s)",
                source,
                record.function_count,
                record.module_count,
            )
            report.add(record, result)

    return report


__all__ = ["output_path_for", "find_sources", "convert_file", "convert_paths"]
