"""
Command line interface.

    dynamizer [<option>...] <file|folder>...

Converted bindings are written to files; the dynamic loader code goes to
standard output (or --loader-output). Progress and problems are logged to
standard error.
"""

import argparse
import logging
import sys
import warnings
from dataclasses import replace
from typing import List, Optional, Tuple

from dynamizer import __version__
from dynamizer.backends import save_loader_file, write_loader_code
from dynamizer.config import ConfigError, ConvertOptions, DynamizerConfig
from dynamizer.converter import convert_paths
from dynamizer.serialization import load_config_file, report_to_json, report_to_yaml


logger = logging.getLogger("dynamizer")

PROG = "dynamizer"
VERSION_TEXT = f"Binding Dynamizer {__version__}"
DESCRIPTION = (
    "Converts D language static bindings into BindBC compatible dynamic ones.\n"
    "Outputs dynamic loader code to standard output."
)
EPILOG = (
    "search prefix examples: 'FT_' for FreeType, 'gl' for OpenGL, "
    "'hb_' for HarfBuzz, 'SDL_' for SDL bindings"
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument("inputs", nargs="*", metavar="file|folder", help="Binding files or folders to convert")
    parser.add_argument("--recursive", "-r", action="store_true",
                        help="Convert files in folders recursively")
    parser.add_argument("--output-dir", "-o", metavar="directory",
                        help="Write converted bindings to this directory, keeping the relative structure of folders")
    parser.add_argument("--search-prefix", "-s", metavar="prefix",
                        help="Only functions starting with this prefix are converted (default: 'x_')")
    parser.add_argument("--static-version-string", "-v", metavar="version_string",
                        help="Identifier used in version blocks (default: 'BindX_Static')")
    parser.add_argument("--output-postfix", "-p", metavar="postfix",
                        help="Appended to the names of converted files (default: '-converted')")
    parser.add_argument("--config", "-c", metavar="file",
                        help="YAML or JSON file with default settings")
    parser.add_argument("--loader-output", "-l", metavar="file",
                        help="Write the loader code to this file instead of standard output")
    parser.add_argument("--report", metavar="file",
                        help="Write a conversion report (.json, otherwise YAML)")
    parser.add_argument("--verbose", action="store_true", help="Log every step")
    parser.add_argument("--help", "-?", action="help", help="Show this help text")
    parser.add_argument("--version", action="version", version=VERSION_TEXT, help="Show version info")
    return parser


def _merge_settings(args: argparse.Namespace) -> Tuple[DynamizerConfig, ConvertOptions]:
    config, options = DynamizerConfig(), ConvertOptions()
    if args.config:
        config, options = load_config_file(args.config)

    if args.search_prefix is not None:
        config = config.with_search_prefix(args.search_prefix)
    if args.static_version_string is not None:
        config = config.with_static_version_string(args.static_version_string)
    if args.recursive:
        options = replace(options, recursive=True)
    if args.output_dir is not None:
        options = options.with_output_dir(args.output_dir)
    if args.output_postfix is not None:
        options = options.with_output_postfix(args.output_postfix)
    return config, options


def resolve_settings(args: argparse.Namespace) -> Tuple[DynamizerConfig, ConvertOptions]:
    """
    Merge defaults, the configuration file and command line options.

    Illegal values, from the file or the command line, are logged and
    ignored; the previous value stays.

    Raises:
        ConfigError: If the configuration file is malformed
        FileNotFoundError: If the configuration file doesn't exist
    """
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        config, options = _merge_settings(args)
    for warning in caught:
        logger.warning("%s", warning.message)
    return config, options


def _write_report(report, path: str) -> None:
    text = report_to_json(report) if path.lower().endswith(".json") else report_to_yaml(report)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    if not args.inputs:
        logger.error('No input. Run "%s --help" for help.', PROG)
        return 1

    try:
        config, options = resolve_settings(args)
    except (ConfigError, OSError) as e:
        logger.error("Cannot load configuration: %s", e)
        return 1

    try:
        report = convert_paths(args.inputs, config, options)
    except OSError as e:
        logger.error("Conversion failed: %s", e)
        return 1

    logger.info(
        "Converted %d file(s): %d function(s), %d module(s)",
        len(report.records),
        report.function_count,
        report.module_count,
    )

    if args.loader_output:
        save_loader_file(report.loader_entries, args.loader_output)
    else:
        write_loader_code(report.loader_entries, sys.stdout)

    if args.report:
        _write_report(report, args.report)

    return 1 if report.skipped else 0


if __name__ == "__main__":
    sys.exit(main())
