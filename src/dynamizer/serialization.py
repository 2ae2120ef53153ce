"""
Serialization helpers for dynamizer settings and conversion reports.

Provides JSON/YAML round-trip via an intermediate dict representation.
Configuration files use the same flat dict:

    search_prefix: FT_
    static_version_string: BindFT_Static
    recursive: true
    output_postfix: -dynamic
"""
from __future__ import annotations

import json
from dataclasses import fields
from typing import Any, Dict, Tuple

import yaml

from dynamizer.config import DEFAULT_FILE_GLOB, ConfigError, ConvertOptions, DynamizerConfig
from dynamizer.model import ConversionRecord, ConversionReport


_CONFIG_KEYS = tuple(f.name for f in fields(DynamizerConfig))
_OPTION_KEYS = tuple(f.name for f in fields(ConvertOptions))


def config_to_dict(config: DynamizerConfig, options: ConvertOptions | None = None) -> Dict[str, Any]:
    d: Dict[str, Any] = {key: getattr(config, key) for key in _CONFIG_KEYS}
    if options is not None:
        d.update({key: getattr(options, key) for key in _OPTION_KEYS})
    return d


def config_from_dict(d: Dict[str, Any] | None) -> Tuple[DynamizerConfig, ConvertOptions]:
    """
    Build settings from a flat dict. Missing keys keep their defaults.

    An illegal static version string, output directory or output postfix is
    reported with a UserWarning and the default is kept, as on the command
    line.

    Raises:
        ConfigError: Not a mapping, unknown keys or values of the wrong type
    """
    if d is None:
        d = {}
    if not isinstance(d, dict):
        raise ConfigError(f"Configuration must be a mapping, got {type(d).__name__}")

    unknown = sorted(set(d) - set(_CONFIG_KEYS) - set(_OPTION_KEYS))
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {unknown}")

    for key in _CONFIG_KEYS + ("output_postfix", "file_glob"):
        if key in d and not isinstance(d[key], str):
            raise ConfigError(f"{key} must be a string, got {d[key]!r}")
    if d.get("output_dir") is not None and not isinstance(d["output_dir"], str):
        raise ConfigError(f"output_dir must be a string, got {d['output_dir']!r}")
    if "recursive" in d and not isinstance(d["recursive"], bool):
        raise ConfigError(f"recursive must be true or false, got {d['recursive']!r}")

    plain_keys = [key for key in _CONFIG_KEYS if key != "static_version_string"]
    config = DynamizerConfig(**{key: d[key] for key in plain_keys if key in d})
    if "static_version_string" in d:
        config = config.with_static_version_string(d["static_version_string"])

    options = ConvertOptions(
        recursive=d.get("recursive", False),
        file_glob=d.get("file_glob", DEFAULT_FILE_GLOB),
    )
    if d.get("output_dir") is not None:
        options = options.with_output_dir(d["output_dir"])
    if "output_postfix" in d:
        options = options.with_output_postfix(d["output_postfix"])

    return config, options


def config_to_yaml(config: DynamizerConfig, options: ConvertOptions | None = None) -> str:
    return yaml.safe_dump(config_to_dict(config, options), sort_keys=False)


def config_from_yaml(s: str) -> Tuple[DynamizerConfig, ConvertOptions]:
    try:
        d = yaml.safe_load(s)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML configuration: {e}")
    return config_from_dict(d)


def config_to_json(config: DynamizerConfig, options: ConvertOptions | None = None) -> str:
    return json.dumps(config_to_dict(config, options), sort_keys=True)


def config_from_json(s: str) -> Tuple[DynamizerConfig, ConvertOptions]:
    try:
        d = json.loads(s)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON configuration: {e}")
    return config_from_dict(d)


def load_config_file(path: str) -> Tuple[DynamizerConfig, ConvertOptions]:
    """
    Load settings from a YAML (or JSON, by extension) file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigError: If the content is not a valid configuration
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
    except UnicodeDecodeError as e:
        raise ConfigError(f"Configuration file is not valid UTF-8: {e}")
    if path.lower().endswith(".json"):
        return config_from_json(content)
    return config_from_yaml(content)


def record_to_dict(r: ConversionRecord) -> Dict[str, Any]:
    return {
        "source": r.source,
        "destination": r.destination,
        "function_count": r.function_count,
        "module_count": r.module_count,
    }


def record_from_dict(d: Dict[str, Any]) -> ConversionRecord:
    return ConversionRecord(
        source=d["source"],
        destination=d["destination"],
        function_count=d.get("function_count", 0),
        module_count=d.get("module_count", 0),
    )


def report_to_dict(report: ConversionReport) -> Dict[str, Any]:
    return {
        "records": [record_to_dict(r) for r in report.records],
        "skipped": list(report.skipped),
        "loader_entries": list(report.loader_entries),
    }


def report_from_dict(d: Dict[str, Any]) -> ConversionReport:
    return ConversionReport(
        records=[record_from_dict(r) for r in d.get("records", [])],
        loader_entries=list(d.get("loader_entries", [])),
        skipped=list(d.get("skipped", [])),
    )


def report_to_json(report: ConversionReport) -> str:
    return json.dumps(report_to_dict(report), indent=2)


def report_from_json(s: str) -> ConversionReport:
    return report_from_dict(json.loads(s))


def report_to_yaml(report: ConversionReport) -> str:
    return yaml.safe_dump(report_to_dict(report), sort_keys=False)


def report_from_yaml(s: str) -> ConversionReport:
    return report_from_dict(yaml.safe_load(s))
