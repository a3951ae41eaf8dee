#!/usr/bin/env python3
"""
TRVZ Configuration Parser

Parses YAML configuration files for locus annotation runs, fills in defaults
and validates values.

Configuration keys:
    inputs.catalog        Repeat catalog (plain or .gz)
    inputs.genome         Indexed reference FASTA
    inputs.vcf            TRGT VCF/BCF
    inputs.bam            TRGT spanning-read BAM
    locus.flank_len       Flank length fetched around each locus
    reads.search_radius   Padding around the locus when fetching reads
    logging.level         DEBUG, INFO, WARNING or ERROR
    logging.file          Optional log file

Usage:
    # Get single value
    python config_parser.py config.yaml --get reads.search_radius

    # Validate configuration
    python config_parser.py config.yaml --validate

    # As Python module
    from utils.config_parser import load_config, get_nested
    config = load_config("config.yaml")
    radius = get_nested(config, "reads.search_radius")
"""

import argparse
import copy
import json
import sys
from pathlib import Path
from typing import Any, Dict

import yaml

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

DEFAULT_CONFIG: Dict[str, Any] = {
    "inputs": {
        "catalog": None,
        "genome": None,
        "vcf": None,
        "bam": None,
    },
    "locus": {
        "flank_len": 1000,
    },
    "reads": {
        "search_radius": 1000,
    },
    "logging": {
        "level": "INFO",
        "file": None,
    },
}


def load_config(config_path: str) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Dictionary containing configuration values

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML parsing fails
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(path, 'r') as f:
        config = yaml.safe_load(f)

    if config is None:
        return {}

    return config


def merge_with_defaults(config: Dict[str, Any], defaults: Dict[str, Any] = None) -> Dict[str, Any]:
    """
    Overlay a loaded configuration on top of the defaults.

    Examples:
        >>> merged = merge_with_defaults({"reads": {"search_radius": 500}})
        >>> merged["reads"]["search_radius"], merged["locus"]["flank_len"]
        (500, 1000)
    """
    merged = copy.deepcopy(DEFAULT_CONFIG if defaults is None else defaults)
    for key, value in config.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_with_defaults(value, merged[key])
        else:
            merged[key] = value
    return merged


def get_nested(config: Dict[str, Any], key_path: str, default: Any = None) -> Any:
    """
    Get a nested value from config using dot notation.

    Args:
        config: Configuration dictionary
        key_path: Dot-separated path (e.g., "reads.search_radius")
        default: Default value if key not found

    Returns:
        Value at the specified path, or default if not found

    Examples:
        >>> config = {"inputs": {"vcf": "/data/sample.vcf.gz"}}
        >>> get_nested(config, "inputs.vcf")
        '/data/sample.vcf.gz'
        >>> get_nested(config, "inputs.missing", "default")
        'default'
    """
    keys = key_path.split('.')
    value = config

    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default

    return value


def _check_non_negative_int(config: Dict[str, Any], key_path: str, errors: list) -> None:
    value = get_nested(config, key_path)
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        errors.append(f"{key_path} must be an integer, got {value!r}")
    elif value < 0:
        errors.append(f"{key_path} must be >= 0, got {value}")


def validate_config(config: Dict[str, Any], check_paths: bool = True) -> tuple[bool, list[str]]:
    """
    Validate configuration values.

    Args:
        config: Configuration dictionary
        check_paths: Also check that configured input files exist

    Returns:
        Tuple of (is_valid, list of error messages)
    """
    errors = []

    _check_non_negative_int(config, "locus.flank_len", errors)
    _check_non_negative_int(config, "reads.search_radius", errors)

    level = get_nested(config, "logging.level")
    if level is not None and str(level).upper() not in LOG_LEVELS:
        errors.append(f"logging.level must be one of {', '.join(LOG_LEVELS)}, got {level}")

    if check_paths:
        for key_path in ("inputs.catalog", "inputs.genome", "inputs.vcf", "inputs.bam"):
            path = get_nested(config, key_path)
            if path and not Path(path).exists():
                errors.append(f"Input file not found: {path} ({key_path})")

    return len(errors) == 0, errors


def print_config_summary(config: Dict[str, Any]) -> None:
    """Print a human-readable config summary."""
    print("=" * 60)
    print("TRVZ Configuration Summary")
    print("=" * 60)

    sections = [
        ("Inputs", [
            ("inputs.catalog", "Catalog"),
            ("inputs.genome", "Reference"),
            ("inputs.vcf", "Call Set"),
            ("inputs.bam", "Reads"),
        ]),
        ("Locus", [
            ("locus.flank_len", "Flank Length"),
        ]),
        ("Reads", [
            ("reads.search_radius", "Search Radius"),
        ]),
        ("Logging", [
            ("logging.level", "Level"),
            ("logging.file", "File"),
        ]),
    ]

    for section_name, fields in sections:
        print(f"\n{section_name}:")
        for key_path, label in fields:
            value = get_nested(config, key_path, "not set")
            print(f"  {label}: {value}")

    print("\n" + "=" * 60)


def main():
    parser = argparse.ArgumentParser(
        description="TRVZ Configuration Parser",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument(
        "config",
        help="Path to YAML configuration file"
    )

    parser.add_argument(
        "--get",
        metavar="KEY",
        help="Get single value using dot notation (e.g., reads.search_radius)"
    )

    parser.add_argument(
        "--validate",
        action="store_true",
        help="Validate configuration and report errors"
    )

    parser.add_argument(
        "--summary",
        action="store_true",
        help="Print configuration summary"
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON (for --get with complex values)"
    )

    args = parser.parse_args()

    try:
        config = merge_with_defaults(load_config(args.config))
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except yaml.YAMLError as e:
        print(f"Error parsing YAML: {e}", file=sys.stderr)
        sys.exit(1)

    if args.get:
        value = get_nested(config, args.get)
        if value is None:
            print(f"Key not found: {args.get}", file=sys.stderr)
            sys.exit(1)
        if args.json:
            print(json.dumps(value))
        else:
            print(value)

    elif args.validate:
        is_valid, errors = validate_config(config)
        if is_valid:
            print("Configuration is valid!")
            sys.exit(0)
        else:
            print("Configuration errors:", file=sys.stderr)
            for error in errors:
                print(f"  - {error}", file=sys.stderr)
            sys.exit(1)

    else:
        print_config_summary(config)


if __name__ == "__main__":
    main()
