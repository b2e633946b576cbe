"""Configuration introspection for debugging deployments.

Usage:
    python -m dental_vision.config
    python -m dental_vision.config --check
    python -m dental_vision.config --json
"""

import argparse
import json
import sys
from typing import Any

from dental_vision.exceptions import ConfigurationError

from .api import resolve_config
from .types import FIELD_ORDER, SECRET_FIELDS

# ruff: noqa: T201


def get_config_info() -> dict[str, Any]:
    """Structured, redacted configuration information."""
    try:
        resolved = resolve_config()
    except ConfigurationError as e:
        return {"status": "invalid", "error": str(e), "config": None, "sources": {}}

    config = {}
    for field in FIELD_ORDER:
        if field in SECRET_FIELDS:
            config[f"has_{field}"] = getattr(resolved, field) is not None
        else:
            config[field] = getattr(resolved, field)
    return {"status": "valid", "config": config, "sources": dict(resolved.origin)}


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="python -m dental_vision.config",
        description="Show the effective Dental Vision client configuration.",
    )
    parser.add_argument("--json", action="store_true", help="emit JSON")
    parser.add_argument(
        "--check", action="store_true", help="only validate; exit 1 if invalid"
    )
    args = parser.parse_args(argv)

    info = get_config_info()
    if args.check:
        if info["status"] != "valid":
            print(f"Configuration Error: {info['error']}", file=sys.stderr)
            return 1
        print("Configuration OK")
        return 0

    if args.json:
        print(json.dumps(info, indent=2))
        return 0 if info["status"] == "valid" else 1

    if info["status"] != "valid":
        print(f"Configuration Error: {info['error']}", file=sys.stderr)
        return 1

    print("=== Effective Configuration ===")
    for key, value in info["config"].items():
        print(f"  {key}: {value}")
    print("\n=== Configuration Sources ===")
    for key, origin in info["sources"].items():
        print(f"  {key}: {origin}")
    return 0
