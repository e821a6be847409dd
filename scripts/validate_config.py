#!/usr/bin/env python3
"""Configuration validation script."""

import argparse
import sys
from pathlib import Path

from election_app.config.loader import ConfigLoader
from election_app.config.validation import ConfigValidator


def main() -> None:
    """Main validation function."""
    parser = argparse.ArgumentParser(description="Validate election configuration")
    parser.add_argument(
        "config_dir",
        nargs="?",
        type=Path,
        default=None,
        help="Directory containing election.yaml (defaults to ./config)"
    )
    args = parser.parse_args()

    loader = ConfigLoader.create(args.config_dir)
    print(f"🔍 Validating configuration in {loader.config_dir}...")

    try:
        config = loader.merge_config()
    except Exception as e:
        print(f"❌ Could not load configuration: {e}")
        sys.exit(1)

    errors = ConfigValidator.validate_config(config)

    if errors:
        print(f"❌ Found {len(errors)} validation errors:")
        for error in errors:
            print(f"  • {error.field}: {error.message} (value: {error.value})")
        sys.exit(1)

    settings = loader.build_settings(config)
    print(f"✅ Election '{settings.election.election_id}' configuration is valid")
    sys.exit(0)


if __name__ == "__main__":
    main()
