#!/usr/bin/env python3
"""
Example demonstrating global options shared by subcommands, with option
names following a naming convention loaded from a settings file when one
is given.

Usage:
    python subcommands_example.py -v true build --max-jobs 4
    NAMING_SETTINGS=naming.yaml python subcommands_example.py ...
"""

import os
from dataclasses import dataclass

from autooptions import (
    NamingSettings,
    OptionsArgParser,
    load_naming_settings,
    option,
)


@dataclass
class GlobalOptions:
    verbose: bool = option("-v", help="Enable verbose output", default=False)


@dataclass
class BuildOptions:
    max_jobs: int = option("-j", help="Number of parallel jobs", default=1)
    target: str = option(help="Build target", default="all")


@dataclass
class CleanOptions:
    keep_cache: bool = option(help="Keep the download cache", default=True)


if __name__ == "__main__":
    settings_path = os.environ.get("NAMING_SETTINGS")
    settings = load_naming_settings(settings_path) if settings_path else NamingSettings()

    parser = OptionsArgParser(
        prog="make-like",
        prefix=settings.prefix,
        convention=settings.convention,
    )
    parser.add_global_options(GlobalOptions)
    parser.add_subcommand("build", BuildOptions, help="Build a target")
    parser.add_subcommand("clean", CleanOptions, help="Remove build outputs")
    parser.add_flag("--dry-run", action="store_true", help="Print what would happen")

    result = parser.parse()

    print(f"Commands: {result.get('command', [])}")
    print(f"Dry run: {result['dry_run']}")
    for key, value in result.items():
        if key not in ("command", "dry_run"):
            print(f"{key}: {value}")
