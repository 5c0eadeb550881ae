#!/usr/bin/env python3
"""
Example script demonstrating the usage of OptionsArgParser.

This script shows how to declare the options of a command as a dataclass
and let autooptions turn its fields into command-line options.
"""

import pathlib
from dataclasses import dataclass, field

from autooptions import (
    OptionsArgParser,
    default_directory,
    derive_default_options,
    not_an_option,
    option,
)


@dataclass
class SimulationOptions:
    """Options for simulation parameters."""

    name: str = option("-n", help="Name of the simulation")
    temperature: float = option("-t", help="Temperature in Celsius", default=27.0)
    num_simulations: int = option(help="Number of simulations to run", default=100)
    output_dir: pathlib.Path = default_directory(
        "/tmp/output", "-o", help="Output directory path"
    )
    verbose: bool = option("-v", help="Enable verbose output", default=False)
    tags: list[str] = field(default_factory=list, metadata={"help": "Run tags"})
    history: list[str] = not_an_option(default_factory=list)


def main() -> None:
    """Main function demonstrating the parser."""
    print("Derived options")
    print("=" * 50)
    for descriptor in derive_default_options(SimulationOptions):
        print(f"{', '.join(descriptor.aliases):35} {descriptor.kind.value}")
    print()

    parser = OptionsArgParser(SimulationOptions, prog="simulate")
    result = parser.parse()

    options = result["SimulationOptions"]
    print("Parsed Options:")
    print("-" * 30)
    print(f"Simulation Name: {options.name}")
    print(f"Temperature: {options.temperature}°C")
    print(f"Number of Simulations: {options.num_simulations}")
    print(f"Output Directory: {options.output_dir}")
    print(f"Verbose: {options.verbose}")
    print(f"Tags: {options.tags}")


if __name__ == "__main__":
    main()
