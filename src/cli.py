"""express-scaffold command-line entry point.

Usage::

    express-scaffold my-awesome-api
    express-scaffold my-awesome-api --yes --skip-install
    python -m src.cli
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from src.config import RunSettings, ScaffoldConfig
from src.prompts import ask_configuration, ask_project_name
from src.scaffolder import GenerationResult, ProjectGenerator
from src.scaffolder.errors import ProjectExistsError, ScaffoldError
from src.utils import (
    console,
    print_error,
    print_header,
    print_success,
    print_summary_table,
    print_warning,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="express-scaffold",
        description="Scaffold a production-ready Node.js Express API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  express-scaffold my-awesome-api\n"
            "  express-scaffold my-awesome-api --yes --skip-install\n"
            "  express-scaffold my-awesome-api -o ./services\n"
        ),
    )
    parser.add_argument(
        "project_name",
        nargs="?",
        default=None,
        help="Project directory name (prompted for if omitted)",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Parent directory for the project (default: current directory)",
    )
    parser.add_argument(
        "--yes", "-y",
        action="store_true",
        help="Accept every default instead of prompting",
    )
    parser.add_argument(
        "--skip-install",
        action="store_true",
        help="Write the project but do not run the package manager",
    )
    return parser


def run(project_name: str | None, settings: RunSettings) -> GenerationResult:
    """Resolve the configuration interactively and generate the project."""
    name = (project_name or "").strip() or ask_project_name()

    # Fail before asking anything else if the folder is taken.
    target = settings.output_dir / name
    if target.exists():
        raise ProjectExistsError(target)

    config = ask_configuration(name, assume_defaults=settings.assume_defaults)
    print_summary_table(config.summary(), title="Selections")

    console.print(f"Creating a new Node.js Express API in [bold]{target.resolve()}[/bold]...")
    generator = ProjectGenerator(config, settings)
    result = asyncio.run(generator.generate())
    _print_next_steps(config, result)
    return result


def _print_next_steps(config: ScaffoldConfig, result: GenerationResult) -> None:
    print_header("Done")
    for warning in result.warnings:
        print_warning(warning)
    if not result.success:
        print_warning("Some setup commands failed; run them yourself:")
        for command in result.failed_commands:
            console.print(f"  {command}")
    print_success(f'Created "{config.project_name}" at {result.project_path.resolve()}')

    manager = config.package_manager
    console.print("\nInside that directory, you can run several commands:")
    console.print(f"\n  {manager.run_command('dev')}")
    console.print("    Starts the development server on localhost.")
    console.print(f"\n  {manager.run_command('start')}")
    console.print("    Starts the production server.")
    if config.init_test_boilerplate:
        console.print(f"\n  {manager.run_command('test')}")
        console.print("    Runs the test suite.")
    console.print("\nWe suggest that you begin by typing:")
    console.print(f"\n  cd {config.project_name}")
    if result.install_ok is not True:
        console.print(f"  {manager.value} install")
    console.print(f"  {manager.run_command('dev')}\n")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``express-scaffold`` / ``python -m src.cli``."""
    args = build_parser().parse_args(argv)

    settings = RunSettings.from_env()
    overrides: dict[str, object] = {}
    if args.output:
        overrides["output_dir"] = Path(args.output)
    if args.skip_install:
        overrides["skip_install"] = True
    if args.yes:
        overrides["assume_defaults"] = True
    if overrides:
        settings = settings.model_copy(update=overrides)

    try:
        run(args.project_name, settings)
    except ScaffoldError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)
    except KeyboardInterrupt:
        print_error("Aborted.")
        sys.exit(1)
    except Exception as exc:
        print_error(f"Unexpected error occurred: {exc}")
        sys.exit(1)


if __name__ == "__main__":
    main()
