"""Command-line entry point.

Usage::

    hozokit-generator                       # same as "app"
    hozokit-generator app --project-name "My Theme" --no-wordpress
    hozokit-generator --yes app             # reuse remembered answers
    hozokit-generator component --name "Hero Section"
    python -m hozokit_generator component

Handled failures are printed and the process exits normally; only invalid
arguments produce a non-zero exit (from argparse).
"""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from rich.markup import escape

from hozokit_generator.config import Config
from hozokit_generator.errors import GeneratorError, ProjectNotFoundError
from hozokit_generator.pipeline import InstallPipeline, PipelineResult
from hozokit_generator.prompts import ask_component_parameters, ask_project_parameters
from hozokit_generator.scaffolder.component import ComponentGenerator
from hozokit_generator.settings import JsonSettingsStore, MemorySettingsStore, SettingsStore
from hozokit_generator.utils import console, print_banner, print_error, print_success

_WELCOME = (
    "[reverse]WELCOME![/reverse]\n"
    "This generator will ask EIGHT questions in total, before installation.\n"
    "All fields are optional and defaults are shown in brackets.\n\n"
    "If the installation fails please refer to Hozokit's setup guide:\n"
    "https://github.com/csalmeida/hozokit#manual-install"
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hozokit-generator",
        description="Hozokit theme generator for WordPress",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  hozokit-generator app\n"
            "  hozokit-generator app --project-name 'My Theme' --no-wordpress\n"
            "  hozokit-generator component --name 'Hero Section'\n"
        ),
    )
    parser.add_argument(
        "--directory", "-C",
        type=Path,
        default=None,
        help="Directory the project is generated in (default: current directory)",
    )
    parser.add_argument(
        "--yes", "-y",
        action="store_true",
        help="Do not prompt; use remembered answers and command-line values",
    )
    parser.add_argument(
        "--no-save",
        action="store_true",
        help="Do not remember answers for the next run",
    )

    subparsers = parser.add_subparsers(dest="command")

    app = subparsers.add_parser("app", help="Generate a new Hozokit project (default)")
    app.add_argument("--project-name", default=None, help="Project name, e.g. 'My Theme'")
    platform = app.add_mutually_exclusive_group()
    platform.add_argument(
        "--wordpress", dest="install_platform", action="store_true", default=None,
        help="Download and install WordPress as well",
    )
    platform.add_argument(
        "--no-wordpress", dest="install_platform", action="store_false", default=None,
        help="Only install the Hozokit theme",
    )
    app.add_argument("--webserver-url", default=None, help="Webserver address used for hot reloading")

    component = subparsers.add_parser("component", help="Generate a Twig component in an existing theme")
    component.add_argument("--name", dest="component_name", default=None, help="Component name, e.g. 'Hero Section'")
    component.add_argument("--description", dest="component_description", default=None)
    component.add_argument("--prefix", dest="component_class_prefix", default=None, help="CSS class prefix")
    component.add_argument("--theme", dest="project_folder_name", default=None, help="Theme folder name")

    # A bare invocation behaves like "app" with no overrides.
    parser.set_defaults(command="app", project_name=None, install_platform=None, webserver_url=None)
    return parser


def _overrides(args: argparse.Namespace, fields: tuple[str, ...]) -> dict[str, Any]:
    return {
        field: getattr(args, field)
        for field in fields
        if getattr(args, field, None) is not None
    }


def _store(config: Config, base_dir: Path, no_save: bool) -> SettingsStore:
    if no_save:
        return MemorySettingsStore()
    path = config.settings_file
    if not path.is_absolute():
        path = base_dir / path
    return JsonSettingsStore(path)


def run_app(args: argparse.Namespace, config: Config, base_dir: Path) -> PipelineResult | None:
    print_banner("Hozokit", "The [blue]Hozokit[/blue] theme generator for WordPress.\n\n" + _WELCOME)
    overrides = _overrides(args, ("project_name", "install_platform", "webserver_url"))
    try:
        params = ask_project_parameters(
            _store(config, base_dir, args.no_save),
            interactive=not args.yes,
            overrides=overrides,
        )
    except ValidationError as exc:
        print_error(f"Invalid answer:\n{exc}")
        return None

    pipeline = InstallPipeline(config, params, base_dir)
    return asyncio.run(pipeline.run())


def run_component(args: argparse.Namespace, config: Config, base_dir: Path) -> list[Path]:
    print_banner("Hozokit", "The [blue]Hozokit[/blue] component generator.")
    overrides = _overrides(
        args,
        ("component_name", "component_description", "component_class_prefix", "project_folder_name"),
    )
    try:
        params = ask_component_parameters(
            _store(config, base_dir, args.no_save),
            interactive=not args.yes,
            overrides=overrides,
        )
    except ValidationError as exc:
        print_error(f"Invalid answer:\n{exc}")
        return []

    try:
        written = ComponentGenerator().generate(base_dir, params)
    except ProjectNotFoundError as exc:
        print_error(
            "Could not find project directory.\n"
            "Change directory to the folder where WordPress is installed or the "
            "theme folder in order to create a component."
        )
        console.print(escape(str(exc.path)), highlight=False)
        return []
    except GeneratorError as exc:
        print_error(str(exc))
        return []

    for path in written:
        console.print(f"  [green]+[/green] {escape(str(path))}", highlight=False)
    print_success(f"Component '{params.component_name}' created.")
    return written


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``hozokit-generator`` and ``python -m hozokit_generator``."""
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = Config.from_env()
    except (ValueError, ValidationError) as exc:
        print_error(f"Invalid configuration:\n{exc}")
        return
    base_dir = (args.directory or Path.cwd()).resolve()

    try:
        if args.command == "component":
            run_component(args, config, base_dir)
        else:
            run_app(args, config, base_dir)
    except KeyboardInterrupt:
        print_error("Cancelled.")


if __name__ == "__main__":
    main()
