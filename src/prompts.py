"""Interactive question flow.

Asks one question at a time, in a fixed order, and turns the answers into a
``ScaffoldConfig``.  An empty answer takes the default shown in brackets.
"""

from __future__ import annotations

from rich.console import Console
from rich.prompt import Confirm, Prompt

from src.config import Feature, PackageManager, ScaffoldConfig
from src.scaffolder.errors import MissingProjectNameError
from src.utils import console as default_console

FEATURE_QUESTIONS: tuple[tuple[Feature, str], ...] = (
    (Feature.PERSISTENCE, "Include Mongoose (MongoDB)?"),
    (Feature.CROSS_ORIGIN, "Include CORS?"),
    (Feature.SECURE_HEADERS, "Include Helmet (Security headers)?"),
    (Feature.COOKIES, "Include cookie-parser?"),
    (Feature.REQUEST_LOGGING, "Include Pino (HTTP Logger)?"),
    (Feature.RATE_LIMITING, "Include Rate Limiting?"),
    (Feature.ENV_LOADING, "Include dotenv (Environment variables)?"),
    (Feature.CODE_FORMATTING, "Include Prettier (Code formatter)?"),
)

PRETTY_LOGGING_QUESTION = "Include pino-pretty for clean development logs?"

EXTRA_QUESTIONS: tuple[tuple[str, str], ...] = (
    ("init_version_control", "Initialise a git repository?"),
    ("init_container", "Add Docker configuration?"),
    ("init_auth_boilerplate", "Add JWT authentication boilerplate?"),
    ("init_test_boilerplate", "Add Jest + Supertest boilerplate?"),
)


def ask_project_name(console: Console | None = None) -> str:
    """Ask for the project directory name; raise if it is left blank."""
    console = console or default_console
    name = Prompt.ask(
        "Project directory name (e.g. my-awesome-api)",
        default="",
        show_default=False,
        console=console,
    ).strip()
    if not name:
        raise MissingProjectNameError()
    return name


def ask_configuration(
    project_name: str,
    *,
    assume_defaults: bool = False,
    console: Console | None = None,
) -> ScaffoldConfig:
    """Ask the remaining questions and build the configuration.

    Args:
        project_name: Directory name, already validated by the caller.
        assume_defaults: Skip every prompt and accept its default.
        console: Rich console to prompt on.

    Returns:
        The resolved, immutable ``ScaffoldConfig``.
    """
    if assume_defaults:
        return ScaffoldConfig(project_name=project_name)

    console = console or default_console

    package_name = Prompt.ask(
        "package.json name", default=project_name, console=console
    )
    description = Prompt.ask("Project description", default="", show_default=False, console=console)
    author = Prompt.ask("Author name", default="", show_default=False, console=console)

    console.print("\n[bold]--- Select Dependencies ---[/bold]")
    console.print("Press Enter for Yes, type \"n\" for No.\n")

    features: dict[Feature, bool] = {}
    for feature, question in FEATURE_QUESTIONS:
        features[feature] = Confirm.ask(question, default=True, console=console)

    pretty = False
    if features[Feature.REQUEST_LOGGING]:
        pretty = Confirm.ask(PRETTY_LOGGING_QUESTION, default=True, console=console)

    raw_manager = Prompt.ask(
        "Package manager (npm/yarn/pnpm/bun)",
        default=PackageManager.NPM.value,
        console=console,
    )

    extras: dict[str, bool] = {}
    for key, question in EXTRA_QUESTIONS:
        extras[key] = Confirm.ask(question, default=False, console=console)

    return ScaffoldConfig(
        project_name=project_name,
        package_name=package_name,
        description=description,
        author=author,
        features=features,
        pretty_dev_logging=pretty,
        package_manager=PackageManager.resolve(raw_manager),
        **extras,
    )
