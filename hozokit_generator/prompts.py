"""Interactive questions for the ``app`` and ``component`` generators.

Answers from the previous run are read from a :class:`SettingsStore` and
offered as defaults; the new answers are written back once the questions are
done. Questions answered on the command line are not asked again.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import ValidationError
from rich.console import Console
from rich.prompt import Confirm, Prompt

from hozokit_generator.models import ComponentParameters, ProjectParameters
from hozokit_generator.settings import (
    COMPONENT_SETTINGS_KEY,
    PROJECT_SETTINGS_KEY,
    SettingsStore,
)
from hozokit_generator.utils import console, dashify

AskFn = Callable[[str, str], str]
ConfirmFn = Callable[[str, bool], bool]

# (field, question, kind)
PROJECT_QUESTIONS: list[tuple[str, str, str]] = [
    ("project_name", "[reverse]INSTALLATION OPTIONS[/reverse]\n(1/3) What is your project name? (e.g My Hozokit Project)", "text"),
    ("install_platform", "(2/3) Would you like WordPress to be installed?", "confirm"),
    ("webserver_url", "(3/3) What's the address of the webserver for this install? e.g http://localhost:3000 (used to setup hot reloading)", "text"),
    ("theme_uri", "[reverse]THEME CONFIGURATION[/reverse]\n(1/5) Theme URI (a repository, a demo or showcase page)", "text"),
    ("theme_description", "(2/5) Theme description", "text"),
    ("theme_author", "(3/5) Theme author (name or company)", "text"),
    ("theme_author_uri", "(4/5) Theme author URI", "text"),
    ("theme_tags", "(5/5) Any additional tags? (separated by a comma, useful if the theme is going to be published to wordpress.org)", "text"),
]

COMPONENT_QUESTIONS: list[tuple[str, str, str]] = [
    ("component_name", "Component name (e.g Hero Section)\nThe name will be reformatted to reference the component in files and name its folder.", "text"),
    ("component_description", "Description", "text"),
    ("component_class_prefix", "Selector class prefix (e.g hoz)\nClass prefixes help identify components when styling them. Prefix is remembered for next time.", "text"),
    ("project_folder_name", "What is the name of your theme folder?\nLocated in wp-content/themes. Should be separated by dashes (e.g hozokit-wordpress-project)", "text"),
]


def _rich_ask(out: Console) -> AskFn:
    def ask(question: str, default: str) -> str:
        return Prompt.ask(question, default=default, show_default=bool(default), console=out)

    return ask


def _rich_confirm(out: Console) -> ConfirmFn:
    def confirm(question: str, default: bool) -> bool:
        return Confirm.ask(question, default=default, console=out)

    return confirm


def _ask_all(
    questions: list[tuple[str, str, str]],
    defaults: Mapping[str, Any],
    overrides: Mapping[str, Any],
    ask: AskFn,
    confirm: ConfirmFn,
) -> dict[str, Any]:
    answers: dict[str, Any] = {}
    for field, question, kind in questions:
        if field in overrides:
            answers[field] = overrides[field]
            continue
        default = defaults.get(field)
        if kind == "confirm":
            answers[field] = confirm(question, bool(default))
        else:
            answers[field] = ask(question, "" if default is None else str(default))
    return answers


def previous_project_parameters(store: SettingsStore) -> ProjectParameters:
    """Parameters remembered from the last run, or the built-in defaults."""
    saved = store.get(PROJECT_SETTINGS_KEY)
    if isinstance(saved, dict):
        try:
            return ProjectParameters.model_validate(saved)
        except ValidationError:
            pass
    return ProjectParameters()


def ask_project_parameters(
    store: SettingsStore,
    *,
    interactive: bool = True,
    overrides: Mapping[str, Any] | None = None,
    ask: AskFn | None = None,
    confirm: ConfirmFn | None = None,
    out: Console | None = None,
) -> ProjectParameters:
    """Collect and remember the ``app`` generator answers.

    Args:
        store: Where previous answers are read from and new ones saved.
        interactive: When ``False`` no question is asked and the remembered
            (or built-in) defaults are used.
        overrides: Answers given on the command line; never asked.
        ask / confirm: Prompt functions, replaceable in tests.
    """
    target = out or console
    overrides = dict(overrides or {})
    defaults = previous_project_parameters(store).model_dump()

    if interactive:
        answers = _ask_all(
            PROJECT_QUESTIONS,
            defaults,
            overrides,
            ask or _rich_ask(target),
            confirm or _rich_confirm(target),
        )
        params = ProjectParameters(**{**defaults, **answers})
    else:
        params = ProjectParameters(**{**defaults, **overrides})

    store.set(PROJECT_SETTINGS_KEY, params.model_dump(mode="json"))
    return params


def ask_component_parameters(
    store: SettingsStore,
    *,
    interactive: bool = True,
    overrides: Mapping[str, Any] | None = None,
    ask: AskFn | None = None,
    out: Console | None = None,
) -> ComponentParameters:
    """Collect and remember the ``component`` generator answers.

    The theme folder defaults to the folder of the last generated project.
    """
    target = out or console
    overrides = dict(overrides or {})

    defaults: dict[str, Any] = {"component_name": "New Component"}
    saved = store.get(COMPONENT_SETTINGS_KEY)
    if isinstance(saved, dict):
        for field, _question, _kind in COMPONENT_QUESTIONS:
            if saved.get(field):
                defaults[field] = saved[field]
    project = store.get(PROJECT_SETTINGS_KEY)
    if isinstance(project, dict) and project.get("project_name"):
        defaults["project_folder_name"] = dashify(str(project["project_name"]))

    if interactive:
        answers = _ask_all(
            COMPONENT_QUESTIONS,
            defaults,
            overrides,
            ask or _rich_ask(target),
            lambda _question, default: default,
        )
    else:
        answers = {**defaults, **overrides}

    params = ComponentParameters(**answers)
    store.set(COMPONENT_SETTINGS_KEY, params.model_dump(mode="json"))
    return params
