"""Interactive question flow for a scaffolding run."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

from rich.prompt import Confirm, Prompt

from herokit.config import (
    HOSTED_RUNNER,
    SELF_HOSTED_RUNNER,
    ScaffoldAnswers,
    default_repository,
    default_staging_name,
)
from herokit.utils import console

PromptFn = Callable[[str], str]
ConfirmFn = Callable[[str], bool]


def _rich_prompt(question: str) -> str:
    return Prompt.ask(question, default="", show_default=False, console=console)


def _rich_confirm(question: str) -> bool:
    return Confirm.ask(question, console=console)


def ask_answers(
    prompt: PromptFn = _rich_prompt,
    confirm: ConfirmFn = _rich_confirm,
) -> ScaffoldAnswers:
    """Ask the scaffolding questions and return validated answers.

    Questions are asked in a fixed order; later defaults depend on the
    production app name.  Empty answers to the staging name and repository
    questions fall back to their defaults.
    """
    app_name = ""
    while not app_name:
        app_name = prompt("Heroku production app name?").strip()

    staging = prompt(
        f"Heroku staging app name? (default {default_staging_name(app_name)})"
    )

    hosted = confirm("Use github cloud agents? (no for self-hosted)")
    runner = HOSTED_RUNNER if hosted else SELF_HOSTED_RUNNER

    pipeline = prompt("Heroku pipeline uuid?")

    repository = prompt(
        "Github repository? (format: orga/repo, "
        f"default: {default_repository(app_name)})"
    )

    return ScaffoldAnswers(
        app_name=app_name,
        staging_app_name=staging,
        repository=repository,
        pipeline=pipeline,
        runner=runner,
    )


def load_answers(path: str | Path) -> ScaffoldAnswers:
    """Load answers from a JSON file.

    Accepts either a bare answers object or a saved ``Config`` that carries
    them under ``"answers"``.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If a saved config has no answers.
        pydantic.ValidationError: If the answers are invalid.
    """
    data: dict[str, Any] = json.loads(Path(path).read_text(encoding="utf-8"))
    if "app_name" not in data and "answers" in data:
        data = data["answers"]
        if data is None:
            raise ValueError(f"No answers stored in {path}")
    return ScaffoldAnswers.model_validate(data)
