"""herokit configuration.

Typed configuration for a scaffolding run.  The interactive answers and the
tool settings are Pydantic v2 models so they can be validated at construction
time and serialised to/from JSON or environment variables.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator, model_validator

DEFAULT_ORGANISATION = "zeitdev"
DEFAULT_RUBY_VERSION = "2.6.6"
DEFAULT_NODE_VERSION = "12"

HOSTED_RUNNER = "ubuntu-latest"
SELF_HOSTED_RUNNER = "self-hosted"

_REPOSITORY_RE = re.compile(r"^[\w.-]+/[\w.-]+$")


class ScaffoldAnswers(BaseModel):
    """Answers collected by the wizard (or loaded from an answers file).

    ``staging_app_name`` and ``repository`` are optional; when left empty they
    default to ``{app_name}-staging`` and ``zeitdev/{app_name}``.
    """

    app_name: str = Field(..., description="Heroku production app name")
    staging_app_name: str = Field(default="", description="Heroku staging app name")
    repository: str = Field(default="", description="GitHub repository as orga/repo")
    pipeline: str = Field(default="", description="Heroku pipeline UUID")
    runner: Literal["ubuntu-latest", "self-hosted"] = Field(default=SELF_HOSTED_RUNNER)

    @field_validator("app_name", "staging_app_name", "repository", "pipeline")
    @classmethod
    def _strip(cls, value: str) -> str:
        return value.strip()

    @field_validator("app_name")
    @classmethod
    def _app_name_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("app_name must not be empty")
        return value

    @model_validator(mode="after")
    def _fill_defaults(self) -> "ScaffoldAnswers":
        if not self.staging_app_name:
            self.staging_app_name = default_staging_name(self.app_name)
        if not self.repository:
            self.repository = default_repository(self.app_name)
        if not _REPOSITORY_RE.match(self.repository):
            raise ValueError(
                f"repository must have the form orga/repo, got {self.repository!r}"
            )
        return self

    @property
    def repository_url(self) -> str:
        return f"https://github.com/{self.repository}"


class Config(BaseModel):
    """Global herokit configuration.

    Holds the target project directory, toolchain versions baked into the
    Dockerfile, and the wizard answers once they are known.
    """

    target_dir: Path = Field(default=Path("."))
    ruby_version: str = Field(default=DEFAULT_RUBY_VERSION)
    node_version: str = Field(default=DEFAULT_NODE_VERSION)
    skip_install: bool = Field(default=False)
    answers: ScaffoldAnswers | None = Field(default=None)

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def bin_dir(self) -> Path:
        return self.target_dir / "bin"

    @property
    def workflows_dir(self) -> Path:
        """Directory holding the GitHub Actions workflows."""
        return self.target_dir / ".github" / "workflows"

    @property
    def answers_path(self) -> Path:
        """Where ``--save-answers`` writes the wizard answers."""
        return self.target_dir / ".herokit" / "answers.json"

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path | None = None) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file. Defaults to :attr:`answers_path`.

        Returns:
            The path where the file was written.
        """
        target = path or self.answers_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            HEROKIT_TARGET_DIR, HEROKIT_RUBY_VERSION, HEROKIT_NODE_VERSION,
            HEROKIT_SKIP_INSTALL.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("HEROKIT_TARGET_DIR"):
            kwargs["target_dir"] = Path(os.environ["HEROKIT_TARGET_DIR"])
        if os.environ.get("HEROKIT_RUBY_VERSION"):
            kwargs["ruby_version"] = os.environ["HEROKIT_RUBY_VERSION"]
        if os.environ.get("HEROKIT_NODE_VERSION"):
            kwargs["node_version"] = os.environ["HEROKIT_NODE_VERSION"]
        skip = os.environ.get("HEROKIT_SKIP_INSTALL", "").strip().lower()
        kwargs["skip_install"] = skip in ("1", "true", "yes")
        return cls(**kwargs)


def default_staging_name(app_name: str) -> str:
    return f"{app_name}-staging"


def default_repository(app_name: str) -> str:
    return f"{DEFAULT_ORGANISATION}/{app_name}"
