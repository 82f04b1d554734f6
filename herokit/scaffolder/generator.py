"""Main scaffolding orchestrator.

Takes a ``Config`` holding the wizard answers and writes the deployment
setup (Docker, GitHub Actions, Heroku manifests, bin scripts, env files) into
an existing Rails project.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from herokit.config import Config, ScaffoldAnswers

from .docker_gen import DockerGenerator
from .manifest_gen import ManifestGenerator
from .rails_patcher import PatchReport, RailsPatcher
from .script_gen import ScriptGenerator
from .templates import TemplateRenderer
from .workflow_gen import WorkflowGenerator


@dataclass
class ScaffoldResult:
    """What a scaffolding run wrote, edited and skipped."""

    written: list[Path] = field(default_factory=list)
    patched: list[Path] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    def merge(self, report: PatchReport) -> None:
        self.patched.extend(report.patched)
        self.skipped.extend(report.skipped)


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Main scaffolding orchestrator.

    Given a ``Config`` with answers, generates:
    - Gemfile additions
    - Dockerfile and .dockerignore
    - bin/ scripts (entrypoint, actions-vars, build-image, release,
      create-app-name.js)
    - GitHub Actions workflows for deploys, tests and review apps
    - app.json / app.master.json, env files and the Airbrake initializer

    The database and application config edits run separately in
    :meth:`configure`, after dependencies are installed.
    """

    def __init__(self, config: Config) -> None:
        if config.answers is None:
            raise ValueError("Config.answers must be set before scaffolding")
        self.config = config
        self.renderer = TemplateRenderer()
        self.docker_gen = DockerGenerator(self.renderer)
        self.script_gen = ScriptGenerator(self.renderer)
        self.workflow_gen = WorkflowGenerator(self.renderer)
        self.manifest_gen = ManifestGenerator(self.renderer)
        self.rails_patcher = RailsPatcher(self.renderer)

    # -- Public API --------------------------------------------------------

    async def generate(self) -> ScaffoldResult:
        """Write every generated artifact into the target directory.

        Returns:
            A ``ScaffoldResult`` listing written and patched paths.
        """
        root = self.config.target_dir
        await asyncio.to_thread(root.mkdir, parents=True, exist_ok=True)

        context = self.build_context()
        result = ScaffoldResult()

        # 1. Gem groups (before bundle install)
        result.patched.append(await self.rails_patcher.update_gemfile(root, context))

        # 2. Container build files
        result.written.extend(await self.docker_gen.generate_all(root, context))

        # 3. bin/ scripts
        result.written.extend(
            await self.script_gen.generate_all(self.config.bin_dir, context)
        )

        # 4. CI/CD workflows
        workflows = await self.workflow_gen.generate_all(
            self.config.workflows_dir, context
        )
        result.written.extend(workflows.values())

        # 5. Heroku manifests, env files, initializer
        manifests = await self.manifest_gen.generate_all(root, context)
        result.written.extend(manifests.values())

        return result

    async def configure(self, result: ScaffoldResult | None = None) -> ScaffoldResult:
        """Apply the ``config/database.yml`` and ``config/application.rb`` edits.

        Edits are recorded on *result* when given, otherwise on a new one.
        """
        result = result if result is not None else ScaffoldResult()
        report = await self.rails_patcher.patch_config(
            self.config.target_dir, self.build_context()
        )
        result.merge(report)
        return result

    # -- Context building --------------------------------------------------

    def build_context(self) -> dict[str, Any]:
        """Build the Jinja2 template context from the config."""
        answers: ScaffoldAnswers = self.config.answers  # type: ignore[assignment]
        return {
            "app_name": answers.app_name,
            "staging_app_name": answers.staging_app_name,
            "repository": answers.repository,
            "repository_url": answers.repository_url,
            "pipeline": answers.pipeline,
            "runner": answers.runner,
            "ruby_version": self.config.ruby_version,
            "node_version": self.config.node_version,
        }
