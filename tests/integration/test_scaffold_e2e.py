"""Integration tests for a full scaffolding run.

These run the wizard (with scripted replies), the generator and the Rails
edits against a skeleton Rails project and verify the generated files are
well-formed.  No external tools (bundle, yarn, docker, node) are required.
"""

from __future__ import annotations

import json
import os
import re
from pathlib import Path

import pytest
import yaml

from herokit.config import Config
from herokit.naming import derive
from herokit.pipeline import Pipeline
from herokit.wizard import ask_answers


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def _scaffold(rails_project: Path, scripted_prompt, hosted: bool) -> Path:
    prompt, _asked = scripted_prompt(["shop", "", "pipe-1234", ""])
    config = Config(target_dir=rails_project, skip_install=True)
    pipeline = Pipeline(config, ask=lambda: ask_answers(prompt, lambda q: hosted))
    await pipeline.run()
    return rails_project


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

@pytest.mark.integration
class TestScaffoldValidation:
    """Test that a scaffolding run produces a deployable setup."""

    async def test_full_run(self, rails_project: Path, scripted_prompt) -> None:
        root = await _scaffold(rails_project, scripted_prompt, hosted=False)

        for relative in (
            "Dockerfile",
            ".dockerignore",
            "app.json",
            "app.master.json",
            ".env.development",
            ".env.test",
            "config/initializers/airbrake.rb",
        ):
            assert (root / relative).is_file(), f"Missing {relative}"

        for script in ("entrypoint", "actions-vars", "build-image", "release"):
            assert os.access(root / "bin" / script, os.X_OK), f"bin/{script} not executable"

    async def test_workflows_parse(self, rails_project: Path, scripted_prompt) -> None:
        root = await _scaffold(rails_project, scripted_prompt, hosted=False)
        workflows = sorted((root / ".github" / "workflows").glob("*.yml"))
        assert len(workflows) == 5
        for path in workflows:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
            for job in data["jobs"].values():
                assert job["runs-on"] == "self-hosted"
                assert job["steps"][0]["uses"].startswith("actions/checkout@")

    async def test_hosted_runner(self, rails_project: Path, scripted_prompt) -> None:
        root = await _scaffold(rails_project, scripted_prompt, hosted=True)
        data = yaml.safe_load(
            (root / ".github" / "workflows" / "deploy-master.yml").read_text(encoding="utf-8")
        )
        assert data["jobs"]["build-and-deploy"]["runs-on"] == "ubuntu-latest"

    async def test_defaults_applied(self, rails_project: Path, scripted_prompt) -> None:
        root = await _scaffold(rails_project, scripted_prompt, hosted=False)
        app = json.loads((root / "app.json").read_text(encoding="utf-8"))
        assert app["name"] == "shop"
        assert app["repository"] == "https://github.com/zeitdev/shop"
        create = yaml.safe_load(
            (root / ".github" / "workflows" / "create-review-app.yml").read_text(encoding="utf-8")
        )
        step = create["jobs"]["create-review-app"]["steps"][2]
        assert step["with"]["env_from"] == "shop-staging"
        assert step["with"]["pipeline"] == "pipe-1234"

    async def test_rails_files_edited(self, rails_project: Path, scripted_prompt) -> None:
        root = await _scaffold(rails_project, scripted_prompt, hosted=False)
        gemfile = (root / "Gemfile").read_text(encoding="utf-8")
        assert "gem 'rails-i18n', '~> 6.0.0'" in gemfile
        database_text = (root / "config" / "database.yml").read_text(encoding="utf-8")
        assert "  url: <%= ENV['DATABASE_URL'] %>\n" in database_text
        database = yaml.safe_load(re.sub(r"<%=.*?%>", "erb", database_text))
        assert database["production"]["url"] == "erb"
        assert database["production"]["adapter"] == "postgresql"
        application = (root / "config" / "application.rb").read_text(encoding="utf-8")
        assert "config.i18n.default_locale = ENV['LOCALE'] || 'en'" in application

    async def test_review_app_names_fit_heroku(self) -> None:
        for branch in ("feature/login", "dependabot/npm_and_yarn/lodash-4.17.21", "x"):
            name = derive("shop", branch, "f" * 64)
            assert len(name) <= 30
            assert name.startswith("shop-")
