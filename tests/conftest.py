"""Shared pytest fixtures for the herokit test suite.

Provides reusable fixtures for:
- Wizard answers and run configuration
- A minimal Rails project skeleton
- Template context dictionaries
- Scripted prompt callables for the wizard
"""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Any, Callable

import pytest

from herokit.config import Config, ScaffoldAnswers


# ---------------------------------------------------------------------------
# Answers & Config
# ---------------------------------------------------------------------------

@pytest.fixture
def answers() -> ScaffoldAnswers:
    """Answers as a user would give them, with explicit staging and repo."""
    return ScaffoldAnswers(
        app_name="shop",
        staging_app_name="shop-stage",
        repository="acme/shop",
        pipeline="0f9b2c4e-1111-2222-3333-444455556666",
        runner="ubuntu-latest",
    )


@pytest.fixture
def template_context(answers: ScaffoldAnswers) -> dict[str, Any]:
    """Template context matching ``ProjectGenerator.build_context``."""
    return {
        "app_name": answers.app_name,
        "staging_app_name": answers.staging_app_name,
        "repository": answers.repository,
        "repository_url": answers.repository_url,
        "pipeline": answers.pipeline,
        "runner": answers.runner,
        "ruby_version": "2.6.6",
        "node_version": "12",
    }


# ---------------------------------------------------------------------------
# Rails project skeleton
# ---------------------------------------------------------------------------

GEMFILE = textwrap.dedent("""\
    source 'https://rubygems.org'
    git_source(:github) { |repo| "https://github.com/#{repo}.git" }

    ruby '2.6.6'

    gem 'rails', '~> 6.0.3'
    gem 'puma', '~> 4.1'
""")

DATABASE_YML = textwrap.dedent("""\
    default: &default
      adapter: postgresql
      encoding: unicode
      pool: <%= ENV.fetch("RAILS_MAX_THREADS") { 5 } %>

    development:
      <<: *default
      database: shop_development

    test:
      <<: *default
      database: shop_test

    production:
      <<: *default
      database: shop_production
      username: shop
      password: <%= ENV['SHOP_DATABASE_PASSWORD'] %>
""")

APPLICATION_RB = textwrap.dedent("""\
    require_relative 'boot'

    require 'rails/all'

    Bundler.require(*Rails.groups)

    module Shop
      class Application < Rails::Application
        config.load_defaults 6.0
      end
    end
""")


@pytest.fixture
def rails_project(tmp_path: Path) -> Path:
    """Temporary directory shaped like a fresh ``rails new`` project."""
    root = tmp_path / "shop"
    (root / "config").mkdir(parents=True)
    (root / "bin").mkdir()
    (root / "Gemfile").write_text(GEMFILE, encoding="utf-8")
    (root / "config" / "database.yml").write_text(DATABASE_YML, encoding="utf-8")
    (root / "config" / "application.rb").write_text(APPLICATION_RB, encoding="utf-8")
    yield root


@pytest.fixture
def config(rails_project: Path, answers: ScaffoldAnswers) -> Config:
    """Config pointing at the Rails skeleton, installs skipped."""
    return Config(target_dir=rails_project, skip_install=True, answers=answers)


# ---------------------------------------------------------------------------
# Wizard helpers
# ---------------------------------------------------------------------------

@pytest.fixture
def scripted_prompt() -> Callable[[list[str]], tuple[Callable[[str], str], list[str]]]:
    """Factory for a prompt callable that replays *replies* in order.

    Returns ``(prompt_fn, questions)``; ``questions`` records what was asked.
    """

    def _factory(replies: list[str]) -> tuple[Callable[[str], str], list[str]]:
        queue = list(replies)
        asked: list[str] = []

        def _prompt(question: str) -> str:
            asked.append(question)
            return queue.pop(0)

        return _prompt, asked

    return _factory
