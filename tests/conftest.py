"""Shared pytest fixtures for plugin modernizer stats tests."""

import os
import tempfile

# utils configures a file log handler at import time; keep test logs out of the repo
os.environ.setdefault("MODERNIZER_LOGS_DIR", tempfile.mkdtemp(prefix="modernizer-logs-"))

import pytest  # noqa: E402

from models import (  # noqa: E402
    AppData,
    Migration,
    PluginReport,
    RecipePlugin,
    RecipeReport,
    SummaryStats,
)

PREFIX = "io.jenkins.tools.pluginmodernizer."


def make_migration(**overrides) -> Migration:
    values = dict(
        key="2025-07-23T07-51-56.json",
        migration_id=PREFIX + "SetupJenkinsfile",
        migration_name="Setup Jenkinsfile",
        migration_status="success",
        pull_request_url="",
        pull_request_status="",
        timestamp="2025-07-23T07-51-56",
    )
    values.update(overrides)
    return Migration(**values)


def make_recipe(recipe_id: str, success: int = 0, fail: int = 0, unknown: int = 0) -> RecipeReport:
    plugins = (
        [RecipePlugin(plugin_name=f"ok-{i}", status="success") for i in range(success)]
        + [RecipePlugin(plugin_name=f"ko-{i}", status="fail") for i in range(fail)]
        + [RecipePlugin(plugin_name=f"na-{i}", status="") for i in range(unknown)]
    )
    return RecipeReport(
        recipe_id=recipe_id,
        total_applications=success + fail + unknown,
        success_count=success,
        failure_count=fail,
        plugins=plugins,
    )


@pytest.fixture
def app_data():
    """Small hand-built dataset with three plugins."""
    git = PluginReport(
        plugin_name="git",
        plugin_repository="https://github.com/jenkinsci/git-plugin.git",
        migrations=[
            make_migration(
                migration_id=PREFIX + "MigrateToJUnit5",
                timestamp="2026-01-15T10-00-00",
                pull_request_url="https://github.com/jenkinsci/git-plugin/pull/1",
                pull_request_status="merged",
            ),
            make_migration(
                migration_id=PREFIX + "SetupJenkinsfile",
                timestamp="2026-01-20T09-00-00",
                pull_request_url="https://github.com/jenkinsci/git-plugin/pull/2",
                pull_request_status="open",
            ),
        ],
    )
    credentials = PluginReport(
        plugin_name="credentials",
        plugin_repository="https://github.com/jenkinsci/credentials-plugin.git",
        migrations=[
            make_migration(
                migration_id=PREFIX + "UpgradeNextMajorParentVersion",
                migration_status="fail",
                timestamp="2026-01-15T22-00-00",
            ),
        ],
    )
    junit = PluginReport(
        plugin_name="junit",
        plugin_repository="https://github.com/jenkinsci/junit-plugin.git",
        migrations=[],
    )
    recipes = [
        make_recipe(PREFIX + "MigrateToJUnit5", success=1),
        make_recipe(PREFIX + "SetupJenkinsfile", success=1),
        make_recipe(PREFIX + "UpgradeNextMajorParentVersion", fail=1),
    ]
    summary = SummaryStats(total_migrations=3, failed_migrations=1, success_rate=66.67, total_plugins=3)
    return AppData(plugins=[git, credentials, junit], recipes=recipes, summary=summary)
