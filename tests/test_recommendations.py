"""Tests for per-plugin recommended steps."""

from dashboard.recommendations import FULLY_MODERNIZED_TEXT, get_recommended_steps
from models import PluginReport

from conftest import PREFIX, make_migration


def _plugin(*migrations):
    return PluginReport(plugin_name="p", plugin_repository="", migrations=list(migrations))


def test_failed_jenkinsfile_only():
    plugin = _plugin(make_migration(migration_id=PREFIX + "SetupJenkinsfile", migration_status="fail"))
    steps = get_recommended_steps(plugin)
    assert len(steps) == 1
    assert steps[0].text == "Set up a Jenkinsfile for CI/CD"
    assert steps[0].severity == "high"
    assert steps[0].url is None


def test_open_prs_come_first_with_first_url():
    plugin = _plugin(
        make_migration(pull_request_url="https://example/pull/1", pull_request_status="open"),
        make_migration(pull_request_url="https://example/pull/2", pull_request_status="open"),
        make_migration(migration_id=PREFIX + "AddCodeOwner", migration_status="fail"),
        make_migration(migration_id=PREFIX + "MigrateToJUnit5", migration_status="fail"),
    )
    steps = get_recommended_steps(plugin)
    assert [s.text for s in steps] == [
        "Review and merge 2 open pull requests",
        "Migrate test suite from JUnit 4 to JUnit 5",
        "Add a CODEOWNERS file",
    ]
    assert steps[0].url == "https://example/pull/1"
    assert [s.severity for s in steps] == ["high", "medium", "low"]


def test_single_open_pr_wording():
    steps = get_recommended_steps(_plugin(make_migration(pull_request_url="u", pull_request_status="open")))
    assert steps[0].text == "Review and merge 1 open pull request"
    assert steps[0].to_dict() == {"text": "Review and merge 1 open pull request", "severity": "high", "url": "u"}


def test_all_succeeded_is_celebrated():
    steps = get_recommended_steps(_plugin(make_migration(), make_migration(pull_request_status="merged")))
    assert [s.text for s in steps] == [FULLY_MODERNIZED_TEXT]
    assert steps[0].text == "This plugin is fully modernized — great work! 🎉"
    assert steps[0].severity == "low"


def test_unmapped_failure_gets_no_celebration():
    steps = get_recommended_steps(_plugin(make_migration(migration_id=PREFIX + "FixJellyIssues",
                                                         migration_status="fail")))
    assert steps == []


def test_no_migrations():
    assert get_recommended_steps(_plugin()) == []
