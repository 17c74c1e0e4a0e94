"""Tests for bundle record conversion."""

from models import AppData, FetchSummary, Migration, PluginReport, RecipeReport, SummaryStats


class TestMigration:
    def test_missing_fields_take_defaults(self):
        m = Migration.from_dict({"migrationId": "x.Y", "pullRequestUrl": None})
        assert m.migration_id == "x.Y"
        assert m.pull_request_url == ""
        assert m.additions == 0
        assert m.tags == []
        assert m.check_runs == {}
        assert m.extra == {}

    def test_unknown_keys_survive_round_trip(self):
        raw = {
            "key": "2025-07-23T07-51-56.json",
            "migrationId": "io.jenkins.tools.pluginmodernizer.SetupJenkinsfile",
            "migrationStatus": "success",
            "tags": ["chore", "dependencies"],
            "checkRuns": {"ci/jenkins": {"conclusion": "success"}},
            "futureField": {"nested": [1, 2, 3]},
        }
        out = Migration.from_dict(raw).to_dict()
        assert out["futureField"] == {"nested": [1, 2, 3]}
        assert out["tags"] == ["chore", "dependencies"]
        assert out["checkRuns"] == {"ci/jenkins": {"conclusion": "success"}}
        assert out["migrationStatus"] == "success"


class TestPluginReport:
    def test_round_trip_with_extra(self):
        raw = {
            "pluginName": "git",
            "pluginRepository": "https://github.com/jenkinsci/git-plugin.git",
            "migrations": [{"migrationId": "a.B", "timestamp": "2026-01-01T00-00-00"}],
            "owner": "someone",
        }
        report = PluginReport.from_dict(raw)
        assert report.plugin_name == "git"
        assert len(report.migrations) == 1
        out = report.to_dict()
        assert out["owner"] == "someone"
        assert out["migrations"][0]["timestamp"] == "2026-01-01T00-00-00"


class TestRecipeAndSummary:
    def test_recipe_report(self):
        raw = {
            "recipeId": "a.B",
            "totalApplications": 3,
            "successCount": 1,
            "failureCount": 1,
            "plugins": [{"pluginName": "git", "status": "fail", "timestamp": "t"}],
        }
        assert RecipeReport.from_dict(raw).to_dict() == raw

    def test_summary_round_trip(self):
        raw = {
            "totalMigrations": 10,
            "failedMigrations": 2,
            "successRate": 80.0,
            "totalPRs": 5,
            "openPRs": 1,
            "closedPRs": 1,
            "mergedPRs": 3,
            "totalPlugins": 4,
            "failuresByRecipe": [{"recipe": "a.B", "failures": 2}],
        }
        assert SummaryStats.from_dict(raw).to_dict() == raw

    def test_app_data_from_bundles(self):
        data = AppData.from_bundles([{"pluginName": "git", "migrations": []}], [], {})
        assert data.plugins[0].plugin_name == "git"
        assert data.summary.total_migrations == 0


class TestFetchSummary:
    def test_tracks_successes_and_failures(self):
        summary = FetchSummary()
        summary.add_success()
        summary.add_failure("plugin x: HTTP 404")
        assert summary.total_items == 2
        assert summary.succeeded == 1
        assert summary.failed == 1
        assert summary.errors == ["plugin x: HTTP 404"]
        summary.print_summary()
