"""Tests for the synthetic fallback dataset."""

from dashboard.sample_data import SAMPLE_PLUGIN_NAMES, SAMPLE_RECIPE_IDS, get_sample_data


def test_same_seed_same_dataset():
    a = get_sample_data(seed=7)
    b = get_sample_data(seed=7)
    assert [p.to_dict() for p in a.plugins] == [p.to_dict() for p in b.plugins]


def test_shape():
    data = get_sample_data()
    assert [p.plugin_name for p in data.plugins] == SAMPLE_PLUGIN_NAMES
    assert [r.recipe_id for r in data.recipes] == SAMPLE_RECIPE_IDS
    for plugin in data.plugins:
        assert 1 <= len(plugin.migrations) <= 6
        for m in plugin.migrations:
            # Only successful migrations carry a pull request
            assert bool(m.pull_request_url) == (m.migration_status == "success")


def test_summary_is_consistent():
    data = get_sample_data()
    migrations = [m for p in data.plugins for m in p.migrations]
    failed = sum(1 for m in migrations if m.migration_status == "fail")
    assert data.summary.total_migrations == len(migrations)
    assert data.summary.failed_migrations == failed
    assert data.summary.total_plugins == len(SAMPLE_PLUGIN_NAMES)
    assert sum(r.total_applications for r in data.recipes) == len(migrations)
    failures = [f.failures for f in data.summary.failures_by_recipe]
    assert failures == sorted(failures, reverse=True)
    assert all(f > 0 for f in failures)
