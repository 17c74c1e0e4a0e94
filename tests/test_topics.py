"""Tests for recipe topic classification."""

from dashboard.topics import (
    ALL_TOPICS,
    OTHER_TOPIC,
    TOPICS,
    get_topic,
    recipes_by_topic,
    topic_for_recipe,
    topic_stats,
)
from models import AppData, RecipePlugin, SummaryStats

from conftest import PREFIX, make_recipe


def test_known_and_unknown_recipes():
    assert topic_for_recipe(PREFIX + "MigrateToJUnit5") == "test-frameworks"
    assert topic_for_recipe(PREFIX + "SetupJenkinsfile") == "parent-pom"
    assert topic_for_recipe(PREFIX + "SomethingNew") == OTHER_TOPIC


def test_get_topic_falls_back_to_all():
    assert get_topic("bom")["label"] == "BOM"
    assert get_topic("does-not-exist") == TOPICS[0]
    assert TOPICS[0]["id"] == ALL_TOPICS


def test_recipes_by_topic_sorted_by_applications(app_data):
    app_data.recipes.append(make_recipe(PREFIX + "AddCodeOwner", success=3))
    assert [r.recipe_id for r in recipes_by_topic(app_data, "parent-pom")] == [
        PREFIX + "AddCodeOwner",
        PREFIX + "SetupJenkinsfile",
        PREFIX + "UpgradeNextMajorParentVersion",
    ]
    assert len(recipes_by_topic(app_data)) == 4
    assert recipes_by_topic(app_data, "bom") == []


def test_topic_stats():
    a = make_recipe("x.A", success=2, fail=1)
    b = make_recipe("x.B", success=1)
    b.plugins.append(RecipePlugin(plugin_name="ko-0", status="success"))
    b.total_applications += 1
    b.success_count += 1
    stats = topic_stats([a, b])
    assert stats == {
        "total": 5,
        "success": 4,
        "fail": 1,
        "rate": "80.0",
        "uniquePlugins": 3,
        "recipeCount": 2,
    }


def test_topic_stats_empty():
    stats = topic_stats(recipes_by_topic(AppData([], [], SummaryStats()), "bom"))
    assert stats["rate"] == "0"
    assert stats["total"] == 0
