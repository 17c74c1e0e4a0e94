"""
Recipe to modernization topic classification
"""
from typing import Any, Dict, List

from models import AppData, RecipeReport

OTHER_TOPIC = 'other'  # Every recipe missing from TOPIC_MAP
ALL_TOPICS = 'all'

_PREFIX = 'io.jenkins.tools.pluginmodernizer.'

# Closed, hand-maintained mapping. Add one line per new recipe.
TOPIC_MAP = {
    # Parent POM
    _PREFIX + 'UpgradeNextMajorParentVersion': 'parent-pom',
    _PREFIX + 'SetupJenkinsfile': 'parent-pom',
    _PREFIX + 'AddCodeOwner': 'parent-pom',
    _PREFIX + 'SetupDependabot': 'parent-pom',
    _PREFIX + 'AutoMergeWorkflows': 'parent-pom',
    # BOM
    _PREFIX + 'UpgradeToRecommendCoreVersion': 'bom',
    _PREFIX + 'UpgradeToLatestJava11CoreVersion': 'bom',
    # Test Frameworks
    _PREFIX + 'MigrateToJUnit5': 'test-frameworks',
    _PREFIX + 'MigrateToJava25': 'test-frameworks',
    _PREFIX + 'RemoveOldJavaVersionForModernJenkins': 'test-frameworks',
    # Deprecated APIs
    _PREFIX + 'MigrateCommonsLang2ToLang3AndCommonText': 'deprecated-apis',
    _PREFIX + 'FixJellyIssues': 'deprecated-apis',
    _PREFIX + 'ReplaceLibrariesWithApiPlugin': 'deprecated-apis',
}

TOPICS = [
    {'id': ALL_TOPICS, 'label': 'All Recipes',
     'description': 'All modernization recipes across the ecosystem'},
    {'id': 'parent-pom', 'label': 'Parent POM',
     'description': 'Parent POM upgrades, Jenkinsfile setup, code ownership, and dependency management'},
    {'id': 'bom', 'label': 'BOM',
     'description': 'Bill of Materials and core version upgrades'},
    {'id': 'test-frameworks', 'label': 'Test Frameworks',
     'description': 'JUnit 5 migration, Java version upgrades, and test modernization'},
    {'id': 'deprecated-apis', 'label': 'Deprecated APIs',
     'description': 'Replacing deprecated libraries: Commons Lang, Jelly fixes, API plugin migrations'},
]


def topic_for_recipe(recipe_id: str) -> str:
    return TOPIC_MAP.get(recipe_id, OTHER_TOPIC)


def get_topic(topic_id: str) -> Dict[str, str]:
    """Topic definition by id, falling back to the 'all' pseudo-topic"""
    for topic in TOPICS:
        if topic['id'] == topic_id:
            return topic
    return TOPICS[0]


def recipes_by_topic(data: AppData, topic_id: str = ALL_TOPICS) -> List[RecipeReport]:
    """Recipes of one topic ('all' for every recipe), most applied first"""
    recipes = sorted(data.recipes, key=lambda r: r.total_applications, reverse=True)
    if topic_id == ALL_TOPICS:
        return recipes
    return [r for r in recipes if topic_for_recipe(r.recipe_id) == topic_id]


def topic_stats(recipes: List[RecipeReport]) -> Dict[str, Any]:
    """Totals over a set of recipes; rate is a one-decimal percentage string"""
    total = sum(r.total_applications for r in recipes)
    success = sum(r.success_count for r in recipes)
    fail = sum(r.failure_count for r in recipes)
    unique_plugins = {p.plugin_name for r in recipes for p in r.plugins}
    return {
        'total': total,
        'success': success,
        'fail': fail,
        'rate': f"{success / total * 100:.1f}" if total > 0 else '0',
        'uniquePlugins': len(unique_plugins),
        'recipeCount': len(recipes),
    }
