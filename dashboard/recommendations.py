"""
Recommended next steps for a single plugin
"""
from typing import List

from models import PluginReport, Recommendation

_PREFIX = 'io.jenkins.tools.pluginmodernizer.'

# Fixed order; each entry fires when its recipe failed at least once for the plugin
FAILED_RECIPE_STEPS = [
    (_PREFIX + 'SetupJenkinsfile', 'Set up a Jenkinsfile for CI/CD', 'high'),
    (_PREFIX + 'UpgradeNextMajorParentVersion', 'Upgrade to the latest parent POM version', 'high'),
    (_PREFIX + 'MigrateToJUnit5', 'Migrate test suite from JUnit 4 to JUnit 5', 'medium'),
    (_PREFIX + 'MigrateCommonsLang2ToLang3AndCommonText', 'Replace deprecated Commons Lang 2 usage with Lang 3', 'medium'),
    (_PREFIX + 'UpgradeToRecommendCoreVersion', 'Upgrade to the recommended Jenkins core version', 'medium'),
    (_PREFIX + 'SetupDependabot', 'Enable Dependabot for dependency updates', 'low'),
    (_PREFIX + 'AddCodeOwner', 'Add a CODEOWNERS file', 'low'),
]

FULLY_MODERNIZED_TEXT = 'This plugin is fully modernized — great work! 🎉'


def get_recommended_steps(plugin: PluginReport) -> List[Recommendation]:
    """
    Derive ordered next steps from a plugin's migration history

    Every applicable rule fires: open PRs first, then one fixed step per failed
    recipe, then the celebratory entry if nothing else applied and every
    migration succeeded. A plugin without migrations gets no steps.
    """
    steps = []
    failed_recipes = {m.migration_id for m in plugin.migrations if m.migration_status == 'fail'}
    open_prs = [m for m in plugin.migrations if m.pull_request_status == 'open']

    if open_prs:
        plural = 's' if len(open_prs) > 1 else ''
        steps.append(Recommendation(
            text=f"Review and merge {len(open_prs)} open pull request{plural}",
            url=open_prs[0].pull_request_url or None,
            severity='high',
        ))

    for recipe_id, text, severity in FAILED_RECIPE_STEPS:
        if recipe_id in failed_recipes:
            steps.append(Recommendation(text=text, severity=severity))

    if not steps and plugin.migrations and all(m.migration_status == 'success' for m in plugin.migrations):
        steps.append(Recommendation(text=FULLY_MODERNIZED_TEXT, severity='low'))

    return steps
