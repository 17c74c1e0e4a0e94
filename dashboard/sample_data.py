"""
Synthetic dataset served when the real bundles cannot be loaded
"""
import random
from typing import Dict, List, Optional

from aggregators import build_summary
from config import SAMPLE_DATA_SEED
from models import AppData, Migration, PluginReport, RecipePlugin, RecipeReport

from .queries import recipe_display_name

RECIPE_PREFIX = 'io.jenkins.tools.pluginmodernizer.'

SAMPLE_RECIPE_IDS = [RECIPE_PREFIX + name for name in (
    'SetupJenkinsfile',
    'UpgradeNextMajorParentVersion',
    'UpgradeParent6Version',
    'MigrateToJUnit5',
    'MigrateToJava25',
    'UpgradeToRecommendCoreVersion',
    'SwitchToRenovate',
    'AutoMergeWorkflows',
    'RemoveOldJavaVersionForModernJenkins',
    'AddCodeOwner',
    'SetupDependabot',
    'UpgradeBomVersion',
    'MigrateCommonsLang2ToLang3AndCommonText',
    'UpgradeToLatestJava11CoreVersion',
    'SetupRenovate',
    'UpgradeParent5Version',
    'FixJellyIssues',
)]

SAMPLE_PLUGIN_NAMES = [
    'credentials', 'git', 'pipeline-model-definition', 'workflow-cps',
    'kubernetes', 'docker-workflow', 'blueocean', 'junit',
    'matrix-auth', 'ssh-credentials', 'github', 'gradle',
    'maven-invoker-plugin', 'configuration-as-code', 'ldap',
    'active-directory', 'artifactory', 'sonar', 'checkstyle',
    'cobertura', 'jacoco', 'findbugs', 'pmd', 'warnings-ng',
    'badge', 'build-blocker-plugin', 'cloudbees-folder',
    'ec2', 'amazon-ecs', 'azure-vm-agents', 'timestamper',
    'ansicolor', 'rebuild', 'conditional-buildstep', 'parameterized-trigger',
    'copyartifact', 'email-ext', 'slack', 'mattermost',
    'jira', 'bitbucket', 'gitlab-plugin', 'gerrit-trigger',
    'dashboard-view', 'build-monitor-plugin', 'view-job-filters',
    'role-strategy', 'authorize-project', 'script-security',
]

SAMPLE_MONTHS = ['2025-06', '2025-07', '2025-08', '2025-09', '2025-10', '2025-11', '2025-12', '2026-01', '2026-02']


def _random_timestamp(rng: random.Random, year_month: str) -> str:
    return (f"{year_month}-{rng.randint(1, 28):02d}"
            f"T{rng.randint(0, 23):02d}-{rng.randint(0, 59):02d}-{rng.randint(0, 59):02d}")


def _random_pr_status(rng: random.Random) -> str:
    r = rng.random()
    if r < 0.15:
        return 'open'
    if r < 0.20:
        return 'closed'
    return 'merged'


def generate_plugins(rng: random.Random) -> List[PluginReport]:
    plugins = []
    for name in SAMPLE_PLUGIN_NAMES:
        recipe_ids = rng.sample(SAMPLE_RECIPE_IDS, rng.randint(1, 6))
        migrations = []
        for recipe_id in recipe_ids:
            status = 'success' if rng.random() > 0.25 else 'fail'
            month = rng.choice(SAMPLE_MONTHS)
            timestamp = _random_timestamp(rng, month)
            recipe_name = recipe_display_name(recipe_id)
            migrations.append(Migration(
                key=f"{timestamp}.json",
                migration_id=recipe_id,
                migration_name=recipe_name,
                migration_description=f"Apply {recipe_name} recipe to {name}",
                migration_status=status,
                pull_request_url=(f"https://github.com/jenkinsci/{name}/pull/{rng.randint(1, 50)}"
                                  if status == 'success' else ''),
                pull_request_status=_random_pr_status(rng) if status == 'success' else '',
                additions=rng.randint(0, 199),
                deletions=rng.randint(0, 99),
                changed_files=rng.randint(1, 15),
                plugin_version=f"{rng.randint(1, 5)}.{rng.randint(0, 19)}",
                target_baseline='2.361',
                effective_baseline='2.361',
                jenkins_version='2.361',
                timestamp=timestamp,
                tags=['chore'],
                check_runs_summary='success',
                default_branch='main',
                default_branch_latest_commit_sha='abc123',
            ))
        plugins.append(PluginReport(
            plugin_name=name,
            plugin_repository=f"https://github.com/jenkinsci/{name}.git",
            migrations=migrations,
        ))
    return plugins


def generate_recipes(plugins: List[PluginReport]) -> List[RecipeReport]:
    """Roll plugin migrations up per recipe, the way the upstream recipe reports are built"""
    recipes = []
    for recipe_id in SAMPLE_RECIPE_IDS:
        applications = [
            RecipePlugin(plugin_name=p.plugin_name, status=m.migration_status, timestamp=m.timestamp)
            for p in plugins
            for m in p.migrations
            if m.migration_id == recipe_id
        ]
        recipes.append(RecipeReport(
            recipe_id=recipe_id,
            total_applications=len(applications),
            success_count=sum(1 for a in applications if a.status == 'success'),
            failure_count=sum(1 for a in applications if a.status == 'fail'),
            plugins=applications,
        ))
    return recipes


_sample_cache: Dict[int, AppData] = {}


def get_sample_data(seed: Optional[int] = None) -> AppData:
    """
    Build (once per seed) the synthetic dataset

    The same seed always yields the same dataset.
    """
    seed = SAMPLE_DATA_SEED if seed is None else seed
    if seed not in _sample_cache:
        rng = random.Random(seed)
        plugins = generate_plugins(rng)
        recipes = generate_recipes(plugins)
        _sample_cache[seed] = AppData(plugins=plugins, recipes=recipes,
                                      summary=build_summary(plugins, recipes))
    return _sample_cache[seed]
