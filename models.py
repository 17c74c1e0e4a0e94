"""
Data models for plugin modernization reports and run tracking
"""
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from utils import logger


# (attribute, JSON key, default factory) for every known migration field
_MIGRATION_FIELDS = [
    ('key', 'key', str),
    ('migration_id', 'migrationId', str),
    ('migration_name', 'migrationName', str),
    ('migration_description', 'migrationDescription', str),
    ('migration_status', 'migrationStatus', str),
    ('pull_request_url', 'pullRequestUrl', str),
    ('pull_request_status', 'pullRequestStatus', str),
    ('additions', 'additions', int),
    ('deletions', 'deletions', int),
    ('changed_files', 'changedFiles', int),
    ('plugin_version', 'pluginVersion', str),
    ('jenkins_baseline', 'jenkinsBaseline', str),
    ('target_baseline', 'targetBaseline', str),
    ('effective_baseline', 'effectiveBaseline', str),
    ('jenkins_version', 'jenkinsVersion', str),
    ('timestamp', 'timestamp', str),
    ('tags', 'tags', list),
    ('dry_run', 'dryRun', bool),
    ('path', 'path', str),
    ('check_runs', 'checkRuns', dict),
    ('check_runs_summary', 'checkRunsSummary', str),
    ('default_branch', 'defaultBranch', str),
    ('default_branch_latest_commit_sha', 'defaultBranchLatestCommitSha', str),
]
_MIGRATION_KEYS = {json_key for _, json_key, _ in _MIGRATION_FIELDS}


@dataclass
class Migration:
    """One application of one recipe to one plugin at one point in time"""
    key: str = ''
    migration_id: str = ''
    migration_name: str = ''
    migration_description: str = ''
    migration_status: str = ''  # 'success', 'fail' or ''
    pull_request_url: str = ''
    pull_request_status: str = ''  # 'open', 'closed', 'merged' or ''
    additions: int = 0
    deletions: int = 0
    changed_files: int = 0
    plugin_version: str = ''
    jenkins_baseline: str = ''
    target_baseline: str = ''
    effective_baseline: str = ''
    jenkins_version: str = ''
    timestamp: str = ''
    tags: List[str] = field(default_factory=list)
    dry_run: bool = False
    path: str = ''
    check_runs: Dict[str, Any] = field(default_factory=dict)
    check_runs_summary: str = ''
    default_branch: str = ''
    default_branch_latest_commit_sha: str = ''
    # Upstream keys this schema doesn't know about, written back unchanged
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Migration':
        kwargs = {}
        for attr, json_key, default in _MIGRATION_FIELDS:
            value = data.get(json_key)
            kwargs[attr] = default() if value is None else value
        kwargs['extra'] = {k: v for k, v in data.items() if k not in _MIGRATION_KEYS}
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        result = {json_key: getattr(self, attr) for attr, json_key, _ in _MIGRATION_FIELDS}
        result.update(self.extra)
        return result


@dataclass
class PluginReport:
    """One plugin's full migration history"""
    plugin_name: str
    plugin_repository: str = ''
    migrations: List[Migration] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PluginReport':
        known = ('pluginName', 'pluginRepository', 'migrations')
        return cls(
            plugin_name=data.get('pluginName') or '',
            plugin_repository=data.get('pluginRepository') or '',
            migrations=[Migration.from_dict(m) for m in data.get('migrations') or []],
            extra={k: v for k, v in data.items() if k not in known},
        )

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'pluginName': self.plugin_name,
            'pluginRepository': self.plugin_repository,
            'migrations': [m.to_dict() for m in self.migrations],
        }
        result.update(self.extra)
        return result


@dataclass
class RecipePlugin:
    """One plugin's application of a recipe, as listed in a recipe report"""
    plugin_name: str
    status: str = ''
    timestamp: str = ''

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RecipePlugin':
        return cls(
            plugin_name=data.get('pluginName') or '',
            status=data.get('status') or '',
            timestamp=data.get('timestamp') or '',
        )

    def to_dict(self) -> Dict[str, Any]:
        return {'pluginName': self.plugin_name, 'status': self.status, 'timestamp': self.timestamp}


@dataclass
class RecipeReport:
    """
    One recipe's rollup across all plugins

    success_count + failure_count never exceeds total_applications; the gap is
    applications with an empty/unknown status.
    """
    recipe_id: str
    total_applications: int = 0
    success_count: int = 0
    failure_count: int = 0
    plugins: List[RecipePlugin] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RecipeReport':
        known = ('recipeId', 'totalApplications', 'successCount', 'failureCount', 'plugins')
        return cls(
            recipe_id=data.get('recipeId') or '',
            total_applications=data.get('totalApplications') or 0,
            success_count=data.get('successCount') or 0,
            failure_count=data.get('failureCount') or 0,
            plugins=[RecipePlugin.from_dict(p) for p in data.get('plugins') or []],
            extra={k: v for k, v in data.items() if k not in known},
        )

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'recipeId': self.recipe_id,
            'totalApplications': self.total_applications,
            'successCount': self.success_count,
            'failureCount': self.failure_count,
            'plugins': [p.to_dict() for p in self.plugins],
        }
        result.update(self.extra)
        return result


@dataclass
class RecipeFailure:
    recipe: str
    failures: int

    def to_dict(self) -> Dict[str, Any]:
        return {'recipe': self.recipe, 'failures': self.failures}


@dataclass
class SummaryStats:
    """Ecosystem-wide rollup of migration and pull request health"""
    total_migrations: int = 0
    failed_migrations: int = 0
    success_rate: float = 0
    total_prs: int = 0
    open_prs: int = 0
    closed_prs: int = 0
    merged_prs: int = 0
    total_plugins: int = 0
    # Sorted by failures, highest first
    failures_by_recipe: List[RecipeFailure] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SummaryStats':
        return cls(
            total_migrations=data.get('totalMigrations') or 0,
            failed_migrations=data.get('failedMigrations') or 0,
            success_rate=data.get('successRate') or 0,
            total_prs=data.get('totalPRs') or 0,
            open_prs=data.get('openPRs') or 0,
            closed_prs=data.get('closedPRs') or 0,
            merged_prs=data.get('mergedPRs') or 0,
            total_plugins=data.get('totalPlugins') or 0,
            failures_by_recipe=[
                RecipeFailure(recipe=f.get('recipe', ''), failures=f.get('failures', 0))
                for f in data.get('failuresByRecipe') or []
            ],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'totalMigrations': self.total_migrations,
            'failedMigrations': self.failed_migrations,
            'successRate': self.success_rate,
            'totalPRs': self.total_prs,
            'openPRs': self.open_prs,
            'closedPRs': self.closed_prs,
            'mergedPRs': self.merged_prs,
            'totalPlugins': self.total_plugins,
            'failuresByRecipe': [f.to_dict() for f in self.failures_by_recipe],
        }


@dataclass
class AppData:
    """Snapshot of the three bundles as loaded by the dashboard"""
    plugins: List[PluginReport]
    recipes: List[RecipeReport]
    summary: SummaryStats

    @classmethod
    def from_bundles(cls, plugins: List[Dict], recipes: List[Dict], summary: Dict) -> 'AppData':
        return cls(
            plugins=[PluginReport.from_dict(p) for p in plugins],
            recipes=[RecipeReport.from_dict(r) for r in recipes],
            summary=SummaryStats.from_dict(summary),
        )


@dataclass
class Recommendation:
    text: str
    severity: str  # 'high', 'medium' or 'low'
    url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {'text': self.text, 'severity': self.severity}
        if self.url:
            result['url'] = self.url
        return result


@dataclass
class FetchSummary:
    """Track upstream fetch statistics for one build run"""
    total_items: int = 0
    succeeded: int = 0
    failed: int = 0
    errors: List[str] = None

    def __post_init__(self):
        if self.errors is None:
            self.errors = []
        # Plugin fetches within a batch report from worker threads
        self._lock = threading.Lock()

    def add_success(self):
        with self._lock:
            self.total_items += 1
            self.succeeded += 1

    def add_failure(self, error_msg: str):
        with self._lock:
            self.total_items += 1
            self.failed += 1
            self.errors.append(error_msg)

    def print_summary(self):
        """Print fetch summary report"""
        logger.info("\n" + "="*60)
        logger.info("FETCH SUMMARY")
        logger.info("="*60)
        logger.info(f"Total Documents Attempted: {self.total_items}")
        logger.info(f"Succeeded: {self.succeeded}")
        logger.info(f"Failed: {self.failed}")
        if self.errors:
            logger.info(f"\nErrors ({len(self.errors)}):")
            for i, error in enumerate(self.errors, 1):
                logger.info(f"  {i}. {error}")
        logger.info("="*60 + "\n")
