"""
Read-only queries over the loaded bundles: lookups, explorer rows, filtering,
sorting, pagination and the migration timeline.

Nothing here mutates the AppData it is given, so every function is safe to call
from concurrent request handlers.
"""
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from config import PAGE_SIZE, PAGE_WINDOW
from models import AppData, Migration, PluginReport, RecipePlugin, RecipeReport

ROW_FIELDS = (
    'pluginName',
    'migrationCount',
    'successCount',
    'failCount',
    'latestMigration',
    'prsMerged',
    'prsOpen',
    'latestRecipe',
)

STATUS_FILTERS = ('all', 'success', 'fail')
PR_FILTERS = ('all', 'open', 'merged')

# Capitals that start a new word; runs like "JUnit" stay together
_CAPITAL = re.compile(r'(?<=[a-z0-9])([A-Z])')


def recipe_display_name(recipe_id: str) -> str:
    """
    Human readable label for a recipe id

    'io.jenkins.tools.pluginmodernizer.MigrateToJUnit5' -> 'Migrate To JUnit5'
    """
    name = recipe_id.split('.')[-1]
    return _CAPITAL.sub(r' \1', name).strip()


def get_plugin_by_name(data: AppData, name: str) -> Optional[PluginReport]:
    for plugin in data.plugins:
        if plugin.plugin_name == name:
            return plugin
    return None


def get_recipe_by_id(data: AppData, recipe_id: str) -> Optional[RecipeReport]:
    for recipe in data.recipes:
        if recipe.recipe_id == recipe_id:
            return recipe
    return None


def get_unique_recipe_ids(data: AppData) -> List[str]:
    return [r.recipe_id for r in data.recipes]


def get_plugins_with_failures(data: AppData) -> List[PluginReport]:
    return [p for p in data.plugins if any(m.migration_status == 'fail' for m in p.migrations)]


def sorted_migrations(plugin: PluginReport) -> List[Migration]:
    """Migrations latest first (timestamps compare chronologically as strings)"""
    return sorted(plugin.migrations, key=lambda m: m.timestamp or '', reverse=True)


def plugin_stats(plugin: PluginReport) -> Dict[str, Any]:
    """Headline numbers for the plugin detail view"""
    migrations = plugin.migrations
    repository_url = plugin.plugin_repository.replace('.git', '', 1)
    return {
        'successCount': sum(1 for m in migrations if m.migration_status == 'success'),
        'failCount': sum(1 for m in migrations if m.migration_status == 'fail'),
        'mergedPRs': sum(1 for m in migrations if m.pull_request_status == 'merged'),
        'openPRs': sum(1 for m in migrations if m.pull_request_status == 'open'),
        'repositoryUrl': repository_url,
    }


def plugin_row(plugin: PluginReport) -> Dict[str, Any]:
    """Flatten one plugin into an explorer row"""
    migrations = plugin.migrations
    latest = sorted_migrations(plugin)[0] if migrations else None
    return {
        'pluginName': plugin.plugin_name,
        'migrationCount': len(migrations),
        'successCount': sum(1 for m in migrations if m.migration_status == 'success'),
        'failCount': sum(1 for m in migrations if m.migration_status == 'fail'),
        'latestMigration': (latest.timestamp or '')[:10] if latest else '',
        'prsMerged': sum(1 for m in migrations if m.pull_request_status == 'merged'),
        'prsOpen': sum(1 for m in migrations if m.pull_request_status == 'open'),
        'latestRecipe': recipe_display_name(latest.migration_id) if latest else '',
    }


def flatten_rows(data: AppData) -> List[Dict[str, Any]]:
    return [plugin_row(p) for p in data.plugins]


def filter_rows(rows: List[Dict[str, Any]], search: str = '', status: str = 'all',
                pr: str = 'all') -> List[Dict[str, Any]]:
    """
    Filter explorer rows

    Args:
        rows: Rows from flatten_rows
        search: Case-insensitive substring of the plugin name or latest recipe
        status: 'all', 'success' (no failures) or 'fail' (has failures)
        pr: 'all', 'open' (has open PRs) or 'merged' (has merged PRs)

    Returns:
        New list with the matching rows in input order
    """
    result = list(rows)
    if search:
        q = search.lower()
        result = [r for r in result if q in r['pluginName'].lower() or q in r['latestRecipe'].lower()]
    if status == 'success':
        result = [r for r in result if r['failCount'] == 0]
    elif status == 'fail':
        result = [r for r in result if r['failCount'] > 0]
    if pr == 'open':
        result = [r for r in result if r['prsOpen'] > 0]
    elif pr == 'merged':
        result = [r for r in result if r['prsMerged'] > 0]
    return result


def sort_rows(rows: List[Dict[str, Any]], key: str = 'pluginName', direction: str = 'asc') -> List[Dict[str, Any]]:
    """
    Sort rows by one field; ties keep their input order

    Raises:
        ValueError: key is not a row field
    """
    if key not in ROW_FIELDS:
        raise ValueError(f"Unknown sort key: {key}")
    return sorted(rows, key=lambda r: r[key], reverse=(direction == 'desc'))


@dataclass
class Page:
    """One page of rows plus what the pagination controls need"""
    rows: List[Dict[str, Any]]
    page: int
    total_pages: int
    total_rows: int
    page_size: int
    window: List[int] = field(default_factory=list)

    @property
    def has_previous(self) -> bool:
        return self.page > 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages - 1

    @property
    def showing_from(self) -> int:
        return self.page * self.page_size + 1 if self.total_rows else 0

    @property
    def showing_to(self) -> int:
        return min((self.page + 1) * self.page_size, self.total_rows)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'rows': self.rows,
            'page': self.page,
            'totalPages': self.total_pages,
            'totalRows': self.total_rows,
            'pageSize': self.page_size,
            'window': self.window,
            'hasPrevious': self.has_previous,
            'hasNext': self.has_next,
            'showingFrom': self.showing_from,
            'showingTo': self.showing_to,
        }


def page_window(page: int, total_pages: int, size: int = PAGE_WINDOW) -> List[int]:
    """Up to `size` zero-based page indices centered on `page`, clamped to valid pages"""
    start = max(0, min(page - size // 2, total_pages - size))
    return [p for p in range(start, start + min(size, total_pages)) if p < total_pages]


def paginate(rows: List[Dict[str, Any]], page: int = 0, page_size: int = PAGE_SIZE) -> Page:
    """Slice out one zero-indexed page; out-of-range pages are clamped to the first/last page"""
    total_rows = len(rows)
    total_pages = -(-total_rows // page_size)
    page = max(0, min(page, total_pages - 1)) if total_pages else 0
    return Page(
        rows=rows[page * page_size:(page + 1) * page_size],
        page=page,
        total_pages=total_pages,
        total_rows=total_rows,
        page_size=page_size,
        window=page_window(page, total_pages),
    )


def migration_timeline(data: AppData) -> List[Dict[str, Any]]:
    """Migrations per day across the ecosystem, oldest day first"""
    counts: Dict[str, int] = {}
    for plugin in data.plugins:
        for migration in plugin.migrations:
            if migration.timestamp:
                date = migration.timestamp[:10]
                counts[date] = counts.get(date, 0) + 1
    return [{'date': date, 'count': counts[date]} for date in sorted(counts)]


def top_failing_recipes(data: AppData, limit: int) -> List[Dict[str, Any]]:
    """Leading entries of failuresByRecipe with display names attached"""
    return [
        {'recipe': f.recipe, 'name': recipe_display_name(f.recipe), 'failures': f.failures}
        for f in data.summary.failures_by_recipe[:limit]
    ]


def top_recipes(data: AppData, limit: int) -> List[Dict[str, Any]]:
    """Success and failure counts of the first recipes in bundle order"""
    return [
        {
            'recipeId': r.recipe_id,
            'name': recipe_display_name(r.recipe_id),
            'successCount': r.success_count,
            'failureCount': r.failure_count,
        }
        for r in data.recipes[:limit]
    ]


def filter_recipe_plugins(recipe: RecipeReport, search: str = '', status: str = 'all') -> List[RecipePlugin]:
    """Plugins a recipe was applied to, narrowed by name substring and exact status"""
    plugins = recipe.plugins
    if search:
        q = search.lower()
        plugins = [p for p in plugins if q in p.plugin_name.lower()]
    if status != 'all':
        plugins = [p for p in plugins if p.status == status]
    return list(plugins)
