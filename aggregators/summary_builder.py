"""
Build the ecosystem-wide summary from plugin and recipe reports
"""
from typing import Dict, List, Optional

from models import PluginReport, RecipeFailure, RecipeReport, SummaryStats
from utils import logger

from .deduplication import PullRequestTracker


def compute_success_rate(total: int, failed: int) -> float:
    """Percentage of non-failed migrations, rounded to 2 decimals (0 when there are none)"""
    if total <= 0:
        return 0
    return round((total - failed) / total * 100, 2)


def failures_by_recipe(recipes: List[RecipeReport]) -> List[RecipeFailure]:
    """Recipes with at least one failure, most failures first"""
    failing = [r for r in recipes if r.failure_count > 0]
    failing.sort(key=lambda r: r.failure_count, reverse=True)
    return [RecipeFailure(recipe=r.recipe_id, failures=r.failure_count) for r in failing]


def _prefer_parsed(parsed: Dict, key: str, computed):
    # A parsed 0 is indistinguishable from "not found" here and falls back
    # to the computed value
    value = parsed.get(key)
    return value if value else computed


def build_summary(plugins: List[PluginReport], recipes: List[RecipeReport],
                  parsed_summary: Optional[Dict] = None) -> SummaryStats:
    """
    Combine fetched reports into one SummaryStats

    Values parsed from the human-reviewed summary take precedence; computed
    values fill in whatever the parser did not find.

    Args:
        plugins: Successfully fetched plugin reports
        recipes: Successfully fetched recipe reports
        parsed_summary: Partial summary from parse_summary (may be empty or None)

    Returns:
        Complete SummaryStats
    """
    parsed = parsed_summary or {}
    total_migrations = 0
    failed_migrations = 0
    tracker = PullRequestTracker()

    for plugin in plugins:
        for migration in plugin.migrations:
            total_migrations += 1
            if migration.migration_status == 'fail':
                failed_migrations += 1
            tracker.track(migration.pull_request_url, migration.pull_request_status)

    dedup_stats = tracker.get_deduplication_stats()
    logger.debug(f"Computed {total_migrations} migrations ({failed_migrations} failed), "
                 f"PR deduplication: {dedup_stats}")

    summary = SummaryStats(
        total_migrations=_prefer_parsed(parsed, 'totalMigrations', total_migrations),
        failed_migrations=_prefer_parsed(parsed, 'failedMigrations', failed_migrations),
        success_rate=_prefer_parsed(parsed, 'successRate',
                                    compute_success_rate(total_migrations, failed_migrations)),
        total_prs=_prefer_parsed(parsed, 'totalPRs', tracker.total),
        open_prs=_prefer_parsed(parsed, 'openPRs', tracker.count('open')),
        closed_prs=_prefer_parsed(parsed, 'closedPRs', tracker.count('closed')),
        merged_prs=_prefer_parsed(parsed, 'mergedPRs', tracker.count('merged')),
        total_plugins=len(plugins),
        failures_by_recipe=failures_by_recipe(recipes),
    )

    used_parsed = sorted(k for k, v in parsed.items() if v)
    if used_parsed:
        logger.info(f"   Using parsed summary values for: {', '.join(used_parsed)}")
    return summary
