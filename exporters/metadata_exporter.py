"""
Export functionality for extracting modernization reports from the metadata repository
"""
from typing import Dict, List, Optional

from clients.github_client import GitHubClient, GitHubClientError
from config import BATCH_DELAY, BATCH_SIZE, PLUGIN_REPORT_SUFFIX, RECIPES_DIR, SUMMARY_PATH
from models import FetchSummary, PluginReport, RecipeReport
from utils import logger, run_in_batches


def discover_plugins(github_client: GitHubClient) -> List[str]:
    """
    Find every plugin that has an aggregated migration report

    Any failure listing the repository propagates: without the plugin list the
    run has nothing to build.

    Returns:
        Sorted, de-duplicated list of plugin names (first path segment of each report)
    """
    logger.info("📂 Discovering plugin directories...")
    tree = github_client.get_tree()
    plugin_names = set()

    for item in tree:
        path = item.get('path', '')
        if PLUGIN_REPORT_SUFFIX in path:
            plugin_names.add(path.split('/')[0])

    logger.info(f"   Found {len(plugin_names)} plugins")
    return sorted(plugin_names)


def fetch_plugin_report(github_client: GitHubClient, plugin_name: str,
                        summary: Optional[FetchSummary] = None) -> Optional[PluginReport]:
    """
    Fetch one plugin's aggregated migration report

    Returns:
        PluginReport, or None when the fetch or decode failed (the failure is logged)
    """
    try:
        data = github_client.get_raw_json(f"{plugin_name}{PLUGIN_REPORT_SUFFIX}")
        if not isinstance(data, dict):
            raise GitHubClientError("report is not a JSON object")
        report = PluginReport.from_dict(data)
        if not report.plugin_name:
            report.plugin_name = plugin_name
        if summary is not None:
            summary.add_success()
        return report
    except (GitHubClientError, ValueError, TypeError, AttributeError) as e:
        logger.warning(f"   ⚠ Failed to fetch {plugin_name}: {e}")
        if summary is not None:
            summary.add_failure(f"plugin {plugin_name}: {e}")
        return None


def fetch_plugin_reports(github_client: GitHubClient, plugin_names: List[str],
                         summary: Optional[FetchSummary] = None,
                         batch_size: int = BATCH_SIZE, delay: float = BATCH_DELAY) -> List[PluginReport]:
    """
    Fetch plugin reports in bounded concurrent batches

    Reports that fail to fetch are skipped; the rest are returned in the order
    of plugin_names.
    """
    logger.info("📦 Fetching plugin data...")
    results = run_in_batches(
        plugin_names,
        lambda name: fetch_plugin_report(github_client, name, summary),
        batch_size=batch_size,
        delay=delay,
        label='plugins',
    )
    plugins = [r for r in results if r is not None]
    logger.info(f"   ✓ Fetched {len(plugins)} plugins")
    return plugins


def fetch_recipe_reports(github_client: GitHubClient, summary: Optional[FetchSummary] = None) -> List[RecipeReport]:
    """
    Fetch every recipe rollup listed under the recipes directory

    A failing directory listing yields no recipes; a failing file is skipped.
    """
    logger.info("📋 Fetching recipe reports...")
    try:
        contents = github_client.list_directory(RECIPES_DIR)
    except GitHubClientError as e:
        logger.warning(f"   ⚠ Could not list {RECIPES_DIR}: {e}")
        if summary is not None:
            summary.add_failure(f"recipe listing: {e}")
        return []

    recipes = []
    for entry in contents:
        name = entry.get('name', '') if isinstance(entry, dict) else ''
        if not name.endswith('.json'):
            continue
        try:
            data = github_client.get_raw_json(f"{RECIPES_DIR}/{name}")
            if not isinstance(data, dict):
                raise GitHubClientError("recipe report is not a JSON object")
            recipes.append(RecipeReport.from_dict(data))
            if summary is not None:
                summary.add_success()
        except (GitHubClientError, ValueError, TypeError, AttributeError) as e:
            logger.warning(f"   ⚠ Failed to fetch recipe {name}: {e}")
            if summary is not None:
                summary.add_failure(f"recipe {name}: {e}")

    logger.info(f"   Fetched {len(recipes)} recipes")
    return recipes


def fetch_summary_text(github_client: GitHubClient, summary: Optional[FetchSummary] = None) -> Optional[str]:
    """
    Fetch the human-reviewed markdown summary

    Returns:
        The markdown text, or None when it could not be fetched
    """
    logger.info("📊 Fetching summary...")
    try:
        text = github_client.get_raw_text(SUMMARY_PATH)
        if summary is not None:
            summary.add_success()
        return text
    except GitHubClientError as e:
        logger.warning(f"   ⚠ Could not fetch {SUMMARY_PATH}: {e}")
        if summary is not None:
            summary.add_failure(f"summary: {e}")
        return None


def export_metadata(github_client: GitHubClient, summary: Optional[FetchSummary] = None) -> Dict:
    """
    Export everything the aggregation needs from the metadata repository

    Raises whatever discover_plugins raises; every other failure is per item.

    Returns:
        Dictionary with 'plugins', 'recipes' and 'summary_text'
    """
    plugin_names = discover_plugins(github_client)
    plugins = fetch_plugin_reports(github_client, plugin_names, summary)
    recipes = fetch_recipe_reports(github_client, summary)
    summary_text = fetch_summary_text(github_client, summary)
    return {
        'plugins': plugins,
        'recipes': recipes,
        'summary_text': summary_text,
    }
