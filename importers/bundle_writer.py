"""
Write the plugins, recipes and summary bundles consumed by the dashboard
"""
import json
import os
from typing import Dict, List

from config import OUTPUT_DIR, PLUGINS_BUNDLE, RECIPES_BUNDLE, SUMMARY_BUNDLE
from models import PluginReport, RecipeReport, SummaryStats
from utils import atomic_write_files, logger


def serialize_bundles(plugins: List[PluginReport], recipes: List[RecipeReport],
                      summary: SummaryStats) -> Dict[str, str]:
    """
    Serialize the three aggregates as pretty-printed JSON

    Returns:
        Mapping of bundle filename to document text
    """
    return {
        PLUGINS_BUNDLE: json.dumps([p.to_dict() for p in plugins], indent=2, ensure_ascii=False),
        RECIPES_BUNDLE: json.dumps([r.to_dict() for r in recipes], indent=2, ensure_ascii=False),
        SUMMARY_BUNDLE: json.dumps(summary.to_dict(), indent=2, ensure_ascii=False),
    }


def write_bundles(plugins: List[PluginReport], recipes: List[RecipeReport], summary: SummaryStats,
                  output_dir: str = OUTPUT_DIR) -> Dict[str, str]:
    """
    Persist the three bundles together

    Everything is serialized and staged before the first file is replaced, so
    a serialization or write error leaves all the previous bundles in place.

    Args:
        plugins: Plugin reports
        recipes: Recipe reports
        summary: Aggregated summary
        output_dir: Directory receiving plugins.json, recipes.json and summary.json

    Returns:
        Mapping of bundle filename to written path
    """
    logger.info("💾 Writing data files...")
    documents = serialize_bundles(plugins, recipes, summary)

    os.makedirs(output_dir, exist_ok=True)
    written = {filename: os.path.join(output_dir, filename) for filename in documents}
    atomic_write_files({written[filename]: content + '\n' for filename, content in documents.items()})

    logger.info(f"   ✓ {PLUGINS_BUNDLE}  ({len(plugins)} plugins)")
    logger.info(f"   ✓ {RECIPES_BUNDLE}  ({len(recipes)} recipes)")
    logger.info(f"   ✓ {SUMMARY_BUNDLE}")
    return written
