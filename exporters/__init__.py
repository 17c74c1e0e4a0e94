"""
Export modules for pulling reports out of the metadata repository
"""
from .metadata_exporter import (
    discover_plugins,
    fetch_plugin_report,
    fetch_plugin_reports,
    fetch_recipe_reports,
    fetch_summary_text,
    export_metadata
)

__all__ = [
    'discover_plugins',
    'fetch_plugin_report',
    'fetch_plugin_reports',
    'fetch_recipe_reports',
    'fetch_summary_text',
    'export_metadata'
]
