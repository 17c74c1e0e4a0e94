"""
Aggregation modules for turning fetched reports into the summary bundle
"""
from .summary_parser import parse_summary
from .deduplication import PullRequestTracker
from .summary_builder import (
    build_summary,
    compute_success_rate,
    failures_by_recipe
)

__all__ = [
    'parse_summary',
    'PullRequestTracker',
    'build_summary',
    'compute_success_rate',
    'failures_by_recipe'
]
