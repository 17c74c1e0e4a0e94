"""
Pattern-based extraction of key metrics from the markdown summary report
"""
import re
from typing import Dict, Optional, Union

Number = Union[int, float]

# Bold-labelled key metrics, e.g. "- **Total Migrations**: 1234"
_BOLD_INT_PATTERNS = {
    'totalMigrations': re.compile(r'Total\s+Migrations\s*\*\*\s*:?\s*\**\s*(\d+)', re.IGNORECASE),
    'failedMigrations': re.compile(r'Failed\s+Migrations\s*\*\*\s*:?\s*\**\s*(\d+)', re.IGNORECASE),
}
_SUCCESS_RATE_PATTERN = re.compile(r'Success\s+Rate\s*\*\*\s*:?\s*\**\s*(\d+(?:\.\d+)?)\s*%', re.IGNORECASE)

# Rows of the pull request table, e.g. "| Open PRs | 42 |"
_PR_TABLE_PATTERNS = {
    'totalPRs': re.compile(r'Total\s+PRs\s*\**\s*\|\s*\**\s*(\d+)', re.IGNORECASE),
    'openPRs': re.compile(r'Open\s+PRs\s*\**\s*\|\s*\**\s*(\d+)', re.IGNORECASE),
    'closedPRs': re.compile(r'Closed\s+PRs\s*\**\s*\|\s*\**\s*(\d+)', re.IGNORECASE),
    'mergedPRs': re.compile(r'Merged\s+PRs\s*\**\s*\|\s*\**\s*(\d+)', re.IGNORECASE),
}


def _search_int(pattern: re.Pattern, text: str) -> Optional[int]:
    match = pattern.search(text)
    return int(match.group(1)) if match else None


def parse_summary(summary_md: Optional[str]) -> Dict[str, Number]:
    """
    Extract numeric fields from the summary markdown

    Every field is optional: a pattern that doesn't match leaves its key out of
    the result (it is not set to zero). Never raises on unexpected input.

    Args:
        summary_md: Content of reports/summary.md (None is treated as empty)

    Returns:
        Partial summary keyed by the bundle field names (totalMigrations,
        failedMigrations, successRate, totalPRs, openPRs, closedPRs, mergedPRs)
    """
    stats: Dict[str, Number] = {}
    if not summary_md or not isinstance(summary_md, str):
        return stats

    for field_name, pattern in _BOLD_INT_PATTERNS.items():
        value = _search_int(pattern, summary_md)
        if value is not None:
            stats[field_name] = value

    rate_match = _SUCCESS_RATE_PATTERN.search(summary_md)
    if rate_match:
        stats['successRate'] = float(rate_match.group(1))

    for field_name, pattern in _PR_TABLE_PATTERNS.items():
        value = _search_int(pattern, summary_md)
        if value is not None:
            stats[field_name] = value

    return stats
