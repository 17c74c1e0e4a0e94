"""
Pull request deduplication across migration records
"""
from typing import Dict, Set

PR_STATUSES = ('open', 'closed', 'merged')


class PullRequestTracker:
    """
    Count pull requests once per URL.

    One logical PR may be referenced by several migration records (the same PR
    updated across recipe runs). Only the first record seen for a URL decides
    which status bucket the PR lands in.
    """

    def __init__(self):
        self._seen_urls: Set[str] = set()
        self._by_status: Dict[str, int] = {status: 0 for status in PR_STATUSES}

    def track(self, url: str, status: str) -> bool:
        """
        Record a PR reference

        Args:
            url: Pull request URL (empty means the migration has no PR)
            status: 'open', 'closed', 'merged' or anything else (uncounted)

        Returns:
            True if this was the first time the URL was seen
        """
        if not url or url in self._seen_urls:
            return False
        self._seen_urls.add(url)
        if status in self._by_status:
            self._by_status[status] += 1
        return True

    @property
    def total(self) -> int:
        return len(self._seen_urls)

    def count(self, status: str) -> int:
        return self._by_status.get(status, 0)

    def get_deduplication_stats(self) -> Dict[str, int]:
        """
        Get statistics about PR deduplication.

        Returns:
            Dictionary with total_prs_seen and one count per status
        """
        stats = {'total_prs_seen': self.total}
        for status, count in self._by_status.items():
            stats[f'{status}_prs'] = count
        return stats
