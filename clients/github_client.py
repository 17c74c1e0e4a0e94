"""
GitHub client for reading the plugin modernizer metadata repository
"""
import os
from typing import Any, Dict, List, Optional

import requests

from config import API_BASE, ENV_GITHUB_TOKEN, METADATA_BRANCH, RAW_BASE, REQUEST_TIMEOUT, USER_AGENT
from utils import logger


class GitHubClientError(Exception):
    """Raised when an upstream request fails or returns an unusable body"""


class GitHubHTTPError(GitHubClientError):
    """Upstream answered with a non-success status"""

    def __init__(self, status: int, url: str):
        super().__init__(f"HTTP {status} for {url}")
        self.status = status
        self.url = url


class GitHubClient:
    """Handle GitHub API and raw content interactions"""

    def __init__(self, token: Optional[str] = None, api_base: str = API_BASE, raw_base: str = RAW_BASE,
                 timeout: float = REQUEST_TIMEOUT, session: Optional[requests.Session] = None):
        """
        Initialize GitHub client

        Args:
            token: GitHub token. If None, reads from GITHUB_TOKEN env var. Optional,
                   requests are sent unauthenticated without one.
            api_base: REST API base URL of the metadata repository
            raw_base: Raw content base URL of the metadata repository
            timeout: Per-request timeout in seconds
            session: Pre-built requests session (mainly for tests)
        """
        self.token = token if token is not None else os.getenv(ENV_GITHUB_TOKEN)
        self.api_base = api_base.rstrip('/')
        self.raw_base = raw_base.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

        self.headers = {'User-Agent': USER_AGENT}
        if self.token and self.token.strip():
            self.headers['Authorization'] = f'token {self.token.strip()}'
            # Log token status (without exposing the actual token)
            token_preview = f"{self.token[:4]}...{self.token[-4:]}" if len(self.token) > 8 else "***"
            logger.info(f"Using GitHub token: {token_preview} (length: {len(self.token)})")
        else:
            logger.info("No GitHub token set, requests are unauthenticated (lower rate limit)")

    def _get(self, url: str) -> requests.Response:
        try:
            response = self.session.get(url, headers=self.headers, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise GitHubClientError(f"Request to {url} failed: {e}") from e
        if not response.ok:
            raise GitHubHTTPError(response.status_code, url)
        return response

    def get_json(self, url: str) -> Any:
        """
        GET a URL and decode its JSON body

        Raises:
            GitHubHTTPError: non-success status
            GitHubClientError: transport failure or malformed JSON
        """
        response = self._get(url)
        try:
            return response.json()
        except ValueError as e:
            raise GitHubClientError(f"Malformed JSON from {url}: {e}") from e

    def get_text(self, url: str) -> str:
        """GET a URL and return its body as text"""
        return self._get(url).text

    def get_tree(self, branch: str = METADATA_BRANCH) -> List[Dict]:
        """
        Get the full recursive file listing of the repository

        Returns:
            List of {'path', 'type'} entries
        """
        data = self.get_json(f"{self.api_base}/git/trees/{branch}?recursive=1")
        if not isinstance(data, dict):
            raise GitHubClientError("Tree listing is not a JSON object")
        tree = data.get('tree') or []
        logger.debug(f"Tree listing returned {len(tree)} entries")
        return tree

    def list_directory(self, path: str) -> List[Dict]:
        """
        List a directory through the contents API

        Returns:
            List of entries, each with at least a 'name'
        """
        data = self.get_json(f"{self.api_base}/contents/{path.strip('/')}")
        if not isinstance(data, list):
            raise GitHubClientError(f"Directory listing for {path} is not a JSON array")
        return data

    def get_raw_json(self, path: str) -> Any:
        """Fetch and decode a JSON document by repository path"""
        return self.get_json(f"{self.raw_base}/{path.lstrip('/')}")

    def get_raw_text(self, path: str) -> str:
        """Fetch a text document by repository path"""
        return self.get_text(f"{self.raw_base}/{path.lstrip('/')}")
