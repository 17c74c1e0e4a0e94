"""
API client modules for the metadata repository on GitHub
"""
from .github_client import GitHubClient, GitHubClientError, GitHubHTTPError

__all__ = ['GitHubClient', 'GitHubClientError', 'GitHubHTTPError']
