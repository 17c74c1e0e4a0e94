"""
Bundle loader for the dashboard, with a synthetic fallback dataset
"""
import json
import os
import threading
from typing import Any, Callable, Optional

import requests

from config import DATA_BASE_URL, PLUGINS_BUNDLE, RECIPES_BUNDLE, REQUEST_TIMEOUT, SUMMARY_BUNDLE
from models import AppData
from utils import logger

from .sample_data import get_sample_data


class BundleLoader:
    """
    Load plugins.json, recipes.json and summary.json once and keep them

    Any failure reading the three documents is handled as one unit: the
    synthetic dataset is cached instead and a warning is logged, so callers
    always get usable data. The cache lives until reset() is called.
    """

    def __init__(self, base: str = DATA_BASE_URL, session: Optional[requests.Session] = None,
                 fallback: Callable[[], AppData] = get_sample_data, timeout: float = REQUEST_TIMEOUT):
        """
        Args:
            base: URL prefix (http/https) or local directory holding the bundles
            session: requests session used for URL bases
            fallback: Builds the dataset used when loading fails
            timeout: Per-request timeout in seconds
        """
        self.base = base
        self.session = session or requests.Session()
        self.fallback = fallback
        self.timeout = timeout
        self._data: Optional[AppData] = None
        self._is_fallback = False
        self._lock = threading.Lock()

    @property
    def is_remote(self) -> bool:
        return self.base.startswith(('http://', 'https://'))

    @property
    def is_fallback(self) -> bool:
        """True when the cached data is the synthetic dataset"""
        return self._is_fallback

    def _read_document(self, name: str) -> Any:
        if self.is_remote:
            url = self.base.rstrip('/') + '/' + name
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        with open(os.path.join(self.base, name), 'r', encoding='utf-8') as f:
            return json.load(f)

    def _fetch(self) -> AppData:
        plugins = self._read_document(PLUGINS_BUNDLE)
        recipes = self._read_document(RECIPES_BUNDLE)
        summary = self._read_document(SUMMARY_BUNDLE)
        if not isinstance(plugins, list) or not isinstance(recipes, list) or not isinstance(summary, dict):
            raise ValueError("bundle documents have unexpected shapes")
        return AppData.from_bundles(plugins, recipes, summary)

    def load(self) -> AppData:
        """Return the cached data, loading it on first use"""
        if self._data is not None:
            return self._data
        with self._lock:
            if self._data is None:
                try:
                    self._data = self._fetch()
                    self._is_fallback = False
                    logger.info(f"Loaded {len(self._data.plugins)} plugins and "
                                f"{len(self._data.recipes)} recipes from {self.base}")
                except (requests.exceptions.RequestException, OSError, ValueError,
                        TypeError, AttributeError) as e:
                    logger.warning(f"⚠ Failed to load live data from {self.base}, using sample data: {e}")
                    self._data = self.fallback()
                    self._is_fallback = True
        return self._data

    def reset(self):
        """Drop the cached data so the next load() fetches again"""
        with self._lock:
            self._data = None
            self._is_fallback = False


_default_loader: Optional[BundleLoader] = None
_default_loader_lock = threading.Lock()


def get_loader() -> BundleLoader:
    """Process-wide loader, created on first use"""
    global _default_loader
    with _default_loader_lock:
        if _default_loader is None:
            _default_loader = BundleLoader()
        return _default_loader


def load_app_data() -> AppData:
    return get_loader().load()


def reset_loader():
    """Forget the process-wide loader (and its cache). Mainly for tests."""
    global _default_loader
    with _default_loader_lock:
        _default_loader = None
