"""Tests for the dashboard bundle loader."""

import threading
import time
from unittest.mock import MagicMock, patch

import requests

from dashboard import loader as loader_module
from dashboard.loader import BundleLoader
from importers import write_bundles
from models import AppData, SummaryStats


def _fallback_factory():
    calls = []

    def fallback():
        calls.append(1)
        return AppData(plugins=[], recipes=[], summary=SummaryStats(total_migrations=999))

    return fallback, calls


def test_loads_local_directory(tmp_path, app_data):
    write_bundles(app_data.plugins, app_data.recipes, app_data.summary, output_dir=str(tmp_path))
    fallback, calls = _fallback_factory()
    loader = BundleLoader(base=str(tmp_path), fallback=fallback)

    data = loader.load()
    assert [p.plugin_name for p in data.plugins] == ["git", "credentials", "junit"]
    assert data.summary.total_migrations == 3
    assert not loader.is_fallback
    assert calls == []


def test_missing_directory_falls_back(tmp_path):
    fallback, calls = _fallback_factory()
    loader = BundleLoader(base=str(tmp_path / "missing"), fallback=fallback)
    assert loader.load().summary.total_migrations == 999
    assert loader.is_fallback


def test_malformed_document_falls_back(tmp_path, app_data):
    write_bundles(app_data.plugins, app_data.recipes, app_data.summary, output_dir=str(tmp_path))
    (tmp_path / "recipes.json").write_text("{not json", encoding="utf-8")
    fallback, _ = _fallback_factory()
    loader = BundleLoader(base=str(tmp_path), fallback=fallback)
    assert loader.load().summary.total_migrations == 999


def test_wrong_shape_falls_back(tmp_path, app_data):
    write_bundles(app_data.plugins, app_data.recipes, app_data.summary, output_dir=str(tmp_path))
    (tmp_path / "plugins.json").write_text('{"pluginName": "git"}', encoding="utf-8")
    fallback, _ = _fallback_factory()
    assert BundleLoader(base=str(tmp_path), fallback=fallback).load().summary.total_migrations == 999


def test_cached_until_reset(tmp_path):
    fallback, calls = _fallback_factory()
    loader = BundleLoader(base=str(tmp_path), fallback=fallback)
    first = loader.load()
    assert loader.load() is first
    assert len(calls) == 1

    loader.reset()
    assert not loader.is_fallback
    loader.load()
    assert len(calls) == 2


def test_reset_picks_up_new_bundles(tmp_path, app_data):
    fallback, _ = _fallback_factory()
    loader = BundleLoader(base=str(tmp_path), fallback=fallback)
    assert loader.is_fallback is False
    loader.load()
    assert loader.is_fallback

    write_bundles(app_data.plugins, app_data.recipes, app_data.summary, output_dir=str(tmp_path))
    loader.reset()
    assert len(loader.load().plugins) == 3
    assert not loader.is_fallback


def test_concurrent_first_loads_fetch_once(app_data):
    loader = BundleLoader(base="unused")
    calls = []
    started = threading.Event()

    def slow_fetch():
        calls.append(1)
        started.set()
        time.sleep(0.2)
        return app_data

    results = []
    with patch.object(loader, "_fetch", side_effect=slow_fetch):
        threads = [threading.Thread(target=lambda: results.append(loader.load())) for _ in range(8)]
        for t in threads:
            t.start()
        started.wait(timeout=5)
        for t in threads:
            t.join(timeout=5)

    assert len(calls) == 1
    assert len(results) == 8
    assert all(r is app_data for r in results)
    assert not loader.is_fallback


def _json_response(payload):
    response = MagicMock()
    response.json.return_value = payload
    return response


def test_remote_base(app_data):
    documents = {
        "https://stats.example/data/plugins.json": [p.to_dict() for p in app_data.plugins],
        "https://stats.example/data/recipes.json": [r.to_dict() for r in app_data.recipes],
        "https://stats.example/data/summary.json": app_data.summary.to_dict(),
    }
    session = MagicMock()
    session.get.side_effect = lambda url, timeout: _json_response(documents[url])
    loader = BundleLoader(base="https://stats.example/data/", session=session)

    assert loader.is_remote
    assert len(loader.load().plugins) == 3
    assert session.get.call_count == 3


def test_remote_http_error_falls_back():
    response = MagicMock()
    response.raise_for_status.side_effect = requests.exceptions.HTTPError("404")
    session = MagicMock()
    session.get.return_value = response
    fallback, calls = _fallback_factory()
    loader = BundleLoader(base="https://stats.example/data", session=session, fallback=fallback)
    assert loader.load().summary.total_migrations == 999
    assert calls == [1]


def test_process_wide_loader():
    loader_module.reset_loader()
    try:
        loader = loader_module.get_loader()
        assert loader_module.get_loader() is loader
        loader_module.reset_loader()
        assert loader_module.get_loader() is not loader
    finally:
        loader_module.reset_loader()
