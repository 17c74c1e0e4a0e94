"""
Dashboard modules: bundle loading, queries, exports and the Flask API
"""
from .loader import BundleLoader, get_loader, load_app_data, reset_loader
from .recommendations import get_recommended_steps

__all__ = [
    'BundleLoader',
    'get_loader',
    'load_app_data',
    'reset_loader',
    'get_recommended_steps'
]
