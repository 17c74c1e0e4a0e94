"""
Import modules for publishing aggregated bundles
"""
from .bundle_writer import serialize_bundles, write_bundles

__all__ = ['serialize_bundles', 'write_bundles']
