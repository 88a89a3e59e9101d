"""
Utilities for FastAPI Interservice SDK.
"""

from .helpers import build_url, generate_request_id, to_pairs

__all__ = ["build_url", "generate_request_id", "to_pairs"]
