"""
Utility modules for the site mirror.

Contains logging, path handling utilities, and constants.
"""

from .log import setup_logger, get_logger
from .paths import (
    normalize_seed_url,
    strip_query_and_fragment,
    get_domain,
    url_to_local_path,
    get_relative_path,
    ensure_dir,
    ensure_parent_dir,
)
from .constants import (
    DEFAULT_TIMEOUT,
    DEFAULT_CONCURRENCY,
    DEFAULT_MAX_DEPTH,
    DEFAULT_DOWNLOAD_DIR,
)

__all__ = [
    "setup_logger",
    "get_logger",
    "normalize_seed_url",
    "strip_query_and_fragment",
    "get_domain",
    "url_to_local_path",
    "get_relative_path",
    "ensure_dir",
    "ensure_parent_dir",
    "DEFAULT_TIMEOUT",
    "DEFAULT_CONCURRENCY",
    "DEFAULT_MAX_DEPTH",
    "DEFAULT_DOWNLOAD_DIR",
]
