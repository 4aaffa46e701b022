"""
Path and URL utilities for the site mirror.

Provides seed URL normalization, the URL to local file mapping and
directory management.
"""

import os
import posixpath
from urllib.parse import urlparse, urlunparse, unquote


def normalize_seed_url(url: str) -> str:
    """
    Validate and normalize the seed URL.

    Args:
        url: URL string given by the user

    Returns:
        URL with an explicit scheme

    Raises:
        ValueError: If URL has no host or an invalid port
    """
    url = url.strip()

    # Default to plain http when no scheme is given
    if '://' not in url:
        url = 'http://' + url

    parsed = urlparse(url)

    if parsed.scheme not in ('http', 'https') or not parsed.hostname:
        raise ValueError(f"Invalid URL: {url}")

    # Raises ValueError for a port outside 0-65535
    parsed.port

    return url


def strip_query_and_fragment(url: str) -> str:
    """Remove the query string and fragment from a URL."""
    parsed = urlparse(url)
    return urlunparse((
        parsed.scheme,
        parsed.netloc,
        parsed.path,
        parsed.params,
        '',
        ''
    ))


def get_domain(url: str) -> str:
    """
    Extract the host and optional port from a URL.

    User info is dropped and the host is lowercased.

    Args:
        url: URL to extract domain from

    Returns:
        Domain string (e.g., 'example.com' or 'example.com:8080')

    Raises:
        ValueError: If the URL or its port is malformed
    """
    parsed = urlparse(url)
    host = parsed.hostname or ''

    if ':' in host:
        host = f'[{host}]'

    port = parsed.port
    if port is not None:
        return f'{host}:{port}'
    return host


def url_to_local_path(url: str, download_root: str) -> str:
    """
    Map a URL to the local file it is mirrored to.

    The result depends only on the host and path of the URL, so the path
    a resource is saved under and the path a reference to it is rewritten
    to always agree.

    Args:
        url: Absolute URL
        download_root: Base download directory

    Returns:
        Local file path under download_root/<host>/
    """
    parsed = urlparse(url)
    path = unquote(parsed.path).lstrip('/')

    # A trailing '.' or '..' segment names a directory just like a trailing '/'
    is_directory = path.split('/')[-1] in ('', '.', '..')

    # Collapse dot segments without ever climbing above the host directory
    path = posixpath.normpath('/' + path).lstrip('/')

    if is_directory:
        path = posixpath.join(path, 'index.html') if path else 'index.html'

    full_path = os.path.join(download_root, get_domain(url), *path.split('/'))

    if not os.path.splitext(full_path)[1]:
        full_path += '.html'

    return full_path


def get_relative_path(from_path: str, to_path: str) -> str:
    """
    Calculate the relative path from one file to another.

    Args:
        from_path: Source file path
        to_path: Target file path

    Returns:
        Relative path string
    """
    from_dir = os.path.dirname(from_path)
    rel_path = os.path.relpath(to_path, from_dir)
    # Use forward slashes for URLs
    return rel_path.replace(os.sep, '/')


def ensure_dir(path: str) -> None:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path to ensure exists
    """
    os.makedirs(path, exist_ok=True)


def ensure_parent_dir(file_path: str) -> None:
    """
    Ensure the parent directory of a file exists.

    Args:
        file_path: File path whose parent directory should exist
    """
    parent = os.path.dirname(file_path)
    if parent:
        ensure_dir(parent)
