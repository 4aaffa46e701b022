"""
Shared constants for the site mirror.

Contains common configuration values used across multiple modules.
"""

# Default request timeout in seconds, applied to each GET as a whole
DEFAULT_TIMEOUT = 30

# Default number of concurrent fetch slots
DEFAULT_CONCURRENCY = 10

# Default link distance from the seed URL
DEFAULT_MAX_DEPTH = 1

# Default directory the mirror is written under
DEFAULT_DOWNLOAD_DIR = "downloads"

# Attribute inspected for each element kind during link rewriting
LINK_ATTRIBUTES = {
    "a": "href",
    "link": "href",
    "img": "src",
    "script": "src",
    "iframe": "src",
}
