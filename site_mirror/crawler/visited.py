"""
Visited URL registry shared by all fetch tasks of a crawl.
"""

import threading
from typing import Set


class VisitedSet:
    """
    Set of URL strings admitted for fetching.

    Keys are the raw URL strings; no canonicalization of percent-encoding,
    trailing slashes or default ports is applied. Entries are never removed.
    """

    def __init__(self):
        self._urls: Set[str] = set()
        self._lock = threading.Lock()

    def admit(self, url: str) -> bool:
        """
        Record a URL if it has not been seen before.

        Args:
            url: URL string to admit

        Returns:
            True the first time a given string is admitted, False afterwards
        """
        with self._lock:
            if url in self._urls:
                return False
            self._urls.add(url)
            return True

    def __contains__(self, url: str) -> bool:
        with self._lock:
            return url in self._urls

    def __len__(self) -> int:
        with self._lock:
            return len(self._urls)
