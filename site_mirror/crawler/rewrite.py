"""
Link rewriter for converting same-host references to local relative paths.

Rewrites references in a fetched HTML page and hands every same-host
target back to the downloader for fetching.
"""

from typing import Callable, Optional
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

from ..utils.constants import LINK_ATTRIBUTES
from ..utils.log import get_logger
from ..utils.paths import (
    get_domain,
    get_relative_path,
    strip_query_and_fragment,
    url_to_local_path,
)


class LinkRewriter:
    """
    Rewrites URLs in HTML content to local relative paths.

    Only href of a/link elements and src of img/script/iframe elements are
    inspected. References to other hosts are left as they are.
    """

    def __init__(
        self,
        domain: str,
        download_root: str,
        submit: Callable[[str, int], bool]
    ):
        """
        Initialize the link rewriter.

        Args:
            domain: Host (and optional port) of the crawl target
            download_root: Base download directory
            submit: Callable scheduling (url, depth) for download
        """
        self.domain = domain
        self.download_root = download_root
        self.submit = submit
        self.logger = get_logger("rewriter")

    def rewrite(self, html: bytes, base_url: str, depth: int) -> bytes:
        """
        Rewrite references in an HTML page and submit their targets.

        Args:
            html: Raw HTML bytes as fetched
            base_url: URL the page was fetched from
            depth: Crawl depth of the page

        Returns:
            Rewritten document encoded as UTF-8

        Raises:
            ParserRejectedMarkup: If neither parser accepts the document
        """
        soup = self._parse(html)
        page_local_path = url_to_local_path(base_url, self.download_root)

        # find_all walks the tree depth-first in document order
        for element in soup.find_all(list(LINK_ATTRIBUTES)):
            attr = LINK_ATTRIBUTES[element.name]
            value = element.get(attr)

            if not isinstance(value, str):
                continue

            target_url = self._resolve(value, base_url, depth)
            if target_url is None:
                continue

            target_path = url_to_local_path(target_url, self.download_root)
            element[attr] = get_relative_path(page_local_path, target_path)

            self.submit(target_url, depth + 1)

        return soup.encode('utf-8')

    def _parse(self, html: bytes) -> BeautifulSoup:
        try:
            return BeautifulSoup(html, 'lxml')
        except ParserRejectedMarkup:
            return BeautifulSoup(html, 'html.parser')

    def _resolve(self, value: str, base_url: str, depth: int) -> Optional[str]:
        """
        Resolve an attribute value to the same-host URL it references.

        Args:
            value: Raw attribute value
            base_url: URL of the page containing the reference
            depth: Crawl depth of the page

        Returns:
            Absolute URL without query and fragment, or None when the value
            should be left alone
        """
        if not value or value.startswith('#'):
            return None

        try:
            absolute = urljoin(base_url, value.strip())
            parsed = urlparse(absolute)
            if parsed.scheme not in ('http', 'https') or get_domain(absolute) != self.domain:
                return None
            return strip_query_and_fragment(absolute)
        except ValueError as e:
            self.logger.warning(
                f"Skipping malformed reference {value!r} on {base_url} "
                f"(depth {depth}): {e}"
            )
            return None
