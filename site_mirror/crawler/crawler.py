"""
Main mirror crawler module.

Wires the visited registry, downloader and link rewriter together and
drives a crawl from its seed URL to completion.
"""

import os
import time
from dataclasses import dataclass, field
from typing import List

from .downloader import MirrorDownloader
from .rewrite import LinkRewriter
from .visited import VisitedSet
from ..utils.constants import (
    DEFAULT_CONCURRENCY,
    DEFAULT_DOWNLOAD_DIR,
    DEFAULT_MAX_DEPTH,
    DEFAULT_TIMEOUT,
)
from ..utils.log import get_logger
from ..utils.paths import normalize_seed_url, get_domain, ensure_dir


@dataclass
class CrawlResult:
    """Results of a finished crawl."""

    start_url: str
    mirror_dir: str
    files: List[str] = field(default_factory=list)
    duration_seconds: float = 0.0


class MirrorCrawler:
    """
    Main mirror crawler class.

    Usage::

        crawler = MirrorCrawler("example.com", max_depth=2)
        await crawler.run()
        result = await crawler.join()
    """

    def __init__(
        self,
        url: str,
        max_depth: int = DEFAULT_MAX_DEPTH,
        download_dir: str = DEFAULT_DOWNLOAD_DIR,
        concurrency: int = DEFAULT_CONCURRENCY,
        timeout: int = DEFAULT_TIMEOUT
    ):
        """
        Initialize the mirror crawler.

        Args:
            url: Seed URL; the scheme defaults to http
            max_depth: Maximum link distance from the seed
            download_dir: Directory to write the mirror under
            concurrency: Maximum concurrent downloads
            timeout: Per-request timeout in seconds

        Raises:
            ValueError: If the URL, depth or concurrency is invalid
        """
        if max_depth < 0:
            raise ValueError(f"Invalid depth: {max_depth}")
        if concurrency < 1:
            raise ValueError(f"Invalid concurrency: {concurrency}")

        self.start_url = normalize_seed_url(url)
        self.domain = get_domain(self.start_url)
        self.download_dir = os.path.abspath(download_dir)
        self.max_depth = max_depth

        self.logger = get_logger("crawler")

        self.visited = VisitedSet()
        self.downloader = MirrorDownloader(
            domain=self.domain,
            download_root=self.download_dir,
            max_depth=max_depth,
            visited=self.visited,
            timeout=timeout,
            concurrency=concurrency
        )
        self.downloader.rewriter = LinkRewriter(
            domain=self.domain,
            download_root=self.download_dir,
            submit=self.downloader.submit
        )

        self._started_at = 0.0

    async def run(self) -> None:
        """
        Start the crawl.

        Returns as soon as the seed URL is scheduled; use join() to wait
        for the crawl to finish.

        Raises:
            OSError: If the download directory cannot be created
        """
        ensure_dir(self.download_dir)

        self._started_at = time.time()
        self.logger.info(f"Mirroring {self.start_url} into {self.download_dir}")
        self.logger.info(f"Max depth: {self.max_depth}")

        await self.downloader.open()
        self.downloader.submit(self.start_url, 0)

    async def join(self) -> CrawlResult:
        """
        Wait for all downloads, including those discovered while waiting.

        Returns:
            CrawlResult with the files written
        """
        try:
            await self.downloader.wait()
        finally:
            await self.downloader.close()

        duration = time.time() - self._started_at
        files = self.downloader.saved_files

        self.logger.info(f"Crawl finished: {len(files)} files in {duration:.1f}s")

        return CrawlResult(
            start_url=self.start_url,
            mirror_dir=os.path.join(self.download_dir, self.domain),
            files=files,
            duration_seconds=duration
        )

    async def crawl(self) -> CrawlResult:
        """Run the crawl and wait for it to finish."""
        await self.run()
        return await self.join()
