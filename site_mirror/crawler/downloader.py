"""
Page downloader for fetching and saving mirrored resources.

Uses aiohttp for concurrent asynchronous downloads bounded by a semaphore.
"""

import asyncio
from typing import List, Optional, Set

import aiohttp
from aiohttp import ClientTimeout, ClientError
from bs4.builder import ParserRejectedMarkup

from .visited import VisitedSet
from .rewrite import LinkRewriter
from ..utils.constants import DEFAULT_CONCURRENCY, DEFAULT_TIMEOUT
from ..utils.log import get_logger
from ..utils.paths import get_domain, url_to_local_path, ensure_parent_dir


class MirrorDownloader:
    """
    Downloads same-host resources asynchronously.

    Each accepted URL runs as its own task; at most ``concurrency`` of them
    fetch, rewrite and save at the same time.
    """

    def __init__(
        self,
        domain: str,
        download_root: str,
        max_depth: int,
        visited: VisitedSet,
        timeout: int = DEFAULT_TIMEOUT,
        concurrency: int = DEFAULT_CONCURRENCY
    ):
        """
        Initialize the downloader.

        Args:
            domain: Host (and optional port) URLs must match to be fetched
            download_root: Base download directory
            max_depth: Deepest crawl depth that is still fetched
            visited: Registry of URLs already admitted
            timeout: Request timeout in seconds
            concurrency: Maximum concurrent downloads
        """
        self.domain = domain
        self.download_root = download_root
        self.max_depth = max_depth
        self.visited = visited
        self.timeout = ClientTimeout(total=timeout)
        self.concurrency = concurrency
        self.logger = get_logger("downloader")

        # Set by the crawler once the rewriter is wired to submit()
        self.rewriter: Optional[LinkRewriter] = None

        self._session: Optional[aiohttp.ClientSession] = None
        self._semaphore = asyncio.Semaphore(concurrency)

        # Outstanding work; _idle is set whenever _pending drops to zero
        self._pending = 0
        self._idle = asyncio.Event()
        self._idle.set()
        self._tasks: Set[asyncio.Task] = set()

        self._saved: List[str] = []

    @property
    def saved_files(self) -> List[str]:
        """Get the local paths written so far."""
        return list(self._saved)

    async def open(self) -> None:
        """Create the HTTP session shared by all downloads."""
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=self.timeout)

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session is not None:
            await self._session.close()
            self._session = None

    def submit(self, url: str, depth: int) -> bool:
        """
        Schedule a URL for download if it passes admission.

        Returns right after the depth, scope and dedup checks; the download
        itself runs in a separate task.

        Args:
            url: Absolute URL to fetch
            depth: Link distance from the seed

        Returns:
            True if a download task was scheduled
        """
        if depth > self.max_depth:
            return False

        try:
            domain = get_domain(url)
        except ValueError as e:
            self.logger.warning(f"Skipping unparsable URL {url!r}: {e}")
            return False

        if domain != self.domain:
            return False

        if not self.visited.admit(url):
            return False

        self._pending += 1
        self._idle.clear()

        task = asyncio.create_task(self._download(url, depth))
        self._tasks.add(task)
        task.add_done_callback(self._task_done)
        return True

    async def wait(self) -> None:
        """Block until every scheduled download, including ones spawned later, is done."""
        await self._idle.wait()

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)

        if not task.cancelled() and task.exception() is not None:
            self.logger.error(
                f"Unexpected error in download task: {task.exception()!r}",
                exc_info=task.exception()
            )

        self._pending -= 1
        if self._pending == 0:
            self._idle.set()

    async def _download(self, url: str, depth: int) -> Optional[str]:
        """
        Fetch, rewrite and save a single URL.

        Args:
            url: URL to download
            depth: Crawl depth of the URL

        Returns:
            Local file path if successful, None otherwise
        """
        async with self._semaphore:
            self.logger.info(f"Downloading: {url} (depth {depth})")

            try:
                async with self._session.get(url) as response:
                    if response.status != 200:
                        self.logger.warning(
                            f"HTTP {response.status} for {url} (depth {depth})"
                        )
                        return None

                    content = await response.read()
                    content_type = response.headers.get('Content-Type', '')

            except ClientError as e:
                self.logger.warning(f"Client error downloading {url} (depth {depth}): {e}")
                return None
            except asyncio.TimeoutError:
                self.logger.warning(f"Timeout downloading {url} (depth {depth})")
                return None

            # Rewrite before the single write so the file on disk always
            # holds local links
            if 'text/html' in content_type.lower() and self.rewriter is not None:
                try:
                    content = self.rewriter.rewrite(content, url, depth)
                except ParserRejectedMarkup as e:
                    self.logger.warning(
                        f"Could not parse HTML from {url} (depth {depth}), "
                        f"saving it unmodified: {e}"
                    )

            local_path = url_to_local_path(url, self.download_root)

            try:
                ensure_parent_dir(local_path)

                with open(local_path, 'wb') as f:
                    f.write(content)

            except (OSError, ValueError) as e:
                self.logger.error(
                    f"Could not save {url} (depth {depth}) to {local_path}: {e}"
                )
                return None

            self._saved.append(local_path)
            self.logger.debug(f"Saved: {url} -> {local_path}")

            return local_path
