"""
Crawler module for site mirroring.

Contains components for crawling, downloading, deduplicating, and rewriting.
"""

from .crawler import MirrorCrawler, CrawlResult
from .downloader import MirrorDownloader
from .rewrite import LinkRewriter
from .visited import VisitedSet

__all__ = [
    "MirrorCrawler",
    "CrawlResult",
    "MirrorDownloader",
    "LinkRewriter",
    "VisitedSet",
]
