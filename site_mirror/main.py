#!/usr/bin/env python3
"""
Site Mirror - recursive website mirroring tool.

Downloads a page and every same-host resource reachable within a bounded
link depth, rewriting links so the copy can be browsed offline.

Usage:
    site-mirror https://example.com 2 ./downloads
"""

import argparse
import asyncio
import logging
import sys

from site_mirror.crawler import MirrorCrawler
from site_mirror.utils.constants import (
    DEFAULT_CONCURRENCY,
    DEFAULT_DOWNLOAD_DIR,
    DEFAULT_MAX_DEPTH,
    DEFAULT_TIMEOUT,
)
from site_mirror.utils.log import (
    setup_logger,
    print_success,
    print_error,
    print_info
)


def parse_arguments(argv=None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog='site-mirror',
        description='Mirror a website for offline browsing',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s example.com
    %(prog)s https://example.com/docs/ 3 ./mirror
    %(prog)s https://example.com 2 -c 4 --log-file mirror.log
        """
    )

    parser.add_argument(
        'url',
        type=str,
        help='Seed URL to mirror (http:// is assumed when no scheme is given)'
    )

    parser.add_argument(
        'depth',
        type=int,
        nargs='?',
        default=DEFAULT_MAX_DEPTH,
        help=f'Maximum link depth from the seed (default: {DEFAULT_MAX_DEPTH})'
    )

    parser.add_argument(
        'output',
        type=str,
        nargs='?',
        default=DEFAULT_DOWNLOAD_DIR,
        help=f'Download directory (default: {DEFAULT_DOWNLOAD_DIR})'
    )

    parser.add_argument(
        '--concurrency', '-c',
        type=int,
        default=DEFAULT_CONCURRENCY,
        help=f'Maximum concurrent downloads (default: {DEFAULT_CONCURRENCY})'
    )

    parser.add_argument(
        '--timeout', '-t',
        type=int,
        default=DEFAULT_TIMEOUT,
        help=f'Per-request timeout in seconds (default: {DEFAULT_TIMEOUT})'
    )

    parser.add_argument(
        '--log-file',
        type=str,
        default=None,
        help='Also write log records to this file'
    )

    verbosity = parser.add_mutually_exclusive_group()

    verbosity.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging'
    )

    verbosity.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress output except warnings and errors'
    )

    return parser.parse_args(argv)


async def main(argv=None) -> int:
    """
    Main entry point for the site mirror.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    args = parse_arguments(argv)

    log_level = logging.DEBUG if args.verbose else (logging.WARNING if args.quiet else logging.INFO)
    setup_logger(level=log_level, log_file=args.log_file)

    try:
        crawler = MirrorCrawler(
            url=args.url,
            max_depth=args.depth,
            download_dir=args.output,
            concurrency=args.concurrency,
            timeout=args.timeout
        )
        await crawler.run()

    except ValueError as e:
        print_error(f"Invalid input: {e}")
        return 1
    except OSError as e:
        print_error(f"Cannot create download directory: {e}")
        return 1

    if not args.quiet:
        print_info(f"Target URL: {crawler.start_url}")
        print_info(f"Output: {crawler.download_dir}")

    result = await crawler.join()

    if not args.quiet:
        print_success(
            f"Download completed! {len(result.files)} files "
            f"in {result.duration_seconds:.1f}s"
        )
        print_success(f"Mirror written to: {result.mirror_dir}")

    return 0


def run() -> None:
    """Entry point wrapper for running as module."""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        print_error("Crawl interrupted by user")
        sys.exit(1)


if __name__ == '__main__':
    run()
