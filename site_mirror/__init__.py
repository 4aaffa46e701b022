"""
Site Mirror - recursive website mirroring tool.

This package crawls a website up to a bounded link depth, downloads every
same-host resource it references, and rewrites links so the copy can be
browsed offline.
"""

__version__ = "1.0.0"
