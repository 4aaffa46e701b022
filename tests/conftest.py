"""
Shared fixtures: a synthetic website served over real HTTP.
"""

import asyncio
from collections import Counter

import pytest
from aiohttp import web


class Site:
    """Handle on a running test site."""

    def __init__(self, server, hits, in_flight):
        self.server = server
        self.hits = hits
        self.in_flight = in_flight

    @property
    def domain(self) -> str:
        return f"{self.server.host}:{self.server.port}"

    def url(self, path: str = '/') -> str:
        return str(self.server.make_url(path))


class InFlight:
    """Tracks how many requests the site is serving at once."""

    def __init__(self):
        self.current = 0
        self.peak = 0

    def enter(self):
        self.current += 1
        self.peak = max(self.peak, self.current)

    def leave(self):
        self.current -= 1


@pytest.fixture
def make_site(aiohttp_server):
    """
    Build a site from a mapping of path -> (body, content type).

    Paths that are not in the mapping answer 404. ``delay`` slows every
    response down so concurrent requests overlap.
    """
    async def factory(pages, delay: float = 0.0) -> Site:
        hits = Counter()
        in_flight = InFlight()

        async def handler(request):
            hits[request.path] += 1
            in_flight.enter()
            try:
                if delay:
                    await asyncio.sleep(delay)
                if request.path not in pages:
                    return web.Response(status=404, text='not found')
                body, content_type = pages[request.path]
                if isinstance(body, str):
                    body = body.encode('utf-8')
                return web.Response(body=body, headers={'Content-Type': content_type})
            finally:
                in_flight.leave()

        app = web.Application()
        app.router.add_route('GET', '/{tail:.*}', handler)
        server = await aiohttp_server(app)
        return Site(server, hits, in_flight)

    return factory
