import threading
from concurrent.futures import ThreadPoolExecutor

from site_mirror.crawler.visited import VisitedSet


def test_admit_once():
    visited = VisitedSet()
    assert visited.admit('http://example.com/') is True
    assert visited.admit('http://example.com/') is False
    assert 'http://example.com/' in visited
    assert len(visited) == 1


def test_raw_strings_are_not_canonicalized():
    visited = VisitedSet()
    urls = [
        'http://example.com/docs',
        'http://example.com/docs/',
        'http://example.com:80/docs',
        'http://example.com/%64ocs',
    ]
    assert all(visited.admit(url) for url in urls)
    assert len(visited) == len(urls)


def test_concurrent_admit_returns_true_exactly_once():
    visited = VisitedSet()
    workers = 32
    barrier = threading.Barrier(workers)

    def race():
        barrier.wait()
        return visited.admit('http://example.com/shared.css')

    with ThreadPoolExecutor(max_workers=workers) as pool:
        results = list(pool.map(lambda _: race(), range(workers)))

    assert results.count(True) == 1
    assert len(visited) == 1
