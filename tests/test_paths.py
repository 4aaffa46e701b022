import os

import pytest

from site_mirror.utils.paths import (
    get_domain,
    get_relative_path,
    normalize_seed_url,
    strip_query_and_fragment,
    url_to_local_path,
)


ROOT = 'downloads'


@pytest.mark.parametrize('url, expected', [
    ('http://example.com/', 'example.com/index.html'),
    ('http://example.com', 'example.com/index.html'),
    ('http://example.com/about', 'example.com/about.html'),
    ('http://example.com/docs/', 'example.com/docs/index.html'),
    ('http://example.com/docs/guide', 'example.com/docs/guide.html'),
    ('http://example.com/shared.css', 'example.com/shared.css'),
    ('http://example.com/js/app.min.js', 'example.com/js/app.min.js'),
    ('http://example.com/page?x=1#top', 'example.com/page.html'),
    ('http://example.com:8080/x', 'example.com:8080/x.html'),
    ('http://example.com/a%20b.png', 'example.com/a b.png'),
    ('http://example.com/../../etc/passwd', 'example.com/etc/passwd.html'),
    ('http://example.com/a/..', 'example.com/index.html'),
    ('http://example.com/..', 'example.com/index.html'),
    ('http://example.com/.', 'example.com/index.html'),
    ('http://example.com/a/./', 'example.com/a/index.html'),
    ('http://example.com/a/b/.', 'example.com/a/b/index.html'),
    ('http://user:pw@example.com/x', 'example.com/x.html'),
    ('http://EXAMPLE.com:8080/', 'example.com:8080/index.html'),
    ('http://[::1]:8000/x', '[::1]:8000/x.html'),
])
def test_url_to_local_path(url, expected):
    assert url_to_local_path(url, ROOT) == os.path.join(ROOT, *expected.split('/'))


def test_url_to_local_path_is_deterministic():
    url = 'http://example.com/blog/2024/post'
    first = url_to_local_path(url, ROOT)
    assert all(url_to_local_path(url, ROOT) == first for _ in range(10))


def test_query_and_fragment_do_not_change_the_path():
    plain = url_to_local_path('http://example.com/shared.css', ROOT)
    assert url_to_local_path('http://example.com/shared.css?v=2', ROOT) == plain
    assert url_to_local_path('http://example.com/shared.css#x', ROOT) == plain


def test_strip_query_and_fragment():
    assert strip_query_and_fragment('http://example.com/a?b=1#c') == 'http://example.com/a'
    assert strip_query_and_fragment('http://example.com/a') == 'http://example.com/a'


@pytest.mark.parametrize('url, expected', [
    ('example.com', 'http://example.com'),
    ('example.com/docs/', 'http://example.com/docs/'),
    ('https://example.com/', 'https://example.com/'),
    ('  http://example.com  ', 'http://example.com'),
])
def test_normalize_seed_url(url, expected):
    assert normalize_seed_url(url) == expected


@pytest.mark.parametrize('url', ['', 'http://', 'ftp://example.com/', 'http:///path'])
def test_normalize_seed_url_rejects_invalid(url):
    with pytest.raises(ValueError):
        normalize_seed_url(url)


def test_get_relative_path_uses_forward_slashes():
    page = os.path.join(ROOT, 'example.com', 'docs', 'guide', 'index.html')
    target = os.path.join(ROOT, 'example.com', 'css', 'site.css')
    assert get_relative_path(page, target) == '../../css/site.css'


def test_get_relative_path_same_directory():
    page = os.path.join(ROOT, 'example.com', 'index.html')
    target = os.path.join(ROOT, 'example.com', 'about.html')
    assert get_relative_path(page, target) == 'about.html'


@pytest.mark.parametrize('url, expected', [
    ('http://example.com/', 'example.com'),
    ('http://user:pw@example.com/', 'example.com'),
    ('https://Example.com:8443/x', 'example.com:8443'),
    ('http://[::1]:8000/', '[::1]:8000'),
])
def test_get_domain_is_host_and_port(url, expected):
    assert get_domain(url) == expected


def test_seed_with_invalid_port_rejected():
    with pytest.raises(ValueError):
        normalize_seed_url('http://example.com:99999/')
