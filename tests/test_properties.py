from datetime import timedelta
import string
from typing import Any, Dict

from hypothesis import given, settings
from hypothesis import strategies as st
# NOTE: pytest ... -s --hypothesis-verbosity=debug is useful for seeing what hypothesis is doing

from clipboard_sanitizer.cannon import (
    COMMON_TRACKING_PARAMS,
    Url,
    rewrite_for_domain,
    rules,
    strip_params,
    try_parse_url,
)
from clipboard_sanitizer.config import Config


HSETTINGS: Dict[str, Any] = dict(
    derandomize=True,
    deadline=timedelta(seconds=2),
)


ALPHABET = string.ascii_letters + string.digits + '-_'

KNOWN_KEYS = ['si', 'v', 't', 'feature', 'list', *COMMON_TRACKING_PARAMS]

keys = st.one_of(st.sampled_from(KNOWN_KEYS), st.text(ALPHABET, min_size=1, max_size=8))
values = st.text(ALPHABET, max_size=8)
queries = st.lists(st.tuples(keys, values), max_size=6).map(tuple)

hosts = st.sampled_from([
    'www.youtube.com',
    'youtube.com',
    'youtu.be',
    'music.youtube.com',
    'm.youtube.com',
    'example.com',
    'news.ycombinator.com',
])

paths = st.sampled_from([
    '',
    '/',
    '/watch',
    '/live/abc',
    '/live/',
    '/shorts/x/y',
    '/a/b/c',
])

urls = st.builds(
    Url,
    scheme=st.sampled_from(['http', 'https']),
    host=hosts,
    path=paths,
    query=queries,
    fragment=st.sampled_from(['', 'frag']),
)

configs = st.sampled_from([
    Config(),
    Config.make({'YOUTUBE_PREFIXES': 'live,shorts'}),
    Config.make({'YOUTUBE_PREFIXES': 'shorts,a,live'}),
])

strip_sets = st.frozensets(keys, max_size=4)


@settings(**HSETTINGS)
@given(url=urls, config=configs)
def test_rewrite_idempotent(url: Url, config: Config) -> None:
    once = rewrite_for_domain(url, config)
    assert rewrite_for_domain(once, config) == once


@settings(**HSETTINGS)
@given(url=urls, config=configs)
def test_rewrite_roundtrip(url: Url, config: Config) -> None:
    res = rewrite_for_domain(url, config)
    assert try_parse_url(str(res)) == res
    assert res.scheme == url.scheme


@settings(**HSETTINGS)
@given(url=urls, strip=strip_sets)
def test_strip_params_filters_in_order(url: Url, strip: frozenset) -> None:
    res = strip_params(url, strip)
    assert res.query == tuple((k, v) for k, v in url.query if k not in strip)
    assert (res.scheme, res.host, res.path, res.fragment) == (url.scheme, url.host, url.path, url.fragment)


@settings(**HSETTINGS)
@given(url=urls, strip=strip_sets)
def test_strip_params_no_empty_query(url: Url, strip: frozenset) -> None:
    everything = strip | {k for k, _ in url.query}
    res = strip_params(url, everything)
    assert res.query == ()
    assert '?' not in str(res)


@settings(**HSETTINGS)
@given(url=urls, config=configs)
def test_other_domains_untouched(url: Url, config: Config) -> None:
    if url.host in rules:
        return
    res = rewrite_for_domain(url, config)
    assert (res.scheme, res.host, res.path, res.fragment) == (url.scheme, url.host, url.path, url.fragment)
    assert res.query == tuple((k, v) for k, v in url.query if k not in COMMON_TRACKING_PARAMS)
