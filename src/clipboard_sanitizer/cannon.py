#!/usr/bin/env python3
"""
Stripping tracking parameters from urls and canonicalising some of them.
E.g.
 https://www.youtube.com/watch?v=1234&si=AbCdEf&feature=share
and
 https://youtu.be/1234?feature=share
point at the same video, the latter is shorter and doesn't tell anyone who shared it.

Rules are picked by exact domain match, everything else only gets generic utm_* parameters removed.
"""
from dataclasses import dataclass, replace
import ipaddress
import re
from typing import Callable, Collection, Dict, Iterable, Optional, Tuple
from urllib.parse import quote, parse_qsl, urlencode, urlsplit, urlunsplit

from .common import logger
from .config import Config, EMPTY


YOUTUBE_TRACKING_PARAMS = (
    'si',
)

COMMON_TRACKING_PARAMS = (
    'utm_source',
    'utm_medium',
    'utm_campaign',
    'utm_term',
    'utm_content',
)

YOUTU_BE = 'youtu.be'


Query = Tuple[Tuple[str, str], ...]


class CanonifyException(Exception):
    pass


@dataclass(frozen=True)
class Url:
    '''
    Parsed absolute url. Always has a domain, so rules can rely on it.

    Query is kept as an ordered sequence of (key, value) pairs, keys may repeat.
    '''
    scheme  : str
    host    : str
    path    : str = ''
    query   : Query = ()
    fragment: str = ''
    port    : Optional[int] = None
    userinfo: str = ''

    def __post_init__(self) -> None:
        if len(self.scheme) == 0:
            raise CanonifyException(f'no scheme: {self.host}{self.path}')
        if len(self.host) == 0:
            raise CanonifyException(f'no domain: {self.scheme}://{self.path}')

    @property
    def netloc(self) -> str:
        netloc = self.host
        if self.port is not None:
            netloc = f'{netloc}:{self.port}'
        if len(self.userinfo) > 0:
            netloc = f'{self.userinfo}@{netloc}'
        return netloc

    def query_value(self, key: str) -> Optional[str]:
        '''
        Value of the first parameter named 'key'
        '''
        for k, v in self.query:
            if k == key:
                return v
        return None

    def __str__(self) -> str:
        # empty query results in no '?' at all
        query = urlencode(self.query)
        return urlunsplit((self.scheme, self.netloc, self.path, query, self.fragment))


_WHITESPACE = re.compile(r'\s')
# anything that isn't a delimiter or forbidden in a host name
_HOST = re.compile(r'[^\s/?#@:\[\]<>\\^|%"]+')


def _is_domain(host: str) -> bool:
    if _HOST.fullmatch(host) is None:
        return False
    try:
        ipaddress.ip_address(host)
    except ValueError:
        return True
    return False # ip addresses aren't domains


def try_parse_url(text: str) -> Optional[Url]:
    '''
    Returns None unless the text is a url with a scheme and a domain name.
    '''
    text = text.strip()
    if len(text) == 0 or _WHITESPACE.search(text) is not None:
        logger.debug('not a url: %r', text)
        return None

    try:
        split = urlsplit(text)
        port = split.port # validated lazily by urllib
    except ValueError as e:
        logger.debug('not a url: %r (%s)', text, e)
        return None

    host = split.hostname
    if split.scheme == '' or host is None or not _is_domain(host):
        logger.debug('not a url with a domain: %r', text)
        return None

    userinfo = split.netloc.rpartition('@')[0]
    url = Url(
        scheme=split.scheme,
        host=host,
        path=split.path,
        query=tuple(parse_qsl(split.query, keep_blank_values=True)),
        fragment=split.fragment,
        port=port,
        userinfo=userinfo,
    )
    logger.debug('found url: %s', url)
    return url


def strip_params(url: Url, strip: Collection[str]) -> Url:
    '''
    Removes all query parameters named in 'strip', keeping the order of the rest.
    '''
    logger.debug('stripping params from url %s: %s', url, list(strip))
    names = frozenset(strip)
    query = tuple((k, v) for k, v in url.query if k not in names)
    return replace(url, query=query)


Rule = Callable[[Url, Config], Url]


def _strip_youtube(url: Url, config: Config) -> Url:
    return strip_params(url, YOUTUBE_TRACKING_PARAMS)


def _strip_common(url: Url, config: Config) -> Url:
    return strip_params(url, COMMON_TRACKING_PARAMS)


def _full_youtube(url: Url, config: Config) -> Url:
    for prefix in config.youtube_prefixes:
        if not url.path.startswith(prefix):
            continue
        video_id = url.path[len(prefix):].split('/', maxsplit=1)[0]
        if len(video_id) == 0:
            continue
        short = replace(url, host=YOUTU_BE, path=f'/{video_id}')
        # youtu.be is never rewritten further, so this recurses at most once
        assert get_rule(short.host) is _strip_youtube, short
        return rewrite_for_domain(short, config)

    video_id = url.query_value('v')
    if video_id: # v= without a value is as good as no v at all
        # v is encoded in the path now
        short = replace(url, host=YOUTU_BE, path='/' + quote(video_id))
        return strip_params(short, (*YOUTUBE_TRACKING_PARAMS, 'v'))

    return strip_params(url, YOUTUBE_TRACKING_PARAMS)


rules: Dict[str, Rule] = {
    'www.youtube.com'  : _full_youtube,
    'youtube.com'      : _full_youtube,
    YOUTU_BE           : _strip_youtube,
    # unlike the main site, v is the canonical way to refer to a track here
    'music.youtube.com': _strip_youtube,
}


def get_rule(domain: str) -> Rule:
    return rules.get(domain, _strip_common)


def rewrite_for_domain(url: Url, config: Config = EMPTY) -> Url:
    return get_rule(url.host)(url, config)


def sanitize(text: str, config: Config = EMPTY) -> Optional[str]:
    '''
    Returns the cleaned up url, or None if the text isn't a url or there was nothing to clean up.
    '''
    url = try_parse_url(text)
    if url is None:
        return None
    res = rewrite_for_domain(url, config)
    # compare canonical forms, so already clean urls aren't rewritten over and over
    if str(res) == str(url):
        return None
    return str(res)


def main() -> None:
    import argparse
    import sys
    from . import config as cfg

    p = argparse.ArgumentParser(epilog='''
- echo 'https://www.youtube.com/watch?v=1234&si=abc' | python3 -m clipboard_sanitizer.cannon
''', formatter_class=lambda prog: argparse.RawTextHelpFormatter(prog, width=100) # type: ignore
    )
    p.add_argument('input', nargs='?', help='url to clean up (reads lines from stdin if omitted)')
    args = p.parse_args()

    it: Iterable[str]
    if args.input is None:
        it = sys.stdin
    else:
        it = [args.input]

    config = cfg.load()
    for line in it:
        line = line.strip()
        res = sanitize(line, config)
        print(line if res is None else res)


if __name__ == '__main__':
    main()
