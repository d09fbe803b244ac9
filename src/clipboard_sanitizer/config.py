'''
Read-only settings, loaded once at startup from the user config file and the environment.

The config file is a flat TOML table, e.g.

    YOUTUBE_PREFIXES = "live,shorts"

Any key can be overridden with an environment variable, e.g. CLIPBOARD_SANITIZER_YOUTUBE_PREFIXES=live
'''
from pathlib import Path
import os
import tomllib
from types import MappingProxyType
from typing import Any, Dict, Mapping, NamedTuple, Optional, Tuple

from .common import ENV_PREFIX, PathIsh, logger, user_config_file


Settings = Mapping[str, str]


class Config(NamedTuple):
    values: Settings = MappingProxyType({})

    @classmethod
    def make(cls, values: Optional[Mapping[str, str]] = None) -> 'Config':
        d = {k.upper(): v for k, v in (values or {}).items()}
        return cls(values=MappingProxyType(d))

    def get(self, key: str) -> Optional[str]:
        return self.values.get(key.upper())

    @property
    def youtube_prefixes(self) -> Tuple[str, ...]:
        '''
        Path prefixes (e.g. '/live/', '/shorts/') which carry a video id in the next path segment.
        Order matters, the first matching prefix wins.
        '''
        raw = self.get('YOUTUBE_PREFIXES') or ''
        tokens = (t.strip() for t in raw.split(','))
        return tuple(f'/{t}/' for t in tokens if len(t) > 0)


EMPTY = Config()


def _to_setting(key: str, value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        logger.warning("config: ignoring nested table '%s', only top level keys are supported", key)
        return None
    if isinstance(value, list):
        return ','.join(str(v) for v in value)
    if isinstance(value, bool):
        return str(value).lower() # same spelling as in TOML
    return str(value)


def parse_settings(text: str) -> Dict[str, str]:
    raw = tomllib.loads(text)
    res: Dict[str, str] = {}
    for k, v in raw.items():
        s = _to_setting(k, v)
        if s is not None:
            res[k.upper()] = s
    return res


def env_settings(environ: Mapping[str, str]) -> Dict[str, str]:
    return {
        k[len(ENV_PREFIX):].upper(): v
        for k, v in environ.items()
        if k.startswith(ENV_PREFIX) and len(k) > len(ENV_PREFIX)
    }


def load(config_file: Optional[PathIsh] = None, environ: Optional[Mapping[str, str]] = None) -> Config:
    '''
    Never raises: if the config can't be created or read, falls back to an empty config.
    '''
    p = user_config_file() if config_file is None else Path(config_file)
    env = os.environ if environ is None else environ
    try:
        if not p.exists():
            logger.info("config file '%s' doesn't exist, creating an empty one", p)
            p.parent.mkdir(parents=True, exist_ok=True)
            p.touch()
        settings = parse_settings(p.read_text(encoding='utf8'))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        logger.error("couldn't load config from '%s', falling back to defaults", p)
        logger.exception(e)
        return EMPTY

    settings.update(env_settings(env))
    logger.debug('loaded config: %s', settings)
    return Config.make(settings)
