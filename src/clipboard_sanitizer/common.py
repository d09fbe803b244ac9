import os
from pathlib import Path
from typing import Union

from .logging import LazyLogger


PathIsh = Union[str, Path]

APP_NAME = 'clipboard-sanitizer'

# prefix for environment variables overriding config file values
ENV_PREFIX = 'CLIPBOARD_SANITIZER_'


logger = LazyLogger('clipboard_sanitizer', level='INFO')


def appdirs():
    under_test = os.environ.get('PYTEST_CURRENT_TEST') is not None
    # keep tests from touching the real user config
    name = f'{APP_NAME}-test' if under_test else APP_NAME
    import appdirs as ad # type: ignore[import]
    return ad.AppDirs(appname=name)


def user_config_dir() -> Path:
    return Path(appdirs().user_config_dir)


def user_config_file() -> Path:
    return user_config_dir() / 'config.toml'
