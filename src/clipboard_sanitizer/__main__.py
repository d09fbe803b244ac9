import argparse
from importlib.metadata import PackageNotFoundError, version
import sys
from typing import Optional, Sequence

from . import config
from . import monitor
from .clipboard import SystemClipboard
from .common import APP_NAME, logger
from .logging import set_level


LEVELS = ['debug', 'info', 'warn', 'warning', 'error', 'critical']
DEFAULT_LEVEL = 'info'


def get_version() -> str:
    try:
        return version(APP_NAME)
    except PackageNotFoundError: # running from the repository without installing
        return 'unknown'


def make_parser() -> argparse.ArgumentParser:
    F = lambda prog: argparse.ArgumentDefaultsHelpFormatter(prog, width=120)
    p = argparse.ArgumentParser(
        prog=APP_NAME,
        description='Watches the clipboard and strips tracking parameters from copied urls',
        formatter_class=F,
    )
    p.add_argument(
        '-v', '--verbose',
        dest='verbosity',
        type=str.lower,
        choices=LEVELS,
        default=DEFAULT_LEVEL,
        help='Logging level',
    )
    p.add_argument('--version', action='version', version=f'%(prog)s {get_version()}')
    return p


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = make_parser().parse_args(argv)
    set_level(logger, args.verbosity)
    logger.debug("CLI args: %s", args)

    # loaded once, before the loop starts, never changes afterwards
    cfg = config.load()
    if len(cfg.youtube_prefixes) > 0:
        logger.info('youtube path prefixes: %s', ', '.join(cfg.youtube_prefixes))

    try:
        monitor.run(SystemClipboard(), cfg)
    except KeyboardInterrupt:
        logger.info('interrupted, exiting')
        sys.exit(0)


if __name__ == '__main__':
    main()
