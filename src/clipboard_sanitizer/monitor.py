'''
The polling loop: every tick takes a snapshot of the clipboard and writes back a cleaned up url if there is one.

Single threaded on purpose, the only waiting happens in the sleep between ticks.
Nothing here is fatal: a failed read or write is logged and picked up again on the next tick.
'''
from datetime import timedelta
import time
from typing import Callable, Optional

from .cannon import sanitize
from .clipboard import Clipboard, ClipboardReadError, ClipboardWriteError
from .common import logger
from .config import Config


POLL_INTERVAL = timedelta(milliseconds=50)


def tick(clipboard: Clipboard, config: Config) -> Optional[str]:
    '''
    Returns the text written to the clipboard, if any.
    '''
    logger.debug('checking clipboard...')
    try:
        text = clipboard.get_text()
    except ClipboardReadError as e:
        logger.error('%s: %s', e, e.__cause__)
        return None

    res = sanitize(text, config)
    if res is None:
        return None

    try:
        clipboard.set_text(res)
    except ClipboardWriteError as e:
        logger.error('%s: %s', e, e.__cause__)
        return None
    logger.info('stripped tracking from url: %s', res)
    return res


def run(
        clipboard: Clipboard,
        config: Config,
        *,
        interval: timedelta = POLL_INTERVAL,
        sleep: Callable[[float], None] = time.sleep,
        ticks: Optional[int] = None,
) -> None:
    '''
    Runs forever, unless 'ticks' is set (only useful for testing).
    '''
    logger.info('watching clipboard every %dms', interval / timedelta(milliseconds=1))
    done = 0
    while ticks is None or done < ticks:
        tick(clipboard, config)
        done += 1
        sleep(interval.total_seconds())
