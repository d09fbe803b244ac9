'''
Lazily configured, colored logging.
'''
import logging
from typing import Union, Optional, cast

import logzero # type: ignore[import]

Level = int
LevelIsh = Optional[Union[Level, str]]


def mklevel(level: LevelIsh) -> Level:
    if level is None:
        return logging.NOTSET
    if isinstance(level, int):
        return level
    lvl = getattr(logging, level.upper(), None)
    if not isinstance(lvl, int):
        raise ValueError(f'unknown logging level: {level!r}')
    return lvl


FORMAT = '%(color)s[%(levelname)-7s %(asctime)s %(name)s %(filename)s:%(lineno)d]%(end_color)s %(message)s'
DATEFMT = '%Y-%m-%d %H:%M:%S'

_init_done = 'lazylogger_init_done'

def setup_logger(logger: logging.Logger, level: LevelIsh) -> None:
    formatter = logzero.LogFormatter(
        fmt=FORMAT,
        datefmt=DATEFMT,
    )
    logger.addFilter(AddExceptionTraceback())
    # logzero also sets propagate = False, otherwise messages are duplicated
    logzero.setup_logger(logger.name, level=mklevel(level), formatter=formatter)


class LazyLogger(logging.Logger):
    def __new__(cls, name: str, level: LevelIsh = 'INFO') -> 'LazyLogger':
        logger = logging.getLogger(name)

        # this is called prior to all _log calls so makes sense to do it here
        def isEnabledFor_lazyinit(*args, logger=logger, orig=logger.isEnabledFor, **kwargs) -> bool:
            if not getattr(logger, _init_done, False):
                setup_logger(logger, level=level)
                setattr(logger, _init_done, True)
                logger.isEnabledFor = orig # restore the callback
            return orig(*args, **kwargs)

        # otherwise might go into an inf loop
        if not hasattr(logger, _init_done):
            setattr(logger, _init_done, False) # will setup on the first call
            logger.isEnabledFor = isEnabledFor_lazyinit  # type: ignore[assignment]
        return cast(LazyLogger, logger)


def set_level(logger: logging.Logger, level: LevelIsh) -> None:
    '''
    Changes the level of a (possibly not yet initialised) LazyLogger and its handlers.
    '''
    lvl = mklevel(level)
    logger.isEnabledFor(lvl) # forces the lazy setup, so it doesn't override the level later
    logger.setLevel(lvl)
    for h in logger.handlers:
        h.setLevel(lvl)


# by default, logging.exception isn't logging traceback when called with the exception object
# see https://stackoverflow.com/questions/75121925/why-doesnt-python-logging-exception-method-log-traceback-by-default
class AddExceptionTraceback(logging.Filter):
    def filter(self, record):
        s = super().filter(record)
        if s is False:
            return False
        if record.levelname == 'ERROR':
            exc = record.msg
            if isinstance(exc, BaseException):
                if record.exc_info is None or record.exc_info == (None, None, None):
                    exc_info = (type(exc), exc, exc.__traceback__)
                    record.exc_info = exc_info
        return s
