import logging
import os
import sys

from clipboard_sanitizer import logging as clogging
from clipboard_sanitizer.logging import LazyLogger, set_level


def test_logs_without_terminal(monkeypatch, capfd) -> None:
    # e.g. when started in background, stdin isn't a terminal
    with open(os.devnull) as devnull:
        monkeypatch.setattr(sys, 'stdin', devnull)
        ll = LazyLogger('clipboard_sanitizer_test_no_terminal', level='DEBUG')
        ll.debug('checking clipboard...')
        ll.info('stripped tracking from url: https://youtu.be/1234')

    err = capfd.readouterr().err
    assert 'checking clipboard...' in err
    assert 'stripped tracking from url: https://youtu.be/1234' in err
    assert 'Logging error' not in err


def test_set_level(capfd) -> None:
    ll = LazyLogger('clipboard_sanitizer_test_set_level', level='INFO')
    ll.debug('hidden')
    set_level(ll, 'debug')
    assert ll.level == logging.DEBUG
    assert all(h.level == logging.DEBUG for h in ll.handlers)
    ll.debug('shown')

    err = capfd.readouterr().err
    assert 'hidden' not in err
    assert 'shown' in err


def test_single_handler_setup() -> None:
    # plain logzero setup only, no terminal-dependent handlers
    assert not hasattr(clogging, 'CollapseDebugHandler')
    ll = LazyLogger('clipboard_sanitizer_test_handlers', level='INFO')
    ll.info('init')
    assert len(ll.handlers) == 1
    assert ll.propagate is False
