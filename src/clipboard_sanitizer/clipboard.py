from typing import Protocol

import pyperclip # type: ignore[import]


# the subprocess based backends (xclip, xsel, wl-clipboard, pbcopy) can fail on their own
BACKEND_ERRORS = (pyperclip.PyperclipException, OSError, UnicodeDecodeError)


class ClipboardError(Exception):
    pass

class ClipboardReadError(ClipboardError):
    pass

class ClipboardWriteError(ClipboardError):
    pass


class Clipboard(Protocol):
    def get_text(self) -> str: ...

    def set_text(self, text: str) -> None: ...


class SystemClipboard:
    '''
    The OS clipboard, via pyperclip (needs xclip/xsel/wl-clipboard on Linux)
    '''
    def get_text(self) -> str:
        try:
            return pyperclip.paste()
        except BACKEND_ERRORS as e:
            raise ClipboardReadError('failed to get clipboard') from e

    def set_text(self, text: str) -> None:
        try:
            pyperclip.copy(text)
        except BACKEND_ERRORS as e:
            raise ClipboardWriteError('failed to set clipboard') from e
