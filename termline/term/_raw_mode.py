import os
import re
import sys
import logging

_IS_WINDOWS = os.name == "nt"

if not _IS_WINDOWS:
    import tty  # Unix
    import termios  # Unix


logger = logging.getLogger("termline")

CURSOR_POSITION_REPLY = re.compile(rb"\x1b\[(\d+);(\d+)R")


def patch_lflag(attrs: int) -> int:
    return attrs & ~(termios.ECHO | termios.ICANON)


def as_fd(file):
    """Get the file descriptor for a file object or an int."""
    if isinstance(file, int):
        return file
    return file.fileno()


class RawMode:
    """Switch the terminal between cooked and raw mode.

    In raw mode, input is delivered byte by byte, without line buffering
    and without local echo. The original terminal attributes are saved on
    the first ``enable()`` and restored on ``disable()``. Calling
    ``enable()`` again while raw is a no-op, and so is ``disable()`` when
    the terminal is not raw.

    This object owns the only process-wide state in termline, so there
    should be a single instance per terminal, and only one reader at a
    time. All OS failures are logged and otherwise ignored.

    Can be used as a context manager.
    """

    def __init__(self, stdin=None, stdout=None):
        stdin = sys.__stdin__ if stdin is None else stdin
        stdout = sys.__stdout__ if stdout is None else stdout
        self.fd_in = as_fd(stdin)
        self._stdout = stdout
        self._ori_term_attr = None

    def __enter__(self):
        self.enable()
        return self

    def __exit__(self, *args):
        self.disable()

    @property
    def is_raw(self):
        """Whether ``enable()`` has been called and not yet undone."""
        return self._ori_term_attr is not None

    def enable(self):
        """Flush pending output and put the terminal in raw mode."""
        self._flush()
        if self._ori_term_attr is not None or _IS_WINDOWS:
            return

        try:
            self._ori_term_attr = termios.tcgetattr(self.fd_in)
        except termios.error as err:
            # Not a tty, e.g. a pipe during tests.
            logger.debug(f"could not get terminal attributes: {err}")
            self._ori_term_attr = None
            return

        newattr = termios.tcgetattr(self.fd_in)
        newattr[tty.LFLAG] = patch_lflag(newattr[tty.LFLAG])

        # VMIN defines the number of characters read at a time in
        # non-canonical mode. It seems to default to 1 on Linux, but on
        # Solaris and derived operating systems it defaults to 4. (This is
        # because the VMIN slot is the same as the VEOF slot, which
        # defaults to ASCII EOT = Ctrl-D = 4.)
        newattr[tty.CC][termios.VMIN] = 1
        newattr[tty.CC][termios.VTIME] = 0

        try:
            termios.tcsetattr(self.fd_in, termios.TCSANOW, newattr)
        except termios.error as err:
            logger.debug(f"could not enable raw mode: {err}")
            self._ori_term_attr = None
        else:
            logger.debug("raw mode enabled")

    def disable(self):
        """Restore the terminal attributes saved by ``enable()``."""
        if self._ori_term_attr is None:
            return
        try:
            termios.tcsetattr(self.fd_in, termios.TCSANOW, self._ori_term_attr)
        except termios.error as err:
            logger.debug(f"could not restore terminal attributes: {err}")
        else:
            logger.debug("raw mode disabled")
        self._ori_term_attr = None

    def query_cursor_position(self):
        """Ask the terminal where the cursor is.

        Returns a ``(row, column)`` tuple, 1-based, or None if either
        stream is not a terminal or the terminal did not answer properly.
        """
        try:
            if not (os.isatty(self.fd_in) and self._stdout.isatty()):
                return None
        except (AttributeError, OSError, ValueError):
            return None

        was_raw = self.is_raw
        self.enable()
        try:
            self._stdout.write("\x1b[6n")
            self._flush()
            reply = b""
            while not reply.endswith(b"R") and len(reply) < 32:
                bb = os.read(self.fd_in, 1)
                if not bb:
                    break
                reply += bb
        except OSError as err:
            logger.debug(f"cursor position query failed: {err}")
            return None
        finally:
            if not was_raw:
                self.disable()

        m = CURSOR_POSITION_REPLY.search(reply)
        if m is None:
            logger.debug(f"unexpected cursor position reply: {reply!r}")
            return None
        return int(m.group(1)), int(m.group(2))

    def _flush(self):
        try:
            self._stdout.flush()
        except (AttributeError, ValueError):
            pass
