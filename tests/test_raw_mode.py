import io
import os

import pytest

from termline.term import RawMode

termios = pytest.importorskip("termios")


class TtyStream(io.StringIO):
    """A text stream that claims to be a terminal."""

    def isatty(self):
        return True


def test_raw_mode_on_a_pipe():
    fd_read, fd_write = os.pipe()
    try:
        raw = RawMode(fd_read, io.StringIO())
        raw.disable()  # never enabled, is fine
        with raw:
            assert not raw.is_raw
        assert not raw.is_raw
        assert raw.query_cursor_position() is None
    finally:
        os.close(fd_read)
        os.close(fd_write)


def test_raw_mode_on_a_pty():
    master, slave = os.openpty()
    try:
        original = termios.tcgetattr(slave)
        assert original[3] & termios.ICANON

        raw = RawMode(slave, io.StringIO())
        raw.enable()
        assert raw.is_raw
        attrs = termios.tcgetattr(slave)
        assert not attrs[3] & termios.ICANON
        assert not attrs[3] & termios.ECHO
        assert attrs[6][termios.VMIN] in (1, b"\x01")

        # Enabling twice does not overwrite the saved attributes
        raw.enable()
        raw.disable()
        assert not raw.is_raw
        assert termios.tcgetattr(slave)[3] == original[3]

        raw.disable()
        assert termios.tcgetattr(slave)[3] == original[3]
    finally:
        os.close(master)
        os.close(slave)


def test_query_cursor_position():
    master, slave = os.openpty()
    try:
        stdout = TtyStream()
        raw = RawMode(slave, stdout)
        # Not a terminal on the output side
        assert RawMode(slave, io.StringIO()).query_cursor_position() is None

        with raw:
            os.write(master, b"\x1b[12;5R")
            assert raw.query_cursor_position() == (12, 5)
            # Still raw, since it was raw before the query
            assert raw.is_raw
        assert stdout.getvalue() == "\x1b[6n"

        with raw:
            os.write(master, b"garbage R")
            assert raw.query_cursor_position() is None
    finally:
        os.close(master)
        os.close(slave)


if __name__ == "__main__":
    test_raw_mode_on_a_pipe()
    test_raw_mode_on_a_pty()
    test_query_cursor_position()
