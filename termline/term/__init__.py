"""
Utilities to work with the terminal and escape sequences.

This subpackage contains the lowest layer of termline: switching the
terminal in and out of raw mode, decoding the bytes on stdin into keys,
and writing the vt100 escape sequences that move the cursor and edit the
visible line. We don't use curses, because all we need is a sensible
subset of vt100 that any ANSI terminal (and xterm.js) supports.
"""

from ._raw_mode import RawMode  # noqa
from .input_keys import Key, KeyDecoder  # noqa
from .output import TerminalOutput  # noqa
