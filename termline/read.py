"""
The read engine: prompt, edit, validate, and try again until the input is valid.
"""

import sys
import enum
import logging

from .buffer import EditBuffer
from .readable import ReadError
from .style import Color, Modifier, as_styled, styled
from .term import KeyDecoder, RawMode, TerminalOutput
from .term._raw_mode import as_fd


logger = logging.getLogger("termline")

INVALID_INPUT = "Invalid Input, please try again"


class EndOfStreamError(Exception):
    """Raised when stdin stays closed for more than the allowed number of retries."""


class State(enum.Enum):
    EDITING = "editing"
    VALIDATING = "validating"
    RETRYING = "retrying"
    DONE = "done"


class ReadEngine:
    """Reads validated values from the terminal.

    Parameters:
        stdin: the file object (or file descriptor) to read keys from.
            Default ``sys.__stdin__``.
        stdout: the text stream to write to. Default ``sys.__stdout__``.
        error_modifier (Modifier): the style for error messages. Default red.
        query_cursor (bool, optional): whether to ask the terminal for the
            cursor position, used to roll back after invalid input. By
            default this is done only if both streams are terminals.
            Otherwise the cursor is saved and restored with DEC escapes.
        max_eof_retries (int, optional): how many times to retry when stdin
            is closed before raising EndOfStreamError. By default it
            retries forever.

    Only one read can be active at a time.
    """

    def __init__(
        self,
        stdin=None,
        stdout=None,
        *,
        error_modifier=None,
        query_cursor=None,
        max_eof_retries=None,
    ):
        stdin = sys.__stdin__ if stdin is None else stdin
        stdout = sys.__stdout__ if stdout is None else stdout
        self.output = TerminalOutput(stdout)
        self.raw_mode = RawMode(stdin, stdout)
        self.decoder = KeyDecoder(as_fd(stdin))
        self.error_modifier = error_modifier or Modifier.DEFAULT.foreground(Color.RED)
        self._query_cursor = query_cursor
        self._max_eof_retries = max_eof_retries

    def print(self, text="", terminator="\n"):
        """Print plain or styled text."""
        self.output.print(as_styled(text), terminator)

    # Rollback position

    def _save_position(self):
        position = None
        if self._query_cursor is not False:
            position = self.raw_mode.query_cursor_position()
            if position is None and self._query_cursor:
                logger.debug("cursor position not available, using save/restore")
        if position is None:
            self.output.save_cursor()
        return position

    def _restore_position(self, position):
        if position is None:
            self.output.restore_cursor()
        else:
            self.output.move_to(*position)

    # Reading

    def read(self, readable, prompt="", condition=None):
        """Read a value as described by the readable.

        Keeps asking until a valid value is entered. The optional
        condition is checked in addition to the readable's own condition.
        """
        self.output.print(as_styled(prompt), "")
        position = self._save_position()

        state = State.EDITING
        first_pass = True
        eof_count = 0
        reader = text = value = reason = None

        while state is not State.DONE:
            if state is State.EDITING:
                reader, text = self._edit(readable, first_pass)
                first_pass = False
                if text is None:
                    eof_count += 1
                    logger.info("stdin closed before input was submitted")
                    if self._max_eof_retries is not None and eof_count > self._max_eof_retries:
                        raise EndOfStreamError("stdin was closed while reading input.")
                    self.output.bell()
                else:
                    state = State.VALIDATING

            elif state is State.VALIDATING:
                try:
                    value = self._validate(readable, reader, text, condition)
                except ReadError as err:
                    reason = err.reason
                    logger.info(f"input {text!r} rejected: {reason}")
                    state = State.RETRYING
                else:
                    self.output.erase_to_end_of_screen()
                    state = State.DONE

            elif state is State.RETRYING:
                self._restore_position(position)
                self.output.erase_to_end_of_screen()
                self.output.print(styled("\n").append(reason, self.error_modifier), "")
                self._restore_position(position)
                self.output.bell()
                state = State.EDITING

        return value

    def _edit(self, readable, first_pass):
        buffer = EditBuffer(self.output)
        default_text = None
        if first_pass and readable.has_default:
            default_text = readable.format(readable.default)
        with self.raw_mode:
            reader = readable.make_reader(buffer, self.decoder, self.output, default_text)
            text = reader.read()
        return reader, text

    def _validate(self, readable, reader, text, condition):
        if readable.has_default and (reader.ghost_untouched or text == ""):
            return readable.default

        try:
            value = readable.transform(text)
            if value is None:
                raise ReadError(INVALID_INPUT)
            if not readable.condition(value):
                raise ReadError(INVALID_INPUT)
            if condition is not None and not condition(value):
                raise ReadError(INVALID_INPUT)
        except ReadError:
            raise
        except Exception as err:
            logger.debug(f"error validating input {text!r}: {err!r}")
            raise ReadError(str(err) or INVALID_INPUT)
        return value


# %% Module-level API

_default_engine = None


def get_engine():
    """Get the ReadEngine that reads from the process' stdin and stdout."""
    global _default_engine
    if _default_engine is None:
        _default_engine = ReadEngine()
    return _default_engine


def read(readable, prompt="", condition=None):
    """Read a value from the terminal. See ``ReadEngine.read()``."""
    return get_engine().read(readable, prompt, condition)


def print(text="", terminator="\n"):
    """Print plain or styled text to the terminal."""
    get_engine().print(text, terminator)
