"""
Input readers: the edit loops that turn keys into a submitted line.

The plain reader handles editing and submitting. The other readers layer
ghost text (a dimmed default value), option menus and live reformatting
on top of it, by overriding ``handle()``.
"""

from .buffer import LEFT, RIGHT
from .style import Modifier, styled
from .term.input_keys import TAB


GHOST_MODIFIER = Modifier.DEFAULT.dim()


class InputReader:
    """Reads keys into an edit buffer until the user submits the line.

    The line is submitted on enter, or as soon as the full buffer matches
    one of the stop sequences (compiled regular expressions).
    """

    def __init__(self, buffer, decoder, output, stop_sequences=()):
        self.buffer = buffer
        self._decoder = decoder
        self._output = output
        self._stop_sequences = tuple(stop_sequences)

    @property
    def ghost_untouched(self):
        """Whether a default value is shown that the user did not touch."""
        return False

    def handle(self, key):
        """Handle a key. Returns the line when it should be submitted, else None."""
        if key.name == "newline":
            self._output.write("\n")
            return self.buffer.text
        elif key.name == "tab":
            pass
        else:
            self.buffer.handle(key)
        return None

    def did_handle(self, key):
        """Called after each ``handle()``. Returns the line to stop early."""
        text = self.buffer.text
        for pattern in self._stop_sequences:
            if pattern.fullmatch(text):
                return text
        return None

    def read(self):
        """Read keys until the line is submitted.

        Returns the line, or None if stdin was closed before that.
        """
        while True:
            key = self._decoder.decode_next()
            if key is None:
                return None
            text = self.handle(key)
            if text is None:
                text = self.did_handle(key)
            if text is not None:
                return text


class DefaultInputReader(InputReader):
    """Shows a default value as ghost text that the user can accept or type over.

    The ghost text is part of the buffer, but the chars that the user has
    not confirmed yet are counted by ``autocomplete_length``. They are
    always at the end of the buffer.
    """

    def __init__(self, buffer, decoder, output, stop_sequences=(), default_text=""):
        super().__init__(buffer, decoder, output, stop_sequences)
        self.default_text = default_text
        self.autocomplete_length = buffer.insert_formatted(
            styled(default_text, GHOST_MODIFIER)
        )
        buffer.move(LEFT, self.autocomplete_length)
        self._ghost_length = self.autocomplete_length

    @property
    def ghost_untouched(self):
        return self._ghost_length > 0 and self.autocomplete_length == self._ghost_length

    @property
    def _boundary(self):
        # Index of the first unconfirmed char
        return len(self.buffer) - self.autocomplete_length

    def _accept_rest(self):
        # Redraw the unconfirmed tail undimmed, wherever the cursor is
        if not self.autocomplete_length:
            return None
        buffer = self.buffer
        boundary = self._boundary
        buffer.move(RIGHT, boundary - buffer.cursor)
        rest = buffer.text[boundary:]
        buffer.write_text(rest)
        self.autocomplete_length = 0
        return len(rest)

    def handle(self, key):
        buffer = self.buffer
        name = key.name

        if name == "right":
            if buffer.cursor < self._boundary:
                buffer.handle(key)
            else:
                n = self._accept_rest()
                if n:
                    # Like a normal right-move, end up one char past the boundary
                    buffer.move(LEFT, n - 1)

        elif name == "tab":
            self._accept_rest()

        elif name == "delete":
            if buffer.cursor == 0:
                return None
            if self.autocomplete_length:
                shift = self._boundary - buffer.cursor
                buffer.move(RIGHT, shift)
                buffer.delete_after_cursor(self.autocomplete_length)
                buffer.move(LEFT, shift)
                self.autocomplete_length = 0
            buffer.handle(key)

        elif name == "char" and self.autocomplete_length and buffer.cursor == self._boundary:
            if buffer.char_at_cursor() == key.char:
                self.autocomplete_length -= 1
            else:
                buffer.erase_to_end_of_line()
                self.autocomplete_length = 0
            buffer.write(key.char)

        else:
            return super().handle(key)

        return None


class OptionsInputReader(InputReader):
    """Lets the user pick from a list of options, or type freely.

    Up and down rotate through the options. Repeated tabs cycle through
    the options that start with what was typed before the first tab.
    Typed chars that match the displayed text are consumed in place; the
    first mismatch erases the rest of the line and typing continues
    normally.
    """

    def __init__(self, buffer, decoder, output, stop_sequences=(), options=(), default_text=None):
        super().__init__(buffer, decoder, output, stop_sequences)
        self.options = [str(option) for option in options]
        if not self.options:
            raise ValueError("OptionsInputReader needs at least one option.")
        self._index = None
        self._override = True
        self._last_key = None
        self._tab_prefix = ""
        self._tab_index = 0
        self._touched = False
        self._ghost_length = 0
        if default_text:
            self._ghost_length = buffer.insert_formatted(styled(default_text, GHOST_MODIFIER))
            buffer.move(LEFT, self._ghost_length)

    @property
    def ghost_untouched(self):
        return self._ghost_length > 0 and not self._touched

    def _show(self, text):
        self.buffer.clear_entered()
        self.buffer.insert_text(text)

    def _rotate(self, step):
        n = len(self.options)
        if self._index is None:
            self._index = 0 if step > 0 else n - 1
        else:
            self._index = (self._index + step) % n
        self._show(self.options[self._index])

    def _matching(self):
        return [option for option in self.options if option.startswith(self._tab_prefix)]

    def handle(self, key):
        buffer = self.buffer
        name = key.name

        if name == "newline":
            return super().handle(key)
        elif name == "up":
            self._rotate(-1)
        elif name == "down":
            self._rotate(+1)
        elif name == "left":
            buffer.move(LEFT)
        elif name == "right":
            buffer.move(RIGHT)
        elif name == "tab":
            if self._last_key != TAB:
                self._tab_prefix = buffer.text
                self._tab_index = 0
            else:
                self._tab_index += 1
            matching = self._matching()
            if not matching:
                return None
            self._show(matching[self._tab_index % len(matching)])
        elif name == "delete":
            buffer.delete_before_cursor()
        elif name == "char":
            if not self._override:
                buffer.insert(key.char)
            elif buffer.char_at_cursor() == key.char:
                buffer.write(key.char)
            else:
                buffer.erase_to_end_of_line()
                buffer.write(key.char)
                self._override = False
        else:
            return None  # escape, bad_symbol, empty

        self._touched = True
        self._last_key = key
        return None


class ReformattingInputReader(DefaultInputReader):
    """Redraws the line through a formatter after every edit, e.g. for live highlighting.

    The formatter gets the raw text and returns a StyledText with the
    same raw text. A default is shown as ghost text, like with
    ``DefaultInputReader``; its unconfirmed tail stays dim.
    """

    def __init__(
        self, buffer, decoder, output, stop_sequences=(), formatter=None, default_text=None
    ):
        super().__init__(buffer, decoder, output, stop_sequences, default_text or "")
        self._formatter = formatter or styled

    def handle(self, key):
        result = super().handle(key)
        if result is None and key.name not in ("left", "right", "delete"):
            self.reformat()
        return result

    def reformat(self):
        buffer = self.buffer
        cursor = buffer.cursor
        content = buffer.clear_entered()
        boundary = len(content) - self.autocomplete_length
        buffer.insert_formatted(self._formatter(content[:boundary]))
        buffer.insert_formatted(styled(content[boundary:], GHOST_MODIFIER))
        buffer.move(LEFT, len(buffer) - cursor)
