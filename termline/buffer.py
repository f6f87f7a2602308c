"""
The edit buffer: the line that the user is typing, kept in sync with the terminal.
"""

from .style import as_styled
from .term.output import ESC


LEFT = "left"
RIGHT = "right"


def char_width(char):
    """The number of columns a char is assumed to take.

    This is a heuristic: anything that takes more than one byte in UTF-8
    is assumed to be two columns wide. That is right for most CJK and
    emoji, but not for e.g. accented latin characters.
    """
    return min(len(char.encode("utf-8")), 2)


def text_width(chars):
    return sum(char_width(c) for c in chars)


def opposite(direction):
    return RIGHT if direction == LEFT else LEFT


class EditBuffer:
    """An editable line of text with a cursor.

    Every mutation updates the buffer and writes the escape sequences
    that make the terminal show the same thing. The cursor counts
    characters (unicode code points), not bytes or columns. A cursor of
    zero means before the first character.
    """

    def __init__(self, output, text=""):
        self._output = output
        self._buffer = list(text)
        self._cursor = 0

    @property
    def cursor(self):
        return self._cursor

    @property
    def text(self):
        """The full contents of the buffer."""
        return "".join(self._buffer)

    def __len__(self):
        return len(self._buffer)

    def before_cursor(self):
        return "".join(self._buffer[: self._cursor])

    def char_at_cursor(self):
        """The char under the cursor, or None at the end of the buffer."""
        if self._cursor < len(self._buffer):
            return self._buffer[self._cursor]
        return None

    # Cursor

    def move(self, direction, count=1):
        """Move the cursor count characters in the given direction.

        The count is clamped to what's available. Returns the number of
        characters actually moved.
        """
        if count < 0:
            return self.move(opposite(direction), -count)
        if direction == LEFT:
            count = min(count, self._cursor)
            width = text_width(self._buffer[self._cursor - count : self._cursor])
            self._output.cursor_left(width)
            self._cursor -= count
        elif direction == RIGHT:
            count = min(count, len(self._buffer) - self._cursor)
            width = text_width(self._buffer[self._cursor : self._cursor + count])
            self._output.cursor_right(width)
            self._cursor += count
        else:
            raise ValueError(f"Invalid direction {direction!r}")
        return count

    def seek_to_end(self):
        """Move the cursor to the end. Returns the shift."""
        return self.move(RIGHT, len(self._buffer) - self._cursor)

    # Inserting and writing

    def insert(self, char):
        """Insert a char at the cursor, shifting what's right of it."""
        if self._cursor == len(self._buffer):
            self._output.write(char)
        else:
            self._output.insert(char)
        self._buffer.insert(self._cursor, char)
        self._cursor += 1

    def insert_text(self, text):
        """Insert text at the cursor. Returns the new length of the buffer."""
        if self._cursor == len(self._buffer):
            self._output.write(text)
            self._buffer.extend(text)
            self._cursor += len(text)
        else:
            for char in text:
                self.insert(char)
        return len(self._buffer)

    def write(self, char):
        """Write a char at the cursor, replacing the char that's there (if any)."""
        self._output.write(char)
        if self._cursor < len(self._buffer):
            self._buffer[self._cursor] = char
        else:
            self._buffer.append(char)
        self._cursor += 1

    def write_text(self, text):
        for char in text:
            self.write(char)

    def write_formatted(self, text):
        """Write styled text over the content at the cursor.

        Returns the number of (unstyled) characters written.
        """
        text = as_styled(text)
        raw = text.raw
        self._output.write(text.render())
        self._buffer[self._cursor : self._cursor + len(raw)] = list(raw)
        self._cursor += len(raw)
        return len(raw)

    def insert_formatted(self, text):
        """Insert styled text at the cursor.

        Returns the number of (unstyled) characters inserted.
        """
        text = as_styled(text)
        raw = text.raw
        if not raw:
            return 0
        if self._cursor == len(self._buffer):
            self._output.write(text.render())
            self._buffer.extend(raw)
            self._cursor += len(raw)
            return len(raw)
        # Make room, go back, and write over the placeholders
        n = len(raw)
        self.insert_text(" " * n)
        self.move(LEFT, n)
        return self.write_formatted(text)

    # Deleting

    def delete_before_cursor(self, count=1):
        """Delete up to count chars left of the cursor, like backspace does."""
        count = min(count, self._cursor)
        if count <= 0:
            return
        start = self._cursor - count
        width = text_width(self._buffer[start : self._cursor])
        self._output.cursor_left(width)
        self._output.delete_chars(width)
        del self._buffer[start : self._cursor]
        self._cursor = start

    def delete_after_cursor(self, count=1):
        """Delete up to count chars right of the cursor, the cursor stays put."""
        count = min(count, len(self._buffer) - self._cursor)
        if count <= 0:
            return
        end = self._cursor + count
        self._output.delete_chars(text_width(self._buffer[self._cursor : end]))
        del self._buffer[self._cursor : end]

    def erase_to_end_of_line(self):
        self._output.erase_to_end_of_line()
        del self._buffer[self._cursor :]

    def clear_entered(self):
        """Remove everything from the buffer and the screen.

        Returns the content as it was before clearing.
        """
        content = self.text
        self.seek_to_end()
        self.delete_before_cursor(len(self._buffer))
        return content

    # Keys

    def handle(self, key):
        """Apply the default behavior for the given key."""
        name = key.name
        if name == "left":
            self.move(LEFT)
        elif name == "right":
            self.move(RIGHT)
        elif name == "tab":
            self.insert(" ")
        elif name == "newline":
            self.insert("\n")
        elif name == "delete":
            self.delete_before_cursor()
        elif name == "char":
            self.insert(key.char)
        elif name == "escape":
            self.insert_text(ESC + "[" + key.char)
        else:
            pass  # up, down, bad_symbol and empty are ignored
