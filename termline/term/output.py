"""
Writing text and vt100 escape sequences to the terminal.

Every method flushes, so that what the terminal shows never lags behind
the state that termline keeps about it.
"""

import sys


ESC = "\x1b"
CSI = ESC + "["
BELL = "\x07"


class TerminalOutput:
    """Wraps a text stream (stdout by default) with cursor and erase operations."""

    def __init__(self, file=None):
        self.file = sys.__stdout__ if file is None else file

    def write(self, text):
        """Write the text and flush."""
        if text:
            self.file.write(text)
        self.file.flush()

    def print(self, text="", terminator="\n"):
        """Write styled (or plain) text followed by the terminator."""
        self.write(str(text) + terminator)

    def bell(self):
        """Ring the terminal bell, which is typically used for alert."""
        self.write(BELL)

    # Cursor movement

    def cursor_left(self, n=1):
        if n > 0:
            self.write(f"{CSI}{n}D")
        elif n < 0:
            self.cursor_right(-n)

    def cursor_right(self, n=1):
        if n > 0:
            self.write(f"{CSI}{n}C")
        elif n < 0:
            self.cursor_left(-n)

    def cursor_up(self, n=1):
        if n > 0:
            self.write(f"{CSI}{n}A")

    def cursor_down(self, n=1):
        if n > 0:
            self.write(f"{CSI}{n}B")

    def cursor_next_line(self, n=1):
        """Move n lines down, to the start of the line."""
        self.write(f"{CSI}{n}E")

    def cursor_previous_line(self, n=1):
        """Move n lines up, to the start of the line."""
        self.write(f"{CSI}{n}F")

    def move_to(self, row, column):
        """Move to the given row and column. Both start at 1."""
        self.write(f"{CSI}{row};{column}f")

    def move_to_column(self, column):
        self.write(f"{CSI}{column}G")

    def move_to_home(self):
        self.write(f"{CSI}H")

    def save_cursor(self):
        self.write(ESC + "7")

    def restore_cursor(self):
        self.write(ESC + "8")

    # Editing

    def insert(self, char):
        """Shift the content under the cursor right and write char in the gap."""
        self.write(f"{CSI}@{char}")

    def delete_chars(self, n=1):
        """Delete n columns at the cursor, pulling the rest of the line left."""
        if n > 0:
            self.write(f"{CSI}{n}P")

    def erase_to_end_of_line(self):
        self.write(f"{CSI}0K")

    def erase_to_start_of_line(self):
        self.write(f"{CSI}1K")

    def erase_to_end_of_screen(self):
        self.write(f"{CSI}0J")

    def clear_line(self):
        """Clear the line the cursor is on, and move to its start."""
        self.write(f"{CSI}2K{CSI}0G")

    def clear_last_line(self):
        """Clear the line above the cursor, and move there."""
        self.write(f"{CSI}1F{CSI}0K{CSI}0G")

    def clear_screen(self):
        self.write(f"{CSI}2J")
        self.move_to_home()
