import os
from collections import namedtuple

# %% Keys


class Key(namedtuple("Key", ["name", "char"])):
    """A logical key, as decoded from the bytes on stdin.

    The name is one of "up", "down", "left", "right", "tab", "newline",
    "delete", "char", "escape", "bad_symbol" or "empty". Only "char" and
    "escape" carry a char.
    """

    __slots__ = ()

    def __new__(cls, name, char=None):
        return super().__new__(cls, name, char)

    @classmethod
    def from_char(cls, char):
        return cls("char", char)

    @classmethod
    def from_escape(cls, char):
        return cls("escape", char)

    def __repr__(self):
        if self.char is None:
            return f"Key({self.name})"
        return f"Key({self.name}, {self.char!r})"


UP = Key("up")
DOWN = Key("down")
LEFT = Key("left")
RIGHT = Key("right")
TAB = Key("tab")
NEWLINE = Key("newline")
DELETE = Key("delete")
BAD_SYMBOL = Key("bad_symbol")
EMPTY = Key("empty")

ARROWS = {"A": UP, "B": DOWN, "C": RIGHT, "D": LEFT}

CONTROL_KEYS = {
    0x09: TAB,
    0x0A: NEWLINE,
    0x7F: DELETE,
}


# %% Decoder


def utf8_width(lead):
    """The number of bytes of the UTF-8 sequence that starts with the given byte.

    Returns None for bytes that cannot start a multi-byte sequence.
    """
    if 0xC0 <= lead <= 0xDF:
        return 2
    elif 0xE0 <= lead <= 0xEF:
        return 3
    elif 0xF0 <= lead <= 0xF7:
        return 4
    return None


class KeyDecoder:
    """A blocking decoder that reads one key at a time from a file descriptor.

    The terminal should be in raw mode, otherwise nothing arrives before
    the user hits enter.
    """

    def __init__(self, fd):
        self._fd = fd

    def _read(self, n):
        # Read n bytes, or less if the stream ends.
        bb = b""
        while len(bb) < n:
            more = os.read(self._fd, n - len(bb))
            if not more:
                break
            bb += more
        return bb

    def decode_next(self):
        """Read and decode the next key. Returns None when stdin is closed."""
        bb = self._read(1)
        if not bb:
            return None
        byte = bb[0]

        if byte == 0x1B:
            return self._decode_escape()
        elif byte in CONTROL_KEYS:
            return CONTROL_KEYS[byte]

        width = utf8_width(byte)
        if width is None:
            return Key.from_char(chr(byte))

        rest = self._read(width - 1)
        if len(rest) < width - 1:
            return EMPTY
        try:
            text = (bb + rest).decode("utf-8")
        except UnicodeDecodeError:
            return BAD_SYMBOL
        return Key.from_char(text)

    def _decode_escape(self):
        follow = self._read(2)
        if len(follow) != 2:
            return BAD_SYMBOL
        # Consume the rest of a multi-byte char, so it does not come out as keys
        if follow[:1] != b"[":
            width = utf8_width(follow[0])
            if width and width > 2:
                self._read(width - 2)
            return BAD_SYMBOL
        width = utf8_width(follow[1])
        if width:
            self._read(width - 1)
            return BAD_SYMBOL
        try:
            char = follow[1:].decode("utf-8")
        except UnicodeDecodeError:
            return BAD_SYMBOL
        return ARROWS.get(char) or Key.from_escape(char)

    def __iter__(self):
        while True:
            key = self.decode_next()
            if key is None:
                return
            yield key
