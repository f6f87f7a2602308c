import os

from termline.term import input_keys
from termline.term.input_keys import Key, KeyDecoder


def make_stdin(data):
    """Get a file descriptor from which the given data can be read."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    fd_read, fd_write = os.pipe()
    os.write(fd_write, data)
    os.close(fd_write)
    return fd_read


def decode_all(data):
    fd = make_stdin(data)
    try:
        return list(KeyDecoder(fd))
    finally:
        os.close(fd)


def test_key_values():
    assert Key.from_char("a") == Key("char", "a")
    assert Key.from_char("a") != Key.from_escape("a")
    assert input_keys.UP == Key("up")
    assert input_keys.UP.char is None
    assert repr(Key.from_char("x")) == "Key(char, 'x')"
    assert repr(input_keys.TAB) == "Key(tab)"


def test_arrows_and_control_keys():
    keys = decode_all("\x1b[A\x1b[B\x1b[C\x1b[D\t\n\x7f")
    assert keys == [
        input_keys.UP,
        input_keys.DOWN,
        input_keys.RIGHT,
        input_keys.LEFT,
        input_keys.TAB,
        input_keys.NEWLINE,
        input_keys.DELETE,
    ]


def test_end_of_stream():
    fd = make_stdin(b"a")
    try:
        decoder = KeyDecoder(fd)
        assert decoder.decode_next() == Key.from_char("a")
        assert decoder.decode_next() is None
        assert decoder.decode_next() is None
    finally:
        os.close(fd)


def test_printable_text_is_reconstructed():
    for text in ["hello world", "a-b_c=d!?", "wörld", "你好", "😊 ok", "mixed ä你😊x"]:
        keys = decode_all(text)
        assert all(key.name == "char" for key in keys), keys
        assert "".join(key.char for key in keys) == text
        assert len(keys) == len(text)


def test_unknown_escape_codes():
    # Shift+tab is CSI Z
    assert decode_all("\x1b[Z") == [Key.from_escape("Z")]
    assert decode_all("\x1b[Hx") == [Key.from_escape("H"), Key.from_char("x")]


def test_bad_escapes():
    # Not a CSI sequence, the two bytes are consumed
    assert decode_all("\x1bOAb") == [input_keys.BAD_SYMBOL, Key.from_char("b")]
    # Stream ends after escape
    assert decode_all("\x1b") == [input_keys.BAD_SYMBOL]
    assert decode_all("\x1b[") == [input_keys.BAD_SYMBOL]


def test_escape_with_multibyte_char():
    # The whole char is consumed, nothing leaks out as extra keys
    assert decode_all("\x1b[äx") == [input_keys.BAD_SYMBOL, Key.from_char("x")]
    assert decode_all("\x1b[😊x") == [input_keys.BAD_SYMBOL, Key.from_char("x")]
    assert decode_all("\x1b你x") == [input_keys.BAD_SYMBOL, Key.from_char("x")]
    assert decode_all("\x1bäx") == [input_keys.BAD_SYMBOL, Key.from_char("x")]


def test_malformed_utf8():
    # Lead byte of a 2-byte sequence, followed by a non-continuation byte
    assert decode_all(b"\xc3\x28") == [input_keys.BAD_SYMBOL]
    # Lead byte of a 3-byte sequence, but the stream ends
    assert decode_all(b"\xe4\xbd") == [input_keys.EMPTY]
    # A lone continuation byte is taken as-is
    assert decode_all(b"\x80") == [Key.from_char("\x80")]


def test_utf8_width():
    assert input_keys.utf8_width(ord("a")) is None
    assert input_keys.utf8_width(0xC3) == 2
    assert input_keys.utf8_width(0xE4) == 3
    assert input_keys.utf8_width(0xF0) == 4
    assert input_keys.utf8_width(0x80) is None


if __name__ == "__main__":
    test_key_values()
    test_arrows_and_control_keys()
    test_end_of_stream()
    test_printable_text_is_reconstructed()
    test_unknown_escape_codes()
    test_bad_escapes()
    test_escape_with_multibyte_char()
    test_malformed_utf8()
    test_utf8_width()
