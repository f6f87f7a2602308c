import pytest

from termline.style import Color, Modifier, StyledText, styled, from_runs, to_color


def test_default_modifier_is_identity():
    for text in ["", "x", "hello world", "\x1b[2mdim\x1b[0m", "你好 😊"]:
        assert Modifier.DEFAULT.modify(text) == text
        assert str(styled(text)) == text


def test_flags():
    assert Modifier.DEFAULT.bold().modify("x") == "\x1b[1mx\x1b[0m"
    assert Modifier.DEFAULT.dim().modify("x") == "\x1b[2mx\x1b[0m"
    assert Modifier.DEFAULT.inverse().modify("x") == "\x1b[7mx\x1b[0m"
    assert Modifier.DEFAULT.hidden().modify("x") == "\x1b[8mx\x1b[0m"
    assert Modifier.DEFAULT.strikethrough().modify("x") == "\x1b[9mx\x1b[0m"

    # Flag codes come in a fixed order, regardless of how they were set
    m1 = Modifier.DEFAULT.underline().italic().bold()
    m2 = Modifier.DEFAULT.bold().italic().underline()
    assert m1 == m2
    assert m1.params() == [1, 3, 4]
    assert m1.modify("x") == "\x1b[1;3;4mx\x1b[0m"


def test_named_colors():
    assert str(styled("blue", Modifier.DEFAULT.foreground(Color.BLUE))) == "\x1b[34mblue\x1b[0m"
    assert Modifier.DEFAULT.background(Color.RED).params() == [41]
    assert Modifier.DEFAULT.foreground(Color.RED.bright).params() == [91]
    assert Modifier.DEFAULT.background(Color.RED.bright).params() == [101]
    assert Modifier.DEFAULT.foreground(Color.DEFAULT).params() == [39]

    m = Modifier.DEFAULT.bold().foreground(Color.GREEN).background(Color.BLACK)
    assert m.modify("ok") == "\x1b[1;32;40mok\x1b[0m"

    with pytest.raises(ValueError):
        Color.RED.bright.bright
    with pytest.raises(ValueError):
        Color.rgb(10, 10, 10).bright


def test_rgb_colors():
    assert Color.rgb(0, 0, 0).code == 16
    assert Color.rgb(255, 255, 255).code == 231
    assert Color.rgb(255, 0, 0).code == 196
    assert Color.rgb(0, 0, 255).code == 21
    assert Color.rgb(255, 0, 0).is_cube
    assert not Color.RED.is_cube

    for r in (0, 1, 50, 51, 127, 128, 200, 254, 255):
        for g in (0, 99, 255):
            for b in (0, 160, 255):
                assert 16 <= Color.rgb(r, g, b).code <= 231

    # Out of range components are clamped
    assert Color.rgb(-20, 300, 0) == Color.rgb(0, 255, 0)

    assert Modifier.DEFAULT.foreground(Color.rgb(255, 0, 0)).params() == [38, 5, 196]
    m = Modifier.DEFAULT.background(Color.rgb(0, 0, 255))
    assert m.modify("x") == "\x1b[48;5;21mx\x1b[0m"


def test_modifier_union():
    a = Modifier.DEFAULT.bold().foreground(Color.RED)
    b = Modifier.DEFAULT.italic().foreground(Color.BLUE).background(Color.WHITE)
    c = a | b
    assert c.params() == [1, 3, 31, 47]
    assert c == a.union(b)
    assert (b | a).foreground_color == Color.BLUE
    assert (Modifier.DEFAULT | Modifier.DEFAULT).is_default


def test_modifiers_are_immutable():
    m = Modifier.DEFAULT
    m.bold().foreground(Color.RED)
    assert m.is_default
    assert m.params() == []


def test_styled_text():
    text = styled("Hello ", Modifier.DEFAULT.bold())
    text.append("world").append(42, Modifier.DEFAULT.foreground(Color.CYAN))
    assert text.raw == "Hello world42"
    assert len(text) == 13
    assert str(text) == "\x1b[1mHello \x1b[0mworld\x1b[36m42\x1b[0m"
    assert len(text.runs) == 3


def test_styled_text_inlining():
    inner = styled("a", Modifier.DEFAULT.dim()).append("b")
    outer = styled("<").append(inner).append(">")
    assert [run.text for run in outer.runs] == ["<", "a", "b", ">"]
    assert outer.raw == "<ab>"
    assert str(outer) == "<\x1b[2ma\x1b[0mb>"

    # Concatenation creates new objects
    combined = "x" + inner + "y"
    assert combined.raw == "xaby"
    assert inner.raw == "ab"
    assert (inner + inner) == styled("a", Modifier.DEFAULT.dim()).append("b").append(inner)


def test_to_color():
    assert to_color("red") == Color.RED
    assert to_color("Bright Blue") == Color.BLUE.bright
    assert to_color("purple") == Color.MAGENTA
    assert to_color("#ff0000") == Color.rgb(255, 0, 0)
    assert to_color((0, 0, 255)) == Color.rgb(0, 0, 255)
    assert to_color(Color.CYAN) is Color.CYAN
    with pytest.raises(ValueError):
        to_color("not-a-color")


def test_from_runs():
    text = from_runs([("Hello", {"strong": True}), (" ", {}), ("world", {"emphasis": True})])
    assert str(text) == "\x1b[1mHello\x1b[0m \x1b[3mworld\x1b[0m"

    text = from_runs(
        [
            ("gone", {"strikethrough": True, "underline": True}),
            ("!", {"foreground": "red", "background": "#0000ff"}),
        ]
    )
    assert str(text) == "\x1b[4;9mgone\x1b[0m\x1b[31;48;5;21m!\x1b[0m"
    assert text.raw == "gone!"


if __name__ == "__main__":
    test_default_modifier_is_identity()
    test_flags()
    test_named_colors()
    test_rgb_colors()
    test_modifier_union()
    test_modifiers_are_immutable()
    test_styled_text()
    test_styled_text_inlining()
    test_to_color()
    test_from_runs()
