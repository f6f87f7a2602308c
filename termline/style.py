"""
Styled text: attributes and colors, rendered as ANSI SGR escape sequences.

A ``Modifier`` describes a style; ``styled()`` and ``StyledText`` attach
modifiers to pieces of text. Rendering a ``StyledText`` (via ``str()``)
gives the escaped string, while ``StyledText.raw`` gives the text as the
user sees it, which is what the edit buffer needs to count characters.
"""

from collections import namedtuple


# %% Colors


class Color:
    """Terminal color: a named color (with bright variants) or a 256-color cube value."""

    __slots__ = ("_kind", "_code")

    # kind: "named" or "cube"
    def __init__(self, kind, code):
        self._kind = kind
        self._code = code

    DEFAULT = None  # will be assigned below

    BLACK = None
    RED = None
    GREEN = None
    YELLOW = None
    BLUE = None
    MAGENTA = None
    CYAN = None
    WHITE = None

    @staticmethod
    def rgb(r, g, b):
        """A color from the 6x6x6 cube that approximates the given RGB value.

        Components are in 0-255. Many terminals (e.g. macOS Terminal) only
        support the 256-color palette, so that's what we map to.
        """
        r, g, b = (int(max(0, min(255, c)) / 255 * 5) for c in (r, g, b))
        return Color("cube", 16 + 36 * r + 6 * g + b)

    @property
    def code(self):
        return self._code

    @property
    def is_cube(self):
        return self._kind == "cube"

    @property
    def bright(self):
        """The bright variant of a standard named color."""
        if self._kind != "named" or not 30 <= self._code <= 37:
            raise ValueError(f"{self!r} has no bright variant")
        return Color("named", self._code + 60)

    def fg_params(self):
        """SGR parameters to use this as foreground color."""
        if self._kind == "cube":
            return [38, 5, self._code]
        return [self._code]

    def bg_params(self):
        """SGR parameters to use this as background color."""
        if self._kind == "cube":
            return [48, 5, self._code]
        return [self._code + 10]

    def __eq__(self, other):
        if not isinstance(other, Color):
            return NotImplemented
        return self._kind == other._kind and self._code == other._code

    def __hash__(self):
        return hash((self._kind, self._code))

    def __repr__(self):
        for name, code in _NAMED_CODES.items():
            if self._kind == "named" and self._code == code:
                return "Color." + name.upper()
            elif self._kind == "named" and self._code == code + 60:
                return f"Color.{name.upper()}.bright"
        if self._kind == "named":
            return "Color.DEFAULT"
        return f"Color('cube', {self._code})"


_NAMED_CODES = {
    "black": 30,
    "red": 31,
    "green": 32,
    "yellow": 33,
    "blue": 34,
    "magenta": 35,
    "cyan": 36,
    "white": 37,
}

Color.DEFAULT = Color("named", 39)
for _name, _code in _NAMED_CODES.items():
    setattr(Color, _name.upper(), Color("named", _code))
del _name, _code

# Names accepted by the rich-text bridge, including bright variants
NAMED_COLORS = {}
for _name in _NAMED_CODES:
    NAMED_COLORS[_name] = getattr(Color, _name.upper())
    NAMED_COLORS["bright_" + _name] = getattr(Color, _name.upper()).bright
NAMED_COLORS["default"] = Color.DEFAULT
NAMED_COLORS["purple"] = Color.MAGENTA
del _name


# %% Modifier

# Flag bit -> SGR code. Note that 6 (rapid blink) is skipped.
BOLD = 1 << 0
DIM = 1 << 1
ITALIC = 1 << 2
UNDERLINE = 1 << 3
BLINK = 1 << 4
INVERSE = 1 << 5
HIDDEN = 1 << 6
STRIKETHROUGH = 1 << 7

FLAG_CODES = [
    (BOLD, 1),
    (DIM, 2),
    (ITALIC, 3),
    (UNDERLINE, 4),
    (BLINK, 5),
    (INVERSE, 7),
    (HIDDEN, 8),
    (STRIKETHROUGH, 9),
]


class Modifier:
    """Immutable text style: a set of attribute flags plus optional colors.

    Modifiers are built by chaining, e.g. ``Modifier.DEFAULT.bold().foreground(Color.RED)``.
    """

    __slots__ = ("_flags", "_fg", "_bg")

    DEFAULT = None  # will be assigned below

    def __init__(self, flags=0, foreground=None, background=None):
        self._flags = flags
        self._fg = foreground
        self._bg = background

    @property
    def flags(self):
        return self._flags

    @property
    def foreground_color(self):
        return self._fg

    @property
    def background_color(self):
        return self._bg

    @property
    def is_default(self):
        return self._flags == 0 and self._fg is None and self._bg is None

    def _with_flag(self, flag):
        return Modifier(self._flags | flag, self._fg, self._bg)

    def bold(self):
        return self._with_flag(BOLD)

    def dim(self):
        return self._with_flag(DIM)

    def italic(self):
        return self._with_flag(ITALIC)

    def underline(self):
        return self._with_flag(UNDERLINE)

    def blink(self):
        return self._with_flag(BLINK)

    def inverse(self):
        return self._with_flag(INVERSE)

    def hidden(self):
        return self._with_flag(HIDDEN)

    def strikethrough(self):
        """Not supported by all terminals, e.g. macOS Terminal ignores it."""
        return self._with_flag(STRIKETHROUGH)

    def foreground(self, color):
        return Modifier(self._flags, color, self._bg)

    def background(self, color):
        return Modifier(self._flags, self._fg, color)

    def union(self, other):
        """Combine flags. For colors, the ones set on self win."""
        return Modifier(
            self._flags | other._flags,
            self._fg if self._fg is not None else other._fg,
            self._bg if self._bg is not None else other._bg,
        )

    __or__ = union

    def params(self):
        """The list of SGR parameters for this modifier."""
        params = [code for flag, code in FLAG_CODES if self._flags & flag]
        if self._fg is not None:
            params.extend(self._fg.fg_params())
        if self._bg is not None:
            params.extend(self._bg.bg_params())
        return params

    def modify(self, text):
        """Wrap the text in the escape sequences for this style.

        The default modifier returns the text as is.
        """
        if self.is_default:
            return text
        params = ";".join(str(p) for p in self.params())
        return f"\x1b[{params}m{text}\x1b[0m"

    def __eq__(self, other):
        if not isinstance(other, Modifier):
            return NotImplemented
        return (self._flags, self._fg, self._bg) == (other._flags, other._fg, other._bg)

    def __hash__(self):
        return hash((self._flags, self._fg, self._bg))

    def __repr__(self):
        return f"<Modifier {self.params()}>"


Modifier.DEFAULT = Modifier()


# %% Styled text


Run = namedtuple("Run", ["text", "modifier"])


class StyledText:
    """An ordered list of runs of text, each with its own modifier."""

    def __init__(self, runs=None):
        self._runs = []
        for run in runs or ():
            self._runs.append(Run(run[0], run[1]))

    @property
    def runs(self):
        return list(self._runs)

    @property
    def raw(self):
        """The text without any styling."""
        return "".join(run.text for run in self._runs)

    def append(self, value, modifier=None):
        """Append a value. Returns self, so calls can be chained.

        A StyledText is inlined with its own runs. Anything else is
        converted with ``str()`` and becomes a new run with the given
        modifier.
        """
        if isinstance(value, StyledText):
            self._runs.extend(value._runs)
        else:
            self._runs.append(Run(str(value), modifier or Modifier.DEFAULT))
        return self

    def render(self):
        return "".join(run.modifier.modify(run.text) for run in self._runs)

    def __str__(self):
        return self.render()

    def __len__(self):
        return len(self.raw)

    def __add__(self, other):
        return StyledText(self._runs).append(other)

    def __radd__(self, other):
        return StyledText().append(other).append(self)

    def __eq__(self, other):
        if not isinstance(other, StyledText):
            return NotImplemented
        return self._runs == other._runs

    def __repr__(self):
        return f"<StyledText {self.raw!r} with {len(self._runs)} runs>"


def styled(value, modifier=None):
    """Create a StyledText from a single value with the given modifier."""
    return StyledText().append(value, modifier)


def as_styled(text):
    """Get a StyledText for a str or StyledText."""
    if isinstance(text, StyledText):
        return text
    return styled(text)


# %% Rich text bridge


def to_color(value):
    """Map a color from a rich-text source to the closest Color.

    Accepts a Color, a color name (e.g. "red", "bright_blue"), a
    "#rrggbb" string, or an (r, g, b) tuple.
    """
    if isinstance(value, Color):
        return value
    if isinstance(value, str):
        name = value.strip().lower().replace(" ", "_").replace("-", "_")
        if name in NAMED_COLORS:
            return NAMED_COLORS[name]
        if name.startswith("#") and len(name) == 7:
            return Color.rgb(int(name[1:3], 16), int(name[3:5], 16), int(name[5:7], 16))
        raise ValueError(f"Unknown color {value!r}")
    r, g, b = value
    return Color.rgb(r, g, b)


def modifier_from_attributes(attributes):
    """Get the Modifier for a mapping of rich-text attributes."""
    modifier = Modifier.DEFAULT
    if attributes.get("strong"):
        modifier = modifier.bold()
    if attributes.get("emphasis"):
        modifier = modifier.italic()
    if attributes.get("underline"):
        modifier = modifier.underline()
    if attributes.get("strikethrough"):
        modifier = modifier.strikethrough()
    if attributes.get("foreground") is not None:
        modifier = modifier.foreground(to_color(attributes["foreground"]))
    if attributes.get("background") is not None:
        modifier = modifier.background(to_color(attributes["background"]))
    return modifier


def from_runs(runs):
    """Convert rich text, given as (text, attributes) pairs, to a StyledText.

    The attributes are a mapping with optional keys "emphasis", "strong",
    "strikethrough", "underline" (booleans), and "foreground" and
    "background" (colors, see ``to_color()``).
    """
    result = StyledText()
    for text, attributes in runs:
        result.append(text, modifier_from_attributes(attributes or {}))
    return result
