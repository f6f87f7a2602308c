"""
Readables describe what to read: how to turn the submitted line into a
value, what values are acceptable, and how to show a default.

Readables are immutable; the ``with_*`` methods return a new readable::

    INT.with_default(3).with_condition(lambda x: x > 0)
    STRING.with_stop_sequence(r"\\?")
"""

import os
import re
import enum

from .readers import DefaultInputReader, InputReader, OptionsInputReader, ReformattingInputReader


class ReadError(Exception):
    """The error to raise from a transform or condition to explain why input is rejected."""

    def __init__(self, reason):
        super().__init__(reason)
        self.reason = reason


_NO_DEFAULT = object()


class Readable:
    """A description of content that can be read from stdin.

    Parameters:
        transform (callable): turns the submitted string into the value. If
            it returns None or raises, the user is asked to try again.
        condition (callable, optional): must return True for the value to
            be accepted. Can raise ReadError to give a reason.
        formatter (callable, optional): turns a value into the text that
            is shown for the default value. Default ``str``.
        default: the value to use when the user submits without typing.
        stop_sequences (tuple): regular expressions that submit the line
            as soon as the whole line matches one of them.
        reader_factory (callable, optional): creates the input reader,
            for readables that need custom key handling. Gets the same
            arguments as ``make_reader()``.
    """

    __slots__ = (
        "_transform",
        "_condition",
        "_formatter",
        "_default",
        "_stop_sequences",
        "_reader_factory",
    )

    def __init__(
        self,
        transform,
        condition=None,
        formatter=None,
        default=_NO_DEFAULT,
        stop_sequences=(),
        reader_factory=None,
    ):
        self._transform = transform
        self._condition = condition
        self._formatter = formatter or str
        self._default = default
        self._stop_sequences = tuple(re.compile(p) for p in stop_sequences)
        self._reader_factory = reader_factory

    def _copy(self, **kwargs):
        state = dict(
            transform=self._transform,
            condition=self._condition,
            formatter=self._formatter,
            default=self._default,
            stop_sequences=self._stop_sequences,
            reader_factory=self._reader_factory,
        )
        state.update(kwargs)
        return Readable(**state)

    def __repr__(self):
        extra = ""
        if self.has_default:
            extra += f" default={self._default!r}"
        if self._stop_sequences:
            extra += f" stop={[p.pattern for p in self._stop_sequences]}"
        return f"<Readable{extra}>"

    # Builders

    def with_default(self, value):
        return self._copy(default=value)

    def with_condition(self, condition):
        """Add a condition. Conditions added earlier must pass too."""
        previous = self._condition
        if previous is not None:
            combined = lambda value: previous(value) and condition(value)  # noqa: E731
            return self._copy(condition=combined)
        return self._copy(condition=condition)

    def with_formatter(self, formatter):
        return self._copy(formatter=formatter)

    def with_stop_sequence(self, *patterns):
        """Add stop sequences: regular expressions (str or compiled) that
        end the input as soon as they match the whole line. No newline
        is echoed in that case.
        """
        return self._copy(stop_sequences=self._stop_sequences + tuple(patterns))

    # Operations

    @property
    def has_default(self):
        return self._default is not _NO_DEFAULT

    @property
    def default(self):
        if not self.has_default:
            raise AttributeError("This readable has no default value.")
        return self._default

    @property
    def stop_sequences(self):
        return self._stop_sequences

    def transform(self, text):
        return self._transform(text)

    def condition(self, value):
        if self._condition is None:
            return True
        return self._condition(value)

    def format(self, value):
        return self._formatter(value)

    def make_reader(self, buffer, decoder, output, default_text=None):
        """Create the input reader for one edit pass.

        The default_text is the formatted default to show as ghost text,
        or None to show nothing.
        """
        if self._reader_factory is not None:
            return self._reader_factory(
                buffer, decoder, output, self._stop_sequences, default_text
            )
        elif default_text is not None:
            return DefaultInputReader(
                buffer, decoder, output, self._stop_sequences, default_text
            )
        else:
            return InputReader(buffer, decoder, output, self._stop_sequences)


# %% Transforms


def normalize_shell_path(text):
    """Turn a path as pasted or dragged into a shell into a plain path.

    Drops a single trailing space (macOS Terminal adds one when dropping
    a file), and removes the backslashes that escape special chars.
    """
    if text.endswith(" "):
        text = text[:-1]
    text = re.sub(r"\\(.)", r"\1", text)
    return os.path.expanduser(text)


def _to_int(text):
    try:
        return int(text.strip())
    except ValueError:
        return None


def _to_float(text):
    try:
        return float(text.strip())
    except ValueError:
        return None


def _to_bool(text):
    text = text.strip().lower()
    if text in ("yes", "y", "true"):
        return True
    elif text in ("no", "n", "false"):
        return False
    raise ReadError("Not a boolean value.")


def _format_bool(value):
    return "yes" if value else "no"


def _path_exists(path):
    if not os.path.exists(path):
        raise ReadError("Invalid Input: The input file path does not exist")
    return True


def _read_text_file(path):
    try:
        with open(path, "rb") as f:
            return f.read().decode("utf-8")
    except OSError as err:
        raise ReadError(f"Could not read {path}: {err.strerror}")
    except UnicodeDecodeError:
        raise ReadError(f"Not a text file: {path}")


# %% Built-in readables

STRING = Readable(lambda text: text)
INT = Readable(_to_int)
FLOAT = Readable(_to_float)
BOOL = Readable(_to_bool, formatter=_format_bool)
FILE_PATH = Readable(normalize_shell_path)
EXISTING_PATH = Readable(normalize_shell_path, condition=_path_exists)
TEXT_FILE = Readable(lambda text: _read_text_file(normalize_shell_path(text)))


def customized(transform, condition=None, formatter=None):
    """A readable with a custom transform."""
    return Readable(transform, condition=condition, formatter=formatter)


def file_path(normalize=normalize_shell_path, must_exist=False):
    """A readable for a file path, with a custom path normalizer."""
    return Readable(normalize, condition=_path_exists if must_exist else None)


def text_file(normalize=normalize_shell_path):
    """A readable for the contents of a text file, given its path."""
    return Readable(lambda text: _read_text_file(normalize(text)))


def _option_values(options):
    if isinstance(options, type) and issubclass(options, enum.Enum):
        return [str(member.value) for member in options]
    return [str(option) for option in options]


def _options_reader_factory(values):
    def factory(buffer, decoder, output, stop_sequences, default_text):
        return OptionsInputReader(
            buffer, decoder, output, stop_sequences, values, default_text
        )

    return factory


def options(options):
    """A readable that must be one of the given options.

    The options can be a list of strings or an Enum class. In the latter
    case the options shown are ``str(member.value)``, and the value read
    is the enum member.
    """
    values = _option_values(options)
    if not values:
        raise ValueError("Need at least one option.")

    if isinstance(options, type) and issubclass(options, enum.Enum):
        lookup = {str(member.value): member for member in options}
        formatter = lambda member: str(member.value)  # noqa: E731
    else:
        lookup = {value: value for value in values}
        formatter = str

    def transform(text):
        try:
            return lookup[text]
        except KeyError:
            raise ReadError("Invalid Input: Input not in acceptable set")

    return Readable(
        transform,
        formatter=formatter,
        reader_factory=_options_reader_factory(values),
    )


def unbounded_options(options):
    """Like ``options()``, but any string is accepted."""
    values = _option_values(options)
    if not values:
        raise ValueError("Need at least one option.")
    return Readable(lambda text: text, reader_factory=_options_reader_factory(values))


def reformatting(formatter):
    """A string readable that shows the line through the formatter while typing.

    The formatter gets the raw text and returns a StyledText, e.g. to
    highlight keywords.
    """

    def factory(buffer, decoder, output, stop_sequences, default_text):
        return ReformattingInputReader(
            buffer, decoder, output, stop_sequences, formatter, default_text
        )

    return Readable(lambda text: text, reader_factory=factory)
