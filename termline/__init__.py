"""
termline - interactive terminal line editing and styled output.
"""

from .style import Color, Modifier, StyledText, styled, from_runs  # noqa
from .readable import ReadError, Readable  # noqa
from .read import ReadEngine, EndOfStreamError, read, print  # noqa
from ._main import main  # noqa
from ._cli import cli  # noqa

__version__ = "0.1.0"
version_info = tuple(map(int, __version__.split(".")))
