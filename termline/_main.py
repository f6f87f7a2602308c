import enum
import logging

from . import readable
from .read import ReadEngine
from .style import Color, Modifier, StyledText, styled
from .utils import forward_logs


logger = logging.getLogger("termline")


class Fruit(enum.Enum):
    APPLE = "apple"
    BANANA = "banana"
    CHERRY = "cherry"


def highlight_digits(text):
    """Example formatter for the reformatting readable."""
    result = StyledText()
    for char in text:
        if char.isdigit():
            result.append(char, Modifier.DEFAULT.foreground(Color.CYAN))
        else:
            result.append(char)
    return result


def main():
    """Run an interactive demo of what termline can read."""

    # Logs go to ``termline --listen`` in another terminal
    forward_logs()

    engine = ReadEngine()
    label = Modifier.DEFAULT.bold()

    name = engine.read(
        readable.STRING.with_default("world"),
        styled("Your name: ", label),
    )
    age = engine.read(
        readable.INT,
        styled("Your age: ", label),
        condition=lambda x: 0 <= x < 150,
    )
    likes = engine.read(
        readable.BOOL.with_default(True),
        styled("Do you like fruit? ", label),
    )
    fruit = engine.read(
        readable.options(Fruit),
        styled("Favourite fruit (up/down/tab): ", label),
    )
    phone = engine.read(
        readable.reformatting(highlight_digits),
        styled("Phone number: ", label),
    )

    logger.info("demo done")
    engine.print(
        styled("Hello ")
        .append(name, Modifier.DEFAULT.bold().foreground(Color.GREEN))
        .append(f" ({age}), ")
        .append("likes" if likes else "does not like")
        .append(" fruit, especially ")
        .append(fruit.value, Modifier.DEFAULT.italic())
        .append(", call at ")
        .append(phone, Modifier.DEFAULT.underline())
    )
