import dataclasses
import functools


@dataclasses.dataclass(frozen=True, slots=True)
class Symbol:
    """An interned identifier used in place of a string name.

    Symbols never compare equal to strings, so `Symbol("a") != "a"`.
    Use symbol() rather than the constructor to get the shared instance for a name.
    """

    name: str

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f":{self.name}"


Name = str | Symbol


@functools.cache
def symbol(name: str) -> Symbol:
    """Return the symbol for a name.

    Args:
        name: The name of the symbol.

    Returns:
        The same Symbol instance for every call with an equal name.
    """

    return Symbol(name)


def to_name(text: str, symbols: bool = False) -> Name:
    """Convert parsed text into a section or option name.

    Args:
        text: The name as it appears in the source.
        symbols: Whether or not to return a symbol instead of the text.

    Returns:
        The name.
    """

    return symbol(text) if symbols else text
