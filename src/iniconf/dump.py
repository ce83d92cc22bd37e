import io
import logging
from typing import TYPE_CHECKING, TextIO

from .lines import SECTION
from .values import QUOTES

if TYPE_CHECKING:
    from .config import Configuration

_log = logging.getLogger(__name__)

COMMENT_MARKERS = "#;"


def needs_quotes(value: str) -> bool:
    """Check whether a value must be quoted to be read back unchanged.

    Args:
        value: The value to check.

    Returns:
        True if the value is blank, starts with a comment marker or a quote,
        has surrounding whitespace, contains a comment marker or a line break,
        or ends with a backslash.
    """

    if not value.strip() or value[0] in COMMENT_MARKERS + QUOTES:
        return True

    if value != value.strip() or value.endswith("\\"):
        return True

    return any(c in value for c in COMMENT_MARKERS + "\r\n")


def quote(value: str) -> str:
    """Wrap a value in double quotes, escaping backslashes and double quotes.

    Args:
        value: The value to quote.

    Returns:
        The quoted value. If the value would end with a backslash or a line break,
        the closing quote is put on a line of its own.
    """

    body = value.replace("\\", "\\\\").replace('"', '\\"')

    if body.endswith(("\\", "\n")):
        body += "\n"

    return f'"{body}"'


def _name_problem(name: str, delimiter: str) -> str | None:
    if not name.strip() or name != name.strip():
        return "is blank or has surrounding whitespace"

    if name[0] in COMMENT_MARKERS:
        return "starts with a comment marker"

    if delimiter in name:
        return "contains the delimiter"

    if "\n" in name or "\r" in name:
        return "contains a line break"

    return None


def dump(config: "Configuration", file: TextIO):
    """Serialize a configuration as INI to a file.

    Args:
        config: The configuration to serialize.
        file: The file to serialize to.
    """

    for section in config:
        if any(c in str(section) for c in "]\r\n"):
            _log.warning("section '%s' will not be read back unchanged", section)

        print(f"[{section}]", file=file)

        for option, value in config.items(section):
            if problem := _name_problem(str(option), config.delimiter):
                _log.warning(
                    "option '%s' in section '%s' %s and will not be read back unchanged",
                    option,
                    section,
                    problem,
                )

            if "\r" in value:
                _log.warning(
                    "option '%s' in section '%s' has carriage returns, "
                    "which are read back as line feeds",
                    option,
                    section,
                )

            if needs_quotes(value):
                value = quote(value)

            line = f"{option}{config.delimiter}{value}"

            if SECTION.search(line.partition("\n")[0]):
                _log.warning(
                    "option '%s' in section '%s' will be read back as a section header",
                    option,
                    section,
                )

            print(line, file=file)


def dumps(config: "Configuration") -> str:
    """Serialize a configuration as INI to a string.

    Args:
        config: The configuration to serialize.

    Returns:
        The INI as a string.
    """

    with io.StringIO() as buf:
        dump(config, buf)
        return buf.getvalue()
