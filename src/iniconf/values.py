import re

from .errors import IniError
from .lines import LineCursor

QUOTES = "\"'"

# A comment marker that is not escaped by a backslash.
RE_MARKER = re.compile(r"(?<!\\)[#;]")
RE_ESCAPED_MARKER = re.compile(r"\\([#;])")


def parse_value(remainder: str, cursor: LineCursor) -> str:
    """Resolve the value of an option.

    Args:
        remainder: The raw text after the delimiter.
        cursor: The source to pull further lines from if the value spans several lines.

    Returns:
        The value.

    Raises:
        IniError: The source ended before the value did.
    """

    if remainder and remainder[0] in QUOTES:
        return parse_quoted(remainder, cursor)

    return parse_unquoted(remainder, cursor)


def parse_quoted(remainder: str, cursor: LineCursor) -> str:
    """Parse a value enclosed in single or double quotes.

    The value ends at the first quote of the same kind that is not preceded by a backslash.
    Line breaks inside the quotes are kept, except the one right before a closing quote
    that starts its line:

        key="first
        second
        "

    gives "first\\nsecond".

    Escaped quotes (\\" or \\') and escaped backslashes (\\\\) are unescaped afterwards.

    Args:
        remainder: The raw text after the delimiter, starting with the opening quote.
        cursor: The source to pull further lines from.

    Returns:
        The unescaped value.

    Raises:
        IniError: The closing quote was never found.
    """

    quote = remainder[0]
    closing = re.compile(rf"(?<!\\){re.escape(quote)}")

    value = ""
    line = remainder[1:]

    while (m := closing.search(line)) is None:
        value += line + "\n"

        if (next_line := cursor.next_line()) is None:
            raise IniError("Unterminated quoted field.")

        line = next_line

    # Text after the closing quote is ignored.
    value = (value + line[: m.start()]).removesuffix("\n")

    return value.replace("\\" + quote, quote).replace("\\\\", "\\")


def _strip_comment(text: str) -> str:
    if m := RE_MARKER.search(text):
        text = text[: m.start()]

    return text.rstrip()


def _is_continued(text: str) -> bool:
    return text.endswith("\\") and not text.endswith("\\\\")


def parse_unquoted(remainder: str, cursor: LineCursor) -> str:
    """Parse a value without quotes.

    Inline comments and trailing whitespace are stripped.
    A single backslash at the end of the line continues the value on the next line:

        key=multiline \\
            value

    gives "multiline value".

    Args:
        remainder: The raw text after the delimiter.
        cursor: The source to pull continuation lines from.

    Returns:
        The value, with escaped comment markers (\\# and \\;) unescaped.

    Raises:
        IniError: The source ended on a continued line.
    """

    parts = []
    text = _strip_comment(remainder)

    while _is_continued(text):
        parts.append(text[:-1])

        line = cursor.next_line()
        if line is None:
            raise IniError("Unterminated multiline field.")

        # Indentation of continuation lines is not part of the value.
        text = _strip_comment(line).lstrip()

    parts.append(text)

    return RE_ESCAPED_MARKER.sub(r"\1", "".join(parts))
