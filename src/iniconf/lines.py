import dataclasses
import re
from collections.abc import Iterable, Iterator

import attrs

COMMENT = re.compile(r"^\s*(#|;).*$")
SECTION = re.compile(r"\[(.+?)\]")


class LineCursor:
    """A forward-only cursor over the lines of a source.

    Line terminators are stripped from every line returned.

    Attributes:
        lineno: The 1-based number of the last line returned, or 0 if none was read yet.
    """

    lineno: int

    def __init__(self, lines: Iterable[str]):
        self._lines: Iterator[str] = iter(lines)
        self.lineno = 0

    def next_line(self) -> str | None:
        """Return the next line, or None if the source is exhausted."""

        line = next(self._lines, None)
        if line is None:
            return None

        self.lineno += 1
        return line.rstrip("\r\n")


@dataclasses.dataclass(slots=True)
class Comment:
    """A comment line, i.e. `; text` or `# text`."""


@dataclasses.dataclass(slots=True)
class SectionHeader:
    """A section header, i.e. [name]."""

    name: str


@dataclasses.dataclass(slots=True)
class OptionLine:
    """An option definition, i.e. name=value.

    The remainder is the raw text after the delimiter;
    the value parser turns it into the final value.
    """

    name: str
    remainder: str


@dataclasses.dataclass(slots=True)
class Blank:
    """An empty or whitespace-only line."""


@dataclasses.dataclass(slots=True)
class Malformed:
    """A line that is none of the above."""

    line: str


Line = Comment | SectionHeader | OptionLine | Blank | Malformed


@attrs.frozen
class Grammar:
    """The line patterns of an INI dialect.

    Attributes:
        delimiter: The separator between an option name and its value.
        option: The option pattern compiled for the delimiter.
    """

    delimiter: str = attrs.field(
        default="=", validator=[attrs.validators.instance_of(str), attrs.validators.min_len(1)]
    )
    option: re.Pattern[str] = attrs.field(init=False, repr=False, eq=False)

    @option.default
    def _compile_option(self) -> re.Pattern[str]:
        return re.compile(rf"^(.+?)\s*{re.escape(self.delimiter)}\s*(.+)$")

    def classify(self, line: str) -> Line:
        """Classify a single line without its terminator.

        Args:
            line: The line to classify.

        Returns:
            The line token. Comments take precedence over section headers,
            which take precedence over options.
        """

        if COMMENT.match(line):
            return Comment()

        if m := SECTION.search(line):
            return SectionHeader(m.group(1))

        if m := self.option.match(line):
            return OptionLine(name=m.group(1).lstrip(), remainder=m.group(2))

        if not line.strip():
            return Blank()

        return Malformed(line)
