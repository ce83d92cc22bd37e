import io
import logging
import pathlib
from collections.abc import Iterable, Iterator
from typing import Any, Self

from .dump import dump, dumps
from .encoding import detect_encoding
from .errors import IniError
from .lines import Grammar, LineCursor, Malformed, OptionLine, SectionHeader
from .names import Name, to_name
from .values import parse_value

_log = logging.getLogger(__name__)

DEFAULT_SECTION = "Default"


class Configuration:
    """An INI configuration: ordered sections of ordered options.

    Option values are always strings. Section and option names are strings,
    or symbols if the configuration was loaded with `symbols=True`.

    Attributes:
        delimiter: The separator between an option name and its value.
            Defaults to "=".
        default: The section options are put in if they appear before any section header.
            Defaults to "Default".

    Args:
        delimiter: See above.
        default: See above.

    Raises:
        ValueError: The delimiter is empty.
    """

    def __init__(self, delimiter: str = "=", default: str = DEFAULT_SECTION):
        self._grammar = Grammar(delimiter)
        self._default = default
        self._sections: dict[Name, dict[Name, str]] = {}

    @property
    def delimiter(self) -> str:
        return self._grammar.delimiter

    @property
    def default(self) -> str:
        return self._default

    def sections(self) -> list[Name]:
        """Return the section names in insertion order."""

        return list(self._sections)

    def options(self, section: Name) -> list[Name]:
        """Return the option names of a section in insertion order.

        Raises:
            IniError: The section does not exist.
        """

        return list(self._section(section))

    def items(self, section: Name) -> list[tuple[Name, str]]:
        """Return the (option, value) pairs of a section in insertion order.

        Raises:
            IniError: The section does not exist.
        """

        return list(self._section(section).items())

    def has_section(self, section: Name) -> bool:
        return section in self._sections

    def has_option(self, section: Name, option: Name) -> bool:
        """Check whether a section contains an option.

        Raises:
            IniError: The section does not exist.
        """

        return option in self._section(section)

    def add_section(self, section: Name):
        """Add an empty section.

        Raises:
            IniError: The section already exists.
        """

        if self.has_section(section):
            raise IniError(f"Section '{section}' already exists.")

        self._sections[section] = {}

    def add_option(self, section: Name, option: Name, value: Any):
        """Add an option to a section. The value is converted to a string.

        Raises:
            IniError: The section does not exist or already contains the option.
        """

        if self.has_option(section, option):
            raise IniError(f"Option '{option}' already exists in section '{section}'.")

        self._sections[section][option] = str(value)

    def delete_section(self, section: Name):
        """Remove a section and all of its options.

        Raises:
            IniError: The section does not exist.
        """

        self._section(section)
        del self._sections[section]

    def delete_option(self, section: Name, option: Name):
        """Remove an option from a section.

        Raises:
            IniError: The section or the option does not exist.
        """

        self._check_option(section, option)
        del self._sections[section][option]

    def to_dict(self) -> dict[Name, dict[Name, str]]:
        """Copy the configuration into a dict of sections mapped to their options."""

        return {s: dict(o) for s, o in self._sections.items()}

    def read(self, lines: Iterable[str], symbols: bool = False) -> Self:
        """Parse INI lines into this configuration.

        Options that appear before any section header are put in the default section.
        If parsing fails, the sections and options read so far are kept.

        Args:
            lines: The lines to parse, with or without line terminators (i.e. a text file).
            symbols: Whether or not to convert section and option names to symbols.

        Returns:
            The configuration itself.

        Raises:
            IniError: A line could not be parsed, or a section or option was defined twice.
                The message starts with the line number.
        """

        cursor = LineCursor(lines)
        section: Name | None = None

        while (line := cursor.next_line()) is not None:
            # Values may span several lines, so errors are reported at the first one.
            lineno = cursor.lineno

            try:
                token = self._grammar.classify(line)

                if isinstance(token, SectionHeader):
                    section = to_name(token.name, symbols)
                    self.add_section(section)

                elif isinstance(token, OptionLine):
                    value = parse_value(token.remainder, cursor)

                    if section is None:
                        section = to_name(self.default, symbols)
                        self.add_section(section)

                    self.add_option(section, to_name(token.name, symbols), value)

                elif isinstance(token, Malformed):
                    raise IniError(f"Malformed line: '{token.line}'")

            except IniError as err:
                raise IniError(f"Line {lineno}: {err.message}", lineno) from err

        return self

    def loads(self, text: str, symbols: bool = False) -> Self:
        """Parse an INI text into this configuration.

        Args:
            text: The text to parse.
            symbols: Passed to read().

        Returns:
            See read().

        Raises:
            See read().
        """

        with io.StringIO(text) as buf:
            return self.read(buf, symbols=symbols)

    def load(
        self,
        path: str | pathlib.Path,
        encoding: str | None = None,
        symbols: bool = False,
    ) -> Self:
        """Parse an INI file into this configuration.

        Args:
            path: The file to parse.
            encoding: The file encoding. If None, the platform default is used.
                If "auto", encoding detection is attempted.
            symbols: Passed to read().

        Returns:
            See read().

        Raises:
            IniError: The encoding could not be detected, or see read().
        """

        if isinstance(path, str):
            path = pathlib.Path(path)

        if encoding == "auto":
            with path.open("rb") as f:
                encoding = detect_encoding(f)

            if encoding is None:
                raise IniError(f"failed to detect encoding for {path}")

        _log.debug("loading %s (encoding: %s)", path, encoding)

        with path.open(encoding=encoding) as f:
            self.read(f, symbols=symbols)

        _log.debug("loaded %d section(s) from %s", len(self), path)

        return self

    def save(self, path: str | pathlib.Path, encoding: str | None = None):
        """Serialize this configuration to an INI file.

        Args:
            path: The file to write to.
            encoding: The file encoding. If None, the platform default is used.
        """

        if isinstance(path, str):
            path = pathlib.Path(path)

        _log.debug("saving %s (encoding: %s)", path, encoding)

        with path.open("w", encoding=encoding) as f:
            dump(self, f)

    def _section(self, section: Name) -> dict[Name, str]:
        try:
            return self._sections[section]
        except KeyError:
            raise IniError(f"Section '{section}' does not exist.") from None

    def _check_option(self, section: Name, option: Name):
        if not self.has_option(section, option):
            raise IniError(f"Option '{option}' does not exist in section '{section}'.")

    def __getitem__(self, key: tuple[Name, Name]) -> str:
        section, option = key

        self._check_option(section, option)
        return self._sections[section][option]

    def __setitem__(self, key: tuple[Name, Name], value: Any):
        section, option = key

        self._check_option(section, option)
        self._sections[section][option] = str(value)

    def __contains__(self, section: object) -> bool:
        return section in self._sections

    def __iter__(self) -> Iterator[Name]:
        return iter(self._sections)

    def __len__(self) -> int:
        return len(self._sections)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Configuration):
            return NotImplemented

        # Dicts compare regardless of order, so compare the items instead.
        return [(s, list(o.items())) for s, o in self._sections.items()] == [
            (s, list(o.items())) for s, o in other._sections.items()
        ]

    def __str__(self) -> str:
        return dumps(self)

    def __repr__(self) -> str:
        return (
            f"Configuration(delimiter={self.delimiter!r}, default={self.default!r}, "
            f"sections={self.sections()!r})"
        )
