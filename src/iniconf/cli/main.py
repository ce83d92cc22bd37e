import logging
import pathlib
from typing import Annotated, Optional

import typer
from rich.markup import escape
from rich.table import Table

from .. import Configuration, DEFAULT_SECTION, IniError

from .console import console, err_console

LOG_LEVELS = [
    logging.CRITICAL,
    logging.ERROR,
    logging.WARNING,
    logging.INFO,
    logging.DEBUG,
]

File = Annotated[
    pathlib.Path, typer.Argument(exists=True, dir_okay=False, resolve_path=True)
]
Encoding = Annotated[
    Optional[str],
    typer.Option(help="file encoding ('auto' to detect it, platform default if not given)"),
]
Delimiter = Annotated[str, typer.Option(help="separator between option names and values")]
Default = Annotated[
    str, typer.Option(help="section for options that come before any section header")
]

app = typer.Typer(no_args_is_help=True)


@app.callback()
def common(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, min=0, max=5, help="set logging level"
        ),
    ] = 0
):
    """Read, check and normalize INI configuration files."""

    if verbose == 0:
        logging.disable()
    else:
        logging.basicConfig(level=LOG_LEVELS[verbose - 1])


def _load(
    file: pathlib.Path, encoding: str | None, delimiter: str, default: str
) -> Configuration:
    try:
        return Configuration(delimiter, default).load(file, encoding=encoding)
    except IniError as err:
        err_console.print(escape(err.message), style="red")
        raise typer.Exit(code=1) from err


@app.command()
def check(
    file: File,
    encoding: Encoding = None,
    delimiter: Delimiter = "=",
    default: Default = DEFAULT_SECTION,
):
    """Check that a file parses, and count its sections and options."""

    config = _load(file, encoding, delimiter, default)
    options = sum(len(config.options(s)) for s in config)

    console.print(f"{len(config)} section(s), {options} option(s)", style="green")


@app.command()
def show(
    file: File,
    section: Annotated[Optional[str], typer.Argument()] = None,
    encoding: Encoding = None,
    delimiter: Delimiter = "=",
    default: Default = DEFAULT_SECTION,
):
    """Show the options of a file as a table.
    If section is given, only the options of that section are shown.
    """

    config = _load(file, encoding, delimiter, default)

    if section is not None and not config.has_section(section):
        err_console.print(f"section not found: {escape(section)}", style="red")
        raise typer.Exit(code=1)

    table = Table()
    for column in ["Section", "Option", "Value"]:
        table.add_column(column)

    sections = config.sections() if section is None else [section]

    for name in sections:
        for option, value in config.items(name):
            table.add_row(escape(str(name)), escape(str(option)), escape(repr(value)))

    console.print(table)


@app.command()
def get(
    file: File,
    section: str,
    option: str,
    encoding: Encoding = None,
    delimiter: Delimiter = "=",
    default: Default = DEFAULT_SECTION,
):
    """Print the value of an option."""

    config = _load(file, encoding, delimiter, default)

    try:
        value = config[section, option]
    except IniError as err:
        err_console.print(escape(err.message), style="red")
        raise typer.Exit(code=1) from err

    typer.echo(value)


@app.command()
def fmt(
    file: File,
    output: Annotated[
        Optional[pathlib.Path],
        typer.Option("--output", "-o", dir_okay=False, help="write to a file instead of stdout"),
    ] = None,
    encoding: Encoding = None,
    delimiter: Delimiter = "=",
    default: Default = DEFAULT_SECTION,
):
    """Normalize a file: comments and blank lines are dropped and values are requoted."""

    config = _load(file, encoding, delimiter, default)

    if output is None:
        typer.echo(str(config), nl=False)
    else:
        # Auto-detected encodings are not carried over to the output.
        config.save(output, encoding=None if encoding == "auto" else encoding)
