import logging
import pathlib

import pytest

from iniconf import Configuration, IniError, dumps
from iniconf.dump import needs_quotes, quote


def test_dump():
    config = Configuration(delimiter=":")
    assert str(config) == ""

    config.add_section("Default")
    assert str(config) == "[Default]\n"

    config.add_option("Default", "foo", 42)
    assert str(config) == "[Default]\nfoo:42\n"
    assert dumps(config) == str(config)


def test_dump_order():
    config = Configuration()
    for section in ["b", "a"]:
        config.add_section(section)
        config.add_option(section, "z", "1")
        config.add_option(section, "y", "2")

    assert str(config) == "[b]\nz=1\ny=2\n[a]\nz=1\ny=2\n"


def test_dump_whitespace_value():
    config = Configuration()
    config.add_section("A")
    config.add_option("A", "foo", "   ")

    assert str(config) == '[A]\nfoo="   "\n'
    assert Configuration().loads(str(config))["A", "foo"] == "   "


@pytest.mark.parametrize("value", ["", " ", "\t", "   \t   ", ";", "#", "# not a comment"])
def test_needs_quotes(value: str):
    assert needs_quotes(value)


@pytest.mark.parametrize("value", ["bar", "42", "a=b", 'a"b"c', "x'y'z", "a \\ b"])
def test_needs_no_quotes(value: str):
    assert not needs_quotes(value)


def test_quote():
    assert quote("") == '""'
    assert quote("#") == '"#"'
    assert quote('say "hi"') == r'"say \"hi\""'
    assert quote("a\\") == '"a\\\\\n"'
    assert quote("line\n") == '"line\n\n"'


@pytest.mark.parametrize(
    "value",
    [
        " ",
        "\t",
        "   \t   ",
        ";",
        "#",
        "not a #comment",
        "  padded  ",
        "line1\nline2",
        "trailing newline\n",
        "\n",
        '"quoted"',
        "'quoted'",
        "back\\slash\\",
        'escaped \\" quote',
        "double \\\\",
    ],
)
def test_roundtrip_values(value: str):
    config = Configuration()
    config.add_section("Default")
    config.add_option("Default", "key", value)

    assert Configuration().loads(str(config))["Default", "key"] == value


def test_roundtrip_file(tmp_path: pathlib.Path):
    path = tmp_path / "tmp.ini"

    config = Configuration(delimiter=":")
    config.add_section("Input")
    config.add_option("Input", "space", " ")
    config.add_option("Input", "semicolon", ";")
    config.add_option("Input", "multiline", "a\nb")
    config.add_section("Output")
    config.add_option("Output", "path", "C:/out dir/file.txt")
    config.save(path)

    assert Configuration(delimiter=":").load(path) == config


def test_dump_warns_on_brackets(caplog: pytest.LogCaptureFixture):
    config = Configuration()
    config.add_section("A")
    config.add_option("A", "list", "[1, 2]")

    with caplog.at_level(logging.WARNING, logger="iniconf.dump"):
        str(config)

    assert "will be read back as a section header" in caplog.text


@pytest.mark.parametrize(
    "option, problem",
    [
        ("#x", "starts with a comment marker"),
        (";x", "starts with a comment marker"),
        ("a=b", "contains the delimiter"),
        (" padded", "surrounding whitespace"),
    ],
)
def test_dump_warns_on_option_names(
    option: str, problem: str, caplog: pytest.LogCaptureFixture
):
    config = Configuration()
    config.add_section("A")
    config.add_option("A", option, "v")

    with caplog.at_level(logging.WARNING, logger="iniconf.dump"):
        text = str(config)

    assert problem in caplog.text
    assert Configuration().loads(text) != config


def test_dump_warns_on_section_names(caplog: pytest.LogCaptureFixture):
    config = Configuration()
    config.add_section("a]b")

    with caplog.at_level(logging.WARNING, logger="iniconf.dump"):
        str(config)

    assert "section 'a]b' will not be read back unchanged" in caplog.text


@pytest.mark.parametrize("value", ["a\r\nb", "a\rb"])
def test_dump_warns_on_carriage_returns(
    value: str, tmp_path: pathlib.Path, caplog: pytest.LogCaptureFixture
):
    path = tmp_path / "cr.ini"

    config = Configuration()
    config.add_section("A")
    config.add_option("A", "k", value)

    with caplog.at_level(logging.WARNING, logger="iniconf.dump"):
        config.save(path)

    assert "carriage returns" in caplog.text
    assert Configuration().load(path)["A", "k"] == "a\nb"


def test_dump_warns_on_multiline_option_name(caplog: pytest.LogCaptureFixture):
    config = Configuration()
    config.add_section("A")
    config.add_option("A", "two\nlines", "v")

    with caplog.at_level(logging.WARNING, logger="iniconf.dump"):
        text = str(config)

    assert "contains a line break" in caplog.text

    with pytest.raises(IniError, match="Line 2: Malformed line"):
        Configuration().loads(text)


def test_dump_safe_names_do_not_warn(caplog: pytest.LogCaptureFixture):
    config = Configuration()
    config.add_section("2) Output")
    config.add_option("2) Output", "data(4)", "foo/bar")

    with caplog.at_level(logging.WARNING, logger="iniconf.dump"):
        str(config)

    assert caplog.text == ""
