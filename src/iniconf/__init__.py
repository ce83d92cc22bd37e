"""This module provides a parser and serializer for INI configuration files."""

from .config import Configuration, DEFAULT_SECTION
from .dump import dump, dumps
from .errors import IniError
from .names import Name, Symbol, symbol
