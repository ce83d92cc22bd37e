class IniError(Exception):
    """An INI configuration could not be queried, modified, or parsed.

    Attributes:
        message: A human-readable description of the problem.
        lineno: The 1-based line of the source being parsed when the error occurred,
            or None if the error is not tied to a source line.
    """

    message: str
    lineno: int | None

    def __init__(self, message: str, lineno: int | None = None):
        self.message = message
        self.lineno = lineno

        super().__init__(message)
