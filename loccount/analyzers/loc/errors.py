class LocCountError(Exception):
    """
    Base exception for line counting errors.
    """


class InvalidLanguageSpecError(LocCountError):
    """
    Raised when a language comment definition is inconsistent.
    """


class LineTooLongError(LocCountError):
    """
    Raised when a single line exceeds the configured buffering limit.
    """

    def __init__(self, line_number: int, limit: int):
        super().__init__(
            f"Line {line_number} exceeds maximum length of {limit} bytes"
        )
        self.line_number = line_number
        self.limit = limit


class WhitelistError(LocCountError):
    """
    Raised when a whitelist file cannot be read.
    """
