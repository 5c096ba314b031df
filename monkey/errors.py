class MonkeyError(Exception):
    """ Base class for all Monkey host-level errors"""
    pass


class MonkeyParseError(MonkeyError):
    """ Raised when a session is refused because its source has syntax errors"""

    def __init__(self, errors: list[str]):
        super().__init__("\n".join(errors))
        self.errors = list(errors)


class MacroExpansionError(MonkeyError):
    """ Raised when a macro breaks its contract (does not return a quoted node)"""
