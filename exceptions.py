class RPWError(Exception):
    """Public error raised by the client for any failed operation."""


class PersistenceError(Exception):
    """A dotfile could not be read or written."""

    def __init__(self, path, message: str):
        self.path = path
        super().__init__(f"{message}: {path}")
