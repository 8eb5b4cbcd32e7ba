class RosterError(ValueError):
    """Raised when roster input cannot be turned into competitors."""


class DrawError(ValueError):
    """Raised when a seed draw cannot be applied."""


class DrawNotFoundError(KeyError):
    """Raised when a stored draw session does not exist."""

    def __str__(self):
        return f"Draw not found: {self.args[0]}" if self.args else "Draw not found"


class DrawStoreError(RuntimeError):
    """Raised when draws.yaml cannot be parsed and writing would overwrite it."""
