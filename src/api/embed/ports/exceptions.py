"""Port exceptions for the embed context."""


class EmbedNotFoundError(Exception):
    """Raised when an embed slug resolves to nothing publishable."""

    pass
