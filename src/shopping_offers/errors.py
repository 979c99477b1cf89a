class OfferSourceError(Exception):
    """Raised when a single offer source cannot produce its offers."""

    def __init__(self, message: str, source: str | None = None) -> None:
        super().__init__(message)
        self.source = source


class SourceUnavailable(OfferSourceError):
    """Network or transport failure, or a non-success HTTP status."""


class SourceNotFound(OfferSourceError):
    """The local offer resource does not exist."""


class MalformedConfig(OfferSourceError):
    """The offer configuration could not be decoded."""
