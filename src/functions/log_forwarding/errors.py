# Error types raised by the log forwarding pipeline


class RelayError(Exception):
    """Base class for every failure raised by the pipeline."""


class ConfigurationError(RelayError):
    """A required setting is missing or has an invalid value."""


class ParseError(RelayError):
    """The trigger payload could not be parsed into blob change events."""


class BlobAccessError(RelayError):
    """The blob could not be downloaded or decoded as UTF-8 text."""


class AuthError(RelayError):
    """A token for the ingestion service could not be obtained."""


class IngestionError(RelayError):
    """The ingestion endpoint rejected the payload or could not be reached."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code
