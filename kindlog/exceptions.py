class RecordStoreError(Exception):
    """Base error for talking to the remote records endpoint."""


class LoadError(RecordStoreError):
    """Fetching records failed or the endpoint answered with a non-list payload."""

    def __init__(self, message: str, payload=None):
        super().__init__(message)
        self.payload = payload


class SubmitError(RecordStoreError):
    """Posting a new record failed at the transport level."""
