"""Errors raised by the search and indexing pipeline."""


class SearchBackendError(Exception):
    """The search backend answered with a non-OK status or was unreachable.

    Attributes:
        entity: Identity of the wave or wavelet the request was about.
        status_code: HTTP status returned by the backend, if any.
    """

    def __init__(
        self,
        message: str,
        entity: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.entity = entity
        self.status_code = status_code


class IndexBuildError(Exception):
    """Building or sending an index batch for an entity failed."""

    def __init__(self, entity: str, cause: Exception) -> None:
        super().__init__(f"failed to index {entity}: {cause}")
        self.entity = entity
        self.cause = cause


class RebuildInProgressError(Exception):
    """A full index rebuild was requested while another one is running."""

    def __init__(self) -> None:
        super().__init__("index rebuild already in progress")
