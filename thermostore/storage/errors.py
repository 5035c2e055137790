class StoreError(Exception):
    """Base class for failures talking to the measurement store."""


class InvalidDestination(StoreError):
    """The target URL could not be built from the configured base location."""


class RequestFailed(StoreError):
    """The request could not be sent, or the store answered with an error status."""


class InvalidResponse(StoreError):
    """The response body was not the expected search envelope."""


class UnexpectedResponse(StoreError):
    """An individual hit in the response did not have the expected shape."""
