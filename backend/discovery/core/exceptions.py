"""
Discovery error types

Every discovery operation is read-only, so an error never leaves partial
state behind. Each error carries the HTTP status the API layer maps it to.
"""


class DiscoveryError(Exception):
    """Base class for discovery errors"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DiscoveryError):
    """Invalid request: missing coordinates, bad pagination, bad filter"""

    status_code = 400


class NotFoundError(DiscoveryError):
    """Unknown business or product id"""

    status_code = 404


class InternalError(DiscoveryError):
    """Entity store failure or other unexpected condition"""

    status_code = 500


class CandidateLimitExceeded(InternalError):
    """A distance query would have to scan more rows than allowed"""

    def __init__(self, limit: int):
        super().__init__(
            f"Too many candidate businesses to rank by distance (limit {limit}). "
            "Narrow the search with a region or name filter."
        )
        self.limit = limit
