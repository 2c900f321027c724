"""Error types raised by the pipeline stages.

Each error carries the HTTP status the orchestrators answer with.
"""


class PipelineError(Exception):
    status_code = 500


class BadRequest(PipelineError):
    """Malformed or incomplete input supplied by the caller."""

    status_code = 400


class ValidationError(BadRequest):
    """Decoded input is missing a required field or has the wrong shape."""


class UpstreamError(PipelineError):
    """The forecast provider could not be reached or answered with an error."""

    def __init__(self, message: str, status_code: int | None = None, reason: str | None = None):
        super().__init__(message)
        self.upstream_status = status_code
        self.reason = reason


class FetchError(UpstreamError):
    pass


class ParseError(UpstreamError):
    pass


class ShapeError(PipelineError):
    """Forecast payload is missing fields the snapshot needs."""


class StoreError(PipelineError):
    """Write or read against the key-value table failed."""


class ConfigError(Exception):
    """Invalid environment configuration."""
