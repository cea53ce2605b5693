class UpstreamError(Exception):
    """Raised when the completion API call cannot produce a reply."""

    pass
