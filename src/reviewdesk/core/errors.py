"""Error taxonomy for ReviewDesk.

Every failure that reaches a caller of the review service is one of these
classes, so presentation code can branch on the class (or on
``status_code``) instead of inspecting raw transport exceptions.
"""


class ReviewDeskError(Exception):
    """Base class for all ReviewDesk errors."""

    status_code = 500

    def __init__(self, message: str, *, details: str = ""):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        payload = {"success": False, "error": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class ConfigurationError(ReviewDeskError):
    """A provider credential or key is not configured."""

    status_code = 501


class InvalidInputError(ReviewDeskError):
    """Malformed caller input, rejected before any state change."""

    status_code = 400


class UpstreamError(ReviewDeskError):
    """Generic provider failure (network error, unexpected status)."""

    status_code = 502


class QuotaExceededError(UpstreamError):
    """Provider quota or rate limit hit. Retry later."""

    status_code = 429


class AccessDeniedError(UpstreamError):
    """Provider rejected the credentials or permissions."""

    status_code = 403


class InvalidRequestError(UpstreamError):
    """Provider rejected the request parameters."""

    status_code = 400
