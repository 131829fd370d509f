"""
Error taxonomy for the link shortener core.

Services and the link store raise these; the HTTP layer
(shortlink_app.api.errors) translates each kind into a response status.
"""


class ShortLinkError(Exception):
    """Base class for all link shortener errors"""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class ValidationError(ShortLinkError):
    """Bad input: alias too long, missing original URL, malformed payload"""


class ConflictError(ShortLinkError):
    """Alias or short id already taken"""


class NotFoundError(ShortLinkError):
    """No link matches the given key"""


class ExpiredError(ShortLinkError):
    """The key resolves, but the link has expired"""


class StorageError(ShortLinkError):
    """Underlying persistence failure"""
