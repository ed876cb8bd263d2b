"""
Exception types raised by the Blog Hub services.
"""


class BlogHubError(Exception):
    """Base class for all Blog Hub errors."""


class ValidationError(BlogHubError):
    """User input rejected before any request is made."""


class RequestError(BlogHubError):
    """The call to the Gemini API failed."""


class ResponseFormatError(BlogHubError):
    """The Gemini reply was not JSON or did not match the declared schema."""


class MissingCredentialError(BlogHubError):
    """The API key environment variable is not set."""
