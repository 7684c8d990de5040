"""Search-specific exceptions."""


class SearchError(Exception):
    """Base exception for search errors."""


class InvalidIdentifierError(SearchError):
    """Raised when a caller identity is not a well-formed user identifier."""


class BackendError(SearchError):
    """Base exception for search backend errors."""


class ConnectionError(BackendError):
    """Raised when the backend cannot reach the managed index."""


class IndexQueryError(BackendError):
    """Raised when a managed index query fails."""


class ConfigurationError(BackendError):
    """Raised when backend configuration is invalid."""
