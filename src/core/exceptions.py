"""Custom exception hierarchy for PostScroll."""


class PostScrollError(Exception):
    """Base exception for all PostScroll errors."""

    def __init__(self, message: str = "An error occurred in PostScroll"):
        self.message = message
        super().__init__(self.message)


class NetworkError(PostScrollError):
    """Base exception for network-related errors."""

    def __init__(self, message: str = "A network error occurred"):
        super().__init__(message)


class PostFetchError(NetworkError):
    """Error fetching posts or comments (transport, HTTP or payload)."""

    def __init__(self, message: str = "Failed to fetch data from the post API"):
        super().__init__(message)


class PostNotFoundError(NetworkError):
    """HTTP 404 - No post with the requested id."""

    def __init__(self, message: str = "Post not found"):
        super().__init__(message)


class DataError(PostScrollError):
    """Base exception for data-related errors."""

    def __init__(self, message: str = "A data error occurred"):
        super().__init__(message)


class ConfigError(DataError):
    """Configuration is invalid or missing."""

    def __init__(self, message: str = "Configuration error"):
        super().__init__(message)


class TranslationTableError(DataError):
    """Translation table is unreadable or malformed."""

    def __init__(self, message: str = "Translation table is invalid"):
        super().__init__(message)
