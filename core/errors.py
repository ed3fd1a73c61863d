"""Error types for the video catalog refresh path."""

from typing import Optional

__all__ = ["CatalogError", "FetchError", "ParseError"]


class CatalogError(Exception):
    """Base class for catalog refresh failures."""


class FetchError(CatalogError):
    """The source document could not be retrieved."""

    def __init__(self, url: str, reason: str, status_code: Optional[int] = None):
        self.url = url
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"Failed to fetch {url}: {reason}")


class ParseError(CatalogError):
    """The source document was retrieved but has the wrong shape."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid video document: {reason}")
