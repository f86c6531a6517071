"""Custom exceptions for universe loading and navigation."""


class UniverseError(Exception):
    """Base exception for universe operations."""
    pass


class FetchError(UniverseError):
    """Raised when a document cannot be retrieved or parsed."""
    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to load document '{url}': {reason}")


class CycleError(UniverseError):
    """Raised when document references loop back onto themselves."""
    def __init__(self, chain: list[str]):
        self.chain = list(chain)
        super().__init__(f"Document reference cycle: {' -> '.join(self.chain)}")


class DuplicateIdError(UniverseError):
    """Raised when strict resolution finds a node id used more than once."""
    def __init__(self, ids: list[str]):
        self.ids = list(ids)
        super().__init__(f"Duplicate node ids: {', '.join(self.ids)}")


class SessionNotLoadedError(UniverseError):
    """Raised when a view is requested before any tree has been loaded."""
    def __init__(self) -> None:
        super().__init__("No universe loaded yet")
