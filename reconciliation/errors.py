"""
Errors raised while loading sources and starting a comparison
"""


class ReconciliationError(Exception):
    """Base class for data-utility errors shown to the user."""


class SourceParseError(ReconciliationError, ValueError):
    """An uploaded source could not be turned into records."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"Failed to parse {source}: {message}")


class SourcesNotLoadedError(ReconciliationError):
    """A comparison was requested before every source was loaded."""

    def __init__(self, missing: list):
        self.missing = list(missing)
        super().__init__(
            f"Please upload all required files before comparing (missing: {', '.join(self.missing)})"
        )
