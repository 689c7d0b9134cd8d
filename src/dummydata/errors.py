# Error kinds raised across the package.
# Surfaces (HTTP routes, CLI) translate these into status codes / exit codes.


class DummyDataError(Exception):
    """Base class for everything this package raises on purpose."""


class EmptyPromptError(DummyDataError):
    """The data description was empty or whitespace only."""

    def __init__(self, message: str = "Please enter a description for the data you want to generate."):
        super().__init__(message)


class InvalidOptionError(DummyDataError, ValueError):
    """A format, date format or precision outside the fixed menus."""


class GenerationError(DummyDataError):
    """The upstream model call failed (network, auth, quota, malformed stream)."""


class MissingApiKeyError(DummyDataError):
    """The selected provider needs an API key and none is configured."""
