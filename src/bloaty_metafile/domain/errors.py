from __future__ import annotations

"""
Domain Error Taxonomy.

Every failure raised by the pipeline derives from BloatyError so that the
interface layer can report it with a single handler. Only input and
serialization failures are fatal; lockfile failures are absorbed by the
loader and degrade dependency attribution.
"""


class BloatyError(Exception):
    """Base class for all bloaty-metafile failures."""


class InputMalformedError(BloatyError):
    """
    The size report could not be read or parsed.

    Attributes:
        source: File path or '<stdin>' the records came from.
        detail: Human readable reason.
    """

    def __init__(self, source: str, detail: str) -> None:
        self.source = source
        self.detail = detail
        super().__init__(f"Failed to parse CSV from {source}: {detail}")


class LockfileLoadError(BloatyError):
    """
    The dependency lock document is missing or unparsable.

    Attributes:
        path: Location of the lock document.
        detail: Human readable reason.
    """

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Failed to load Cargo.lock: {path} ({detail})")


class SerializationError(BloatyError):
    """The attribution tree could not be converted to metafile JSON."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Failed to serialize JSON: {detail}")
