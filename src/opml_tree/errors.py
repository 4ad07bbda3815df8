# ABOUTME: Exception hierarchy for OPML parsing, serialization and feed extraction.
# ABOUTME: Every operation is all-or-nothing and raises one of these on failure.


class OpmlError(Exception):
    """Base class for opml-tree errors."""

    prefix = "OPML error"

    def __init__(self, detail: str) -> None:
        super().__init__(f"{self.prefix}: {detail}")
        self.detail = detail


class ParseError(OpmlError):
    """Input is not well-formed XML or does not match the OPML shape."""

    prefix = "Failed to parse XML"


class SerializeError(OpmlError):
    """The model holds data that cannot be written as XML."""

    prefix = "Failed to serialize XML"


class BadRss(OpmlError):
    """A ``type="rss"`` outline is missing its feed URL."""

    prefix = "Failed to parse outline as rss item"

    def __init__(self, detail: str, outline: str | None = None) -> None:
        super().__init__(detail)
        self.outline = outline
