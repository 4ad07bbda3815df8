# ABOUTME: Public API for reading and writing OPML outline documents.
# ABOUTME: Re-exports the document model, codec functions and error types.

from opml_tree.codec import flatten, get_xml_urls, parse, serialize
from opml_tree.errors import BadRss, OpmlError, ParseError, SerializeError
from opml_tree.models import Body, Head, Opml, Outline

__all__ = [
    "BadRss",
    "Body",
    "Head",
    "Opml",
    "OpmlError",
    "Outline",
    "ParseError",
    "SerializeError",
    "flatten",
    "get_xml_urls",
    "parse",
    "serialize",
]
