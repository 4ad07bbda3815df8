# ABOUTME: Pydantic models for the OPML document tree.
# ABOUTME: Defines Opml, Head, Body and the recursive Outline with its extension map.

from collections.abc import Iterator

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# Outline fields that are not XML attributes
_OUTLINE_NON_ATTRIBUTES = ("outline", "extra")


class Head(BaseModel):
    """Document metadata. Every field is optional and kept as an opaque string."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str | None = None
    date_created: str | None = None
    date_modified: str | None = None
    owner_name: str | None = None
    owner_email: str | None = None
    owner_id: str | None = None
    docs: str | None = None
    expansion_state: str | None = None
    vert_scroll_state: str | None = None
    window_top: str | None = None
    window_bottom: str | None = None

    @classmethod
    def element_names(cls) -> list[tuple[str, str]]:
        """Return (field name, element name) pairs in emission order."""
        return [(name, field.alias or name) for name, field in cls.model_fields.items()]


class Outline(BaseModel):
    """A single outline node.

    Recognized attributes map onto named fields; any other attribute lands
    in ``extra`` so vendor extensions survive a round trip. Children are
    owned by containment, there are no parent links.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    text: str = ""
    outline: list["Outline"] | None = None
    type: str | None = None
    xml_url: str | None = None
    description: str | None = None
    html_url: str | None = None
    title: str | None = None
    version: str | None = None
    language: str | None = None
    extra: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def attribute_fields(cls) -> list[tuple[str, str]]:
        """Return (field name, attribute name) pairs in emission order."""
        return [
            (name, field.alias or name)
            for name, field in cls.model_fields.items()
            if name not in _OUTLINE_NON_ATTRIBUTES
        ]

    @classmethod
    def attribute_names(cls) -> list[str]:
        return [attr for _, attr in cls.attribute_fields()]

    @field_validator("extra")
    @classmethod
    def _drop_shadowed_keys(cls, value: dict[str, str]) -> dict[str, str]:
        # Named fields win over same-named extension entries
        recognized = set(cls.attribute_names())
        return {key: val for key, val in value.items() if key not in recognized}

    def iter_tree(self) -> Iterator["Outline"]:
        """Yield this node and its descendants, depth-first pre-order."""
        pending = [self]
        while pending:
            node = pending.pop()
            yield node
            pending.extend(reversed(node.outline or []))


class Body(BaseModel):
    outline: list[Outline] = Field(default_factory=list)


class Opml(BaseModel):
    """Root of an OPML document."""

    version: str = "2.0"
    head: Head = Field(default_factory=Head)
    body: Body = Field(default_factory=Body)

    def get_xml_urls(self) -> list[str]:
        """Feed URLs of every ``type="rss"`` outline, in document order."""
        from opml_tree.codec import get_xml_urls

        return get_xml_urls(self)

    def to_string(self, *, xml_declaration: bool | None = None) -> str:
        from opml_tree.codec import serialize

        return serialize(self, xml_declaration=xml_declaration)
