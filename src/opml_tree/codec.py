# ABOUTME: OPML codec: XML text to document model and back, plus feed URL extraction.
# ABOUTME: Uses ElementTree for markup and raises ParseError/SerializeError/BadRss on failure.

import re
from xml.etree import ElementTree

import structlog

from opml_tree.config import get_settings
from opml_tree.errors import BadRss, ParseError, SerializeError
from opml_tree.models import Body, Head, Opml, Outline

log = structlog.get_logger()

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'
FEED_TYPE = "rss"

# Characters outside the XML 1.0 Char production
_INVALID_XML_CHARS = re.compile(r"[^\x09\x0a\x0d\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")

# XML 1.0 NameStartChar and NameChar, without the namespace colon
_NAME_START = (
    r"A-Z_a-z\u00c0-\u00d6\u00d8-\u00f6\u00f8-\u02ff\u0370-\u037d\u037f-\u1fff"
    r"\u200c\u200d\u2070-\u218f\u2c00-\u2fef\u3001-\ud7ff\uf900-\ufdcf\ufdf0-\ufffd"
    r"\U00010000-\U000effff"
)
_NAME_CHAR = _NAME_START + r"\-.0-9\u00b7\u0300-\u036f\u203f\u2040"
# Plain attribute name, or ElementTree's {namespace}local form
_ATTRIBUTE_NAME = re.compile(r"(\{[^{}]+\})?[" + _NAME_START + "][" + _NAME_CHAR + "]*")


def _schema_error(message: str) -> ParseError:
    log.warning("opml_parse_error", error=message)
    return ParseError(message)


def _child_text(element: ElementTree.Element, tag: str) -> str | None:
    child = element.find(tag)
    if child is None:
        return None
    return child.text or ""


def _field(element: ElementTree.Element, name: str) -> str | None:
    """Read a field from an attribute, falling back to a same-named child element."""
    value = element.get(name)
    if value is None:
        value = _child_text(element, name)
    return value


def _parse_head(element: ElementTree.Element) -> Head:
    return Head(**{name: _child_text(element, tag) for name, tag in Head.element_names()})


def _parse_outline(element: ElementTree.Element, path: str) -> Outline:
    """Build a single outline node; children are attached by the caller."""
    values = {name: _field(element, attr) for name, attr in Outline.attribute_fields()}
    if values["text"] is None:
        raise _schema_error(f"outline at {path} is missing required attribute 'text'")

    recognized = set(Outline.attribute_names())
    extra = {key: value for key, value in element.attrib.items() if key not in recognized}
    return Outline(**values, extra=extra)


def _parse_outlines(body: ElementTree.Element) -> list[Outline]:
    """Parse the outline forest under <body> with an explicit stack."""
    outlines: list[Outline] = []
    pending = [(body, outlines, "")]
    while pending:
        parent, siblings, path = pending.pop()
        for index, element in enumerate(parent.findall("outline")):
            node_path = f"{path}/{index}" if path else str(index)
            node = _parse_outline(element, node_path)
            siblings.append(node)
            if element.find("outline") is not None:
                node.outline = []
                pending.append((element, node.outline, node_path))
    return outlines


def parse(text: str | bytes) -> Opml:
    """Parse OPML text into an Opml document.

    Raises ParseError for malformed markup, a root other than <opml>, a missing
    version, head or body, or an outline without text.
    """
    try:
        root = ElementTree.fromstring(text)  # noqa: S314
    except ElementTree.ParseError as e:
        log.warning("opml_parse_error", error=str(e))
        raise ParseError(str(e)) from e

    if root.tag != "opml":
        raise _schema_error(f"expected root element 'opml', found '{root.tag}'")

    version = _field(root, "version")
    if version is None:
        raise _schema_error("missing required attribute 'version' on <opml>")

    head = root.find("head")
    if head is None:
        raise _schema_error("missing <head> element")

    body = root.find("body")
    if body is None:
        raise _schema_error("missing <body> element")

    return Opml(version=version, head=_parse_head(head), body=Body(outline=_parse_outlines(body)))


def _checked(value: str) -> str:
    match = _INVALID_XML_CHARS.search(value)
    if match:
        raise SerializeError(f"character {match.group()!r} cannot be represented in XML")
    return value


def _checked_name(name: str) -> str:
    if not _ATTRIBUTE_NAME.fullmatch(_checked(name)):
        raise SerializeError(f"invalid attribute name {name!r}")
    return name


def _render(element: ElementTree.Element) -> str:
    # ElementTree escapes carriage returns in attributes but not in text
    return ElementTree.tostring(element, encoding="unicode").replace("\r", "&#13;")


def _start_tag(element: ElementTree.Element) -> str:
    """Opening tag of an element that has no text and no children."""
    return _render(element).removesuffix(" />") + ">"


def _outline_element(outline: Outline) -> ElementTree.Element:
    element = ElementTree.Element("outline")
    for name, attr in Outline.attribute_fields():
        value = getattr(outline, name)
        if value is not None:
            element.set(attr, _checked(value))

    recognized = set(Outline.attribute_names())
    for key in sorted(outline.extra):
        if key in recognized:
            continue
        element.set(_checked_name(key), _checked(outline.extra[key]))
    return element


def _write_outlines(parts: list[str], outlines: list[Outline]) -> None:
    """Append outline markup depth-first, closing tags as each child list runs out."""
    stack = [iter(outlines)]
    while stack:
        outline = next(stack[-1], None)
        if outline is None:
            stack.pop()
            if stack:
                parts.append("</outline>")
            continue
        element = _outline_element(outline)
        if outline.outline:
            parts.append(_start_tag(element))
            stack.append(iter(outline.outline))
        else:
            parts.append(_render(element))


def serialize(doc: Opml, *, xml_declaration: bool | None = None) -> str:
    """Serialize an Opml document to XML text.

    Output is deterministic: head elements and outline attributes follow the
    model's field order, extension attributes are sorted by name.
    """
    if xml_declaration is None:
        xml_declaration = get_settings().xml_declaration

    try:
        parts = [_start_tag(ElementTree.Element("opml", version=_checked(doc.version)))]

        head: list[str] = []
        for name, tag in Head.element_names():
            value = getattr(doc.head, name)
            if value is not None:
                element = ElementTree.Element(tag)
                element.text = _checked(value)
                head.append(_render(element))
        parts.append("<head>" + "".join(head) + "</head>" if head else "<head />")

        body: list[str] = []
        _write_outlines(body, doc.body.outline)
        parts.append("<body>" + "".join(body) + "</body>" if body else "<body />")
    except (TypeError, ValueError) as e:
        log.warning("opml_serialize_error", error=str(e))
        raise SerializeError(str(e)) from e

    parts.append("</opml>")
    text = "".join(parts)
    return XML_DECLARATION + text if xml_declaration else text


def _copy_tree(outline: Outline) -> Outline:
    root = outline.model_copy(update={"extra": dict(outline.extra)})
    pending = [root]
    while pending:
        node = pending.pop()
        if node.outline is not None:
            node.outline = [
                child.model_copy(update={"extra": dict(child.extra)}) for child in node.outline
            ]
            pending.extend(node.outline)
    return root


def flatten(outline: Outline) -> list[Outline]:
    """Copies of an outline and all its descendants, depth-first pre-order."""
    return [_copy_tree(node) for node in outline.iter_tree()]


def get_xml_urls(doc: Opml) -> list[str]:
    """Collect xmlUrl of every ``type="rss"`` outline in traversal order.

    Stops at the first rss outline without an xmlUrl and raises BadRss.
    """
    urls: list[str] = []
    for top in doc.body.outline:
        for node in top.iter_tree():
            if node.type != FEED_TYPE:
                continue
            if node.xml_url is None:
                log.warning("bad_rss_outline", text=node.text)
                raise BadRss("missing xml_url", outline=node.text)
            urls.append(node.xml_url)
    return urls
