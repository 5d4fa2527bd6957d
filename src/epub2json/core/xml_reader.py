"""Generic XML tree with shape-independent accessors.

Package and navigation documents do not say up front whether a child occurs
once or many times, or whether a value is bare text or text wrapped in more
markup. Documents are parsed into a small tagged union and read only through
:func:`children` and :func:`text`, which give the same answer for every shape.
"""

from dataclasses import dataclass, field
from typing import Iterator, Union

from lxml import etree

from epub2json.errors import MalformedXml


@dataclass(frozen=True)
class XmlText:
    """A leaf element that carries only text."""

    value: str
    name: str = ""


@dataclass(frozen=True)
class XmlElement:
    """An element with attributes and/or child elements."""

    name: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: dict[str, tuple["XmlNode", ...]] = field(default_factory=dict)
    # Direct text content, excluding text inside child elements
    text: str = ""
    # Text runs and child nodes in document order
    content: tuple[Union[str, "XmlNode"], ...] = ()


XmlNode = Union[XmlText, XmlElement]


def _local_name(tag: str) -> str:
    return etree.QName(tag).localname


def _build(element: etree._Element) -> XmlNode:
    attributes = {_local_name(k): v for k, v in element.attrib.items()}
    direct_text = element.text or ""
    content: list[str | XmlNode] = [direct_text] if direct_text else []
    grouped: dict[str, list[XmlNode]] = {}

    for sub in element:
        # Comments and processing instructions only contribute their tail
        if isinstance(sub.tag, str):
            node = _build(sub)
            grouped.setdefault(_local_name(sub.tag), []).append(node)
            content.append(node)
        if sub.tail:
            direct_text += sub.tail
            content.append(sub.tail)

    if not attributes and not grouped:
        return XmlText(direct_text, name=_local_name(element.tag))

    return XmlElement(
        name=_local_name(element.tag),
        attributes=attributes,
        children={name: tuple(nodes) for name, nodes in grouped.items()},
        text=direct_text,
        content=tuple(content),
    )


def parse_xml(data: bytes) -> XmlElement:
    """Parse an XML document and return its root wrapped as a document node.

    The returned node is named ``#document`` and has the root element as its
    single child, so the root is reached with ``children(doc, "package")``.
    """
    parser = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=True)
    try:
        root = etree.fromstring(data, parser)
    except (etree.XMLSyntaxError, ValueError) as e:
        raise MalformedXml(f"Could not parse XML document: {e}") from e

    root_node = _build(root)
    return XmlElement(
        name="#document",
        children={_local_name(root.tag): (root_node,)},
        content=(root_node,),
    )


def children(node: XmlNode | None, name: str) -> tuple[XmlNode, ...]:
    """Return the child nodes called ``name`` (possibly none)."""
    if isinstance(node, XmlElement):
        return node.children.get(name, ())
    return ()


def child(node: XmlNode | None, name: str) -> XmlNode | None:
    """Return the first child called ``name``, if any."""
    found = children(node, name)
    return found[0] if found else None


def attribute(node: XmlNode | None, name: str) -> str | None:
    """Return a (namespace-local) attribute value of an element."""
    if isinstance(node, XmlElement):
        return node.attributes.get(name)
    return None


def text(node: XmlNode | None) -> str:
    """Best-effort text of a node.

    Bare text is returned trimmed. For elements, the first node in a
    depth-first walk that has direct text wins.
    """
    if node is None:
        return ""
    if isinstance(node, XmlText):
        return node.value.strip()

    own = node.text.strip()
    if own:
        return own
    for sub in node.content:
        if isinstance(sub, str):
            continue
        found = text(sub)
        if found:
            return found
    return ""


def full_text(node: XmlNode | None, skip: tuple[str, ...] = ()) -> str:
    """All text inside a node in document order, leaving out elements named in ``skip``."""
    if node is None or node.name in skip:
        return ""
    if isinstance(node, XmlText):
        return node.value
    return "".join(
        sub if isinstance(sub, str) else full_text(sub, skip) for sub in node.content
    )


def iter_elements(node: XmlNode | None, name: str) -> Iterator[XmlElement]:
    """Yield descendant elements called ``name`` in document order."""
    if not isinstance(node, XmlElement):
        return
    for sub in node.content:
        if isinstance(sub, XmlElement):
            if sub.name == name:
                yield sub
            yield from iter_elements(sub, name)
