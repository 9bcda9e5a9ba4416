"""Generic XML node tree built from lxml.

The converter keeps the XML shape intact but strips it down to what the
mappers need: attributes, text, CDATA and children grouped by tag. A tag that
occurs once maps to a single node, a repeated tag maps to a tuple.
"""

import html
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Union

from lxml import etree

from .config import VmapParserConfig
from .events import VmapEvents
from .exceptions import VmapStructureError, VmapXMLError
from .log_config import get_context_logger


logger = get_context_logger("vmap_tree")

_CDATA_RE = re.compile(r"<!\[CDATA\[(.*?)\]\]>", re.DOTALL)


@dataclass(frozen=True)
class XmlNode:
    """One element of the converted document.

    Attributes:
        tag: Namespace-local tag name
        path: Slash-separated location used in error messages
        attributes: Read-only attribute map, ``None`` when the element has none
        text: Character data outside CDATA sections, verbatim; ``None`` when
            empty or whitespace-only
        cdata: Concatenated CDATA sections, verbatim; ``None`` if there are none
        children: Read-only map of child nodes by tag, a node or a tuple of nodes

    Nodes are immutable and hashable, so records holding raw nodes are too.
    """

    tag: str
    path: str
    attributes: Mapping[str, str] | None = None
    text: str | None = None
    cdata: str | None = None
    children: Mapping[str, Union["XmlNode", tuple["XmlNode", ...]]] = field(
        default_factory=dict
    )

    def __post_init__(self) -> None:
        if self.attributes is not None:
            object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))
        children = {
            tag: tuple(entry) if isinstance(entry, (list, tuple)) else entry
            for tag, entry in self.children.items()
        }
        object.__setattr__(self, "children", MappingProxyType(children))

    def __hash__(self) -> int:
        attributes = tuple(sorted(self.attributes.items())) if self.attributes else None
        children = tuple(self.children.items())
        return hash((self.tag, self.path, attributes, self.text, self.cdata, children))

    def get(self, tag: str) -> Union["XmlNode", tuple["XmlNode", ...], None]:
        """Return the raw child entry for ``tag`` (node, tuple or ``None``)."""
        return self.children.get(tag)

    def has(self, tag: str) -> bool:
        return tag in self.children

    def child(self, tag: str) -> "XmlNode":
        """Return the single child ``tag``; the first one if it repeats.

        Raises:
            VmapStructureError: If there is no such child
        """
        entry = self.children.get(tag)
        if entry is None:
            logger.debug(VmapEvents.STRUCTURE_MISSING, path=self.path, missing=tag)
            raise VmapStructureError(
                f"Required element '{tag}' not found", path=self.path, missing=tag
            )
        if isinstance(entry, tuple):
            return entry[0]
        return entry

    def optional_child(self, tag: str) -> "XmlNode | None":
        if tag not in self.children:
            return None
        return self.child(tag)

    def attr(self, name: str) -> str | None:
        if self.attributes is None:
            return None
        return self.attributes.get(name)

    def require_attr(self, name: str) -> str:
        """Return attribute ``name``.

        Raises:
            VmapStructureError: If the attribute is absent
        """
        value = self.attr(name)
        if value is None:
            logger.debug(VmapEvents.STRUCTURE_MISSING, path=self.path, missing=f"@{name}")
            raise VmapStructureError(
                f"Required attribute '{name}' not found", path=self.path, missing=f"@{name}"
            )
        return value

    def to_dict(self) -> dict[str, Any]:
        """Render the node as plain data."""
        return {
            "tag": self.tag,
            "attributes": dict(self.attributes) if self.attributes is not None else None,
            "text": self.text,
            "cdata": self.cdata,
            "children": {
                tag: [n.to_dict() for n in entry] if isinstance(entry, tuple) else entry.to_dict()
                for tag, entry in self.children.items()
            },
        }


def convert_xml(xml: str | bytes, config: VmapParserConfig | None = None) -> XmlNode:
    """Parse XML text into an ``XmlNode`` tree.

    Args:
        xml: Raw XML document
        config: Parser configuration (defaults are used when omitted)

    Returns:
        Root node of the document

    Raises:
        VmapXMLError: If the input is not well-formed XML
    """
    config = config or VmapParserConfig()
    preview = _preview(xml, config.xml_preview_length)

    # bytes are decoded by lxml from the XML declaration or BOM
    parser_options = {}
    if isinstance(xml, str):
        parser_options["encoding"] = config.encoding

    parser = etree.XMLParser(
        strip_cdata=False,
        recover=config.recover_on_error,
        huge_tree=config.huge_tree,
        resolve_entities=False,
        no_network=True,
        remove_comments=True,
        remove_pis=True,
        **parser_options,
    )
    try:
        data = xml.encode(config.encoding) if isinstance(xml, str) else xml
        root = etree.fromstring(data, parser=parser)  # ruff: noqa: S320
    except etree.XMLSyntaxError as e:
        logger.error(VmapEvents.XML_INVALID, error=str(e), xml_preview=preview)
        raise VmapXMLError(
            f"Failed to parse VMAP XML: {str(e)}",
            xml_preview=preview,
            parser_error=e,
        ) from e
    except (UnicodeError, ValueError) as e:
        logger.error(VmapEvents.XML_INVALID, error=str(e), xml_preview=preview)
        raise VmapXMLError(
            f"Failed to decode or parse VMAP XML: {str(e)}",
            xml_preview=preview,
            parser_error=e,
        ) from e

    # recover mode returns None when nothing could be salvaged
    if root is None:
        logger.error(VmapEvents.XML_INVALID, error="no root element", xml_preview=preview)
        raise VmapXMLError("Failed to parse VMAP XML: no root element", xml_preview=preview)

    tag = etree.QName(root).localname
    node = _build_node(root, tag, f"/{tag}")
    logger.debug(VmapEvents.XML_CONVERTED, root_tag=node.tag)
    return node


def _build_node(element: etree._Element, tag: str, path: str) -> XmlNode:
    grouped: dict[str, list[etree._Element]] = {}
    for child in element:
        # entity references and the like have no string tag
        if not isinstance(child.tag, str):
            continue
        grouped.setdefault(etree.QName(child).localname, []).append(child)

    children: dict[str, XmlNode | tuple[XmlNode, ...]] = {}
    for child_tag, elements in grouped.items():
        if len(elements) == 1:
            children[child_tag] = _build_node(elements[0], child_tag, f"{path}/{child_tag}")
        else:
            children[child_tag] = tuple(
                _build_node(child, child_tag, f"{path}/{child_tag}[{i}]")
                for i, child in enumerate(elements, start=1)
            )

    attributes = {etree.QName(name).localname: value for name, value in element.attrib.items()}
    text, cdata = _split_content(element)
    return XmlNode(
        tag=tag,
        path=path,
        attributes=attributes or None,
        text=text,
        cdata=cdata,
        children=children,
    )


def _split_content(element: etree._Element) -> tuple[str | None, str | None]:
    """Separate an element's plain text from its CDATA sections.

    lxml merges CDATA into ``.text``; with ``strip_cdata=False`` the sections
    survive serialization, so leaf content is recovered from there. Text is
    kept as written; only whitespace-only text collapses to ``None``.
    """
    if len(element):
        parts = [element.text or ""] + [child.tail or "" for child in element]
        return _text_or_none("".join(parts)), None
    if element.text is None:
        return None, None

    raw = etree.tostring(element, encoding="unicode", with_tail=False)
    inner = raw[raw.index(">") + 1 : raw.rindex("</")]

    sections = _CDATA_RE.findall(inner)
    cdata = "".join(sections) if sections else None
    text = _text_or_none(html.unescape(_CDATA_RE.sub("", inner)))
    return text, cdata


def _text_or_none(text: str) -> str | None:
    return text if text.strip() else None


def _preview(xml: str | bytes, length: int) -> str:
    if isinstance(xml, bytes):
        return xml[:length].decode("utf-8", errors="replace")
    return xml[:length]


__all__ = ["XmlNode", "convert_xml"]
