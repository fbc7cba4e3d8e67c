"""Parse OPML files into a tree of outline nodes."""

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field


class OpmlError(Exception):
    """Raised when a file cannot be read as an OPML document."""


@dataclass(frozen=True)
class OutlineNode:
    """One <outline> entry: a feed, a folder of outlines, or both."""

    text: str = ""
    type: str = ""
    xml_url: str = ""
    html_url: str = ""
    children: tuple = field(default_factory=tuple)

    @property
    def is_feed(self):
        return self.type == "rss"


@dataclass(frozen=True)
class OpmlDocument:
    title: str = ""
    outlines: tuple = field(default_factory=tuple)


def _local_name(tag):
    """Strip any ``{namespace}`` prefix from an element tag."""
    return tag.rpartition("}")[2]


def _build_nodes(elements):
    """Convert <outline> elements and everything nested in them to OutlineNodes.

    Nesting depth is unbounded, so the tree is built from an explicit stack:
    elements are listed parents-first, then converted in reverse so every
    child node exists before its parent is built.

    Args:
        elements: Sibling <outline> elements.

    Returns:
        Tuple of OutlineNode in document order.
    """
    ordered = []
    stack = list(elements)
    while stack:
        element = stack.pop()
        ordered.append(element)
        stack.extend(element.findall("{*}outline"))

    built = {}
    for element in reversed(ordered):
        built[id(element)] = OutlineNode(
            text=element.get("text") or element.get("title", ""),
            type=element.get("type", ""),
            xml_url=element.get("xmlUrl", ""),
            html_url=element.get("htmlUrl", ""),
            children=tuple(built[id(child)] for child in element.findall("{*}outline")),
        )
    return tuple(built[id(element)] for element in elements)


def parse_opml_string(data):
    """Parse OPML content held in memory.

    Elements are matched by local name, so namespaced documents such as
    ``<opml xmlns="http://opml.org/spec2">`` are accepted.

    Args:
        data: OPML document as str or bytes.

    Returns:
        OpmlDocument with the head title and the top-level outlines.

    Raises:
        OpmlError: If the XML is malformed or the root is not <opml>.
    """
    try:
        root = ET.fromstring(data)
    except ET.ParseError as exc:
        raise OpmlError(f"malformed XML: {exc}") from exc

    if _local_name(root.tag) != "opml":
        raise OpmlError(f"expected <opml> root element, found <{root.tag}>")

    title = root.findtext("{*}head/{*}title", default="") or ""
    body = root.find("{*}body")
    if body is None:
        return OpmlDocument(title=title.strip())

    return OpmlDocument(title=title.strip(), outlines=_build_nodes(body.findall("{*}outline")))


def parse_opml(path):
    """Parse an OPML file into an OpmlDocument.

    Args:
        path: Path to the OPML file.

    Returns:
        OpmlDocument whose outlines keep the nesting of the file.

    Raises:
        OSError: If the file cannot be read.
        OpmlError: If the contents are not an OPML document.
    """
    with open(path, "rb") as fh:
        data = fh.read()
    return parse_opml_string(data)


def iter_feeds(nodes, path=()):
    """Yield (path, node) for every feed-typed node, depth first.

    ``path`` is the tuple of outline texts from the top level down to and
    including the node itself. Traversal uses an explicit stack, so any
    nesting depth is handled.
    """
    stack = [(path, node) for node in reversed(nodes)]
    while stack:
        parent_path, node = stack.pop()
        node_path = parent_path + (node.text,)
        if node.is_feed:
            yield node_path, node
        stack.extend((node_path, child) for child in reversed(node.children))
