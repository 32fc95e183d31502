"""
TipTap Document Walker

Traversal of the rich-text JSON trees submitted by the editor UI:
- Plain-text extraction (server-side "is this empty?" validation)
- First-image lookup (card thumbnails)
- Image storage-path collection (storage reconciliation)

Trees arrive as untrusted parsed JSON. A root that is not a mapping is
treated as an empty document; nothing here raises on malformed input.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Generator, Optional, TypedDict

TEXT_NODE = "text"
HARD_BREAK_NODE = "hardBreak"
IMAGE_NODE = "image"


class TiptapNode(TypedDict, total=False):
    type: str
    attrs: Optional[dict[str, Any]]
    text: str
    content: list["TiptapNode"]


@dataclass(frozen=True)
class ImageNodeAttrs:
    """Recognized attrs of an image node.

    ``file_path`` is the authoritative storage object; ``src`` is only a
    display URL and may point anywhere.
    """

    src: Optional[str] = None
    file_path: Optional[str] = None
    alt: Optional[str] = None

    def to_dict(self) -> dict[str, Optional[str]]:
        return {"src": self.src, "filePath": self.file_path, "alt": self.alt}


def _as_node(value: Any) -> Optional[Mapping]:
    return value if isinstance(value, Mapping) else None


def iter_nodes(doc: Any) -> Generator[Mapping, None, None]:
    """
    Yield every node of a document, depth-first pre-order.

    Parents come before their children; children are visited in list
    order. Non-mapping children are skipped.

    Args:
        doc: Parsed document tree (any value)

    Yields:
        Node mappings
    """
    root = _as_node(doc)
    if root is None:
        return

    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        children = node.get("content")
        if isinstance(children, list):
            stack.extend(
                child for child in reversed(children) if isinstance(child, Mapping)
            )


def _image_attrs(node: Mapping) -> Optional[Mapping]:
    if node.get("type") != IMAGE_NODE:
        return None
    return _as_node(node.get("attrs"))


def extract_plain_text_from_tiptap(doc: Any) -> str:
    """
    Extract plain text from a TipTap document.

    Only ``text`` leaves and ``hardBreak`` nodes contribute: text is
    concatenated without separators and each hard break adds one newline.

    Args:
        doc: Parsed document tree

    Returns:
        Extracted text ("" for malformed or childless roots)
    """
    parts: list[str] = []
    for node in iter_nodes(doc):
        node_type = node.get("type")
        if node_type == TEXT_NODE:
            text = node.get("text")
            if isinstance(text, str):
                parts.append(text)
        elif node_type == HARD_BREAK_NODE:
            parts.append("\n")
    return "".join(parts)


def find_first_image_attrs(doc: Any) -> Optional[ImageNodeAttrs]:
    """
    Return the attrs of the first image node in traversal order.

    Stops walking at the first match. Attr values that are not strings
    are reported as None.

    Args:
        doc: Parsed document tree

    Returns:
        ImageNodeAttrs, or None if the document has no image node
    """
    for node in iter_nodes(doc):
        attrs = _image_attrs(node)
        if attrs is None:
            continue
        src = attrs.get("src")
        file_path = attrs.get("filePath")
        alt = attrs.get("alt")
        return ImageNodeAttrs(
            src=src if isinstance(src, str) else None,
            file_path=file_path if isinstance(file_path, str) else None,
            alt=alt if isinstance(alt, str) else None,
        )
    return None


def collect_image_file_paths(doc: Any) -> set[str]:
    """
    Collect the storage paths referenced by image nodes.

    Walks the whole tree. A node contributes its ``attrs.filePath`` only
    when that is a string with non-whitespace content; ``src`` is never
    consulted.

    Args:
        doc: Parsed document tree

    Returns:
        Set of referenced object paths
    """
    file_paths: set[str] = set()
    for node in iter_nodes(doc):
        attrs = _image_attrs(node)
        if attrs is None:
            continue
        file_path = attrs.get("filePath")
        if isinstance(file_path, str) and file_path.strip():
            file_paths.add(file_path)
    return file_paths


def is_empty_document(doc: Any) -> bool:
    """True when the document has no visible text."""
    return not extract_plain_text_from_tiptap(doc).strip()


def empty_document() -> TiptapNode:
    """A fresh empty TipTap doc, used for new drafts."""
    return {"type": "doc", "content": []}
