"""
Rich-text document utilities.
"""

from cms.documents.tiptap import (
    ImageNodeAttrs,
    TiptapNode,
    collect_image_file_paths,
    empty_document,
    extract_plain_text_from_tiptap,
    find_first_image_attrs,
    is_empty_document,
    iter_nodes,
)

__all__ = [
    "ImageNodeAttrs",
    "TiptapNode",
    "iter_nodes",
    "extract_plain_text_from_tiptap",
    "find_first_image_attrs",
    "collect_image_file_paths",
    "is_empty_document",
    "empty_document",
]
