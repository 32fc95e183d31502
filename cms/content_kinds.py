"""
Content Kinds

The closed set of content types the CMS manages. Each kind owns a
top-level folder in object storage, an HTTP route segment and a table.
Adding a kind means extending every table below.
"""

from enum import Enum

from cms.exceptions import UnknownContentKindError


class ContentKind(str, Enum):
    NEWSLETTER = "newsletter"
    BLOG = "blog"
    CASE_STUDY = "caseStudy"

    @classmethod
    def parse(cls, value: "ContentKind | str") -> "ContentKind":
        """Resolve a kind from a member or its wire value.

        Raises:
            UnknownContentKindError: value is not a registered kind
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownContentKindError(value) from None

    @property
    def folder(self) -> str:
        return FOLDER_NAMES[self]

    @property
    def route(self) -> str:
        return ROUTE_SEGMENTS[self]

    @property
    def label(self) -> str:
        return LABELS[self]

    @property
    def table(self) -> str:
        return TABLE_NAMES[self]


FOLDER_NAMES: dict[ContentKind, str] = {
    ContentKind.NEWSLETTER: "newsletters",
    ContentKind.BLOG: "blogs",
    ContentKind.CASE_STUDY: "case-studies",
}

ROUTE_SEGMENTS: dict[ContentKind, str] = {
    ContentKind.NEWSLETTER: "newsletters",
    ContentKind.BLOG: "blogs",
    ContentKind.CASE_STUDY: "case-studies",
}

LABELS: dict[ContentKind, str] = {
    ContentKind.NEWSLETTER: "Newsletter",
    ContentKind.BLOG: "Blog",
    ContentKind.CASE_STUDY: "Case study",
}

TABLE_NAMES: dict[ContentKind, str] = {
    ContentKind.NEWSLETTER: "newsletters",
    ContentKind.BLOG: "blogs",
    ContentKind.CASE_STUDY: "case_studies",
}


def get_folder_prefix(kind: ContentKind | str, record_id: str) -> str:
    """Folder under which all of a record's images live: ``<folder>/<id>``."""
    return f"{ContentKind.parse(kind).folder}/{record_id}"
