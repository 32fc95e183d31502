"""
Tests for content kind lookups.
"""

import pytest

from cms.content_kinds import FOLDER_NAMES, ContentKind, get_folder_prefix
from cms.exceptions import UnknownContentKindError


class TestFolderMapping:
    def test_fixed_folder_names(self):
        assert {k.value: v for k, v in FOLDER_NAMES.items()} == {
            "newsletter": "newsletters",
            "blog": "blogs",
            "caseStudy": "case-studies",
        }

    def test_every_kind_has_a_folder(self):
        assert set(FOLDER_NAMES) == set(ContentKind)

    @pytest.mark.parametrize(
        "kind,expected",
        [
            (ContentKind.NEWSLETTER, "newsletters/abc"),
            ("blog", "blogs/abc"),
            ("caseStudy", "case-studies/abc"),
        ],
    )
    def test_folder_prefix(self, kind, expected):
        assert get_folder_prefix(kind, "abc") == expected


class TestParse:
    def test_parse_member_and_value(self):
        assert ContentKind.parse(ContentKind.BLOG) is ContentKind.BLOG
        assert ContentKind.parse("caseStudy") is ContentKind.CASE_STUDY

    @pytest.mark.parametrize("value", ["blogs", "case-study", "Blog", ""])
    def test_unknown_kind_raises(self, value):
        with pytest.raises(UnknownContentKindError) as exc_info:
            ContentKind.parse(value)
        assert exc_info.value.kind == value

    def test_folder_prefix_rejects_unknown_kind(self):
        with pytest.raises(UnknownContentKindError):
            get_folder_prefix("podcast", "1")
