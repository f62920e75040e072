"""
Unit tests for part tree search (parsing/matchers.py).
"""

import pytest

from mime_body.models.mime_part import MIMEPart
from mime_body.parsing.matchers import (
    TraversalOrder,
    breadth_match_all,
    breadth_match_first,
    depth_match_all,
    match_parts,
)


def leaf(name: str, content_type: str = "text/plain", disposition=None) -> MIMEPart:
    return MIMEPart(
        content_type=content_type,
        disposition=disposition,
        content=name.encode("utf-8"),
    )


@pytest.fixture
def tree() -> MIMEPart:
    """
    mixed
    |-- alternative
    |   |-- a1 (text/plain)
    |   `-- a2 (text/html)
    |-- b (text/plain)
    `-- related
        `-- c1 (text/plain)
    """
    alternative = MIMEPart(
        content_type="multipart/alternative",
        children=[leaf("a1"), leaf("a2", "text/html")],
    )
    related = MIMEPart(content_type="multipart/related", children=[leaf("c1")])
    return MIMEPart(
        content_type="multipart/mixed",
        children=[alternative, leaf("b"), related],
    )


def names(parts):
    return [part.content.decode("utf-8") for part in parts]


def is_text(part: MIMEPart) -> bool:
    return part.content_type == "text/plain"


class TestMatchParts:
    """Tests for match_parts() and its wrappers."""

    @pytest.mark.unit
    def test_breadth_first_order(self, tree):
        assert names(breadth_match_all(tree, is_text)) == ["b", "a1", "c1"]

    @pytest.mark.unit
    def test_depth_first_pre_order(self, tree):
        assert names(depth_match_all(tree, is_text)) == ["a1", "b", "c1"]

    @pytest.mark.unit
    def test_breadth_first_first_match(self, tree):
        match = breadth_match_first(tree, is_text)
        assert match is not None
        assert match.content == b"b"

    @pytest.mark.unit
    def test_depth_first_first_match(self, tree):
        matches = match_parts(tree, is_text, TraversalOrder.DEPTH, first_only=True)
        assert names(matches) == ["a1"]

    @pytest.mark.unit
    def test_root_is_visited(self, tree):
        matches = breadth_match_all(tree, lambda part: part.content_type.startswith("multipart/"))
        assert [part.content_type for part in matches] == [
            "multipart/mixed",
            "multipart/alternative",
            "multipart/related",
        ]

    @pytest.mark.unit
    def test_no_match(self, tree):
        assert breadth_match_first(tree, lambda part: part.content_type == "image/png") is None
        assert depth_match_all(tree, lambda part: False) == []

    @pytest.mark.unit
    def test_returns_tree_objects(self, tree):
        match = breadth_match_first(tree, lambda part: part.content_type == "text/html")
        assert match is tree.children[0].children[1]
