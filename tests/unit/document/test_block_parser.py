"""Unit tests for document.block_parser module."""

import copy
import json

import pytest

from src.document.block_parser import BlockParser, block_from_spec, run_to_dict
from src.document.errors import DocumentParseError
from src.document.models import ListStyle, NodeKind, TextBlockSpec, TextRun
from tests.fixtures.sample_documents import SAMPLE_DOCUMENT_JSON


class TestBlockParser:
    """Test suite for BlockParser class."""

    @pytest.fixture
    def parser(self):
        """Create parser instance."""
        return BlockParser()

    def test_parse_document_structure(self, parser):
        root = parser.parse_document(SAMPLE_DOCUMENT_JSON)

        assert root.id == "page-1"
        assert root.kind is NodeKind.CONTAINER
        assert [child.id for child in root.subblocks] == ["intro", "link-1", "group"]

    def test_parse_link_block(self, parser):
        root = parser.parse_document(SAMPLE_DOCUMENT_JSON)
        link = root.subblocks[1]

        assert link.kind is NodeKind.LINK_PLACEHOLDER
        assert link.link_url == "https://x.atlassian.net/browse/PROJ-7"
        assert link.indentation_level == 1
        assert link.list_style is ListStyle.BULLET

    def test_parse_text_content(self, parser):
        root = parser.parse_document(SAMPLE_DOCUMENT_JSON)
        group = root.subblocks[2]

        assert group.kind is NodeKind.CONTAINER
        assert group.content == [TextRun(text="Other links", is_bold=True)]
        assert group.subblocks[0].id == "link-2"

    def test_leaf_text_block_is_other(self, parser):
        root = parser.parse_document(SAMPLE_DOCUMENT_JSON)

        assert root.subblocks[0].kind is NodeKind.OTHER
        assert root.subblocks[0].subblocks is None

    def test_list_style_as_string(self, parser):
        root = parser.parse_document({
            "id": "p", "type": "page",
            "subblocks": [{"id": "a", "type": "textBlock", "listStyle": "numbered"}],
        })
        assert root.subblocks[0].list_style is ListStyle.NUMBERED

    def test_unknown_list_style_ignored(self, parser):
        root = parser.parse_document({
            "id": "p", "type": "page",
            "subblocks": [{"id": "a", "type": "textBlock", "listStyle": {"type": "sparkles"}}],
        })
        assert root.subblocks[0].list_style is None

    def test_string_content(self, parser):
        root = parser.parse_document({"id": "p", "type": "textBlock", "content": "hello"})
        assert root.get_text_content() == "hello"

    @pytest.mark.parametrize("content", [5, {"text": "hi"}, True, 1.5])
    def test_content_of_wrong_type(self, parser, content):
        with pytest.raises(DocumentParseError, match="'content' must be a string or a list") as exc_info:
            parser.parse_document({"id": "p", "type": "textBlock", "content": content})

        assert exc_info.value.block_id == "p"

    def test_content_of_wrong_type_from_string(self, parser):
        with pytest.raises(DocumentParseError):
            parser.parse_from_string('{"id": "p", "type": "textBlock", "content": 5}')

    def test_deep_document_does_not_recurse(self, parser):
        """Parsing a document deeper than the recursion limit succeeds."""
        depth = 5000
        data = {"id": "leaf", "type": "textBlock"}
        for level in range(depth):
            data = {"id": f"n{level}", "type": "textBlock", "subblocks": [data]}

        root = parser.parse_document(data)

        node, levels = root, 0
        while node.subblocks:
            node = node.subblocks[0]
            levels += 1
        assert levels == depth
        assert node.id == "leaf"

    def test_parse_from_string(self, parser):
        root = parser.parse_from_string(json.dumps(SAMPLE_DOCUMENT_JSON))
        assert root.id == "page-1"

    def test_invalid_json(self, parser):
        with pytest.raises(DocumentParseError, match="Invalid JSON"):
            parser.parse_from_string("{not json")

    def test_document_not_an_object(self, parser):
        with pytest.raises(DocumentParseError):
            parser.parse_document(["page"])

    def test_missing_id(self, parser):
        with pytest.raises(DocumentParseError, match="missing a string 'id'"):
            parser.parse_document({"type": "page"})

    def test_duplicate_id(self, parser):
        with pytest.raises(DocumentParseError) as exc_info:
            parser.parse_document({
                "id": "p", "type": "page",
                "subblocks": [{"id": "a", "type": "textBlock"}, {"id": "a", "type": "textBlock"}],
            })
        assert exc_info.value.block_id == "a"

    def test_negative_indentation(self, parser):
        with pytest.raises(DocumentParseError) as exc_info:
            parser.parse_document({"id": "p", "type": "page", "indentationLevel": -1})
        assert exc_info.value.block_id == "p"

    def test_subblocks_not_a_list(self, parser):
        with pytest.raises(DocumentParseError):
            parser.parse_document({"id": "p", "type": "page", "subblocks": {"id": "a"}})

    def test_to_dict_keeps_document(self, parser):
        """Serializing a parsed document gives back the same structure."""
        original = copy.deepcopy(SAMPLE_DOCUMENT_JSON)

        data = parser.to_dict(parser.parse_document(original))

        assert [b["id"] for b in data["subblocks"]] == ["intro", "link-1", "group"]
        assert data["subblocks"][1]["originalUrl"] == "https://x.atlassian.net/browse/PROJ-7"
        assert data["subblocks"][1]["listStyle"] == {"type": "bullet"}
        assert data["subblocks"][2]["subblocks"][0]["url"] == "https://example.com/docs"
        assert data["subblocks"][2]["content"] == [{"text": "Other links", "isBold": True}]
        assert "subblocks" not in data["subblocks"][0]


class TestRunToDict:
    """Test cases for run_to_dict."""

    def test_plain_run(self):
        assert run_to_dict(TextRun(text=" - ")) == {"text": " - "}

    def test_formatted_run(self):
        run = TextRun(text="PROJ-7", is_bold=True, highlight_color="cyan", link_url="https://x/browse/PROJ-7")
        assert run_to_dict(run) == {
            "text": "PROJ-7",
            "isBold": True,
            "highlightColor": "cyan",
            "link": {"type": "url", "url": "https://x/browse/PROJ-7"},
        }


class TestBlockFromSpec:
    """Test cases for block_from_spec."""

    def test_materializes_text_block(self):
        spec = TextBlockSpec(
            content=(TextRun("Assignee: "), TextRun("Ann", is_bold=True)),
            indentation_level=2,
            list_style=ListStyle.TODO,
        )

        node = block_from_spec("NEW-1", spec)

        assert node.id == "NEW-1"
        assert node.type == "textBlock"
        assert node.kind is NodeKind.OTHER
        assert node.indentation_level == 2
        assert node.list_style is ListStyle.TODO
        assert node.get_text_content() == "Assignee: Ann"
