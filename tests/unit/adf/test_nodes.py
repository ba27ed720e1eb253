"""Unit tests for ADF node types and mark parsing."""

from dataclasses import FrozenInstanceError

import pytest

from src.jira_gateway.adf.nodes import (
    CodeBlock,
    Document,
    Em,
    Heading,
    Link,
    ListItem,
    OtherMark,
    Paragraph,
    Strong,
    Text,
    mark_from_dict,
)


class TestMarkFromDict:
    def test_strong(self):
        assert mark_from_dict({"type": "strong"}) == Strong()

    def test_em(self):
        assert mark_from_dict({"type": "em"}) == Em()

    def test_link_wire_shape(self):
        assert mark_from_dict({"type": "link", "attrs": {"href": "https://a.b"}}) == Link(
            "https://a.b"
        )

    def test_link_flat_href(self):
        assert mark_from_dict({"type": "link", "href": "https://a.b"}) == Link("https://a.b")

    def test_link_without_href(self):
        with pytest.raises(ValueError):
            mark_from_dict({"type": "link"})

    def test_instance_passthrough(self):
        mark = Link("https://a.b")

        assert mark_from_dict(mark) is mark

    def test_unrecognised_type_passed_through(self):
        mark = mark_from_dict({"type": "underline"})

        assert mark == OtherMark("underline")
        assert mark.to_dict() == {"type": "underline"}

    def test_unrecognised_type_keeps_attrs(self):
        descriptor = {"type": "textColor", "attrs": {"color": "#ff0000"}}

        assert mark_from_dict(descriptor).to_dict() == descriptor

    @pytest.mark.parametrize("descriptor", [{}, {"type": ""}, {"type": 5}, "strong", None])
    def test_invalid(self, descriptor):
        with pytest.raises(ValueError):
            mark_from_dict(descriptor)


class TestNodes:
    def test_text_requires_content(self):
        with pytest.raises(ValueError):
            Text("")

    def test_text_without_marks_omits_key(self):
        assert Text("a").to_dict() == {"type": "text", "text": "a"}

    def test_marks_stored_as_tuple(self):
        run = Text("a", [Strong()])

        assert run.marks == (Strong(),)

    def test_nodes_are_immutable(self):
        run = Text("a")

        with pytest.raises(FrozenInstanceError):
            run.text = "b"

    def test_structural_equality(self):
        assert Paragraph((Text("a"),)) == Paragraph([Text("a")])
        assert Document((Paragraph(),)) == Document([Paragraph()])

    def test_heading_rejects_bool_level(self):
        with pytest.raises(ValueError):
            Heading(True)

    def test_list_item_wraps_paragraph(self):
        item = ListItem(Paragraph((Text("x"),)))

        assert item.to_dict() == {
            "type": "listItem",
            "content": [{"type": "paragraph", "content": [{"type": "text", "text": "x"}]}],
        }

    def test_code_block_has_no_marks(self):
        wire = CodeBlock("x = 1", "python").to_dict()

        assert "marks" not in wire["content"][0]

    def test_document_envelope(self):
        assert Document().to_dict() == {"type": "doc", "version": 1, "content": []}

    def test_document_serializes_wire_dict_blocks(self):
        block = {"type": "paragraph", "content": [{"type": "text", "text": "raw"}]}

        wire = Document((block, Paragraph())).to_dict()

        assert wire["content"] == [block, {"type": "paragraph", "content": []}]
        assert wire["content"][0] is not block
