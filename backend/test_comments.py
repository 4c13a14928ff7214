"""
Testes dos extratores de comentarios e de trechos comentados (intervalos sobrepostos).
"""

import pytest

from docx_annotations.analysis.docx_comments import (
    CommentedRangeExtractor,
    CommentExtractor,
    extract_commented_ranges,
    extract_comments,
)
from docx_annotations.analysis.ranges import RangeOverlapTracker
from docx_annotations.analysis.xml_events import EndOfStream, EndTag, StartTag, Text, qn
from docx_annotations.core.errors import MalformedAttributeError
from docx_annotations.models.pydantic_models import AnomalyKind, Comment, CommentedRange


def _run(text: str) -> str:
    return f"<w:r><w:t>{text}</w:t></w:r>"


def _start(range_id) -> str:
    return f'<w:commentRangeStart w:id="{range_id}"/>'


def _end(range_id) -> str:
    return f'<w:commentRangeEnd w:id="{range_id}"/>'


class TestCommentExtractor:
    def test_comments_in_close_order_with_source_ids(self, w_xml):
        xml = w_xml(
            '<w:comment w:id="5"><w:p>' + _run("primeiro") + '</w:p></w:comment>'
            '<w:comment w:id="0"><w:p>' + _run("segundo") + '</w:p></w:comment>',
            root="comments",
        )
        assert extract_comments(xml) == [Comment(id=5, text="primeiro"), Comment(id=0, text="segundo")]

    def test_text_leaves_joined_with_newlines(self, w_xml):
        xml = w_xml(
            '<w:comment w:id="1"><w:p>' + _run("linha 1") + '</w:p><w:p>' + _run("linha 2") + '</w:p></w:comment>',
            root="comments",
        )
        assert extract_comments(xml)[0].text == "linha 1\nlinha 2"

    def test_pretty_printed_whitespace_is_not_captured(self, w_xml):
        xml = w_xml(
            '\n  <w:comment w:id="2">\n    <w:p>\n      <w:r><w:t>abc</w:t></w:r>\n'
            '      <w:r><w:t></w:t></w:r>\n    </w:p>\n  </w:comment>\n',
            root="comments",
        )
        assert extract_comments(xml) == [Comment(id=2, text="abc")]

    def test_empty_comment_element(self, w_xml):
        xml = w_xml('<w:comment w:id="3"/>', root="comments")
        assert extract_comments(xml) == [Comment(id=3, text="")]

    def test_comment_without_id_fails(self, w_xml):
        xml = w_xml('<w:comment w:author="x"><w:p>' + _run("a") + '</w:p></w:comment>', root="comments")
        with pytest.raises(MalformedAttributeError):
            extract_comments(xml)

    def test_comment_with_non_numeric_id_fails(self, w_xml):
        xml = w_xml('<w:comment w:id="abc"/>', root="comments")
        with pytest.raises(MalformedAttributeError):
            extract_comments(xml)

    def test_no_anomalies_for_well_formed_part(self, w_xml):
        extractor = CommentExtractor("word/comments.xml").process(
            w_xml('<w:comment w:id="1"><w:p>' + _run("ok") + '</w:p></w:comment>', root="comments")
        )
        assert extractor.anomalies == []

    def test_rerun_yields_identical_output(self, w_xml):
        xml = w_xml('<w:comment w:id="9"><w:p>' + _run("x") + '</w:p></w:comment>', root="comments")
        assert extract_comments(xml) == extract_comments(xml)

    def test_comment_left_open_at_end_of_stream_is_reported(self):
        events = [
            StartTag(qn("comment"), {qn("id"): "1"}),
            StartTag(qn("t")), Text("completo"), EndTag(qn("t")),
            EndTag(qn("comment")),
            StartTag(qn("comment"), {qn("id"): "2"}),
            StartTag(qn("t")), Text("parcial"), EndTag(qn("t")),
            EndOfStream(),
        ]
        extractor = CommentExtractor("word/comments.xml").consume(events)

        assert extractor.get_records() == [Comment(id=1, text="completo")]
        assert [a.kind for a in extractor.anomalies] == [AnomalyKind.UNCLOSED_COMMENT]
        assert "parcial" in extractor.anomalies[0].message

    def test_comment_end_without_open_is_reported(self):
        extractor = CommentExtractor().consume([EndTag(qn("comment")), EndOfStream()])

        assert extractor.get_records() == []
        assert [a.kind for a in extractor.anomalies] == [AnomalyKind.UNBALANCED_RANGE]

    def test_process_starts_from_a_clean_state(self, w_xml):
        extractor = CommentExtractor()
        extractor.process(w_xml('<w:comment w:id="1"><w:p>' + _run("a") + '</w:p></w:comment>', root="comments"))
        extractor.process(w_xml('<w:comment w:id="2"><w:p>' + _run("b") + '</w:p></w:comment>', root="comments"))

        assert extractor.get_records() == [Comment(id=2, text="b")]
        assert extractor.anomalies == []


class TestRangeOverlapTracker:
    def test_pending_text_goes_to_every_open_range(self):
        tracker = RangeOverlapTracker()
        tracker.open(1)
        tracker.add_text("foo")
        tracker.open(2)
        tracker.add_text("bar")
        assert tracker.close(1) == "foobar"
        tracker.add_text("baz")
        assert tracker.close(2) == "barbaz"
        assert not tracker.has_open

    def test_close_unknown_range(self):
        tracker = RangeOverlapTracker()
        tracker.add_text("solto")
        assert tracker.close(3) is None
        assert tracker.pending_text == []


class TestCommentedRangeExtractor:
    def test_single_range(self, w_xml):
        xml = w_xml('<w:body><w:p>' + _start(7) + _run("hello") + _end(7) + '</w:p></w:body>')
        assert extract_commented_ranges(xml) == [CommentedRange(id=7, text="hello")]

    def test_overlapping_ranges_share_text(self, w_xml):
        xml = w_xml(
            '<w:body><w:p>'
            + _start(1) + _run("foo") + _start(2) + _run("bar") + _end(1) + _run("baz") + _end(2)
            + '</w:p></w:body>'
        )
        assert extract_commented_ranges(xml) == [
            CommentedRange(id=1, text="foobar"),
            CommentedRange(id=2, text="barbaz"),
        ]

    def test_nested_ranges_come_out_in_close_order(self, w_xml):
        xml = w_xml(
            '<w:body><w:p>'
            + _start(1) + _run("x") + _start(2) + _run("y") + _end(2) + _run("z") + _end(1)
            + '</w:p></w:body>'
        )
        assert extract_commented_ranges(xml) == [
            CommentedRange(id=2, text="y"),
            CommentedRange(id=1, text="xyz"),
        ]

    def test_range_spanning_paragraphs(self, w_xml):
        xml = w_xml(
            '<w:body><w:p>' + _run("antes ") + _start(3) + _run("fim do p1")
            + '</w:p><w:p>' + _run(" inicio do p2") + _end(3) + _run(" depois") + '</w:p></w:body>'
        )
        assert extract_commented_ranges(xml) == [CommentedRange(id=3, text="fim do p1 inicio do p2")]

    def test_reopened_id_replaces_previous_buffer(self, w_xml):
        xml = w_xml('<w:body><w:p>' + _start(1) + _run("a") + _start(1) + _run("b") + _end(1) + '</w:p></w:body>')
        assert extract_commented_ranges(xml) == [CommentedRange(id=1, text="b")]

    def test_close_without_open_is_reported(self, w_xml):
        xml = w_xml('<w:body><w:p>' + _run("a") + _end(4) + _start(5) + _run("b") + _end(5) + '</w:p></w:body>')
        extractor = CommentedRangeExtractor("word/document.xml").process(xml)

        assert extractor.get_records() == [CommentedRange(id=5, text="b")]
        assert [a.kind for a in extractor.anomalies] == [AnomalyKind.UNBALANCED_RANGE]
        assert extractor.anomalies[0].part == "word/document.xml"

    def test_ranges_left_open_are_reported(self, w_xml):
        xml = w_xml('<w:body><w:p>' + _start(1) + _start(2) + _run("sem fim") + '</w:p></w:body>')
        extractor = CommentedRangeExtractor().process(xml)

        assert extractor.get_records() == []
        kinds = [a.kind for a in extractor.anomalies]
        assert kinds == [AnomalyKind.TRAILING_TEXT, AnomalyKind.UNBALANCED_RANGE]
        assert "2 comentarios" in extractor.anomalies[1].message

    def test_range_marker_without_id_fails(self, w_xml):
        xml = w_xml('<w:body><w:p><w:commentRangeStart/></w:p></w:body>')
        with pytest.raises(MalformedAttributeError):
            extract_commented_ranges(xml)

    def test_rerun_yields_identical_output(self, w_xml):
        xml = w_xml('<w:body><w:p>' + _start(1) + _run("foo") + _start(2) + _run("bar") + _end(2) + _end(1) + '</w:p></w:body>')
        assert extract_commented_ranges(xml) == extract_commented_ranges(xml)
