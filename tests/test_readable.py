"""Tests for the Readable orchestrator: caching, fallback retry and release."""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from page_reader.config import ExtractConfig
from page_reader.document import build_document
from page_reader.errors import ResourceReleasedError
from page_reader.readable import Readable, ReadableState

PAGE = """
<html>
<head><title>Quiet Mornings in the Valley | Daily Gazette</title></head>
<body>
  <script>var tracking = true;</script>
  <div class="share">Share this</div>
  <div id="story"><p>Original body paragraph.</p></div>
</body>
</html>
"""
COMPACT_PAGE = "<html><body><div id='story'><p>Original body paragraph.</p></div></body></html>"


def _candidate(markup):
    if markup is None:
        return None
    return BeautifulSoup(markup, "lxml").body.find(True, recursive=False)


class _StubScorer:
    """Returns canned candidates and records every call.

    Candidates take the shape readability emits: one <div> holding the kept
    blocks directly.
    """

    def __init__(self, *results, clear_body=False):
        self.results = list(results)
        self.calls = []
        self.bodies = []
        self.clear_body = clear_body

    def __call__(self, handle, relaxed):
        self.calls.append(relaxed)
        self.bodies.append(handle.body_markup())
        if self.clear_body:
            handle.body.clear()
        return _candidate(self.results.pop(0))


def _no_metadata(markup, url=None):
    return {}


def _readable(scorer, page=PAGE, **kwargs):
    kwargs.setdefault("summarizer", _no_metadata)
    return Readable(build_document(page, "https://example.com/story"), scorer=scorer, **kwargs)


def test_ready_after_construction():
    readable = _readable(_StubScorer())
    assert readable.state is ReadableState.READY
    assert readable.original_url == "https://example.com/story"


def test_content_is_cached():
    scorer = _StubScorer("<div><p>Story text</p></div>")
    readable = _readable(scorer)

    first = readable.content
    second = readable.content

    assert first == "<p>Story text</p>"
    assert second is first
    assert scorer.calls == [False]


def test_empty_primary_retries_relaxed_on_snapshot():
    scorer = _StubScorer(
        "<div><p>   </p></div>",
        "<div><p>Recovered text</p></div>",
        clear_body=True,
    )
    readable = _readable(scorer, page=COMPACT_PAGE)
    snapshot = readable.document.body_markup()

    content = readable.content

    assert content == "<p>Recovered text</p>"
    assert scorer.calls == [False, True]
    # the relaxed pass sees the body as it was before the primary pass
    assert scorer.bodies[1] == snapshot


def test_still_empty_resolves_to_false():
    scorer = _StubScorer("<div><p></p></div>", "<div><span> </span></div>")
    readable = _readable(scorer)

    assert readable.content is False
    assert readable.content is False
    assert scorer.calls == [False, True]


def test_no_candidate_at_all_is_false():
    readable = _readable(_StubScorer(None, None))
    assert readable.content is False
    assert readable.text_body == ""


def test_text_body_skips_empty_children():
    scorer = _StubScorer("<div><p>A</p><p></p><p>B</p></div>")
    readable = _readable(scorer)

    assert readable.text_body == "A\nB"
    assert readable.text_body == "A\nB"
    assert scorer.calls == [False]


def test_text_body_reuses_content_result():
    scorer = _StubScorer("<div><h2>Head</h2>\n<p>Body  text\n here</p></div>")
    readable = _readable(scorer)

    readable.content
    assert readable.text_body == "Head\nBody text here"
    assert scorer.calls == [False]


def test_title_is_refined_and_cached():
    readable = _readable(_StubScorer())
    assert readable.title == "Quiet Mornings in the Valley"
    readable.document.soup.title.string = "Changed"
    assert readable.title == "Quiet Mornings in the Valley"


def test_sanitizer_strips_builtin_and_configured_nodes():
    cfg = ExtractConfig(sanitizer_rules=[".share"])
    readable = _readable(_StubScorer(), cfg=cfg)

    html = readable.html
    assert "<script" not in html
    assert "Share this" not in html
    assert "Original body paragraph." in html


def test_sanitizer_accepts_predicate_rules():
    readable = _readable(
        _StubScorer(),
        sanitizer_rules=[lambda tag: tag.get("id") == "story"],
    )
    assert "Original body paragraph." not in readable.html


def test_html_reflects_live_document():
    readable = _readable(_StubScorer())
    assert "<hr/>" not in readable.html
    readable.document.body.append(readable.document.soup.new_tag("hr"))
    assert "<hr/>" in readable.html


def test_summarizer_sees_unsanitized_markup_and_fills_metadata():
    seen = {}

    def summarizer(markup, url=None):
        seen["markup"] = markup
        seen["url"] = url
        return {
            "title": "Meta Title",
            "author": "Jane Doe",
            "tags": [],
            "description": "",
            "pagetype": "article",
        }

    readable = _readable(_StubScorer(), summarizer=summarizer)

    assert "var tracking" in seen["markup"]
    assert seen["url"] == "https://example.com/story"
    assert readable.metadata.author == "Jane Doe"
    assert readable.metadata.title == "Meta Title"
    assert readable.metadata.description is None
    assert readable.metadata.tags == []
    assert readable.metadata.extra == {"pagetype": "article"}
    assert readable.title == "Quiet Mornings in the Valley"


def test_queries_after_close_fail():
    scorer = _StubScorer("<div><p>Story text</p></div>")
    readable = _readable(scorer)
    readable.content
    readable.title

    readable.close()
    readable.close()

    assert readable.state is ReadableState.CLOSED
    for name in ("content", "title", "text_body", "html", "document", "original_url"):
        with pytest.raises(ResourceReleasedError):
            getattr(readable, name)


def test_context_manager_closes():
    with _readable(_StubScorer()) as readable:
        assert not readable.closed
    assert readable.closed


def test_real_extraction_libraries():
    paragraphs = "".join(
        f"<p>The quick brown fox jumps over the lazy dog, paragraph {i}, "
        f"and then it keeps running through the long green field.</p>"
        for i in range(6)
    )
    page = (
        "<html><head><title>Foxes of the Northern Woods - Nature Blog</title></head>"
        "<body><nav><a href='/'>Home</a> <a href='/about'>About</a></nav>"
        f"<div class='article-body'>{paragraphs}</div>"
        "<footer>Copyright</footer></body></html>"
    )
    readable = Readable(build_document(page, "https://example.com/foxes"))

    assert readable.title == "Foxes of the Northern Woods"
    assert "quick brown fox" in readable.content
    assert "paragraph 5" in readable.text_body
    readable.close()


def test_text_body_includes_sibling_blocks():
    paragraphs = "".join(
        f"<p>Paragraph {i} describes the harbour at dawn, when the boats return "
        f"and the market stalls open along the quay.</p>"
        for i in range(5)
    )
    page = (
        "<html><head><title>Harbour Mornings</title></head><body>"
        f"<div id='main'><div class='content'>{paragraphs}</div>"
        "<p>A trailing sibling paragraph closes the story, noting that the last "
        "boat came in just before the rain started to fall.</p></div>"
        "</body></html>"
    )
    readable = Readable(build_document(page, "https://example.com/harbour"))

    assert "trailing sibling" in readable.content
    assert "Paragraph 0" in readable.text_body
    assert "Paragraph 4" in readable.text_body
    assert "trailing sibling" in readable.text_body
    readable.close()
