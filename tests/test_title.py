"""Tests for the title heuristic."""

from __future__ import annotations

from page_reader.document import build_document
from page_reader.title import find_meta_title, refine_title, resolve_title


def _doc(head: str):
    return build_document(f"<html><head>{head}</head><body><p>x</p></body></html>")


def test_site_suffix_is_dropped():
    assert refine_title("Great Article | My Site") == "Great Article"


def test_short_refinement_keeps_original():
    assert refine_title("A | B") == "A | B"


def test_length_must_exceed_ten():
    # "Ten chars!" is exactly 10 characters
    assert refine_title("Ten chars! - Site") == "Ten chars! - Site"
    assert refine_title("Eleven char - Site") == "Eleven char"


def test_two_separators_are_ambiguous():
    assert refine_title("Breaking News Today | Section - Site") == "Breaking News Today | Section - Site"


def test_guillemet_and_dash_separators():
    assert refine_title("Something happened today « Blog") == "Something happened today"
    assert refine_title("Something happened today — Blog") == "Something happened today"


def test_title_without_separator_unchanged():
    assert refine_title("Plain title") == "Plain title"


def test_og_title_preferred_over_document_title():
    doc = _doc(
        '<title>Document Title | Site</title>'
        '<meta property="og:title" content="Open Graph Headline">'
    )
    assert find_meta_title(doc.soup) == "Open Graph Headline"
    assert resolve_title(doc) == "Open Graph Headline"


def test_twitter_title_used():
    doc = _doc('<meta name="twitter:title" content="Twitter Card Headline - Site">')
    assert resolve_title(doc) == "Twitter Card Headline"


def test_document_title_fallback_collapses_whitespace():
    doc = _doc("<title>\n  Long enough headline\n  | Site </title>")
    assert resolve_title(doc) == "Long enough headline"


def test_missing_title_is_empty():
    assert resolve_title(_doc("")) == ""


def test_empty_meta_title_falls_back_to_document_title():
    doc = _doc('<title>Harbour Walk Notes | Diary</title><meta property="og:title" content="">')
    assert find_meta_title(doc.soup) == ""
    assert resolve_title(doc) == "Harbour Walk Notes"
