"""Unit tests for the four extraction back-ends."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

from readability.readability import Unparseable

from articlelab import settings
from articlelab.extractors.backends import (
    extract_defuddle,
    extract_postlight,
    extract_readability,
    extract_simple,
)

# ---------------------------------------------------------------------------
# simple
# ---------------------------------------------------------------------------

class TestSimpleBackend:
    def test_paragraphs_without_article(self, minimal_html):
        raw = extract_simple(minimal_html)
        assert raw.content == "<p>A</p><p>B</p>"
        assert raw.text_content == "A\nB"
        assert raw.excerpt == "A\nB"
        assert raw.title == "Hi"
        assert raw.byline == ""

    def test_article_inner_markup(self, wrapped_html):
        raw = extract_simple(wrapped_html)
        assert raw.content == "<p>A</p>"
        assert raw.text_content == "A"
        assert "outside" not in raw.content

    def test_excerpt_truncated(self):
        body = "x" * 500
        raw = extract_simple(f"<html><body><p>{body}</p></body></html>")
        assert len(raw.excerpt) == settings.EXCERPT_LENGTH
        assert raw.text_content == body

    def test_title_whitespace_collapsed(self):
        raw = extract_simple("<html><head><title>\n  Two   words \n</title></head><body></body></html>")
        assert raw.title == "Two words"

    def test_no_paragraphs(self):
        raw = extract_simple("<html><body><div>nothing here</div></body></html>")
        assert raw.content == ""
        assert raw.text_content == ""
        assert raw.title == ""

    def test_does_not_set_dir(self, rtl_html):
        assert extract_simple(rtl_html).dir is None


# ---------------------------------------------------------------------------
# readability
# ---------------------------------------------------------------------------

class TestReadabilityBackend:
    def test_real_article(self, article_html):
        raw = extract_readability(article_html)
        assert raw.content
        assert "wild yeast" in raw.text_content
        assert raw.title == "How Sourdough Starters Work"

    def test_byline_and_excerpt_from_meta(self, article_html):
        raw = extract_readability(article_html)
        assert raw.byline == "Jane Smith"
        assert raw.excerpt.startswith("A short guide to the wild yeast")

    def test_excerpt_falls_back_to_first_paragraph(self):
        with patch("articlelab.extractors.backends.Document") as mock_doc:
            mock_doc.return_value.summary.return_value = "<div><p> First para. </p><p>Second.</p></div>"
            mock_doc.return_value.short_title.return_value = "T"
            raw = extract_readability("<html><body><p>First para.</p></body></html>")
        assert raw.excerpt == "First para."
        assert raw.byline is None

    def test_no_title_sentinel_cleared(self):
        with patch("articlelab.extractors.backends.Document") as mock_doc:
            mock_doc.return_value.summary.return_value = "<div><p>Text</p></div>"
            mock_doc.return_value.short_title.return_value = settings.READABILITY_NO_TITLE
            raw = extract_readability("<p>Text</p>")
        assert raw.title == ""

    def test_unparseable_yields_empty_article(self):
        with patch("articlelab.extractors.backends.Document") as mock_doc:
            mock_doc.return_value.summary.side_effect = Unparseable("Document is empty")
            raw = extract_readability("<html></html>")
        assert raw.content == ""
        assert raw.text_content == ""
        assert raw.title == ""
        assert raw.dir is None

    def test_wrapper_body_becomes_div(self):
        with patch("articlelab.extractors.backends.Document") as mock_doc:
            mock_doc.return_value.summary.return_value = (
                '<div><body id="readabilityBody"><p>Text</p></body></div>'
            )
            mock_doc.return_value.short_title.return_value = "T"
            raw = extract_readability("<p>Text</p>")
        assert raw.content == '<div><div id="readabilityBody"><p>Text</p></div></div>'
        assert raw.text_content == "Text"

    def test_short_page_has_no_body_tag(self, minimal_html):
        raw = extract_readability(minimal_html)
        assert "<body" not in raw.content
        assert "<p>A</p>" in raw.content

    def test_dir_from_closest_ancestor(self):
        html = (
            '<html dir="ltr"><body><section dir="rtl"><div>'
            "<p>First para.</p></div></section></body></html>"
        )
        with patch("articlelab.extractors.backends.Document") as mock_doc:
            mock_doc.return_value.summary.return_value = (
                '<body id="readabilityBody"><p>First para.</p></body>'
            )
            mock_doc.return_value.short_title.return_value = "T"
            raw = extract_readability(html)
        assert raw.dir == "rtl"

    def test_dir_reaches_root_element(self, rtl_html):
        with patch("articlelab.extractors.backends.Document") as mock_doc:
            mock_doc.return_value.summary.return_value = "<div><p>نص عربي قصير</p></div>"
            mock_doc.return_value.short_title.return_value = "T"
            raw = extract_readability(rtl_html)
        assert raw.dir == "RTL"

    def test_dir_unset_without_attribute(self, minimal_html):
        assert extract_readability(minimal_html).dir is None

    def test_article_without_text_yields_empty_article(self):
        with patch("articlelab.extractors.backends.Document") as mock_doc:
            mock_doc.return_value.summary.return_value = "<div> </div>"
            mock_doc.return_value.short_title.return_value = "Title"
            raw = extract_readability("<html><head><title>Title</title></head></html>")
        assert raw.content == ""
        assert raw.title == ""


# ---------------------------------------------------------------------------
# postlight
# ---------------------------------------------------------------------------

def _fake_article(**attrs) -> MagicMock:
    article = MagicMock()
    article.article_html = attrs.get("article_html", "<div><p>Hello <b>world</b></p></div>")
    article.title = attrs.get("title", "Headline")
    article.authors = attrs.get("authors", ["Ann", "Bo"])
    article.meta_description = attrs.get("meta_description", "")
    article.text = "IGNORED TEXT"
    return article


class TestPostlightBackend:
    def test_passes_html_not_url(self):
        html = "<html><body><p>Hello world</p></body></html>"
        with patch("articlelab.extractors.backends.Article") as mock_cls:
            mock_cls.return_value = _fake_article()
            extract_postlight(html)
        mock_cls.assert_called_once_with(
            settings.PLACEHOLDER_URL, keep_article_html=True, fetch_images=False,
        )
        mock_cls.return_value.download.assert_called_once_with(input_html=html)
        mock_cls.return_value.parse.assert_called_once_with()

    def test_field_mapping(self):
        with patch("articlelab.extractors.backends.Article") as mock_cls:
            mock_cls.return_value = _fake_article(meta_description="Summary")
            raw = extract_postlight("<p>x</p>")
        assert raw.content == "<div><p>Hello <b>world</b></p></div>"
        assert raw.title == "Headline"
        assert raw.byline == "Ann, Bo"
        assert raw.excerpt == "Summary"

    def test_text_rederived_from_content(self):
        with patch("articlelab.extractors.backends.Article") as mock_cls:
            mock_cls.return_value = _fake_article()
            raw = extract_postlight("<p>x</p>")
        assert raw.text_content == "Hello world"
        assert "IGNORED" not in raw.text_content

    def test_excerpt_falls_back_to_text(self):
        with patch("articlelab.extractors.backends.Article") as mock_cls:
            mock_cls.return_value = _fake_article(meta_description="")
            raw = extract_postlight("<p>x</p>")
        assert raw.excerpt == "Hello world"

    def test_missing_article_html_falls_back_to_paragraphs(self):
        with patch("articlelab.extractors.backends.Article") as mock_cls:
            mock_cls.return_value = _fake_article(article_html=None, authors=[])
            raw = extract_postlight("<p>x</p>")
        assert raw.content == "<p>x</p>"
        assert raw.text_content == "x"
        assert raw.excerpt == "x"
        assert raw.byline == ""

    def test_empty_article_html_falls_back_to_body(self):
        with patch("articlelab.extractors.backends.Article") as mock_cls:
            mock_cls.return_value = _fake_article(article_html="<div> </div>")
            raw = extract_postlight("<html><body><div>Only a <i>div</i></div></body></html>")
        assert raw.content == "<div>Only a <i>div</i></div>"
        assert raw.text_content == "Only a div"

    def test_page_without_text_stays_empty(self):
        with patch("articlelab.extractors.backends.Article") as mock_cls:
            mock_cls.return_value = _fake_article(article_html="")
            raw = extract_postlight("<html><body><img src='a.png'></body></html>")
        assert raw.content == ""
        assert raw.text_content == ""

    def test_short_page(self, minimal_html):
        raw = extract_postlight(minimal_html)
        assert "<p>A</p>" in raw.content
        assert "A" in raw.text_content and "B" in raw.text_content

    def test_blank_input_skips_library(self):
        with patch("articlelab.extractors.backends.Article") as mock_cls:
            raw = extract_postlight("   ")
        mock_cls.assert_not_called()
        assert raw.content == ""

    def test_real_article(self, article_html):
        raw = extract_postlight(article_html)
        assert raw.content
        assert "sourdough" in raw.text_content.lower()


# ---------------------------------------------------------------------------
# defuddle
# ---------------------------------------------------------------------------

class TestDefuddleBackend:
    def test_field_mapping(self):
        meta = SimpleNamespace(title="T", author="Au", description="D", text="ignored")
        with patch("articlelab.extractors.backends.trafilatura") as mock_traf:
            mock_traf.extract.return_value = "<html><body><p>Body text</p></body></html>"
            mock_traf.extract_metadata.return_value = meta
            raw = extract_defuddle("<p>Body text</p>")
        assert raw.content == "<p>Body text</p>"
        assert raw.text_content == "Body text"
        assert raw.title == "T"
        assert raw.byline == "Au"
        assert raw.excerpt == "D"

    def test_markdown_output_disabled(self):
        with patch("articlelab.extractors.backends.trafilatura") as mock_traf:
            mock_traf.extract.return_value = None
            mock_traf.extract_metadata.return_value = None
            extract_defuddle("<p>x</p>")
        _, kwargs = mock_traf.extract.call_args
        assert kwargs["output_format"] == "html"

    def test_nothing_extracted(self):
        with patch("articlelab.extractors.backends.trafilatura") as mock_traf:
            mock_traf.extract.return_value = None
            mock_traf.extract_metadata.return_value = None
            raw = extract_defuddle("<p>x</p>")
        assert raw.content == ""
        assert raw.text_content == ""
        assert raw.title is None

    def test_real_article(self, article_html):
        raw = extract_defuddle(article_html)
        assert raw.content
        assert "<html" not in raw.content
        assert "sourdough" in raw.text_content.lower()
