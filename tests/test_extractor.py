"""Tests for core/extractor.py — prioritised text extraction."""

from __future__ import annotations

import pytest

from core.errors import NoExtractableContentError
from core.extractor import extract_text


class TestExtractText:
    def test_article_region_wins(self):
        html = """
        <html><body>
          <nav><p>Menu</p></nav>
          <article><h1>Headline</h1><p>First para.</p><li>Point</li></article>
          <main><p>Main text</p></main>
          <p>Footer para</p>
        </body></html>
        """
        assert extract_text(html) == "Headline\nFirst para.\nPoint"

    def test_main_region_when_no_article(self):
        html = "<main><p>Alpha</p><ul><li>Beta</li></ul></main><p>Outside</p>"
        assert extract_text(html) == "Alpha\nBeta"

    def test_falls_back_to_all_paragraphs(self):
        html = "<div><p>One</p></div><section><p>Two</p></section>"
        assert extract_text(html) == "One\nTwo"

    def test_empty_article_falls_through(self):
        html = "<article><p>   </p></article><p>Real content</p>"
        assert extract_text(html) == "Real content"

    def test_article_ignores_other_tags(self):
        html = "<article><div>Not selected</div><h2>Sub</h2></article><p>para</p>"
        assert extract_text(html) == "Sub"

    def test_no_text_elements_raises(self):
        with pytest.raises(NoExtractableContentError):
            extract_text("<html><body><div>Only a div</div></body></html>")

    def test_blank_paragraphs_raise(self):
        with pytest.raises(NoExtractableContentError):
            extract_text("<p> </p><p>\n</p>")

    def test_empty_document_raises(self):
        with pytest.raises(NoExtractableContentError):
            extract_text("")
