"""Tests for content discovery and page metadata checks."""

from datetime import date
from pathlib import Path

import pytest

from quantamental.errors import FrontMatterError
from quantamental.site.content import ContentValidator, discover_content, load_page
from quantamental.site.models import ContentPage
from quantamental.site.validation import ERROR, WARNING

IGNORE = ["\\.Rmd$", "\\.Rmarkdown$", "_cache$", "\\.knit\\.md$", "\\.utf8\\.md$"]


def _page(relative: str, section: str = "blog", **metadata) -> ContentPage:
    return ContentPage(path=Path(relative), metadata=metadata, body="", section=section)


class TestDiscoverContent:
    """Test which files count as content"""

    def test_ignore_patterns(self, tmp_path, write_file):
        write_file("content/blog/post/index.md", "")
        write_file("content/blog/post/index.Rmd", "")
        write_file("content/blog/post/index.knit.md", "")
        write_file("content/blog/post/index_cache/chunk.md", "")
        write_file("content/blog/post/figure.png", "")
        write_file("content/page.html", "")

        found = discover_content(tmp_path / "content", IGNORE)
        relative = [p.relative_to(tmp_path / "content").as_posix() for p in found]
        assert relative == ["blog/post/index.md", "page.html"]

    def test_missing_directory(self, tmp_path):
        assert discover_content(tmp_path / "content") == []


class TestLoadPage:
    """Test reading a page from disk"""

    def test_section_from_path(self, tmp_path, write_file):
        path = write_file("content/blog/post/index.md", "---\ntitle: Post\n---\nBody\n")
        page = load_page(path, tmp_path / "content")

        assert page.section == "blog"
        assert page.title == "Post"
        assert page.body == "Body\n"

    def test_top_level_page_has_no_section(self, tmp_path, write_file):
        path = write_file("content/_index.md", "---\ntitle: Home\n---\n")
        page = load_page(path, tmp_path / "content")
        assert page.section == ""
        assert page.is_section_index

    def test_bad_header(self, write_file):
        path = write_file("content/post.md", "---\ntitle: [\n---\n")
        with pytest.raises(FrontMatterError):
            load_page(path)


class TestContentValidator:
    """Test per-page and cross-page metadata rules"""

    def setup_method(self):
        self.validator = ContentValidator(taxonomies=["categories", "tags", "series"])

    def test_complete_post(self):
        page = _page(
            "blog/post/index.md",
            title="Post",
            date=date(2021, 6, 14),
            draft=False,
            tags=["momentum"],
            excerpt="Short.",
        )
        assert self.validator.validate_page(page) == []

    def test_missing_required_fields(self):
        issues = self.validator.validate_page(_page("blog/post/index.md", title=" "))
        assert [i.message for i in issues] == [
            "Missing required field 'title'",
            "Missing required field 'date'",
        ]

    def test_section_index_only_needs_title(self):
        assert self.validator.validate_page(_page("blog/_index.md", title="Blog")) == []

    def test_string_date_accepted(self):
        page = _page("blog/post/index.md", title="Post", date="2021-06-14T09:30:00Z")
        assert self.validator.validate_page(page) == []

    def test_bad_date(self):
        issues = self.validator.validate_page(_page("blog/post/index.md", title="Post", date="June"))
        assert len(issues) == 1
        assert "date" in issues[0].message

    def test_draft_must_be_boolean(self):
        page = _page("blog/post/index.md", title="Post", date="2021-06-14", draft="no")
        assert len(self.validator.validate_page(page)) == 1

    def test_excerpt_must_be_string(self):
        page = _page("blog/post/index.md", title="Post", date="2021-06-14", excerpt=["a"])
        assert len(self.validator.validate_page(page)) == 1

    @pytest.mark.parametrize("terms", ["momentum", ["momentum", ""], [1]])
    def test_taxonomy_terms(self, terms):
        page = _page("blog/post/index.md", title="Post", date="2021-06-14", tags=terms)
        issues = self.validator.validate_page(page)
        assert len(issues) == 1
        assert "tags" in issues[0].message

    def test_duplicate_slug_in_section(self):
        pages = [
            _page("blog/a/index.md", title="A", date="2021-01-01", slug="momentum"),
            _page("blog/b/index.md", title="B", date="2021-01-02", slug="momentum"),
            _page("blog/c/index.md", title="C", date="2021-01-03", slug="momentum", draft=True),
            _page("talk/d/index.md", section="talk", title="D", date="2021-01-04", slug="momentum"),
        ]
        issues = self.validator.validate_pages(pages)

        assert [(i.location, i.severity) for i in issues] == [
            (str(Path("blog/b/index.md")), ERROR),
            (str(Path("blog/c/index.md")), WARNING),
        ]
