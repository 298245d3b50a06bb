"""Content discovery and front matter checks for pages."""

import re
from collections import defaultdict
from pathlib import Path
from typing import Any, Iterable, Optional, Sequence, Union

from ..utils.dates import parse_date
from .frontmatter import split_front_matter
from .models import ContentPage
from .validation import ERROR, WARNING, ValidationIssue

CONTENT_SUFFIXES = {".md", ".markdown", ".html"}
TEXT_FIELDS = ("excerpt", "summary", "description", "subtitle")


def discover_content(
    content_dir: Union[str, Path],
    ignore_patterns: Iterable[str] = (),
) -> list[Path]:
    """
    List content files under a directory.

    Args:
        content_dir: Root of the content tree
        ignore_patterns: Regular expressions from the config's ignoreFiles;
            a file is skipped if any of them matches its path

    Returns:
        Sorted paths of Markdown and HTML documents
    """
    content_dir = Path(content_dir)
    if not content_dir.is_dir():
        return []

    compiled = [re.compile(pattern) for pattern in ignore_patterns]
    found = []
    for path in sorted(content_dir.rglob("*")):
        if not path.is_file() or path.suffix.lower() not in CONTENT_SUFFIXES:
            continue
        relative = path.relative_to(content_dir)
        # directories such as "_cache" are matched as well as file names
        candidates = [relative.as_posix()] + [
            parent.as_posix() for parent in relative.parents if parent.as_posix() != "."
        ]
        if any(pattern.search(c) for pattern in compiled for c in candidates):
            continue
        found.append(path)
    return found


def load_page(path: Union[str, Path], content_dir: Optional[Union[str, Path]] = None) -> ContentPage:
    """
    Read a content file and split its front matter from the body.

    Raises:
        FrontMatterError: If the header cannot be parsed
        OSError: If the file cannot be read
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    metadata, body = split_front_matter(text, path=str(path))

    section = ""
    if content_dir is not None:
        parts = path.relative_to(content_dir).parts
        if len(parts) > 1:
            section = parts[0]

    return ContentPage(path=path, metadata=metadata, body=body, section=section)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class ContentValidator:
    """Checks that every page carries the metadata its template needs."""

    def __init__(
        self,
        required_fields: Sequence[str] = ("title", "date"),
        taxonomies: Optional[Iterable[str]] = None,
    ) -> None:
        self.required_fields = tuple(required_fields)
        self.taxonomies = tuple(taxonomies or ())

    def validate_page(self, page: ContentPage) -> list[ValidationIssue]:
        """Validate one page's front matter."""
        issues = []
        location = str(page.path)
        metadata = page.metadata

        required = ("title",) if page.is_section_index else self.required_fields
        for name in required:
            if _is_blank(metadata.get(name)):
                issues.append(ValidationIssue(location, f"Missing required field '{name}'"))

        if "date" in metadata and not _is_blank(metadata["date"]):
            try:
                parse_date(metadata["date"])
            except ValueError:
                issues.append(ValidationIssue(location, "Field 'date' is not a valid date", metadata["date"]))

        if "draft" in metadata and not isinstance(metadata["draft"], bool):
            issues.append(ValidationIssue(location, "Field 'draft' must be a boolean", metadata["draft"]))

        for name in TEXT_FIELDS:
            if name in metadata and metadata[name] is not None and not isinstance(metadata[name], str):
                issues.append(ValidationIssue(location, f"Field '{name}' must be a string", metadata[name]))

        for plural in self.taxonomies:
            if plural not in metadata:
                continue
            terms = metadata[plural]
            if not isinstance(terms, list) or not all(isinstance(t, str) and t.strip() for t in terms):
                issues.append(ValidationIssue(
                    location, f"Taxonomy '{plural}' must be a list of non-empty strings", terms
                ))

        return issues

    def validate_pages(self, pages: Iterable[ContentPage]) -> list[ValidationIssue]:
        """Validate all pages, including slug uniqueness within each section."""
        issues = []
        slugs: dict[tuple[str, str], list[ContentPage]] = defaultdict(list)

        for page in pages:
            issues.extend(self.validate_page(page))
            slug = page.metadata.get("slug")
            if isinstance(slug, str) and slug.strip():
                slugs[(page.section, slug.strip())].append(page)

        for (section, slug), owners in slugs.items():
            if len(owners) > 1:
                for page in owners[1:]:
                    issues.append(ValidationIssue(
                        str(page.path),
                        f"Slug '{slug}' already used in section '{section or '/'}' by {owners[0].path.name}",
                        slug,
                        WARNING if page.draft else ERROR,
                    ))

        return issues
