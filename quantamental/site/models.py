"""
Data models for the site configuration and content pages.

These are read-only views over documents consumed by the Hugo build;
nothing here renders or rewrites them.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional


@dataclass(frozen=True)
class MenuEntry:
    """One navigation entry of a named menu."""
    name: str
    url: str
    weight: int
    title: Optional[str] = None


@dataclass(frozen=True)
class SocialLink:
    """One social icon entry from [[params.social]]."""
    icon: str
    icon_pack: str
    url: str


@dataclass(frozen=True)
class SiteConfig:
    """Site-wide metadata, menus, taxonomies and theme options."""
    base_url: str
    title: str
    theme: str
    author: Optional[str] = None
    language_code: Optional[str] = None
    paginate: Optional[int] = None
    meta_data_format: str = "yaml"
    ignore_files: list[str] = field(default_factory=list)
    menus: dict[str, list[MenuEntry]] = field(default_factory=dict)
    taxonomies: dict[str, str] = field(default_factory=dict)
    params: dict[str, Any] = field(default_factory=dict)
    privacy: dict[str, Any] = field(default_factory=dict)
    markup: dict[str, Any] = field(default_factory=dict)
    social: list[SocialLink] = field(default_factory=list)
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    def menu(self, name: str) -> list[MenuEntry]:
        """Entries of a menu ordered by weight, empty if the menu is not defined."""
        return self.menus.get(name, [])

    def taxonomy_plurals(self) -> list[str]:
        """Front matter keys that hold taxonomy terms, e.g. "tags"."""
        return list(self.taxonomies.values())

    @property
    def main_sections(self) -> list[str]:
        return list(self.params.get("mainSections", []))


@dataclass(frozen=True)
class ContentPage:
    """A content document: metadata header plus Markdown/HTML body."""
    path: Path
    metadata: dict[str, Any]
    body: str
    section: str = ""

    @property
    def title(self) -> Optional[str]:
        return self.metadata.get("title")

    @property
    def date(self) -> Any:
        return self.metadata.get("date")

    @property
    def draft(self) -> bool:
        return bool(self.metadata.get("draft", False))

    @property
    def excerpt(self) -> Optional[str]:
        return self.metadata.get("excerpt") or self.metadata.get("summary")

    @property
    def is_section_index(self) -> bool:
        """True for _index.md list pages, which only need a title."""
        return self.path.stem == "_index"
