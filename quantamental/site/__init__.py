"""Static checks for the Hugo site configuration and content front matter."""

from .checker import SiteChecker, SiteReport
from .config_file import build_site_config, load_site_config, read_config_document
from .content import ContentValidator, discover_content, load_page
from .frontmatter import split_front_matter
from .models import ContentPage, MenuEntry, SiteConfig, SocialLink
from .validation import SiteConfigValidator, ValidationIssue

__all__ = [
    "ContentPage",
    "ContentValidator",
    "MenuEntry",
    "SiteChecker",
    "SiteConfig",
    "SiteConfigValidator",
    "SiteReport",
    "SocialLink",
    "ValidationIssue",
    "build_site_config",
    "discover_content",
    "load_page",
    "load_site_config",
    "read_config_document",
    "split_front_matter",
]
