"""Whole-site check: configuration schema plus every content page."""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence, Union

from ..errors import FrontMatterError, SiteConfigError
from ..logging.config import get_site_logger, log_validation_issue
from .config_file import build_site_config, read_config_document
from .content import ContentValidator, discover_content, load_page
from .validation import ERROR, SiteConfigValidator, ValidationIssue

logger = get_site_logger(__name__)


@dataclass
class SiteReport:
    """Outcome of a site check."""
    issues: list[ValidationIssue] = field(default_factory=list)
    pages_checked: int = 0

    @property
    def errors(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.is_error]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if not issue.is_error]

    @property
    def ok(self) -> bool:
        return not self.errors


def _usable_patterns(patterns: Sequence[object]) -> list[str]:
    """Keep the ignoreFiles entries that compile; the rest are reported by the validator."""
    usable = []
    for pattern in patterns:
        if not isinstance(pattern, str):
            continue
        try:
            re.compile(pattern)
        except re.error:
            continue
        usable.append(pattern)
    return usable


class SiteChecker:
    """
    Runs every static check over a Hugo site directory.

    A site root holds the configuration file and a content directory.
    Problems are collected into a SiteReport rather than raised, so one
    run lists everything that would break or degrade the generator build.
    """

    def __init__(
        self,
        site_root: Union[str, Path],
        config_name: str = "config.toml",
        content_dir: str = "content",
        required_fields: Optional[Sequence[str]] = None,
    ) -> None:
        self.site_root = Path(site_root)
        self.config_path = self.site_root / config_name
        self.content_dir = self.site_root / content_dir
        self.required_fields = tuple(required_fields or ("title", "date"))
        self.logger = logger.bind(site_root=str(self.site_root))

    def check(self) -> SiteReport:
        report = SiteReport()

        try:
            raw = read_config_document(self.config_path)
        except SiteConfigError as e:
            report.issues.append(ValidationIssue(str(self.config_path), str(e), severity=ERROR))
            self._log_issues(report.issues)
            return report

        report.issues.extend(SiteConfigValidator.validate_config(raw))
        config = build_site_config(raw)

        validator = ContentValidator(
            required_fields=self.required_fields,
            taxonomies=config.taxonomy_plurals(),
        )

        pages = []
        for path in discover_content(self.content_dir, _usable_patterns(config.ignore_files)):
            try:
                pages.append(load_page(path, self.content_dir))
            except FrontMatterError as e:
                report.issues.append(ValidationIssue(str(path), str(e)))
            except (OSError, UnicodeDecodeError) as e:
                report.issues.append(ValidationIssue(str(path), f"Unreadable content file: {e}"))

        report.pages_checked = len(pages)
        report.issues.extend(validator.validate_pages(pages))

        self._log_issues(report.issues)
        self.logger.info(
            "Site check finished",
            pages_checked=report.pages_checked,
            errors=len(report.errors),
            warnings=len(report.warnings),
        )
        return report

    def _log_issues(self, issues: list[ValidationIssue]) -> None:
        for issue in issues:
            log_validation_issue(self.logger, issue.location, issue.message, issue.severity, issue.value)
