"""Schema checks for the site configuration document."""

import re
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlparse

ERROR = "error"
WARNING = "warning"

METADATA_FORMATS = {"yaml", "toml", "json"}
ICON_PACKS = {"fab", "fas", "far"}
ISSUE_TERMS = {"url", "pathname", "title"}
MATH_RENDERERS = {"mathjax", "katex"}
SITE_PATH_PARAMS = ("favicon", "logo", "sharing_image")
BOOLEAN_TOGGLES = ("enableEmoji", "preserveTaxonomyNames")


@dataclass(frozen=True)
class ValidationIssue:
    """A schema problem found in the configuration or a content file."""
    location: str
    message: str
    value: Any = None
    severity: str = ERROR

    @property
    def is_error(self) -> bool:
        return self.severity == ERROR

    def __str__(self) -> str:
        suffix = f" (got: {self.value!r})" if self.value is not None else ""
        return f"[{self.severity}] {self.location}: {self.message}{suffix}"


def _is_nonempty_str(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_absolute_url(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


class SiteConfigValidator:
    """Validates a parsed site configuration document."""

    @staticmethod
    def validate_metadata(raw: dict[str, Any]) -> list[ValidationIssue]:
        """Validate top-level site metadata."""
        issues = []

        for key in ("baseURL", "title", "theme"):
            if not _is_nonempty_str(raw.get(key)):
                issues.append(ValidationIssue(key, "Required non-empty string", raw.get(key)))

        base_url = raw.get("baseURL")
        if _is_nonempty_str(base_url):
            if not _is_absolute_url(base_url):
                issues.append(ValidationIssue("baseURL", "Must be an absolute http(s) URL", base_url))
            elif not base_url.endswith("/"):
                issues.append(ValidationIssue("baseURL", "Should end with '/'", base_url, WARNING))

        if "paginate" in raw:
            value = raw["paginate"]
            if not _is_int(value) or value <= 0:
                issues.append(ValidationIssue("paginate", "Must be a positive integer", value))

        if "metaDataFormat" in raw and raw["metaDataFormat"] not in METADATA_FORMATS:
            issues.append(ValidationIssue(
                "metaDataFormat",
                f"Must be one of {sorted(METADATA_FORMATS)}",
                raw["metaDataFormat"],
            ))

        if "ignoreFiles" in raw:
            patterns = raw["ignoreFiles"]
            if not isinstance(patterns, list):
                issues.append(ValidationIssue("ignoreFiles", "Must be a list of regular expressions", patterns))
            else:
                for i, pattern in enumerate(patterns):
                    location = f"ignoreFiles[{i}]"
                    if not isinstance(pattern, str):
                        issues.append(ValidationIssue(location, "Must be a string", pattern))
                        continue
                    try:
                        re.compile(pattern)
                    except re.error as e:
                        issues.append(ValidationIssue(location, f"Invalid regular expression: {e}", pattern))

        for key in BOOLEAN_TOGGLES:
            if key in raw and not isinstance(raw[key], bool):
                issues.append(ValidationIssue(key, "Must be a boolean", raw[key]))

        return issues

    @staticmethod
    def validate_menus(raw: dict[str, Any]) -> list[ValidationIssue]:
        """Validate menu entries and their weight ordering."""
        issues = []
        menus = raw.get("menu", {})

        if not isinstance(menus, dict):
            return [ValidationIssue("menu", "Must be a table of menus", menus)]

        for menu_name, entries in menus.items():
            base = f"menu.{menu_name}"
            if not isinstance(entries, list):
                issues.append(ValidationIssue(base, "Must be an array of tables", entries))
                continue

            seen_weights: dict[int, str] = {}
            seen_urls: set[str] = set()
            previous_weight = None

            for i, entry in enumerate(entries):
                location = f"{base}[{i}]"
                if not isinstance(entry, dict):
                    issues.append(ValidationIssue(location, "Must be a table", entry))
                    continue

                name = entry.get("name")
                if not _is_nonempty_str(name):
                    issues.append(ValidationIssue(f"{location}.name", "Required non-empty string", name))
                    name = f"#{i}"

                url = entry.get("url")
                if not _is_nonempty_str(url):
                    issues.append(ValidationIssue(f"{location}.url", "Required non-empty string", url))
                elif url in seen_urls:
                    issues.append(ValidationIssue(
                        f"{location}.url", "URL repeated within menu", url, WARNING
                    ))
                else:
                    seen_urls.add(url)

                weight = entry.get("weight")
                if not _is_int(weight):
                    issues.append(ValidationIssue(f"{location}.weight", "Must be an integer", weight))
                    continue

                if weight in seen_weights:
                    issues.append(ValidationIssue(
                        f"{location}.weight",
                        f"Duplicate weight shared by '{seen_weights[weight]}' and '{name}'",
                        weight,
                    ))
                else:
                    seen_weights[weight] = name

                if previous_weight is not None and weight < previous_weight:
                    issues.append(ValidationIssue(
                        f"{location}.weight",
                        f"Declared after an entry with weight {previous_weight}",
                        weight,
                        WARNING,
                    ))
                previous_weight = weight

        return issues

    @staticmethod
    def validate_taxonomies(raw: dict[str, Any]) -> list[ValidationIssue]:
        """Validate taxonomy singular/plural names."""
        issues = []
        taxonomies = raw.get("taxonomies", {})

        if not isinstance(taxonomies, dict):
            return [ValidationIssue("taxonomies", "Must be a table", taxonomies)]

        plurals: dict[str, str] = {}
        for singular, plural in taxonomies.items():
            location = f"taxonomies.{singular}"
            if not _is_nonempty_str(plural):
                issues.append(ValidationIssue(location, "Plural name must be a non-empty string", plural))
                continue
            if plural in plurals:
                issues.append(ValidationIssue(
                    location,
                    f"Plural name already used by '{plurals[plural]}'",
                    plural,
                ))
            else:
                plurals[plural] = singular

        return issues

    @staticmethod
    def validate_params(raw: dict[str, Any]) -> list[ValidationIssue]:
        """Validate theme parameters and integrations."""
        issues = []
        params = raw.get("params", {})

        if not isinstance(params, dict):
            return [ValidationIssue("params", "Must be a table", params)]

        if "mainSections" in params:
            sections = params["mainSections"]
            if not isinstance(sections, list) or not all(_is_nonempty_str(s) for s in sections):
                issues.append(ValidationIssue("params.mainSections", "Must be a list of section names", sections))

        for key in SITE_PATH_PARAMS:
            value = params.get(key)
            if _is_nonempty_str(value) and not value.startswith("/") and not _is_absolute_url(value):
                issues.append(ValidationIssue(
                    f"params.{key}", "Should be a site-absolute path such as /img/logo.png", value, WARNING
                ))

        social = params.get("social", [])
        if not isinstance(social, list):
            issues.append(ValidationIssue("params.social", "Must be an array of tables", social))
            social = []
        for i, entry in enumerate(social):
            location = f"params.social[{i}]"
            if not isinstance(entry, dict):
                issues.append(ValidationIssue(location, "Must be a table", entry))
                continue
            if not _is_nonempty_str(entry.get("icon")):
                issues.append(ValidationIssue(f"{location}.icon", "Required non-empty string", entry.get("icon")))
            if entry.get("icon_pack") not in ICON_PACKS:
                issues.append(ValidationIssue(
                    f"{location}.icon_pack", f"Must be one of {sorted(ICON_PACKS)}", entry.get("icon_pack")
                ))
            if not _is_absolute_url(entry.get("url")):
                issues.append(ValidationIssue(f"{location}.url", "Must be an absolute http(s) URL", entry.get("url")))

        utterances = params.get("utterances")
        if isinstance(utterances, dict):
            if "issue_term" in utterances and utterances["issue_term"] not in ISSUE_TERMS:
                issues.append(ValidationIssue(
                    "params.utterances.issue_term",
                    f"Must be one of {sorted(ISSUE_TERMS)}",
                    utterances["issue_term"],
                ))
            if utterances.get("use_utterances"):
                repo = utterances.get("repo_name")
                if not isinstance(repo, str) or not re.fullmatch(r"[\w.-]+/[\w.-]+", repo):
                    issues.append(ValidationIssue(
                        "params.utterances.repo_name", "Must be of the form owner/repo", repo
                    ))
        elif utterances is not None:
            issues.append(ValidationIssue("params.utterances", "Must be a table", utterances))

        math = params.get("math")
        if isinstance(math, dict) and "renderer" in math and math["renderer"] not in MATH_RENDERERS:
            issues.append(ValidationIssue(
                "params.math.renderer", f"Must be one of {sorted(MATH_RENDERERS)}", math["renderer"]
            ))

        return issues

    @staticmethod
    def validate_markup(raw: dict[str, Any]) -> list[ValidationIssue]:
        """Validate markup rendering options."""
        issues = []
        markup = raw.get("markup", {})

        if not isinstance(markup, dict):
            return [ValidationIssue("markup", "Must be a table", markup)]

        handler = markup.get("defaultMarkdownHandler")
        if handler is not None and not _is_nonempty_str(handler):
            issues.append(ValidationIssue("markup.defaultMarkdownHandler", "Must be a string", handler))

        toc = markup.get("tableOfContents", {})
        if isinstance(toc, dict):
            levels = {}
            for key in ("startLevel", "endLevel"):
                if key not in toc:
                    continue
                value = toc[key]
                if not _is_int(value) or not 1 <= value <= 6:
                    issues.append(ValidationIssue(
                        f"markup.tableOfContents.{key}", "Must be a heading level between 1 and 6", value
                    ))
                else:
                    levels[key] = value
            if len(levels) == 2 and levels["startLevel"] > levels["endLevel"]:
                issues.append(ValidationIssue(
                    "markup.tableOfContents",
                    "startLevel must not exceed endLevel",
                    (levels["startLevel"], levels["endLevel"]),
                ))

        return issues

    @staticmethod
    def validate_privacy(raw: dict[str, Any]) -> list[ValidationIssue]:
        """Validate third-party embed privacy toggles."""
        issues = []
        privacy = raw.get("privacy", {})

        if not isinstance(privacy, dict):
            return [ValidationIssue("privacy", "Must be a table", privacy)]

        for service, settings in privacy.items():
            location = f"privacy.{service}"
            if not isinstance(settings, dict):
                issues.append(ValidationIssue(location, "Must be a table", settings))
                continue
            for key, value in settings.items():
                if not isinstance(value, bool):
                    issues.append(ValidationIssue(f"{location}.{key}", "Must be a boolean", value))

        return issues

    @staticmethod
    def validate_config(raw: dict[str, Any]) -> list[ValidationIssue]:
        """Validate the complete configuration document."""
        issues = []
        issues.extend(SiteConfigValidator.validate_metadata(raw))
        issues.extend(SiteConfigValidator.validate_menus(raw))
        issues.extend(SiteConfigValidator.validate_taxonomies(raw))
        issues.extend(SiteConfigValidator.validate_params(raw))
        issues.extend(SiteConfigValidator.validate_markup(raw))
        issues.extend(SiteConfigValidator.validate_privacy(raw))
        return issues
