"""Tests for site configuration schema checks."""

import copy

import pytest

from quantamental.site.config_file import read_config_document
from quantamental.site.validation import ERROR, WARNING, SiteConfigValidator, ValidationIssue


@pytest.fixture
def raw_config(shipped_site_root):
    return read_config_document(shipped_site_root / "config.toml")


def _locations(issues, severity=None):
    return [i.location for i in issues if severity is None or i.severity == severity]


class TestValidationIssue:
    """Test issue formatting"""

    def test_str_with_value(self):
        issue = ValidationIssue("paginate", "Must be a positive integer", 0)
        assert str(issue) == "[error] paginate: Must be a positive integer (got: 0)"
        assert issue.is_error

    def test_warning_without_value(self):
        issue = ValidationIssue("baseURL", "Should end with '/'", severity=WARNING)
        assert str(issue) == "[warning] baseURL: Should end with '/'"
        assert not issue.is_error


class TestShippedConfig:
    """The blog's own configuration must be clean."""

    def test_no_issues(self, raw_config):
        assert SiteConfigValidator.validate_config(raw_config) == []


class TestMetadata:
    """Test top-level metadata rules"""

    def test_required_keys(self):
        issues = SiteConfigValidator.validate_metadata({"baseURL": "", "title": "   "})
        assert _locations(issues) == ["baseURL", "title", "theme"]

    def test_relative_base_url(self, raw_config):
        raw_config["baseURL"] = "/blog/"
        issues = SiteConfigValidator.validate_metadata(raw_config)
        assert _locations(issues, ERROR) == ["baseURL"]

    def test_missing_trailing_slash_warns(self, raw_config):
        raw_config["baseURL"] = "https://example.com"
        issues = SiteConfigValidator.validate_metadata(raw_config)
        assert _locations(issues, WARNING) == ["baseURL"]
        assert _locations(issues, ERROR) == []

    @pytest.mark.parametrize("value", [0, -5, "5", True])
    def test_paginate(self, raw_config, value):
        raw_config["paginate"] = value
        assert _locations(SiteConfigValidator.validate_metadata(raw_config)) == ["paginate"]

    def test_meta_data_format(self, raw_config):
        raw_config["metaDataFormat"] = "xml"
        assert _locations(SiteConfigValidator.validate_metadata(raw_config)) == ["metaDataFormat"]

    def test_bad_ignore_pattern(self, raw_config):
        raw_config["ignoreFiles"] = ["\\.Rmd$", "(unclosed"]
        assert _locations(SiteConfigValidator.validate_metadata(raw_config)) == ["ignoreFiles[1]"]

    def test_boolean_toggle(self, raw_config):
        raw_config["enableEmoji"] = "yes"
        assert _locations(SiteConfigValidator.validate_metadata(raw_config)) == ["enableEmoji"]


class TestMenus:
    """Test menu entry rules"""

    def test_duplicate_weight_is_error(self, raw_config):
        raw_config["menu"]["header"][1]["weight"] = 1
        issues = SiteConfigValidator.validate_menus(raw_config)

        errors = [i for i in issues if i.is_error]
        assert len(errors) == 1
        assert errors[0].location == "menu.header[1].weight"
        assert "'About'" in errors[0].message and "'Blog'" in errors[0].message

    def test_out_of_order_declaration_warns(self, raw_config):
        footer = raw_config["menu"]["footer"]
        footer[1]["weight"], footer[2]["weight"] = 3, 2
        issues = SiteConfigValidator.validate_menus(raw_config)

        assert _locations(issues, ERROR) == []
        assert _locations(issues, WARNING) == ["menu.footer[2].weight"]

    def test_repeated_url_warns(self, raw_config):
        raw_config["menu"]["header"][3]["url"] = "/blog/"
        issues = SiteConfigValidator.validate_menus(raw_config)
        assert _locations(issues, WARNING) == ["menu.header[3].url"]

    def test_missing_fields(self):
        raw = {"menu": {"header": [{"weight": "1"}]}}
        assert _locations(SiteConfigValidator.validate_menus(raw)) == [
            "menu.header[0].name",
            "menu.header[0].url",
            "menu.header[0].weight",
        ]

    def test_menu_must_be_array(self):
        assert _locations(SiteConfigValidator.validate_menus({"menu": {"header": "About"}})) == ["menu.header"]


class TestTaxonomies:
    """Test taxonomy name rules"""

    def test_duplicate_plural(self):
        raw = {"taxonomies": {"tag": "tags", "label": "tags"}}
        issues = SiteConfigValidator.validate_taxonomies(raw)
        assert _locations(issues) == ["taxonomies.label"]
        assert "'tag'" in issues[0].message

    def test_empty_plural(self):
        assert _locations(SiteConfigValidator.validate_taxonomies({"taxonomies": {"tag": ""}})) == ["taxonomies.tag"]


class TestParams:
    """Test theme parameter rules"""

    def test_relative_asset_paths_warn(self, raw_config):
        raw_config["params"]["logo"] = "img/logo.svg"
        issues = SiteConfigValidator.validate_params(raw_config)
        assert _locations(issues, WARNING) == ["params.logo"]

    def test_main_sections(self, raw_config):
        raw_config["params"]["mainSections"] = "blog"
        assert _locations(SiteConfigValidator.validate_params(raw_config)) == ["params.mainSections"]

    def test_social_entry(self, raw_config):
        raw_config["params"]["social"][1] = {"icon": "", "icon_pack": "fa", "url": "twitter.com/x"}
        assert _locations(SiteConfigValidator.validate_params(raw_config)) == [
            "params.social[1].icon",
            "params.social[1].icon_pack",
            "params.social[1].url",
        ]

    def test_utterances(self, raw_config):
        raw_config["params"]["utterances"]["issue_term"] = "slug"
        raw_config["params"]["utterances"]["repo_name"] = "quantamental-blogdown"
        assert _locations(SiteConfigValidator.validate_params(raw_config)) == [
            "params.utterances.issue_term",
            "params.utterances.repo_name",
        ]

    def test_repo_not_needed_when_disabled(self, raw_config):
        raw_config["params"]["utterances"] = {"use_utterances": False}
        assert SiteConfigValidator.validate_params(raw_config) == []

    def test_math_renderer(self, raw_config):
        raw_config["params"]["math"]["renderer"] = "latex"
        assert _locations(SiteConfigValidator.validate_params(raw_config)) == ["params.math.renderer"]


class TestMarkupAndPrivacy:
    """Test markup and privacy tables"""

    def test_toc_level_range(self, raw_config):
        raw_config["markup"]["tableOfContents"]["endLevel"] = 7
        assert _locations(SiteConfigValidator.validate_markup(raw_config)) == ["markup.tableOfContents.endLevel"]

    def test_toc_start_after_end(self, raw_config):
        raw_config["markup"]["tableOfContents"]["startLevel"] = 3
        issues = SiteConfigValidator.validate_markup(raw_config)
        assert _locations(issues) == ["markup.tableOfContents"]
        assert issues[0].value == (3, 2)

    def test_privacy_toggle_must_be_boolean(self, raw_config):
        raw_config["privacy"]["youtube"]["privacyEnhanced"] = "true"
        assert _locations(SiteConfigValidator.validate_privacy(raw_config)) == ["privacy.youtube.privacyEnhanced"]

    def test_validate_config_collects_everything(self, raw_config):
        broken = copy.deepcopy(raw_config)
        broken["paginate"] = 0
        broken["privacy"]["vimeo"] = True
        assert _locations(SiteConfigValidator.validate_config(broken)) == ["paginate", "privacy.vimeo"]
