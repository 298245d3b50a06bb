"""
Reading the site configuration document.

The document is TOML: top-level metadata keys, nested tables for markup,
params and privacy, and arrays of tables for menus and social icons.
Schema checks live in validation.py; this module only parses and maps.
"""

import tomllib
from pathlib import Path
from typing import Any, Union

from ..errors import SiteConfigError
from ..logging.config import get_site_logger
from .models import MenuEntry, SiteConfig, SocialLink

logger = get_site_logger(__name__)


def read_config_document(path: Union[str, Path]) -> dict[str, Any]:
    """
    Parse the configuration file into a plain dictionary.

    Raises:
        SiteConfigError: If the file is missing or is not valid TOML
    """
    path = Path(path)
    if not path.is_file():
        raise SiteConfigError(f"Site configuration not found: {path}", path=str(path))

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SiteConfigError(
            f"Invalid TOML in {path.name}: {e}",
            path=str(path),
            context={"parser_message": str(e)},
        ) from e


def _menu_entries(items: Any) -> list[MenuEntry]:
    entries = []
    for item in items if isinstance(items, list) else []:
        if not isinstance(item, dict):
            continue
        weight = item.get("weight", 0)
        entries.append(MenuEntry(
            name=str(item.get("name", "")),
            url=str(item.get("url", "")),
            weight=weight if isinstance(weight, int) else 0,
            title=item.get("title"),
        ))
    # sorted() is stable, so equal weights keep declaration order
    return sorted(entries, key=lambda entry: entry.weight)


def build_site_config(raw: dict[str, Any]) -> SiteConfig:
    """Map a parsed configuration document onto SiteConfig."""
    params = raw.get("params", {}) if isinstance(raw.get("params"), dict) else {}
    menus_raw = raw.get("menu", {}) if isinstance(raw.get("menu"), dict) else {}
    taxonomies = raw.get("taxonomies", {}) if isinstance(raw.get("taxonomies"), dict) else {}

    social_raw = params.get("social", []) if isinstance(params.get("social"), list) else []
    ignore_raw = raw.get("ignoreFiles", []) if isinstance(raw.get("ignoreFiles"), list) else []

    social = [
        SocialLink(
            icon=str(item.get("icon", "")),
            icon_pack=str(item.get("icon_pack", "")),
            url=str(item.get("url", "")),
        )
        for item in social_raw
        if isinstance(item, dict)
    ]

    config = SiteConfig(
        base_url=str(raw.get("baseURL", "")),
        title=str(raw.get("title", "")),
        theme=str(raw.get("theme", "")),
        author=raw.get("author"),
        language_code=raw.get("languageCode"),
        paginate=raw.get("paginate"),
        meta_data_format=str(raw.get("metaDataFormat", "yaml")),
        ignore_files=[pattern for pattern in ignore_raw if isinstance(pattern, str)],
        menus={name: _menu_entries(items) for name, items in menus_raw.items()},
        taxonomies={str(k): str(v) for k, v in taxonomies.items()},
        params=params,
        privacy=raw.get("privacy", {}),
        markup=raw.get("markup", {}),
        social=social,
        raw=raw,
    )

    logger.debug(
        "Loaded site configuration",
        title=config.title,
        menus=sorted(config.menus),
        taxonomies=sorted(config.taxonomies),
    )
    return config


def load_site_config(path: Union[str, Path]) -> SiteConfig:
    """Read and map the configuration file in one step."""
    return build_site_config(read_config_document(path))
