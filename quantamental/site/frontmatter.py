"""
Front matter parsing for content pages.

Hugo accepts three header formats at the top of a content file:

    ---            +++            {
    title: ...     title = ...      "title": "..."
    ---            +++            }

Fence detection and splitting come from python-frontmatter's handlers;
this module adds strict error reporting on top, since the generator
fails the build on a header it cannot read.
"""

import json
import re
from typing import Any, Optional

import frontmatter
import toml
import yaml
from frontmatter.default_handlers import JSONHandler, TOMLHandler, YAMLHandler

from ..errors import FrontMatterError

HANDLERS = [
    (YAMLHandler(), "yaml"),
    (TOMLHandler(), "toml"),
    (JSONHandler(), "json"),
]

_PARSE_ERRORS = (yaml.YAMLError, toml.TomlDecodeError, json.JSONDecodeError)

# the closing fence keeps its line break on the body side
_LEADING_BREAK = re.compile(r"^\r?\n")


def _detect(text: str) -> tuple[Any, Optional[str]]:
    handler = frontmatter.detect_format(text, [h for h, _ in HANDLERS])
    for candidate, fmt in HANDLERS:
        if candidate is handler:
            return handler, fmt
    return None, None


def split_front_matter(text: str, path: Optional[str] = None) -> tuple[dict[str, Any], str]:
    """
    Separate a content document into its metadata header and body.

    Args:
        text: Full document text
        path: Source path, used only in error messages

    Returns:
        (metadata, body); a document without a header yields ({}, text)

    Raises:
        FrontMatterError: If the header is unterminated, unparseable or
            not a mapping
    """
    text = text.lstrip("\ufeff")

    handler, fmt = _detect(text)
    if handler is None:
        return {}, text

    try:
        header, body = handler.split(text)
    except ValueError:
        raise FrontMatterError(
            f"{fmt.upper()} front matter is never closed",
            path=path,
            delimiter=fmt,
        ) from None

    try:
        metadata = handler.load(header)
    except _PARSE_ERRORS as e:
        raise FrontMatterError(
            f"Invalid {fmt.upper()} front matter: {e}",
            path=path,
            delimiter=fmt,
        ) from e

    if metadata is None:
        metadata = {}
    if not isinstance(metadata, dict):
        raise FrontMatterError(
            f"{fmt.upper()} front matter must be a mapping, got {type(metadata).__name__}",
            path=path,
            delimiter=fmt,
        )

    return metadata, _LEADING_BREAK.sub("", body, count=1)
