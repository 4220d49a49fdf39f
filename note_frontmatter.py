"""Split a note into its frontmatter record and markdown body."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Tuple

import frontmatter
import yaml

from site_errors import FrontmatterError

logger = logging.getLogger(__name__)

TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class OpaqueDateLoader(yaml.SafeLoader):
    """SafeLoader that leaves timestamps as the text the author wrote."""

    yaml_implicit_resolvers = {
        first: [(tag, regexp) for tag, regexp in resolvers if tag != TIMESTAMP_TAG]
        for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
    }


YAML_HANDLER = frontmatter.YAMLHandler()


@dataclass(frozen=True)
class Frontmatter:
    """The keys a note's frontmatter may carry. Other keys are ignored."""

    title: Optional[str] = None
    date: Optional[str] = None  # opaque, never parsed
    tags: Optional[List[str]] = None


def _as_date_text(value: Any, source: Path) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    raise FrontmatterError(f"Frontmatter 'date' must be a string, got {type(value).__name__}", source)


def _as_title(value: Any, source: Path) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    raise FrontmatterError(f"Frontmatter 'title' must be a string, got {type(value).__name__}", source)


def _as_tags(value: Any, source: Path) -> Optional[List[str]]:
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(t, str) for t in value):
        raise FrontmatterError("Frontmatter 'tags' must be a list of strings", source)
    return list(value)


def frontmatter_from_mapping(data: Any, source: Path) -> Frontmatter:
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FrontmatterError("Frontmatter is not a mapping", source)
    return Frontmatter(
        title=_as_title(data.get("title"), source),
        date=_as_date_text(data.get("date"), source),
        tags=_as_tags(data.get("tags"), source),
    )


def split_frontmatter(text: str, source: Path) -> Tuple[Optional[Frontmatter], str]:
    """Return (frontmatter, body). Frontmatter is None when the note has no block.

    Raises FrontmatterError when a block is present but does not parse into
    the expected shape.
    """
    stripped = text.strip()
    # only `---` YAML blocks; a note opening with `{` or `+++` is plain markdown
    if not YAML_HANDLER.detect(stripped):
        return None, text

    try:
        fm_text, body = YAML_HANDLER.split(stripped)
    except ValueError:
        # opening delimiter without a closing one: treat the file as plain markdown
        return None, text

    try:
        data = YAML_HANDLER.load(fm_text, Loader=OpaqueDateLoader)
    except yaml.YAMLError as exc:
        raise FrontmatterError(f"Frontmatter does not parse ({exc})", source) from exc

    logger.debug("Frontmatter found: %s", source)
    return frontmatter_from_mapping(data, source), body
