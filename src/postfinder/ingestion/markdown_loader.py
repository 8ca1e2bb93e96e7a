"""Markdown post loading with YAML front matter.

Posts look like::

    ---
    title: Streaming joins in Flink
    date: 2024-01-15
    tags: flink, streaming
    ---
    Body text in markdown...

The document id and slug are the filename stem.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Tuple

import yaml

from postfinder.models import UNDATED, Document

LOGGER = logging.getLogger(__name__)

DELIMITER = "---"
DATE_FORMAT = "%Y-%m-%d"

_FRONT_MATTER_RE = re.compile(
    rf"^\s*{re.escape(DELIMITER)}[ \t]*\n(.*?)\n{re.escape(DELIMITER)}[ \t]*(?:\n|$)",
    re.DOTALL,
)


_SCALAR_KEYS = ("title", "date", "tags")
# Values starting with these are left to YAML (quoted strings, flow lists, blocks)
_YAML_SYNTAX = "\"'[{|>&*!"


class PostParseError(ValueError):
    """Raised when a markdown file cannot be turned into a post."""


def _line_fields(block: str) -> Dict[str, str]:
    """Top-level ``key: value`` pairs for the scalar fields, taken verbatim."""
    fields: Dict[str, str] = {}
    for line in block.splitlines():
        if line[:1].isspace():
            continue
        key, sep, value = line.partition(":")
        key = key.strip()
        if sep and key in _SCALAR_KEYS and value.strip():
            fields[key] = value.strip()
    return fields


def parse_front_matter(content: str) -> Tuple[Dict[str, Any], str]:
    """Split ``content`` into its front matter mapping and the markdown body.

    YAML supplies structured values such as tag lists and timestamps. Plain
    ``title``/``date``/``tags`` lines are kept as written, so titles with a
    colon or a ``#`` survive, and front matter that is not valid YAML falls
    back to reading those lines alone.
    """
    match = _FRONT_MATTER_RE.match(content)
    if not match:
        raise PostParseError("invalid frontmatter")

    block = match.group(1)
    body = content[match.end() :].strip()
    lines = _line_fields(block)
    try:
        metadata = yaml.safe_load(block) or {}
    except yaml.YAMLError as exc:
        LOGGER.debug("Front matter is not valid YAML, reading lines: %s", exc)
        return dict(lines), body

    if not isinstance(metadata, dict):
        raise PostParseError("frontmatter is not a mapping")

    for key, value in lines.items():
        if value[0] in _YAML_SYNTAX or isinstance(metadata.get(key), date):
            continue
        metadata[key] = value

    return metadata, body


def parse_tags(raw: Any) -> List[str]:
    """Accept either a YAML list or a comma separated string."""
    if raw is None:
        return []
    if isinstance(raw, str):
        items = raw.split(",")
    elif isinstance(raw, (list, tuple)):
        items = [str(item) for item in raw]
    else:
        items = [str(raw)]
    return [item.strip() for item in items if item.strip()]


def _naive(value: datetime) -> datetime:
    """All post dates are naive; aware timestamps are converted to UTC first."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def parse_date(raw: Any) -> datetime:
    """Parse a post date into a naive datetime.

    A missing date gives :data:`UNDATED`, which sorts after every dated post.
    A date that is present but unreadable falls back to the current time.
    """
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return UNDATED
    if isinstance(raw, datetime):
        return _naive(raw)
    if isinstance(raw, date):
        return datetime(raw.year, raw.month, raw.day)

    text = str(raw).strip()
    try:
        return datetime.strptime(text, DATE_FORMAT)
    except ValueError:
        pass
    try:
        return _naive(datetime.fromisoformat(text.replace("Z", "+00:00")))
    except ValueError:
        LOGGER.warning("Unreadable date %r, using current time", raw)
        return datetime.now()


def parse_post(filename: str, content: str) -> Document:
    """Build a :class:`Document` from a markdown file's name and text."""
    metadata, body = parse_front_matter(content)
    slug = Path(filename).stem
    title = metadata.get("title")
    return Document(
        id=slug,
        title=str(title).strip() if title is not None else slug,
        body=body,
        tags=tuple(parse_tags(metadata.get("tags"))),
        published_at=parse_date(metadata.get("date")),
        slug=slug,
    )


def load_post(path: Path) -> Document:
    """Read and parse a single markdown file."""
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise PostParseError(f"unable to read {path}: {exc}") from exc
    return parse_post(path.name, content)
