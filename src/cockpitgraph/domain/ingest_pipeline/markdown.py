"""Discover images and downloadable assets referenced from markdown prose."""

from __future__ import annotations

import mimetypes
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final
from urllib.parse import urlsplit

if TYPE_CHECKING:
    from collections.abc import Iterator

MARKDOWN_IMAGE_PATTERN: Final = re.compile(r"!\[[^\]]*\]\(([^)]*)\)")
# the lookbehind keeps image syntax from also counting as a link
MARKDOWN_LINK_PATTERN: Final = re.compile(r"(?<!!)\[[^\]]*\]\(([^)]*)\)")

HTML_MEDIA_TYPE: Final[str] = "text/html"


@dataclass(slots=True)
class MarkdownReferences:
    images: list[str] = field(default_factory=list[str])
    assets: list[str] = field(default_factory=list[str])


def scan_markdown(markdown: str) -> MarkdownReferences:
    """Collect image targets and media-typed link targets, in order of appearance."""

    references = MarkdownReferences()
    references.images.extend(iter_targets(MARKDOWN_IMAGE_PATTERN, markdown))
    references.assets.extend(
        target for target in iter_targets(MARKDOWN_LINK_PATTERN, markdown) if is_asset_link(target)
    )
    return references


def iter_targets(pattern: re.Pattern[str], markdown: str) -> Iterator[str]:
    position = 0
    while (match := pattern.search(markdown, position)) is not None:
        position = match.end()
        target = _strip_title(match.group(1))
        if target:
            yield target


def is_asset_link(target: str) -> bool:
    """True when the target's extension maps to a non-HTML media type."""

    media_type = guess_media_type(target)
    return media_type is not None and media_type != HTML_MEDIA_TYPE


def guess_media_type(target: str) -> str | None:
    path = urlsplit(target).path or target
    media_type, _encoding = mimetypes.guess_type(path, strict=False)
    return media_type


def _strip_title(raw: str) -> str:
    # [text](url "title") and [text](<url>)
    target = raw.strip()
    if target.startswith("<") and ">" in target:
        return target[1 : target.index(">")].strip()
    return target.split(maxsplit=1)[0] if target else ""
