"""
Repository URL validation and parsing.

Both functions are pure: no network access, no store access.
"""

import re
from dataclasses import dataclass
from typing import Dict, Optional, Pattern
from urllib.parse import urlparse

from app.config import Platform

_SEGMENT = r"[^/\s?#]+"

REPOSITORY_URL_PATTERNS: Dict[Platform, Pattern[str]] = {
    Platform.GITHUB: re.compile(rf"^https?://(www\.)?github\.com/{_SEGMENT}/{_SEGMENT}/?$"),
    Platform.GITLAB: re.compile(rf"^https?://(www\.)?gitlab\.com/{_SEGMENT}/{_SEGMENT}/?$"),
    Platform.REPLIT: re.compile(rf"^https?://(www\.)?replit\.com/@{_SEGMENT}/{_SEGMENT}/?$"),
    Platform.LOVABLE: re.compile(
        rf"^https?://(www\.)?lovable\.(dev|app)/{_SEGMENT}/{_SEGMENT}/?$"
    ),
}

REPOSITORY_URL_EXAMPLES: Dict[Platform, str] = {
    Platform.GITHUB: "https://github.com/username/repo",
    Platform.GITLAB: "https://gitlab.com/username/repo",
    Platform.REPLIT: "https://replit.com/@username/repo",
    Platform.LOVABLE: "https://lovable.dev/username/project",
}


@dataclass(frozen=True)
class ParsedRepositoryUrl:
    owner: str
    name: str


def validate_repository_url(url: str, platform: Platform) -> bool:
    pattern = REPOSITORY_URL_PATTERNS.get(Platform(platform))
    if pattern is None or not url:
        return False
    return pattern.match(url) is not None


def parse_repository_url(url: str, platform: Platform) -> Optional[ParsedRepositoryUrl]:
    """
    Extract owner and repository name from the first two path segments.

    Returns None when the string is not a well formed URL or the path holds fewer
    than two segments. Replit owners lose their leading `@`.
    """
    try:
        parsed = urlparse(url)
    except (TypeError, ValueError):
        return None

    if not parsed.scheme or not parsed.netloc:
        return None

    segments = [segment for segment in parsed.path.split("/") if segment]
    if len(segments) < 2:
        return None

    owner, name = segments[0], segments[1]
    if Platform(platform) == Platform.REPLIT:
        owner = owner.lstrip("@")

    if not owner:
        return None

    return ParsedRepositoryUrl(owner=owner, name=name)
