"""
imagepub — Version lookup in a key=value properties file.
"""

from __future__ import annotations

from pathlib import Path

from imagepub.errors import PropertiesNotFoundError

DEFAULT_VERSION_KEY = "djl_version"
COMMENT_PREFIXES = ("#", "!")


def parse_properties(text: str) -> dict[str, str]:
    """
    Parse one key=value pair per line.

    Comments and lines without '=' are skipped. The value is everything after
    the first '='. A repeated key keeps its last value.
    """
    props: dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith(COMMENT_PREFIXES) or "=" not in line:
            continue
        key, value = line.split("=", 1)
        props[key.strip()] = value.strip()
    return props


def resolve_version(text: str, key: str = DEFAULT_VERSION_KEY) -> str | None:
    return parse_properties(text).get(key) or None


def read_version(path: str | Path, key: str = DEFAULT_VERSION_KEY) -> str | None:
    path = Path(path)
    if not path.is_file():
        raise PropertiesNotFoundError(str(path))
    return resolve_version(path.read_text(encoding="utf-8"), key)
