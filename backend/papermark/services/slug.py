"""URL-safe slugs for folder paths."""

import re
import unicodedata

_REPLACEMENTS = (("&", " and "), ("@", " at "))


def slugify(value: str) -> str:
    """Lowercase, ASCII, hyphen-separated form of ``value``.

    "Q1 Reports (2)" -> "q1-reports-2", "fooBar" -> "foo-bar".
    """
    for src, dst in _REPLACEMENTS:
        value = value.replace(src, dst)
    value = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    value = re.sub(r"([A-Z]+)([A-Z][a-z\d]+)", r"\1 \2", value)
    value = re.sub(r"([a-z\d])([A-Z])", r"\1 \2", value)
    return re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")


def join_path(parent_path: str | None, slug: str) -> str:
    """Folder path for ``slug`` under ``parent_path`` ("a/b" or None for root)."""
    return f"/{parent_path}/{slug}" if parent_path else f"/{slug}"
