"""Path Safety — traversal detection, filename sanitization, safe joining.

Invariants:
    - Classification is a pure function of the path text (no filesystem access)
    - ".." is traversal only as a whole component; ".gitignore" is safe
    - "~" anywhere in the string is unsafe, including mid-component
    - The empty path is safe (it means "no destination override")
    - safe_join returns None iff at least one part is unsafe

Design Decisions:
    - Both "/" and "\\" split components, so Windows-style input is judged the same way
    - sanitize_filename replaces illegal characters first and strips ".." last,
      so no replacement can reintroduce a ".." sequence
"""

import re
from typing import Sequence


SEPARATORS = ("/", "\\")
HOME_MARKER = "~"
PARENT_COMPONENT = ".."

_COMPONENT_SPLIT = re.compile(r"[/\\]")
# Separators, characters illegal on common filesystems, ASCII control characters
_UNSAFE_FILENAME_CHARS = re.compile(r'[/\\<>:"|?*\x00-\x1f\x7f]')


def has_traversal(path: str) -> bool:
    """Parent-directory component or home-expansion marker present."""
    if HOME_MARKER in path:
        return True
    return PARENT_COMPONENT in _COMPONENT_SPLIT.split(path)


def is_safe(path: str) -> bool:
    return not has_traversal(path)


def sanitize_filename(name: str) -> str:
    """Single path component safe for any common filesystem."""
    replaced = _UNSAFE_FILENAME_CHARS.sub("_", name)
    return replaced.replace(PARENT_COMPONENT, "")


def safe_join(base: str, parts: Sequence[str]) -> str | None:
    """Join sanitized parts under base. None if any part is unsafe."""
    if not all(is_safe(part) for part in parts):
        return None
    cleaned = [p for p in (sanitize_filename(part) for part in parts) if p]
    if not cleaned:
        return base
    if not base:
        return "/".join(cleaned)
    root = base[:-1] if base.endswith(SEPARATORS) else base
    return "/".join([root, *cleaned])
