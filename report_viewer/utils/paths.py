"""Path helpers for report entries."""

# Windows extended-length paths must keep their backslashes
_EXTENDED_LENGTH_PREFIX = "\\\\?\\"


def to_slash(path: str) -> str:
    """Convert Windows separators in ``path`` to forward slashes."""
    if path.startswith(_EXTENDED_LENGTH_PREFIX):
        return path
    return path.replace("\\", "/")
