"""Map storage names onto filesystem locations without escaping a base directory."""

from __future__ import annotations

import os
from pathlib import Path

from domain.exceptions import PathTraversalError


def resolve_path(base: str | os.PathLike[str], relative_key: str) -> Path:
    """Resolve ``relative_key`` under ``base`` and reject anything outside it.

    The check is made on the normalized path, so ``a/../../x`` is caught even
    though the raw string does not start with ``..``. Absolute keys replace
    the base when joined and are rejected the same way.

    Args:
        base: Directory the key must stay within
        relative_key: Slash-separated key, e.g. ``nested/file/foo.txt``

    Returns:
        Normalized absolute path equal to or nested within ``base``

    Raises:
        PathTraversalError: If the resolved path is outside ``base``

    """
    base_path = os.path.normpath(os.path.abspath(base))
    full_path = os.path.normpath(os.path.join(base_path, relative_key))
    relative = os.path.relpath(full_path, base_path)

    if (
        relative == os.pardir
        or relative.startswith(os.pardir + os.sep)
        or os.path.isabs(relative)
    ):
        msg = f"Path traversal detected: {relative_key!r}"
        raise PathTraversalError(msg)

    return Path(full_path)
