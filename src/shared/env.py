"""Resolve credentials mounted as files (Docker/Kubernetes secrets)."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, List

logger = logging.getLogger(__name__)

SECRET_PREFIXES = ("SWITCHBOT_",)


def load_secret_file_variables(prefixes: Iterable[str] = SECRET_PREFIXES) -> List[str]:
    """
    Expose the contents of ``<KEY>_FILE`` variables as ``<KEY>``.

    Only keys starting with one of ``prefixes`` are considered, so unrelated
    ``*_FILE`` variables (``LOG_FILE`` and the like) are left alone. A value
    already present in the environment wins over the file. Unreadable files
    are logged and skipped.

    Returns:
        The names of the variables that were populated.
    """
    allowed = tuple(prefixes)
    resolved: List[str] = []

    for key, file_path in list(os.environ.items()):
        if not key.endswith("_FILE") or not key.startswith(allowed):
            continue
        target_key = key[: -len("_FILE")]
        if os.environ.get(target_key) or not file_path:
            continue
        try:
            os.environ[target_key] = Path(file_path).read_text(encoding="utf-8").strip()
            resolved.append(target_key)
        except FileNotFoundError as exc:
            logger.warning(
                "env.secret_file.missing",
                extra={"key": key, "path": file_path, "error": str(exc)},
            )
        except UnicodeDecodeError as exc:
            logger.warning(
                "env.secret_file.decode_failed",
                extra={"key": key, "path": file_path, "error": str(exc)},
            )
        except OSError as exc:
            logger.warning(
                "env.secret_file.load_failed",
                extra={"key": key, "path": file_path, "error": str(exc)},
            )

    return resolved
