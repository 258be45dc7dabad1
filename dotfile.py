"""
Shared YAML dotfile I/O for the keyfile and client-data stores.
"""

import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger

from exceptions import PersistenceError

def read_mapping(path: Path) -> Optional[Dict[str, Any]]:
    """
    Load a YAML mapping from ``path``.

    Returns None when the file does not exist. Anything other than a
    mapping (or an empty file) is reported as a PersistenceError.
    """
    if not path.exists():
        return None

    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except Exception as e:
        raise PersistenceError(path, f"Could not read dotfile ({e})") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise PersistenceError(path, "Dotfile does not contain a mapping")
    return data

def write_mapping(path: Path, data: Dict[str, Any]) -> None:
    """
    Replace ``path`` with ``data`` serialized as YAML.

    The content goes to a temporary file in the same directory which is
    fsynced and then renamed over the destination, so a failed write leaves
    the previous file untouched.
    """
    fd: Optional[int] = None
    tmp_path: Optional[str] = None

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=str(path.parent),
            prefix=path.name,
            suffix=".tmp",
            text=True,
        )

        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            fd = None  # owned by handle now
            yaml.safe_dump(data, handle, default_flow_style=False, sort_keys=True)
            handle.flush()
            os.fsync(handle.fileno())

        os.replace(tmp_path, path)
        tmp_path = None
        logger.debug(f"Wrote dotfile {path}")
    except Exception as e:
        logger.error(f"Dotfile write failed for {path}: {e}")
        raise PersistenceError(path, f"Could not write dotfile ({e})") from e
    finally:
        if fd is not None:
            os.close(fd)
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except FileNotFoundError:
                pass
