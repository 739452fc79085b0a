"""Materialized-path grammar of the virtual file hierarchy.

A node's path is its parent's path followed by ``/<kind>/<node_id>`` where
kind is ``folders`` or ``files``; root-level nodes hang off ``/global``. The
segment count of a path is stored next to it as ``depth`` so that direct
children are ``prefix match + depth == parent depth + 2``.
"""

import secrets
import string
import time
from typing import Final

from src.teamhub.models.files import LOCAL_ID_PREFIX, is_local_id  # noqa: F401

ROOT_PATH: Final[str] = "/global"
FOLDER_KIND: Final[str] = "folders"
FILE_KIND: Final[str] = "files"

_LOCAL_ID_ALPHABET: Final[str] = string.ascii_lowercase + string.digits


def segment_count(path: str) -> int:
    return len([segment for segment in path.split("/") if segment])


ROOT_DEPTH: Final[int] = segment_count(ROOT_PATH)


def node_kind(is_folder: bool) -> str:
    return FOLDER_KIND if is_folder else FILE_KIND


def child_path(parent_path: str, is_folder: bool, node_id: str) -> str:
    if "/" in node_id:
        raise ValueError(f"Node id may not contain '/': {node_id!r}")
    return f"{parent_path}/{node_kind(is_folder)}/{node_id}"


def child_depth(parent_path: str) -> int:
    return segment_count(parent_path) + 2


def is_direct_child(path: str, parent_path: str) -> bool:
    """Whether ``path`` is exactly one ``<kind>/<id>`` step below ``parent_path``."""
    if not path.startswith(f"{parent_path}/"):
        return False
    remainder = path[len(parent_path) + 1 :].split("/")
    return len(remainder) == 2 and remainder[0] in (FOLDER_KIND, FILE_KIND) and bool(remainder[1])


def is_within(path: str, ancestor_path: str) -> bool:
    """Whether ``path`` is ``ancestor_path`` itself or lies below it."""
    return path == ancestor_path or path.startswith(f"{ancestor_path}/")


def rebase(path: str, old_prefix: str, new_prefix: str) -> str:
    """Move ``path`` from under ``old_prefix`` to under ``new_prefix``."""
    if not is_within(path, old_prefix):
        raise ValueError(f"{path!r} is not under {old_prefix!r}")
    return new_prefix + path[len(old_prefix) :]


def new_local_id() -> str:
    """Identifier for a node the storage provider never acknowledged.

    Format: ``local_<epoch ms>_<9 random chars>``.
    """
    suffix = "".join(secrets.choice(_LOCAL_ID_ALPHABET) for _ in range(9))
    return f"{LOCAL_ID_PREFIX}{int(time.time() * 1000)}_{suffix}"
