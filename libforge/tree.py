"""
Libforge Tree - Staged virtual file tree

Generation never writes to disk directly. Every write and deletion is staged
here and only materialized by ``commit()``, so a caller sees either the full
set of edits or none. Reads always observe staged state, which lets several
generations run one after another against the same tree.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class ChangeKind(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


@dataclass
class FileChange:
    """A single staged edit."""

    path: str  # Workspace-relative, forward slashes
    kind: ChangeKind
    content: str | None = None


def normalize_path(path: str | Path) -> str:
    """Normalize to a workspace-relative POSIX path."""
    parts = [p for p in str(path).replace("\\", "/").split("/") if p not in ("", ".")]
    return "/".join(parts)


class VirtualTree:
    """
    File tree with staged, all-or-nothing writes.

    Backed by an optional workspace directory on disk and/or an in-memory
    mapping of initial files (handy in tests).
    """

    def __init__(self, root: Path | None = None, files: dict[str, str] | None = None):
        self.root = Path(root) if root is not None else None
        self._base: dict[str, str] = {normalize_path(p): c for p, c in (files or {}).items()}
        # path -> content, None marks a staged deletion
        self._staged: dict[str, str | None] = {}

    # ═══════════════════════════════════════════════════════════════════════
    # READS
    # ═══════════════════════════════════════════════════════════════════════

    def _exists_in_base(self, path: str) -> bool:
        if path in self._base:
            return True
        return self.root is not None and (self.root / path).is_file()

    def exists(self, path: str | Path) -> bool:
        path = normalize_path(path)
        if path in self._staged:
            return self._staged[path] is not None
        return self._exists_in_base(path)

    def read(self, path: str | Path) -> str:
        path = normalize_path(path)
        if path in self._staged:
            content = self._staged[path]
            if content is None:
                raise FileNotFoundError(path)
            return content
        if path in self._base:
            return self._base[path]
        if self.root is not None and (self.root / path).is_file():
            return (self.root / path).read_text(encoding="utf-8")
        raise FileNotFoundError(path)

    def read_json(self, path: str | Path) -> Any:
        return json.loads(self.read(path))

    # ═══════════════════════════════════════════════════════════════════════
    # STAGING
    # ═══════════════════════════════════════════════════════════════════════

    def write(self, path: str | Path, content: str) -> None:
        path = normalize_path(path)
        self._staged[path] = content
        logger.debug("Staged write: %s", path)

    def write_json(self, path: str | Path, data: Any) -> None:
        self.write(path, json.dumps(data, indent=2, ensure_ascii=False) + "\n")

    def delete(self, path: str | Path) -> None:
        path = normalize_path(path)
        if not self.exists(path):
            return
        if path in self._staged and not self._exists_in_base(path):
            # Never existed outside the staging area
            del self._staged[path]
        else:
            self._staged[path] = None
        logger.debug("Staged delete: %s", path)

    def changes(self) -> list[FileChange]:
        """List staged edits in the order they were first staged."""
        result = []
        for path, content in self._staged.items():
            if content is None:
                result.append(FileChange(path=path, kind=ChangeKind.DELETE))
            elif self._exists_in_base(path):
                result.append(FileChange(path=path, kind=ChangeKind.UPDATE, content=content))
            else:
                result.append(FileChange(path=path, kind=ChangeKind.CREATE, content=content))
        return result

    def discard(self) -> None:
        """Drop every staged edit."""
        self._staged.clear()

    def commit(self) -> list[FileChange]:
        """
        Apply all staged edits.

        Edits land in the on-disk workspace when the tree has a root, and in
        the in-memory base otherwise.

        Returns:
            The list of applied changes
        """
        changes = self.changes()

        for change in changes:
            if change.kind == ChangeKind.DELETE:
                self._base.pop(change.path, None)
                if self.root is not None and (self.root / change.path).is_file():
                    (self.root / change.path).unlink()
                continue

            if self.root is not None:
                full_path = self.root / change.path
                full_path.parent.mkdir(parents=True, exist_ok=True)
                full_path.write_text(change.content, encoding="utf-8")
            else:
                self._base[change.path] = change.content

        self._staged.clear()
        logger.info("Committed %d change(s)%s", len(changes), f" to {self.root}" if self.root else "")
        return changes
