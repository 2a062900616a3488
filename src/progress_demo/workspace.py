"""Read-only workspace inspection used for narrative output."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from progress_demo.errors import ExternalCallError

EXCLUDED_DIRS = frozenset({"node_modules"})


@dataclass(frozen=True)
class WorkspaceFolder:
    name: str
    path: Path


def _visible(name: str) -> bool:
    return not name.startswith(".") and name not in EXCLUDED_DIRS


def _reraise(exc: OSError) -> None:
    raise exc


def _normalize_extensions(extensions: Iterable[str]) -> set[str]:
    normalized: set[str] = set()
    for ext in extensions:
        ext = ext.strip().lower()
        if not ext:
            continue
        normalized.add(ext if ext.startswith(".") else f".{ext}")
    return normalized


class WorkspaceInspector:
    """Enumerates files under one root. Every failure surfaces as ExternalCallError."""

    def __init__(self, root: Path | None, *, scan_limit: int = 100) -> None:
        self.root = root
        self.scan_limit = scan_limit

    def folders(self) -> list[WorkspaceFolder]:
        if self.root is None:
            return []
        try:
            if not self.root.is_dir():
                return []
        except OSError as exc:
            raise ExternalCallError(f"cannot read workspace {self.root}: {exc}") from exc
        return [WorkspaceFolder(name=self.root.name or str(self.root), path=self.root)]

    def primary_folder(self) -> WorkspaceFolder | None:
        folders = self.folders()
        return folders[0] if folders else None

    def find_files(self, extensions: Iterable[str] = (), *, include_hidden: bool = False) -> list[Path]:
        """Return up to ``scan_limit`` files relative to the root.

        Directories are walked top-down with siblings in name order; hidden
        and excluded directories are pruned before descending.
        """

        if self.root is None:
            return []
        wanted = _normalize_extensions(extensions)
        found: list[Path] = []
        try:
            for dirpath, dirnames, filenames in self.root.walk(on_error=_reraise):
                dirnames[:] = sorted(name for name in dirnames if include_hidden or _visible(name))
                for name in sorted(filenames):
                    if not include_hidden and name.startswith("."):
                        continue
                    if wanted and Path(name).suffix.lower() not in wanted:
                        continue
                    found.append((dirpath / name).relative_to(self.root))
                    if len(found) >= self.scan_limit:
                        return found
        except OSError as exc:
            logger.warning("workspace.scan.error root={} error={}", self.root, exc)
            raise ExternalCallError(f"cannot scan {self.root}: {exc}") from exc
        return found

    def has_file(self, name: str) -> bool:
        if self.root is None:
            return False
        try:
            for _, dirnames, filenames in self.root.walk(on_error=_reraise):
                dirnames[:] = [entry for entry in dirnames if entry not in EXCLUDED_DIRS]
                if name in filenames:
                    return True
        except OSError as exc:
            raise ExternalCallError(f"cannot search {self.root} for {name}: {exc}") from exc
        return False

    def top_level_entries(self) -> list[tuple[str, bool]]:
        """(name, is_dir) pairs for the visible entries directly under the root."""

        if self.root is None:
            return []
        try:
            entries = [
                (path.name, path.is_dir())
                for path in self.root.iterdir()
                if _visible(path.name)
            ]
        except OSError as exc:
            raise ExternalCallError(f"cannot list {self.root}: {exc}") from exc
        return sorted(entries, key=lambda item: (not item[1], item[0].casefold()))[: self.scan_limit]
