from __future__ import annotations

import re
import shutil
from datetime import UTC, datetime
from pathlib import Path

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9_-]+")


class ArtifactManager:
    """Creates and manages healing artifact files."""

    def __init__(self, root: str | Path = "artifacts") -> None:
        self.root = Path(root)
        self.markup_root = self.root / "markup_snapshots"
        self._ensure_structure()

    def _ensure_structure(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        self.markup_root.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def timestamp() -> str:
        return datetime.now(UTC).strftime("%Y%m%dT%H%M%S%fZ")

    @staticmethod
    def slug(selector: str) -> str:
        return _UNSAFE_CHARS.sub("_", selector).strip("_")[:80] or "selector"

    def write_markup_snapshot(self, selector: str, markup: str, timestamp: str | None = None) -> Path:
        stamp = timestamp or self.timestamp()
        path = self.markup_root / f"{stamp}_{self.slug(selector)}.html"
        path.write_text(markup, encoding="utf-8")
        return path

    def reset(self) -> Path:
        self._ensure_structure()
        for child in self.root.iterdir():
            if child.is_file() and child.name != ".gitkeep":
                child.unlink()
        self._clear_directory(self.markup_root)
        return self.root

    @staticmethod
    def _clear_directory(directory: Path) -> None:
        for child in directory.iterdir():
            if child.is_dir():
                shutil.rmtree(child)
            elif child.is_file() and child.name != ".gitkeep":
                child.unlink()
