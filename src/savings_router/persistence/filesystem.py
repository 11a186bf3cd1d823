"""Run directories for persisted routing outputs."""

from __future__ import annotations

import json
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from ..config import settings

_LABEL_PATTERN = re.compile(r"[^A-Za-z0-9_-]+")


def run_directory_name(label: str | None, moment: datetime) -> str:
    """``routes[_<label>]_<UTC timestamp>``; the label is reduced to a safe slug."""
    slug = _LABEL_PATTERN.sub("-", (label or "").strip()).strip("-")
    stamp = moment.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
    return f"routes_{slug}_{stamp}" if slug else f"routes_{stamp}"


class FileStorage:
    """Writes each routing run into its own directory under ``<data_root>/outputs``."""

    def __init__(self, root: Path | None = None) -> None:
        self.output_root = (root or settings.data_root).resolve() / "outputs"
        self.output_root.mkdir(parents=True, exist_ok=True)

    def new_run(self, label: str | None = None) -> Path:
        run_dir = self.output_root / run_directory_name(label, datetime.now(timezone.utc))
        run_dir.mkdir(parents=True, exist_ok=False)
        return run_dir

    def write_json(self, path: Path, data: Any) -> None:
        self.write_text(path, json.dumps(data, ensure_ascii=False, indent=2))

    def write_text(self, path: Path, content: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8", newline="") as handle:
            handle.write(content)
