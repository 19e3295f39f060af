from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def build_ledger_entry(code: str, status: str, **fields: Any) -> dict[str, Any]:
    entry: dict[str, Any] = {
        "recorded_at": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "code": code,
        "status": status,
    }
    entry.update(fields)
    return entry


def safe_append_ledger_entry(path: Path, entry: dict[str, Any]) -> None:
    """Append a single JSON line to the run ledger file.

    This is best-effort: a batch should not fail if the ledger cannot be written.
    """

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(entry, ensure_ascii=False, separators=(",", ":"))
        with path.open("a", encoding="utf-8") as handle:
            handle.write(payload + "\n")
    except OSError as exc:
        logger.warning("Could not append to ledger %s: %s", path, exc)


def read_ledger_entries(path: Path) -> list[dict[str, Any]]:
    """Return every valid JSON object in a JSONL ledger, oldest first."""

    if not path.exists():
        return []

    entries: list[dict[str, Any]] = []
    for line in path.read_text(encoding="utf-8", errors="ignore").splitlines():
        line = line.strip()
        if not line:
            continue
        try:
            parsed = json.loads(line)
        except json.JSONDecodeError:
            continue
        if isinstance(parsed, dict):
            entries.append(parsed)
    return entries


def read_latest_ledger_entry(path: Path) -> dict[str, Any] | None:
    """Return the latest valid JSON entry from a JSONL ledger, or None if not available."""

    entries = read_ledger_entries(path)
    return entries[-1] if entries else None
