"""Local file I/O utilities."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Iterator

logger = logging.getLogger(__name__)


def read_jsonl_local(path: str | Path) -> Iterator[dict[str, Any]]:
    """Yield JSON objects from a local JSONL file.

    Blank lines are ignored. Lines that are not valid JSON objects are
    logged and skipped.
    """
    with Path(path).open("rb") as f:
        for line_number, raw in enumerate(f, start=1):
            if not raw.strip():
                continue
            try:
                record = json.loads(raw.decode("utf-8"))
            except (UnicodeDecodeError, json.JSONDecodeError) as exc:
                logger.warning("Skipping malformed line %d in %s: %s", line_number, path, exc)
                continue
            if not isinstance(record, dict):
                logger.warning("Skipping non-object line %d in %s", line_number, path)
                continue
            yield record


def save_json_local(
    document: dict[str, Any],
    prefix: str,
    timestamp: datetime,
    output_dir: str = "output",
) -> Path:
    """Save a JSON document to a timestamped local file.

    Args:
        document: JSON-serializable mapping to write.
        prefix: Filename prefix (e.g., "clusters").
        timestamp: Timestamp to include in filename.
        output_dir: Directory to save to (default: "output").

    Returns:
        Path to the created file.
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)
    filename = f"{prefix}_{timestamp.strftime('%Y_%m_%d_%H_%M')}.json"
    filepath = output_path / filename
    with filepath.open("w", encoding="utf-8") as f:
        json.dump(document, f, default=str, ensure_ascii=False, indent=2)

    logger.info("Saved %s to %s", prefix, filepath)
    return filepath
