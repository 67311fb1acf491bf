"""Common CLI helper utilities."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any


def setup_logging(level: int | str = logging.INFO) -> None:
    """Configure standard logging format for CLI tools."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def dump_json(data: Any, pretty: bool = False) -> str:
    """Serialize ``data`` to JSON, indented when ``pretty`` is set."""
    return json.dumps(data, default=str, ensure_ascii=False, indent=2 if pretty else None)


def save_json_local(
    data: Any,
    prefix: str,
    timestamp: datetime,
    output_dir: str = "output",
    pretty: bool = False,
) -> Path:
    """Save a JSON document to a local file.

    Args:
        data: JSON-serializable value to save.
        prefix: Filename prefix (e.g., the input file stem).
        timestamp: Timestamp to include in filename.
        output_dir: Directory to save to (default: "output").
        pretty: Indent the JSON output.

    Returns:
        Path to the created file.
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)
    filename = f"{prefix}_{timestamp.strftime('%Y_%m_%d_%H_%M')}.json"
    filepath = output_path / filename
    filepath.write_text(dump_json(data, pretty) + "\n")
    return filepath
