"""Export of collection summaries as inventory documents.

Writes the JSON document consumed by the rendering layers, either to a
file (atomically) or to standard output.
"""

import json
import logging
import os
import sys
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import TextIO

from bagpack.models.snapshot import CollectionSummary

logger = logging.getLogger(__name__)


class ExportError(Exception):
    """Raised when an inventory document cannot be written or read."""


def dumps_summary(summary: CollectionSummary) -> str:
    """Serialize a summary to an indented JSON document."""
    return json.dumps(summary.to_dict(), indent=2)


def export_summary(
    summary: CollectionSummary,
    path: Path | None = None,
    *,
    stream: TextIO | None = None,
) -> Path | None:
    """Write a summary to ``path``, or to ``stream`` (stdout) if no path is given.

    Files are written to a temporary sibling and renamed into place, so
    readers never observe a partial document.

    Args:
        summary: Summary to export.
        path: Destination file. Parent directories are created.
        stream: Output stream used when ``path`` is None.

    Returns:
        The resolved destination path, or None when written to a stream.

    Raises:
        ExportError: If the path is a directory or cannot be written.
    """
    document = dumps_summary(summary)

    if path is None:
        out = stream if stream is not None else sys.stdout
        out.write(document + "\n")
        out.flush()
        return None

    path = path.resolve()
    if path.is_dir():
        raise ExportError(f"Export path is a directory: {path}")

    tmp_path: Path | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            f.write(document + "\n")
        os.replace(str(tmp_path), str(path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ExportError(f"Failed to export: {e}") from e

    logger.debug("Exported %d packages to %s", len(summary.snapshot.packages), path)
    return path


def load_summary(path: Path) -> CollectionSummary:
    """Read an exported inventory document.

    Raises:
        ExportError: If the file cannot be read or is not a valid document.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ExportError(f"Failed to read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ExportError(f"Invalid JSON in {path}: {e}") from e

    try:
        return CollectionSummary.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise ExportError(f"Invalid inventory document {path}: {e}") from e
