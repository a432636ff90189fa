"""
Document persistence — render and write rust-project.json.

Writes are atomic (write to temp file, then rename) so an interrupted
run leaves the previous document in place rather than a truncated one.
"""

from __future__ import annotations

import json
import logging
import tempfile
from pathlib import Path

from rpgen.core.errors import WriteError
from rpgen.core.models.project import ProjectDocument

logger = logging.getLogger(__name__)


def render_document(document: ProjectDocument) -> bytes:
    """Serialize a document to canonical JSON bytes.

    Equal documents always render to identical bytes.  The models only
    hold strings, ints and lists, so serialization cannot fail here.
    """
    content = json.dumps(document.to_json_dict(), indent=2, ensure_ascii=False) + "\n"
    return content.encode("utf-8")


def write_document(document: ProjectDocument, path: Path) -> None:
    """Write a document to ``path``, replacing any existing file.

    Raises:
        WriteError: If the file cannot be created or replaced.
    """
    content = render_document(document)
    try:
        fd, tmp_path = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}_",
            suffix=".tmp",
        )
        tmp = Path(tmp_path)
        try:
            with open(fd, "wb") as fh:
                fh.write(content)
            tmp.replace(path)
            logger.debug("Document written to %s (%d bytes)", path, len(content))
        except Exception:
            tmp.unlink(missing_ok=True)
            raise
    except OSError as e:
        logger.error("Failed to write %s: %s", path, e)
        raise WriteError(f"Cannot write {path}: {e}") from e
