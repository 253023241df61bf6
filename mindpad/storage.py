"""File access for MindPad: data directories, map files and exports."""

import logging
import os
import tempfile
from pathlib import Path
from typing import List, Union

from mindpad.errors import ReadError, WriteError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def get_data_dir() -> Path:
    """Get the application data directory.

    ``MINDPAD_DATA_DIR`` overrides the default ``~/.local/share/mindpad``.
    """
    override = os.environ.get("MINDPAD_DATA_DIR")
    data_dir = Path(override).expanduser() if override else Path.home() / ".local" / "share" / "mindpad"
    data_dir.mkdir(parents=True, exist_ok=True)
    (data_dir / "maps").mkdir(exist_ok=True)
    (data_dir / "exports").mkdir(exist_ok=True)
    return data_dir


def get_maps_dir() -> Path:
    """Directory holding saved maps."""
    return get_data_dir() / "maps"


def get_export_dir() -> Path:
    """Get the default export directory."""
    return get_data_dir() / "exports"


def ensure_json_name(name: str) -> str:
    """Append ``.json`` unless the name already ends with it (any case)."""
    if not name.lower().endswith(".json"):
        name += ".json"
    return name


def read_text(path: PathLike) -> str:
    """Read a UTF-8 text file, raising ReadError on any failure."""
    path = Path(path)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Could not read %s: %s", path, exc)
        raise ReadError(f"Could not read {path}: {exc}") from exc


def write_text(path: PathLike, content: str) -> Path:
    """Write ``content`` to ``path`` atomically and return the resolved path.

    The text is written to a temporary file next to the target and moved
    into place, so a failed write leaves any existing file untouched.
    """
    path = Path(path).expanduser()
    tmp_name = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", dir=str(path.parent),
            prefix=f".{path.name}.", suffix=".tmp", delete=False,
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(content)
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        logger.warning("Could not write %s: %s", path, exc)
        raise WriteError(f"Could not write {path}: {exc}") from exc

    logger.info("Wrote %s (%d bytes)", path, len(content.encode("utf-8")))
    return path.resolve()


def list_saved_maps() -> List[str]:
    """Names of the ``.json`` maps in the maps directory, sorted."""
    return sorted(p.name for p in get_maps_dir().glob("*.json") if p.is_file())
