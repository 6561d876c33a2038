"""
Per-invocation local workspace.

Execution environments are reused between invocations, so every invocation
gets its own directory under the workspace root. Record files live at
``<root>/<invocation-id>/input/<key>`` and ``<root>/<invocation-id>/output/<key>``
and the whole directory is removed when the invocation ends.
"""
import logging
import re
import shutil
import sys
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from ..core.exceptions import LocalIOError
from ..core.models.work_item import LocalWorkItem

logger = logging.getLogger(__name__)

_UNSAFE_ID_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


class InvocationWorkspace:
    """Local directory tree owned by a single invocation."""

    def __init__(self, path: Path):
        self.path = path
        self.input_root = path / "input"
        self.output_root = path / "output"

    def work_item_for(self, key: str) -> LocalWorkItem:
        """
        Derive the local input/output paths for an object key.

        Parent directories are created on demand; existing ones are fine.

        Raises:
            LocalIOError: If the key would escape the workspace or a
                directory cannot be created
        """
        relative = self._relative_key(key)
        item = LocalWorkItem(
            input_path=self.input_root / relative,
            output_path=self.output_root / relative
        )
        for directory in (item.input_path.parent, item.output_path.parent):
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise LocalIOError(f"Cannot create directory: {e}", operation="mkdir", resource=str(directory)) from e
        return item

    def write_input(self, item: LocalWorkItem, data: bytes) -> Path:
        """
        Write the fetched object to the item's input path in full.

        Raises:
            LocalIOError: If the file cannot be written
        """
        try:
            with open(item.input_path, "wb") as handle:
                handle.write(data)
        except OSError as e:
            raise LocalIOError(f"Cannot write input file: {e}", operation="write", resource=str(item.input_path)) from e
        return item.input_path

    def _relative_key(self, key: str) -> Path:
        parts = [part for part in key.split("/") if part not in ("", ".")]
        if not parts or ".." in parts:
            raise LocalIOError(f"Object key cannot be mapped to a local path: {key!r}", operation="mkdir", resource=key)
        return Path(*parts)


@contextmanager
def invocation_workspace(root: str, invocation_id: Optional[str] = None) -> Iterator[InvocationWorkspace]:
    """
    Create a fresh workspace for one invocation and remove it afterwards.

    Args:
        root: Directory under which invocation workspaces are created
        invocation_id: Identifier used for the directory name (Lambda request id);
            a random one is generated when missing

    Raises:
        LocalIOError: If the workspace directory cannot be created
    """
    safe_id = _UNSAFE_ID_CHARS.sub("_", invocation_id or "") or uuid.uuid4().hex
    path = Path(root) / f"invocation-{safe_id}-{uuid.uuid4().hex[:8]}"

    try:
        path.mkdir(parents=True, exist_ok=False)
    except OSError as e:
        raise LocalIOError(f"Cannot create invocation workspace: {e}", operation="mkdir", resource=str(path)) from e

    logger.debug("Invocation workspace created", extra={"workspace": str(path)})
    try:
        yield InvocationWorkspace(path)
    finally:
        _remove_tree(path)
        logger.debug("Invocation workspace removed", extra={"workspace": str(path)})


def _remove_tree(path: Path) -> None:
    # onerror is deprecated from 3.12 on in favour of onexc
    if sys.version_info >= (3, 12):
        shutil.rmtree(path, onexc=_log_cleanup_error)
    else:
        shutil.rmtree(path, onerror=lambda function, failed, exc_info: _log_cleanup_error(function, failed, exc_info[1]))


def _log_cleanup_error(function, path, error: BaseException) -> None:
    logger.warning("Failed to clean up workspace entry", extra={
        "path": path,
        "error": str(error)
    })
