"""Undo/Redo history for MindPad.

History is a pair of stacks of serialized tree snapshots. A snapshot is
taken before every mutation; undo and redo swap the active tree for a
deserialized copy, so restored trees never share node objects with the
tree they replace.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from mindpad.errors import ParseError
from mindpad.serialize import deserialize, serialize
from mindpad.tree import Node

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 1000


@dataclass
class Snapshot:
    """A serialized tree plus the description of the change that followed it."""
    payload: str
    description: str = ""


class UndoManager:
    """Manages linear undo/redo history of whole-tree snapshots."""

    def __init__(self, max_undo: int = DEFAULT_HISTORY_LIMIT):
        self.max_undo = max_undo
        self._undo_stack: List[Snapshot] = []
        self._redo_stack: List[Snapshot] = []

        # Callbacks
        self.on_state_changed: Optional[Callable[[], None]] = None

    @property
    def can_undo(self) -> bool:
        """Check if undo is available."""
        return len(self._undo_stack) > 0

    @property
    def can_redo(self) -> bool:
        """Check if redo is available."""
        return len(self._redo_stack) > 0

    @property
    def undo_depth(self) -> int:
        return len(self._undo_stack)

    @property
    def redo_depth(self) -> int:
        return len(self._redo_stack)

    @property
    def undo_description(self) -> str:
        """Get description of next undo action."""
        if self._undo_stack:
            return self._undo_stack[-1].description
        return ""

    @property
    def redo_description(self) -> str:
        """Get description of next redo action."""
        if self._redo_stack:
            return self._redo_stack[-1].description
        return ""

    def snapshot(self, tree: Node, description: str = ""):
        """Record ``tree`` as it is before a mutation.

        Any redo history is discarded. When the undo stack grows past
        ``max_undo`` the oldest snapshots are dropped.
        """
        self._undo_stack.append(Snapshot(serialize(tree), description))
        self._redo_stack.clear()

        # Trim history if needed
        while len(self._undo_stack) > self.max_undo:
            self._undo_stack.pop(0)

        logger.debug("Snapshot %r taken (%d undo entries)", description, len(self._undo_stack))
        self._notify_changed()

    def undo(self, current: Node) -> Optional[Node]:
        """Return the tree to restore for undo, or None if there is nothing to undo.

        ``current`` is recorded for redo only once the snapshot has been
        decoded. A snapshot that fails to decode is discarded and the
        ParseError propagates.
        """
        return self._step(current, self._undo_stack, self._redo_stack, "undo")

    def redo(self, current: Node) -> Optional[Node]:
        """Return the tree to restore for redo, or None if there is nothing to redo."""
        return self._step(current, self._redo_stack, self._undo_stack, "redo")

    def clear(self):
        """Clear all history."""
        self._undo_stack.clear()
        self._redo_stack.clear()
        self._notify_changed()

    def _step(self, current: Node, source: List[Snapshot],
              target: List[Snapshot], name: str) -> Optional[Node]:
        if not source:
            return None

        entry = source.pop()
        try:
            restored = deserialize(entry.payload)
        except ParseError:
            logger.warning("Discarding unreadable %s snapshot %r", name, entry.description)
            self._notify_changed()
            raise

        target.append(Snapshot(serialize(current), entry.description))
        if target is self._undo_stack:
            while len(self._undo_stack) > self.max_undo:
                self._undo_stack.pop(0)

        logger.debug("%s %r (%d undo / %d redo)", name.capitalize(), entry.description,
                     len(self._undo_stack), len(self._redo_stack))
        self._notify_changed()
        return restored

    def _notify_changed(self):
        """Notify that undo/redo state changed."""
        if self.on_state_changed:
            self.on_state_changed()
