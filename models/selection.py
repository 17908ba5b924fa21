"""Multi-item selection state."""

from collections.abc import Iterable

from pydantic import BaseModel, Field

from models.file_node import FileNode


class Selection(BaseModel):
    """Set of selected node ids for multi-select gestures.

    The selection is never checked against the store; callers clear it on
    directory change and drop deleted ids themselves.

    Args:
        selected: Selected node ids, in the order they were added.
    """

    selected: list[str] = Field(default_factory=list, description="Selected node ids")

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.selected

    @property
    def ids(self) -> set[str]:
        """Return the selected ids as a set."""
        return set(self.selected)

    @property
    def count(self) -> int:
        """Number of selected ids."""
        return len(self.selected)

    def toggle(self, node_id: str) -> bool:
        """Add ``node_id`` if absent, remove it if present.

        Returns:
            True if the id is selected after the call.
        """
        if node_id in self.selected:
            self.selected.remove(node_id)
            return False
        self.selected.append(node_id)
        return True

    def select_range(self, node_ids: Iterable[str]) -> None:
        """Add every id in ``node_ids`` to the selection."""
        for node_id in node_ids:
            if node_id not in self.selected:
                self.selected.append(node_id)

    def discard_many(self, node_ids: Iterable[str]) -> None:
        """Drop the given ids if they are selected."""
        drop = set(node_ids)
        self.selected = [nid for nid in self.selected if nid not in drop]

    def clear(self) -> bool:
        """Empty the selection.

        Returns:
            True if anything was removed, False if it was already empty.
        """
        if not self.selected:
            return False
        self.selected = []
        return True

    @staticmethod
    def range_between(listing: list[FileNode], anchor_id: str, target_id: str) -> list[str]:
        """Return the ids of the contiguous run between two listing entries.

        Used for shift-click: the run is inclusive and in listing order
        regardless of which end was clicked first. If the anchor is not in
        the listing, only the target is returned.

        Args:
            listing: The projected listing currently shown.
            anchor_id: The previously clicked id.
            target_id: The id just clicked.

        Returns:
            Ids to pass to ``select_range`` (empty if the target is absent).
        """
        order = [node.id for node in listing]
        if target_id not in order:
            return []
        end = order.index(target_id)
        if anchor_id not in order:
            return [target_id]
        start = order.index(anchor_id)
        low, high = min(start, end), max(start, end)
        return order[low : high + 1]
