"""Abstract grid store.

WHY: write_page(), read_all() and append_records() work with any backend
that can hand over and replace a grid of text cells. This base class
fixes that contract.

HOW: BaseGridStore is an ABC with two requirements, get_grid() and
put_grid(). append_rows() and clear_tab() have read-modify-write
defaults that backends with native operations override.

RULES:
- get_grid() returns rows of text cells, header first; rows may be ragged
- get_grid() of an empty tab returns []
- put_grid() replaces the whole tab content
- One request/response pair per operation; the engine never retries
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence


class BaseGridStore(ABC):
    """Abstract base for grid backends.

    To add a new backend:
    1. Subclass BaseGridStore
    2. Implement get_grid() and put_grid()
    3. Optionally override append_rows() / clear_tab() with native calls
    """

    @abstractmethod
    def get_grid(self, page_id: str, tab_name: str) -> list[list[str]]:
        """Return every row of the tab, header row first."""

    @abstractmethod
    def put_grid(self, page_id: str, tab_name: str, grid: Sequence[Sequence[str]]) -> None:
        """Replace the tab's content with the given rows."""

    def append_rows(self, page_id: str, tab_name: str, rows: Sequence[Sequence[str]]) -> None:
        """Append rows after the tab's existing content."""
        grid = self.get_grid(page_id, tab_name)
        self.put_grid(page_id, tab_name, list(grid) + [list(row) for row in rows])

    def clear_tab(self, page_id: str, tab_name: str) -> None:
        """Remove all content from the tab."""
        self.put_grid(page_id, tab_name, [])
