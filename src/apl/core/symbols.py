"""
Symbol table: named storage cells.

A cell is created only by a ``data`` declaration, changed only by a ``:``
assignment, and lives as long as the interpreter that owns the table.
"""

from __future__ import annotations

import logging
import math

from pydantic import BaseModel, ConfigDict

from apl.core.nodes import Value

logger = logging.getLogger(__name__)


class Datul(BaseModel):
    """A storage cell holding one optional number or text value."""

    value: Value = None
    mutable: bool = True

    model_config = ConfigDict(validate_assignment=True)


def builtin_constants() -> dict[str, Datul]:
    """Cells pre-populated in every fresh symbol table."""
    return {
        "Pi": Datul(value=math.pi, mutable=False),
        "E": Datul(value=math.e, mutable=False),
    }


class SymbolTable:
    """Mapping from identifier name to storage cell."""

    def __init__(self) -> None:
        self._cells: dict[str, Datul] = builtin_constants()

    def __contains__(self, name: str) -> bool:
        return name in self._cells

    def __len__(self) -> int:
        return len(self._cells)

    def names(self) -> list[str]:
        return sorted(self._cells)

    def get(self, name: str) -> Datul | None:
        """Return the cell named ``name``, or None if it was never declared."""
        return self._cells.get(name)

    def declare(self, name: str) -> Datul | None:
        """
        Insert a new mutable, null-valued cell.

        Returns:
            The new cell, or None if ``name`` already exists (nothing changes).
        """
        if name in self._cells:
            return None
        cell = Datul()
        self._cells[name] = cell
        logger.debug("Declared %s", name)
        return cell
