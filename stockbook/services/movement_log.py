from __future__ import annotations

from typing import Iterable

from stockbook.schemas import Movement


class MovementLog:
    """Historial de movimientos; solo admite añadir."""

    def __init__(self, movements: Iterable[Movement] = ()):
        self._movements: list[Movement] = list(movements)

    def __len__(self) -> int:
        return len(self._movements)

    def append(self, movement: Movement) -> None:
        self._movements.append(movement)

    def list(self) -> list[Movement]:
        return list(self._movements)

    def newest_first(self) -> list[Movement]:
        return list(reversed(self._movements))

    def for_product(self, product_id: str) -> list[Movement]:
        return [m for m in self._movements if m.product_id == product_id]
