"""Errors raised by the projection engine."""

from __future__ import annotations

from typing import List


class ProjectionError(ValueError):
    """Base class for every failure surfaced by the engine."""


class InvalidParameterError(ProjectionError):
    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


class ArithmeticOverflowError(ProjectionError):
    def __init__(self, month_index: int, quantity: str = "balance"):
        super().__init__(f"{quantity} is no longer finite at month {month_index}")
        self.month_index = month_index
        self.quantity = quantity
        self.errors = [str(self)]


class ProjectionCancelled(ProjectionError):
    def __init__(self, month_index: int):
        super().__init__(f"projection cancelled before month {month_index}")
        self.month_index = month_index
