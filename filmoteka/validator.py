"""Collecting validation failures into plain messages."""

from __future__ import annotations

from collections.abc import Iterable


class ValidationErrors(Exception):
    """A group of field validation failures."""

    def __init__(self, errors: Iterable[object]) -> None:
        self.errors = list(errors)
        super().__init__(";".join(str(error) for error in self.errors))


def collect_errors(err: BaseException | None) -> list[str]:
    """Return the messages of the ValidationErrors found in ``err``'s chain."""
    seen: set[int] = set()
    current = err
    while current is not None and id(current) not in seen:
        if isinstance(current, ValidationErrors):
            return [str(error) for error in current.errors]
        seen.add(id(current))
        current = current.__cause__
    return []