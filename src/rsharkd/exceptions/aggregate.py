"""Aggregate exception for reporting several failures at once."""

from collections.abc import Iterable, Iterator
from typing import Optional

from .base import RadioSharkError


class AggregateError(RadioSharkError):
    """
    One or more independent failures reported together.

    Used by validation (every failed check) and by apply (every failed
    device write). The message joins the individual messages with
    ``", "``; the typed sub-errors stay available in ``errors``.
    """

    def __init__(self, errors: Iterable[Exception], operation: Optional[str] = None):
        self.errors: list[Exception] = list(errors)
        if not self.errors:
            raise ValueError("AggregateError needs at least one error")

        self.operation = operation
        user_msg = ", ".join(str(e) for e in self.errors)
        tech_parts = [
            e.technical_message if isinstance(e, RadioSharkError) else repr(e)
            for e in self.errors
        ]
        prefix = f"{operation}: " if operation else ""

        super().__init__(
            user_message=user_msg,
            technical_message=prefix + "; ".join(tech_parts),
            recoverable=all(
                isinstance(e, RadioSharkError) and e.recoverable for e in self.errors
            ),
        )

    def __iter__(self) -> Iterator[Exception]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)

    @property
    def fields(self) -> list[str]:
        """Fields named by the sub-errors, in order, without duplicates."""
        seen: list[str] = []
        for error in self.errors:
            field = getattr(error, "field", None)
            if field and field not in seen:
                seen.append(field)
        return seen

    def to_dicts(self) -> list[dict]:
        """Structured view of the sub-errors (field, kind, message)."""
        return [
            {
                "field": getattr(e, "field", None),
                "kind": type(e).__name__,
                "message": str(e),
            }
            for e in self.errors
        ]
