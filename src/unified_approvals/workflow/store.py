"""Host-owned entity collections with atomic record replacement."""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from unified_approvals.domain.entities import (
    Claim,
    Expense,
    HRLetter,
    LeaveRequest,
    PurchaseOrder,
    RequestEntity,
    RequestKind,
)

T = TypeVar("T", Claim, Expense, LeaveRequest, PurchaseOrder, HRLetter)


class EntityStore(Generic[T]):
    """Ordered collection of immutable records.

    Readers always get a snapshot tuple. ``replace`` swaps the whole tuple, so
    a concurrent reader sees either the old or the new record, never a mix.
    """

    def __init__(
        self,
        records: Iterable[T] = (),
        on_change: Callable[[tuple[T, ...]], None] | None = None,
    ) -> None:
        self._records: tuple[T, ...] = tuple(records)
        self._lock = threading.Lock()
        self._on_change = on_change

    def __iter__(self) -> Iterator[T]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def all(self) -> tuple[T, ...]:
        return self._records

    def get(self, record_id: str) -> T | None:
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    def replace(self, record_id: str, updater: Callable[[T], T]) -> T:
        """Swap the record with ``record_id`` for ``updater(record)``.

        If the updater raises, the store is left untouched.
        """
        with self._lock:
            for index, record in enumerate(self._records):
                if record.id == record_id:
                    updated = updater(record)
                    if updated.id != record_id:
                        raise ValueError(
                            f"Updater changed record id from '{record_id}' to '{updated.id}'"
                        )
                    self._records = self._records[:index] + (updated,) + self._records[index + 1 :]
                    snapshot = self._records
                    break
            else:
                raise KeyError(record_id)
        if self._on_change is not None:
            self._on_change(snapshot)
        return updated

    def prepend(self, record: T) -> T:
        """Add a new record at the head of the collection."""
        with self._lock:
            if any(existing.id == record.id for existing in self._records):
                raise ValueError(f"Duplicate record id '{record.id}'")
            self._records = (record,) + self._records
            snapshot = self._records
        if self._on_change is not None:
            self._on_change(snapshot)
        return record


@dataclass
class EntityCollections:
    expenses: EntityStore[Expense] = field(default_factory=EntityStore)
    claims: EntityStore[Claim] = field(default_factory=EntityStore)
    leave_requests: EntityStore[LeaveRequest] = field(default_factory=EntityStore)
    purchase_orders: EntityStore[PurchaseOrder] = field(default_factory=EntityStore)
    letters: EntityStore[HRLetter] = field(default_factory=EntityStore)

    @classmethod
    def from_records(
        cls,
        *,
        expenses: Iterable[Expense] = (),
        claims: Iterable[Claim] = (),
        leave_requests: Iterable[LeaveRequest] = (),
        purchase_orders: Iterable[PurchaseOrder] = (),
        letters: Iterable[HRLetter] = (),
    ) -> "EntityCollections":
        return cls(
            expenses=EntityStore(expenses),
            claims=EntityStore(claims),
            leave_requests=EntityStore(leave_requests),
            purchase_orders=EntityStore(purchase_orders),
            letters=EntityStore(letters),
        )

    def store_for(self, kind: RequestKind) -> EntityStore:
        stores: dict[RequestKind, EntityStore] = {
            RequestKind.EXPENSE: self.expenses,
            RequestKind.CLAIM: self.claims,
            RequestKind.LEAVE: self.leave_requests,
            RequestKind.PURCHASE_ORDER: self.purchase_orders,
            RequestKind.HR_LETTER: self.letters,
        }
        return stores[kind]

    def find(self, kind: RequestKind, record_id: str) -> RequestEntity | None:
        return self.store_for(kind).get(record_id)
