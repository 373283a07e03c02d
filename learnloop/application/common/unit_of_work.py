"""
Transaction boundary port used by every use case.

Repositories only flush; a use case decides when its writes become visible
by calling ``commit``. The progress ledger commits more than once per
operation (the learning session first, then XP, then the streak), so each
step is its own ``with uow:`` block.
"""

from abc import ABC, abstractmethod
from types import TracebackType
from typing import Self


class UnitOfWork(ABC):
    @abstractmethod
    def commit(self) -> None:
        """
        Make pending writes durable.

        Raises:
            StoreError: If the store rejected the transaction
        """
        raise NotImplementedError

    @abstractmethod
    def rollback(self) -> None:
        raise NotImplementedError

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        # Leaving the block without commit() keeps the flushed writes pending
        if exc_type is not None:
            self.rollback()
