"""Unit of Work Interface

Groups repository writes into a single transaction.
"""

from abc import ABC, abstractmethod


class UnitOfWork(ABC):
    """
    Transaction boundary for use cases

    Everything written through repositories sharing the same session is
    persisted by commit() or discarded by rollback().
    """

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
