"""
Transaction boundary - coordinator and transactional connections.
"""

from .coordinator import TransactionCoordinator, TransactionRequest
from .connections import SQLAlchemyTransactionalConnection, InMemoryTransactionalConnection

__all__ = [
    "TransactionCoordinator",
    "TransactionRequest",
    "SQLAlchemyTransactionalConnection",
    "InMemoryTransactionalConnection",
]
