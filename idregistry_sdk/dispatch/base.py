"""
Dispatcher interface for relaying transactions.

A TransactionDispatcher hands a built TransactionRequest to whatever
service signs and broadcasts it, and returns that service's handle.
"""
from abc import ABC, abstractmethod

from ..models import TransactionRequest, TransactionHandle


class TransactionDispatcher(ABC):
    """
    Abstract base class for relay dispatchers.

    Implementations own the network boundary; building the request is
    never their job.
    """

    @abstractmethod
    def send(self, request: TransactionRequest) -> TransactionHandle:
        """
        Submit a transaction request.

        Args:
            request: Fully built request

        Returns:
            Handle identifying the transaction on the relay side

        Raises:
            DispatchError: If the relay cannot be reached or rejects the request
        """
        pass

    def close(self) -> None:
        """Release any open connections."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
