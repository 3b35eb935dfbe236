"""
Offline dispatcher for development and tests.

Records every request it receives and answers with a deterministic
transaction id instead of contacting a relay.
"""
import json
import hashlib
import logging
import uuid
from typing import List

from ..models import TransactionRequest, TransactionHandle
from ..exceptions import DispatchConnectionError
from .base import TransactionDispatcher

logger = logging.getLogger(__name__)


class StubDispatcher(TransactionDispatcher):
    """
    In-memory stand-in for a relay.

    The transaction id is a UUID derived from the request body, so the
    same request always gets the same id.
    """

    def __init__(self):
        self.sent: List[TransactionRequest] = []
        self.closed = False

    def send(self, request: TransactionRequest) -> TransactionHandle:
        if self.closed:
            raise DispatchConnectionError("Stub dispatcher has been closed")

        body = json.dumps(request.to_wire(), sort_keys=True, separators=(",", ":"))
        digest = hashlib.sha256(body.encode()).digest()
        transaction_id = str(uuid.UUID(bytes=digest[:16], version=4))

        self.sent.append(request)
        logger.info(f"Stub dispatcher accepted transaction {transaction_id}")
        return TransactionHandle(transaction_id=transaction_id, project_id=request.project_id)

    def close(self) -> None:
        self.closed = True
