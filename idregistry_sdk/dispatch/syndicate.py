"""
Syndicate relay dispatcher.

Sends transaction requests to the Syndicate transact API over HTTPS.
Signing, nonce management, gas and broadcast all happen on Syndicate's
side; this module only ships the request and reads back the id.
"""
import logging
from typing import Any, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry
from pydantic import ValidationError as PydanticValidationError

from ..config import RelayConfig
from ..models import TransactionRequest, TransactionHandle
from ..exceptions import (
    DispatchError, DispatchConnectionError, DispatchResponseError, DispatchTimeoutError
)
from .._rate_limited_log import rate_limited_log
from .base import TransactionDispatcher

logger = logging.getLogger(__name__)

SEND_TRANSACTION_PATH = "/transact/sendTransaction"


class SyndicateDispatcher(TransactionDispatcher):
    """
    Dispatcher backed by the Syndicate transact API.

    Only connections that fail before the request is sent are retried,
    with exponential backoff. Once the body may have reached the relay
    (read errors, any HTTP status) the request is never resubmitted, so a
    registration cannot be relayed twice. Failures surface as DispatchError.
    """

    def __init__(self, config: RelayConfig, session: Optional[requests.Session] = None):
        """
        Args:
            config: Relay configuration (API key, URL, timeout, retries)
            session: Optional pre-configured session, mainly for tests
        """
        self.config = config
        self.url = f"{config.api_url}{SEND_TRANSACTION_PATH}"
        self.timeout = config.timeout

        if session is None:
            session = requests.Session()
            retries = Retry(
                total=config.retry_count,
                connect=config.retry_count,
                read=0,
                status=0,
                other=0,
                backoff_factor=0.5,
                raise_on_status=False,
            )
            session.mount("http://", HTTPAdapter(max_retries=retries))
            session.mount("https://", HTTPAdapter(max_retries=retries))
        session.headers.update({
            "Authorization": f"Bearer {config.api_key}",
            "Content-Type": "application/json",
        })
        self.session = session
        self._closed = False

    def send(self, request: TransactionRequest) -> TransactionHandle:
        if self._closed:
            raise DispatchConnectionError("Dispatcher has been closed")

        logger.debug(f"POST {self.url} for {request.function_signature} on chain {request.chain_id}")
        try:
            response = self.session.post(self.url, json=request.to_wire(), timeout=self.timeout)
        except requests.Timeout as e:
            logger.error(f"Relay request timed out: {e}")
            raise DispatchTimeoutError(f"Relay request timed out after {self.timeout}s: {str(e)}")
        except requests.ConnectionError as e:
            rate_limited_log(f"Relay unreachable at {self.config.api_url}", level="error", logger_instance=logger)
            raise DispatchConnectionError(f"Failed to reach relay: {str(e)}")
        except requests.RequestException as e:
            raise DispatchError(f"Relay request failed: {str(e)}")

        if response.status_code >= 500:
            rate_limited_log(
                f"Relay server error {response.status_code}; transaction not resubmitted",
                logger_instance=logger,
            )
        if response.status_code >= 400:
            body = self._json_or_none(response)
            message = self._error_message(body) or response.text or response.reason
            raise DispatchResponseError(
                f"Relay rejected transaction ({response.status_code}): {message}",
                status_code=response.status_code,
                error_code=body.get("code") if isinstance(body, dict) else None,
            )

        content_type = response.headers.get('Content-Type', '')
        if 'application/json' not in content_type:
            rate_limited_log(f"Unexpected Content-Type from relay: {content_type}", logger_instance=logger)

        body = self._json_or_none(response)
        if not isinstance(body, dict):
            raise DispatchResponseError(
                f"Invalid JSON response from relay: {response.text[:200]!r}",
                status_code=response.status_code,
            )
        try:
            handle = TransactionHandle.model_validate(body)
        except PydanticValidationError:
            raise DispatchResponseError(
                f"Missing transactionId in relay response: {body}",
                status_code=response.status_code,
            )
        logger.info(f"Relay accepted transaction {handle.transaction_id}")
        return handle

    def close(self) -> None:
        self._closed = True
        self.session.close()

    @staticmethod
    def _json_or_none(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return None

    @staticmethod
    def _error_message(body: Any) -> Optional[str]:
        if not isinstance(body, dict):
            return None
        for key in ("message", "error", "detail"):
            value = body.get(key)
            if value:
                return value if isinstance(value, str) else str(value)
        return None
