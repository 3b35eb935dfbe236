"""
Dispatch module for the IdRegistry SDK.

Dispatchers hand built transaction requests to a relay service. The
Syndicate dispatcher talks to the hosted API; the stub dispatcher
works offline.
"""
import logging

from ..config import RelayConfig
from .base import TransactionDispatcher
from .stub import StubDispatcher
from .syndicate import SyndicateDispatcher

__all__ = ['TransactionDispatcher', 'SyndicateDispatcher', 'StubDispatcher', 'get_dispatcher']

logger = logging.getLogger(__name__)


def get_dispatcher(config: RelayConfig, use_stub: bool = False) -> TransactionDispatcher:
    """
    Get a dispatcher for the given configuration.

    Args:
        config: Relay configuration
        use_stub: Return an offline StubDispatcher instead of the HTTP one

    Returns:
        Dispatcher implementation
    """
    if use_stub:
        logger.info("Using stub dispatcher; transactions will not be relayed")
        return StubDispatcher()
    logger.debug(f"Using Syndicate dispatcher at {config.api_url}")
    return SyndicateDispatcher(config)
