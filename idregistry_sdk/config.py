"""
Configuration for the IdRegistry SDK.

Relay credentials come from the environment and are validated once when
the RelayConfig is built. Contract deployments come from the packaged
networks.json table.
"""
import os
import json
import logging
import importlib.resources
import urllib.parse
from dataclasses import dataclass, field
from typing import Dict, Any, Optional, Mapping

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.syndicate.io"
DEFAULT_NETWORK = "base-sepolia"

API_KEY_VAR = "SYNDICATE_API_KEY"
PROJECT_ID_VAR = "SYNDICATE_PROJECT_ID"
API_URL_VAR = "SYNDICATE_API_URL"
TIMEOUT_VAR = "SYNDICATE_TIMEOUT"
RETRY_COUNT_VAR = "SYNDICATE_RETRY_COUNT"
CONTRACT_ADDRESS_VAR = "IDREGISTRY_CONTRACT_ADDRESS"


def _check_url(name: str, url: str) -> str:
    parsed = urllib.parse.urlparse(url)
    # Check if it's a localhost or 127.0.0.1 address (with or without port)
    host = parsed.netloc.split(':')[0]
    is_local = host in ('localhost', '127.0.0.1')
    if parsed.scheme != 'https' and not is_local:
        raise ConfigurationError(f"{name} must use https:// (got: {parsed.scheme}://)", variable=name)
    return url.rstrip('/')


@dataclass(frozen=True)
class RelayConfig:
    """
    Credentials and connection settings for the relay service.

    Attributes:
        api_key: Relay API key, sent as a bearer token
        project_id: Relay project the transactions are billed to
        api_url: Base URL of the relay API
        timeout: HTTP timeout in seconds
        retry_count: Retries for connections that fail before the request is sent
        contract_address: Optional IdRegistry address overriding the network table
    """
    api_key: str = field(repr=False)
    project_id: str
    api_url: str = DEFAULT_API_URL
    timeout: float = 30
    retry_count: int = 3
    contract_address: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "api_key", (self.api_key or "").strip())
        object.__setattr__(self, "project_id", (self.project_id or "").strip())
        if not self.api_key:
            raise ConfigurationError(f"{API_KEY_VAR} is required", variable=API_KEY_VAR)
        if not self.project_id:
            raise ConfigurationError(f"{PROJECT_ID_VAR} is required", variable=PROJECT_ID_VAR)
        object.__setattr__(self, "api_url", _check_url(API_URL_VAR, self.api_url))
        if self.timeout <= 0:
            raise ConfigurationError(f"{TIMEOUT_VAR} must be positive", variable=TIMEOUT_VAR)
        if self.retry_count < 0:
            raise ConfigurationError(f"{RETRY_COUNT_VAR} must not be negative", variable=RETRY_COUNT_VAR)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "RelayConfig":
        """
        Build a config from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Raises:
            ConfigurationError: Naming the first missing or malformed variable
        """
        env = os.environ if environ is None else environ

        values: Dict[str, Any] = {}
        for attr, var in (("api_key", API_KEY_VAR), ("project_id", PROJECT_ID_VAR)):
            value = env.get(var, "").strip()
            if not value:
                raise ConfigurationError(f"Missing required environment variable {var}", variable=var)
            values[attr] = value

        if env.get(API_URL_VAR):
            values["api_url"] = env[API_URL_VAR]
        if env.get(CONTRACT_ADDRESS_VAR, "").strip():
            values["contract_address"] = env[CONTRACT_ADDRESS_VAR].strip()
        for attr, var, cast in (("timeout", TIMEOUT_VAR, float), ("retry_count", RETRY_COUNT_VAR, int)):
            raw = env.get(var)
            if raw:
                try:
                    values[attr] = cast(raw)
                except ValueError:
                    raise ConfigurationError(f"{var} must be a number, got {raw!r}", variable=var)

        return cls(**values)


class NetworkConfig:
    """Lookup of chain ids and contract deployments per network."""

    _networks_cache: Optional[Dict[str, Dict[str, Any]]] = None

    @classmethod
    def load_networks(cls) -> Dict[str, Dict[str, Any]]:
        if cls._networks_cache is None:
            resource = importlib.resources.files("idregistry_sdk").joinpath("networks.json")
            cls._networks_cache = json.loads(resource.read_text(encoding="utf-8"))
            logger.debug(f"Loaded network table: {sorted(cls._networks_cache)}")
        return cls._networks_cache

    @classmethod
    def get_network(cls, network: str) -> Dict[str, Any]:
        """
        Get the deployment entry for a network.

        Raises:
            ValueError: If the network is unknown
        """
        networks = cls.load_networks()
        if network not in networks:
            available = ", ".join(sorted(networks))
            raise ValueError(f"Unknown network '{network}'. Available networks: {available}")
        return networks[network]

    @classmethod
    def get_chain_id(cls, network: str) -> int:
        return int(cls.get_network(network)["chainId"])

    @classmethod
    def get_contract_address(
        cls,
        network: str,
        contract: str = "idRegistry",
        override: Optional[str] = None
    ) -> str:
        """
        Resolve a contract address, the override winning over the table.
        """
        if override:
            return override
        entry = cls.get_network(network)
        if contract not in entry:
            raise ValueError(f"Network '{network}' has no '{contract}' deployment")
        return entry[contract]
