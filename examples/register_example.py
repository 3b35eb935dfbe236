#!/usr/bin/env python3
"""
Example of relaying a registerFor call with the IdRegistry SDK.
"""
import os
import logging

from idregistry_sdk import RegistryClient, RelayConfig, ConfigurationError, DispatchError

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def main():
    """
    Demonstrate basic usage of the RegistryClient.

    This example shows how to:
    1. Load relay credentials from the environment
    2. Preview the relay payload
    3. Submit the registration
    """
    try:
        config = RelayConfig.from_env()
    except ConfigurationError as e:
        print(f"ERROR: {e}")
        return

    # The registering account signs these off-chain; see the registry's EIP-712 Register type
    to = os.environ.get("REGISTER_TO", "0x1234567890123456789012345678901234567890")
    recovery = os.environ.get("REGISTER_RECOVERY", "0xd3cda913deb6f67967b99d67acdfa1712c293601")
    deadline = int(os.environ.get("REGISTER_DEADLINE", "1700000000"))
    sig = os.environ.get("REGISTER_SIG")
    if not sig:
        print("ERROR: REGISTER_SIG environment variable is required")
        return

    with RegistryClient(config) as client:
        request = client.build_request(to, recovery, deadline, sig)
        print(f"Relaying {request.function_signature} to {request.contract_address} on chain {request.chain_id}")

        try:
            handle = client.send_request(request)
        except DispatchError as e:
            print(f"Relay failed: {e}")
            return

    print(f"Transaction id: {handle.transaction_id}")


if __name__ == "__main__":
    main()
