#!/usr/bin/env python3
"""
Basic usage examples for the HMAC HTTP client library.

This script demonstrates how to make signed JSON requests to a service
that verifies the Timestamp/Hash headers with the same shared secret.
"""

import logging
import sys
from dataclasses import dataclass

import requests

from hmac_http_client import (
    ClientCredentials,
    HMACClient,
    HMACClientError,
    HTTPStatusError,
    RequestSigner
)


@dataclass
class Widget:
    id: int
    name: str


def main(server_url):
    """Run basic usage examples."""

    credentials = ClientCredentials("client1", "python-client-demo-secret")

    print("=== HMAC HTTP Client Basic Usage Examples ===\n")

    # Example 1: signing without sending anything
    print("1. Producing signed header values...")
    signed = RequestSigner(credentials).signed_headers()
    print(f"   {signed.timestamp_header_name}: {signed.timestamp_value}")
    print(f"   {signed.hash_header_name}: {signed.hash_payload}\n")

    with HMACClient(server_url, credentials) as client:
        try:
            print("2. Creating a widget (POST)...")
            widget = client.post("api/widgets", Widget(0, "gear"), into=Widget)
            print(f"   Created: {widget}\n")

            print("3. Fetching it back (GET)...")
            print(f"   Fetched: {client.get(f'api/widgets/{widget.id}', into=Widget)}\n")

            print("4. Renaming it (PUT)...")
            print(f"   Updated: {client.put(f'api/widgets/{widget.id}', Widget(widget.id, 'cog'), into=Widget)}\n")

            print("5. Deleting it (DELETE)...")
            print(f"   Status: {client.delete(f'api/widgets/{widget.id}')}\n")
        except HTTPStatusError as e:
            print(f"   Server rejected request: {e.status_code}")
        except requests.RequestException as e:
            print(f"   Request failed: {e}")
            sys.exit(1)
        except HMACClientError as e:
            print(f"HMAC Client Error: {e}")
            sys.exit(1)

    print("6. Demonstrating configuration errors...")
    try:
        HMACClient(server_url, ("client1", ""))
    except HMACClientError as e:
        print(f"   Rejected at construction: {e}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    main(sys.argv[1] if len(sys.argv) > 1 else "http://localhost:8080")
