#!/usr/bin/env python3
"""Standalone script to verify Google Drive authorization.

Usage:
    python -m docsync.verify_auth
"""

import sys

from docsync.core.auth import CredentialManager, CredentialsError
from docsync.core.client import DriveAPIError, DriveClient
from docsync.models.config import DocSyncConfig


def main() -> int:
    """Verify authorization and print results."""
    print("=" * 50)
    print("Google Drive Authorization Verification")
    print("=" * 50)

    config = DocSyncConfig.load()
    manager = CredentialManager(config.credentials_file, config.token_file, config.scopes)

    # Check client secrets
    print("\n1. Checking client credentials...")
    try:
        client_config = manager.load_client_config()
        client_id = client_config["installed"]["client_id"]
        print(f"   Client ID: {client_id[:12]}...")
        print("   [OK] Credentials loaded")
    except CredentialsError as e:
        print(f"   [FAIL] {e}")
        print(f"\n   Download the OAuth client JSON for a desktop app and save it as {config.credentials_file}")
        return 1

    # Obtain a token
    print("\n2. Obtaining token...")
    try:
        creds = manager.authorize(client_config)
        print(f"   [OK] Token available in {config.token_file}")
    except CredentialsError as e:
        print(f"   [FAIL] {e}")
        return 1

    # Test API connection
    print("\n3. Testing API connection...")
    try:
        client = DriveClient(credentials=creds, settings=config.drive)
        if client.verify_connection():
            print("   [OK] API connection successful")
        else:
            print("   [FAIL] API returned unexpected response")
            return 1
    except DriveAPIError as e:
        print(f"   [FAIL] API error: {e}")
        if e.status_code == 401:
            print(f"\n   Authorization failed. Delete {config.token_file} and try again.")
        elif e.status_code == 403:
            print("\n   Access denied. Check that the Drive API is enabled for this client.")
        return 1

    print("\n" + "=" * 50)
    print("All checks passed! Authorization is working.")
    print("=" * 50)

    return 0


if __name__ == "__main__":
    sys.exit(main())
