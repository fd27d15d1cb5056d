# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Interactive walkthrough against a live Jamf Pro instance.

Creates, renames and deletes a department through the Classic API, lists API
roles and reads the SSO failover URL through the Jamf Pro API, then revokes
the access token.
"""

import getpass
import logging
import sys

from jamfpro_sdk import (
    ClientCredentials,
    JamfProClient,
    JamfProConfig,
    JamfProError,
    PasswordCredentials,
    StatusError,
)


def log_call(call: str) -> None:
    print({"call": call})


def main() -> int:
    instance = input("Enter Jamf Pro instance name or URL (e.g. acme or https://jss.example.com:8443): ").strip()
    if not instance:
        print("No instance entered; exiting.")
        return 1

    mode = input("Authenticate with (o)Auth client credentials or (p)assword? [o/p]: ").strip().lower() or "o"
    if mode.startswith("p"):
        credential = PasswordCredentials(input("Username: ").strip(), getpass.getpass("Password: "))
    else:
        credential = ClientCredentials(input("Client id: ").strip(), getpass.getpass("Client secret: "))

    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    config = JamfProConfig(log_level="INFO", max_concurrent_requests=2)

    with JamfProClient(instance, credential, config) as client:
        try:
            log_call("client.departments.create('SDK Quickstart')")
            dept = client.departments.create("SDK Quickstart")
            print(f"Created department id={dept.id}")

            log_call(f"client.departments.update_by_id({dept.id}, 'SDK Quickstart (renamed)')")
            client.departments.update_by_id(dept.id, "SDK Quickstart (renamed)")
            print(client.departments.get_by_id(dept.id))

            log_call("client.departments.list()")
            for d in client.departments.list():
                print(f"  {d.id}: {d.name}")

            log_call(f"client.departments.delete_by_id({dept.id})")
            client.departments.delete_by_id(dept.id)

            log_call("client.api_roles.list()")
            for role in client.api_roles.list():
                print(f"  {role.id}: {role.display_name} ({len(role.privileges)} privileges)")

            log_call("client.sso_failover.get()")
            try:
                print(client.sso_failover.get().failover_url)
            except StatusError as ex:
                print(f"SSO failover unavailable: {ex.message} (status {ex.status_code})")

            log_call("client.dispatch('GET', '/api/v1/jamf-pro-version')")
            result = client.dispatch("GET", "/api/v1/jamf-pro-version")
            print(f"Jamf Pro {result.value.get('version')} in {result.metadata.timing_ms:.0f}ms")
        except JamfProError as ex:
            print(f"Request failed: {ex.to_dict()}")
            return 1
        finally:
            log_call("client.invalidate_token()")
            print(f"Token revoked: {client.invalidate_token()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
