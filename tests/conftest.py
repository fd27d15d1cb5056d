# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Shared pytest fixtures and configuration for Jamf Pro SDK tests.

This module provides common test fixtures that can be used across all test modules.
"""

import pytest

from jamfpro_sdk.core.config import JamfProConfig
from jamfpro_sdk.core.credentials import ClientCredentials, PasswordCredentials


@pytest.fixture
def test_config():
    """Test configuration with small limits and short timeouts."""
    return JamfProConfig(max_concurrent_requests=2, http_timeout=5)


@pytest.fixture
def client_credentials():
    return ClientCredentials("client-id", "client-secret")


@pytest.fixture
def password_credentials():
    return PasswordCredentials("admin", "hunter2")


@pytest.fixture
def sample_base_url():
    """Standard test base URL."""
    return "https://acme.jamfcloud.com"
