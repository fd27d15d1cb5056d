# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Core infrastructure components for the Jamf Pro SDK.

This module contains the foundational components including authentication,
configuration, the HTTP client, request concurrency limits, and error handling.
"""

from .results import OperationResult, ResponseMetadata

__all__ = ["OperationResult", "ResponseMetadata"]
