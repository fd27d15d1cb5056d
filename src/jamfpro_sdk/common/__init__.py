# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Common utilities and constants for the Jamf Pro SDK.

This module contains shared constants used across the SDK.
"""

__all__ = []
