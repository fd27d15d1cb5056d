# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Wire layer for the Jamf Pro SDK.

This module contains API type selection, the XML and JSON handlers, the shape
codec, HTML error page parsing, and the request dispatcher.
"""

__all__ = []
