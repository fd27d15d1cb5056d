# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Constants for the Jamf Pro Classic API and Jamf Pro API.

These constants define the hosting domain, the authentication endpoints, the
path markers that distinguish the two API dialects, and the media types each
dialect negotiates.
"""

# Hosted instances live under <instance>.jamfcloud.com
BASE_DOMAIN = ".jamfcloud.com"

# Authentication endpoints
OAUTH_TOKEN_PATH = "/api/oauth/token"
BEARER_TOKEN_PATH = "/api/v1/auth/token"
TOKEN_REFRESH_PATH = "/api/v1/auth/keep-alive"
TOKEN_INVALIDATE_PATH = "/api/v1/auth/invalidate-token"

# Path markers used to pick the wire dialect for a request
LEGACY_PATH_MARKER = "/JSSResource"
"""Classic API resources. Request and response bodies are XML."""

MODERN_PATH_MARKER = "/api"
"""Jamf Pro API resources. Request and response bodies are JSON."""

# Media types
MEDIA_TYPE_XML = "application/xml"
MEDIA_TYPE_TEXT_XML = "text/xml"
MEDIA_TYPE_JSON = "application/json"
MEDIA_TYPE_HTML = "text/html"
MEDIA_TYPE_IMAGE_ANY = "image/*"
MEDIA_TYPE_OCTET_STREAM = "application/octet-stream"

# Jamf Pro API endpoints that serve binary image downloads instead of JSON
IMAGE_DOWNLOAD_PATHS = (
    "/api/v1/branding-images/download/",
    "/api/v1/icon/download/",
)
