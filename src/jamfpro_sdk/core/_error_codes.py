# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

# HTTP subcode constants
HTTP_400 = "http_400"
HTTP_401 = "http_401"
HTTP_403 = "http_403"
HTTP_404 = "http_404"
HTTP_409 = "http_409"
HTTP_415 = "http_415"
HTTP_429 = "http_429"
HTTP_500 = "http_500"
HTTP_502 = "http_502"
HTTP_503 = "http_503"
HTTP_504 = "http_504"

ALL_HTTP_SUBCODES = {
    HTTP_400,
    HTTP_401,
    HTTP_403,
    HTTP_404,
    HTTP_409,
    HTTP_415,
    HTTP_429,
    HTTP_500,
    HTTP_502,
    HTTP_503,
    HTTP_504,
}

TRANSIENT_STATUS_CODES = {429, 502, 503, 504}

# Authentication subcodes
AUTH_TOKEN_ACQUISITION_FAILED = "auth_token_acquisition_failed"
AUTH_TOKEN_REFRESH_FAILED = "auth_token_refresh_failed"
AUTH_TOKEN_RESPONSE_INVALID = "auth_token_response_invalid"

# Capability subcodes
CAPABILITY_MULTIPART_UNSUPPORTED = "capability_multipart_unsupported"
CAPABILITY_UNKNOWN_API = "capability_unknown_api"

# Transport subcodes
TRANSPORT_TIMEOUT = "timeout"
TRANSPORT_CONNECTION = "connection"
TRANSPORT_PERMIT_TIMEOUT = "permit_timeout"
TRANSPORT_REQUEST = "request"

# Decode subcodes
DECODE_UNEXPECTED_CONTENT_TYPE = "decode_unexpected_content_type"
DECODE_MALFORMED_BODY = "decode_malformed_body"
DECODE_SHAPE_MISMATCH = "decode_shape_mismatch"

# Encode subcodes
ENCODE_FAILED = "encode_failed"

# Validation subcodes
VALIDATION_EMPTY_CREDENTIAL = "validation_empty_credential"
VALIDATION_INVALID_CONFIG = "validation_invalid_config"
VALIDATION_INVALID_INSTANCE = "validation_invalid_instance"
VALIDATION_NAME_NOT_FOUND = "validation_name_not_found"


def _http_subcode(status: int) -> str:
    """Map an HTTP status code to its subcode, e.g. ``404 -> "http_404"``."""
    return f"http_{status}"


def _is_transient_status(status: int) -> bool:
    return status in TRANSIENT_STATUS_CODES
