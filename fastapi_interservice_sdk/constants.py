# fastapi-interservice-sdk/fastapi_interservice_sdk/constants.py
"""
Constants shared across the SDK.
"""

# Outbound header carrying the service-to-service call chain
CALL_SEQUENCE_HEADER = "g-callsec"
CALL_SEQUENCE_SEPARATOR = ";"

AUTHORIZATION_HEADER = "Authorization"
JSON_CONTENT_TYPE = "application/json; charset=utf-8"

# Timeouts in milliseconds
DEFAULT_GET_TIMEOUT_MS = 12000
DEFAULT_POST_TIMEOUT_MS = 120000

# Documentation visibility defaults
DEFAULT_DOCS_COOKIE_NAME = "swagger-show"
DEFAULT_DOCS_PASSWORD = "password"
