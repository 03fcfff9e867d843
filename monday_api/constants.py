"""Constants shared by the client and its helpers."""

MONDAY_API_ENDPOINT = "https://api.monday.com/v2"

# Quarterly release the client targets when no version is configured.
DEFAULT_VERSION = "2025-04"

ENDPOINT_ENV_VAR = "MONDAY_API_ENDPOINT"

JSON_CONTENT_TYPE = "application/json"

MAX_REQUEST_TIMEOUT_MS = 60_000

SDK_VERSION = "0.1.0"
