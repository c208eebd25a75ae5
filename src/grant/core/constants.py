"""
Application-wide constants for identity login and service URL resolution.

Wire-level names below must match the identity provider exactly.
"""

# Identity provider endpoints (relative to the identity URL)
START_AUTHENTICATION_PATH = "/Security/StartAuthentication"
ADVANCE_AUTHENTICATION_PATH = "/Security/AdvanceAuthentication"

# StartAuthentication client metadata
AUTH_VERSION = "1.0"
ASSOCIATED_ENTITY_TYPE = "API"
MFA_REQUESTOR = "DeviceAgent"

# Headers sent on every identity call
NATIVE_CLIENT_HEADER = "X-IDAP-NATIVE-CLIENT"

# Mechanism names (compared case-insensitively)
MECHANISM_PASSWORD = "UP"
MECHANISM_OATH = "OATH"

# AdvanceAuthentication actions
ACTION_ANSWER = "Answer"
ACTION_START_OOB = "StartOOB"

# Summary values
SUMMARY_LOGIN_SUCCESS = "LoginSuccess"

# Challenge positions
PRIMARY_CHALLENGE_INDEX = 0
SECOND_FACTOR_CHALLENGE_INDEX = 1

# TOTP parameters (RFC 6238 defaults used by the provider)
TOTP_DIGITS = 6
TOTP_INTERVAL = 30  # seconds

# Token claims
CLAIM_SUBDOMAIN = "subdomain"
CLAIM_PLATFORM_DOMAIN = "platform_domain"
CLAIM_UNIQUE_NAME = "unique_name"
INTERNAL_DOMAIN_PREFIX = "shell."

# Service URL defaults
DEFAULT_SERVICE_NAME = "sca"
DEFAULT_SERVICE_SEPARATOR = "."
IDENTITY_HOST_LABEL = "id."

# HTTP defaults
DEFAULT_TIMEOUT = 30  # seconds

# Bodies longer than this are truncated in error messages and logs
MAX_BODY_PREVIEW = 500
