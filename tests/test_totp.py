"""
TOTP generator tests.

Reference values are the SHA-1 vectors of RFC 6238, truncated to 6 digits.
"""

from datetime import datetime

import pytest
import pytz

from src.grant.algorithms import generate_totp, generate_totp_at, validate_secret
from src.grant.core.exceptions import OTPSecretError

# base32("12345678901234567890"), the RFC 6238 SHA-1 seed
RFC_SECRET = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"
DEMO_SECRET = "JBSWY3DPEHPK3PXP"


@pytest.mark.unit
@pytest.mark.parametrize("timestamp, expected", [
    (59, "287082"),
    (1111111109, "081804"),
    (1234567890, "005924"),
    (2000000000, "279037"),
])
def test_rfc6238_vectors(timestamp, expected):
    assert generate_totp_at(RFC_SECRET, timestamp) == expected


@pytest.mark.unit
def test_code_is_six_digits():
    code = generate_totp(DEMO_SECRET)
    assert len(code) == 6
    assert code.isdigit()


@pytest.mark.unit
def test_same_time_gives_same_code():
    now = datetime.now(pytz.UTC)
    assert generate_totp_at(DEMO_SECRET, now) == generate_totp_at(DEMO_SECRET, now)


@pytest.mark.unit
def test_codes_stable_within_time_step():
    # 1234567860 and 1234567889 share one 30 second step
    assert generate_totp_at(RFC_SECRET, 1234567860) == generate_totp_at(RFC_SECRET, 1234567889)
    assert generate_totp_at(RFC_SECRET, 1234567890) != generate_totp_at(RFC_SECRET, 1234567920)


@pytest.mark.unit
def test_naive_datetime_is_utc():
    naive = datetime(2009, 2, 13, 23, 31, 30)
    assert generate_totp_at(RFC_SECRET, naive) == "005924"


@pytest.mark.unit
def test_aware_datetime_in_other_zone():
    berlin = pytz.timezone("Europe/Berlin").localize(datetime(2009, 2, 14, 0, 31, 30))
    assert generate_totp_at(RFC_SECRET, berlin) == "005924"


@pytest.mark.unit
def test_padded_secret_accepted():
    assert generate_totp_at("JBSWY3DPEE======", 59) == generate_totp_at("JBSWY3DPEE", 59)


@pytest.mark.unit
def test_empty_secret_rejected():
    with pytest.raises(OTPSecretError):
        generate_totp_at("", 59)
    with pytest.raises(OTPSecretError):
        generate_totp("")


@pytest.mark.unit
@pytest.mark.parametrize("secret", ["!!!invalid!!!", "JBSWY3DP1", "JBSW Y3DP"])
def test_invalid_base32_rejected(secret):
    with pytest.raises(OTPSecretError):
        generate_totp_at(secret, 59)


@pytest.mark.unit
def test_secret_error_is_value_error():
    with pytest.raises(ValueError):
        validate_secret("")


@pytest.mark.unit
def test_validate_secret_accepts_valid():
    validate_secret(DEMO_SECRET)


@pytest.mark.unit
@pytest.mark.parametrize("secret", [RFC_SECRET + "\n", "  " + RFC_SECRET, RFC_SECRET + "\r\n"])
def test_surrounding_whitespace_ignored(secret):
    assert generate_totp_at(secret, 59) == "287082"


@pytest.mark.unit
def test_whitespace_only_secret_rejected():
    with pytest.raises(OTPSecretError):
        generate_totp_at(" \n", 59)
