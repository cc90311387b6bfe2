"""
Name: Token Codec Tests

Responsibilities:
  - Issue/verify round trip returns the subject
  - Expiry boundary (now >= exp is expired)
  - Tampering and wrong keys are rejected with a reason
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest
from task_api.identity.token_codec import (
    TokenCodec,
    TokenFailureReason,
    TokenVerification,
)

pytestmark = pytest.mark.unit

SECRET = "codec-secret-0123456789-0123456789-xyz"
NOW = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def codec() -> TokenCodec:
    return TokenCodec(SECRET, timedelta(minutes=10))


def _tamper(token: str, index: int) -> str:
    original = token[index]
    replacement = "A" if original != "A" else "B"
    return token[:index] + replacement + token[index + 1 :]


def test_issue_then_verify_returns_subject(codec):
    token = codec.issue("alice", now=NOW)

    result = codec.parse_and_verify(token, now=NOW + timedelta(seconds=1))

    assert result.is_valid
    assert result.subject == "alice"
    assert result.reason is None


def test_claims_are_integer_seconds(codec):
    token = codec.issue("alice", now=NOW, ttl=timedelta(seconds=90))

    claims = jwt.decode(token, options={"verify_signature": False})

    assert claims == {
        "sub": "alice",
        "iat": int(NOW.timestamp()),
        "exp": int(NOW.timestamp()) + 90,
    }


def test_same_inputs_produce_same_token(codec):
    assert codec.issue("alice", now=NOW) == codec.issue("alice", now=NOW)


def test_default_ttl_is_used_when_not_given(codec):
    token = codec.issue("alice", now=NOW)

    claims = jwt.decode(token, options={"verify_signature": False})

    assert claims["exp"] - claims["iat"] == 600


def test_token_valid_just_before_expiry(codec):
    token = codec.issue("alice", now=NOW, ttl=timedelta(seconds=60))

    result = codec.parse_and_verify(token, now=NOW + timedelta(seconds=59))

    assert result.subject == "alice"


@pytest.mark.parametrize(
    ("elapsed_ms", "valid"),
    [(59_800, True), (59_999, True), (60_000, False), (60_001, False)],
)
def test_expiry_keeps_sub_second_precision(codec, elapsed_ms, valid):
    issued = NOW + timedelta(milliseconds=700)
    token = codec.issue("alice", now=issued, ttl=timedelta(seconds=60))

    result = codec.parse_and_verify(
        token, now=issued + timedelta(milliseconds=elapsed_ms)
    )

    assert result.is_valid is valid
    if not valid:
        assert result.reason == TokenFailureReason.EXPIRED


@pytest.mark.parametrize("elapsed", [60, 61, 3600])
def test_token_expired_at_or_after_exp(codec, elapsed):
    token = codec.issue("alice", now=NOW, ttl=timedelta(seconds=60))

    result = codec.parse_and_verify(token, now=NOW + timedelta(seconds=elapsed))

    assert not result.is_valid
    assert result.reason == TokenFailureReason.EXPIRED


def test_wrong_key_is_signature_invalid(codec):
    other = TokenCodec("another-secret-0123456789-0123456789", timedelta(minutes=10))
    token = other.issue("alice", now=NOW)

    result = codec.parse_and_verify(token, now=NOW)

    assert result.reason == TokenFailureReason.SIGNATURE_INVALID


def test_tampered_signature_is_rejected(codec):
    token = codec.issue("alice", now=NOW)
    signature_start = token.rindex(".") + 1
    middle = signature_start + (len(token) - signature_start) // 2

    result = codec.parse_and_verify(_tamper(token, middle), now=NOW)

    assert not result.is_valid
    assert result.reason == TokenFailureReason.SIGNATURE_INVALID


def test_tampered_payload_is_rejected(codec):
    token = codec.issue("alice", now=NOW)
    payload_start = token.index(".") + 1

    result = codec.parse_and_verify(_tamper(token, payload_start + 2), now=NOW)

    assert not result.is_valid
    assert result.reason in {
        TokenFailureReason.SIGNATURE_INVALID,
        TokenFailureReason.MALFORMED,
    }


@pytest.mark.parametrize("token", ["", "not-a-token", "a.b.c", "a.b"])
def test_garbage_is_malformed(codec, token):
    result = codec.parse_and_verify(token, now=NOW)

    assert result.reason == TokenFailureReason.MALFORMED


def test_missing_subject_is_malformed(codec):
    token = jwt.encode(
        {"exp": int(NOW.timestamp()) + 60}, SECRET, algorithm="HS256"
    )

    result = codec.parse_and_verify(token, now=NOW)

    assert result.reason == TokenFailureReason.MALFORMED


def test_missing_exp_is_malformed(codec):
    token = jwt.encode({"sub": "alice"}, SECRET, algorithm="HS256")

    result = codec.parse_and_verify(token, now=NOW)

    assert result.reason == TokenFailureReason.MALFORMED


def test_other_algorithm_is_rejected(codec):
    token = jwt.encode(
        {"sub": "alice", "exp": int(NOW.timestamp()) + 60},
        SECRET,
        algorithm="HS512",
    )

    result = codec.parse_and_verify(token, now=NOW)

    assert not result.is_valid


def test_empty_secret_is_rejected():
    with pytest.raises(ValueError):
        TokenCodec("", timedelta(minutes=1))


def test_non_positive_ttl_is_rejected():
    with pytest.raises(ValueError):
        TokenCodec(SECRET, timedelta(0))


def test_verification_helpers():
    assert TokenVerification.ok("bob").is_valid
    failed = TokenVerification.failed(TokenFailureReason.EXPIRED)
    assert not failed.is_valid
    assert failed.subject is None
