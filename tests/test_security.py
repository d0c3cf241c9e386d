"""Tests for password hashing and access tokens."""

from datetime import timedelta

import pytest
from jose import jwt

from medscreen.core.config import settings
from medscreen.core.security import (
    PRINCIPAL_DOCTOR,
    PRINCIPAL_RESPONDENT,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


def test_password_round_trip() -> None:
    hashed = hash_password("rahasia123")

    assert hashed != "rahasia123"
    assert verify_password("rahasia123", hashed) is True
    assert verify_password("salah", hashed) is False


def test_token_carries_principal_and_claims() -> None:
    token = create_access_token(
        "doctor-1", PRINCIPAL_DOCTOR, additional_claims={"role": "ADMIN"}
    )
    claims = decode_access_token(token)

    assert claims["sub"] == "doctor-1"
    assert claims["principal"] == PRINCIPAL_DOCTOR
    assert claims["role"] == "ADMIN"


def test_additional_claims_cannot_override_principal() -> None:
    token = create_access_token(
        "respondent-1",
        PRINCIPAL_RESPONDENT,
        additional_claims={"principal": PRINCIPAL_DOCTOR},
    )
    assert decode_access_token(token)["principal"] == PRINCIPAL_RESPONDENT


def test_expired_token_rejected() -> None:
    token = create_access_token("doctor-1", PRINCIPAL_DOCTOR, expires_delta=timedelta(seconds=-1))
    assert decode_access_token(token) is None


def test_unknown_principal_rejected() -> None:
    with pytest.raises(ValueError):
        create_access_token("x", "nurse")

    forged = jwt.encode(
        {"sub": "x", "type": "access", "principal": "nurse"},
        settings.secret_key,
        algorithm=settings.algorithm,
    )
    assert decode_access_token(forged) is None


def test_garbage_token_rejected() -> None:
    assert decode_access_token("not-a-token") is None
