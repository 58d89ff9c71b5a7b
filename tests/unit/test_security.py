"""
Unit tests for password hashing and access tokens.
"""
from datetime import timedelta

from kanaku.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)


class TestPasswords:

    def test_hash_and_verify(self):
        hashed = get_password_hash("secret-pass-123")
        assert hashed != "secret-pass-123"
        assert verify_password("secret-pass-123", hashed)
        assert not verify_password("wrong-pass", hashed)

    def test_malformed_hash_does_not_verify(self):
        assert not verify_password("secret-pass-123", "not-a-bcrypt-hash")


class TestAccessTokens:

    def test_claims_survive_the_round_trip(self):
        token = create_access_token({"sub": "owner@kadai.in", "user_id": 7})
        claims = decode_access_token(token)
        assert claims["sub"] == "owner@kadai.in"
        assert claims["user_id"] == 7
        assert "exp" in claims

    def test_expired_token(self):
        token = create_access_token({"sub": "owner@kadai.in"}, expires_delta=timedelta(minutes=-5))
        assert decode_access_token(token) is None

    def test_tampered_token(self):
        header, _, signature = create_access_token({"sub": "cashier@kadai.in"}).split(".")
        _, payload, _ = create_access_token({"sub": "owner@kadai.in"}).split(".")
        assert decode_access_token(f"{header}.{payload}.{signature}") is None
        assert decode_access_token("garbage") is None
