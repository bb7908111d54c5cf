"""Tests for password hashing."""

import pytest

from src.auth import PasswordError, hash_password, verify_password


def test_hash_and_verify() -> None:
    password_hash = hash_password("correct horse battery")

    assert password_hash.startswith("$2")
    assert verify_password("correct horse battery", password_hash) is True
    assert verify_password("wrong horse", password_hash) is False


def test_hashes_are_salted() -> None:
    assert hash_password("same-password") != hash_password("same-password")


def test_empty_password_is_rejected() -> None:
    with pytest.raises(PasswordError):
        hash_password("")


def test_overlong_password_is_rejected() -> None:
    with pytest.raises(PasswordError):
        hash_password("é" * 40)


def test_verify_with_malformed_hash() -> None:
    assert verify_password("anything", "not-a-bcrypt-hash") is False
    assert verify_password("anything", "") is False
    assert verify_password("", hash_password("something")) is False
