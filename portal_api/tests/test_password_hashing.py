from __future__ import annotations

from portal_api.application.services.password_hashing import BcryptPasswordHasher


def test_hash_and_verify() -> None:
    hasher = BcryptPasswordHasher(rounds=4)

    hashed = hasher.hash("correct-pw")

    assert hashed != "correct-pw"
    assert hasher.verify("correct-pw", hashed) is True
    assert hasher.verify("wrong-pw", hashed) is False


def test_hashes_are_salted() -> None:
    hasher = BcryptPasswordHasher(rounds=4)

    assert hasher.hash("correct-pw") != hasher.hash("correct-pw")


def test_default_cost_factor_is_ten() -> None:
    hashed = BcryptPasswordHasher().hash("correct-pw")

    assert hashed.split("$")[2] == "10"


def test_verify_returns_false_on_malformed_hash() -> None:
    hasher = BcryptPasswordHasher(rounds=4)

    assert hasher.verify("correct-pw", "not-a-bcrypt-hash") is False
    assert hasher.verify("correct-pw", "") is False


def test_verify_rejects_over_long_password() -> None:
    hasher = BcryptPasswordHasher(rounds=4)
    hashed = hasher.hash("correct-pw")

    assert hasher.verify("x" * 73, hashed) is False
