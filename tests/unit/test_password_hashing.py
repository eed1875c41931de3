"""Tests for password hashing."""

from fleetims.utils.hashing import hash_password, verify_password

# Lowest cost bcrypt accepts, to keep the suite fast.
FAST_ROUNDS = 4


class TestPasswordHashing:
    """Tests for hash_password and verify_password."""

    def test_hash_is_bcrypt(self) -> None:
        """Test that the stored form is a bcrypt hash with the given cost."""
        hashed = hash_password("s3cret-pass", rounds=FAST_ROUNDS)

        assert hashed.startswith("$2b$04$")
        assert "s3cret-pass" not in hashed

    def test_hashes_are_salted(self) -> None:
        """Test that the same password hashes differently each time."""
        first = hash_password("s3cret-pass", rounds=FAST_ROUNDS)
        second = hash_password("s3cret-pass", rounds=FAST_ROUNDS)

        assert first != second
        assert verify_password("s3cret-pass", first)
        assert verify_password("s3cret-pass", second)

    def test_wrong_password(self) -> None:
        """Test that a different password does not verify."""
        hashed = hash_password("s3cret-pass", rounds=FAST_ROUNDS)

        assert not verify_password("wrong", hashed)

    def test_non_bcrypt_value_never_matches(self) -> None:
        """Test that a malformed stored value is rejected, not raised."""
        assert not verify_password("s3cret-pass", "pbkdf2_sha256$1$00$ff")

    def test_long_passwords_use_first_72_bytes(self) -> None:
        """Test the bcrypt input limit."""
        hashed = hash_password("a" * 72, rounds=FAST_ROUNDS)

        assert verify_password("a" * 80, hashed)
