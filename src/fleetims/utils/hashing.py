"""Password hashing utilities."""

import bcrypt

BCRYPT_ROUNDS = 12

# bcrypt only reads the first 72 bytes of a password.
MAX_PASSWORD_BYTES = 72


def hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Create a salted bcrypt hash of a password.

    Args:
        password: The plain-text password.
        rounds: bcrypt cost factor.

    Returns:
        The encoded hash, e.g. ``$2b$12$...``.
    """
    password_bytes = password.encode("utf-8")[:MAX_PASSWORD_BYTES]
    hashed = bcrypt.hashpw(password_bytes, bcrypt.gensalt(rounds=rounds))
    return hashed.decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    """Check a password against a hash produced by ``hash_password``.

    A value that is not a bcrypt hash never matches.
    """
    password_bytes = password.encode("utf-8")[:MAX_PASSWORD_BYTES]
    try:
        return bcrypt.checkpw(password_bytes, hashed_password.encode("utf-8"))
    except ValueError:
        return False
