"""
Password hashing helpers.

Passwords are hashed with PBKDF2‑HMAC‑SHA256.  Each hash uses a fresh
16‑byte random salt and ``PASSWORD_HASH_ITERATIONS`` rounds.  The
stored form is ``"<salt hex>$<digest hex>"``, which keeps the salt next
to the digest it produced.  Verification recomputes the digest and
compares it with ``hmac.compare_digest`` so that the comparison time
does not depend on where the values differ.
"""

import hashlib
import hmac
import os

from .errors import PasswordHashError

PASSWORD_HASH_ITERATIONS = 100_000
SALT_BYTES = 16


def hash_password(password: str) -> str:
    """Hash a password using PBKDF2‑HMAC with SHA‑256.

    Parameters
    ----------
    password : str
        The plain text password to hash.

    Returns
    -------
    str
        Salt and hash concatenated with ``$``.

    Raises
    ------
    PasswordHashError
        If the password cannot be encoded or hashed.
    """
    try:
        salt = os.urandom(SALT_BYTES)
        dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, PASSWORD_HASH_ITERATIONS)
    except (AttributeError, UnicodeEncodeError, ValueError) as e:
        raise PasswordHashError(developer_message=f"cannot hash password: {e}") from e
    return f"{salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a stored salt+hash string.

    A stored value that is not in ``salt$hash`` form never matches.
    """
    try:
        salt_hex, hash_hex = hashed_password.split("$", 1)
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except (AttributeError, ValueError):
        return False
    dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, PASSWORD_HASH_ITERATIONS)
    return hmac.compare_digest(dk, stored_hash)
