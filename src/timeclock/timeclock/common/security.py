"""Secret handling.

PINs are stored as salted Werkzeug hashes. CPFs and device secrets need an
exact-match lookup, so they are stored as a plain SHA-256 digest.
"""
from __future__ import annotations

import hashlib

from werkzeug.security import check_password_hash, generate_password_hash


def hash_secret(plain: str) -> str:
    return generate_password_hash(plain)


def verify_secret(plain: str, stored_hash: str) -> bool:
    try:
        return check_password_hash(stored_hash, plain)
    except (ValueError, TypeError):
        # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
        return False


def lookup_digest(value: str) -> str:
    return hashlib.sha256(value.encode("utf-8")).hexdigest()
