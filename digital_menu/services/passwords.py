from __future__ import annotations

import hashlib
import hmac
import os
import re
from typing import Optional

from passlib.context import CryptContext

PIN_PATTERN = re.compile(r"^\d{4}$")

PBKDF2_PREFIX = "pbkdf2$"
PBKDF2_ITERATIONS = 120_000
PBKDF2_SALT_BYTES = 16

_pwd_context: Optional[CryptContext]

try:
    _pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
except Exception:
    _pwd_context = None


def is_valid_pin(pin: str) -> bool:
    return isinstance(pin, str) and bool(PIN_PATTERN.match(pin))


def _pbkdf2_hash(pin: str, salt: bytes, iterations: int = PBKDF2_ITERATIONS) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", pin.encode("utf-8"), salt, iterations)


def hash_pin(pin: str) -> str:
    if _pwd_context is not None:
        try:
            return _pwd_context.hash(pin)
        except Exception:
            # backend bcrypt indisponível/incompatível: cai no pbkdf2
            pass

    salt = os.urandom(PBKDF2_SALT_BYTES)
    digest = _pbkdf2_hash(pin, salt)
    return f"{PBKDF2_PREFIX}{PBKDF2_ITERATIONS}${salt.hex()}${digest.hex()}"


def pin_looks_hashed(value: str) -> bool:
    return value.startswith((PBKDF2_PREFIX, "$2a$", "$2b$", "$2y$"))


def verify_pin(pin: str, pin_hash: str) -> bool:
    if not pin_hash:
        return False

    if pin_hash.startswith(PBKDF2_PREFIX):
        try:
            _, iter_str, salt_hex, digest_hex = pin_hash.split("$", 3)
            iterations = int(iter_str)
            salt = bytes.fromhex(salt_hex)
            expected = bytes.fromhex(digest_hex)
        except ValueError:
            return False
        computed = _pbkdf2_hash(pin, salt, iterations=iterations)
        return hmac.compare_digest(computed, expected)

    if _pwd_context is None:
        return False

    try:
        return _pwd_context.verify(pin, pin_hash)
    except (ValueError, TypeError):
        return False
