# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Clarity - Mood Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

from functools import lru_cache

from sqlalchemy.types import TypeDecorator, Text
from cryptography.fernet import Fernet

from app.config import get_settings


@lru_cache()
def get_fernet() -> Fernet:
    # 🔐 Get Fernet secret
    secret = get_settings().fernet_secret
    try:
        return Fernet(secret)
    except Exception as e:
        raise ValueError("FERNET_SECRET is invalid. Make sure it is a valid 32-byte base64 string.") from e


# 🔐 Encrypt/Decrypt helpers
def encrypt(text: str) -> str:
    return get_fernet().encrypt(text.encode()).decode()

def decrypt(token: str) -> str:
    return get_fernet().decrypt(token.encode()).decode()

# 🧩 Custom Encrypted DB Field
class EncryptedTypeHybrid(TypeDecorator):
    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None:
            return encrypt(value)
        return value

    def process_result_value(self, value, dialect):
        if value is not None:
            return decrypt(value)
        return value
