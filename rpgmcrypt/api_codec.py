"""Byte-level cipher wrappers (header transform and signature check)."""

from .main import rpgmcrypt


def encrypt(plain: bytes, key):
    return rpgmcrypt.encrypt(plain, key)


def decrypt(obfuscated: bytes, key, check_header: bool = True):
    return rpgmcrypt.decrypt(obfuscated, key, check_header=check_header)


def validate_signature(decrypted: bytes, kind, deep: bool = False, strict: bool | None = None):
    return rpgmcrypt.validate_signature(decrypted, kind, deep=deep, strict=strict)


def kind_for_extension(ext: str):
    return rpgmcrypt.kind_for_extension(ext)


def output_extension(kind, encrypt: bool, engine=None):
    return rpgmcrypt.output_extension(kind, encrypt=encrypt, engine=engine)


__all__ = [
    "decrypt",
    "encrypt",
    "kind_for_extension",
    "output_extension",
    "validate_signature",
]
