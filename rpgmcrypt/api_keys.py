"""Key parsing and key recovery wrappers."""

from .main import rpgmcrypt


def key_from_hex(text: str):
    return rpgmcrypt.Key.from_hex(text)


def key_from_bytes(data: bytes):
    return rpgmcrypt.Key.from_bytes(data)


def derive_key_from_sample(obfuscated: bytes, kind, check_header: bool = True):
    return rpgmcrypt.derive_key_from_sample(obfuscated, kind, check_header=check_header)


def derive_key_from_text_field(text: str, field_name: str):
    return rpgmcrypt.derive_key_from_text_field(text, field_name)


def derive_key_from_config_text(text: str):
    return rpgmcrypt.derive_key_from_config_text(text)


def recovery_is_exact(kind, sample_len: int):
    return rpgmcrypt.recovery_is_exact(kind, sample_len)


def recoverable_prefix_len(kind, sample_len: int):
    return rpgmcrypt.recoverable_prefix_len(kind, sample_len)


def extract_key(path: str):
    return rpgmcrypt.extract_key(path)


__all__ = [
    "derive_key_from_config_text",
    "derive_key_from_sample",
    "derive_key_from_text_field",
    "extract_key",
    "key_from_bytes",
    "key_from_hex",
    "recoverable_prefix_len",
    "recovery_is_exact",
]
