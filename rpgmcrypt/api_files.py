"""File-oriented convenience wrappers."""

from .main import rpgmcrypt


def encrypt_file(
    path: str,
    key,
    engine,
    output: str | None = None,
    *,
    output_dir: str | None = None,
):
    return rpgmcrypt.encrypt_file(
        path,
        key,
        engine,
        output,
        output_dir=output_dir,
    )


def decrypt_file(
    path: str,
    key=None,
    output: str | None = None,
    *,
    output_dir: str | None = None,
    deep: bool = False,
    check_header: bool = True,
    strict: bool | None = None,
):
    return rpgmcrypt.decrypt_file(
        path,
        key,
        output,
        output_dir=output_dir,
        deep=deep,
        check_header=check_header,
        strict=strict,
    )


def find_system_json(root: str):
    return rpgmcrypt.find_system_json(root)


def encrypt_dir(
    target: str,
    key,
    engine,
    output_dir: str | None = None,
    *,
    recursive: bool = False,
):
    return rpgmcrypt.process(
        "encrypt",
        target,
        key,
        engine,
        output_dir,
        recursive=recursive,
    )


def decrypt_dir(
    target: str,
    key=None,
    output_dir: str | None = None,
    *,
    recursive: bool = False,
    deep: bool = False,
    check_header: bool = True,
    discover_key: bool = True,
):
    return rpgmcrypt.process(
        "decrypt",
        target,
        key,
        None,
        output_dir,
        recursive=recursive,
        deep=deep,
        check_header=check_header,
        discover_key=discover_key,
    )


__all__ = [
    "decrypt_dir",
    "decrypt_file",
    "encrypt_dir",
    "encrypt_file",
    "find_system_json",
]
