# RPGMCRYPT ASSET ENGINE ->

import os as _os_module
import re as _re_module
import sys as _sys_module
import warnings as _warnings_module


class rpgmcrypt:
    import concurrent.futures
    import enum
    import json
    import pathlib
    import sys
    import time
    import typing
    from io import BytesIO
    import numpy as np
    try:
        from PIL import Image
    except Exception:  # pragma: no cover - optional dependency
        Image = None
    re = _re_module
    try:
        import colorama
        colorama.init()  # Initialize colorama for cross-platform color support
    except ImportError:
        pass  # Colorama is optional

    @staticmethod
    def _env_int(name: str) -> "rpgmcrypt.typing.Optional[int]":
        value = _os_module.getenv(name)
        if not value:
            return None
        try:
            parsed = int(value)
        except (TypeError, ValueError):
            return None
        if parsed <= 0:
            return None
        return parsed

    @staticmethod
    def _env_flag(name: str, default: bool) -> bool:
        raw = _os_module.getenv(name)
        if raw is None or not raw.strip():
            return default
        return raw.strip().lower() in ("1", "true", "yes", "on")

    ENGINE_VERSION = "1.2.0"
    # "RPGMV" + 3 zero bytes, then version 0.3.1 and zero padding
    MAGIC_HEADER = b"RPGMV\x00\x00\x00\x00\x03\x01\x00\x00\x00\x00\x00"
    MAGIC_LEN = len(MAGIC_HEADER)
    HEADER_LEN = 16
    KEY_LEN = 16
    KEY_FIELD = "encryptionKey"
    SYSTEM_JSON = "System.json"
    SYSTEM_JSON_DIRS = ("", "data", "www/data")
    MAX_INPUT_BYTES = 2 * 1024 * 1024 * 1024
    M4A_MIN_LEN = 12
    M4A_STRICT = _env_flag("RPGMCRYPT_M4A_STRICT", True)
    _CPU_COUNT_OVERRIDE = _env_int("RPGMCRYPT_MAX_THREADS")
    _CPU_COUNT = _CPU_COUNT_OVERRIDE or max(1, _os_module.cpu_count() or 1)
    _HEX_KEY_RE = _re_module.compile(r"[0-9a-fA-F]*")
    SUCCESS = "SUCCESS!"
    FAIL = "FAIL!"

    class Error(ValueError):
        """Base class for every asset cipher failure."""

    class InvalidKeyFormat(Error):
        pass

    class MalformedHeader(Error):
        pass

    class UnsupportedExtension(Error):
        pass

    class IncompleteKey(Error):
        """The file alone cannot pin down every key byte, so decrypting it would corrupt it."""

    class InvalidSignature(Error):
        """Decrypted data does not start with the media signature of ``expected``."""

        def __init__(self, expected, message: "str | None" = None):
            self.expected = expected
            if message is None:
                message = (
                    f"Decrypted {expected.name} file has invalid signature. "
                    "Check if you supplied correct key."
                )
            super().__init__(message)

    class KeyFieldNotFound(Error):
        def __init__(self, field_name: str, message: "str | None" = None):
            self.field_name = field_name
            super().__init__(message or f"Field '{field_name}' with a key string was not found")

    class FileKind(enum.Enum):
        PNG = "png"
        OGG = "ogg"
        M4A = "m4a"

        @property
        def extension(self) -> str:
            return self.value

    class Engine(enum.Enum):
        MV = "mv"
        MZ = "mz"

    # (offset, bytes) a genuine plain file must carry
    SIGNATURES = {
        FileKind.PNG: (0, b"\x89PNG\r\n\x1a\n"),
        FileKind.OGG: (0, b"OggS"),
        FileKind.M4A: (4, b"ftypM4A "),
    }
    M4A_RELAXED_SIGNATURE = (4, b"ftyp")
    # Plaintext assumed for the masked prefix when recovering a key
    KNOWN_HEADERS = {
        # PNG signature + IHDR chunk length and type
        FileKind.PNG: b"\x89PNG\r\n\x1a\n\x00\x00\x00\x0dIHDR",
        # capture pattern, version 0, BOS flag, zero granule position
        FileKind.OGG: b"OggS\x00\x02\x00\x00\x00\x00\x00\x00\x00\x00",
        # 28-byte ftyp box, major brand "M4A ", minor version 0x200
        FileKind.M4A: b"\x00\x00\x00\x1cftypM4A \x00\x00\x02\x00",
    }
    # Kinds whose whole known header is fixed by the format (M4A box sizes vary by encoder)
    EXACT_RECOVERY_KINDS = frozenset({FileKind.PNG})
    OBFUSCATED_EXTENSIONS = {
        Engine.MV: {
            FileKind.PNG: "rpgmvp",
            FileKind.OGG: "rpgmvo",
            FileKind.M4A: "rpgmvm",
        },
        Engine.MZ: {
            FileKind.PNG: "png_",
            FileKind.OGG: "ogg_",
            FileKind.M4A: "m4a_",
        },
    }
    PLAIN_EXTENSIONS = frozenset(kind.value for kind in FileKind)
    ENCRYPTED_EXTENSIONS = frozenset(
        ext for table in OBFUSCATED_EXTENSIONS.values() for ext in table.values()
    )

    class Key:
        """Immutable key of exactly ``rpgmcrypt.KEY_LEN`` bytes.

        Build it with :meth:`from_hex` (the 32-character form stored in
        ``System.json``) or :meth:`from_bytes`. Keys compare and hash by value.
        """

        __slots__ = ("_raw",)

        def __init__(self, raw: bytes):
            if isinstance(raw, memoryview):
                raw = raw.tobytes()
            elif isinstance(raw, (bytes, bytearray)):
                raw = bytes(raw)
            else:
                raise TypeError("Key bytes must be bytes-like")
            if not raw:
                raise rpgmcrypt.InvalidKeyFormat("Key must not be empty")
            if len(raw) != rpgmcrypt.KEY_LEN:
                raise rpgmcrypt.InvalidKeyFormat(
                    f"Key must be {rpgmcrypt.KEY_LEN} bytes, got {len(raw)}"
                )
            object.__setattr__(self, "_raw", raw)

        def __setattr__(self, name, value):
            raise AttributeError("Key is immutable")

        def __delattr__(self, name):
            raise AttributeError("Key is immutable")

        @classmethod
        def from_hex(cls, text: str) -> "rpgmcrypt.Key":
            if not isinstance(text, str):
                raise rpgmcrypt.InvalidKeyFormat("Key text must be a string")
            cleaned = text.strip()
            if len(cleaned) % 2:
                raise rpgmcrypt.InvalidKeyFormat("Key hex string has odd length")
            if not rpgmcrypt._HEX_KEY_RE.fullmatch(cleaned):
                raise rpgmcrypt.InvalidKeyFormat("Key contains non-hexadecimal characters")
            if len(cleaned) != 2 * rpgmcrypt.KEY_LEN:
                raise rpgmcrypt.InvalidKeyFormat(
                    f"Key must be {2 * rpgmcrypt.KEY_LEN} hex characters, got {len(cleaned)}"
                )
            return cls(bytes.fromhex(cleaned))

        @classmethod
        def from_bytes(cls, data) -> "rpgmcrypt.Key":
            return cls(data)

        @property
        def raw(self) -> bytes:
            return self._raw

        def to_hex(self) -> str:
            return self._raw.hex()

        def __bytes__(self) -> bytes:
            return self._raw

        def __len__(self) -> int:
            return len(self._raw)

        def __eq__(self, other):
            if isinstance(other, rpgmcrypt.Key):
                return self._raw == other._raw
            return NotImplemented

        def __hash__(self):
            return hash(self._raw)

        def __str__(self) -> str:
            return self.to_hex()

        def __repr__(self) -> str:
            return f"Key('{self.to_hex()}')"

    @staticmethod
    def _warn(message: str) -> None:
        _warnings_module.warn(message, RuntimeWarning, stacklevel=3)

    @staticmethod
    def _coerce_bytes(data, label: str = "data") -> bytes:
        if isinstance(data, memoryview):
            return data.tobytes()
        if isinstance(data, bytearray):
            return bytes(data)
        if isinstance(data, bytes):
            return data
        raise TypeError(f"{label} must be bytes-like")

    @staticmethod
    def _coerce_key(key) -> "rpgmcrypt.Key":
        if isinstance(key, rpgmcrypt.Key):
            return key
        if isinstance(key, str):
            return rpgmcrypt.Key.from_hex(key)
        if isinstance(key, (bytes, bytearray, memoryview)):
            return rpgmcrypt.Key.from_bytes(key)
        raise TypeError("key must be a Key, hex string or bytes")

    @staticmethod
    def _coerce_kind(kind) -> "rpgmcrypt.FileKind":
        if isinstance(kind, rpgmcrypt.FileKind):
            return kind
        if isinstance(kind, str):
            try:
                return rpgmcrypt.FileKind(kind.strip().lower().lstrip("."))
            except ValueError:
                pass
        raise rpgmcrypt.UnsupportedExtension(f"Unknown file kind: {kind!r}")

    @staticmethod
    def _coerce_engine(engine) -> "rpgmcrypt.Engine":
        if isinstance(engine, rpgmcrypt.Engine):
            return engine
        if isinstance(engine, str):
            try:
                return rpgmcrypt.Engine(engine.strip().lower())
            except ValueError:
                pass
        raise ValueError(f"Unknown engine: {engine!r} (expected 'mv' or 'mz')")

    @staticmethod
    def _mask_prefix(data: bytes, key: "rpgmcrypt.Key") -> bytes:
        """XOR the first HEADER_LEN bytes of ``data`` with the key, repeating it if shorter."""
        out = bytearray(data)
        n = min(rpgmcrypt.HEADER_LEN, len(out))
        if n:
            np = rpgmcrypt.np
            arr = np.frombuffer(memoryview(out)[:n], dtype=np.uint8)
            pad = np.resize(np.frombuffer(key.raw, dtype=np.uint8), n)
            np.bitwise_xor(arr, pad, out=arr)
            del arr
        return bytes(out)

    @staticmethod
    def _strip_header(data: bytes, *, check_header: bool = True) -> bytes:
        if len(data) < rpgmcrypt.MAGIC_LEN:
            raise rpgmcrypt.MalformedHeader(
                f"Data is {len(data)} bytes, shorter than the {rpgmcrypt.MAGIC_LEN}-byte header"
            )
        if check_header and data[:rpgmcrypt.MAGIC_LEN] != rpgmcrypt.MAGIC_HEADER:
            raise rpgmcrypt.MalformedHeader("Missing RPG Maker header; file is not encrypted")
        return data[rpgmcrypt.MAGIC_LEN:]

    @staticmethod
    def encrypt(plain, key) -> bytes:
        data = rpgmcrypt._coerce_bytes(plain, "plain")
        return rpgmcrypt.MAGIC_HEADER + rpgmcrypt._mask_prefix(data, rpgmcrypt._coerce_key(key))

    @staticmethod
    def decrypt(obfuscated, key, *, check_header: bool = True) -> bytes:
        data = rpgmcrypt._coerce_bytes(obfuscated, "obfuscated")
        resolved = rpgmcrypt._coerce_key(key)
        body = rpgmcrypt._strip_header(data, check_header=check_header)
        return rpgmcrypt._mask_prefix(body, resolved)

    @staticmethod
    def _signature_for(kind: "rpgmcrypt.FileKind", strict: "bool | None") -> "tuple[int, bytes]":
        if kind is rpgmcrypt.FileKind.M4A:
            if strict is None:
                strict = rpgmcrypt.M4A_STRICT
            if not strict:
                return rpgmcrypt.M4A_RELAXED_SIGNATURE
        return rpgmcrypt.SIGNATURES[kind]

    @staticmethod
    def _require_pil() -> None:
        if rpgmcrypt.Image is None:
            raise RuntimeError("Pillow is required for deep image checks (pip install Pillow)")

    @staticmethod
    def _verify_png(data: bytes) -> None:
        rpgmcrypt._require_pil()
        try:
            with rpgmcrypt.Image.open(rpgmcrypt.BytesIO(data)) as image:
                image.verify()
        except Exception as exc:
            raise rpgmcrypt.InvalidSignature(
                rpgmcrypt.FileKind.PNG,
                f"Decrypted PNG file is damaged ({exc}). The signature matched, so the key is "
                "probably right but the image data itself is corrupt.",
            ) from exc

    @staticmethod
    def validate_signature(decrypted, kind, *, deep: bool = False, strict: "bool | None" = None) -> None:
        """Raise InvalidSignature unless ``decrypted`` starts like a genuine ``kind`` file.

        The magic header only proves the file was obfuscated; a wrong key still
        decrypts to a buffer of the right length. The media signature is what
        catches the wrong key. ``strict`` picks the 8-byte (default) or 4-byte
        M4A tag check; ``deep`` also runs Pillow's verifier over PNG data.
        """
        data = rpgmcrypt._coerce_bytes(decrypted, "decrypted")
        resolved = rpgmcrypt._coerce_kind(kind)
        offset, signature = rpgmcrypt._signature_for(resolved, strict)
        min_len = offset + len(signature)
        if resolved is rpgmcrypt.FileKind.M4A:
            min_len = max(min_len, rpgmcrypt.M4A_MIN_LEN)
        if len(data) < min_len or data[offset:offset + len(signature)] != signature:
            raise rpgmcrypt.InvalidSignature(resolved)
        if deep and resolved is rpgmcrypt.FileKind.PNG:
            rpgmcrypt._verify_png(data)

    @staticmethod
    def recoverable_prefix_len(kind, sample_len: int) -> int:
        """Key bytes that a sample of ``sample_len`` bytes recovers from real known plaintext."""
        resolved = rpgmcrypt._coerce_kind(kind)
        body_len = max(0, sample_len - rpgmcrypt.MAGIC_LEN)
        return min(
            rpgmcrypt.HEADER_LEN,
            rpgmcrypt.KEY_LEN,
            body_len,
            len(rpgmcrypt.KNOWN_HEADERS[resolved]),
        )

    @staticmethod
    def recovery_is_exact(kind, sample_len: int) -> bool:
        """True when a ``kind`` sample of ``sample_len`` bytes yields the whole key for certain."""
        resolved = rpgmcrypt._coerce_kind(kind)
        return (
            resolved in rpgmcrypt.EXACT_RECOVERY_KINDS
            and rpgmcrypt.recoverable_prefix_len(resolved, sample_len) == rpgmcrypt.KEY_LEN
        )

    @staticmethod
    def derive_key_from_sample(obfuscated, kind, *, check_header: bool = True) -> "rpgmcrypt.Key":
        """Known-plaintext recovery: XOR the masked prefix with the header ``kind`` files start with.

        Bytes past the sample's masked region stay zero. The known header is
        reused cyclically when it is shorter than the masked region, so only
        :meth:`recoverable_prefix_len` bytes are trustworthy.
        """
        data = rpgmcrypt._coerce_bytes(obfuscated, "obfuscated")
        resolved = rpgmcrypt._coerce_kind(kind)
        body = rpgmcrypt._strip_header(data, check_header=check_header)
        known = rpgmcrypt.KNOWN_HEADERS[resolved]
        n = min(rpgmcrypt.HEADER_LEN, rpgmcrypt.KEY_LEN, len(body))
        np = rpgmcrypt.np
        raw = np.zeros(rpgmcrypt.KEY_LEN, dtype=np.uint8)
        if n:
            masked = np.frombuffer(body, dtype=np.uint8, count=n)
            plain = np.resize(np.frombuffer(known, dtype=np.uint8), n)
            np.bitwise_xor(masked, plain, out=raw[:n])
        if n < rpgmcrypt.KEY_LEN:
            rpgmcrypt._warn(
                f"Sample only covers {n} of {rpgmcrypt.KEY_LEN} key bytes; "
                "the rest were left as zero"
            )
        return rpgmcrypt.Key(raw.tobytes())

    @staticmethod
    def derive_key_from_text_field(text, field_name: str) -> "rpgmcrypt.Key":
        if isinstance(text, (bytes, bytearray, memoryview)):
            text = bytes(text).decode("utf-8-sig")
        text = text.lstrip("\ufeff")
        value = None
        try:
            document = rpgmcrypt.json.loads(text)
        except ValueError:
            pattern = r'"%s"\s*:\s*"([^"\\]*)"' % rpgmcrypt.re.escape(field_name)
            match = rpgmcrypt.re.search(pattern, text)
            if match:
                value = match.group(1)
        else:
            if isinstance(document, dict):
                value = document.get(field_name)
        if not isinstance(value, str) or not value.strip():
            raise rpgmcrypt.KeyFieldNotFound(field_name)
        try:
            return rpgmcrypt.Key.from_hex(value)
        except rpgmcrypt.InvalidKeyFormat as exc:
            raise rpgmcrypt.KeyFieldNotFound(
                field_name, f"Field '{field_name}' does not hold a valid key: {exc}"
            ) from exc

    @staticmethod
    def derive_key_from_config_text(text) -> "rpgmcrypt.Key":
        return rpgmcrypt.derive_key_from_text_field(text, rpgmcrypt.KEY_FIELD)

    @staticmethod
    def kind_for_extension(ext: str) -> "tuple[rpgmcrypt.FileKind, bool]":
        """Map a file extension to ``(kind, is_obfuscated)``."""
        normalized = (ext or "").strip().lower().lstrip(".")
        if normalized in rpgmcrypt.PLAIN_EXTENSIONS:
            return rpgmcrypt.FileKind(normalized), False
        for table in rpgmcrypt.OBFUSCATED_EXTENSIONS.values():
            for kind, obf_ext in table.items():
                if obf_ext == normalized:
                    return kind, True
        raise rpgmcrypt.UnsupportedExtension(f"Unsupported extension: {ext!r}")

    @staticmethod
    def output_extension(kind, *, encrypt: bool, engine=None) -> str:
        resolved = rpgmcrypt._coerce_kind(kind)
        if not encrypt:
            return resolved.extension
        if engine is None:
            raise ValueError("Engine (mv or mz) is required for encryption")
        return rpgmcrypt.OBFUSCATED_EXTENSIONS[rpgmcrypt._coerce_engine(engine)][resolved]

    @staticmethod
    def _normalize_path(path_like) -> "rpgmcrypt.pathlib.Path":
        return rpgmcrypt.pathlib.Path(path_like).expanduser()

    @staticmethod
    def _paths_equal(a: "rpgmcrypt.pathlib.Path", b: "rpgmcrypt.pathlib.Path") -> bool:
        try:
            return a.resolve() == b.resolve()
        except OSError:
            return a.absolute() == b.absolute()

    @staticmethod
    def _read_input(path: "rpgmcrypt.pathlib.Path") -> bytes:
        if not path.is_file():
            raise FileNotFoundError(f"Input file not found: {path}")
        size = path.stat().st_size
        if size > rpgmcrypt.MAX_INPUT_BYTES:
            raise ValueError(f"Input file exceeds {rpgmcrypt.MAX_INPUT_BYTES} byte limit: {path}")
        return path.read_bytes()

    @staticmethod
    def _resolve_output(src: "rpgmcrypt.pathlib.Path",
                        output,
                        output_dir,
                        ext: str) -> "rpgmcrypt.pathlib.Path":
        if output:
            out_path = rpgmcrypt._normalize_path(output)
        else:
            parent = rpgmcrypt._normalize_path(output_dir) if output_dir else src.parent
            out_path = parent / src.with_suffix(f".{ext}").name
        if rpgmcrypt._paths_equal(out_path, src):
            raise ValueError("Refusing to overwrite input file; choose a different output path")
        return out_path

    @staticmethod
    def _write_output(path: "rpgmcrypt.pathlib.Path", data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)

    @staticmethod
    def encrypt_file(path, key, engine, output=None, *, output_dir=None) -> str:
        src = rpgmcrypt._normalize_path(path)
        kind, obfuscated = rpgmcrypt.kind_for_extension(src.suffix)
        if obfuscated:
            raise rpgmcrypt.UnsupportedExtension(f"{src.name} is already encrypted")
        resolved_key = rpgmcrypt._coerce_key(key)
        ext = rpgmcrypt.output_extension(kind, encrypt=True, engine=engine)
        out_path = rpgmcrypt._resolve_output(src, output, output_dir, ext)
        rpgmcrypt._write_output(out_path, rpgmcrypt.encrypt(rpgmcrypt._read_input(src), resolved_key))
        return str(out_path)

    @staticmethod
    def decrypt_file(path,
                     key=None,
                     output=None,
                     *,
                     output_dir=None,
                     deep: bool = False,
                     check_header: bool = True,
                     strict: "bool | None" = None) -> str:
        """Decrypt one asset; without ``key`` the key is recovered from the file itself."""
        src = rpgmcrypt._normalize_path(path)
        kind, obfuscated = rpgmcrypt.kind_for_extension(src.suffix)
        if not obfuscated:
            raise rpgmcrypt.UnsupportedExtension(f"{src.name} is not an encrypted asset")
        data = rpgmcrypt._read_input(src)
        if key is None:
            if not rpgmcrypt.recovery_is_exact(kind, len(data)):
                raise rpgmcrypt.IncompleteKey(
                    f"Cannot recover the whole key from {kind.name} file {src.name}; decrypting with "
                    "a guessed key would corrupt it. Supply the key or keep System.json next to the assets"
                )
            resolved_key = rpgmcrypt.derive_key_from_sample(data, kind, check_header=check_header)
        else:
            resolved_key = rpgmcrypt._coerce_key(key)
        plain = rpgmcrypt.decrypt(data, resolved_key, check_header=check_header)
        rpgmcrypt.validate_signature(plain, kind, deep=deep, strict=strict)
        out_path = rpgmcrypt._resolve_output(src, output, output_dir, kind.extension)
        rpgmcrypt._write_output(out_path, plain)
        return str(out_path)

    @staticmethod
    def find_system_json(root) -> "rpgmcrypt.typing.Optional[rpgmcrypt.pathlib.Path]":
        base = rpgmcrypt._normalize_path(root)
        if base.is_file():
            base = base.parent
        for sub in rpgmcrypt.SYSTEM_JSON_DIRS:
            candidate = (base / sub / rpgmcrypt.SYSTEM_JSON) if sub else (base / rpgmcrypt.SYSTEM_JSON)
            if candidate.is_file():
                return candidate
        return None

    @staticmethod
    def extract_key(path) -> "rpgmcrypt.Key":
        src = rpgmcrypt._normalize_path(path)
        if src.suffix.lower() == ".json":
            return rpgmcrypt.derive_key_from_config_text(src.read_text(encoding="utf-8-sig"))
        try:
            kind, obfuscated = rpgmcrypt.kind_for_extension(src.suffix)
        except rpgmcrypt.UnsupportedExtension:
            obfuscated = False
        if not obfuscated:
            raise rpgmcrypt.UnsupportedExtension(
                "Key can be extracted only from System.json file or RPG Maker encrypted file"
            )
        data = rpgmcrypt._read_input(src)
        covered = rpgmcrypt.recoverable_prefix_len(kind, len(data))
        if covered < rpgmcrypt.KEY_LEN:
            rpgmcrypt._warn(
                f"{kind.name} samples only pin down {covered} of {rpgmcrypt.KEY_LEN} key bytes; "
                "prefer System.json or an encrypted PNG"
            )
        elif not rpgmcrypt.recovery_is_exact(kind, len(data)):
            rpgmcrypt._warn(
                f"{kind.name} key recovery assumes the most common file header and may be wrong; "
                "prefer System.json or an encrypted PNG"
            )
        return rpgmcrypt.derive_key_from_sample(data, kind)

    @staticmethod
    def resolve_decrypt_key(root) -> "rpgmcrypt.typing.Optional[rpgmcrypt.Key]":
        """Key stored in the System.json next to ``root``, or None to recover it per file."""
        system_json = rpgmcrypt.find_system_json(root)
        if system_json is None:
            return None
        return rpgmcrypt.derive_key_from_config_text(system_json.read_text(encoding="utf-8-sig"))

    @staticmethod
    def _key_from_batch(files, check_header: bool) -> "rpgmcrypt.typing.Optional[rpgmcrypt.Key]":
        """Key recovered from the first encrypted PNG in ``files`` that pins down every key byte."""
        for path in files:
            try:
                kind, _ = rpgmcrypt.kind_for_extension(path.suffix)
                if kind not in rpgmcrypt.EXACT_RECOVERY_KINDS:
                    continue
                data = rpgmcrypt._read_input(path)
                if not rpgmcrypt.recovery_is_exact(kind, len(data)):
                    continue
                return rpgmcrypt.derive_key_from_sample(data, kind, check_header=check_header)
            except (OSError, ValueError):
                continue
        return None

    @staticmethod
    def _collect_files(target, allowed: "frozenset[str]", recursive: bool) -> "tuple[rpgmcrypt.pathlib.Path, list]":
        base = rpgmcrypt._normalize_path(target)
        if base.is_file():
            return base.parent, [base]
        if not base.is_dir():
            raise FileNotFoundError(f"Input path not found: {base}")
        entries = base.rglob("*") if recursive else base.iterdir()
        files = sorted(
            entry for entry in entries
            if entry.is_file() and entry.suffix.lower().lstrip(".") in allowed
        )
        return base, files

    @staticmethod
    def process(command: str,
                target,
                key=None,
                engine=None,
                output_dir=None,
                *,
                recursive: bool = False,
                deep: bool = False,
                check_header: bool = True,
                discover_key: bool = True):
        """Encrypt or decrypt a file or every matching file under a directory.

        Returns "SUCCESS!"/"FAIL! <reason>" for a single file, else a dict of
        path -> status. One failing file never stops the others.

        Without a key, decryption uses the System.json next to ``target`` and
        otherwise a key recovered once from an encrypted PNG in the batch.
        Files that would write the same output path all fail.
        """
        command = (command or "").strip().lower()
        if command not in ("encrypt", "decrypt"):
            raise ValueError(f"Unsupported command '{command}'")
        encrypting = command == "encrypt"
        if encrypting:
            if key is None:
                raise ValueError("Key is required for encryption")
            if engine is None:
                raise ValueError("Engine (mv or mz) is required for encryption")
            engine = rpgmcrypt._coerce_engine(engine)
        allowed = rpgmcrypt.PLAIN_EXTENSIONS if encrypting else rpgmcrypt.ENCRYPTED_EXTENSIONS
        resolved_key = rpgmcrypt._coerce_key(key) if key is not None else None
        base, files = rpgmcrypt._collect_files(target, allowed, recursive)
        if resolved_key is None and not encrypting and discover_key:
            try:
                resolved_key = rpgmcrypt.resolve_decrypt_key(base)
            except (rpgmcrypt.Error, OSError, UnicodeDecodeError) as exc:
                rpgmcrypt._warn(f"Ignoring {rpgmcrypt.find_system_json(base)}: {exc}")
        if resolved_key is None and not encrypting:
            resolved_key = rpgmcrypt._key_from_batch(files, check_header)
        out_root = rpgmcrypt._normalize_path(output_dir) if output_dir else None

        def _out_dir_for(path: "rpgmcrypt.pathlib.Path"):
            if out_root is None:
                return None
            return out_root / path.parent.relative_to(base)

        def _target_for(path: "rpgmcrypt.pathlib.Path") -> "rpgmcrypt.pathlib.Path":
            kind, _ = rpgmcrypt.kind_for_extension(path.suffix)
            ext = rpgmcrypt.output_extension(kind, encrypt=encrypting, engine=engine)
            return (_out_dir_for(path) or path.parent) / path.with_suffix(f".{ext}").name

        claimed: "dict[rpgmcrypt.pathlib.Path, list]" = {}
        for path in files:
            try:
                claimed.setdefault(_target_for(path), []).append(path)
            except rpgmcrypt.UnsupportedExtension:
                continue
        collisions: "dict[str, str]" = {}
        for out_path, sources in claimed.items():
            if len(sources) > 1:
                names = ", ".join(src.name for src in sources)
                for src in sources:
                    collisions[str(src)] = f"{rpgmcrypt.FAIL} {names} would all be written to {out_path}"
        work = [path for path in files if str(path) not in collisions]

        def _process_one(path: "rpgmcrypt.pathlib.Path") -> "tuple[str, str]":
            try:
                file_out_dir = _out_dir_for(path)
                if encrypting:
                    rpgmcrypt.encrypt_file(path, resolved_key, engine, output_dir=file_out_dir)
                else:
                    rpgmcrypt.decrypt_file(
                        path,
                        resolved_key,
                        output_dir=file_out_dir,
                        deep=deep,
                        check_header=check_header,
                    )
                return str(path), rpgmcrypt.SUCCESS
            except Exception as exc:
                return str(path), f"{rpgmcrypt.FAIL} {exc}"

        done: "dict[str, str]" = dict(collisions)
        if len(work) > 1 and rpgmcrypt._CPU_COUNT > 1:
            max_workers = min(len(work), rpgmcrypt._CPU_COUNT)
            with rpgmcrypt.concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
                for file_id, status in executor.map(_process_one, work):
                    done[file_id] = status
        else:
            for path in work:
                file_id, status = _process_one(path)
                done[file_id] = status
        results: "dict[str, str]" = {str(path): done[str(path)] for path in files}
        if rpgmcrypt._normalize_path(target).is_file():
            return next(iter(results.values()))
        return results


def cli(argv=None) -> int:
    import argparse

    def _cli_config_path() -> "rpgmcrypt.pathlib.Path":
        cfg = _os_module.getenv("RPGMCRYPT_CLI_CONFIG")
        if cfg:
            return rpgmcrypt.pathlib.Path(cfg).expanduser()
        xdg = _os_module.getenv("XDG_CONFIG_HOME")
        if xdg:
            return rpgmcrypt.pathlib.Path(xdg) / "rpgmcrypt" / "cli.conf"
        appdata = _os_module.getenv("APPDATA")
        if appdata:
            return rpgmcrypt.pathlib.Path(appdata) / "rpgmcrypt" / "cli.conf"
        return rpgmcrypt.pathlib.Path("~/.config/rpgmcrypt/cli.conf").expanduser()

    def _cli_config() -> "dict[str, str]":
        values: "dict[str, str]" = {}
        cfg_path = _cli_config_path()
        try:
            if not cfg_path.is_file():
                return values
            lines = cfg_path.read_text(encoding="utf-8").splitlines()
        except OSError:
            return values
        for line in lines:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            name, value = line.split("=", 1)
            values[name.strip().lower()] = value.strip()
        return values

    config = _cli_config()

    def _cli_plain_mode() -> bool:
        if _os_module.getenv("RPGMCRYPT_CLI_PLAIN"):
            return True
        if _os_module.getenv("NO_COLOR"):
            return True
        style = (_os_module.getenv("RPGMCRYPT_CLI_STYLE") or config.get("style", "")).strip().lower()
        if style in {"plain", "boring", "0", "false", "off"}:
            return True
        if style in {"color", "emoji", "on"}:
            return False
        return config.get("plain", "").lower() in {"1", "true", "yes"}

    class _CliTheme:
        def __init__(self, plain: bool):
            self.plain = plain
            self.reset = "" if plain else "\033[0m"
            self.bold = "" if plain else "\033[1m"
            self.red = "" if plain else "\033[31m"
            self.green = "" if plain else "\033[32m"
            self.yellow = "" if plain else "\033[33m"
            self.cyan = "" if plain else "\033[36m"

        def _wrap(self, msg: str, color: str, emoji: str | None = None) -> str:
            if self.plain:
                return msg
            prefix = f"{emoji} " if emoji else ""
            return f"{self.bold}{color}{prefix}{msg}{self.reset}"

        def ok(self, msg: str) -> str:
            return self._wrap(msg, self.green, "✅")

        def warn(self, msg: str) -> str:
            return self._wrap(msg, self.yellow, "⚠️")

        def err(self, msg: str) -> str:
            return self._wrap(msg, self.red, "❌")

        def info(self, msg: str) -> str:
            return self._wrap(msg, self.cyan, "✨")

    theme = _CliTheme(_cli_plain_mode())

    def _run_reporting_warnings(fn, *args, **kwargs):
        with _warnings_module.catch_warnings(record=True) as caught:
            _warnings_module.simplefilter("always", RuntimeWarning)
            try:
                return fn(*args, **kwargs)
            finally:
                for item in caught:
                    msg = str(item.message).strip()
                    if msg:
                        print(theme.warn(msg), file=_sys_module.stderr)

    from .version import __version__

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-e", "--key",
        default=None,
        help="Encryption key (32 hex characters). Decrypt finds the key by itself, "
             "so you rarely need it there"
    )
    common.add_argument(
        "-E", "--engine",
        choices=["mv", "mz"],
        default=None,
        help="Game engine, picks the encrypted extension. Required for encrypt"
    )
    common.add_argument("-i", "--input-dir", default=None, help="Input directory (default: ./)")
    common.add_argument("-o", "--output-dir", default=None, help="Output directory (default: next to input)")
    common.add_argument("-f", "--file", default=None, help="Single file to process or to extract the key from")
    common.add_argument("-r", "--recursive", action="store_true", help="Descend into subdirectories")
    common.add_argument(
        "--verify",
        action="store_true",
        help="Also decode decrypted PNGs with Pillow to catch damaged images"
    )
    common.add_argument(
        "--ignore-header",
        action="store_true",
        help="Do not compare the RPG Maker header bytes (games with a custom header)"
    )
    common.add_argument("--silent", action="store_true", help="Only print failures")

    parser = argparse.ArgumentParser(
        prog="rpgmcrypt",
        description="Decrypt/encrypt RPG Maker MV/MZ audio and image assets."
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser(
        "encrypt",
        parents=[common],
        help="Encrypt .png/.ogg/.m4a assets (.png -> .rpgmvp/.png_ and so on). Needs --key and --engine"
    )
    subparsers.add_parser(
        "decrypt",
        parents=[common],
        help="Decrypt .rpgmv*/*_ assets back to .png/.ogg/.m4a"
    )
    subparsers.add_parser(
        "extract-key",
        parents=[common],
        help="Print the key stored in System.json or recovered from an encrypted file (--file)"
    )

    args = parser.parse_args(argv)
    start_time = rpgmcrypt.time.monotonic()

    if args.file and args.input_dir:
        parser.error("--file cannot be combined with --input-dir")
    if args.file and not rpgmcrypt.pathlib.Path(args.file).is_file():
        print(theme.err("--file argument expects a file as its argument."), file=_sys_module.stderr)
        return 2

    key = None
    key_text = args.key or config.get("key")
    if key_text:
        try:
            key = rpgmcrypt.Key.from_hex(key_text)
        except rpgmcrypt.InvalidKeyFormat as exc:
            print(theme.err(f"Invalid key: {exc}"), file=_sys_module.stderr)
            return 2

    if args.command == "extract-key":
        if not args.file:
            print(theme.err("--file argument is not specified."), file=_sys_module.stderr)
            return 2
        try:
            found = _run_reporting_warnings(rpgmcrypt.extract_key, args.file)
        except (rpgmcrypt.Error, OSError, UnicodeDecodeError) as exc:
            print(theme.err(f"Key extraction failed: {exc}"), file=_sys_module.stderr)
            return 1
        print(f"Encryption key: {found.to_hex()}")
        return 0

    engine = args.engine or config.get("engine")
    if args.command == "encrypt":
        if key is None:
            print(theme.err("--key argument is not specified."), file=_sys_module.stderr)
            return 2
        if not engine:
            print(theme.err("--engine argument is not specified."), file=_sys_module.stderr)
            return 2
    if engine and engine.lower() not in ("mv", "mz"):
        print(theme.err(f"Unknown engine '{engine}' in config (expected mv or mz)"), file=_sys_module.stderr)
        return 2

    target = args.file or args.input_dir or "./"
    if args.ignore_header and not args.silent:
        print(theme.warn("Header check disabled; non-RPG Maker files will be decrypted too"),
              file=_sys_module.stderr)
    if args.command == "decrypt" and key is None:
        try:
            key = rpgmcrypt.resolve_decrypt_key(target)
        except (rpgmcrypt.Error, OSError, UnicodeDecodeError) as exc:
            print(theme.warn(f"Ignoring System.json: {exc}"), file=_sys_module.stderr)
        else:
            if key is not None and not args.silent:
                print(theme.info(f"Using key from {rpgmcrypt.find_system_json(target)}"))

    try:
        result = _run_reporting_warnings(
            rpgmcrypt.process,
            args.command,
            target,
            key,
            engine,
            args.output_dir,
            recursive=args.recursive,
            deep=args.verify,
            check_header=not args.ignore_header,
            discover_key=False,
        )
    except (OSError, ValueError) as exc:
        print(theme.err(f"{args.command} failed: {exc}"), file=_sys_module.stderr)
        return 1

    if isinstance(result, str):
        result = {str(target): result}
    failures = 0
    for path, status in result.items():
        if status == rpgmcrypt.SUCCESS:
            if not args.silent:
                print(theme.ok(f"{path}: {status}"))
        else:
            failures += 1
            print(theme.err(f"{path}: {status}"), file=_sys_module.stderr)
    if not result and not args.silent:
        print(theme.warn("No matching files found"))
    if not args.silent:
        print(f"Elapsed: {rpgmcrypt.time.monotonic() - start_time:.2f}s")
    return 0 if failures == 0 else 1


def main(argv=None) -> int:
    try:
        return cli(argv)
    except KeyboardInterrupt:
        print("Exiting...")
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
