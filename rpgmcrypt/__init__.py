from .main import *
from .api_codec import *
from .api_keys import *
from .api_files import *
from .version import __version__

Key = rpgmcrypt.Key
FileKind = rpgmcrypt.FileKind
Engine = rpgmcrypt.Engine
Error = rpgmcrypt.Error
InvalidKeyFormat = rpgmcrypt.InvalidKeyFormat
MalformedHeader = rpgmcrypt.MalformedHeader
InvalidSignature = rpgmcrypt.InvalidSignature
KeyFieldNotFound = rpgmcrypt.KeyFieldNotFound
UnsupportedExtension = rpgmcrypt.UnsupportedExtension
IncompleteKey = rpgmcrypt.IncompleteKey

MAGIC_HEADER = rpgmcrypt.MAGIC_HEADER
HEADER_LEN = rpgmcrypt.HEADER_LEN
KEY_LEN = rpgmcrypt.KEY_LEN

def derive_key_from_obfuscated(obfuscated: bytes, kind): return rpgmcrypt.derive_key_from_sample(obfuscated, kind)
def process(command: str, target: str, key=None, engine=None, output_dir: str | None = None, recursive: bool = False, deep: bool = False, check_header: bool = True, discover_key: bool = True): return rpgmcrypt.process(command, target, key, engine, output_dir, recursive=recursive, deep=deep, check_header=check_header, discover_key=discover_key)
