"""Entry module for the asset engine.

The implementation lives in `engine.py`; this module keeps the historical
`from rpgmcrypt.main import rpgmcrypt` import working.
"""

from .engine import rpgmcrypt, cli, main

__all__ = ["rpgmcrypt", "cli", "main"]
