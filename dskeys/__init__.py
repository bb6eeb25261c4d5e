"""
dskeys : clés et signatures DSA ("DS")

Importer le paquet enregistre l'algorithme "DS" dans le registre de dskeys.keys.
"""

from dskeys.exceptions import (
    DSKeysException,
    KeySizeNotSupportedException,
    BadParameterException,
    NotImplementedException,
)
from dskeys.params import DomainParameters, KEYSIZES, get_params, keysize_from_p_bitlength
from dskeys.sampling import random_number_mod, hash_to_int
from dskeys.keys import register, generate_keypair
from dskeys.ds import KeyPair, PublicKey, SecretKey, keysize_from_object

__version__ = "0.1.0"

__all__ = [
    "DSKeysException",
    "KeySizeNotSupportedException",
    "BadParameterException",
    "NotImplementedException",
    "DomainParameters",
    "KEYSIZES",
    "get_params",
    "keysize_from_p_bitlength",
    "random_number_mod",
    "hash_to_int",
    "register",
    "generate_keypair",
    "KeyPair",
    "PublicKey",
    "SecretKey",
    "keysize_from_object",
]
