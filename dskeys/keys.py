"""
Abstraction générique des clés et registre des algorithmes

Chaque algorithme de signature fournit trois classes (KeyPair, PublicKey,
SecretKey) et s'enregistre sous une étiquette courte ("DS" pour DSA). La
sérialisation ajoute cette étiquette dans le champ "algorithm" afin que la
désérialisation puisse retrouver la bonne implémentation.
"""

import json
from concurrent.futures import Future
from typing import Any, Dict, Union

from dskeys.exceptions import NotImplementedException

ALGS: Dict[str, Dict[str, type]] = {}

def register(algorithm: str, KeyPair: type, PublicKey: type, SecretKey: type) -> None:
    """Enregistre les classes d'un algorithme sous son étiquette"""
    ALGS[algorithm] = {
        "KeyPair": KeyPair,
        "PublicKey": PublicKey,
        "SecretKey": SecretKey,
    }

def get_algorithm(algorithm: str) -> Dict[str, type]:
    if not isinstance(algorithm, str) or algorithm not in ALGS:
        raise NotImplementedException(f"no such algorithm: {algorithm}")
    return ALGS[algorithm]

def generate_keypair(algorithm: str, keysize: Union[int, str], rng=None, progress_cb=None) -> "KeyPair":
    """
    Génère une paire de clés pour l'algorithme demandé

    Raises:
        NotImplementedException: Si l'algorithme n'est pas enregistré
    """
    cls = get_algorithm(algorithm)["KeyPair"]
    return cls.generate(keysize, rng=rng, progress_cb=progress_cb)

def generate_keypair_async(algorithm: str, keysize: Union[int, str], rng=None, progress_cb=None,
                           done_cb=None) -> Future:
    """Comme generate_keypair, mais la paire est livrée par un Future (et done_cb)"""
    cls = get_algorithm(algorithm)["KeyPair"]
    return cls.generate_async(keysize, rng=rng, progress_cb=progress_cb, done_cb=done_cb)

class KeyPair:
    algorithm: str = None

class _SerializableKey:
    algorithm: str = None
    _kind: str = None

    def serialize_to_object(self, obj: Dict[str, Any]) -> None:
        raise NotImplementedError

    @classmethod
    def deserialize_from_object(cls, obj: Dict[str, Any]):
        raise NotImplementedError

    def to_simple_object(self) -> Dict[str, Any]:
        obj = {"algorithm": self.algorithm}
        self.serialize_to_object(obj)
        return obj

    def serialize(self) -> str:
        return json.dumps(self.to_simple_object())

    @classmethod
    def from_simple_object(cls, obj: Dict[str, Any]):
        """
        Reconstruit une clé à partir d'un objet simple

        Raises:
            NotImplementedException: Si l'algorithme de l'objet n'est pas enregistré
        """
        if not isinstance(obj, dict):
            raise NotImplementedException("objet de clé invalide")
        impl = get_algorithm(obj.get("algorithm"))[cls._kind]
        return impl.deserialize_from_object(obj)

    @classmethod
    def deserialize(cls, value: str):
        return cls.from_simple_object(json.loads(value))

class PublicKey(_SerializableKey):
    _kind = "PublicKey"

    def verify(self, message: Union[str, bytes], signature: str) -> bool:
        raise NotImplementedError

class SecretKey(_SerializableKey):
    _kind = "SecretKey"

    def sign(self, message: Union[str, bytes], rng=None, progress_cb=None) -> str:
        raise NotImplementedError
