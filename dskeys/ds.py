"""
Algorithme de signature DSA, enregistré sous l'étiquette "DS"

Les tailles de clé supportées et leurs groupes (p, q, g) sont fixés dans
dskeys.params. Toute clé reconstruite depuis un objet externe passe par
keysize_from_object, qui refuse les paramètres différents des groupes connus.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Dict, Optional, Tuple, Union

from dskeys import config, keys
from dskeys.algebra import hex_lpad, hex_to_int, int_to_hex, is_hex, mod_inv
from dskeys.exceptions import BadParameterException, KeySizeNotSupportedException
from dskeys.params import DomainParameters, get_params, keysize_from_p_bitlength
from dskeys.sampling import default_rng, hash_to_int, random_number_mod

logger = logging.getLogger(__name__)

ALGORITHM = "DS"

ProgressCallback = Optional[Callable[[str], None]]

_executor: Optional[ThreadPoolExecutor] = None
_executor_lock = threading.Lock()

def _get_executor() -> ThreadPoolExecutor:
    global _executor
    with _executor_lock:
        if _executor is None:
            _executor = ThreadPoolExecutor(max_workers=config.NUM_WORKERS, thread_name_prefix="dskeys")
        return _executor

def _submit(fn: Callable[[], Any], done_cb: Optional[Callable[[Any], None]]) -> Future:
    """Exécute fn dans le pool et transmet le résultat à done_cb une fois calculé"""
    future = _get_executor().submit(fn)
    if done_cb is not None:
        def _deliver(f: Future):
            # pas de résultat partiel : seulement en cas de succès
            if not f.cancelled() and f.exception() is None:
                done_cb(f.result())
        future.add_done_callback(_deliver)
    return future

def _progress(progress_cb: ProgressCallback, stage: str) -> None:
    if progress_cb is not None:
        progress_cb(stage)

def _require_params(keysize: Union[int, str]) -> DomainParameters:
    params = get_params(keysize)
    if params is None:
        raise KeySizeNotSupportedException(str(keysize))
    return params

def serialize_params_to_object(keysize: int, obj: Dict[str, Any]) -> None:
    """Ajoute p, q et g à l'objet pour que la clé soit portable"""
    params = _require_params(keysize)
    obj["p"] = int_to_hex(params.p)
    obj["q"] = int_to_hex(params.q)
    obj["g"] = int_to_hex(params.g)

def _parse_hex_field(obj: Dict[str, Any], name: str) -> int:
    try:
        return hex_to_int(obj[name])
    except (KeyError, TypeError, ValueError):
        logger.warning("Champ %s absent ou illisible", name)
        raise BadParameterException(f"bad {name}")

def keysize_from_object(obj: Dict[str, Any]) -> int:
    """
    Retrouve la taille de clé d'un objet désérialisé et vérifie ses paramètres

    La taille est devinée d'après la taille en bits de p, puis p, q et g doivent
    être exactement ceux du groupe canonique de cette taille. C'est la seule
    protection contre une clé publique fournie avec des paramètres faibles.

    Args:
        obj: Objet contenant au moins "p", "q" et "g" en hexadécimal

    Returns:
        int: La taille de clé

    Raises:
        BadParameterException: "bad p", "bad q" ou "bad g"
    """
    p = _parse_hex_field(obj, "p")
    q = _parse_hex_field(obj, "q")
    g = _parse_hex_field(obj, "g")

    keysize = keysize_from_p_bitlength(p.bit_length())
    if keysize is None:
        logger.warning("Aucun groupe pour un p de %d bits", p.bit_length())
        raise BadParameterException("bad p")
    params = get_params(keysize)

    if p != params.p:
        logger.warning("p ne correspond pas au groupe %s", keysize)
        raise BadParameterException("bad p")

    if q != params.q:
        logger.warning("q ne correspond pas au groupe %s", keysize)
        raise BadParameterException("bad q")

    if g != params.g:
        logger.warning("g ne correspond pas au groupe %s", keysize)
        raise BadParameterException("bad g")

    return keysize

def _compute_signature(params: DomainParameters, x: int, k: int, e: int) -> Optional[Tuple[int, int]]:
    """
    Calcule (r, s) pour un nonce donné

    Args:
        params: Les paramètres du groupe
        x: La clé privée
        k: Le nonce, dans [1, q-1]
        e: L'empreinte du message

    Returns:
        Optional[Tuple[int, int]]: La signature, ou None si r ou s est nul
    """
    p, q, g = params.p, params.q, params.g

    # r = (g^k mod p) mod q
    r = pow(g, k, p) % q
    if r == 0:
        logger.info("r nul, nouveau tirage du nonce")
        return None

    # s = k^(-1) (H(m) + x·r) mod q
    message_dep = (e + (x * r) % q) % q
    s = (mod_inv(k, q) * message_dep) % q
    if s == 0:
        logger.info("s nul, nouveau tirage du nonce")
        return None

    return r, s

class KeyPair(keys.KeyPair):
    """Paire de clés DSA créée à partir d'un même x"""
    algorithm = ALGORITHM

    def __init__(self, secret_key: "SecretKey", public_key: "PublicKey", keysize: int):
        self.secret_key = secret_key
        self.public_key = public_key
        self.keysize = keysize

    @classmethod
    def generate(cls, keysize: Union[int, str], rng=None, progress_cb: ProgressCallback = None) -> "KeyPair":
        """
        Génère une paire de clés DSA

        Args:
            keysize: La taille de clé (128 ou 256)
            rng: Source d'aléa exposant getrandbits(n)
            progress_cb: Appelé avec "x" puis "y", à titre informatif

        Returns:
            KeyPair: La paire de clés

        Raises:
            KeySizeNotSupportedException: Si la taille n'est pas supportée
        """
        params = _require_params(keysize)
        keysize = int(keysize)

        # clé privée x aléatoire modulo q
        x = random_number_mod(params.q, rng)
        _progress(progress_cb, "x")

        # la clé privée calcule y
        secret_key = SecretKey(x, keysize)
        _progress(progress_cb, "y")
        public_key = PublicKey(secret_key.y, keysize)

        return cls(secret_key, public_key, keysize)

    @classmethod
    def generate_async(cls, keysize: Union[int, str], rng=None, progress_cb: ProgressCallback = None,
                       done_cb: Optional[Callable[["KeyPair"], None]] = None) -> Future:
        """
        Comme generate, mais le résultat est livré par un Future (et done_cb)

        La taille de clé est vérifiée tout de suite : une taille non supportée
        lève KeySizeNotSupportedException avant toute soumission.
        """
        _require_params(keysize)
        return _submit(lambda: cls.generate(keysize, rng=rng, progress_cb=progress_cb), done_cb)

class PublicKey(keys.PublicKey):
    algorithm = ALGORITHM

    def __init__(self, y: int, keysize: Union[int, str]):
        params = _require_params(keysize)
        if not 0 < y < params.p:
            raise ValueError("Clé publique invalide")
        self.y = y
        self.keysize = int(keysize)

    @property
    def params(self) -> DomainParameters:
        return get_params(self.keysize)

    def verify(self, message: Union[str, bytes], signature: str) -> bool:
        """
        Vérifie une signature DSA

        Ne lève jamais d'exception pour une signature mal formée : toute anomalie
        (longueur, caractères, r ou s hors de ]0, q[) donne simplement False.

        Args:
            message: Le message signé
            signature: r || s en hexadécimal, chaque moitié sur q_bitlength/4 caractères

        Returns:
            bool: True si la signature est valide
        """
        params = self.params
        p, q, g = params.p, params.q, params.g

        # extrait r et s
        hexlength = params.hex_length
        if not isinstance(signature, str) or len(signature) != hexlength * 2:
            logger.debug("Longueur de signature invalide")
            return False
        if not is_hex(signature):
            logger.debug("Signature non hexadécimale")
            return False

        r = int(signature[:hexlength], 16)
        s = int(signature[hexlength:], 16)

        # contraintes d'intervalle
        if not 0 < r < q:
            logger.debug("r hors intervalle: %x", r)
            return False
        if not 0 < s < q:
            logger.debug("s hors intervalle: %x", s)
            return False

        # w = s^(-1) mod q
        w = mod_inv(s, q)

        # u1 = H(m)·w mod q, u2 = r·w mod q
        u1 = (hash_to_int(params.hash_alg, message, params.q_bitlength) * w) % q
        u2 = (r * w) % q

        # v = ((g^u1 · y^u2) mod p) mod q
        v = ((pow(g, u1, p) * pow(self.y, u2, p)) % p) % q

        return v == r

    def serialize_to_object(self, obj: Dict[str, Any]) -> None:
        obj["y"] = int_to_hex(self.y)
        serialize_params_to_object(self.keysize, obj)

    @classmethod
    def deserialize_from_object(cls, obj: Dict[str, Any]) -> "PublicKey":
        """
        Reconstruit une clé publique après validation de ses paramètres

        Raises:
            BadParameterException: Si p, q, g ou y sont refusés
        """
        keysize = keysize_from_object(obj)
        y = _parse_hex_field(obj, "y")
        if not 0 < y < get_params(keysize).p:
            raise BadParameterException("bad y")
        return cls(y, keysize)

    def __eq__(self, other) -> bool:
        if not isinstance(other, PublicKey):
            return False
        return self.keysize == other.keysize and self.y == other.y

    def __hash__(self) -> int:
        return hash((self.keysize, self.y))

    def __repr__(self) -> str:
        return f"PublicKey(keysize={self.keysize}, y={int_to_hex(self.y)[:16]}...)"

class SecretKey(keys.SecretKey):
    algorithm = ALGORITHM

    def __init__(self, x: int, keysize: Union[int, str]):
        params = _require_params(keysize)
        if not 0 < x < params.q:
            raise ValueError("Clé privée invalide")
        self.x = x
        self.keysize = int(keysize)

        # y = g^x mod p, toujours recalculé à partir de x
        self.y = pow(params.g, x, params.p)

    @property
    def params(self) -> DomainParameters:
        return get_params(self.keysize)

    def public_key(self) -> PublicKey:
        return PublicKey(self.y, self.keysize)

    def sign(self, message: Union[str, bytes], rng=None, progress_cb: ProgressCallback = None) -> str:
        """
        Signe un message avec DSA

        Un nouveau nonce k est tiré à chaque tentative, jusqu'à obtenir r et s non nuls.

        Args:
            message: Le message à signer
            rng: Source d'aléa exposant getrandbits(n)
            progress_cb: Appelé avec "k" à chaque tirage de nonce, à titre informatif

        Returns:
            str: r || s en hexadécimal, chaque moitié sur q_bitlength/4 caractères
        """
        params = self.params
        if rng is None:
            rng = default_rng()

        e = hash_to_int(params.hash_alg, message, params.q_bitlength)

        while True:
            k = random_number_mod(params.q, rng)
            _progress(progress_cb, "k")
            signature = _compute_signature(params, self.x, k, e)
            if signature is not None:
                break

        r, s = signature
        hexlength = params.hex_length
        return hex_lpad(r, hexlength) + hex_lpad(s, hexlength)

    def sign_async(self, message: Union[str, bytes], rng=None, progress_cb: ProgressCallback = None,
                   done_cb: Optional[Callable[[str], None]] = None) -> Future:
        """Comme sign, mais la signature est livrée par un Future (et done_cb)"""
        return _submit(lambda: self.sign(message, rng=rng, progress_cb=progress_cb), done_cb)

    def serialize_to_object(self, obj: Dict[str, Any]) -> None:
        obj["x"] = int_to_hex(self.x)
        serialize_params_to_object(self.keysize, obj)

    @classmethod
    def deserialize_from_object(cls, obj: Dict[str, Any]) -> "SecretKey":
        """
        Reconstruit une clé privée après validation de ses paramètres, y est recalculé

        Raises:
            BadParameterException: Si p, q, g ou x sont refusés
        """
        keysize = keysize_from_object(obj)
        x = _parse_hex_field(obj, "x")
        if not 0 < x < get_params(keysize).q:
            raise BadParameterException("bad x")
        return cls(x, keysize)

    def __eq__(self, other) -> bool:
        if not isinstance(other, SecretKey):
            return False
        return self.keysize == other.keysize and self.x == other.x

    def __hash__(self) -> int:
        return hash((self.keysize, self.x))

    def __repr__(self) -> str:
        return f"SecretKey(keysize={self.keysize})"

keys.register(ALGORITHM, KeyPair=KeyPair, PublicKey=PublicKey, SecretKey=SecretKey)
