from Crypto.Hash import SHA1, SHA256
from secrets import SystemRandom
from typing import Optional, Union

from dskeys import config

HASH_ALGS = {
    "sha1": SHA1,
    "sha256": SHA256,
}

def default_rng() -> SystemRandom:
    """Source d'aléa cryptographique par défaut (os.urandom, sûre entre threads)"""
    return SystemRandom()

def random_number_mod(q: int, rng=None) -> int:
    """
    Tire un entier uniforme dans [1, q-1]

    On tire 64 bits de plus que q puis on réduit modulo q-1 : le biais de la
    réduction est de l'ordre de 2^-64 (FIPS 186-3, B.1.1).

    Args:
        q: L'ordre du sous-groupe
        rng: Objet exposant getrandbits(n), SystemRandom par défaut

    Returns:
        int: Un entier c tel que 1 <= c <= q-1
    """
    if q < 2:
        raise ValueError("q doit être supérieur à 1")
    if rng is None:
        rng = default_rng()
    c = rng.getrandbits(q.bit_length() + config.EXTRA_RANDOM_BITS)
    return c % (q - 1) + 1

def hash_to_int(hash_alg: str, message: Union[str, bytes], q_bitlength: Optional[int] = None) -> int:
    """
    Hache un message et lit l'empreinte comme un entier big-endian

    Aucune réduction modulo q ici : elle est faite au moment de l'utilisation.
    Si q_bitlength est fourni et que l'empreinte est plus longue, on garde les
    q_bitlength bits de gauche (FIPS 186-3, 4.6). Pour les groupes fournis la
    taille de l'empreinte est égale à celle de q et rien n'est tronqué.

    Args:
        hash_alg: "sha1" ou "sha256"
        message: Le message, les chaînes sont encodées en UTF-8
        q_bitlength: La taille en bits de q

    Returns:
        int: L'empreinte du message

    Raises:
        ValueError: Si l'algorithme de hachage est inconnu
    """
    if hash_alg not in HASH_ALGS:
        raise ValueError(f"Algorithme de hachage non supporté: {hash_alg}")
    if not isinstance(message, (str, bytes)):
        raise TypeError("Le message doit être une chaîne ou des octets")
    if isinstance(message, str):
        message = message.encode("utf-8")

    h = HASH_ALGS[hash_alg].new(message)
    e = int(h.hexdigest(), 16)

    hash_bitlength = h.digest_size * 8
    if q_bitlength is not None and hash_bitlength > q_bitlength:
        e >>= hash_bitlength - q_bitlength
    return e
