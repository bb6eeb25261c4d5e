"""
Groupes de paramètres DSA supportés

Les groupes sont fixes : pas d'étape de génération de paramètres. Chaque taille
de clé nominale correspond à un triplet (p, q, g) tiré des vecteurs de test
FIPS 186-3 (catégorie A.2.3, génération canonique vérifiable de g), et à une
fonction de hachage dont la sortie a la même taille que q.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Union

from dskeys import config

@dataclass(frozen=True)
class DomainParameters:
    """Paramètres de domaine DSA d'une taille de clé"""
    p: int
    q: int
    g: int
    hash_alg: str
    q_bitlength: int = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "q_bitlength", self.q.bit_length())

    @property
    def hex_length(self) -> int:
        """Nombre de caractères hexadécimaux de chaque moitié de signature"""
        return self.q_bitlength // 4

    def validate(self) -> bool:
        """
        Vérifie que les paramètres du groupe sont cohérents

        Returns:
            bool: True si q divise p-1, 1 < g < p et g^q ≡ 1 (mod p)
        """
        if self.p < 2 or self.q < 2:
            return False

        if (self.p - 1) % self.q != 0:
            return False

        if self.g <= 1 or self.g >= self.p:
            return False

        # g engendre bien le sous-groupe d'ordre q
        if pow(self.g, self.q, self.p) != 1:
            return False

        return True

_RAW_KEYSIZES = {
    # pour les tests uniquement : groupe 1024/160 avec SHA-1
    128: {
        "p": "ff600483db6abfc5b45eab78594b3533d550d9f1bf2a992a7a8daa6dc34f8045ad4e6e0c429d334eeeaaefd7e23d4810be00e4cc1492cba325ba81ff2d5a5b305a8d17eb3bf4a06a349d392e00d329744a5179380344e82a18c47933438f891e22aeef812d69c8f75e326cb70ea000c3f776dfdbd604638c2ef717fc26d02e17",
        "q": "e21e04f911d1ed7991008ecaab3bf775984309c3",
        "g": "c52a4a0ff3b7e61fdf1867ce84138369a6154f4afa92966e3c827e25cfa6cf508b90e5de419e1337e07a2e9e2a3cd5dea704d175f8ebf6af397d69e110b96afb17c7a03259329e4829b0d03bbc7896b15b4ade53e130858cc34d96269aa89041f409136c7242a38895c9d5bccad4f389af1d7a4bd1398bd072dffa896233397a",
        "hash_alg": "sha1",
    },
    # groupe 2048/256 avec SHA-256
    256: {
        "p": "d6c4e5045697756c7a312d02c2289c25d40f9954261f7b5876214b6df109c738b76226b199bb7e33f8fc7ac1dcc316e1e7c78973951bfc6ff2e00cc987cd76fcfb0b8c0096b0b460fffac960ca4136c28f4bfb580de47cf7e7934c3985e3b3d943b77f06ef2af3ac3494fc3c6fc49810a63853862a02bb1c824a01b7fc688e4028527a58ad58c9d512922660db5d505bc263af293bc93bcd6d885a157579d7f52952236dd9d06a4fc3bc2247d21f1a70f5848eb0176513537c983f5a36737f01f82b44546e8e7f0fabc457e3de1d9c5dba96965b10a2a0580b0ad0f88179e10066107fb74314a07e6745863bc797b7002ebec0b000a98eb697414709ac17b401",
        "q": "b1e370f6472c8754ccd75e99666ec8ef1fd748b748bbbc08503d82ce8055ab3b",
        "g": "9a8269ab2e3b733a5242179d8f8ddb17ff93297d9eab00376db211a22b19c854dfa80166df2132cbc51fb224b0904abb22da2c7b7850f782124cb575b116f41ea7c4fc75b1d77525204cd7c23a15999004c23cdeb72359ee74e886a1dde7855ae05fe847447d0a68059002c3819a75dc7dcbb30e39efac36e07e2c404b7ca98b263b25fa314ba93c0625718bd489cea6d04ba4b0b7f156eeb4c56c44b50e4fb5bce9d7ae0d55b379225feb0214a04bed72f33e0664d290e7c840df3e2abb5e48189fa4e90646f1867db289c6560476799f7be8420a6dc01d078de437f280fff2d7ddf1248d56e1a54b933a41629d6c252983c58795105802d30d7bcd819cf6ef",
        "hash_alg": "sha256",
    },
}

def _build_keysizes() -> Dict[int, DomainParameters]:
    """Convertit la table brute en paramètres de domaine, une seule fois au chargement"""
    keysizes = {}
    for keysize, raw in _RAW_KEYSIZES.items():
        params = DomainParameters(
            p=int(raw["p"], 16),
            q=int(raw["q"], 16),
            g=int(raw["g"], 16),
            hash_alg=raw["hash_alg"],
        )
        if not params.validate():
            raise ValueError(f"Paramètres DSA invalides pour la taille {keysize}")
        keysizes[keysize] = params
    return keysizes

KEYSIZES: Dict[int, DomainParameters] = _build_keysizes()

def get_params(keysize: Union[int, str, None]) -> Optional[DomainParameters]:
    """
    Retourne les paramètres de domaine d'une taille de clé

    Args:
        keysize: La taille nominale (128 ou 256), entier ou chaîne numérique

    Returns:
        Optional[DomainParameters]: Les paramètres, ou None si la taille est inconnue
    """
    if isinstance(keysize, str) and keysize.isascii() and keysize.isdigit():
        keysize = int(keysize)
    # bool est un int, et un float serait tronqué silencieusement
    if not isinstance(keysize, int) or isinstance(keysize, bool):
        return None
    return KEYSIZES.get(keysize)

def keysize_from_p_bitlength(size: int) -> Optional[int]:
    """
    Devine la taille de clé à partir de la taille en bits de p

    Une valeur lue en big-endian peut avoir quelques bits de tête à zéro, on
    tolère donc une taille jusqu'à P_BITLENGTH_TOLERANCE bits plus petite.

    Args:
        size: La taille en bits du p fourni

    Returns:
        Optional[int]: La taille de clé, ou None si aucun groupe ne correspond
    """
    for keysize, params in KEYSIZES.items():
        diff = params.p.bit_length() - size
        if 0 <= diff < config.P_BITLENGTH_TOLERANCE:
            return keysize
    return None
