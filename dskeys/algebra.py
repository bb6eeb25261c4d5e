def mod_inv(a: int, m: int) -> int:
    """
    Calcule l'inverse modulaire de a modulo m

    Args:
        a: L'entier à inverser
        m: Le module

    Returns:
        int: b tel que a*b ≡ 1 (mod m)

    Raises:
        ValueError: Si a n'est pas inversible modulo m
    """
    if a % m == 0:
        raise ValueError(f"{a} n'est pas inversible modulo {m}")
    return pow(a, -1, m)

def int_to_hex(n: int) -> str:
    """Encode un entier en hexadécimal minuscule, sans préfixe ni remplissage"""
    return format(n, "x")

def hex_lpad(n: int, length: int) -> str:
    """Encode un entier en hexadécimal complété à gauche par des 0"""
    return int_to_hex(n).rjust(length, "0")

def is_hex(value: str) -> bool:
    """Vérifie qu'une chaîne n'est composée que de chiffres hexadécimaux"""
    return isinstance(value, str) and len(value) > 0 and all(c in "0123456789abcdefABCDEF" for c in value)

def hex_to_int(value: str) -> int:
    """
    Décode une chaîne hexadécimale stricte

    int(x, 16) accepte des espaces, des '_' et un préfixe '0x' : on les refuse ici.

    Raises:
        ValueError: Si la chaîne n'est pas de l'hexadécimal
    """
    if not is_hex(value):
        raise ValueError(f"Valeur hexadécimale invalide: {value!r}")
    return int(value, 16)
