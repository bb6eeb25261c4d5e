class DSKeysException(Exception):
    """Exception de base pour toutes les erreurs de dskeys"""
    pass

class KeySizeNotSupportedException(DSKeysException):
    """La taille de clé demandée n'a pas de groupe de paramètres associé"""
    pass

class BadParameterException(DSKeysException):
    """Paramètres (p, q, g) ou valeur de clé rejetés lors de la désérialisation"""
    pass

class NotImplementedException(DSKeysException):
    """Algorithme de signature inconnu du registre"""
    pass
