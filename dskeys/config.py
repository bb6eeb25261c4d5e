import os

# Taille de clé utilisée par défaut par le service
DEFAULT_KEYSIZE = int(os.environ.get("DSKEYS_DEFAULT_KEYSIZE", "256"))

# Nombre de threads pour les opérations asynchrones (generate_async, sign_async)
NUM_WORKERS = int(os.environ.get("DSKEYS_WORKERS", "4"))

LOG_LEVEL = os.environ.get("DSKEYS_LOG_LEVEL", "INFO")

HOST = os.environ.get("DSKEYS_HOST", "0.0.0.0")
PORT = int(os.environ.get("DSKEYS_PORT", "8000"))

# Bits aléatoires supplémentaires pour l'échantillonnage modulo q (FIPS 186-3, B.1.1)
EXTRA_RANDOM_BITS = 64

# Écart maximal toléré entre la taille de p et celle lue dans un objet
P_BITLENGTH_TOLERANCE = 30
