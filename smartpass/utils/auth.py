"""
Utilitaires de hachage / Hashing utilities.
Le mot de passe conducteur d'une ligne n'est stocke que hashe.
A route's conductor password is only stored hashed.
"""

import bcrypt


def hash_password(password: str) -> str:
    """Hasher un mot de passe / Hash a password."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")
