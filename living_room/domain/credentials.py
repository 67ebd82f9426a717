"""
Encodage et vérification des mots de passe.

`encode_password` reproduit à l'identique l'encodage historique des comptes (base64 répété puis
tronqué à 20 caractères). Ce n'est PAS un hachage: il est déterministe, sans sel, et réversible en
pratique pour des mots de passe courts. Il n'est conservé que pour vérifier les valeurs déjà
stockées; les nouveaux déploiements doivent utiliser `PASSWORD_SCHEME=pbkdf2_sha256`.
"""

import base64
import hmac

from passlib.context import CryptContext

LEGACY_SCHEME = "legacy"
LEGACY_LENGTH = 20

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def encode_password(secret: str) -> str:
    """Encode un secret avec l'algorithme historique (base64 répété, tronqué à 20)."""
    if not secret:
        raise ValueError("empty secret cannot be encoded")
    encoded = base64.b64encode(secret.encode("utf-8")).decode("ascii")
    while len(encoded) <= LEGACY_LENGTH:
        encoded = base64.b64encode(encoded.encode("utf-8")).decode("ascii")
    return encoded[:LEGACY_LENGTH]


_LEGACY_DUMMY = encode_password("unknown-user")


def store_password(secret: str, scheme: str = LEGACY_SCHEME) -> str:
    """Produit la valeur à stocker selon le schéma configuré."""
    if scheme == LEGACY_SCHEME:
        return encode_password(secret)
    return pwd_context.hash(secret)


def verify_password(secret: str, stored: str) -> bool:
    """Vérifie un secret contre la valeur stockée (hash passlib ou encodage historique)."""
    if not secret or not stored:
        return False
    if pwd_context.identify(stored) is not None:
        return pwd_context.verify(secret, stored)
    return hmac.compare_digest(encode_password(secret).encode(), stored.encode())


def dummy_verify(secret: str, scheme: str = LEGACY_SCHEME) -> bool:
    """Vérification factice pour un utilisateur inconnu: même coût que `verify_password`.

    Retourne toujours False.
    """
    if scheme == LEGACY_SCHEME:
        verify_password(secret, _LEGACY_DUMMY)
    else:
        pwd_context.dummy_verify()
    return False
