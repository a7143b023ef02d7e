"""
fedstore/keys.py

Material de chave dos usuários locais, guardado em `user/{uid}/key.json`
no formato `{"secret": <PEM privado>, "public": <PEM público>}`.
"""

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

KEY_SIZE = 2048


def generate_key_document() -> dict:
    """Gera um par RSA novo no formato do key.json."""
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=KEY_SIZE)

    return {
        "secret": private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        ).decode(),
        "public": private_key.public_key().public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        ).decode(),
    }


def load_private_key(user):
    return serialization.load_pem_private_key(user.key["secret"].encode(), password=None)


def load_public_key_pem(user) -> str:
    return user.key["public"]


def key_id(user) -> str:
    """Id da chave pública publicada no actor do usuário."""
    return f"{user.actor}#main-key"
