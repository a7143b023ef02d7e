"""
fedstore/passwd.py

Hash de senha dos usuários locais: `nonce:sha1(nonce:uid:senha)`.
"""

import hashlib
import hmac
import secrets


def hash_password(uid: str, passwd: str, nonce: str | None = None) -> str:
    if nonce is None:
        nonce = f"{secrets.randbits(32):08x}"

    combi = f"{nonce}:{uid}:{passwd}"
    digest = hashlib.sha1(combi.encode("utf-8")).hexdigest()

    return f"{nonce}:{digest}"


def check_password(uid: str, passwd: str, hashed: str) -> bool:
    nonce, sep, _ = hashed.partition(":")
    if not sep:
        return False

    return hmac.compare_digest(hashed, hash_password(uid, passwd, nonce))
