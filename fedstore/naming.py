"""
fedstore/naming.py

Esquema de nomes do armazenamento em disco.

Toda entidade vira um arquivo cujo nome é derivado deterministicamente
da sua chave:
- `name_for()`: hash hexadecimal de tamanho fixo (followers)
- `ordered_name_for()`: timestamp de largura fixa + hash (timeline), de modo
  que a ordem lexicográfica dos nomes seja a ordem cronológica
"""

import hashlib
import re
import time

JSON_SUFFIX = ".json"

# 10 dígitos de segundos cobrem datas até o ano 2286
TID_SECONDS_WIDTH = 10

_UID_RE = re.compile(r"[A-Za-z0-9_]+")


def name_for(key: str) -> str:
    """MD5 hexadecimal da chave. Nome de arquivo, não fronteira de segurança."""
    return hashlib.md5(key.encode("utf-8")).hexdigest()


def tid(ts: float | None = None, offset: int = 0) -> str:
    """
    Retorna um id baseado em tempo no formato `SSSSSSSSSS.UUUUUU`.
    Sem `ts`, usa o relógio atual.
    """
    if ts is None:
        ts = time.time()

    usecs = round((ts + offset) * 1_000_000)
    secs, usecs = divmod(usecs, 1_000_000)

    return f"{secs:0{TID_SECONDS_WIDTH}d}.{usecs:06d}"


def ordered_name_for(ts: float | None, key: str) -> str:
    return f"{tid(ts)}-{name_for(key)}{JSON_SUFFIX}"


def validate_uid(uid: str) -> bool:
    """Aceita apenas letras ASCII, dígitos e `_`."""
    return bool(uid) and _UID_RE.fullmatch(uid) is not None
