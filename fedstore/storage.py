"""
fedstore/storage.py

Primitivas de arquivo compartilhadas pelos stores.

Exporta:
- `load_json()`: lê e parseia um documento, propagando o erro
- `read_json()`: idem, mas retorna `None` em qualquer falha (dado best-effort)
- `write_json()`: escrita atômica (arquivo temporário + rename)
- `mtime()`: sonda de metadados; 0.0 se o arquivo não existe
- `scan()`: varredura lazy por curinga em um diretório
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Iterator

log = logging.getLogger(__name__)

JSON_INDENT = 4

# umask do processo, lida uma vez no import: os.umask() só consegue ler trocando
_UMASK = os.umask(0)
os.umask(_UMASK)

FILE_MODE = 0o666 & ~_UMASK


def load_json(path: Path):
    """
    Lê e parseia o documento em `path`.
    Levanta OSError se o arquivo não abre e ValueError se não parseia.
    """
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def read_json(path: Path) -> dict | None:
    try:
        return load_json(path)
    except (OSError, ValueError) as e:
        log.debug(f"Ignorando '{path}': {e}")
        return None


def write_json(path: Path, document) -> None:
    """
    Grava o documento formatado em um temporário no mesmo diretório e faz
    `os.replace` para o nome final: leitores nunca veem um JSON truncado.
    Levanta OSError se o diretório não existe ou não é gravável.
    """
    path = Path(path)
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=".", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(json.dumps(document, indent=JSON_INDENT, ensure_ascii=False))
        # mkstemp cria com 0600; o arquivo final segue o umask como um open() comum
        os.chmod(tmp, FILE_MODE)
        os.replace(tmp, path)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise


def mtime(path: Path) -> float:
    """Retorna o mtime do arquivo ou diretório, ou 0.0 se não existe."""
    try:
        return Path(path).stat().st_mtime
    except OSError:
        return 0.0


def scan(directory: Path, pattern: str) -> Iterator[Path]:
    """
    Sequência lazy, finita e não reiniciável dos arquivos de `directory`
    que casam com `pattern`, na ordem de enumeração do sistema de arquivos.
    Diretório inexistente produz uma sequência vazia.
    """
    yield from Path(directory).glob(pattern)
