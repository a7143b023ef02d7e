"""
fedstore/timeline.py

Timeline de mensagens recebidas de um usuário local.

Cada entrada é um arquivo `{tid}-{md5(id)}.json` em `timeline/`; como o
`tid` tem largura fixa, ordenar os nomes é ordenar cronologicamente.
Algumas entradas têm uma segunda cópia com o mesmo nome em `local/`.

A timeline é um cache best-effort da federação: entrada ausente ou
corrompida é tratada como "não existe", nunca como erro. O limite de
`max_timeline_entries` é aplicado na leitura; nada é apagado na escrita.
"""

from __future__ import annotations

from pathlib import Path

from fedstore.errors import Status
from fedstore.naming import JSON_SUFFIX, name_for, ordered_name_for
from fedstore.storage import read_json, scan, write_json

TIMELINE_DIR = "timeline"
LOCAL_DIR = "local"


class TimelineStore:
    def __init__(self, user):
        self.user = user
        self.directory = user.path / TIMELINE_DIR
        self.local_directory = user.path / LOCAL_DIR

    # -----------------------------------------------------------------------
    # Leitura
    # -----------------------------------------------------------------------

    def find_filename(self, id: str) -> Path | None:
        """
        Resolve um id pelo sufixo de hash. Se mais de um arquivo casar
        (colisão de hash entre ids diferentes), vale o primeiro, o mais antigo.
        """
        matches = sorted(scan(self.directory, f"*-{name_for(id)}{JSON_SUFFIX}"))
        return matches[0] if matches else None

    def get(self, id: str) -> dict | None:
        fn = self.find_filename(id)
        if fn is None:
            return None
        return self.get_by_path(fn)

    def get_by_path(self, path: Path) -> dict | None:
        return read_json(path)

    def list(self) -> list[Path]:
        """Os nomes mais recentes primeiro, limitados por `max_timeline_entries`."""
        return self._bounded(self.directory)

    def local_list(self) -> list[Path]:
        return self._bounded(self.local_directory)

    def _bounded(self, directory: Path) -> list[Path]:
        files = sorted(scan(directory, f"*{JSON_SUFFIX}"))

        limit = self.user.server.max_timeline_entries
        if limit <= 0 or limit > len(files):
            limit = len(files)

        return files[len(files) - limit:][::-1]

    # -----------------------------------------------------------------------
    # Escrita
    # -----------------------------------------------------------------------

    def add(self, id: str, document: dict, local: bool = False, ts: float | None = None) -> Status:
        """
        Grava a entrada em `timeline/` e, se `local`, a mesma cópia em `local/`.
        Sem `ts`, o timestamp é o relógio atual. Um id já presente é
        sobrescrito no mesmo arquivo, mantendo sua posição na timeline.
        """
        existing = self.find_filename(id)
        name = existing.name if existing is not None else ordered_name_for(ts, id)

        targets = [self.directory / name]
        if local:
            targets.append(self.local_directory / name)

        for fn in targets:
            try:
                write_json(fn, document)
            except OSError as e:
                self.user.log.error(f"timeline_add {id}: {e}")
                return Status.WRITE_FAILED

            self.user.log.trace(1, f"timeline_add {id} {fn}")

        return Status.CREATED

    def remove(self, id: str) -> None:
        fn = self.find_filename(id)
        if fn is None:
            return

        if _unlink(fn):
            self.user.log.trace(1, f"timeline_del {id}")

        # nem toda entrada tem cópia local
        if _unlink(self.local_directory / fn.name):
            self.user.log.trace(1, f"timeline_del (local) {id}")


def _unlink(path: Path) -> bool:
    try:
        path.unlink()
    except OSError:
        return False
    return True
