"""
fedstore/log.py

Configuração de logging e traces de depuração por usuário.

O nível de depuração do servidor (`dbglevel`) decide quais traces são
emitidos: um trace de nível N só sai se `dbglevel >= N`.
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(server) -> None:
    """Chamado uma vez no startup, depois de `open_server()`."""
    level = logging.DEBUG if server.dbglevel > 0 else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S")


class UserLogAdapter(logging.LoggerAdapter):
    """
    Prefixa as mensagens com `[uid]` e troca o diretório base do usuário
    por `~`, para não poluir os logs com caminhos longos.
    """

    def __init__(self, logger: logging.Logger, uid: str, basedir: str, dbglevel: int):
        super().__init__(logger, {"uid": uid})
        self.uid = uid
        self.basedir = basedir
        self.dbglevel = dbglevel

    def process(self, msg, kwargs):
        msg = f"[{self.uid}] {msg}"
        if self.basedir:
            msg = msg.replace(self.basedir, "~")
        return msg, kwargs

    def trace(self, level: int, msg: str) -> None:
        if self.dbglevel >= level:
            self.debug(msg)
