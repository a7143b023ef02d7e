"""
fedstore/config.py

Configuração do processo e do servidor.

Exporta:
- `settings`: settings do processo via Dynaconf (`FEDSTORE_*`, settings.toml)
- `ServerConfig`: configuração do servidor, imutável depois de carregada
- `open_server()`: carrega `{basedir}/server.json` uma única vez no startup
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dynaconf import Dynaconf, ValidationError, Validator

from fedstore.errors import ConfigInvalid, ConfigMissing

log = logging.getLogger(__name__)

settings = Dynaconf(
    settings_files=["settings.toml", ".secrets.toml"],
    envvar_prefix="FEDSTORE",
    load_dotenv=True,
)

SERVER_FILE = "server.json"

# Variável de ambiente que sobrescreve o `dbglevel` do server.json
DEBUG_ENVVAR = "DEBUG"

DEFAULT_MAX_TIMELINE_ENTRIES = 128

server_validators = [
    Validator("HOST", must_exist=True, ne=None),
    Validator("PREFIX", must_exist=True, ne=None),
]


@dataclass(frozen=True)
class ServerConfig:
    basedir: str
    host: str
    prefix: str
    dbglevel: int
    max_timeline_entries: int
    data: dict = field(default_factory=dict, repr=False, compare=False)

    @property
    def baseurl(self) -> str:
        return f"https://{self.host}{self.prefix}"

    @property
    def users_dir(self) -> Path:
        return Path(self.basedir) / "user"


def _debug_override() -> int | None:
    value = os.environ.get(DEBUG_ENVVAR)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        log.warning(f"Ignorando {DEBUG_ENVVAR}={value!r}: não é um inteiro")
        return None


def _number(data: dict, key: str, default: int) -> int:
    """Valor numérico do server.json; não numérico vale 0, como campo vazio."""
    value = data.get(key, default)
    if value is None:
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        log.warning(f"Ignorando {key}={value!r} do server.json: não é um número")
        return 0


def open_server(basedir: str | os.PathLike | None = None) -> ServerConfig:
    """
    Carrega a configuração do servidor.
    Levanta ConfigMissing se o server.json não abre e ConfigInvalid se não
    parseia ou se faltam `host`/`prefix`. Sem `basedir`, usa `settings.BASEDIR`.
    """
    if basedir is None:
        basedir = settings.get("BASEDIR", ".")

    basedir = str(basedir).rstrip("/") or "/"

    cfg_file = Path(basedir) / SERVER_FILE

    try:
        with open(cfg_file, "r", encoding="utf-8") as f:
            raw = f.read()
    except OSError:
        log.error(f"error opening '{cfg_file}'")
        raise ConfigMissing(cfg_file)

    try:
        data = json.loads(raw)
    except ValueError:
        log.error(f"cannot parse '{cfg_file}'")
        raise ConfigInvalid(cfg_file)

    if not isinstance(data, dict):
        log.error(f"cannot parse '{cfg_file}'")
        raise ConfigInvalid(cfg_file)

    # Dynaconf isolado só para validar o documento; variáveis de ambiente não
    # entram aqui, o único override aceito é o DEBUG
    server = Dynaconf(environments=False, envvar_prefix="FEDSTORE_SERVER", ignore_unknown_envvars=True)
    server.update(data)
    server.validators.register(*server_validators)
    try:
        server.validators.validate()
    except ValidationError as e:
        log.error(f"cannot get server data from '{cfg_file}': {e}")
        raise ConfigInvalid(cfg_file, "cannot get server data from")

    if data.get("host") is None or data.get("prefix") is None:
        log.error(f"cannot get server data from '{cfg_file}'")
        raise ConfigInvalid(cfg_file, "cannot get server data from")

    dbglevel = _number(data, "dbglevel", 0)
    max_entries = _number(data, "max_timeline_entries", DEFAULT_MAX_TIMELINE_ENTRIES)

    override = _debug_override()
    if override is not None:
        dbglevel = override
        log.info(f"DEBUG level set to {dbglevel} from environment")

    return ServerConfig(
        basedir=basedir,
        host=str(data["host"]),
        prefix=str(data["prefix"]),
        dbglevel=dbglevel,
        max_timeline_entries=max_entries,
        data=data,
    )
