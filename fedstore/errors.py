"""
fedstore/errors.py

Erros e códigos de status da camada de persistência.

Falhas de configuração e de identidade de usuário são exceções tipadas:
quem chama não consegue prosseguir sem elas. Dados de follower/timeline
ausentes ou corrompidos não são erros (viram `None` ou são omitidos), e
falhas de escrita voltam como `Status.WRITE_FAILED`.
"""

from enum import IntEnum


class Status(IntEnum):
    # Valores no estilo HTTP, repassados direto pelos handlers
    OK = 200
    CREATED = 201
    WRITE_FAILED = 500


class StoreError(Exception):
    pass


# ---------------------------------------------------------------------------
# Configuração do servidor
# ---------------------------------------------------------------------------

class ConfigError(StoreError):
    def __init__(self, path, reason: str):
        self.path = path
        super().__init__(f"{reason} '{path}'")


class ConfigMissing(ConfigError):
    def __init__(self, path):
        super().__init__(path, "error opening")


class ConfigInvalid(ConfigError):
    def __init__(self, path, detail: str = "cannot parse"):
        super().__init__(path, detail)


# ---------------------------------------------------------------------------
# Identidade do usuário
# ---------------------------------------------------------------------------

class UserError(StoreError):
    pass


class InvalidUserId(UserError):
    def __init__(self, uid: str):
        self.uid = uid
        super().__init__(f"invalid user '{uid}'")


class UserFileError(UserError):
    reason = "error reading"

    def __init__(self, path):
        self.path = path
        super().__init__(f"{self.reason} '{path}'")


class UserConfigMissing(UserFileError):
    reason = "error opening"


class UserConfigInvalid(UserFileError):
    reason = "cannot parse"


class UserKeyMissing(UserFileError):
    reason = "error opening"


class UserKeyInvalid(UserFileError):
    reason = "cannot parse"
