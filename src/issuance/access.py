"""AccessGate — owner/pause capability, внедряемая в эмитент.

Не mixin и не базовый класс: state machine получает gate через
конструктор и консультируется с ним в начале каждой мутирующей операции.
Gate можно подменить (например, allow-all в симуляциях) или
протестировать отдельно.
"""

import logging
from enum import Enum

from src.issuance.errors import NotPaused, Paused, Unauthorized, ZeroAddress

logger = logging.getLogger(__name__)


class IssuerState(str, Enum):
    """Состояние MintRedeemStateMachine."""

    ACTIVE = "ACTIVE"
    PAUSED = "PAUSED"


class AccessGate:
    """
    Owner + pause флаг.

    pause/unpause/transfer_ownership: только owner.
    """

    def __init__(self, owner: str, paused: bool = False):
        if not owner:
            raise ZeroAddress("owner address cannot be empty")
        self._owner = owner
        self._paused = paused

    @property
    def owner(self) -> str:
        return self._owner

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def state(self) -> IssuerState:
        return IssuerState.PAUSED if self._paused else IssuerState.ACTIVE

    def is_owner(self, caller: str) -> bool:
        return caller == self._owner

    def require_owner(self, caller: str) -> None:
        if not self.is_owner(caller):
            raise Unauthorized(f"{caller!r} is not the owner")

    def require_active(self) -> None:
        if self._paused:
            raise Paused("Operation blocked: issuer is paused")

    def pause(self, caller: str) -> None:
        self.require_owner(caller)
        self.require_active()
        self._paused = True
        logger.warning("Issuer paused by %s", caller)

    def unpause(self, caller: str) -> None:
        self.require_owner(caller)
        if not self._paused:
            raise NotPaused("Issuer is not paused")
        self._paused = False
        logger.warning("Issuer unpaused by %s", caller)

    def transfer_ownership(self, caller: str, new_owner: str) -> None:
        self.require_owner(caller)
        if not new_owner:
            raise ZeroAddress("new owner address cannot be empty")
        logger.warning("Ownership transferred %s -> %s", self._owner, new_owner)
        self._owner = new_owner
