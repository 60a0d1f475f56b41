from typing import Optional

from jetton_minter_console.models.address import Address
from jetton_minter_console.models.enums import MenuAction, Role
from jetton_minter_console.models.ledger import Sender

ADMIN_ACTIONS = [MenuAction.MINT, MenuAction.CHANGE_ADMIN, MenuAction.CHANGE_CONTENT]
USER_ACTIONS = [MenuAction.INFO, MenuAction.QUIT]


def determine_role(sender: Sender, admin_address: Optional[Address]) -> Role:
    """
    Sessions without a caller identity run in permissive dry-run mode.
    """
    if not sender.is_authenticated:
        return Role.ADMIN
    if admin_address is not None and sender.address == admin_address:
        return Role.ADMIN
    return Role.VIEWER


def actions_for_role(role: Role) -> list[MenuAction]:
    if role == Role.ADMIN:
        return [*ADMIN_ACTIONS, *USER_ACTIONS]
    return list(USER_ACTIONS)
