# mind_core/users/lifecycle.py
from __future__ import annotations

from mind_core.administrative.models import Status
from mind_core.common.config import MindConfig, get_config
from mind_core.common.lookups import get_or_create_lookup
from mind_core.users.models import AccountStatus, UserType

STATUS_COLORS = {
    AccountStatus.PENDING_VERIFICATION: "#E8871E",
}


def status_row(state: AccountStatus) -> Status:
    """
    Status lookup row mirroring an account state (created on first use).
    """
    state = AccountStatus(state)
    row, _ = get_or_create_lookup(
        Status,
        code=state.value,
        defaults={
            "name": state.label,
            "color": STATUS_COLORS.get(state, Status.DEFAULT_COLOR),
            "module": "USUARIOS",
        },
    )
    return row


def default_user_type(*, config: MindConfig | None = None) -> UserType:
    cfg = config or get_config()
    row, _ = get_or_create_lookup(
        UserType,
        code=cfg.default_user_type_code,
        defaults={"name": cfg.default_user_type_name},
    )
    return row
