# mind_core/users/passwords.py
from __future__ import annotations

import bcrypt

from mind_core.common.config import MindConfig, get_config

# bcrypt ignores everything past 72 bytes; truncate explicitly so hash and
# check always see the same input. Passwords are capped at max_password_bytes()
# so the pepper is never cut off.
BCRYPT_MAX_BYTES = 72
MIN_PASSWORD_LENGTH = 6


def max_password_bytes(*, config: MindConfig | None = None) -> int:
    """
    Longest password whose peppered form still fits in bcrypt's input.
    """
    cfg = config or get_config()
    return BCRYPT_MAX_BYTES - len(cfg.password_pepper.encode("utf-8"))


def _peppered(password: str, pepper: str) -> bytes:
    return f"{password}{pepper}".encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, *, config: MindConfig | None = None) -> str:
    cfg = config or get_config()
    salt = bcrypt.gensalt(rounds=cfg.bcrypt_rounds)
    return bcrypt.hashpw(_peppered(password, cfg.password_pepper), salt).decode("ascii")


def verify_password(password: str, password_hash: str, *, config: MindConfig | None = None) -> bool:
    if not password or not password_hash:
        return False
    cfg = config or get_config()
    try:
        return bcrypt.checkpw(_peppered(password, cfg.password_pepper), password_hash.encode("ascii"))
    except ValueError:
        # malformed stored hash
        return False
