"""
auth.py
Owner authentication (bcrypt hashing, verify, login, change password).
Admin accounts live in the session state, like every other record.
"""

from __future__ import annotations

import logging

import bcrypt

logger = logging.getLogger(__name__)


def _to_bcrypt_secret(password: str) -> bytes:
    # bcrypt ignores (or rejects) anything past 72 bytes; cut there so hash and check agree
    return password.encode("utf-8")[:72]


def hash_password(password: str, rounds: int = 12) -> str:
    """Hash for AppState.admin_users (tests pass a low rounds value)."""
    return bcrypt.hashpw(_to_bcrypt_secret(password), bcrypt.gensalt(rounds=rounds)).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(_to_bcrypt_secret(password), password_hash.encode("ascii"))


def login(state, username: str, password: str) -> bool:
    password_hash = state.admin_users.get(username)
    if not password_hash or not verify_password(password, password_hash):
        logger.warning("Failed login for %r", username)
        return False
    return True


def change_password(state, username: str, new_password: str) -> None:
    if username not in state.admin_users:
        raise KeyError(username)
    state.admin_users[username] = hash_password(new_password)
    logger.info("Password changed for %r", username)
