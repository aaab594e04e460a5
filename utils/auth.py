# utils/auth.py
from __future__ import annotations
from typing import Iterable, Optional
from datetime import datetime, timezone

import bcrypt
from db import col

# same cost factor the school app's user model hashes with
SALT_ROUNDS = 10

# ---------------- core helpers ----------------
def _users():
    return col("users")

def _now():
    return datetime.now(tz=timezone.utc)

def _nemail(e: str) -> str:
    return (e or "").strip().lower()

def hash_password(pw: str, rounds: int = SALT_ROUNDS) -> str:
    return bcrypt.hashpw(pw.encode("utf-8"), bcrypt.gensalt(rounds)).decode("utf-8")

def check_password(pw: str, stored) -> bool:
    """Accept string or bytes hashes."""
    if not stored:
        return False
    if isinstance(stored, str):
        stored = stored.encode("utf-8")
    try:
        return bcrypt.checkpw(pw.encode("utf-8"), stored)
    except ValueError:
        # not a bcrypt hash
        return False

# ---------------- accounts ----------------
def get_user(email: str) -> Optional[dict]:
    return _users().find_one({"email": _nemail(email)})

def set_password(email: str, new_password: str) -> bool:
    res = _users().update_one(
        {"email": _nemail(email)},
        {"$set": {"password": hash_password(new_password), "updatedAt": _now()}},
    )
    return res.modified_count == 1

def verify_login(email: str, password: str, roles: Optional[Iterable[str]] = None) -> Optional[dict]:
    u = get_user(email)
    if not u or u.get("isActive") is False:
        return None
    if roles and u.get("role") not in set(roles):
        return None
    if not check_password(password, u.get("password")):
        return None
    return u
