from __future__ import annotations

from typing import Any, Dict, Optional

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_flag, db_cursor, fetchone
from .model import User
from .repository import UserRepository

_USER_COLUMNS = """
    user_id, email, password_hash, first_name, last_name, role, company_id,
    onboarding_completed, email_verified, is_active
"""


def _row_to_user(row: Dict[str, Any]) -> User:
    company_id = row.get("company_id")
    return User(
        user_id=int(row["user_id"]),
        email=row["email"],
        password_hash=row["password_hash"],
        first_name=row["first_name"],
        last_name=row.get("last_name") or "",
        role=Role(row["role"]),
        company_id=int(company_id) if company_id is not None else None,
        onboarding_completed=as_flag(row.get("onboarding_completed")),
        email_verified=as_flag(row.get("email_verified")),
        is_active=as_flag(row.get("is_active"), default=True),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE user_id=%s", (user_id,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE email=%s", (email,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def create_user(
        self,
        *,
        email: str,
        password_hash: str,
        first_name: str,
        last_name: str,
        role: Role,
        company_id: Optional[int],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(email, password_hash, first_name, last_name, role, company_id, is_active)
                VALUES(%s,%s,%s,%s,%s,%s,1)
                """,
                (email, password_hash, first_name, last_name, role.value, company_id),
            )
            return int(cur.lastrowid)

    def set_company(self, user_id: int, *, company_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET company_id=%s WHERE user_id=%s", (company_id, user_id))
            return cur.rowcount > 0

    def mark_onboarding_completed(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET onboarding_completed=1 WHERE user_id=%s", (user_id,))
            return cur.rowcount > 0
