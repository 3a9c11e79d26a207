from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_flag, db_cursor, fetchone
from .model import Company
from .repository import CompanyRepository


class MySQLCompanyRepository(CompanyRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, company_id: int) -> Optional[Company]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT company_id, name, biometrics_required, logo_url
                FROM companies
                WHERE company_id=%s
                """,
                (company_id,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return Company(
                company_id=int(row["company_id"]),
                name=row["name"],
                biometrics_required=as_flag(row.get("biometrics_required")),
                logo_url=row.get("logo_url"),
            )

    def create(self, *, name: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO companies(name) VALUES(%s)", (name,))
            return int(cur.lastrowid)

    def update_name(self, company_id: int, *, name: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE companies SET name=%s WHERE company_id=%s", (name, company_id))
            return cur.rowcount > 0

    def set_biometrics_required(self, company_id: int, *, required: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE companies SET biometrics_required=%s WHERE company_id=%s",
                (int(required), company_id),
            )
            return cur.rowcount > 0

    def set_logo_url(self, company_id: int, *, logo_url: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE companies SET logo_url=%s WHERE company_id=%s", (logo_url, company_id))
            return cur.rowcount > 0
