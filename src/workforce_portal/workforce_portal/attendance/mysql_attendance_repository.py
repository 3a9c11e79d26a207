from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import ClockMethod
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository


def _row_to_record(row: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(row["attendance_id"]),
        user_id=int(row["user_id"]),
        work_date=row["work_date"],
        clock_in_time=row["clock_in_time"],
        clock_out_time=row.get("clock_out_time"),
        method=ClockMethod(row.get("method") or ClockMethod.MANUAL.value),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, user_id, work_date, clock_in_time, clock_out_time, method
                FROM attendance
                WHERE user_id=%s AND work_date=%s
                """,
                (user_id, work_date),
            )
            row = fetchone(cur)
            return _row_to_record(row) if row else None

    def get_recent_for_user(self, user_id: int, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, user_id, work_date, clock_in_time, clock_out_time, method
                FROM attendance
                WHERE user_id=%s
                ORDER BY work_date DESC, attendance_id DESC
                LIMIT %s
                """,
                (user_id, int(limit)),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def create_clock_in(self, *, user_id: int, work_date: date, clock_in_time: datetime, method: ClockMethod) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(user_id, work_date, clock_in_time, method)
                VALUES(%s,%s,%s,%s)
                """,
                (user_id, work_date, clock_in_time, method.value),
            )
            return int(cur.lastrowid)

    def update_clock_out(self, *, attendance_id: int, clock_out_time: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance SET clock_out_time=%s WHERE attendance_id=%s AND clock_out_time IS NULL",
                (clock_out_time, attendance_id),
            )
            return cur.rowcount > 0
