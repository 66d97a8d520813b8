from __future__ import annotations

from typing import Any, Dict, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, to_date
from .model import Lecturer
from .repository import LecturerRepository

LECTURER_COLUMNS = "lecturer_id, full_name, email, contact_number, bank_account, contract_start, contract_end, is_active"


def lecturer_from_row(r: Dict[str, Any]) -> Lecturer:
    return Lecturer(
        lecturer_id=str(r["lecturer_id"]),
        full_name=r["full_name"],
        email=r.get("email"),
        contact_number=r.get("contact_number"),
        bank_account=r.get("bank_account"),
        contract_start=to_date(r.get("contract_start")),
        contract_end=to_date(r.get("contract_end")),
        is_active=bool(r.get("is_active", True)),
    )


class MySQLLecturerRepository(LecturerRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, lecturer_id: str) -> Optional[Lecturer]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {LECTURER_COLUMNS} FROM lecturers WHERE lecturer_id=%s",
                (lecturer_id,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return lecturer_from_row(r)
