from __future__ import annotations

from typing import Optional, Protocol

from .model import Lecturer


class LecturerRepository(Protocol):
    def get_by_id(self, lecturer_id: str) -> Optional[Lecturer]:
        raise NotImplementedError
