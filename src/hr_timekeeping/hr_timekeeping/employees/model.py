from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    employee_id: int
    name: str
    role: Role
    user_id: Optional[int] = None

    def to_dict(self) -> dict:
        return {"id": self.employee_id, "name": self.name, "role": self.role.value, "userId": self.user_id}
