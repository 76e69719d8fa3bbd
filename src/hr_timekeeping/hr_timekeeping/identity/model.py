from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class Principal:
    """The acting employee, as vouched for by the authentication layer."""

    employee_id: int
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def owns(self, employee_id: int) -> bool:
        return int(employee_id) == int(self.employee_id)
