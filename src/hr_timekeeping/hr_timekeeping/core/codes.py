"""Integer codes used at the API boundary.

Each table is the single place where a code maps to an enum member and back;
controllers and the identity layer go through these instead of inline
if/else chains.
"""

from __future__ import annotations

from enum import Enum
from typing import Generic, Mapping, TypeVar

from .enums import AttendanceDirection, Role, WorkPlanStatus
from .exceptions import ValidationError

E = TypeVar("E", bound=Enum)


class CodeTable(Generic[E]):
    def __init__(self, name: str, codes: Mapping[int, E]):
        self._name = name
        self._by_code = dict(codes)
        self._by_member = {member: code for code, member in self._by_code.items()}
        if len(self._by_member) != len(self._by_code):
            raise ValueError(f"{name}: codes must map one-to-one")

    def to_member(self, code: object) -> E:
        """Resolve a code (int or numeric string) into its enum member."""

        try:
            key = int(code)  # type: ignore[arg-type]
        except (TypeError, ValueError, OverflowError):
            raise ValidationError(f"Invalid {self._name} code: {code!r}")
        fractional = isinstance(code, float) and not code.is_integer()
        if isinstance(code, bool) or fractional or key not in self._by_code:
            raise ValidationError(f"Invalid {self._name} code: {code!r}")
        return self._by_code[key]

    def to_code(self, member: E) -> int:
        return self._by_member[member]


ROLE_CODES: CodeTable[Role] = CodeTable(
    "role",
    {1: Role.ADMIN, 2: Role.PARTIME, 3: Role.FULLTIME},
)

DIRECTION_CODES: CodeTable[AttendanceDirection] = CodeTable(
    "direction",
    {1: AttendanceDirection.IN, 2: AttendanceDirection.OUT},
)

WORK_PLAN_STATUS_CODES: CodeTable[WorkPlanStatus] = CodeTable(
    "work plan status",
    {
        1: WorkPlanStatus.DRAFT,
        2: WorkPlanStatus.SUBMITTED,
        3: WorkPlanStatus.APPROVED,
        4: WorkPlanStatus.REFUSED,
        5: WorkPlanStatus.CANCELLED,
    },
)
