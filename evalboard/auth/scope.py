"""Query scope: which rows a principal may see."""

from dataclasses import dataclass
from typing import Dict, Optional

from evalboard.models.enums import UserRole


@dataclass(frozen=True)
class DataScope:
    """Row restriction applied by repositories.

    `teacher_id` set means only that teacher's profile and evaluations are
    visible; None means unrestricted.
    """
    teacher_id: Optional[int] = None

    @property
    def is_restricted(self) -> bool:
        return self.teacher_id is not None

    def allows_teacher(self, teacher_id: int) -> bool:
        return not self.is_restricted or self.teacher_id == teacher_id


UNRESTRICTED = DataScope()


def scope_for(principal: Dict) -> DataScope:
    """Teachers are narrowed to their own rows; supervisors see everything.

    Any principal that is not a supervisor is treated as a teacher.
    """
    if principal.get("role") == UserRole.SUPERVISOR:
        return UNRESTRICTED
    return DataScope(teacher_id=principal["id"])
