from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee as seen by reports and exports.

    ``employee_id`` is the internal key punch events refer to;
    ``employee_code`` is the human-facing badge code (e.g. EMP001).
    """

    employee_id: str
    name: str
    employee_code: str
    email: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None
    is_active: bool = True
