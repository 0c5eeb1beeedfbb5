from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .enums import Role
from .exceptions import AuthorizationError

LEDGER_ROLES = frozenset({Role.ADMIN, Role.HR})


@dataclass(frozen=True)
class RequestContext:
    """Who is acting and on which company, threaded explicitly through admin use cases."""

    actor_id: Optional[int]
    role: Role
    company_id: Optional[int] = None

    def require_any(self, roles=LEDGER_ROLES) -> None:
        if self.role not in roles:
            raise AuthorizationError("You do not have permission for this action")

    def require_company(self, company_id: Optional[int]) -> None:
        """Actors bound to a company may only act on that company's employees."""
        if self.company_id is not None and company_id != self.company_id:
            raise AuthorizationError("Employee belongs to another company")
