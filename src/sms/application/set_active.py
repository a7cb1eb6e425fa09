"""Application service: activate or deactivate reference data.

Deactivated customers, branches and products stay in place for existing
sales but can no longer be used on new ones.
"""

from __future__ import annotations

from sms.application.unit_of_work import UnitOfWork
from sms.domain.exceptions import EntityNotFoundError, ValidationError

ENTITY_KINDS = {
    "product": "products",
    "customer": "customers",
    "branch": "branches",
}


class SetActiveHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, kind: str, entity_id: str, active: bool) -> None:
        if kind not in ENTITY_KINDS:
            raise ValidationError(
                f"Unknown entity kind '{kind}', expected one of {', '.join(ENTITY_KINDS)}"
            )

        with self._uow:
            repo = getattr(self._uow, ENTITY_KINDS[kind])
            entity = repo.get_by_id(entity_id)
            if entity is None:
                raise EntityNotFoundError(f"{kind.capitalize()} with ID '{entity_id}' not found")
            if active:
                entity.activate()
            else:
                entity.deactivate()
            repo.save(entity)
            self._uow.commit()
