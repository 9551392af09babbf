"""Persistence layer for account data."""

from __future__ import annotations

from sqlalchemy.orm import Session

from social_notifications.domain.entities import Account
from social_notifications.infrastructure.models import AccountModel
from social_notifications.utils import ensure_app_timezone


class AccountRepository:
    """Lookup and creation of :class:`Account` entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def exists(self, account_id: int) -> bool:
        query = self.session.query(AccountModel.id).filter(AccountModel.id == account_id)
        return self.session.query(query.exists()).scalar() or False

    def create(self, account: Account) -> Account:
        model = AccountModel(
            email=account.email,
            first_name=account.first_name,
            last_name=account.last_name,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: AccountModel) -> Account:
        return Account(
            id=model.id,
            email=model.email,
            first_name=model.first_name,
            last_name=model.last_name,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["AccountRepository"]
