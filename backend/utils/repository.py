# backend/utils/repository.py
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy import func, inspect
from sqlalchemy.orm import Session

from database import Base

ModelT = TypeVar("ModelT", bound=Base)


class Repository(Generic[ModelT]):
    """CRUD access to one table, shared by every route.

    Write methods commit by default. Pass ``commit=False`` to stage several
    changes and finish them with :meth:`commit_or_rollback` as a single
    transaction.
    """

    def __init__(self, db: Session, model: Type[ModelT]):
        self.db = db
        self.model = model
        self._columns = {attr.key for attr in inspect(model).column_attrs}

    def find_all(self, **filters: Any) -> List[ModelT]:
        query = self.db.query(self.model)
        if filters:
            query = query.filter_by(**filters)
        return query.all()

    def find_by_id(self, record_id: str) -> Optional[ModelT]:
        return self.db.get(self.model, record_id)

    def find_one_by(self, field: str, value: Any, case_insensitive: bool = False) -> Optional[ModelT]:
        column = getattr(self.model, field)
        if case_insensitive and isinstance(value, str):
            return self.db.query(self.model).filter(func.lower(column) == value.lower()).first()
        return self.db.query(self.model).filter(column == value).first()

    def insert(self, record: ModelT, commit: bool = True) -> ModelT:
        self.db.add(record)
        if commit:
            self.commit_or_rollback()
            self.db.refresh(record)
        else:
            self.db.flush()
        return record

    def update_by_id(self, record_id: str, changes: Dict[str, Any], commit: bool = True) -> Optional[ModelT]:
        """Merge ``changes`` into the record: keys present overwrite, everything else is kept."""
        record = self.find_by_id(record_id)
        if record is None:
            return None
        for key, value in changes.items():
            if key in self._columns and key != "id":
                setattr(record, key, value)
        if commit:
            self.commit_or_rollback()
            self.db.refresh(record)
        return record

    def delete_by_id(self, record_id: str, commit: bool = True) -> bool:
        record = self.find_by_id(record_id)
        if record is None:
            return False
        self.db.delete(record)
        if commit:
            self.commit_or_rollback()
        else:
            self.db.flush()
        return True

    def commit_or_rollback(self) -> None:
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
