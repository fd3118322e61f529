import logging
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from modules.common.errors import ConflictError, InvalidReferenceError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")

# SQLSTATE de PostgreSQL; SQLite sólo informa el texto
FOREIGN_KEY_VIOLATION = "23503"


class SqlAlchemyRepository(Generic[ModelT]):
    """Adaptador mínimo sobre una tabla: find_many, find_unique, create, update, delete.

    Cada repositorio concreto fija `model` y agrega las consultas con las
    relaciones que necesita el evaluador de permisos.
    """

    model: Type[ModelT]

    def __init__(self, db_session: Session):
        self.db = db_session

    def find_many(self, *criteria, order_by=None, options=()) -> List[ModelT]:
        query = self.db.query(self.model).options(*options)
        if criteria:
            query = query.filter(*criteria)
        if order_by is not None:
            query = query.order_by(order_by)
        return query.all()

    def find_unique(self, entity_id: Any, options=()) -> Optional[ModelT]:
        if options:
            return (
                self.db.query(self.model)
                .options(*options)
                .filter(self.model.id == entity_id)
                .first()
            )
        return self.db.get(self.model, entity_id)

    def create(self, **fields) -> ModelT:
        entity = self.model(**fields)
        self.db.add(entity)
        self._commit()
        self.db.refresh(entity)
        return entity

    def update(self, entity: ModelT, data: Dict[str, Any]) -> ModelT:
        for field, value in data.items():
            setattr(entity, field, value)
        self._commit()
        self.db.refresh(entity)
        return entity

    def delete(self, entity: ModelT) -> None:
        self.db.delete(entity)
        self._commit()

    def _commit(self):
        try:
            self.db.commit()
        except IntegrityError as exc:
            # Las restricciones del store son la última barrera ante carreras
            self.db.rollback()
            logger.warning("Integrity error on %s: %s", self.model.__tablename__, exc.orig)
            if _is_foreign_key_violation(exc):
                raise InvalidReferenceError(f"{self.model.__name__} references a record that does not exist") from exc
            raise ConflictError(f"{self.model.__name__} violates a uniqueness constraint") from exc


def _is_foreign_key_violation(exc: IntegrityError) -> bool:
    if getattr(exc.orig, "pgcode", None) == FOREIGN_KEY_VIOLATION:
        return True
    return "foreign key" in str(exc.orig).lower()
