from typing import Any, Dict, Generic, List, Optional, Type, TypeVar
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from scootsupport.core.database import Base
from scootsupport.core.exceptions import PersistenceException

ModelType = TypeVar("ModelType", bound=Base)

LIKE_ESCAPE = "\\"

def like_pattern(text: str) -> str:
    """Substring LIKE pattern with the wildcard characters in ``text`` escaped."""
    escaped = text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2).replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"

def commit(db: Session, *instances):
    """Commit the session and refresh the given instances, rolling back on failure."""
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise PersistenceException(details=str(e)) from e
    for instance in instances:
        db.refresh(instance)

class BaseRepository(Generic[ModelType]):
    def __init__(self, model: Type[ModelType]):
        self.model = model

    def get_by_id(self, db: Session, id: Any) -> Optional[ModelType]:
        return db.query(self.model).filter(self.model.id == id).first()

    def list(self, db: Session, skip: int = 0, limit: int = 100) -> List[ModelType]:
        return db.query(self.model).offset(skip).limit(limit).all()

    def create(self, db: Session, obj_in: Dict[str, Any]) -> ModelType:
        db_obj = self.model(**obj_in)
        db.add(db_obj)
        commit(db, db_obj)
        return db_obj

    def update(self, db: Session, db_obj: ModelType, obj_in: Dict[str, Any]) -> ModelType:
        for field, value in obj_in.items():
            setattr(db_obj, field, value)
        commit(db, db_obj)
        return db_obj

    def delete(self, db: Session, db_obj: ModelType) -> None:
        db.delete(db_obj)
        commit(db)
