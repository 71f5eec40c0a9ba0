import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, StorageError

logger = logging.getLogger(__name__)


@contextmanager
def transaction(db: Session, *, conflict_message: str = "Conflicting record") -> Iterator[Session]:
    """Run the block as one unit of work: commit on success, roll back on any error.

    Unique/foreign-key violations surface as ConflictError, other database
    failures as StorageError. Domain errors raised inside the block are
    re-raised unchanged after the rollback.
    """
    try:
        yield db
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.info("transaction rejected by constraint: %s", exc.orig)
        raise ConflictError(conflict_message) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("transaction failed")
        raise StorageError() from exc
    except Exception:
        db.rollback()
        raise
