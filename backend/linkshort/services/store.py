import logging
from contextlib import contextmanager
from typing import List, Optional

from sqlalchemy import desc, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import DuplicateCode, StorageError
from ..models import Link

logger = logging.getLogger(__name__)


class LinkStore:
    """
    Persistence for Link rows.

    Every read goes to the database; nothing is cached between calls.
    Database failures surface as StorageError after the session is
    rolled back.
    """

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _storage_errors(self, action: str):
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Storage failure during %s", action)
            raise StorageError() from e

    def create(self, code: str, long_url: str) -> Link:
        link = Link(code=code, long_url=long_url, clicks=0)
        try:
            self.db.add(link)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateCode(f"Code '{code}' already exists") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Storage failure during create")
            raise StorageError() from e

        with self._storage_errors("create"):
            self.db.refresh(link)
        return link

    def get_by_code(self, code: str) -> Optional[Link]:
        with self._storage_errors("lookup"):
            return (
                self.db.query(Link)
                .filter(Link.code == code)
                .populate_existing()
                .first()
            )

    def exists(self, code: str) -> bool:
        with self._storage_errors("lookup"):
            return self.db.query(Link.id).filter(Link.code == code).first() is not None

    def list_all(self) -> List[Link]:
        """All links, newest first"""
        with self._storage_errors("list"):
            return (
                self.db.query(Link)
                .order_by(desc(Link.created_at), desc(Link.id))
                .populate_existing()
                .all()
            )

    def delete_by_code(self, code: str) -> bool:
        with self._storage_errors("delete"):
            deleted = (
                self.db.query(Link)
                .filter(Link.code == code)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        return deleted > 0

    def increment_clicks(self, code: str) -> None:
        # Single UPDATE so concurrent redirects never lose an increment
        with self._storage_errors("click accounting"):
            self.db.query(Link).filter(Link.code == code).update(
                {
                    Link.clicks: Link.clicks + 1,
                    Link.last_clicked: func.now(),
                },
                synchronize_session=False
            )
            self.db.commit()
