import contextlib
import logging

from sqlalchemy.orm import sessionmaker

from database.record_store import RecordStore

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def record_uow(session_factory: sessionmaker):
    """Per-unit-of-work transaction scope.

    Yields a RecordStore bound to a fresh Session from session_factory.
    Commits on success, rolls back on exception, always closes.

    Usage:
        with record_uow(session_factory) as store:
            talent = store.get_talent(talent_id)
            # perform operations...
        # commit happens automatically on successful exit
    """
    session = session_factory()
    try:
        yield RecordStore(session)
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
