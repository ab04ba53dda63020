from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session


@contextmanager
def atomic(session: Session) -> Iterator[Session]:
    """Commit everything done inside the block, or nothing.

    Any exception raised in the block (or by the commit itself) rolls the
    session back before it propagates.
    """
    try:
        yield session
        session.commit()
    except BaseException:
        session.rollback()
        raise
