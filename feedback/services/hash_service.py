# feedback/services/hash_service.py
import logging
import secrets
import string

from sqlalchemy.exc import IntegrityError

from ..extensions import db
from ..exceptions import HashCollisionError

log = logging.getLogger(__name__)

BASE62 = string.digits + string.ascii_uppercase + string.ascii_lowercase
MAX_HASH_ATTEMPTS = 10


def generate_hash(length: int) -> str:
    """
    Random token of exactly `length` base62 symbols.

    Drawn from the OS CSPRNG via `secrets`; any failure of the random
    source propagates, there is no weaker fallback.
    """
    if length < 1:
        raise ValueError("length must be positive")
    return "".join(secrets.choice(BASE62) for _ in range(length))


def hash_taken(model, candidate: str) -> bool:
    return db.session.query(model.query.filter_by(hash=candidate).exists()).scalar()


def insert_with_unique_hash(model, length: int, build, attempts: int = MAX_HASH_ATTEMPTS):
    """
    Mint a hash that no `model` row uses, build the row with it and commit.

    The pre-check keeps the common path cheap; the unique constraint on
    `hash` is what actually enforces uniqueness, so a constraint violation
    on a hash that now exists is retried like any other collision.
    """
    for attempt in range(1, attempts + 1):
        candidate = generate_hash(length)
        if hash_taken(model, candidate):
            log.warning("%s hash collision on pre-check (attempt %d)", model.__name__, attempt)
            continue

        record = build(candidate)
        db.session.add(record)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            if not hash_taken(model, candidate):
                raise
            log.warning("%s hash collision on insert (attempt %d)", model.__name__, attempt)
            continue
        return record

    raise HashCollisionError(f"could not mint a unique {model.__name__} hash after {attempts} attempts")
