"""Named monotonic sequences backed by the ``counters`` table."""

from __future__ import annotations

from sqlalchemy.dialects import postgresql, sqlite
from sqlmodel import Session

from helpdesk.models import Counter

TICKET_SEQUENCE = "ticketId"

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def next_value(session: Session, sequence_name: str) -> int:
    """Increment ``sequence_name`` and return its new value.

    Runs as a single ``INSERT ... ON CONFLICT DO UPDATE ... RETURNING``
    statement, so concurrent callers never observe the same value. The
    counter row is created on first use and starts at 1. The increment is
    part of the caller's transaction and is rolled back with it.
    """
    dialect = session.get_bind().dialect.name
    try:
        insert = _UPSERT_DIALECTS[dialect]
    except KeyError:
        raise RuntimeError(f"Sequence generation is not supported on {dialect!r}") from None

    statement = (
        insert(Counter)
        .values(name=sequence_name, value=1)
        .on_conflict_do_update(
            index_elements=[Counter.name],
            set_={"value": Counter.value + 1},
        )
        .returning(Counter.value)
    )
    return int(session.exec(statement).scalar_one())
