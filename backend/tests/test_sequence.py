import time
from concurrent.futures import ThreadPoolExecutor

from sqlmodel import Session

from helpdesk.db import build_engine, init_db
from helpdesk.models import Counter
from helpdesk.services.sequence import TICKET_SEQUENCE, next_value


def test_first_use_starts_at_one_and_increments(session):
    assert next_value(session, TICKET_SEQUENCE) == 1
    assert next_value(session, TICKET_SEQUENCE) == 2
    session.commit()
    assert next_value(session, TICKET_SEQUENCE) == 3


def test_sequences_are_independent(session):
    assert next_value(session, "alpha") == 1
    assert next_value(session, "alpha") == 2
    assert next_value(session, "beta") == 1


def test_rolled_back_increment_is_not_consumed(session):
    assert next_value(session, TICKET_SEQUENCE) == 1
    session.commit()
    assert next_value(session, TICKET_SEQUENCE) == 2
    session.rollback()

    assert next_value(session, TICKET_SEQUENCE) == 2


def test_concurrent_callers_receive_distinct_contiguous_values(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'sequence.db'}")
    init_db(engine)

    def take(_):
        with Session(engine) as session:
            value = next_value(session, TICKET_SEQUENCE)
            session.commit()
            return value

    try:
        with ThreadPoolExecutor(max_workers=8) as pool:
            values = list(pool.map(take, range(40)))
    finally:
        engine.dispose()

    assert len(set(values)) == 40
    assert sorted(values) == list(range(1, 41))


def test_reader_waits_for_open_write_instead_of_failing(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'sequence.db'}")
    init_db(engine)

    def read():
        with Session(engine) as session:
            return session.get(Counter, TICKET_SEQUENCE).value

    try:
        with Session(engine) as writer, ThreadPoolExecutor(max_workers=1) as pool:
            next_value(writer, TICKET_SEQUENCE)
            pending = pool.submit(read)
            time.sleep(0.1)
            writer.commit()
            value = pending.result(timeout=10)
    finally:
        engine.dispose()

    assert value == 1
