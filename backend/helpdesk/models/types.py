"""Column types shared by the table models."""

from sqlalchemy import DateTime
from sqlalchemy.types import TypeDecorator

from helpdesk.core.time_utils import as_utc


class UTCDateTime(TypeDecorator):
    """Timezone aware timestamp stored and returned in UTC.

    SQLite keeps no offset, so values read back without one are tagged as
    UTC; the API therefore always renders timestamps with an offset.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        return as_utc(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return value
        return as_utc(value)
