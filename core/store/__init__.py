"""Record store interface and implementations."""

from core.store.base import RecordStore
from core.store.postgres import PostgresRecordStore
