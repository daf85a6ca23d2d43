"""Record store and session table."""

from resource_gateway.store.records import RecordStore
from resource_gateway.store.sessions import SessionTable

__all__ = ["RecordStore", "SessionTable"]
