"""Web-facing observer for planner events.

RecentEvents subscribes to an EventBus and keeps a bounded in-memory buffer
of recent events that the HTTP layer can poll (GET /api/events?since=<id>).

Design:
  * Each event stored with an auto-increment integer id (cursor) so clients
    can request only newer events (since=<last_id_seen>).
  * A max_events cap prevents unbounded memory growth.
  * Buffer state lives on the instance; the application owns exactly one.
"""
from __future__ import annotations
from typing import List, Dict, Any, Optional
from datetime import datetime, timezone

from .Event_Bus import (
    EventBus, LANGUAGE_CHANGED, SETTINGS_CHANGED, BACKUP_EXPORTED, BACKUP_IMPORTED
)

WATCHED_EVENTS = (LANGUAGE_CHANGED, SETTINGS_CHANGED, BACKUP_EXPORTED, BACKUP_IMPORTED)


class RecentEvents:
    def __init__(self, max_events: int = 300):
        self.max_events = max_events
        self._events: List[Dict[str, Any]] = []
        self._next_id = 1
        self._unsubscribers = []

    def _record(self, event_name: str, payload: Any):  # signature expected by EventBus
        evt = {
            'id': self._next_id,
            'type': event_name,
            'ts': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')
        }
        if isinstance(payload, dict):
            # Keep only JSON-friendly scalar/list fields for the UI
            for k, v in payload.items():
                if isinstance(v, (str, int, float, bool, list)) or v is None:
                    evt[k] = v
        self._events.append(evt)
        self._next_id += 1
        # Trim buffer
        if len(self._events) > self.max_events:
            del self._events[: len(self._events) - self.max_events]

    def attach(self, bus: EventBus):
        """Idempotent: subscribe to the watched events once."""
        if self._unsubscribers:
            return self
        for name in WATCHED_EVENTS:
            self._unsubscribers.append(bus.subscribe(name, self._record))
        return self

    def detach(self):
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    def get_events(self, since: Optional[int] = None) -> Dict[str, Any]:
        """Return events newer than 'since' (exclusive).

        If since is None, returns every buffered event.
        Response includes next_cursor (largest id) so client can poll with since=next_cursor.
        """
        if since is None:
            data = list(self._events)
        else:
            data = [e for e in self._events if e['id'] > since]
        next_cursor = self._events[-1]['id'] if self._events else since or 0
        return {'events': data, 'next_cursor': next_cursor}


__all__ = ['RecentEvents', 'WATCHED_EVENTS']
