"""Simple Event Bus / Observer implementation for planner notifications.

Event names used so far:
  settings.language_changed -> payload {"language": str, "rtl": bool, "reload_required": bool}
  settings.changed          -> payload {"settings": dict, "changed": [keys]}
  backup.exported           -> payload {"keys": [keys], "path": str | None}
  backup.imported           -> payload {"keys": [keys]}

Subscribers are callables taking (event_name, payload). The bus is a plain
object: the application creates one and hands it to whoever publishes or
listens, there is no process-wide instance.
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
LANGUAGE_CHANGED = "settings.language_changed"
SETTINGS_CHANGED = "settings.changed"
BACKUP_EXPORTED = "backup.exported"
BACKUP_IMPORTED = "backup.imported"

Listener = Callable[[str, Any], None]


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Listener]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Listener) -> Callable[[], None]:
		"""Register callback; returns a function that removes it again."""
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)
		return lambda: self.unsubscribe(event_name, callback)

	def unsubscribe(self, event_name: str, callback: Listener):
		try:
			self._subscribers[event_name].remove(callback)
		except (ValueError, KeyError):
			pass

	def subscriber_count(self, event_name: str) -> int:
		return len(self._subscribers.get(event_name, []))

	def publish(self, event_name: str, payload: Any = None):
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception as e:
				logger.error(f"[EventBus] Error delivering {event_name} to {cb}: {e}")


__all__ = [
	'EventBus', 'Listener',
	'LANGUAGE_CHANGED', 'SETTINGS_CHANGED', 'BACKUP_EXPORTED', 'BACKUP_IMPORTED',
]
