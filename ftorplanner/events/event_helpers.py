"""Event helper utilities.

Small publishing helpers so services build payloads the same way everywhere.

Quick import:
    from ftorplanner.events.event_helpers import (
        publish_language_changed, publish_settings_changed,
        publish_backup_exported, publish_backup_imported,
    )
"""
from __future__ import annotations
from typing import Iterable, Optional
from .Event_Bus import (
    EventBus,
    LANGUAGE_CHANGED, SETTINGS_CHANGED, BACKUP_EXPORTED, BACKUP_IMPORTED,
)

__all__ = [
    'publish_language_changed', 'publish_settings_changed',
    'publish_backup_exported', 'publish_backup_imported',
]


def publish_language_changed(bus: Optional[EventBus], language: str, rtl: bool, reload_required: bool):
    """Publish a settings.language_changed event."""
    if bus is None:
        return
    bus.publish(LANGUAGE_CHANGED, {
        'language': language,
        'rtl': rtl,
        'reload_required': reload_required
    })


def publish_settings_changed(bus: Optional[EventBus], settings: dict, changed: Iterable[str]):
    """Publish a settings.changed event listing the keys that were written."""
    if bus is None:
        return
    bus.publish(SETTINGS_CHANGED, {
        'settings': settings,
        'changed': list(changed)
    })


def publish_backup_exported(bus: Optional[EventBus], keys: Iterable[str], path: Optional[str] = None):
    if bus is None:
        return
    bus.publish(BACKUP_EXPORTED, {'keys': list(keys), 'path': path})


def publish_backup_imported(bus: Optional[EventBus], keys: Iterable[str]):
    if bus is None:
        return
    bus.publish(BACKUP_IMPORTED, {'keys': list(keys)})
