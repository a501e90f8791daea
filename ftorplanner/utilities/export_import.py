"""
Export and Import of the whole planner store as one versioned JSON document.

Document shape:
    {"version": "1.0", "exportDate": "<ISO-8601>", "data": {<key>: <decoded value>}}

Preferences stored as plain strings (weekStartsOn, language and the boolean
flags as "true"/"false") travel as those strings. Import also accepts JSON
booleans for the flags.

Only EXPORTABLE_KEYS take part. Import validates the document and every value
in it before touching the store, then clears every exportable key and writes
back the ones present in the document. It is not transactional across keys: a
failure part-way leaves the store partially restored.
"""
import asyncio
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

import pydantic

from ftorplanner.events.Event_Bus import EventBus
from ftorplanner.events.event_helpers import publish_backup_exported, publish_backup_imported
from ftorplanner.infra.Key_Value_Store import StoreAdapter
from ftorplanner.infra.paths import EXPORT_DIR, backup_file_name
from ftorplanner.utilities.constants import (
    BACKUP_VERSION, EXPORTABLE_KEYS, RAW_STRING_KEYS, BOOLEAN_SETTING_KEYS, COLLECTION_KEYS, MEAL_TYPES_KEY,
)
from ftorplanner.utilities.errors import StorageError, ValidationError
from ftorplanner.utilities.validators import BackupDocument

logger = logging.getLogger(__name__)


def validate_document(document: Any) -> BackupDocument:
    """Check that version and data are present and data is an object."""
    if not isinstance(document, dict):
        raise ValidationError("Invalid backup file format: expected a JSON object")
    try:
        return BackupDocument.model_validate(document)
    except pydantic.ValidationError as e:
        logger.warning(f"Rejected backup document: {e.error_count()} problem(s)")
        raise ValidationError(f"Invalid backup file format: {e.errors()[0]['msg']}") from e


def is_valid_backup_file(path: Path) -> bool:
    """True when the file parses and carries version, exportDate and an object payload."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            document = json.load(f)
        parsed = validate_document(document)
    except (OSError, json.JSONDecodeError, ValidationError):
        return False
    return bool(parsed.exportDate)


def encode_value(key: str, value: Any) -> str:
    """Store form of one backup value; raises ValidationError when its shape is wrong for the key."""
    if key in BOOLEAN_SETTING_KEYS:
        if isinstance(value, bool):
            return "true" if value else "false"
        if value in ("true", "false"):
            return value
        raise ValidationError(f"Invalid backup value for '{key}': expected true or false", field=key)
    if key in RAW_STRING_KEYS:
        if not isinstance(value, str):
            raise ValidationError(f"Invalid backup value for '{key}': expected a string", field=key)
        return value
    if key in COLLECTION_KEYS and not isinstance(value, list):
        raise ValidationError(f"Invalid backup value for '{key}': expected a list", field=key)
    if key == MEAL_TYPES_KEY and not isinstance(value, dict):
        raise ValidationError(f"Invalid backup value for '{key}': expected an object", field=key)
    return json.dumps(value, ensure_ascii=False)


class DataExporter:
    """Snapshot the exportable keys into a backup document."""

    def __init__(self, store: StoreAdapter, bus: Optional[EventBus] = None, export_dir: Path = EXPORT_DIR):
        self.store = store
        self.bus = bus
        self.export_dir = Path(export_dir)

    async def export(self) -> Dict[str, Any]:
        document = await self._snapshot()
        publish_backup_exported(self.bus, document['data'].keys())
        return document

    async def _snapshot(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        for key in EXPORTABLE_KEYS:
            if key in RAW_STRING_KEYS:
                value = await self.store.get_raw(key)
            else:
                value = await self.store.get_json(key)
            if value is not None:
                data[key] = value
        export_date = datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')
        logger.info(f"Exported {len(data)} keys")
        return {'version': BACKUP_VERSION, 'exportDate': export_date, 'data': data}

    async def export_to_file(self, output_path: Optional[Path] = None) -> Path:
        """Write the backup document as indented JSON and return its path."""
        document = await self._snapshot()
        if output_path is None:
            output_path = self.export_dir / backup_file_name(document['exportDate'])
        output_path = Path(output_path)

        def _write():
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, 'w', encoding='utf-8') as f:
                json.dump(document, f, indent=2, ensure_ascii=False)

        try:
            await asyncio.to_thread(_write)
        except OSError as e:
            logger.error(f"Export failed: {e}")
            raise StorageError(f"Could not write backup file {output_path}") from e
        logger.info(f"Exported all data to {output_path}")
        publish_backup_exported(self.bus, document['data'].keys(), str(output_path))
        return output_path


class DataImporter:
    """Restore the exportable keys from a backup document."""

    def __init__(self, store: StoreAdapter, bus: Optional[EventBus] = None):
        self.store = store
        self.bus = bus

    async def import_document(self, document: Any) -> List[str]:
        """Replace the stored data with the document's; returns the keys written."""
        parsed = validate_document(document)
        if parsed.version != BACKUP_VERSION:
            logger.warning(f"Importing backup with version {parsed.version} (current {BACKUP_VERSION})")

        # every value is checked before anything is cleared
        encoded = {key: encode_value(key, parsed.data[key]) for key in EXPORTABLE_KEYS if key in parsed.data}

        await self.store.multi_remove(EXPORTABLE_KEYS)

        written: List[str] = []
        for key, value in encoded.items():
            await self.store.set_raw(key, value)
            written.append(key)

        ignored = sorted(k for k in parsed.data if k not in EXPORTABLE_KEYS)
        if ignored:
            logger.info(f"Ignored unknown backup keys: {', '.join(ignored)}")
        logger.info(f"Imported {len(written)} keys")
        publish_backup_imported(self.bus, written)
        return written

    async def import_from_file(self, input_path: Path) -> List[str]:
        def _read():
            with open(input_path, 'r', encoding='utf-8') as f:
                return json.load(f)

        try:
            document = await asyncio.to_thread(_read)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Backup file is not valid JSON: {e}") from e
        except OSError as e:
            logger.error(f"Import failed: {e}")
            raise StorageError(f"Could not read backup file {input_path}") from e
        return await self.import_document(document)


# CLI interface
if __name__ == "__main__":
    import argparse
    from ftorplanner.infra.Key_Value_Store import JsonFileStore
    from ftorplanner.infra.paths import STORE_FILE

    parser = argparse.ArgumentParser(description='Export/Import FtorPlanner data')
    parser.add_argument('action', choices=['export', 'import', 'check'], help='Action to perform')
    parser.add_argument('--file', help='Input/output file path')

    args = parser.parse_args()
    adapter = StoreAdapter(JsonFileStore(STORE_FILE))

    if args.action == 'export':
        result = asyncio.run(DataExporter(adapter).export_to_file(Path(args.file) if args.file else None))
        print(f"✓ Exported to: {result}")
    else:
        if not args.file:
            print("Error: --file is required")
            raise SystemExit(1)
        if args.action == 'check':
            print("✓ Valid backup" if is_valid_backup_file(Path(args.file)) else "✗ Invalid backup")
        else:
            keys = asyncio.run(DataImporter(adapter).import_from_file(Path(args.file)))
            print(f"✓ Imported {len(keys)} keys from: {args.file}")
