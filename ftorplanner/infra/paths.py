from ftorplanner.utilities.config import DATA_DIR, STORE_FILE, EXPORT_DIR

# Centralized paths for data files (single source of truth)
BACKUP_FILE_PREFIX = 'ftorplanner_backup_'


def backup_file_name(export_date: str) -> str:
    """Build the export file name from an ISO-8601 export timestamp."""
    return f"{BACKUP_FILE_PREFIX}{export_date.split('T')[0]}.json"


__all__ = ['DATA_DIR', 'STORE_FILE', 'EXPORT_DIR', 'BACKUP_FILE_PREFIX', 'backup_file_name']
