"""Constants used throughout the application."""

# Media extensions considered during discovery (compared lowercase)
VIDEO_FORMATS = (
    "mp4",
    "flv",
    "mkv",
    "avi",
    "mov",
    "wmv",
    "webm",
    "m4v",
    "mpg",
    "mpeg",
    "ts",
)

# Output files
LEDGER_FILE = "checksums.txt"
LEDGER_BACKUP_SUFFIX = ".bak"
ACTION_SCRIPT_FILE = "potentially-destructive-remove.sh"

# Hashing
READ_CHUNK_SIZE = 1024 * 1024
SHORT_HASH_LENGTH = 8

# Display name for the scan root in reports and scripts
ROOT_DISPLAY_NAME = "root"
