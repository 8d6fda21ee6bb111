import os

from core import env  # noqa: F401  (loads .env)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = os.getenv("LOG_DIR", "logs")
LOG_FILE_NAME = "srlevels.log"

# Log format: timestamp | LEVEL | module | message
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
CONSOLE_DATE_FORMAT = "%H:%M:%S"

# 5 MB per file, three backups
MAX_LOG_SIZE = 5 * 1024 * 1024
BACKUP_COUNT = 3
