import os
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parents[1]
ENV_FILE = Path(os.getenv("SRLEVELS_ENV_FILE", str(PROJECT_ROOT / ".env")))

# Real environment variables win over the file.
load_dotenv(ENV_FILE, override=False)
