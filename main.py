"""
FastAPI app: login & consent provider for an ORY Hydra authorization server.
Run with: uvicorn main:app (after pip install -e .).

Decisions:
- .env is loaded before importing login_consent so HYDRA_*, BASE_URL and
  SESSION_SECRET are available when settings are read (Ruff E402 suppressed).
- The admin client is created once and shared by every request; it is closed
  when the app shuts down.
- Session secret from SESSION_SECRET env; default "change-me" is for dev only.
  The session only carries the CSRF token.
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()

# Load .env before login_consent so HYDRA_* and SESSION_SECRET are set; Ruff E402.
from login_consent import Settings, create_app  # noqa: E402

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app(Settings.from_env())
