import os
import logging
from dotenv import load_dotenv

# I want the .env values loaded before logging and every TDX setting below.
load_dotenv()
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s"
)

def _as_bool(v: str | None, default=False):
    # I keep all the truthy env parsing in this one spot.
    if v is None:
        return default
    return str(v).strip().lower() in {"1", "true", "yes", "y", "on"}

def _as_float(v: str | None, default: float | None = None) -> float | None:
    if v is None or not str(v).strip():
        return default
    return float(v)

# Grabbing the TDX essentials from env; nothing works without these.
TDX_API_BASE_URL = os.getenv("TDX_API_BASE_URL") or ""
TDX_APP_BASE_URL = os.getenv("TDX_APP_BASE_URL") or ""
TDX_USERNAME     = os.getenv("TDX_USERNAME") or ""
TDX_PASSWORD     = os.getenv("TDX_PASSWORD") or ""
TDX_APP_ID       = int(os.getenv("TDX_APP_ID") or "0")

DEFAULT_USER_AGENT = os.getenv("TDX_USER_AGENT") or "CIT Cloud Team Automation"

# Only my debug script reads this; library calls take ignore_ssl_errors explicitly.
TDX_IGNORE_SSL_ERRORS = _as_bool(os.getenv("TDX_IGNORE_SSL_ERRORS"), False)

SEARCH_LIMIT = int(os.getenv("TDX_SEARCH_LIMIT", "20"))

TICKET_DEFAULTS_URL = (
    os.getenv("TICKET_DEFAULTS_URL")
    or "https://cu-cit-cloud-team.github.io/tdx-playground/automated-ticket-defaults"
)

# Left unset on purpose so requests waits as long as the socket does.
HTTP_TIMEOUT = _as_float(os.getenv("HTTP_TIMEOUT"))
