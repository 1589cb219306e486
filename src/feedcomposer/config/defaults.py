"""Default configuration values for feedcomposer."""

from pathlib import Path

# Base paths
BASE_DIR = Path(__file__).parent.parent.parent.parent
DATA_DIR = BASE_DIR / "data"
LOGS_DIR = BASE_DIR / "logs"

# Database
DEFAULT_DB_PATH = DATA_DIR / "feedcomposer.db"
DEFAULT_DB_BUSY_TIMEOUT = 5.0  # seconds sqlite waits on a locked database

# Feed defaults
DEFAULT_CHUNK_SIZE = 20
DEFAULT_FEED_LIMIT = 20
FEED_LIMIT_MAX = 50
DEFAULT_SOURCE_PRIORITY = ["review", "complaint"]
DEFAULT_REVIEW_STATUS = "APPROVED"

# Logging defaults
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_MAX_SIZE_MB = 10
DEFAULT_LOG_BACKUP_COUNT = 3

# Status values accepted by the content tables
REVIEW_STATUSES = ("PENDING", "APPROVED", "REJECTED")
COMPLAINT_STATUSES = ("OPEN", "IN_PROGRESS", "RESOLVED", "CLOSED")

# =============================================================================
# DEFAULT COMPANIES - Seed catalogue for a fresh database
# =============================================================================
# Keyed by slug: (display name, category, logo)

DEFAULT_COMPANIES = {
    "companyprofile": ("Companyprofile", "EXCHANGES", "/logo.png"),
    "northbank-exchange": ("Northbank Exchange", "EXCHANGES", None),
    "tidepool-markets": ("Tidepool Markets", "EXCHANGES", None),
    "ledgerlock": ("LedgerLock", "WALLETS", None),
    "vaultline": ("Vaultline", "WALLETS", None),
    "orbit-pay": ("Orbit Pay", "PAYMENTS", None),
    "quillcard": ("QuillCard", "PAYMENTS", None),
    "harbor-lend": ("Harbor Lend", "LENDING", None),
}
