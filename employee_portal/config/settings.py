"""
Application configuration and settings.
Centralized environment variables and constants.
"""
import os
from dotenv import load_dotenv

load_dotenv()

# -----------------------------------------------------------------------------
# MongoDB Configuration
# -----------------------------------------------------------------------------
# The collection name and database name match the ones used by the original
# console portal so existing data stays readable.
MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017/")
MONGO_DB_NAME = os.getenv("MONGO_DB_NAME", "employees")
MONGO_COLLECTION_NAME = os.getenv("MONGO_COLLECTION_NAME", "emp")

# Server selection timeout; a dead server fails fast instead of hanging a command
MONGO_TIMEOUT_MS = int(os.getenv("MONGO_TIMEOUT_MS", "5000"))

# -----------------------------------------------------------------------------
# Listing Configuration
# -----------------------------------------------------------------------------
# Used when the operator answers '-' to "Results per page"
DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", "10"))

# -----------------------------------------------------------------------------
# Display Configuration
# -----------------------------------------------------------------------------
CURRENCY_SYMBOL = os.getenv("CURRENCY_SYMBOL", "$")

# -----------------------------------------------------------------------------
# Logging Configuration
# -----------------------------------------------------------------------------
# Diagnostics (ours and the pymongo driver's) are buffered during the session
# and printed once the operator exits.
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
