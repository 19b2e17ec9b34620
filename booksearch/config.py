"""Configuration management."""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    """Application configuration."""

    # HTTP
    DEFAULT_TIMEOUT = float(os.getenv("DEFAULT_TIMEOUT", "10"))
    MAX_RESULTS = int(os.getenv("MAX_RESULTS", "20"))

    # Search history
    HISTORY_LIMIT = int(os.getenv("HISTORY_LIMIT", "10"))
    HISTORY_KEY = os.getenv("HISTORY_KEY", "bookSearchHistory")
    HISTORY_BACKEND = os.getenv("HISTORY_BACKEND", "file")
    HISTORY_DIR = os.path.expanduser(os.getenv("HISTORY_DIR", "~/.booksearch"))

    # Database (only used by the postgres history backend)
    DB_HOST = os.getenv("DB_HOST", "localhost")
    DB_PORT = os.getenv("DB_PORT", "5432")
    DB_NAME = os.getenv("DB_NAME", "booksdb")
    DB_USER = os.getenv("DB_USER", "postgres")
    DB_PASSWORD = os.getenv("DB_PASSWORD", "")

    @property
    def DATABASE_URL(self):
        """Build PostgreSQL connection string."""
        return f"postgresql://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
