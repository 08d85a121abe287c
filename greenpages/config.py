"""Configuration management."""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    """Application configuration."""

    # Source CSV (local path or http(s) URL)
    BOOKS_SOURCE = os.getenv("BOOKS_SOURCE", "books.csv")

    # Fetching
    DEFAULT_TIMEOUT = int(os.getenv("DEFAULT_TIMEOUT", "10"))
    DEFAULT_MAX_RETRIES = int(os.getenv("DEFAULT_MAX_RETRIES", "3"))

    # Dashboard
    DEFAULT_TOP_N = int(os.getenv("DEFAULT_TOP_N", "10"))
    AUTHOR_OPTIONS = int(os.getenv("AUTHOR_OPTIONS", "5"))
    DEFAULT_LANGUAGE = os.getenv("DEFAULT_LANGUAGE", "en")
