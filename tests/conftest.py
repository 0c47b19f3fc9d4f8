"""
Shared test configuration.

Points the application at SQLite before any settings are loaded so importing
the API never needs a running PostgreSQL server.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("CLIENT_STORAGE_PATH", os.path.join(os.path.dirname(__file__), ".local_storage.json"))
