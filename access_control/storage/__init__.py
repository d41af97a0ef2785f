"""File storage for uploaded media."""

from access_control.storage.file_store import LocalFileStore

__all__ = ["LocalFileStore"]
