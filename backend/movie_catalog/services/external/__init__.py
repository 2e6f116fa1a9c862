"""
External Services - Media host, language model and local upload storage
"""

from .assistant_service import GeminiAssistant
from .media_store import CloudinaryMediaStore, MediaUpload
from .storage_service import StorageService

__all__ = ["GeminiAssistant", "CloudinaryMediaStore", "MediaUpload", "StorageService"]
