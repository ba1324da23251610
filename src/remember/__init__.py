"""Reading-position persistence and resume prompts."""

from .config import PromptConfig, RememberConfig, StorageKeys, TrackingConfig

__all__ = ["PromptConfig", "RememberConfig", "StorageKeys", "TrackingConfig"]
