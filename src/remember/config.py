"""Configuration models for position persistence and resume prompts."""

from __future__ import annotations

from pydantic import BaseModel, Field


class StorageKeys(BaseModel):
    """Names of the durable and session-scoped storage entries."""

    position: str = Field(default="quarto-remember-position", min_length=1)
    timestamp: str = Field(default="quarto-remember-timestamp", min_length=1)
    prompt_shown: str = Field(default="quarto-remember-prompt-shown", min_length=1)
    session_active: str = Field(default="quarto-remember-session-active", min_length=1)


class PromptConfig(BaseModel):
    """Configures the resume dialog and its re-entrancy cooldown."""

    cooldown_ms: int = Field(default=5000, ge=0)
    title: str = "Resume Navigation?"
    accept_text: str = "Yes"
    accept_label: str = "Yes, resume where I left off"
    decline_text: str = "No"
    decline_label: str = "No, start from the beginning"


class TrackingConfig(BaseModel):
    """Configures scroll capture and the standalone prompt threshold."""

    scroll_debounce_ms: int = Field(default=500, ge=0)
    prompt_scroll_threshold: float = Field(default=100.0, ge=0.0)


class RememberConfig(BaseModel):
    """Top-level settings bundle handed to the orchestrator."""

    storage_keys: StorageKeys = Field(default_factory=StorageKeys)
    prompt: PromptConfig = Field(default_factory=PromptConfig)
    tracking: TrackingConfig = Field(default_factory=TrackingConfig)
