from remember.config import RememberConfig


def test_storage_entry_names_are_stable() -> None:
    keys = RememberConfig().storage_keys

    assert keys.position == "quarto-remember-position"
    assert keys.timestamp == "quarto-remember-timestamp"
    assert keys.prompt_shown == "quarto-remember-prompt-shown"
    assert keys.session_active == "quarto-remember-session-active"


def test_timing_defaults() -> None:
    config = RememberConfig()

    assert config.prompt.cooldown_ms == 5000
    assert config.tracking.scroll_debounce_ms == 500
    assert config.tracking.prompt_scroll_threshold == 100
