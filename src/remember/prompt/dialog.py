"""Accessible view model of the resume dialog."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from remember.config import PromptConfig

TITLE_ID = "remember-prompt-title"
MESSAGE_ID = "remember-prompt-message"


class PromptAction(str, Enum):
    ACCEPT = "accept"
    DECLINE = "decline"


@dataclass(slots=True, eq=False)
class DialogButton:
    action: PromptAction
    text: str
    label: str
    css_class: str

    @property
    def attributes(self) -> dict[str, str]:
        return {"type": "button", "aria-label": self.label, "class": self.css_class}


@dataclass(slots=True, eq=False)
class DialogView:
    """What the host renders: overlay attributes, copy, and two buttons.

    Buttons are ordered decline first, accept last.
    """

    title: str
    message: str
    buttons: tuple[DialogButton, DialogButton]
    attributes: dict[str, str] = field(default_factory=dict)
    title_id: str = TITLE_ID
    message_id: str = MESSAGE_ID

    @property
    def decline_button(self) -> DialogButton:
        return self.buttons[0]

    @property
    def accept_button(self) -> DialogButton:
        return self.buttons[1]

    def button(self, action: PromptAction) -> DialogButton:
        return self.accept_button if action is PromptAction.ACCEPT else self.decline_button


def build_dialog(message: str, config: PromptConfig | None = None) -> DialogView:
    config = config or PromptConfig()
    decline = DialogButton(
        action=PromptAction.DECLINE,
        text=config.decline_text,
        label=config.decline_label,
        css_class="remember-btn remember-btn-decline",
    )
    accept = DialogButton(
        action=PromptAction.ACCEPT,
        text=config.accept_text,
        label=config.accept_label,
        css_class="remember-btn remember-btn-accept",
    )
    return DialogView(
        title=config.title,
        message=message,
        buttons=(decline, accept),
        attributes={
            "class": "remember-overlay",
            "role": "alertdialog",
            "aria-modal": "true",
            "aria-labelledby": TITLE_ID,
            "aria-describedby": MESSAGE_ID,
            "aria-live": "assertive",
        },
    )
