"""Fake UserFeedback that records messages instead of printing them."""

from base_tooling.core.user_feedback import UserFeedback


class FakeUserFeedback(UserFeedback):
    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def success(self, message: str) -> None:
        self.messages.append(("success", message))

    def warn(self, message: str) -> None:
        self.messages.append(("warn", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))

    @property
    def warnings(self) -> list[str]:
        return [message for level, message in self.messages if level == "warn"]
