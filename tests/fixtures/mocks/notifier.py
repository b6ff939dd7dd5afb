# tests/fixtures/mocks/notifier.py
import pytest


class RecordingNotifier:
    """In-memory `NotificationDispatcher` that remembers what it was asked to send."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str]] = []
        self.fail = False
        self.error: Exception | None = None

    async def send(self, code: str, destination: str) -> bool:
        if self.error is not None:
            raise self.error
        self.sent.append((code, destination))
        return not self.fail

    def last_code_for(self, destination: str) -> str:
        for code, dest in reversed(self.sent):
            if dest == destination:
                return code
        raise AssertionError(f"no code sent to {destination}")


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()
