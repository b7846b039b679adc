"""Behavior tests for delay alerts on monitored lines."""

import pytest

from synca_transit.application.services.delay_alert_service import (
    ALERT_TITLE,
    DelayAlertService,
)
from synca_transit.domain.models import AlertResult, RailwayStatus, StatusKind


def _status(name: str, status: StatusKind, text: str) -> RailwayStatus:
    return RailwayStatus(
        railway_id=f"jreast.{name}",
        railway_name=name,
        operator="JR東日本",
        status=status,
        status_text=text,
    )


class FakeStatusFetcher:
    def __init__(self) -> None:
        self.statuses: list[RailwayStatus] = []

    async def fetch_all_statuses(self) -> list[RailwayStatus]:
        return self.statuses


class FakeNotifier:
    def __init__(self, succeed: bool = True) -> None:
        self.succeed = succeed
        self.messages: list[tuple[str, str]] = []

    async def notify(self, title: str, body: str) -> bool:
        self.messages.append((title, body))
        return self.succeed


@pytest.fixture
def fetcher() -> FakeStatusFetcher:
    return FakeStatusFetcher()


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def service(fetcher: FakeStatusFetcher, notifier: FakeNotifier) -> DelayAlertService:
    return DelayAlertService(fetcher, notifier, monitored_lines=["高崎線", "宇都宮線"])


@pytest.mark.asyncio
async def test_no_disruption_sends_nothing(
    service: DelayAlertService, fetcher: FakeStatusFetcher, notifier: FakeNotifier
) -> None:
    """Given all monitored lines normal, when checking, then nothing is sent."""
    fetcher.statuses = [_status("高崎線", StatusKind.NORMAL, "operating normally")]

    result = await service.check()

    assert result == AlertResult()
    assert notifier.messages == []


@pytest.mark.asyncio
async def test_disrupted_monitored_lines_are_notified_once(
    service: DelayAlertService, fetcher: FakeStatusFetcher, notifier: FakeNotifier
) -> None:
    """Given a delay, when checking twice, then one notification names the line."""
    fetcher.statuses = [
        _status("高崎線", StatusKind.DELAY, "遅延"),
        _status("山手線", StatusKind.SUSPEND, "運転見合わせ"),
    ]

    first = await service.check()
    second = await service.check()

    assert first.sent is True
    assert first.notified_lines == ["高崎線"]
    assert notifier.messages == [(ALERT_TITLE, "高崎線: 遅延")]
    assert second.sent is False
    assert second.disrupted_lines == ["高崎線"]
    assert second.notified_lines == []


@pytest.mark.asyncio
async def test_changed_status_text_is_notified_again(
    service: DelayAlertService, fetcher: FakeStatusFetcher, notifier: FakeNotifier
) -> None:
    """Given a notified delay whose text changes, when checking, then it is sent again."""
    fetcher.statuses = [_status("宇都宮線", StatusKind.DELAY, "遅延")]
    await service.check()

    fetcher.statuses = [_status("宇都宮線", StatusKind.SUSPEND, "運転見合わせ")]
    result = await service.check()

    assert result.notified_lines == ["宇都宮線"]
    assert len(notifier.messages) == 2


@pytest.mark.asyncio
async def test_recovery_clears_memory(
    service: DelayAlertService, fetcher: FakeStatusFetcher, notifier: FakeNotifier
) -> None:
    """Given a line that recovered, when it is disrupted again, then it is notified again."""
    delayed = [_status("高崎線", StatusKind.DELAY, "遅延")]
    fetcher.statuses = delayed
    await service.check()
    fetcher.statuses = [_status("高崎線", StatusKind.NORMAL, "operating normally")]
    await service.check()

    fetcher.statuses = delayed
    result = await service.check()

    assert result.sent is True
    assert len(notifier.messages) == 2


@pytest.mark.asyncio
async def test_failed_delivery_is_retried(fetcher: FakeStatusFetcher) -> None:
    """Given a notifier that fails, when checking again, then the same lines are retried."""
    notifier = FakeNotifier(succeed=False)
    service = DelayAlertService(fetcher, notifier, monitored_lines=["高崎線"])
    fetcher.statuses = [_status("高崎線", StatusKind.DELAY, "遅延")]

    first = await service.check()
    second = await service.check()

    assert first.sent is False
    assert second.notified_lines == ["高崎線"]
    assert len(notifier.messages) == 2


@pytest.mark.asyncio
async def test_line_name_substring_matches(fetcher: FakeStatusFetcher, notifier: FakeNotifier) -> None:
    """Given a status named "JR高崎線", when checking for "高崎線", then it counts."""
    service = DelayAlertService(fetcher, notifier, monitored_lines=["高崎線"])
    fetcher.statuses = [_status("JR高崎線", StatusKind.DELAY, "遅延")]

    result = await service.check()

    assert result.disrupted_lines == ["高崎線"]
    assert notifier.messages == [(ALERT_TITLE, "高崎線: 遅延")]
