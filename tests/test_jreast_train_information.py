"""Tests for parsing the JR East train information page."""

from typing import Any

import pytest

from synca_transit.adapters.jreast_api import JrEastTrainInformationSource
from synca_transit.adapters.jreast_api.constants import MONITORED_LINES, MonitoredLine
from synca_transit.adapters.jreast_api.jreast_train_information import (
    parse_status_icon,
    parse_train_info_html,
)
from synca_transit.domain.exceptions import UpstreamError
from synca_transit.domain.models import StatusKind

PAGE = """
<div class="line">
  <span class="name">高崎線</span>
  <img src="/img/ico_info_delay.svg">
  <p class="status_Text"> 大宮駅での人身事故の影響で、遅れが出ています。 </p>
</div>
<div class="line">
  <span class="name">宇都宮線</span>
  <img src="/img/ico_info_normal.svg">
</div>
<div class="line">
  <span class="name">埼京線</span>
  <img src="/img/ico_info_suspend.svg">
  <p class="status_Text">運転を見合わせています。</p>
</div>
"""

TAKASAKI = MonitoredLine("高崎線", "jreast.Takasaki")
UTSUNOMIYA = MonitoredLine("宇都宮線", "jreast.Utsunomiya")
SAIKYO = MonitoredLine("埼京線", "jreast.Saikyo")
YAMANOTE = MonitoredLine("山手線", "jreast.Yamanote")


@pytest.mark.parametrize(
    ("icon", "expected"),
    [
        ("normal", StatusKind.NORMAL),
        ("delay", StatusKind.DELAY),
        ("suspend", StatusKind.SUSPEND),
        ("stop", StatusKind.SUSPEND),
        ("info", StatusKind.NORMAL),
    ],
)
def test_parse_status_icon(icon: str, expected: StatusKind) -> None:
    """Given a status icon name, when parsing, then the matching status results."""
    assert parse_status_icon(icon) is expected


def test_parses_status_and_detail_per_line() -> None:
    """Given a page with three lines, when parsing, then each line gets its own status."""
    reports = parse_train_info_html(PAGE, [TAKASAKI, UTSUNOMIYA, SAIKYO])

    assert [(r.railway_id, r.status) for r in reports] == [
        ("jreast.Takasaki", StatusKind.DELAY),
        ("jreast.Utsunomiya", StatusKind.NORMAL),
        ("jreast.Saikyo", StatusKind.SUSPEND),
    ]
    assert reports[0].text == "大宮駅での人身事故の影響で、遅れが出ています。"
    assert reports[1].text is None
    assert reports[2].text == "運転を見合わせています。"


def test_line_missing_from_page_is_normal() -> None:
    """Given a monitored line absent from the page, when parsing, then it is reported normal."""
    reports = parse_train_info_html(PAGE, [YAMANOTE])

    assert reports[0].railway_id == "jreast.Yamanote"
    assert reports[0].status is StatusKind.NORMAL
    assert reports[0].text is None


def test_default_lines_cover_every_monitored_line() -> None:
    """Given an empty page, when parsing with defaults, then every monitored line is reported."""
    reports = parse_train_info_html("")

    assert [r.railway_id for r in reports] == [line.railway_id for line in MONITORED_LINES]


@pytest.mark.asyncio
async def test_source_fetches_page(fake_session: Any) -> None:
    """Given the page is served, when fetching, then reports for all monitored lines return."""
    fake_session.respond(text_body=PAGE)
    source = JrEastTrainInformationSource(fake_session, url="https://jr.example/kanto")

    reports = await source.fetch_train_information()

    assert fake_session.requests[0][:2] == ("GET", "https://jr.example/kanto")
    assert len(reports) == len(MONITORED_LINES)
    assert reports[0].status is StatusKind.DELAY


@pytest.mark.asyncio
async def test_source_http_error_raises(fake_session: Any) -> None:
    """Given HTTP 503, when fetching, then UpstreamError is raised."""
    fake_session.respond(status=503)
    source = JrEastTrainInformationSource(fake_session, url="https://jr.example/kanto")

    with pytest.raises(UpstreamError):
        await source.fetch_train_information()
