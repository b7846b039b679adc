"""Constants for the JR East train information page."""

from dataclasses import dataclass

from synca_transit.domain.models import RailwayRef

DEFAULT_JREAST_TRAIN_INFO_URL = "https://traininfo.jreast.co.jp/train_info/kanto.aspx"

JREAST_OPERATOR = "JR東日本"

USER_AGENT = "Mozilla/5.0 (compatible; SyncaBot/1.0)"

# How much HTML after a line name belongs to that line's status block
BLOCK_LENGTH = 1500


@dataclass(frozen=True)
class MonitoredLine:
    """A JR East line shown on the Kanto train information page."""

    name: str
    railway_id: str


# Railway ids end with the ODPT line token so they line up with ODPT railway ids
MONITORED_LINES = [
    MonitoredLine("高崎線", "jreast.Takasaki"),
    MonitoredLine("宇都宮線", "jreast.Utsunomiya"),
    MonitoredLine("京浜東北線", "jreast.KeihinTohoku"),
    MonitoredLine("埼京線", "jreast.Saikyo"),
    MonitoredLine("湘南新宿ライン", "jreast.ShonanShinjuku"),
    MonitoredLine("上野東京ライン", "jreast.UenoTokyo"),
    MonitoredLine("山手線", "jreast.Yamanote"),
]

JREAST_RAILWAYS = [
    RailwayRef(line.railway_id, line.name, JREAST_OPERATOR) for line in MONITORED_LINES
]
