"""Constants for the ODPT (Open Data Challenge for Public Transportation) API."""

from synca_transit.domain.models import RailwayRef, StatusKind

DEFAULT_ODPT_API_BASE_URL = "https://api.odpt.org/api/v4"

ODPT_RAILWAY_ENDPOINT = "odpt:Railway"
ODPT_TRAIN_INFORMATION_ENDPOINT = "odpt:TrainInformation"

# Railways whose train information ODPT publishes
ODPT_AVAILABLE_RAILWAYS = [
    # Tokyo Metro
    RailwayRef("odpt.Railway:TokyoMetro.Ginza", "銀座線", "東京メトロ"),
    RailwayRef("odpt.Railway:TokyoMetro.Marunouchi", "丸ノ内線", "東京メトロ"),
    RailwayRef("odpt.Railway:TokyoMetro.Hibiya", "日比谷線", "東京メトロ"),
    RailwayRef("odpt.Railway:TokyoMetro.Tozai", "東西線", "東京メトロ"),
    RailwayRef("odpt.Railway:TokyoMetro.Chiyoda", "千代田線", "東京メトロ"),
    RailwayRef("odpt.Railway:TokyoMetro.Yurakucho", "有楽町線", "東京メトロ"),
    RailwayRef("odpt.Railway:TokyoMetro.Hanzomon", "半蔵門線", "東京メトロ"),
    RailwayRef("odpt.Railway:TokyoMetro.Namboku", "南北線", "東京メトロ"),
    RailwayRef("odpt.Railway:TokyoMetro.Fukutoshin", "副都心線", "東京メトロ"),
    # Toei Subway
    RailwayRef("odpt.Railway:Toei.Asakusa", "浅草線", "都営"),
    RailwayRef("odpt.Railway:Toei.Mita", "三田線", "都営"),
    RailwayRef("odpt.Railway:Toei.Shinjuku", "新宿線", "都営"),
    RailwayRef("odpt.Railway:Toei.Oedo", "大江戸線", "都営"),
    # Others
    RailwayRef("odpt.Railway:TWR.Rinkai", "りんかい線", "TWR"),
    RailwayRef("odpt.Railway:MIR.TsukubaExpress", "つくばエクスプレス", "つくばエクスプレス"),
]

ODPT_STATUS_MAP: dict[str, StatusKind] = {
    "odpt:Normal": StatusKind.NORMAL,
    "odpt:Delay": StatusKind.DELAY,
    "odpt:Suspend": StatusKind.SUSPEND,
    "odpt:ServiceSuspended": StatusKind.SUSPEND,
    "odpt:DirectOperation": StatusKind.DIRECT,
    "odpt:Resume": StatusKind.RESTORE,
}

# Keywords of multilingual status titles, checked in order
ODPT_STATUS_KEYWORDS: list[tuple[str, StatusKind]] = [
    ("見合", StatusKind.SUSPEND),
    ("運休", StatusKind.SUSPEND),
    ("直通", StatusKind.DIRECT),
    ("再開", StatusKind.RESTORE),
    ("遅", StatusKind.DELAY),
]
