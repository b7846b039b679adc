"""Constants for the Overpass API station locator."""

DEFAULT_OVERPASS_API_URL = "https://overpass.osm.jp/api/interpreter"

USER_AGENT = "Synca/1.0"

# Networks of theme-park and other private railways
EXCLUDED_NETWORKS = [
    "ディズニーリゾートライン",
    "Disney Resort Line",
    "舞浜リゾートライン",
]

# Stations inside theme parks and amusement parks (exact names)
EXCLUDED_STATION_NAMES = [
    # Disney Resort Line
    "リゾートゲートウェイ・ステーション",
    "東京ディズニーランド・ステーション",
    "ベイサイド・ステーション",
    "東京ディズニーシー・ステーション",
    # Western River Railroad
    "アドベンチャーランド・デポ",
    # DisneySea Electric Railway
    "アメリカンウォーターフロント・ステーション",
    "ポートディスカバリー・ステーション",
    # Tobu Zoo park line
    "東ゲート",
    "東ゲート駅",
    "リバティーランド",
    "リバティーランド駅",
    "ハートフルランド",
    "ハートフルランド駅",
    "ハートフルタウン",
    # Shuzenji Romney Railway
    "ロムニー駅",
    "ネルソン駅",
    # Himeji Central Park
    "ふれあいの国駅",
    "野生の国駅",
    # Japan Monkey Park (closed)
    "領事館駅",
    "犬山成田山駅",
    "動物園駅",
    # Other amusement parks
    "ウエスタン村駅",
    "おとぎの国駅",
]

# Name fragments that mark theme-park style stations
EXCLUDED_STATION_PATTERNS = [
    "ステーション",
]
