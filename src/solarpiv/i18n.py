"""Simple two-language (ko/en) translation helper."""

_STRINGS: dict[str, dict[str, str]] = {
    "report_title": {
        "ko": "태양광 분석 결과",
        "en": "Solar Analysis Results",
    },
    "label_place": {
        "ko": "장소",
        "en": "Location",
    },
    "label_time": {
        "ko": "시각 (UTC)",
        "en": "Time (UTC)",
    },
    "label_panel": {
        "ko": "패널",
        "en": "Panel",
    },
    "label_area": {
        "ko": "지붕 면적",
        "en": "Roof Area",
    },
    "label_shadow": {
        "ko": "그림자 비율",
        "en": "Shadow Coverage",
    },
    "label_irradiance": {
        "ko": "평균 일사량",
        "en": "Avg Irradiance",
    },
    "label_power": {
        "ko": "예상 발전량",
        "en": "Estimated Power",
    },
    "label_sunlight": {
        "ko": "일조 시간",
        "en": "Sunlight Hours/Day",
    },
    "label_piv": {
        "ko": "PIV 값",
        "en": "PIV Value",
    },
    "label_altitude": {
        "ko": "태양 고도",
        "en": "Sun Altitude",
    },
    "label_azimuth": {
        "ko": "태양 방위각",
        "en": "Sun Azimuth",
    },
    "label_annual": {
        "ko": "연간 예상 발전량",
        "en": "Estimated Annual Generation",
    },
    "now": {
        "ko": "현재",
        "en": "now",
    },
    "no_area": {
        "ko": "면적을 그리면 발전량을 계산할 수 있어요",
        "en": "Draw an area to see the solar potential",
    },
    "orientation_north": {
        "ko": "북향",
        "en": "north-facing",
    },
    "orientation_south": {
        "ko": "남향",
        "en": "south-facing",
    },
    "orientation_east": {
        "ko": "동향",
        "en": "east-facing",
    },
    "orientation_west": {
        "ko": "서향",
        "en": "west-facing",
    },
    "error_address": {
        "ko": "주소를 찾을 수 없어요. ({error})",
        "en": "Address not found. Try a more specific address. ({error})",
    },
    "error_input": {
        "ko": "입력값을 확인해 주세요. ({error})",
        "en": "Invalid input. ({error})",
    },
}


def t(key: str, lang: str) -> str:
    """Return the translated string for key in lang.

    Falls back to 'en', then to the key itself if not found.
    """
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    return entry.get(lang) or entry.get("en") or key
