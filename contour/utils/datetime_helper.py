"""日時フォーマットのヘルパー関数"""
from datetime import date, datetime


def format_time_12h(dt: datetime) -> str:
    """
    datetimeを12時間表記に変換

    Returns:
        str: "3:05 PM" 形式の文字列
    """
    hour = dt.hour % 12 or 12
    period = "AM" if dt.hour < 12 else "PM"
    return f"{hour}:{dt.minute:02d} {period}"


def format_date_long(d: date) -> str:
    """"Fri, Dec 25, 2026" 形式"""
    return f"{d.strftime('%a')}, {d.strftime('%b')} {d.day}, {d.year}"


def format_date_short(d: date) -> str:
    """"Dec 25, 2026" 形式"""
    return f"{d.strftime('%b')} {d.day}, {d.year}"


def day_offset_label(offset: int) -> str:
    """日付のずれを表示用ラベルに変換 (+1 day / -1 day)"""
    if offset == 0:
        return ""
    unit = "day" if abs(offset) == 1 else "days"
    return f"{offset:+d} {unit}"
