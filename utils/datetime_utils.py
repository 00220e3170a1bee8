from datetime import datetime, date
import pytz

DEFAULT_TZ = pytz.timezone("UTC")

def get_timezone(name: str = None):
    """pytz таймзона по имени; пустое имя - UTC"""
    if not name:
        return DEFAULT_TZ
    return pytz.timezone(name)

def now_local(tz_name: str = None) -> datetime:
    return datetime.now(get_timezone(tz_name))

MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

def short_month_day(dt: date) -> str:
    """Короткая подпись столбца: 'Jan 5' (не зависит от локали)"""
    return f"{MONTH_ABBR[dt.month - 1]} {dt.day}"

def export_timestamp(dt: datetime = None) -> str:
    return (dt or datetime.now()).strftime("%Y%m%d_%H%M%S")
