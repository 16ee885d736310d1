"""DateTime Utilities Module"""

import datetime as _dt
from zoneinfo import ZoneInfo

from kink import di


class DateTimeUtils:
    @staticmethod
    def now() -> _dt.datetime:
        tz = di[ZoneInfo] if ZoneInfo in di else _dt.UTC
        return _dt.datetime.now(tz=tz)

    @staticmethod
    def timestamp() -> int:
        return int(DateTimeUtils.now().timestamp())
