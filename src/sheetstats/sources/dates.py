"""Spreadsheet date-serial conversion.

Spreadsheets store dates as day counts from an epoch. The 1900 system keeps
the historical leap-year bug (serial 60 is the non-existent 1900-02-29), so
serials from 61 onward are offset from 1899-12-30 and earlier ones from
1899-12-31. The 1904 system counts from 1904-01-01.
"""

from datetime import datetime, timedelta
from enum import Enum

_EPOCH_1900 = datetime(1899, 12, 31)
_EPOCH_1900_AFTER_BUG = datetime(1899, 12, 30)
_EPOCH_1904 = datetime(1904, 1, 1)

# Upper bound of 9999-12-31 in the 1900 system
MAX_SERIAL = 2958465


class DateSystem(str, Enum):
    """Workbook date epoch."""

    WINDOWS_1900 = "1900"
    MAC_1904 = "1904"


def serial_to_datetime(serial: float, system: DateSystem = DateSystem.WINDOWS_1900) -> datetime:
    """Convert a spreadsheet date serial to a datetime.

    Args:
        serial: Day count (fractional part is the time of day)
        system: Workbook date system

    Returns:
        Calendar datetime

    Raises:
        ValueError: serial is negative or beyond year 9999
    """
    if serial < 0 or serial > MAX_SERIAL:
        raise ValueError(f"Date serial out of range: {serial}")

    if system is DateSystem.MAC_1904:
        return _EPOCH_1904 + timedelta(days=serial)

    if serial < 60:
        return _EPOCH_1900 + timedelta(days=serial)
    if int(serial) == 60:
        # 1900-02-29 does not exist, spreadsheets render it as Feb 28/29
        return datetime(1900, 2, 28) + timedelta(days=serial - 60)
    return _EPOCH_1900_AFTER_BUG + timedelta(days=serial)
