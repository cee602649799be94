from __future__ import annotations

from datetime import date
from typing import Optional, Tuple

from dateutil.relativedelta import relativedelta


def date_window(months: int, today: Optional[date] = None) -> Tuple[date, date]:
    """
    Return ``(start, end)`` covering the trailing ``months`` calendar months.

    Month arithmetic clamps to the last day of a shorter month, so 31 May
    minus three months is the end of February.
    """
    end = today or date.today()
    return end - relativedelta(months=months), end


def format_ddmmyyyy(value: date) -> str:
    return value.strftime("%d%m%Y")
