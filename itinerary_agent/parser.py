import logging
import re
from typing import List, Optional, Sequence

from .models import Activity, Citation, DailyItinerary


logger = logging.getLogger(__name__)

# **Hari 1**
DAY_HEADER_RE = re.compile(r"\*\*Hari ([0-9]+)\*\*")

# - **Nama Tempat**: 09:00 - 17:00 | Estimasi Biaya: JPY 400 | [Cek Harga](https://...)
ACTIVITY_RE = re.compile(
    r"-\s+\*\*(?P<name>.+?)\*\*\s*:\s*(?P<time>.*?)\s*"
    r"\|\s*Estimasi Biaya:\s*(?P<cost>.*?)\s*"
    r"\|\s*\[Cek Harga\]\((?P<link>.*?)\)"
)

LINK_PLACEHOLDER = "#"


def _match_day_header(line: str) -> Optional[int]:
    m = DAY_HEADER_RE.fullmatch(line)
    if not m:
        return None
    return int(m.group(1))


def _match_activity(line: str) -> Optional[Activity]:
    m = ACTIVITY_RE.fullmatch(line)
    if not m:
        return None
    name = m.group("name").strip()
    if not name:
        return None
    link = m.group("link").strip()
    return Activity(
        name=name,
        time=m.group("time").strip(),
        cost=m.group("cost").strip(),
        link="" if link == LINK_PLACEHOLDER else link,
    )


def _attach_citations(activity: Activity, start: int, end: int, citations: Sequence[Citation]) -> None:
    # 引用区间与该行字符区间有交集即归属于该活动，内容原样保留
    for c in citations:
        if c.start_index < end and c.end_index > start:
            if activity.sources is None:
                activity.sources = []
            activity.sources.append(c.to_source())


def parse_itinerary(raw_text: str, citations: Optional[Sequence[Citation]] = None) -> List[DailyItinerary]:
    """把生成服务返回的 Markdown 文本解析为按出现顺序排列的每日行程。

    不匹配任何模式的行会被忽略；出现在第一个日期标题之前的活动行会被丢弃。
    完全无法解析的文本返回空列表，而不是抛出异常。
    """
    days: List[DailyItinerary] = []
    current: Optional[DailyItinerary] = None
    dropped = 0

    offset = 0
    for raw_line in (raw_text or "").split("\n"):
        start = offset
        offset += len(raw_line) + 1
        line = raw_line[:-1] if raw_line.endswith("\r") else raw_line
        if not line.strip():
            continue

        day = _match_day_header(line)
        if day is not None:
            if current is not None:
                days.append(current)
            current = DailyItinerary(day=day, activities=[])
            continue

        activity = _match_activity(line)
        if activity is None:
            continue
        if current is None:
            dropped += 1
            continue
        if citations:
            _attach_citations(activity, start, start + len(line), citations)
        current.activities.append(activity)

    if current is not None:
        days.append(current)

    logger.debug(
        "parsed %d day(s), %d activities, dropped %d activity line(s) before first day header",
        len(days), sum(len(d.activities) for d in days), dropped,
    )
    return days
