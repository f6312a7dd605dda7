"""行程与预算的数据模型。"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class Source:
    """A grounding citation attached to an activity by the generation service."""

    uri: str
    title: Optional[str] = None

    def to_dict(self) -> Dict:
        return {"uri": self.uri, "title": self.title}


@dataclass
class Citation:
    """URL citation returned with the raw text, located by character offsets."""

    uri: str
    title: Optional[str] = None
    start_index: int = 0
    end_index: int = 0

    def to_source(self) -> Source:
        return Source(uri=self.uri, title=self.title)


@dataclass
class Activity:
    name: str
    time: str
    cost: str  # 生成服务给出的估算费用原文，例如 "JPY 400"
    link: str = ""  # 空字符串表示没有链接
    actual_cost: Optional[float] = None
    sources: Optional[List[Source]] = None

    def to_dict(self) -> Dict:
        return {
            "name": self.name,
            "time": self.time,
            "cost": self.cost,
            "link": self.link,
            "actual_cost": self.actual_cost,
            "sources": [s.to_dict() for s in self.sources] if self.sources is not None else None,
        }


@dataclass
class DailyItinerary:
    day: int
    activities: List[Activity] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            "day": self.day,
            "activities": [a.to_dict() for a in self.activities],
        }


@dataclass
class Itinerary:
    """One generation result: parsed days plus the raw text kept for diagnostics."""

    daily_itineraries: List[DailyItinerary] = field(default_factory=list)
    raw_markdown: str = ""

    @property
    def activity_count(self) -> int:
        return sum(len(d.activities) for d in self.daily_itineraries)

    def to_dict(self) -> Dict:
        return {
            "daily_itineraries": [d.to_dict() for d in self.daily_itineraries],
            "raw_markdown": self.raw_markdown,
        }


@dataclass(frozen=True)
class ParsedCost:
    amount: float
    currency: str

    def __str__(self) -> str:
        return f"{self.currency} {self.amount}"


@dataclass
class BudgetSummary:
    total_estimated_cost: float = 0.0
    total_actual_cost: float = 0.0
    remaining_budget: float = 0.0
    average_daily_remaining_budget: float = 0.0
    currency: str = ""
    total_budget: Optional[float] = None

    @property
    def has_total_budget(self) -> bool:
        # 未填写总预算时 remaining 恒为 0，展示层应以此判断是否显示剩余预算
        return self.total_budget is not None

    def to_dict(self) -> Dict:
        return {
            "total_estimated_cost": self.total_estimated_cost,
            "total_actual_cost": self.total_actual_cost,
            "remaining_budget": self.remaining_budget,
            "average_daily_remaining_budget": self.average_daily_remaining_budget,
            "currency": self.currency,
            "total_budget": self.total_budget,
        }
