import math
from typing import Dict, Optional


class ActualCostOverrides:
    """用户填写的实际花费：day -> {activity_index -> cost}。

    按位置而非活动本身索引，因此行程整体替换时必须一并丢弃。
    """

    def __init__(self):
        self.records: Dict[int, Dict[int, float]] = {}

    def set_actual_cost(self, day: int, activity_index: int, cost: Optional[float]) -> None:
        # None 或非有限数值（NaN / inf）表示清除该条记录
        if cost is None or not math.isfinite(cost):
            day_costs = self.records.get(day)
            if day_costs is not None:
                day_costs.pop(activity_index, None)
            return
        self.records.setdefault(day, {})[activity_index] = float(cost)

    def get(self, day: int, activity_index: int) -> Optional[float]:
        return self.records.get(day, {}).get(activity_index)

    def for_day(self, day: int) -> Dict[int, float]:
        return dict(self.records.get(day, {}))

    def clear(self) -> None:
        self.records = {}

    def __len__(self) -> int:
        return sum(len(v) for v in self.records.values())

    def to_dict(self) -> Dict[int, Dict[int, float]]:
        return {day: dict(costs) for day, costs in self.records.items() if costs}
