from typing import Mapping, Optional, Union

from .costs import parse_cost
from .expenses import ActualCostOverrides
from .models import BudgetSummary, Itinerary


Overrides = Union[ActualCostOverrides, Mapping[int, Mapping[int, float]]]


def _override(overrides: Optional[Overrides], day: int, index: int) -> Optional[float]:
    if overrides is None:
        return None
    if isinstance(overrides, ActualCostOverrides):
        return overrides.get(day, index)
    return (overrides.get(day) or {}).get(index)


def summarize(
    itinerary: Itinerary,
    overrides: Optional[Overrides] = None,
    total_budget: Optional[float] = None,
    duration: int = 1,
) -> BudgetSummary:
    """汇总估算费用与实际费用，并计算剩余预算。

    无法解析的费用按 0 计入；币种取最后一次成功解析的值（假定全程单一币种）。
    未提供总预算时剩余预算恒为 0。
    """
    total_estimated = 0.0
    total_actual = 0.0
    currency = ""

    for day_plan in itinerary.daily_itineraries:
        for index, activity in enumerate(day_plan.activities):
            estimated = parse_cost(activity.cost)
            if estimated:
                total_estimated += estimated.amount
                currency = estimated.currency

            actual = _override(overrides, day_plan.day, index)
            if actual is None:
                actual = activity.actual_cost
            if actual is not None:
                total_actual += actual
            elif estimated:
                total_actual += estimated.amount

    # 天数为 0 时按 1 天计算，避免除零
    days = max(int(duration or 0), 1)
    remaining = (total_budget if total_budget is not None else total_actual) - total_actual

    return BudgetSummary(
        total_estimated_cost=total_estimated,
        total_actual_cost=total_actual,
        remaining_budget=remaining,
        average_daily_remaining_budget=remaining / days,
        currency=currency,
        total_budget=total_budget,
    )
