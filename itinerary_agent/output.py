from typing import Dict, Optional

from .costs import format_amount
from .models import BudgetSummary


def _budget_block(summary: Optional[BudgetSummary]) -> Optional[Dict]:
    if summary is None:
        return None
    cur = summary.currency
    block = {
        "currency": cur,
        "total_estimated_cost": format_amount(summary.total_estimated_cost, cur),
        "total_actual_cost": format_amount(summary.total_actual_cost, cur),
        "raw": summary.to_dict(),
    }
    # 仅在用户填写了总预算时展示剩余预算
    if summary.has_total_budget:
        block.update({
            "total_budget": format_amount(summary.total_budget, cur),
            "remaining_budget": format_amount(summary.remaining_budget, cur),
            "remaining_negative": summary.remaining_budget < 0,
            "average_daily_remaining_budget": format_amount(summary.average_daily_remaining_budget, cur),
            "average_daily_remaining_negative": summary.average_daily_remaining_budget < 0,
        })
    return block


def build_structured_output(session) -> Dict:
    """把会话状态整理为展示层使用的字典。"""
    request = {
        "destination": session.destination,
        "duration": session.duration,
        "interests": session.interests,
        "total_budget": session.total_budget,
    }

    data = session.itinerary.to_dict() if session.itinerary is not None else {
        "daily_itineraries": [],
        "raw_markdown": None,
    }
    # 用户填写的实际花费覆盖到对应位置的活动上
    for day in data["daily_itineraries"]:
        day_costs = session.overrides.for_day(day["day"])
        for index, item in enumerate(day["activities"]):
            if index in day_costs:
                item["actual_cost"] = day_costs[index]

    return {
        "request": request,
        "credential_selected": session.credential_selected,
        "busy": session.busy,
        "error": session.error,
        "daily_itineraries": data["daily_itineraries"],
        "raw_markdown": data["raw_markdown"],
        "budget_summary": _budget_block(session.summary()),
    }
