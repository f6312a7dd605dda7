VERSION = "0.1.0"

from .costs import parse_cost, format_amount
from .parser import parse_itinerary
from .budget import summarize
from .expenses import ActualCostOverrides
from .llm import GenerationError, generate_itinerary_text, is_credential_error
from .models import Activity, BudgetSummary, DailyItinerary, Itinerary, ParsedCost, Source
from .output import build_structured_output
from .planner import InputValidationError, PlannerSession


def plan_trip(destination: str, duration_days: int, interests: str, total_budget=None):
    session = PlannerSession()
    session.check_credentials()
    session.submit(destination=destination, duration=duration_days, interests=interests, total_budget=total_budget)
    return build_structured_output(session)
