import logging
import math
import threading
from typing import Callable, Optional

from . import llm
from .budget import summarize
from .expenses import ActualCostOverrides
from .llm import GenerationError, is_credential_error
from .models import BudgetSummary, Itinerary
from .parser import parse_itinerary


logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "Please fill in all required fields."
CREDENTIAL_ERROR_MESSAGE = (
    "Kunci API tidak ditemukan atau tidak valid. "
    "Silakan pilih kunci API yang valid dari proyek GCP berbayar."
)
GENERATION_ERROR_MESSAGE = "Gagal membuat rencana perjalanan. Silakan coba lagi. Detail: {detail}"


class InputValidationError(ValueError):
    pass


# total_budget 未传入时保持原值
_KEEP = object()


class PlannerSession:
    """One user's planning session: form fields, gating flags, current itinerary and cost edits.

    A new submission replaces the itinerary and the actual-cost overrides
    together, since overrides are keyed by (day, position) only.
    """

    def __init__(self, generate: Optional[Callable[..., llm.GenerationResponse]] = None):
        self._generate = generate or llm.generate_itinerary_response
        self._lock = threading.Lock()

        self.destination = ""
        self.duration = 3
        self.interests = ""
        self.total_budget: Optional[float] = None

        self.itinerary: Optional[Itinerary] = None
        self.overrides = ActualCostOverrides()
        self.busy = False
        self.refused_busy = False
        self.error: Optional[str] = None

        self.api_key: Optional[str] = None
        self.credential_selected = False

    def check_credentials(self) -> bool:
        """页面加载时检查是否已有可用的 API Key。"""
        self.credential_selected = llm.llm_client_ok(self.api_key)
        return self.credential_selected

    def select_credentials(self, api_key: Optional[str] = None) -> None:
        if api_key:
            self.api_key = api_key
        # 与选择对话框一致：选择后即视为成功
        self.credential_selected = True

    def update_request(
        self,
        destination: Optional[str] = None,
        duration: Optional[int] = None,
        interests: Optional[str] = None,
    ) -> None:
        if destination is not None:
            self.destination = destination
        if duration is not None:
            self.duration = duration
        if interests is not None:
            self.interests = interests

    def set_total_budget(self, total_budget: Optional[float]) -> None:
        # 非有限数值（NaN / inf）视为未填写
        if total_budget is not None and not math.isfinite(total_budget):
            total_budget = None
        self.total_budget = total_budget

    def validate_request(self) -> None:
        if not self.destination or not self.duration or not self.interests:
            raise InputValidationError(MISSING_FIELDS_MESSAGE)
        if self.duration < 1:
            raise InputValidationError(MISSING_FIELDS_MESSAGE)

    def submit(
        self,
        destination: Optional[str] = None,
        duration: Optional[int] = None,
        interests: Optional[str] = None,
        total_budget=_KEEP,
    ) -> bool:
        """Generate and parse a new itinerary. Returns False when refused or failed; see ``error``.

        Form values passed here are applied only once the busy gate is taken,
        so a refused submission never touches the running request's fields.
        """
        with self._lock:
            if self.busy:
                logger.info("submission ignored: previous request still running")
                self.refused_busy = True
                return False
            self.refused_busy = False
            self.update_request(destination=destination, duration=duration, interests=interests)
            if total_budget is not _KEEP:
                self.set_total_budget(total_budget)
            try:
                self.validate_request()
            except InputValidationError as e:
                self.error = str(e)
                return False
            self.busy = True

        self.error = None
        self.itinerary = None
        self.overrides.clear()
        try:
            logger.info("generating itinerary destination=%r days=%s", self.destination, self.duration)
            resp = self._generate(self.destination, self.duration, self.interests, api_key=self.api_key)
            days = parse_itinerary(resp.text, resp.citations)
            self.itinerary = Itinerary(daily_itineraries=days, raw_markdown=resp.text)
            logger.info("itinerary ready: %d day(s), %d activities", len(days), self.itinerary.activity_count)
            return True
        except GenerationError as e:
            logger.warning("itinerary generation failed: %s", e)
            if is_credential_error(e):
                self.error = CREDENTIAL_ERROR_MESSAGE
                self.credential_selected = False
                logger.info("credential selection reset")
            else:
                self.error = GENERATION_ERROR_MESSAGE.format(detail=e.message)
            return False
        finally:
            with self._lock:
                self.busy = False

    def set_actual_cost(self, day: int, activity_index: int, cost: Optional[float]) -> None:
        self.overrides.set_actual_cost(day, activity_index, cost)

    def summary(self) -> Optional[BudgetSummary]:
        if not self.itinerary or not self.itinerary.daily_itineraries:
            return None
        return summarize(self.itinerary, self.overrides, self.total_budget, self.duration)
