import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .budget import BudgetSummary, calculate_summary
from .currency import parse_currency
from .errors import ItineraryDecodeError, MalformedResponseError, PlannerBusyError
from .expenses import BudgetTracker
from .models import Itinerary, dump_itinerary, parse_itinerary


logger = logging.getLogger(__name__)


ITINERARY_SCHEMA = {
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "day": {"type": "number", "description": "Day number of the itinerary."},
            "theme": {"type": "string", "description": "Brief theme or focus for the day."},
            "activities": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "name": {"type": "string", "description": "Name of the place or activity."},
                        "time": {
                            "type": "string",
                            "description": 'Opening/closing hours or duration (e.g., "09:00 - 17:00").',
                        },
                        "cost": {
                            "type": "string",
                            "description": 'Estimated cost in local currency (e.g., "50000 IDR").',
                        },
                        "checkPriceLink": {
                            "type": "string",
                            "description": 'Placeholder URL to check prices (e.g., "https://example.com/kinkakuji").',
                        },
                    },
                    "required": ["name", "time", "cost", "checkPriceLink"],
                },
            },
        },
        "required": ["day", "theme", "activities"],
    },
}

VALIDATION_ERROR = "Harap isi Tujuan Wisata dan Durasi (Hari)."
MALFORMED_RESPONSE_ERROR = (
    "Gagal memproses itinerary: Model mungkin mengembalikan format yang tidak lengkap atau tidak valid. "
    "Coba lagi atau sesuaikan prompt Anda."
)
DECODE_ERROR = (
    "Gagal memproses itinerary: struktur data dari model tidak sesuai ({details}). "
    "Coba lagi atau sesuaikan prompt Anda."
)
GENERATION_ERROR = "Gagal membuat itinerary: {message}"
GENERIC_FALLBACK = "Terjadi kesalahan tidak terduga."


class PlannerStatus(str, Enum):
    IDLE = "idle"
    GENERATING = "generating"
    SUCCESS = "success"
    FAILED = "failed"


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    MALFORMED_RESPONSE = "malformed_response"
    DECODE = "decode"
    GENERATION = "generation"


def build_prompt(destination: str, duration: int, interests: str) -> str:
    return (
        f'Buatkan itinerary perjalanan harian lengkap dalam bahasa Indonesia untuk destinasi "{destination}" '
        f'selama {duration} hari, dengan fokus pada "{interests}". '
        "Sertakan nama tempat/aktivitas, jam buka/tutup (atau perkiraan waktu), estimasi biaya dalam mata uang lokal "
        "(sertakan kode mata uang seperti 'IDR' atau 'JPY'), dan link placeholder untuk cek harga untuk setiap aktivitas. "
        "Format output harus JSON sesuai skema yang diberikan."
    )


@dataclass
class PlannerState:
    destination: str = ""
    duration: Optional[int] = None
    interests: str = ""
    total_budget_input: str = ""
    total_budget: Optional[float] = None
    itinerary: Optional[Itinerary] = None
    is_loading: bool = False
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    status: PlannerStatus = PlannerStatus.IDLE
    summary: BudgetSummary = field(default_factory=BudgetSummary)


class ItineraryPlanner:
    """Owns the planner state and runs one generation at a time.

    ``status`` keeps the outcome of the last generation (SUCCESS or FAILED);
    the planner is back to idle whenever ``is_loading`` is false.
    """

    def __init__(self, client, state: Optional[PlannerState] = None):
        self.client = client
        self.state = state or PlannerState()

    def tracker(self) -> BudgetTracker:
        return BudgetTracker(self.state.itinerary, self.state.total_budget, self.state.duration)

    def recalculate(self) -> BudgetSummary:
        self.state.summary = calculate_summary(self.state.itinerary, self.state.total_budget, self.state.duration)
        return self.state.summary

    def set_total_budget_input(self, text: str) -> BudgetSummary:
        self.state.total_budget_input = text or ""
        # Blank input means no budget yet, not a zero budget
        self.state.total_budget = parse_currency(text).amount if (text or "").strip() else None
        return self.recalculate()

    def record_actual_cost(self, day: int, index: int, amount: Optional[float]) -> BudgetSummary:
        self.tracker().record_actual_cost(day, index, amount)
        return self.recalculate()

    def _fail(self, kind: ErrorKind, message: str) -> None:
        self.state.error = message
        self.state.error_kind = kind
        self.state.status = PlannerStatus.FAILED

    def generate(self, destination=None, duration=None, interests=None) -> Optional[Itinerary]:
        state = self.state
        if state.is_loading:
            raise PlannerBusyError("an itinerary is already being generated")
        if destination is not None:
            state.destination = destination
        if duration is not None:
            state.duration = duration
        if interests is not None:
            state.interests = interests

        if not (state.destination or "").strip() or state.duration is None or state.duration <= 0:
            state.error = VALIDATION_ERROR
            state.error_kind = ErrorKind.VALIDATION
            return None

        state.is_loading = True
        state.status = PlannerStatus.GENERATING
        state.error = None
        state.error_kind = None
        state.itinerary = None
        state.summary = BudgetSummary()

        try:
            prompt = build_prompt(state.destination, state.duration, state.interests)
            response = self.client.generate_content(prompt, ITINERARY_SCHEMA)
            state.itinerary = parse_itinerary(response.text)
            self.recalculate()
            state.status = PlannerStatus.SUCCESS
            logger.info("Generated %d-day itinerary for %s", len(state.itinerary), state.destination)
        except MalformedResponseError:
            logger.exception("Error generating itinerary")
            self._fail(ErrorKind.MALFORMED_RESPONSE, MALFORMED_RESPONSE_ERROR)
        except ItineraryDecodeError as e:
            logger.exception("Error generating itinerary")
            self._fail(ErrorKind.DECODE, DECODE_ERROR.format(details=e))
        except Exception as e:
            logger.exception("Error generating itinerary")
            self._fail(ErrorKind.GENERATION, GENERATION_ERROR.format(message=str(e) or GENERIC_FALLBACK))
        finally:
            state.is_loading = False
        return state.itinerary

    def to_dict(self) -> dict:
        return {
            "itinerary": dump_itinerary(self.state.itinerary) if self.state.itinerary is not None else None,
            "summary": self.state.summary.model_dump(),
        }
