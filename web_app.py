from fastapi import Depends, FastAPI, Form, Request
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.templating import Jinja2Templates
from pydantic import BaseModel
from tempfile import NamedTemporaryFile
from typing import List, Optional
import json
import logging
import os

from itinerary_planner import VERSION, build_structured_output, export_csv, export_json, google_search_url
from itinerary_planner.errors import ItineraryDecodeError
from itinerary_planner.llm import GeminiClient, warn_if_unconfigured
from itinerary_planner.models import DailyPlan, load_itinerary
from itinerary_planner.planner import ErrorKind, ItineraryPlanner, PlannerState


logger = logging.getLogger(__name__)

BASE_DIR = os.path.dirname(os.path.abspath(__file__))

app = FastAPI(title="AI Travel Itinerary Planner", version=VERSION)
app.mount("/static", StaticFiles(directory=os.path.join(BASE_DIR, "static")), name="static")
templates = Jinja2Templates(directory=os.path.join(BASE_DIR, "templates"))


@app.on_event("startup")
def _startup():
    warn_if_unconfigured()


_client: Optional[GeminiClient] = None


def get_client() -> GeminiClient:
    global _client
    if _client is None:
        _client = GeminiClient()
    return _client


def _parse_duration(text: str) -> Optional[int]:
    try:
        return int((text or "").strip())
    except ValueError:
        return None


def _parse_amount(text: str) -> Optional[float]:
    text = (text or "").strip()
    if not text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def _form_context(destination="", duration="", interests="", total_budget="", error=None) -> dict:
    return {
        "destination": destination,
        "duration": duration,
        "interests": interests,
        "total_budget": total_budget,
        "error": error,
    }


def _render_result(request: Request, planner: ItineraryPlanner):
    state = planner.state
    result = build_structured_output(state.itinerary, state.summary, planner.tracker().warnings())
    return templates.TemplateResponse(
        request,
        "result.html",
        {
            **_form_context(state.destination, state.duration or "", state.interests, state.total_budget_input),
            "result": result,
            "itinerary_json_str": json.dumps(planner.to_dict()["itinerary"] or [], ensure_ascii=False),
        },
    )


def _restore_planner(itinerary_json: str, destination: str, duration: str, interests: str, total_budget: str) -> ItineraryPlanner:
    try:
        data = json.loads(itinerary_json or "[]")
    except json.JSONDecodeError as e:
        raise ItineraryDecodeError(f"itinerary_json: {e}") from e
    state = PlannerState(
        destination=destination,
        duration=_parse_duration(duration),
        interests=interests,
        itinerary=load_itinerary(data),
    )
    planner = ItineraryPlanner(client=None, state=state)
    planner.set_total_budget_input(total_budget)
    return planner


@app.get("/")
def index(request: Request):
    return templates.TemplateResponse(request, "index.html", _form_context())


@app.post("/plan")
def plan(
    request: Request,
    destination: str = Form(""),
    duration: str = Form(""),
    interests: str = Form(""),
    total_budget: str = Form(""),
    client: GeminiClient = Depends(get_client),
):
    planner = ItineraryPlanner(client)
    planner.set_total_budget_input(total_budget)
    planner.generate(destination, _parse_duration(duration), interests)
    if planner.state.error:
        return templates.TemplateResponse(
            request,
            "index.html",
            _form_context(destination, duration, interests, total_budget, planner.state.error),
        )
    return _render_result(request, planner)


@app.post("/summary")
async def summary(request: Request):
    # Recompute totals from the submitted itinerary and actual costs; never regenerates
    form = await request.form()
    try:
        planner = _restore_planner(
            form.get("itinerary_json", "[]"),
            form.get("destination", ""),
            form.get("duration", ""),
            form.get("interests", ""),
            form.get("total_budget", ""),
        )
    except ItineraryDecodeError as e:
        return PlainTextResponse(f"Itinerary tidak valid: {e}", status_code=400)

    for key, value in form.items():
        if not key.startswith("actual_"):
            continue
        try:
            _, day, index = key.split("_")
            planner.tracker().record_actual_cost(int(day), int(index), _parse_amount(value))
        except (ValueError, KeyError, IndexError):
            logger.warning("Ignoring actual cost field %s", key)
    planner.recalculate()
    return _render_result(request, planner)


@app.get("/search")
def search(q: str = ""):
    return RedirectResponse(url=google_search_url(q), status_code=302)


@app.post("/export/json")
def export_json_route(
    itinerary_json: str = Form("[]"),
    destination: str = Form(""),
    duration: str = Form(""),
    interests: str = Form(""),
    total_budget: str = Form(""),
):
    try:
        planner = _restore_planner(itinerary_json, destination, duration, interests, total_budget)
    except ItineraryDecodeError as e:
        return PlainTextResponse(f"Itinerary tidak valid: {e}", status_code=400)
    with NamedTemporaryFile(delete=False, suffix=".json") as tmp:
        export_json(planner.state.itinerary, planner.state.summary, tmp.name)
        return FileResponse(tmp.name, media_type="application/json", filename="itinerary.json")


@app.post("/export/csv")
def export_csv_route(
    itinerary_json: str = Form("[]"),
    destination: str = Form(""),
    duration: str = Form(""),
    interests: str = Form(""),
    total_budget: str = Form(""),
):
    try:
        planner = _restore_planner(itinerary_json, destination, duration, interests, total_budget)
    except ItineraryDecodeError as e:
        return PlainTextResponse(f"Itinerary tidak valid: {e}", status_code=400)
    with NamedTemporaryFile(delete=False, suffix=".csv") as tmp:
        export_csv(planner.state.itinerary, planner.state.summary, tmp.name)
        return FileResponse(tmp.name, media_type="text/csv", filename="itinerary.csv")


# =============== JSON API ===============
@app.post("/api/plan")
def api_plan(
    destination: str = Form(""),
    duration: str = Form(""),
    interests: str = Form(""),
    total_budget: str = Form(""),
    client: GeminiClient = Depends(get_client),
):
    planner = ItineraryPlanner(client)
    planner.set_total_budget_input(total_budget)
    planner.generate(destination, _parse_duration(duration), interests)
    state = planner.state
    if state.error:
        status_code = 400 if state.error_kind == ErrorKind.VALIDATION else 502
        return JSONResponse({"error": state.error, "kind": state.error_kind.value}, status_code=status_code)
    return planner.to_dict()


class SummaryRequest(BaseModel):
    itinerary: List[DailyPlan] = []
    total_budget: Optional[float] = None
    duration: Optional[int] = None


@app.post("/api/summary")
def api_summary(body: SummaryRequest):
    planner = ItineraryPlanner(
        client=None,
        state=PlannerState(itinerary=body.itinerary, total_budget=body.total_budget, duration=body.duration),
    )
    return {
        "summary": planner.recalculate().model_dump(),
        "warnings": planner.tracker().warnings(),
    }
