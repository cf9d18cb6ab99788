# ABOUTME: ASGI web entry point for the weather lookup UI.
# ABOUTME: Starlette app exposing the controller's keystroke, search and day-selection actions as JSON.

import json
import logging
from contextlib import asynccontextmanager

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from weather_lookup.config import load_settings
from weather_lookup.controller import WeatherLookupController
from weather_lookup.deps import LookupDeps, create_http_client
from weather_lookup.presentation import render_view

logger = logging.getLogger(__name__)


async def read_json_body(request: Request) -> dict | None:
    """Parse a JSON object body. Empty bodies read as {}, anything else non-object as None."""
    body = await request.body()
    if not body:
        return {}
    try:
        data = json.loads(body)
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


def _bad_request(detail: str) -> JSONResponse:
    return JSONResponse({"detail": detail}, status_code=400)


def create_app(deps: LookupDeps | None = None) -> Starlette:
    """Build the ASGI app around one controller, i.e. one browsing session."""
    if deps is None:
        settings = load_settings()
        deps = LookupDeps(http_client=create_http_client(settings.http_timeout), settings=settings)
    controller = WeatherLookupController(deps)

    def view() -> JSONResponse:
        return JSONResponse(render_view(controller.state, controller.day_groups))

    async def get_state(request: Request) -> JSONResponse:
        return view()

    async def post_query(request: Request) -> JSONResponse:
        data = await read_json_body(request)
        if data is None or not isinstance(data.get("query"), str):
            return _bad_request("expected a JSON object with a string 'query'")
        controller.set_query(data["query"])
        return view()

    async def show_suggestions(request: Request) -> JSONResponse:
        controller.show_suggestions()
        return view()

    async def hide_suggestions(request: Request) -> JSONResponse:
        controller.hide_suggestions()
        return view()

    async def pick_suggestion(request: Request) -> JSONResponse:
        index = request.path_params["index"]
        if not 0 <= index < len(controller.state.suggestions):
            return JSONResponse({"detail": f"no suggestion at index {index}"}, status_code=404)
        await controller.select_suggestion(index)
        return view()

    async def search(request: Request) -> JSONResponse:
        data = await read_json_body(request)
        if data is None:
            return _bad_request("expected a JSON object body")
        city = data.get("city")
        if city is not None and not isinstance(city, str):
            return _bad_request("'city' must be a string")
        await controller.fetch_weather(city)
        return view()

    async def select_day(request: Request) -> JSONResponse:
        try:
            controller.select_day(request.path_params["index"])
        except IndexError as e:
            return _bad_request(str(e))
        return view()

    @asynccontextmanager
    async def lifespan(app: Starlette):
        logger.info("Weather lookup ready, debounce %.2fs", deps.settings.debounce_seconds)
        yield
        controller.close()
        await deps.http_client.aclose()

    app = Starlette(
        routes=[
            Route("/api/state", get_state, methods=["GET"]),
            Route("/api/query", post_query, methods=["POST"]),
            Route("/api/suggestions/show", show_suggestions, methods=["POST"]),
            Route("/api/suggestions/hide", hide_suggestions, methods=["POST"]),
            Route("/api/suggestions/{index:int}", pick_suggestion, methods=["POST"]),
            Route("/api/search", search, methods=["POST"]),
            Route("/api/day/{index:int}", select_day, methods=["POST"]),
        ],
        lifespan=lifespan,
    )
    app.state.controller = controller
    return app


app = create_app()
