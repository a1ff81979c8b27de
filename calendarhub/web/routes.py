"""JSON API routes for CalendarHub."""

import json
from datetime import date
from typing import Any, Optional

from aiohttp import BodyPartReader, web
from pydantic import ValidationError

from calendarhub.importer.files import InMemoryFile
from calendarhub.models import CalendarEvent, FileImportResult
from calendarhub.sources.exceptions import SourceNotFoundError
from calendarhub.state import transitions
from calendarhub.state.controller import CalendarController
from calendarhub.state.exceptions import EventNotFoundError
from calendarhub.state.transitions import EventInput, EventUpdate
from calendarhub.utils.logging import get_logger

from .middleware import get_request_id

logger = get_logger(__name__)

SOURCE_ID_FIELD = "source_id"


def _error(message: str, status: int, **extra: Any) -> web.Response:
    logger.warning("Request %s rejected with %d: %s", get_request_id(), status, message)
    return web.json_response({"error": message, **extra}, status=status)


def _event_payload(event: CalendarEvent) -> dict[str, Any]:
    return event.model_dump(mode="json")


def _result_payload(result: FileImportResult) -> dict[str, Any]:
    payload = result.model_dump(mode="json")
    payload["event_count"] = result.event_count
    return payload


async def _read_json(request: web.Request) -> Optional[Any]:
    try:
        return await request.json()
    except json.JSONDecodeError:
        return None


def register_api_routes(
    app: web.Application,
    controller: CalendarController,
    default_source_id: Optional[str] = None,
) -> None:
    """Register the calendar API on ``app``.

    Args:
        app: aiohttp web application
        controller: Owner of the calendar state served by the API
        default_source_id: Import target when an upload names no source
    """

    async def health(_request: web.Request) -> web.Response:
        """Liveness check with the number of stored events."""
        return web.json_response(
            {"status": "ok", "event_count": len(controller.state.events)}
        )

    async def list_sources(_request: web.Request) -> web.Response:
        return web.json_response(
            {"sources": [source.model_dump(mode="json") for source in controller.sources]}
        )

    async def toggle_source(request: web.Request) -> web.Response:
        source_id = request.match_info["source_id"]
        try:
            source = controller.toggle_source(source_id)
        except SourceNotFoundError as e:
            return _error(e.message, 404)
        return web.json_response({"source": source.model_dump(mode="json")})

    async def list_events(_request: web.Request) -> web.Response:
        return web.json_response(
            {"events": [_event_payload(event) for event in controller.visible_events()]}
        )

    async def create_event(request: web.Request) -> web.Response:
        data = await _read_json(request)
        if not isinstance(data, dict):
            return _error("invalid json", 400)
        try:
            event = controller.create_event(EventInput.model_validate(data))
        except ValidationError as e:
            return _error("invalid event", 400, details=json.loads(e.json()))
        except SourceNotFoundError as e:
            return _error(e.message, 400)
        return web.json_response({"event": _event_payload(event)}, status=201)

    async def update_event(request: web.Request) -> web.Response:
        event_id = request.match_info["event_id"]
        data = await _read_json(request)
        if not isinstance(data, dict):
            return _error("invalid json", 400)
        try:
            event = controller.update_event(event_id, EventUpdate.model_validate(data))
        except ValidationError as e:
            return _error("invalid event", 400, details=json.loads(e.json()))
        except EventNotFoundError as e:
            return _error(e.message, 404)
        except SourceNotFoundError as e:
            return _error(e.message, 400)
        return web.json_response({"event": _event_payload(event)})

    async def delete_event(request: web.Request) -> web.Response:
        event_id = request.match_info["event_id"]
        try:
            controller.delete_event(event_id)
        except EventNotFoundError as e:
            return _error(e.message, 404)
        return web.Response(status=204)

    async def month_grid(request: web.Request) -> web.Response:
        """Month grid for ``?year=&month=``, or the controller's current month."""
        state = controller.state
        if "year" in request.query or "month" in request.query:
            try:
                target = date(
                    int(request.query.get("year", state.current_date.year)),
                    int(request.query.get("month", state.current_date.month)),
                    1,
                )
            except ValueError:
                return _error("invalid year or month", 400)
            state = transitions.go_to_date(state, target)

        days = transitions.calendar_days(state)
        return web.json_response(
            {
                "year": state.current_date.year,
                "month": state.current_date.month,
                "days": [day.model_dump(mode="json") for day in days],
            }
        )

    async def navigate(request: web.Request) -> web.Response:
        data = await _read_json(request)
        direction = data.get("direction") if isinstance(data, dict) else None
        if direction not in ("prev", "next"):
            return _error("direction must be 'prev' or 'next'", 400)
        current = controller.navigate_month(direction)
        return web.json_response({"year": current.year, "month": current.month})

    async def import_files(request: web.Request) -> web.Response:
        """Import uploaded files; one result per file, in upload order."""
        if not request.content_type.startswith("multipart/"):
            return _error("expected multipart/form-data upload", 400)

        source_id: Optional[str] = None
        files: list[InMemoryFile] = []

        reader = await request.multipart()
        async for part in reader:
            if not isinstance(part, BodyPartReader):
                continue
            if part.filename:
                files.append(InMemoryFile(name=part.filename, data=bytes(await part.read())))
            elif part.name == SOURCE_ID_FIELD:
                source_id = (await part.text()).strip() or None

        if not files:
            return _error("no files uploaded", 400)

        logger.info("Import request with %d file(s), source=%s", len(files), source_id or "-")

        try:
            results = await controller.import_files(files, source_id or default_source_id)
        except SourceNotFoundError as e:
            return _error(e.message, 400)

        return web.json_response(
            {
                "results": [_result_payload(result) for result in results],
                "imported": sum(result.event_count for result in results if result.success),
            }
        )

    app.router.add_get("/api/health", health)
    app.router.add_get("/api/sources", list_sources)
    app.router.add_post("/api/sources/{source_id}/toggle", toggle_source)
    app.router.add_get("/api/events", list_events)
    app.router.add_post("/api/events", create_event)
    app.router.add_patch("/api/events/{event_id}", update_event)
    app.router.add_delete("/api/events/{event_id}", delete_event)
    app.router.add_get("/api/calendar", month_grid)
    app.router.add_post("/api/calendar/navigate", navigate)
    app.router.add_post("/api/import", import_files)
