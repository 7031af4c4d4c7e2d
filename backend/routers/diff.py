"""Diff API endpoints"""

from __future__ import annotations

from fastapi import APIRouter
from sse_starlette.sse import EventSourceResponse

from models.diff import DiffLine, DiffRequest, DiffResponse, DiffStats, StreamEvent
from services.config_manager import ConfigManager
from services.diff_engine import ConfigDiffEngine, collapse_unchanged, compute_stats, render_unified
from services.errors import DiffError

router = APIRouter()


def build_engine(request: DiffRequest) -> ConfigDiffEngine:
    """Create an engine from stored defaults overridden by the request options"""
    options = {
        **ConfigManager.get_instance().get_diff_options(),
        **(request.options or {}),
    }
    engine = ConfigDiffEngine(options)
    engine.set_configs(request.pre_config, request.post_config)
    return engine


def run_diff(engine: ConfigDiffEngine, context: bool) -> tuple[list[DiffLine], list[DiffLine], DiffStats]:
    """Return (full lines, lines to show, stats) from a single diff pass"""
    lines = engine.get_line_diff()
    shown = collapse_unchanged(lines, engine.options.context_lines) if context else lines
    return lines, shown, compute_stats(lines)


@router.post("", response_model=DiffResponse)
async def create_diff(request: DiffRequest, context: bool = False) -> DiffResponse:
    """Diff two configuration documents"""
    lines, shown, stats = run_diff(build_engine(request), context)

    return DiffResponse(lines=shown, stats=stats, unified_diff=render_unified(lines))


@router.post("/stats", response_model=DiffStats)
async def diff_stats(request: DiffRequest) -> DiffStats:
    """Get only the statistics for two configuration documents"""
    return build_engine(request).get_stats()


def _sse(event: StreamEvent) -> dict:
    return {"event": event.type, "data": event.model_dump_json(by_alias=True, exclude_none=True)}


@router.post("/stream")
async def diff_stream(request: DiffRequest, context: bool = False):
    """Stream the diff line by line (SSE)"""

    async def event_generator():
        try:
            _, shown, stats = run_diff(build_engine(request), context)

            for line in shown:
                yield _sse(StreamEvent(type="line", line=line))

            yield _sse(StreamEvent(type="stats", stats=stats))
            yield _sse(StreamEvent(type="done", done=True))

        except DiffError as e:
            yield _sse(StreamEvent(type="error", error=e.to_dict()))

    return EventSourceResponse(event_generator())
