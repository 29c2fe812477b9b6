"""HTTP route handlers for search and profile analytics."""

from __future__ import annotations

import logging
from dataclasses import asdict
from json import JSONDecodeError
from typing import Any, Dict, List, Type

import anyio
import httpx
import orjson
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, StreamingResponse
from pydantic import BaseModel, TypeAdapter, ValidationError

from skillflow.analytics.models import Profile
from skillflow.analytics.service import build_report
from skillflow.config import Settings, get_settings
from skillflow.store.exceptions import ProfileNotFoundError
from skillflow.store.provider import DemoProfileProvider, get_profile_provider

from .schemas import (
    AnalyzeRequestModel,
    AnalyzeResponseModel,
    LocationStatModel,
    ProfileModel,
    ProfileSummaryModel,
    SearchRequestModel,
    SearchResponseModel,
    SkillStatModel,
)


logger = logging.getLogger(__name__)

router = APIRouter()

EXAMPLE_QUERIES = [
    "python - Python developers and data scientists",
    "javascript - JavaScript and Node.js developers",
    "react - React and frontend developers",
    "data scientist - Data science professionals",
    "devops - DevOps and infrastructure engineers",
]

_profile_list_adapter = TypeAdapter(List[ProfileModel])


async def _load_request_model(
    http_request: Request, model_cls: Type[BaseModel], settings: Settings
) -> BaseModel:
    header_length = http_request.headers.get("content-length")
    if header_length:
        try:
            content_length = int(header_length)
        except ValueError:
            content_length = None
        else:
            if content_length > settings.max_payload_bytes:
                raise HTTPException(
                    status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                    detail={
                        "error": "payload_too_large",
                        "limit_bytes": settings.max_payload_bytes,
                    },
                )

    body_bytes = await http_request.body()
    if body_bytes and len(body_bytes) > settings.max_payload_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail={
                "error": "payload_too_large",
                "limit_bytes": settings.max_payload_bytes,
            },
        )

    if not body_bytes:
        data: Dict[str, Any] = {}
    else:
        try:
            data = orjson.loads(body_bytes)
        except orjson.JSONDecodeError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={"error": "invalid_json", "details": str(exc)},
            ) from exc

    try:
        return model_cls.model_validate(data)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors()) from exc


async def load_search_request(http_request: Request) -> SearchRequestModel:
    settings = get_settings()
    return await _load_request_model(http_request, SearchRequestModel, settings)


async def load_analyze_request(http_request: Request) -> AnalyzeRequestModel:
    settings = get_settings()
    return await _load_request_model(http_request, AnalyzeRequestModel, settings)


async def _fetch_json(url: str) -> Any:
    timeout = httpx.Timeout(10.0, read=30.0)
    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            response = await client.get(url)
            response.raise_for_status()
    except httpx.HTTPError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"error": "profile_source_error", "details": str(exc)},
        ) from exc

    content_type = response.headers.get("content-type", "")
    if "application/json" not in content_type and not url.lower().endswith(".json"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "invalid_json_source",
                "details": "URL did not return JSON content.",
            },
        )
    try:
        return response.json()
    except JSONDecodeError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "invalid_json", "details": str(exc)},
        ) from exc


def _parse_remote_profiles(data: Any) -> List[ProfileModel]:
    if isinstance(data, dict) and "profiles" in data:
        data = data["profiles"]
    try:
        return _profile_list_adapter.validate_python(data)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors()) from exc


def _enforce_profile_limit(count: int, settings: Settings) -> None:
    if count > settings.max_profiles_per_request:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail={
                "error": "too_many_profiles",
                "limit": settings.max_profiles_per_request,
            },
        )


def _no_results_response(query: str) -> SearchResponseModel:
    return SearchResponseModel(
        total_profiles=0,
        skill_analytics=[],
        location_distribution=[],
        profiles=[],
        message=(
            f'No demo profiles found for "{query}". '
            'Try: "python", "javascript", "react", "data scientist"'
        ),
    )


@router.get("/v1/search")
async def search_info() -> Dict[str, Any]:
    return {
        "message": "SkillFlow Analytics Demo API",
        "available_queries": EXAMPLE_QUERIES,
        "note": "This demo serves synthetic profiles shaped like real talent data.",
        "is_demo": True,
    }


@router.post("/v1/search")
async def search(
    search_request: SearchRequestModel = Depends(load_search_request),
    provider: DemoProfileProvider = Depends(get_profile_provider),
):
    settings = get_settings()
    query = search_request.query
    try:
        results = await provider.search_people(query, search_request.limit)
        if not results:
            return JSONResponse(content=_no_results_response(query).model_dump())

        logger.info(f"Found {len(results)} demo profiles for {query!r}")
        usernames = [result.username for result in results if result.username]
        profiles = await provider.batch_get_profiles(
            usernames[: settings.genome_batch_limit]
        )
        report = build_report(profiles, settings)
        logger.info(f"Analyzed {len(profiles)} detailed profiles")
    except HTTPException:
        raise
    except Exception as exc:
        logger.error(f"Demo search failed: {exc}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "search_failed", "details": str(exc), "is_demo": True},
        ) from exc

    skill_models = [SkillStatModel.from_domain(stat) for stat in report.skill_stats]
    location_models = [
        LocationStatModel.model_validate(stat) for stat in report.location_stats
    ]
    summaries = [ProfileSummaryModel.from_domain(profile) for profile in profiles]
    demo_message = (
        f'Showing realistic demo data for "{query}". This demonstrates the full '
        "analytics capabilities with a talent-platform data structure."
    )

    if search_request.stream:

        async def event_stream():
            for skill_model in skill_models:
                skill_payload = {"phase": "skill", "skill": skill_model.model_dump()}
                yield f"data: {orjson.dumps(skill_payload).decode()}\n\n"
                await anyio.sleep(settings.streaming_chunk_delay_ms / 1000)
            footer = {
                "phase": "complete",
                "total_profiles": len(results),
                "location_distribution": [m.model_dump() for m in location_models],
                "profiles": [m.model_dump() for m in summaries],
                "analysis_stats": report.metadata,
                "is_demo": True,
            }
            yield f"data: {orjson.dumps(footer).decode()}\n\n"

        return StreamingResponse(event_stream(), media_type="text/event-stream")

    response_payload = SearchResponseModel(
        total_profiles=len(results),
        skill_analytics=skill_models,
        location_distribution=location_models,
        profiles=summaries,
        analysis_stats=report.metadata,
        demo_message=demo_message,
    )
    return JSONResponse(content=response_payload.model_dump())


@router.post("/v1/analyze", response_model=AnalyzeResponseModel)
async def analyze(
    analyze_request: AnalyzeRequestModel = Depends(load_analyze_request),
):
    settings = get_settings()
    profile_models = analyze_request.profiles
    if profile_models is None and analyze_request.profiles_url:
        profile_models = _parse_remote_profiles(
            await _fetch_json(str(analyze_request.profiles_url))
        )

    _enforce_profile_limit(len(profile_models), settings)
    profiles: List[Profile] = [model.to_domain() for model in profile_models]
    report = build_report(profiles, settings)
    return AnalyzeResponseModel.from_domain(report)


@router.get("/v1/profiles/{username}", response_model=ProfileModel)
async def get_profile(
    username: str,
    provider: DemoProfileProvider = Depends(get_profile_provider),
):
    try:
        profile = await provider.get_profile(username)
    except ProfileNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "profile_not_found", "username": exc.username},
        ) from exc
    return ProfileModel.model_validate(asdict(profile))
