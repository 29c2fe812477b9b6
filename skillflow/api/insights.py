"""HTTP route handlers for heuristic skill intelligence."""

from __future__ import annotations

import random
from functools import lru_cache
from typing import List

from fastapi import APIRouter, Depends, Query

from skillflow.analytics.intelligence import SkillIntelligence
from skillflow.config import get_settings

from .schemas import (
    CareerPathModel,
    DemandPredictionModel,
    MarketInsightModel,
    SkillCorrelationModel,
    SkillGapModel,
    SkillGapRequestModel,
    SkillListRequestModel,
    TimeframeLiteral,
)


router = APIRouter(prefix="/v1", tags=["insights"])


@lru_cache
def get_skill_intelligence() -> SkillIntelligence:
    return SkillIntelligence(random.Random(get_settings().demo_seed))


@router.get(
    "/skills/{skill}/correlations", response_model=List[SkillCorrelationModel]
)
async def skill_correlations(
    skill: str, intelligence: SkillIntelligence = Depends(get_skill_intelligence)
):
    return [
        SkillCorrelationModel.model_validate(item)
        for item in intelligence.analyze_skill_correlations(skill)
    ]


@router.get("/skills/{skill}/demand", response_model=DemandPredictionModel)
async def skill_demand(
    skill: str,
    timeframe: TimeframeLiteral = Query("medium"),
    intelligence: SkillIntelligence = Depends(get_skill_intelligence),
):
    return DemandPredictionModel.model_validate(
        intelligence.predict_skill_demand(skill, timeframe)
    )


@router.post("/career-paths", response_model=List[CareerPathModel])
async def career_paths(
    request: SkillListRequestModel,
    intelligence: SkillIntelligence = Depends(get_skill_intelligence),
):
    return [
        CareerPathModel.from_domain(path)
        for path in intelligence.generate_career_paths(request.skills)
    ]


@router.post("/skill-gaps", response_model=List[SkillGapModel])
async def skill_gaps(
    request: SkillGapRequestModel,
    intelligence: SkillIntelligence = Depends(get_skill_intelligence),
):
    return [
        SkillGapModel.model_validate(gap)
        for gap in intelligence.identify_skill_gaps(request.skills, request.target_role)
    ]


@router.post("/market-insights", response_model=List[MarketInsightModel])
async def market_insights(
    request: SkillListRequestModel,
    intelligence: SkillIntelligence = Depends(get_skill_intelligence),
):
    return [
        MarketInsightModel.model_validate(insight)
        for insight in intelligence.generate_market_insights(request.skills)
    ]
