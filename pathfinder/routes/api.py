import logging
from fastapi import APIRouter, Request, Depends
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from pathfinder.ai.gateway import RecommendationClient, RecommendationError, get_recommendation_client
from pathfinder.core.config import settings
from pathfinder.core.limiter import limiter
from pathfinder.schemas.chat import RecommendRequest
from pathfinder.schemas.profile import SchoolProfileIn, CollegeProfileIn
from pathfinder.services.recommendation import recommend

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

PROFILE_INPUTS = {
    "school": SchoolProfileIn,
    "college": CollegeProfileIn,
}


async def _recommend_response(kind: str, payload: RecommendRequest, client: RecommendationClient) -> JSONResponse:
    try:
        profile = PROFILE_INPUTS[kind](**payload.profileData)
    except ValidationError as e:
        fields = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
        return JSONResponse({"error": f"Invalid profile: {', '.join(fields)}"}, status_code=422)

    try:
        result = await recommend(kind, profile.model_dump(), client)
    except RecommendationError as e:
        return JSONResponse({"error": e.message}, status_code=e.status_code)

    return JSONResponse(result.to_json())


@router.post("/recommend-school", response_class=JSONResponse)
@limiter.limit(settings.RECOMMENDATION_RATE_LIMIT)
async def recommend_school(
    request: Request,
    payload: RecommendRequest,
    client: RecommendationClient = Depends(get_recommendation_client)
):
    return await _recommend_response("school", payload, client)


@router.post("/recommend-college", response_class=JSONResponse)
@limiter.limit(settings.RECOMMENDATION_RATE_LIMIT)
async def recommend_college(
    request: Request,
    payload: RecommendRequest,
    client: RecommendationClient = Depends(get_recommendation_client)
):
    return await _recommend_response("college", payload, client)
