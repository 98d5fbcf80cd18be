from fastapi import APIRouter, Depends, HTTPException, Request

from app.ai.types import AIClient
from app.api.deps import current_user_id, get_completion_client, get_store
from app.career.colleges import match_colleges
from app.core.rate_limit import rate_limit
from app.schemas.career import AnalysisResult, CollegeMatchResponse, Recommendation
from app.services.analysis_service import analyze_career
from app.storage.store import CareerStore

router = APIRouter()


@router.post("/career/analyze", response_model=AnalysisResult)
@rate_limit()
async def analyze(
    request: Request,
    user_id: str = Depends(current_user_id),
    store: CareerStore = Depends(get_store),
    ai_client: AIClient = Depends(get_completion_client),
):
    _ = request
    return await analyze_career(user_id, store=store, ai_client=ai_client)


@router.get("/career/recommendation", response_model=Recommendation)
def latest_recommendation(
    user_id: str = Depends(current_user_id),
    store: CareerStore = Depends(get_store),
):
    recommendation = store.get_recommendation(user_id)
    if recommendation is None:
        raise HTTPException(status_code=404, detail="No career recommendation yet. Run the analysis first.")
    return recommendation


@router.get("/colleges", response_model=CollegeMatchResponse)
def colleges(
    user_id: str = Depends(current_user_id),
    store: CareerStore = Depends(get_store),
):
    profile = store.get_profile(user_id)
    recommendation = store.get_recommendation(user_id)
    domain = recommendation.dominant_domain if recommendation else "Technology"
    city = (profile.location_city if profile else None) or ""
    state = (profile.location_state if profile else None) or ""
    return CollegeMatchResponse(
        domain=domain,
        location_city=city,
        location_state=state,
        colleges=match_colleges(store.list_colleges(), domain, state),
    )
