from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import current_user_id, get_store
from app.schemas.career import AnswersRequest, AssessmentQuestion, Profile
from app.storage.store import CareerStore

router = APIRouter()


@router.get("/assessment/questions", response_model=list[AssessmentQuestion])
def list_questions(store: CareerStore = Depends(get_store)):
    return store.list_questions()


@router.put("/assessment/answers")
def submit_answers(
    payload: AnswersRequest,
    user_id: str = Depends(current_user_id),
    store: CareerStore = Depends(get_store),
):
    known = {question.id for question in store.list_questions()}
    unknown = sorted({answer.question_id for answer in payload.answers} - known)
    if unknown:
        raise HTTPException(status_code=400, detail=f"Unknown question ids: {', '.join(unknown)}")
    saved = store.upsert_answers(user_id, payload.answers)
    return {"saved": saved, "total_questions": len(known)}


@router.get("/profile", response_model=Profile)
def get_profile(
    user_id: str = Depends(current_user_id),
    store: CareerStore = Depends(get_store),
):
    profile = store.get_profile(user_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found.")
    return profile


@router.put("/profile", response_model=Profile)
def put_profile(
    payload: Profile,
    user_id: str = Depends(current_user_id),
    store: CareerStore = Depends(get_store),
):
    return store.upsert_profile(user_id, payload)
