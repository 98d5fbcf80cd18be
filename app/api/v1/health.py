from fastapi import APIRouter

router = APIRouter()


@router.get("/health", summary="Health Check", description="Check that the career guidance API is up.")
async def health_check():
    return {"status": "healthy", "service": "career-guidance"}
