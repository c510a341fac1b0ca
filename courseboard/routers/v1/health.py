from fastapi import APIRouter, Request

router = APIRouter()

@router.get("/health")
async def health_check(request: Request):
    ready = getattr(request.app.state, "classroom_repo", None) is not None
    return {"status": "ok", "classroom": "ready" if ready else "not_configured"}
