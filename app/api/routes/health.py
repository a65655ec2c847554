from fastapi import APIRouter

from app.schemas.envelope import ApiResponse

router = APIRouter(tags=["health"])


@router.get("/", response_model=ApiResponse[None])
def health() -> ApiResponse[None]:
    return ApiResponse(message="The API is working")
