from fastapi import APIRouter, Depends

from app.api import get_repository
from app.storage.repository import SqlRepository

router = APIRouter()


@router.get("/health")
def healthcheck(repository: SqlRepository = Depends(get_repository)) -> dict:
    repository.ping()
    return {"status": "ok"}
