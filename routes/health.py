from fastapi import APIRouter, Depends

from routes.deps import get_store
from stores import ChatStore

router = APIRouter(tags=["health"])


@router.get("/health")
def health(store: ChatStore = Depends(get_store)):
    return {"status": "ok", **store.counts()}
