# rentshop/routers/users.py
from fastapi import APIRouter, Depends

from rentshop.core.context import current_user_id

router = APIRouter(tags=["Users"])


@router.get("/me")
def read_me(user_id: str = Depends(current_user_id)):
    """The installation's opaque seller tag. Not an authenticated identity."""
    return {"user_id": user_id}
