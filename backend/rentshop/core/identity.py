"""
rentshop/core/identity.py
Opaque per-installation user token used as the seller/owner tag on listings.

Not a credential: there is no server-side verification and no uniqueness across devices.
When local storage is unavailable every call returns a fresh, non-persisted token, so
callers must tolerate identity churn in that mode.
"""
from typing import Optional

from rentshop.core.local_storage import LocalStorage
from rentshop.utils.ids import now_millis, random_suffix

USER_ID_KEY = "current_user_id"


def new_user_id() -> str:
    """`user_<epoch millis>_<9 base36 chars>`"""
    return f"user_{now_millis()}_{random_suffix()}"


def get_current_user_id(storage: Optional[LocalStorage]) -> str:
    if storage is None or not storage.available:
        return new_user_id()

    user_id = storage.get_item(USER_ID_KEY)
    if isinstance(user_id, str) and user_id:
        return user_id

    user_id = new_user_id()
    storage.set_item(USER_ID_KEY, user_id)
    return user_id
