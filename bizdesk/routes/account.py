"""
BizDesk — Auth (signup / login) and company settings API routes.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from bizdesk.schemas.account import (
    DEFAULT_SETTINGS, SETTINGS_ID,
    LoginRequest, SettingsRequest, SignupRequest, UserResponse,
)
from bizdesk.services.activity import to_iso, utcnow
from bizdesk.services.auth import avatar_for, hash_password, permissions_for, verify_password
from bizdesk.services.store import DocumentStore, get_store

logger = logging.getLogger(__name__)
auth_router = APIRouter(prefix="/auth", tags=["auth"])
settings_router = APIRouter(prefix="/settings", tags=["settings"])

USERS = "users"


def _user_response(user: dict) -> UserResponse:
    """Public view of a stored user — never includes the password hash."""
    return UserResponse(
        id=user["id"],
        name=user.get("name", ""),
        email=user.get("email", ""),
        role=user.get("role", ""),
        avatar=user.get("avatar", ""),
        created_at=user.get("createdAt"),
        permissions=permissions_for(user.get("role")),
    )


# ═══════════════════════════════════════════════════════
#  Auth
# ═══════════════════════════════════════════════════════

@auth_router.post("/signup", status_code=201, response_model=UserResponse, response_model_by_alias=True)
async def signup(req: SignupRequest, store: DocumentStore = Depends(get_store)):
    try:
        existing = await store.query(USERS, where={"email": req.email}, limit=1)
    except Exception as e:
        logger.error(f"Signup error: {e}")
        raise HTTPException(500, "Internal Server Error")
    if existing:
        raise HTTPException(400, "User already exists")

    user = {
        "name": req.name,
        "email": req.email,
        "passwordHash": hash_password(req.password),
        "role": req.role.value,
        "avatar": avatar_for(req.name),
        "createdAt": to_iso(utcnow()),
    }
    try:
        user_id = await store.add(USERS, user)
    except Exception as e:
        logger.error(f"Signup error: {e}")
        raise HTTPException(500, "Internal Server Error")

    logger.info(f"👤 User signed up: {req.email} ({req.role.value})")
    return _user_response({"id": user_id, **user})


@auth_router.post("/login", response_model=UserResponse, response_model_by_alias=True)
async def login(req: LoginRequest, store: DocumentStore = Depends(get_store)):
    try:
        matches = await store.query(USERS, where={"email": req.email}, limit=1)
    except Exception as e:
        logger.error(f"Login error: {e}")
        raise HTTPException(500, "Internal Server Error")

    if not matches or not verify_password(req.password, matches[0].get("passwordHash", "")):
        raise HTTPException(401, "Invalid email or password")

    return _user_response(matches[0])


# ═══════════════════════════════════════════════════════
#  Settings (single global document)
# ═══════════════════════════════════════════════════════

@settings_router.get("")
async def get_settings(store: DocumentStore = Depends(get_store)):
    """Saved settings, or the defaults when nothing was saved yet."""
    try:
        doc = await store.get("settings", SETTINGS_ID)
    except Exception as e:
        logger.error(f"Error fetching settings: {e}")
        raise HTTPException(500, "Failed to fetch settings")
    if doc is None:
        return dict(DEFAULT_SETTINGS)
    doc.pop("id", None)
    return doc


@settings_router.post("")
async def save_settings(req: SettingsRequest, store: DocumentStore = Depends(get_store)):
    data = req.to_document(partial=True)
    try:
        await store.set("settings", SETTINGS_ID, data, merge=True)
    except Exception as e:
        logger.error(f"Error saving settings: {e}")
        raise HTTPException(500, "Failed to save settings")
    return {"success": True, **data}
