# ============================================================================
# FILE: visual_learning/api/endpoints/users.py
# ============================================================================
"""User endpoints - registration, role checks and promotions"""

from fastapi import APIRouter, Depends
from typing import Any, Dict, List
import logging

from visual_learning.core.database import DocumentStore, USERS_COLLECTION
from visual_learning.core.dependencies import collection_of, get_store
from visual_learning.core.errors import internal_error, not_found
from visual_learning.core.guards import RequestContext, require_token, strict_role
from visual_learning.schemas.users import (
    AdminCheckResponse,
    InstructorCheckResponse,
    MessageResponse,
    Role,
    UserCreate,
)
from visual_learning.utils.serializers import insert_result, serialize_documents, update_result
from visual_learning.utils.validators import normalize_email, parse_object_id

logger = logging.getLogger(__name__)
router = APIRouter()

USER_EXISTS_MESSAGE = "User already exists"


@router.get("")
async def list_users(store: DocumentStore = Depends(get_store)) -> List[Dict[str, Any]]:
    users = collection_of(store, USERS_COLLECTION)
    try:
        return serialize_documents(await users.find().to_list(None))
    except Exception as e:
        logger.error(f"❌ Error listing users: {e}")
        raise internal_error()


@router.post("")
async def create_user(user: UserCreate, store: DocumentStore = Depends(get_store)) -> Dict[str, Any]:
    """Register a user unless one with the same email is already stored"""
    users = collection_of(store, USERS_COLLECTION)
    try:
        existing = await users.find_one({"email": user.email})
        if existing:
            logger.info(f"User already registered: {user.email}")
            return {"message": USER_EXISTS_MESSAGE}

        result = await users.insert_one(user.to_document())
        logger.info(f"✓ Registered user {user.email}: {result.inserted_id}")
        return insert_result(result)
    except Exception as e:
        logger.error(f"❌ Error creating user: {e}")
        raise internal_error()


async def _has_role(store: DocumentStore, context: RequestContext, email: str, role: Role) -> bool:
    # A caller may only ask about their own email
    email = normalize_email(email)
    if context.email != email:
        return False
    users = collection_of(store, USERS_COLLECTION)
    try:
        user = await users.find_one({"email": email})
    except Exception as e:
        logger.error(f"❌ Error reading role for {email}: {e}")
        raise internal_error()
    return bool(user) and user.get("role") == role.value


async def _promote(store: DocumentStore, user_id: str, role: Role) -> Dict[str, Any]:
    object_id = parse_object_id(user_id)
    users = collection_of(store, USERS_COLLECTION)
    try:
        result = await users.update_one({"_id": object_id}, {"$set": {"role": role.value}})
    except Exception as e:
        logger.error(f"❌ Error promoting user {user_id}: {e}")
        raise internal_error()

    if result.matched_count == 0:
        raise not_found("User")
    logger.info(f"✓ User {user_id} is now {role.value}")
    return update_result(result)


@router.get("/instructor/{email}", response_model=InstructorCheckResponse)
async def is_instructor(
    email: str,
    context: RequestContext = Depends(require_token),
    store: DocumentStore = Depends(get_store),
) -> InstructorCheckResponse:
    return InstructorCheckResponse(instructor=await _has_role(store, context, email, Role.INSTRUCTOR))


@router.patch("/instructor/{user_id}", dependencies=[Depends(strict_role(Role.ADMIN))])
async def make_instructor(user_id: str, store: DocumentStore = Depends(get_store)) -> Dict[str, Any]:
    return await _promote(store, user_id, Role.INSTRUCTOR)


@router.get("/admin/{email}", response_model=AdminCheckResponse)
async def is_admin(
    email: str,
    context: RequestContext = Depends(require_token),
    store: DocumentStore = Depends(get_store),
) -> AdminCheckResponse:
    return AdminCheckResponse(admin=await _has_role(store, context, email, Role.ADMIN))


@router.patch("/admin/{user_id}", dependencies=[Depends(strict_role(Role.ADMIN))])
async def make_admin(user_id: str, store: DocumentStore = Depends(get_store)) -> Dict[str, Any]:
    return await _promote(store, user_id, Role.ADMIN)


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(user_id: str, store: DocumentStore = Depends(get_store)) -> MessageResponse:
    object_id = parse_object_id(user_id)
    users = collection_of(store, USERS_COLLECTION)
    try:
        result = await users.delete_one({"_id": object_id})
    except Exception as e:
        logger.error(f"❌ Error deleting user {user_id}: {e}")
        raise internal_error()

    if result.deleted_count != 1:
        raise not_found("User")
    logger.info(f"✓ Deleted user {user_id}")
    return MessageResponse(message="User deleted successfully")
