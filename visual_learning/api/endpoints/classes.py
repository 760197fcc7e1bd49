# ============================================================================
# FILE: visual_learning/api/endpoints/classes.py
# ============================================================================
"""Class endpoints - listings, edits and admin moderation"""

from fastapi import APIRouter, Depends
from fastapi.security import HTTPAuthorizationCredentials
from typing import Any, Dict, List, Optional
import logging

from visual_learning.core.config import Settings
from visual_learning.core.database import CLASSES_COLLECTION, DocumentStore
from visual_learning.core.dependencies import collection_of, get_settings, get_store
from visual_learning.core.errors import internal_error, not_found
from visual_learning.core.guards import bearer_scheme, enforce_strict_role, strict_role
from visual_learning.schemas.classes import ClassCreate, ClassStatus, ClassUpdate, FeedbackRequest
from visual_learning.schemas.users import MessageResponse, Role
from visual_learning.utils.serializers import insert_result, serialize_documents, update_result
from visual_learning.utils.validators import parse_object_id, require_fields

logger = logging.getLogger(__name__)
router = APIRouter()

moderation_guards = [Depends(strict_role(Role.ADMIN))]

MODERATED_FIELDS = {"status", "feedback"}


async def _set_fields(store: DocumentStore, class_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
    """Shallow $set of ``fields`` on one class; fields not named are left alone"""
    object_id = parse_object_id(class_id)
    classes = collection_of(store, CLASSES_COLLECTION)
    try:
        result = await classes.update_one({"_id": object_id}, {"$set": fields})
    except Exception as e:
        logger.error(f"❌ Error updating class {class_id}: {e}")
        raise internal_error()

    if result.matched_count == 0:
        raise not_found("Class")
    logger.info(f"✓ Updated class {class_id}: {sorted(fields)}")
    return update_result(result)


@router.get("")
async def list_classes(store: DocumentStore = Depends(get_store)) -> List[Dict[str, Any]]:
    classes = collection_of(store, CLASSES_COLLECTION)
    try:
        return serialize_documents(await classes.find({}).to_list(None))
    except Exception as e:
        logger.error(f"❌ Error listing classes: {e}")
        raise internal_error()


@router.post("", dependencies=[Depends(strict_role(Role.INSTRUCTOR))])
async def create_class(new_class: ClassCreate, store: DocumentStore = Depends(get_store)) -> Dict[str, Any]:
    classes = collection_of(store, CLASSES_COLLECTION)
    try:
        result = await classes.insert_one(new_class.to_document())
    except Exception as e:
        logger.error(f"❌ Error creating class: {e}")
        raise internal_error()

    logger.info(f"✓ Created class {result.inserted_id} for {new_class.instructor_email}")
    return insert_result(result)


@router.patch("/{class_id}")
async def update_class(
    class_id: str,
    changes: ClassUpdate,
    store: DocumentStore = Depends(get_store),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    config: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    fields = require_fields(changes.model_dump(exclude_unset=True))
    # Status and feedback belong to moderation, whichever route writes them
    if MODERATED_FIELDS.intersection(fields):
        await enforce_strict_role(config, credentials, store, Role.ADMIN)
    return await _set_fields(store, class_id, fields)


@router.delete("/{class_id}", response_model=MessageResponse)
async def delete_class(class_id: str, store: DocumentStore = Depends(get_store)) -> MessageResponse:
    object_id = parse_object_id(class_id)
    classes = collection_of(store, CLASSES_COLLECTION)
    try:
        result = await classes.delete_one({"_id": object_id})
    except Exception as e:
        logger.error(f"❌ Error deleting class {class_id}: {e}")
        raise internal_error()

    if result.deleted_count != 1:
        raise not_found("Class")
    logger.info(f"✓ Deleted class {class_id}")
    return MessageResponse(message="Class deleted successfully")


# ==================== ADMIN MODERATION ====================

@router.patch("/{class_id}/approve", dependencies=moderation_guards)
async def approve_class(class_id: str, store: DocumentStore = Depends(get_store)) -> Dict[str, Any]:
    return await _set_fields(store, class_id, {"status": ClassStatus.APPROVED.value})


@router.patch("/{class_id}/deny", dependencies=moderation_guards)
async def deny_class(class_id: str, store: DocumentStore = Depends(get_store)) -> Dict[str, Any]:
    return await _set_fields(store, class_id, {"status": ClassStatus.DENIED.value})


@router.patch("/{class_id}/feedback", dependencies=moderation_guards)
async def send_feedback(
    class_id: str,
    request: FeedbackRequest,
    store: DocumentStore = Depends(get_store),
) -> Dict[str, Any]:
    return await _set_fields(store, class_id, {"feedback": request.feedback})
