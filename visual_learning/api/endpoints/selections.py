# ============================================================================
# FILE: visual_learning/api/endpoints/selections.py
# ============================================================================
"""Selected-class (enrollment cart) endpoints"""

from fastapi import APIRouter, Depends
from typing import Any, Dict, List
import logging

from visual_learning.core.database import DocumentStore, SELECTIONS_COLLECTION
from visual_learning.core.dependencies import collection_of, get_store
from visual_learning.core.errors import internal_error, not_found
from visual_learning.schemas.payments import SelectionCreate
from visual_learning.schemas.users import MessageResponse
from visual_learning.utils.serializers import insert_result, serialize_document, serialize_documents
from visual_learning.utils.validators import parse_object_id

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("")
async def select_class(selection: SelectionCreate, store: DocumentStore = Depends(get_store)) -> Dict[str, Any]:
    selections = collection_of(store, SELECTIONS_COLLECTION)
    try:
        result = await selections.insert_one(selection.model_dump(exclude_none=True))
    except Exception as e:
        logger.error(f"❌ Error selecting class {selection.class_id}: {e}")
        raise internal_error()

    logger.info(f"✓ {selection.email} selected class {selection.class_id}")
    return insert_result(result)


@router.get("")
async def list_selections(store: DocumentStore = Depends(get_store)) -> List[Dict[str, Any]]:
    selections = collection_of(store, SELECTIONS_COLLECTION)
    try:
        return serialize_documents(await selections.find().to_list(None))
    except Exception as e:
        logger.error(f"❌ Error listing selected classes: {e}")
        raise internal_error()


@router.get("/{selection_id}")
async def get_selection(selection_id: str, store: DocumentStore = Depends(get_store)) -> Dict[str, Any]:
    object_id = parse_object_id(selection_id)
    selections = collection_of(store, SELECTIONS_COLLECTION)
    try:
        selection = await selections.find_one({"_id": object_id})
    except Exception as e:
        logger.error(f"❌ Error reading selected class {selection_id}: {e}")
        raise internal_error()

    if selection is None:
        raise not_found("Selected class")
    return serialize_document(selection)


@router.delete("/{selection_id}", response_model=MessageResponse)
async def delete_selection(selection_id: str, store: DocumentStore = Depends(get_store)) -> MessageResponse:
    object_id = parse_object_id(selection_id)
    selections = collection_of(store, SELECTIONS_COLLECTION)
    try:
        result = await selections.delete_one({"_id": object_id})
    except Exception as e:
        logger.error(f"❌ Error deleting selected class {selection_id}: {e}")
        raise internal_error()

    if result.deleted_count != 1:
        raise not_found("Selected class")
    logger.info(f"✓ Removed selected class {selection_id}")
    return MessageResponse(message="Selected class deleted successfully")
