# ============================================================================
# FILE: visual_learning/utils/serializers.py
# ============================================================================
"""Render Mongo documents and driver results as JSON-ready dicts"""

from typing import Any, Dict, List, Optional

from bson import ObjectId


def _clean(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {key: _clean(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_clean(item) for item in value]
    return value


def serialize_document(document: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if document is None:
        return None
    return _clean(document)


def serialize_documents(documents: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [_clean(document) for document in documents]


# Result shapes follow the camelCase the web clients already consume

def insert_result(result) -> Dict[str, Any]:
    return {
        "acknowledged": result.acknowledged,
        "insertedId": _clean(result.inserted_id),
    }


def update_result(result) -> Dict[str, Any]:
    return {
        "acknowledged": result.acknowledged,
        "matchedCount": result.matched_count,
        "modifiedCount": result.modified_count,
        "upsertedId": _clean(result.upserted_id),
    }
