"""Main API router - every resource the web client talks to"""

from fastapi import APIRouter

from visual_learning.api.endpoints import auth, classes, payments, selections, users

router = APIRouter()

router.include_router(auth.router, tags=["Auth"])
router.include_router(users.router, prefix="/users", tags=["Users"])
router.include_router(classes.router, prefix="/classes", tags=["Classes"])
router.include_router(selections.router, prefix="/selectedClass", tags=["Selected Classes"])
router.include_router(payments.router, tags=["Payments"])
