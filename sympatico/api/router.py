"""
Sympatico - Main API Router

Aggregates all sub-routers under a single prefix so that ``sympatico.main``
can mount the entire API surface with one ``include_router`` call.
"""

from fastapi import APIRouter

from sympatico.api import compatibility, migration, virtues

router = APIRouter()

router.include_router(virtues.router, tags=["Virtues"])
router.include_router(compatibility.router, prefix="/compatibility", tags=["Compatibility"])
router.include_router(migration.router, prefix="/migration", tags=["Migration"])
