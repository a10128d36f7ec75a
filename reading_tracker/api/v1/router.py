"""Main API v1 router combining all endpoint routers."""

from fastapi import APIRouter

from reading_tracker.api.v1 import admin, auth, documents, health, reading_lists, readings, users

api_router = APIRouter()

# Health check (no auth required)
api_router.include_router(health.router, tags=["Health"])

# Authentication endpoints
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])

# User endpoints; custom documents live under the owner
api_router.include_router(users.router, prefix="/users", tags=["Users"])
api_router.include_router(
    documents.custom_documents_router,
    prefix="/users/me/documents",
    tags=["Custom Documents"],
)

# Catalog endpoints
api_router.include_router(documents.books_router, prefix="/books", tags=["Books"])
api_router.include_router(documents.mangas_router, prefix="/mangas", tags=["Manga"])

# Reading tracking endpoints
api_router.include_router(readings.router, prefix="/readings", tags=["Readings"])
api_router.include_router(reading_lists.router, prefix="/reading-lists", tags=["Reading Lists"])

# Admin endpoints (admin role required)
api_router.include_router(admin.router, prefix="/admin", tags=["Admin"])
