# slatecms/api/v1/router.py
from fastapi import APIRouter

from .endpoints import (
    api_keys, audit, auth, blocks, faqs, global_sections, health, pages, projects,
    service_offerings, site_settings, testimonials, users,
)

api_router = APIRouter()
api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth")

api_router.include_router(pages.router)            # /pages (+ /pages/{id}/blocks)
api_router.include_router(blocks.router)           # /blocks
api_router.include_router(global_sections.router)  # /global-sections
api_router.include_router(site_settings.router)    # /site-settings
api_router.include_router(faqs.router)             # /faqs
api_router.include_router(testimonials.router)     # /testimonials
api_router.include_router(service_offerings.router)  # /services
api_router.include_router(projects.router)         # /projects
api_router.include_router(api_keys.router)         # /api-keys
api_router.include_router(users.router)            # /users
api_router.include_router(audit.router)            # /audit-log
