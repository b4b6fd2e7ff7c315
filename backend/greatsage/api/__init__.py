"""API router package."""

from fastapi import APIRouter

from greatsage.api.v1 import dashboard, habits, health, notes, projects, study, tasks

router = APIRouter()

# Include all API routers
router.include_router(health.router, tags=["Health"])
router.include_router(tasks.router, prefix="/tasks", tags=["Tasks"])
router.include_router(projects.router, prefix="/projects", tags=["Projects"])
router.include_router(study.router, prefix="/study", tags=["Study"])
router.include_router(habits.router, prefix="/habits", tags=["Habits"])
router.include_router(notes.notes_router, prefix="/notes", tags=["Notes"])
router.include_router(notes.bookmarks_router, prefix="/bookmarks", tags=["Bookmarks"])
router.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])
