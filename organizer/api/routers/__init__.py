from organizer.api.routers.baby import router as baby_router
from organizer.api.routers.events import router as events_router
from organizer.api.routers.images import router as images_router
from organizer.api.routers.notes import router as notes_router
from organizer.api.routers.notifications import router as notifications_router
from organizer.api.routers.projects import router as projects_router
from organizer.api.routers.relationships import router as relationships_router
from organizer.api.routers.tasks import router as tasks_router

ALL_ROUTERS = (
    events_router,
    notes_router,
    projects_router,
    tasks_router,
    baby_router,
    images_router,
    relationships_router,
    notifications_router,
)

__all__ = [
    "ALL_ROUTERS",
    "baby_router",
    "events_router",
    "images_router",
    "notes_router",
    "notifications_router",
    "projects_router",
    "relationships_router",
    "tasks_router",
]
