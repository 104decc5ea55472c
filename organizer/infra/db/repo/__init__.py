"""SQLite repositories, one per resource."""

from organizer.infra.db.repo.base import BaseRepo
from organizer.infra.db.repo.baby_sqlite import BabyRepo
from organizer.infra.db.repo.events_sqlite import EventsRepo
from organizer.infra.db.repo.images_sqlite import ImagesRepo
from organizer.infra.db.repo.notes_sqlite import NotesRepo
from organizer.infra.db.repo.planner_reader import SqlitePlannerReader
from organizer.infra.db.repo.projects_sqlite import ProjectsRepo
from organizer.infra.db.repo.relationships_sqlite import RelationshipsRepo
from organizer.infra.db.repo.tasks_sqlite import TasksRepo

__all__ = [
    "BaseRepo",
    "BabyRepo",
    "EventsRepo",
    "ImagesRepo",
    "NotesRepo",
    "SqlitePlannerReader",
    "ProjectsRepo",
    "RelationshipsRepo",
    "TasksRepo",
]
