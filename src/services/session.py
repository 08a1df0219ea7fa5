# src/services/session.py

import logging
from datetime import date
from typing import Callable, Optional

from models.task import Task
from models.user import User
from services.auth import AuthService
from services.errors import NotAuthenticatedError
from services.validation import validate_task_draft
from store.notification_store import NotificationStore
from store.seed import demo_notifications, demo_tasks
from store.task_store import TaskStore

logger = logging.getLogger(__name__)


class Session:
    """
    Owns every piece of mutable application state.

    Widgets and the view model receive the session explicitly and write only
    through its methods. Task operations require a logged-in user.
    """

    def __init__(self, settings, clock: Callable[[], date] = date.today):
        self.settings = settings
        self.clock = clock
        self.auth = AuthService(settings.demo_email, settings.demo_password)
        self.tasks = TaskStore(clock=clock)
        self.notifications = NotificationStore(clock=clock)

    @property
    def user(self) -> Optional[User]:
        return self.auth.user

    def require_user(self) -> User:
        user = self.auth.user
        if user is None:
            raise NotAuthenticatedError()
        return user

    # ---- task operations ----

    def add_task(self, draft: dict) -> Task:
        user = self.require_user()
        data = validate_task_draft(draft, default_assignee=user.id)
        return self.tasks.add_task(data)

    def update_task(self, task_id: str, partial: dict) -> Optional[Task]:
        self.require_user()
        return self.tasks.update_task(task_id, partial)

    def edit_task(self, task_id: str, draft: dict) -> Optional[Task]:
        """Update from a full edit form; the draft is validated like a new task."""
        user = self.require_user()
        data = validate_task_draft(draft, default_assignee=user.id)
        return self.tasks.update_task(task_id, data)

    def delete_task(self, task_id: str) -> bool:
        self.require_user()
        return self.tasks.delete_task(task_id)

    def complete_task(self, task_id: str) -> Optional[Task]:
        self.require_user()
        return self.tasks.complete_task(task_id)


def create_session(settings, clock: Callable[[], date] = date.today) -> Session:
    session = Session(settings, clock=clock)
    if settings.seed_demo_data:
        session.tasks.load(demo_tasks())
        session.notifications.load(demo_notifications())
        logger.info("Seeded demo data: %d tasks", len(session.tasks))
    return session
