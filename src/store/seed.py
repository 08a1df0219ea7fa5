# Demo data shown right after login when TASKBOARD_SEED_DEMO_DATA is on
from models.notification import Notification
from models.task import Subtask, Task

DEMO_USER_ID = "1"


def demo_tasks():
    return [
        Task(
            id="1",
            title="Website Redesign",
            description="Redesign the company website with new branding",
            category="Design",
            priority="High",
            status="Active",
            due_date="2025-05-01",
            assigned_to=DEMO_USER_ID,
            created_at="2025-04-15",
            subtasks=[
                Subtask(id="1-1", title="Create wireframes", completed=True),
                Subtask(id="1-2", title="Design mockups", completed=False),
                Subtask(id="1-3", title="Implement frontend", completed=False),
            ],
        ),
        Task(
            id="2",
            title="Database Migration",
            description="Migrate from MySQL to PostgreSQL",
            category="Development",
            priority="Medium",
            status="Active",
            due_date="2025-05-10",
            assigned_to=DEMO_USER_ID,
            created_at="2025-04-18",
        ),
        Task(
            id="3",
            title="Prototype Testing",
            description="Test the new product prototype with users",
            category="Research",
            priority="Low",
            status="Completed",
            due_date="2025-04-20",
            assigned_to="2",
            created_at="2025-04-10",
        ),
    ]


def demo_notifications():
    # newest first
    return [
        Notification(
            id="3",
            title="Task Completed",
            message='"Prototype Testing" was marked as complete',
            created_at="2025-04-22",
        ),
        Notification(
            id="2",
            title="New Task Assigned",
            message='You have been assigned to "Database Migration"',
            created_at="2025-04-21",
        ),
        Notification(
            id="1",
            title="Task Deadline Approaching",
            message='Task "Website Redesign" is due in 2 days',
            created_at="2025-04-20",
        ),
    ]
