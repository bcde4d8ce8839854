"""
Task board for the SaaS task manager demo.

Tasks are kept in a process-wide in-memory map (user id -> tasks). It is a
demo stand-in for a datastore and is not safe under concurrent writers.
"""
import copy
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional

STATUSES = ["todo", "in-progress", "review", "done"]
PRIORITIES = ["low", "medium", "high", "urgent"]

SAMPLE_PROJECTS = [
    {"id": "1", "name": "Website Redesign", "color": "#6366f1"},
    {"id": "2", "name": "Mobile App", "color": "#ec4899"},
    {"id": "3", "name": "API Development", "color": "#10b981"},
]

SAMPLE_TEAM = [
    {"id": "1", "name": "Mohamed Wael", "email": "contact@itsmohamedwael.info", "role": "owner"},
    {"id": "2", "name": "John Doe", "email": "john@example.com", "role": "admin"},
    {"id": "3", "name": "Jane Smith", "email": "jane@example.com", "role": "member"},
    {"id": "4", "name": "Bob Wilson", "email": "bob@example.com", "role": "member"},
]

SAMPLE_TASKS = [
    {
        "id": "1",
        "title": "Design homepage mockup",
        "description": "Create wireframes and high-fidelity mockups for the new homepage",
        "status": "in-progress",
        "priority": "high",
        "projectId": "1",
        "assignee": {"name": "Mohamed Wael", "avatar": None},
        "dueDate": "2024-01-20",
        "tags": ["design", "ui"],
        "createdAt": "2024-01-10",
    },
    {
        "id": "2",
        "title": "Implement authentication",
        "description": "Add JWT-based authentication with refresh tokens",
        "status": "todo",
        "priority": "high",
        "projectId": "1",
        "assignee": {"name": "John Doe", "avatar": None},
        "dueDate": "2024-01-22",
        "tags": ["backend", "security"],
        "createdAt": "2024-01-11",
    },
    {
        "id": "3",
        "title": "Write API documentation",
        "description": "Document all REST endpoints using OpenAPI spec",
        "status": "done",
        "priority": "medium",
        "projectId": "1",
        "assignee": {"name": "Jane Smith", "avatar": None},
        "dueDate": "2024-01-15",
        "tags": ["docs"],
        "createdAt": "2024-01-08",
    },
    {
        "id": "4",
        "title": "Setup CI/CD pipeline",
        "description": "Configure GitHub Actions for automated testing and deployment",
        "status": "review",
        "priority": "medium",
        "projectId": "2",
        "assignee": {"name": "Mohamed Wael", "avatar": None},
        "dueDate": "2024-01-25",
        "tags": ["devops"],
        "createdAt": "2024-01-12",
    },
]


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def sample_tasks(project_id: Optional[str] = None) -> List[dict]:
    tasks = copy.deepcopy(SAMPLE_TASKS)
    if project_id:
        tasks = [t for t in tasks if t["projectId"] == project_id]
    return tasks


def project_summaries(tasks: Optional[List[dict]] = None) -> List[dict]:
    """Sample projects with task and completion counts."""
    tasks = SAMPLE_TASKS if tasks is None else tasks
    summaries = []
    for project in SAMPLE_PROJECTS:
        project_tasks = [t for t in tasks if t.get("projectId") == project["id"]]
        summaries.append({
            **project,
            "tasksCount": len(project_tasks),
            "completedCount": sum(1 for t in project_tasks if t.get("status") == "done"),
        })
    return summaries


class TaskBoard:
    """In-memory task store keyed by user id."""

    def __init__(self):
        self._tasks: Dict[str, List[dict]] = {}

    def list(self, user_id: str, project_id: Optional[str] = None) -> List[dict]:
        tasks = self._tasks.get(user_id, [])
        if project_id:
            return [t for t in tasks if t["projectId"] == project_id]
        return list(tasks)

    def create(self, user_id: str, data: dict) -> dict:
        timestamp = _now()
        assignee_id = data.get("assigneeId")
        task = {
            "id": uuid.uuid4().hex,
            "title": data["title"],
            "description": data.get("description") or "",
            "status": data.get("status") or "todo",
            "priority": data.get("priority") or "medium",
            "projectId": data.get("projectId") or None,
            "assignee": {"id": assignee_id, "name": "User"} if assignee_id else None,
            "dueDate": data.get("dueDate") or None,
            "tags": data.get("tags") or [],
            "createdAt": timestamp,
            "updatedAt": timestamp,
        }
        self._tasks.setdefault(user_id, []).append(task)
        return task

    def update(self, user_id: str, task_id: str, updates: dict) -> Optional[dict]:
        """Merge updates into a task. Returns None if the task does not exist."""
        for task in self._tasks.get(user_id, []):
            if task["id"] == task_id:
                task.update({k: v for k, v in updates.items() if k != "id"})
                task["updatedAt"] = _now()
                return task
        return None

    def delete(self, user_id: str, task_id: str):
        self._tasks[user_id] = [t for t in self._tasks.get(user_id, []) if t["id"] != task_id]
