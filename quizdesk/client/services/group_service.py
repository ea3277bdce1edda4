"""Student group management calls."""
from typing import Any

from quizdesk.client.http import QuizApiClient
from quizdesk.client.models import Group, GroupCreate, GroupUpdate


def create_group(client: QuizApiClient, group: GroupCreate) -> dict[str, Any]:
    return client.post("/group/create", json=group.model_dump()) or {}


def get_my_groups(client: QuizApiClient) -> list[Group]:
    data = client.get("/group/my-groups") or {}
    return [Group.model_validate(item) for item in data.get("groups", [])]


def get_group(client: QuizApiClient, group_id: str) -> Group:
    data = client.get(f"/group/{group_id}") or {}
    return Group.model_validate(data.get("group", data))


def add_students(client: QuizApiClient, group_id: str, student_ids: list[str]) -> dict[str, Any]:
    return client.post(f"/group/{group_id}/add-students", json={"studentIds": student_ids}) or {}


def remove_student(client: QuizApiClient, group_id: str, student_id: str) -> None:
    client.delete(f"/group/{group_id}/remove-student/{student_id}")


def update_group(client: QuizApiClient, group_id: str, update: GroupUpdate) -> dict[str, Any]:
    return client.put(f"/group/{group_id}", json=update.model_dump(exclude_none=True)) or {}


def delete_group(client: QuizApiClient, group_id: str) -> None:
    client.delete(f"/group/{group_id}")
