"""Collaborative projects: roster toggles, discussions and deletion."""
from __future__ import annotations

import logging

from fastapi import HTTPException, status

from ..schemas import Project, ProjectCreate, ProjectDiscussion, UserProfile
from .circle_service import slugged_id
from .entity_store import PROJECT_DISCUSSIONS, PROJECTS, EntityStore
from .membership import toggle_member
from .message_service import build_message

logger = logging.getLogger(__name__)


def _find_project(projects: list[Project], project_id: str) -> int | None:
    for index, project in enumerate(projects):
        if project.id == project_id:
            return index
    return None


def _get_project_or_404(store: EntityStore, project_id: str) -> Project:
    projects = store.load(PROJECTS)
    index = _find_project(projects, project_id)
    if index is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    return projects[index]


def collaborator_ids(project: Project) -> list[str]:
    return [profile.uid for profile in project.collaborators]


def is_collaborator(project: Project, user_id: str) -> bool:
    return user_id in collaborator_ids(project)


def list_projects(store: EntityStore) -> list[Project]:
    return store.load(PROJECTS)


def list_projects_for_user(store: EntityStore, user_id: str) -> list[Project]:
    return [project for project in store.load(PROJECTS) if is_collaborator(project, user_id)]


def get_project(store: EntityStore, project_id: str) -> Project:
    return _get_project_or_404(store, project_id)


def create_project(store: EntityStore, *, creator: UserProfile, payload: ProjectCreate) -> Project:
    project = Project(
        id=slugged_id(payload.title),
        title=payload.title.strip(),
        description=payload.description.strip(),
        creator_id=creator.uid,
        collaborators=[creator],
    )
    projects = store.load(PROJECTS)
    projects.append(project)
    store.save(PROJECTS, projects)

    discussions = store.load(PROJECT_DISCUSSIONS)
    discussions.append(ProjectDiscussion(id=project.id, messages=[]))
    store.save(PROJECT_DISCUSSIONS, discussions)

    logger.info("Created project id=%s creator=%s", project.id, creator.uid)
    return project


def toggle_collaboration(store: EntityStore, *, project_id: str, user: UserProfile) -> tuple[bool, Project]:
    """Add ``user`` to the collaborator roster or remove them if already present."""

    projects = store.load(PROJECTS)
    index = _find_project(projects, project_id)
    if index is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")

    project = projects[index]
    if user.uid == project.creator_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="The creator cannot leave their own project")
    result = toggle_member(collaborator_ids(project), user.uid)
    if result.joined:
        roster = [*project.collaborators, user]
    else:
        roster = [profile for profile in project.collaborators if profile.uid != user.uid]

    updated = project.model_copy(update={"collaborators": roster})
    projects[index] = updated
    store.save(PROJECTS, projects)
    logger.info("Project collaboration toggled | project=%s user=%s joined=%s", project_id, user.uid, result.joined)
    return result.joined, updated


def get_project_discussion(store: EntityStore, *, project_id: str, user_id: str) -> ProjectDiscussion:
    project = _get_project_or_404(store, project_id)
    if not is_collaborator(project, user_id):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Join this project to see the discussion")
    for discussion in store.load(PROJECT_DISCUSSIONS):
        if discussion.id == project_id:
            return discussion
    return ProjectDiscussion(id=project_id, messages=[])


def send_project_message(
    store: EntityStore,
    *,
    project_id: str,
    sender: UserProfile,
    text: str,
) -> ProjectDiscussion:
    message = build_message(sender, text)
    project = _get_project_or_404(store, project_id)
    if not is_collaborator(project, sender.uid):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Join this project to post in the discussion")

    discussions = store.load(PROJECT_DISCUSSIONS)
    for index, discussion in enumerate(discussions):
        if discussion.id == project_id:
            updated = discussion.model_copy(update={"messages": [*discussion.messages, message]})
            discussions[index] = updated
            break
    else:
        updated = ProjectDiscussion(id=project_id, messages=[message])
        discussions.append(updated)
    store.save(PROJECT_DISCUSSIONS, discussions)
    return updated


def delete_project(store: EntityStore, *, project_id: str, requester_id: str) -> Project:
    project = _get_project_or_404(store, project_id)
    if project.creator_id != requester_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only the creator can delete this project")

    store.save(PROJECTS, [p for p in store.load(PROJECTS) if p.id != project_id])
    store.save(PROJECT_DISCUSSIONS, [d for d in store.load(PROJECT_DISCUSSIONS) if d.id != project_id])
    logger.info("Deleted project id=%s", project_id)
    return project


__all__ = [
    "collaborator_ids",
    "create_project",
    "delete_project",
    "get_project",
    "get_project_discussion",
    "is_collaborator",
    "list_projects",
    "list_projects_for_user",
    "send_project_message",
    "toggle_collaboration",
]
