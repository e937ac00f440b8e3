"""Project API routes: roster toggles, discussions and deletion."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from ..schemas import (
    CollaborationToggleResponse,
    MessageSendRequest,
    Project,
    ProjectCreate,
    ProjectDetailResponse,
    ProjectDiscussion,
    ProjectListResponse,
    UserProfile,
)
from ..services import (
    EntityStore,
    create_project,
    delete_project,
    get_current_user,
    get_entity_store,
    get_optional_user,
    get_project,
    get_project_discussion,
    is_collaborator,
    list_projects,
    send_project_message,
    toggle_collaboration,
    track_changes,
)
from ..services.realtime import broadcast_storage_change

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("", response_model=ProjectListResponse)
async def list_projects_endpoint(store: EntityStore = Depends(get_entity_store)) -> ProjectListResponse:
    return ProjectListResponse(items=list_projects(store))


@router.post("", response_model=Project, status_code=status.HTTP_201_CREATED)
async def create_project_endpoint(
    payload: ProjectCreate,
    store: EntityStore = Depends(get_entity_store),
    current_user: UserProfile = Depends(get_current_user),
) -> Project:
    with track_changes(store) as changed:
        project = create_project(store, creator=current_user, payload=payload)
    await broadcast_storage_change(*changed)
    return project


@router.get("/{project_id}", response_model=ProjectDetailResponse)
async def read_project(
    project_id: str,
    store: EntityStore = Depends(get_entity_store),
    viewer: UserProfile | None = Depends(get_optional_user),
) -> ProjectDetailResponse:
    project = get_project(store, project_id)
    return ProjectDetailResponse(
        project=project,
        is_collaborator=viewer is not None and is_collaborator(project, viewer.uid),
        is_creator=viewer is not None and viewer.uid == project.creator_id,
    )


@router.post("/{project_id}/collaboration", response_model=CollaborationToggleResponse)
async def toggle_collaboration_endpoint(
    project_id: str,
    store: EntityStore = Depends(get_entity_store),
    current_user: UserProfile = Depends(get_current_user),
) -> CollaborationToggleResponse:
    with track_changes(store) as changed:
        joined, project = toggle_collaboration(store, project_id=project_id, user=current_user)
    await broadcast_storage_change(*changed)
    return CollaborationToggleResponse(
        joined=joined,
        navigate_to=f"/projects/{project.id}" if joined else None,
        project=project,
    )


@router.get("/{project_id}/discussion", response_model=ProjectDiscussion)
async def read_discussion(
    project_id: str,
    store: EntityStore = Depends(get_entity_store),
    current_user: UserProfile = Depends(get_current_user),
) -> ProjectDiscussion:
    return get_project_discussion(store, project_id=project_id, user_id=current_user.uid)


@router.post("/{project_id}/discussion", response_model=ProjectDiscussion, status_code=status.HTTP_201_CREATED)
async def send_discussion_message(
    project_id: str,
    payload: MessageSendRequest,
    store: EntityStore = Depends(get_entity_store),
    current_user: UserProfile = Depends(get_current_user),
) -> ProjectDiscussion:
    with track_changes(store) as changed:
        discussion = send_project_message(store, project_id=project_id, sender=current_user, text=payload.text)
    await broadcast_storage_change(*changed)
    return discussion


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project_endpoint(
    project_id: str,
    store: EntityStore = Depends(get_entity_store),
    current_user: UserProfile = Depends(get_current_user),
) -> Response:
    with track_changes(store) as changed:
        delete_project(store, project_id=project_id, requester_id=current_user.uid)
    await broadcast_storage_change(*changed)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
