from typing import List

from fastapi import APIRouter, Depends, Path, Request, Response, status

from ..schemas.task import Task as TaskSchema, TaskCreate, TaskUpdate
from ..store import TaskStore

router = APIRouter()


def get_store(request: Request) -> TaskStore:
    """Dependency returning the store this app was built with."""
    return request.app.state.task_store


@router.get("/tasks", response_model=List[TaskSchema])
def list_tasks(store: TaskStore = Depends(get_store)):
    """Get all tasks."""
    return store.list()


@router.post("/tasks", response_model=TaskSchema, status_code=status.HTTP_201_CREATED)
def create_task(task: TaskCreate, store: TaskStore = Depends(get_store)):
    """Create a new task."""
    return store.create(task.description)


@router.patch("/tasks/{task_id}", response_model=TaskSchema)
def update_task(
    task_update: TaskUpdate,
    task_id: int = Path(..., gt=0),
    store: TaskStore = Depends(get_store),
):
    """Update the supplied fields of a task."""
    return store.update(task_id, task_update)


@router.delete(
    "/tasks/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def delete_task(task_id: int = Path(..., gt=0), store: TaskStore = Depends(get_store)):
    """Delete a task."""
    store.delete(task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
