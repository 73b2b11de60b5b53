"""Project routes: CRUD, import/export, and IRR for a saved project."""

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from src.api.deps import get_store
from src.api.schemas import IRRResponse, ProjectCreate, invalid_project
from src.config import settings
from src.data.storage import ProjectNotFoundError, ProjectStore, StorageError
from src.engine.calculator import compute_project_irr
from src.models.records import ProjectRecord, new_project_record
from src.models.validation import ProjectValidationError, to_project, validate_project

router = APIRouter(prefix="/api/v1/projects", tags=["projects"])


def _get_or_404(store: ProjectStore, project_id: str) -> ProjectRecord:
    record = store.get(project_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Project with ID {project_id} not found")
    return record


@router.get("", response_model=list[ProjectRecord])
async def list_projects(store: ProjectStore = Depends(get_store)):
    return store.list_all()


@router.post("", response_model=ProjectRecord, status_code=201)
async def create_project(req: ProjectCreate, store: ProjectStore = Depends(get_store)):
    """Create a project with default investment, cash flow and sale entries."""
    return store.save(new_project_record(req.name, req.description))


@router.post("/import", response_model=ProjectRecord, status_code=201)
async def import_project(request: Request, store: ProjectStore = Depends(get_store)):
    """Import a previously exported project JSON document and save it."""
    payload = await request.body()
    try:
        record = store.import_project(payload)
    except StorageError as e:
        raise HTTPException(status_code=400, detail=str(e))
    result = validate_project(record)
    if not result.is_valid:
        raise invalid_project(result.errors)
    return store.save(record)


@router.get("/{project_id}", response_model=ProjectRecord)
async def get_project(project_id: str, store: ProjectStore = Depends(get_store)):
    return _get_or_404(store, project_id)


@router.put("/{project_id}", response_model=ProjectRecord)
async def update_project(
    project_id: str, record: ProjectRecord, store: ProjectStore = Depends(get_store)
):
    """Replace a project. The body must pass field-level validation."""
    existing = _get_or_404(store, project_id)
    record = record.model_copy(update={"id": project_id, "created_at": existing.created_at})
    result = validate_project(record)
    if not result.is_valid:
        raise invalid_project(result.errors)
    return store.save(record)


@router.delete("/{project_id}", status_code=204)
async def delete_project(project_id: str, store: ProjectStore = Depends(get_store)):
    if not store.delete(project_id):
        raise HTTPException(status_code=404, detail=f"Project with ID {project_id} not found")
    return Response(status_code=204)


@router.get("/{project_id}/export")
async def export_project(project_id: str, store: ProjectStore = Depends(get_store)):
    try:
        data = store.export_project(project_id)
    except ProjectNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(
        content=data,
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="project-{project_id}.json"'},
    )


@router.post("/{project_id}/irr", response_model=IRRResponse)
async def calculate_project_irr(project_id: str, store: ProjectStore = Depends(get_store)):
    """Compute IRR/NPV for a saved project and store the result on it."""
    record = _get_or_404(store, project_id)
    try:
        project = to_project(record)
    except ProjectValidationError as e:
        raise invalid_project(e.errors)

    result = compute_project_irr(
        project,
        initial_guess=settings.irr_initial_guess,
        max_iterations=settings.irr_max_iterations,
        precision=settings.irr_precision,
    )
    store.save(
        record.model_copy(update={"calculated_irr": result.irr, "calculated_npv": result.npv})
    )
    return IRRResponse.from_result(result)
