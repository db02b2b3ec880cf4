from fastapi import APIRouter, Depends

from app.core.config import settings
from app.core.dependencies import get_document_store
from app.exceptions.exceptions import NotFoundError
from app.infrastructure.document_store.base import DocumentStore
from app.repositories.branch import BranchRepo
from app.schemas.base import ApiResponse
from app.schemas.branch import BranchCreate, BranchRead, BranchUpdate
from app.schemas.employee import EmployeeRead
from app.services.branch_service import BranchService

router = APIRouter(prefix="/api/v1/branches", tags=["Branches"])


# Get Branch Service
def get_service(store: DocumentStore = Depends(get_document_store)) -> BranchService:
    repo = BranchRepo(
        store,
        collection=settings.BRANCHES_COLLECTION,
        employees_collection=settings.EMPLOYEES_COLLECTION,
    )
    return BranchService(repo, cascade_delete=settings.BRANCH_DELETE_CASCADE)


@router.post("", response_model=ApiResponse[BranchRead], response_model_exclude_none=True, status_code=201)
def create_branch(
    payload: BranchCreate,
    service: BranchService = Depends(get_service),
):
    branch = service.create_branch(payload)
    return ApiResponse[BranchRead](data=branch, message="Branch created")


@router.get("", response_model=ApiResponse[list[BranchRead]], response_model_exclude_none=True, status_code=200)
def list_branches(service: BranchService = Depends(get_service)):
    return ApiResponse[list[BranchRead]](data=service.list_branches(), message="Branches retrieved")


@router.get("/{branch_id}", response_model=ApiResponse[BranchRead], response_model_exclude_none=True, status_code=200)
def get_branch(
    branch_id: str,
    service: BranchService = Depends(get_service),
):
    return ApiResponse[BranchRead](data=service.get_branch(branch_id), message="Branch retrieved")


@router.put("/{branch_id}", response_model=ApiResponse[BranchRead], response_model_exclude_none=True, status_code=200)
def update_branch(
    branch_id: str,
    payload: BranchUpdate,
    service: BranchService = Depends(get_service),
):
    branch = service.update_branch(branch_id, payload)
    return ApiResponse[BranchRead](data=branch, message="Branch updated")


@router.delete("/{branch_id}", response_model=ApiResponse[None], response_model_exclude_none=True, status_code=200)
def delete_branch(
    branch_id: str,
    service: BranchService = Depends(get_service),
):
    return ApiResponse[None](message=service.delete_branch(branch_id))


# Employees of a branch
@router.get(
    "/{branch_id}/employees",
    response_model=ApiResponse[list[EmployeeRead]],
    response_model_exclude_none=True,
    status_code=200,
)
def list_branch_employees(
    branch_id: str,
    service: BranchService = Depends(get_service),
):
    employees = service.list_employees_by_branch(branch_id)
    if not employees and settings.EMPTY_RELATION_AS_NOT_FOUND:
        raise NotFoundError("No employees found for this branch.")
    return ApiResponse[list[EmployeeRead]](data=employees, message="Employees retrieved")
