from fastapi import APIRouter, Depends

from app.core.config import settings
from app.core.dependencies import get_document_store
from app.exceptions.exceptions import NotFoundError
from app.infrastructure.document_store.base import DocumentStore
from app.repositories.employee import EmployeeRepo
from app.schemas.base import ApiResponse
from app.schemas.employee import EmployeeCreate, EmployeeRead, EmployeeUpdate
from app.services.employee_service import EmployeeService

router = APIRouter(prefix="/api/v1/employees", tags=["Employees"])


def get_service(store: DocumentStore = Depends(get_document_store)) -> EmployeeService:
    return EmployeeService(EmployeeRepo(store, collection=settings.EMPLOYEES_COLLECTION))


@router.post("", response_model=ApiResponse[EmployeeRead], response_model_exclude_none=True, status_code=201)
def create_employee(
    payload: EmployeeCreate,
    service: EmployeeService = Depends(get_service),
):
    employee = service.create_employee(payload)
    return ApiResponse[EmployeeRead](data=employee, message="Employee created")


@router.get("", response_model=ApiResponse[list[EmployeeRead]], response_model_exclude_none=True, status_code=200)
def list_employees(service: EmployeeService = Depends(get_service)):
    return ApiResponse[list[EmployeeRead]](data=service.list_employees(), message="Employees retrieved")


@router.get(
    "/department/{department}",
    response_model=ApiResponse[list[EmployeeRead]],
    response_model_exclude_none=True,
    status_code=200,
)
def list_department_employees(
    department: str,
    service: EmployeeService = Depends(get_service),
):
    employees = service.list_employees_by_department(department)
    if not employees and settings.EMPTY_RELATION_AS_NOT_FOUND:
        raise NotFoundError("No employees found in this department.")
    return ApiResponse[list[EmployeeRead]](data=employees, message="Employees retrieved")


@router.get("/{employee_id}", response_model=ApiResponse[EmployeeRead], response_model_exclude_none=True, status_code=200)
def get_employee(
    employee_id: str,
    service: EmployeeService = Depends(get_service),
):
    return ApiResponse[EmployeeRead](data=service.get_employee(employee_id), message="Employee retrieved")


@router.put("/{employee_id}", response_model=ApiResponse[EmployeeRead], response_model_exclude_none=True, status_code=200)
def update_employee(
    employee_id: str,
    payload: EmployeeUpdate,
    service: EmployeeService = Depends(get_service),
):
    employee = service.update_employee(employee_id, payload)
    return ApiResponse[EmployeeRead](data=employee, message="Employee updated")


@router.delete("/{employee_id}", response_model=ApiResponse[None], response_model_exclude_none=True, status_code=200)
def delete_employee(
    employee_id: str,
    service: EmployeeService = Depends(get_service),
):
    return ApiResponse[None](message=service.delete_employee(employee_id))
