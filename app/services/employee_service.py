import logging

from app.exceptions.exceptions import NotFoundError
from app.repositories.employee import EmployeeRepo
from app.schemas.employee import EmployeeCreate, EmployeeRead, EmployeeUpdate
from app.services.base import require_fields, service_operation

logger = logging.getLogger(__name__)


class EmployeeService:
    def __init__(self, repo: EmployeeRepo):
        self.repo = repo

    # Create employee
    def create_employee(self, payload: EmployeeCreate) -> EmployeeRead:
        require_fields(
            "employee",
            name=payload.name,
            position=payload.position,
            department=payload.department,
            email=payload.email,
            phone=payload.phone,
            branchId=payload.branch_id,
        )
        with service_operation("create employee"):
            employee_id = self.repo.create(payload)
        logger.info("Employee created", extra={"employee_id": employee_id, "branch_id": payload.branch_id})
        return EmployeeRead(id=employee_id, **payload.model_dump())

    # List employees
    def list_employees(self) -> list[EmployeeRead]:
        with service_operation("fetch employees"):
            return self.repo.get_all()

    # Get employee by id
    def get_employee(self, employee_id: str) -> EmployeeRead:
        with service_operation(f"fetch employee by ID ({employee_id})"):
            employee = self.repo.get_by_id(employee_id)
            if not employee:
                raise NotFoundError(f'Employee with ID "{employee_id}" not found.')
            return employee

    def update_employee(self, employee_id: str, payload: EmployeeUpdate) -> EmployeeRead:
        with service_operation(f"update employee ({employee_id})"):
            existing = self.get_employee(employee_id)
            updated_at = self.repo.update(employee_id, payload)
            changes = payload.model_dump(exclude_unset=True)
            logger.info("Employee updated", extra={"employee_id": employee_id, "fields": sorted(changes)})
            return existing.model_copy(update={**changes, "updated_at": updated_at})

    def delete_employee(self, employee_id: str) -> str:
        with service_operation(f"delete employee ({employee_id})"):
            self.get_employee(employee_id)
            self.repo.delete(employee_id)
        logger.info("Employee deleted", extra={"employee_id": employee_id})
        return f'Employee with ID "{employee_id}" deleted successfully.'

    def list_employees_by_department(self, department: str) -> list[EmployeeRead]:
        with service_operation(f"fetch employees for department ({department})"):
            return self.repo.get_by_department(department)
