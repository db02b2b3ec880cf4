"""Tests for EmployeeService."""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from app.exceptions.exceptions import NotFoundError, RepositoryError, ServiceError, ValidationError
from app.repositories.employee import EmployeeRepo
from app.schemas.employee import EmployeeCreate, EmployeeRead, EmployeeUpdate
from app.services.employee_service import EmployeeService


@pytest.fixture
def repo():
    return MagicMock(spec=EmployeeRepo)


@pytest.fixture
def service(repo):
    return EmployeeService(repo)


@pytest.fixture
def stored(employee_payload) -> EmployeeRead:
    return EmployeeRead.model_validate({**employee_payload, "id": "e1"})


@pytest.mark.unit
class TestEmployeeService:
    def test_create_returns_input_with_id(self, service, repo, employee_payload):
        repo.create.return_value = "e42"

        employee = service.create_employee(EmployeeCreate.model_validate(employee_payload))

        assert employee.id == "e42"
        assert employee.branch_id == "branch-1"
        assert employee.email == "jane.doe@example.com"

    def test_create_missing_branch_id(self, service, repo, employee_payload):
        fields = EmployeeCreate.model_validate(employee_payload).model_dump(by_alias=True)
        payload = EmployeeCreate.model_construct(**{**fields, "branchId": ""})

        with pytest.raises(ValidationError) as exc_info:
            service.create_employee(payload)

        assert "branchId" in exc_info.value.message
        repo.create.assert_not_called()

    def test_get_missing(self, service, repo):
        repo.get_by_id.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            service.get_employee("e404")

        assert exc_info.value.message == 'Employee with ID "e404" not found.'

    def test_update_merges_stored_record(self, service, repo, stored, employee_payload):
        stamp = datetime(2024, 3, 1, tzinfo=timezone.utc)
        repo.get_by_id.return_value = stored
        repo.update.return_value = stamp
        payload = EmployeeUpdate.model_validate({**employee_payload, "position": "Branch Manager"})

        employee = service.update_employee("e1", payload)

        assert employee.id == "e1"
        assert employee.position == "Branch Manager"
        assert employee.name == stored.name
        assert employee.updated_at == stamp

    def test_update_repository_failure(self, service, repo, stored, employee_payload):
        repo.get_by_id.return_value = stored
        repo.update.side_effect = RepositoryError("Failed to update employee (e1): timeout")

        with pytest.raises(ServiceError):
            service.update_employee("e1", EmployeeUpdate.model_validate(employee_payload))

    def test_delete_twice(self, service, repo, stored):
        repo.get_by_id.side_effect = [stored, None]

        assert service.delete_employee("e1") == 'Employee with ID "e1" deleted successfully.'
        with pytest.raises(NotFoundError):
            service.delete_employee("e1")

        repo.delete.assert_called_once_with("e1")

    def test_by_department(self, service, repo, stored):
        repo.get_by_department.return_value = [stored]

        assert service.list_employees_by_department("Operations") == [stored]
        repo.get_by_department.assert_called_once_with("Operations")

    def test_list_failure_becomes_service_error(self, service, repo):
        repo.get_all.side_effect = RepositoryError("Failed to fetch all employees: unavailable")

        with pytest.raises(ServiceError) as exc_info:
            service.list_employees()

        assert exc_info.value.code == "SERVICE_ERROR"
