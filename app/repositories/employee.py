from app.repositories.base import DocumentRepo
from app.schemas.employee import EmployeeRead


class EmployeeRepo(DocumentRepo[EmployeeRead]):
    entity_model = EmployeeRead
    entity_label = "employee"
    default_collection = "employees"

    def get_by_department(self, department: str) -> list[EmployeeRead]:
        return self.get_by_field("department", department)
