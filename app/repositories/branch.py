from app.infrastructure.document_store.base import DocumentStore
from app.repositories.base import DocumentRepo
from app.schemas.branch import BranchRead
from app.schemas.employee import EmployeeRead


class BranchRepo(DocumentRepo[BranchRead]):
    entity_model = BranchRead
    entity_label = "branch"
    default_collection = "branches"

    def __init__(
        self,
        store: DocumentStore,
        collection: str | None = None,
        employees_collection: str = "employees",
    ):
        super().__init__(store, collection)
        self.employees_collection = employees_collection

    def get_employees_by_branch(self, branch_id: str) -> list[EmployeeRead]:
        return self._query(self.employees_collection, "branchId", branch_id, EmployeeRead)

    def delete_employees_by_branch(self, branch_id: str) -> int:
        # Single store write: either every matching employee is removed or none is.
        with self._store_call(f"Failed to delete employees of branch ({branch_id})"):
            return self.store.delete_where_equal(self.employees_collection, "branchId", branch_id)
