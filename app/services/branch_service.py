import logging

from app.exceptions.exceptions import NotFoundError
from app.repositories.branch import BranchRepo
from app.schemas.branch import BranchCreate, BranchRead, BranchUpdate
from app.schemas.employee import EmployeeRead
from app.services.base import require_fields, service_operation

logger = logging.getLogger(__name__)


class BranchService:
    def __init__(self, repo: BranchRepo, cascade_delete: bool = False):
        self.repo = repo
        self.cascade_delete = cascade_delete

    def create_branch(self, payload: BranchCreate) -> BranchRead:
        require_fields("branch", name=payload.name, address=payload.address, phone=payload.phone)
        with service_operation("create branch"):
            branch_id = self.repo.create(payload)
        logger.info("Branch created", extra={"branch_id": branch_id})
        return BranchRead(id=branch_id, **payload.model_dump())

    def list_branches(self) -> list[BranchRead]:
        with service_operation("fetch branches"):
            branches = self.repo.get_all()
        logger.debug("Fetched branches", extra={"count": len(branches)})
        return branches

    def get_branch(self, branch_id: str) -> BranchRead:
        with service_operation(f"fetch branch by ID ({branch_id})"):
            branch = self.repo.get_by_id(branch_id)
            if not branch:
                raise NotFoundError(f'Branch with ID "{branch_id}" not found.')
            return branch

    def update_branch(self, branch_id: str, payload: BranchUpdate) -> BranchRead:
        with service_operation(f"update branch ({branch_id})"):
            existing = self.get_branch(branch_id)
            updated_at = self.repo.update(branch_id, payload)
            changes = payload.model_dump(exclude_unset=True)
            logger.info("Branch updated", extra={"branch_id": branch_id, "fields": sorted(changes)})
            return existing.model_copy(update={**changes, "updated_at": updated_at})

    def delete_branch(self, branch_id: str) -> str:
        with service_operation(f"delete branch ({branch_id})"):
            self.get_branch(branch_id)
            if self.cascade_delete:
                removed = self.repo.delete_employees_by_branch(branch_id)
                logger.info("Cascade-deleted branch employees", extra={"branch_id": branch_id, "count": removed})
            self.repo.delete(branch_id)
        logger.info("Branch deleted", extra={"branch_id": branch_id})
        return f'Branch with ID "{branch_id}" deleted successfully.'

    def list_employees_by_branch(self, branch_id: str) -> list[EmployeeRead]:
        with service_operation(f"fetch employees for branch ({branch_id})"):
            return self.repo.get_employees_by_branch(branch_id)
