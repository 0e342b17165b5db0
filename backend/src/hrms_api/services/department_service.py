"""Department service for the organizational hierarchy."""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from hrms_api.exceptions import (
    DepartmentNotFoundError,
    DuplicateError,
    ManagerNotFoundError,
    OrganizationNotFoundError,
    ParentDepartmentNotFoundError,
    ValidationError,
)
from hrms_api.models.dto.department import (
    DepartmentHierarchyNode,
    DepartmentListResponse,
    DepartmentRequest,
    DepartmentResponse,
)
from hrms_api.models.orm.department import DepartmentORM
from hrms_api.models.orm.employee import EmployeeORM
from hrms_api.repositories.department_repository import DepartmentRepository
from hrms_api.repositories.employee_repository import EmployeeRepository
from hrms_api.repositories.organization_repository import OrganizationRepository
from hrms_api.utils.hierarchy import ensure_no_cycle

logger = logging.getLogger(__name__)

CIRCULAR_HIERARCHY_MESSAGE = "Parent department assignment would create circular hierarchy"


class DepartmentService:
    """Service for department operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session."""
        self.session = session
        self.department_repo = DepartmentRepository(session)
        self.employee_repo = EmployeeRepository(session)
        self.organization_repo = OrganizationRepository(session)

    def _build_response(
        self,
        department: DepartmentORM,
        parent: DepartmentORM | None,
        manager: EmployeeORM | None,
    ) -> DepartmentResponse:
        """Build response from ORM model."""
        return DepartmentResponse(
            id=department.id,
            organization_id=department.organization_id,
            name=department.name,
            code=department.code,
            description=department.description,
            cost_center=department.cost_center,
            location=department.location,
            parent_department_id=department.parent_department_id,
            parent_department_name=parent.name if parent else None,
            manager_id=department.manager_id,
            manager_name=manager.full_name if manager else None,
            created_at=department.created_at,
            updated_at=department.updated_at,
        )

    async def _build_responses(self, departments: list[DepartmentORM]) -> list[DepartmentResponse]:
        parents_by_id = await self.department_repo.get_by_ids(
            [d.parent_department_id for d in departments if d.parent_department_id]
        )
        managers_by_id = await self.employee_repo.get_by_ids(
            [d.manager_id for d in departments if d.manager_id]
        )
        return [
            self._build_response(
                d,
                parents_by_id.get(d.parent_department_id) if d.parent_department_id else None,
                managers_by_id.get(d.manager_id) if d.manager_id else None,
            )
            for d in departments
        ]

    async def get_department(self, department_id: UUID) -> DepartmentORM:
        """Get a department or raise DepartmentNotFoundError."""
        department = await self.department_repo.get_by_id(department_id)
        if department is None:
            raise DepartmentNotFoundError(department_id)
        return department

    async def get_department_response(self, department_id: UUID) -> DepartmentResponse:
        """Get a department as a response DTO."""
        department = await self.get_department(department_id)
        return (await self._build_responses([department]))[0]

    async def validate_no_circular_reference(
        self, department_id: UUID, proposed_parent_id: UUID
    ) -> None:
        """Reject a parent that is the department itself or one of its descendants.

        Raises:
            CircularHierarchyError: If the assignment would create a cycle
        """
        await ensure_no_cycle(
            department_id,
            proposed_parent_id,
            self.department_repo.get_parent_id,
            await self.department_repo.count(),
            CIRCULAR_HIERARCHY_MESSAGE,
        )

    async def _validate_request(
        self, request: DepartmentRequest, department_id: UUID | None = None
    ) -> None:
        """Check references and per-organization uniqueness of a request."""
        if not await self.organization_repo.exists(request.organization_id):
            raise OrganizationNotFoundError(request.organization_id)

        existing = await self.department_repo.get_by_code(request.organization_id, request.code)
        if existing and existing.id != department_id:
            raise DuplicateError("Department code already exists", field="code", value=request.code)
        existing = await self.department_repo.get_by_name(request.organization_id, request.name)
        if existing and existing.id != department_id:
            raise DuplicateError("Department name already exists", field="name", value=request.name)

        if request.parent_department_id:
            parent = await self.department_repo.get_by_id(request.parent_department_id)
            if parent is None:
                raise ParentDepartmentNotFoundError(request.parent_department_id)
            if parent.organization_id != request.organization_id:
                raise ValidationError(
                    "Parent department belongs to a different organization",
                    {"parent_department_id": str(request.parent_department_id)},
                )
            if department_id is not None:
                await self.validate_no_circular_reference(department_id, request.parent_department_id)

        if request.manager_id:
            manager = await self.employee_repo.get_by_id(request.manager_id)
            if manager is None:
                raise ManagerNotFoundError(request.manager_id)
            if manager.organization_id != request.organization_id:
                raise ValidationError(
                    "Manager belongs to a different organization",
                    {"manager_id": str(request.manager_id)},
                )

    async def create_department(self, request: DepartmentRequest) -> DepartmentResponse:
        """Create a department.

        Args:
            request: Department data

        Returns:
            Created department

        Raises:
            OrganizationNotFoundError: If the organization does not exist
            DuplicateError: If code or name is taken in the organization
            ParentDepartmentNotFoundError: If the parent does not exist
            ManagerNotFoundError: If the manager does not exist
        """
        await self._validate_request(request)
        department = await self.department_repo.create(**request.model_dump())
        logger.info(f"Created department {department.id} ({department.code})")
        return (await self._build_responses([department]))[0]

    async def update_department(
        self, department_id: UUID, request: DepartmentRequest
    ) -> DepartmentResponse:
        """Replace a department's fields.

        An omitted parent or manager clears the reference.

        Raises:
            DepartmentNotFoundError: If the department does not exist
            ValidationError: If the department would move to another
                organization or the parent would create a cycle
        """
        department = await self.get_department(department_id)
        if department.organization_id != request.organization_id:
            raise ValidationError(
                "Department cannot be moved to another organization",
                {"department_id": str(department_id)},
            )
        await self._validate_request(request, department_id=department_id)

        old_parent_id = department.parent_department_id
        for key, value in request.model_dump().items():
            setattr(department, key, value)
        department = await self.department_repo.save(department)

        if old_parent_id != department.parent_department_id:
            logger.info(
                f"Moved department {department.id} from parent {old_parent_id} "
                f"to {department.parent_department_id}"
            )
        else:
            logger.info(f"Updated department {department.id}")
        return (await self._build_responses([department]))[0]

    async def delete_department(self, department_id: UUID) -> None:
        """Delete a department without sub-departments.

        Raises:
            DepartmentNotFoundError: If the department does not exist
            ValidationError: If sub-departments reference it
        """
        await self.get_department(department_id)
        children = await self.department_repo.count_children(department_id)
        if children > 0:
            raise ValidationError(
                "Cannot delete department with sub-departments",
                {"department_id": str(department_id), "sub_departments": children},
            )
        await self.department_repo.delete(department_id)
        logger.info(f"Deleted department {department_id}")

    async def list_departments(
        self,
        organization_id: UUID,
        search: str | None = None,
        sort_by: str = "name",
        sort_dir: str = "asc",
        page: int = 1,
        page_size: int = 50,
    ) -> DepartmentListResponse:
        """List departments of an organization, optionally searching by name."""
        departments, total = await self.department_repo.get_by_organization(
            organization_id,
            search=search,
            sort_by=sort_by,
            sort_dir=sort_dir,
            offset=(page - 1) * page_size,
            limit=page_size,
        )
        return DepartmentListResponse(
            items=await self._build_responses(departments),
            total=total,
            page=page,
            page_size=page_size,
        )

    async def search_departments(self, organization_id: UUID, name: str) -> list[DepartmentResponse]:
        """Departments whose name contains ``name``, case-insensitively."""
        departments, _ = await self.department_repo.get_by_organization(
            organization_id, search=name, limit=await self.department_repo.count() or 1
        )
        return await self._build_responses(departments)

    async def get_root_departments(self, organization_id: UUID) -> list[DepartmentResponse]:
        """Departments without a parent."""
        return await self._build_responses(await self.department_repo.get_roots(organization_id))

    async def get_sub_departments(self, department_id: UUID) -> list[DepartmentResponse]:
        """Direct children of a department."""
        await self.get_department(department_id)
        return await self._build_responses(await self.department_repo.get_children(department_id))

    async def get_department_hierarchy(self, organization_id: UUID) -> list[DepartmentHierarchyNode]:
        """Build the department tree of an organization.

        All departments are loaded in one query and linked in memory. Only
        nodes reachable from a root appear in the result.

        Args:
            organization_id: Organization UUID

        Returns:
            Root nodes, each with its children filled in recursively
        """
        if not await self.organization_repo.exists(organization_id):
            raise OrganizationNotFoundError(organization_id)

        departments = await self.department_repo.get_all_in_organization(organization_id)
        managers_by_id = await self.employee_repo.get_by_ids(
            [d.manager_id for d in departments if d.manager_id]
        )

        children_by_parent: dict[UUID | None, list[DepartmentORM]] = {}
        for department in departments:
            children_by_parent.setdefault(department.parent_department_id, []).append(department)

        def build_node(department: DepartmentORM) -> DepartmentHierarchyNode:
            manager = managers_by_id.get(department.manager_id) if department.manager_id else None
            return DepartmentHierarchyNode(
                id=department.id,
                name=department.name,
                code=department.code,
                description=department.description,
                cost_center=department.cost_center,
                manager_id=department.manager_id,
                manager_name=manager.full_name if manager else None,
                children=[build_node(c) for c in children_by_parent.get(department.id, [])],
            )

        return [build_node(root) for root in children_by_parent.get(None, [])]
