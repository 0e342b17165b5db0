"""Department hierarchy tests."""

from uuid import uuid4

import pytest

from hrms_api.exceptions import (
    CircularHierarchyError,
    DuplicateError,
    ManagerNotFoundError,
    OrganizationNotFoundError,
    ParentDepartmentNotFoundError,
    ValidationError,
)
from hrms_api.models.dto.department import DepartmentRequest
from hrms_api.models.orm.organization import OrganizationORM
from hrms_api.services.department_service import DepartmentService


@pytest.fixture
def service(session) -> DepartmentService:
    return DepartmentService(session)


def _request(organization, name: str, code: str, **kwargs) -> DepartmentRequest:
    return DepartmentRequest(organization_id=organization.id, name=name, code=code, **kwargs)


class TestCreateDepartment:
    """Department creation rules."""

    async def test_create_with_parent_and_manager(self, service, organization, make_employee) -> None:
        manager = await make_employee(first_name="Meera", last_name="Iyer")
        root = await service.create_department(_request(organization, "Engineering", "ENG"))

        child = await service.create_department(
            _request(
                organization,
                "Platform",
                "PLT",
                parent_department_id=root.id,
                manager_id=manager.id,
            )
        )

        assert child.parent_department_id == root.id
        assert child.parent_department_name == "Engineering"
        assert child.manager_name == "Meera Iyer"

    async def test_unknown_organization(self, service) -> None:
        with pytest.raises(OrganizationNotFoundError):
            await service.create_department(
                DepartmentRequest(organization_id=uuid4(), name="X", code="X")
            )

    async def test_duplicate_code(self, service, organization) -> None:
        await service.create_department(_request(organization, "Engineering", "ENG"))

        with pytest.raises(DuplicateError, match="code"):
            await service.create_department(_request(organization, "Engineering 2", "ENG"))

    async def test_duplicate_name(self, service, organization) -> None:
        await service.create_department(_request(organization, "Engineering", "ENG"))

        with pytest.raises(DuplicateError, match="name"):
            await service.create_department(_request(organization, "Engineering", "ENG2"))

    async def test_same_code_in_other_organization(self, service, session, organization) -> None:
        other = OrganizationORM(name="Globex")
        session.add(other)
        await session.flush()
        await service.create_department(_request(organization, "Engineering", "ENG"))

        created = await service.create_department(_request(other, "Engineering", "ENG"))

        assert created.organization_id == other.id

    async def test_unknown_parent(self, service, organization) -> None:
        with pytest.raises(ParentDepartmentNotFoundError):
            await service.create_department(
                _request(organization, "Platform", "PLT", parent_department_id=uuid4())
            )

    async def test_unknown_manager(self, service, organization) -> None:
        with pytest.raises(ManagerNotFoundError):
            await service.create_department(
                _request(organization, "Platform", "PLT", manager_id=uuid4())
            )

    async def test_parent_from_other_organization(self, service, session, organization) -> None:
        other = OrganizationORM(name="Globex")
        session.add(other)
        await session.flush()
        foreign = await service.create_department(_request(other, "Sales", "SAL"))

        with pytest.raises(ValidationError, match="different organization"):
            await service.create_department(
                _request(organization, "Platform", "PLT", parent_department_id=foreign.id)
            )


class TestUpdateDepartment:
    """Re-parenting and replacement semantics."""

    async def test_rejects_cycle(self, service, organization) -> None:
        d2 = await service.create_department(_request(organization, "D2", "D2"))
        d1 = await service.create_department(
            _request(organization, "D1", "D1", parent_department_id=d2.id)
        )

        with pytest.raises(CircularHierarchyError, match="circular hierarchy"):
            await service.update_department(
                d2.id, _request(organization, "D2", "D2", parent_department_id=d1.id)
            )

    async def test_rejects_deep_cycle(self, service, organization) -> None:
        a = await service.create_department(_request(organization, "A", "A"))
        b = await service.create_department(_request(organization, "B", "B", parent_department_id=a.id))
        c = await service.create_department(_request(organization, "C", "C", parent_department_id=b.id))

        with pytest.raises(CircularHierarchyError):
            await service.update_department(
                a.id, _request(organization, "A", "A", parent_department_id=c.id)
            )

    async def test_rejects_self_parent(self, service, organization) -> None:
        a = await service.create_department(_request(organization, "A", "A"))

        with pytest.raises(CircularHierarchyError):
            await service.update_department(
                a.id, _request(organization, "A", "A", parent_department_id=a.id)
            )

    async def test_moving_to_sibling_subtree_is_allowed(self, service, organization) -> None:
        root = await service.create_department(_request(organization, "Root", "R"))
        left = await service.create_department(
            _request(organization, "Left", "L", parent_department_id=root.id)
        )
        right = await service.create_department(
            _request(organization, "Right", "RT", parent_department_id=root.id)
        )

        moved = await service.update_department(
            right.id, _request(organization, "Right", "RT", parent_department_id=left.id)
        )

        assert moved.parent_department_id == left.id

    async def test_omitted_parent_and_manager_are_cleared(
        self, service, organization, make_employee
    ) -> None:
        manager = await make_employee()
        root = await service.create_department(_request(organization, "Root", "R"))
        child = await service.create_department(
            _request(
                organization, "Child", "C", parent_department_id=root.id, manager_id=manager.id
            )
        )

        updated = await service.update_department(child.id, _request(organization, "Child", "C"))

        assert updated.parent_department_id is None
        assert updated.manager_id is None

    async def test_update_may_keep_own_code_and_name(self, service, organization) -> None:
        dept = await service.create_department(_request(organization, "Finance", "FIN"))

        updated = await service.update_department(
            dept.id, _request(organization, "Finance", "FIN", description="Money")
        )

        assert updated.description == "Money"


class TestDepartmentQueries:
    """Hierarchy, lists and deletion."""

    async def test_hierarchy(self, service, organization, make_employee) -> None:
        manager = await make_employee(first_name="Kiran", last_name="Das")
        eng = await service.create_department(
            _request(organization, "Engineering", "ENG", manager_id=manager.id)
        )
        await service.create_department(_request(organization, "Finance", "FIN"))
        platform = await service.create_department(
            _request(organization, "Platform", "PLT", parent_department_id=eng.id)
        )
        await service.create_department(
            _request(organization, "Storage", "STO", parent_department_id=platform.id)
        )

        tree = await service.get_department_hierarchy(organization.id)

        assert [node.code for node in tree] == ["ENG", "FIN"]
        assert tree[0].manager_name == "Kiran Das"
        assert [c.code for c in tree[0].children] == ["PLT"]
        assert [c.code for c in tree[0].children[0].children] == ["STO"]
        assert tree[1].children == []

    async def test_roots_children_and_search(self, service, organization) -> None:
        eng = await service.create_department(_request(organization, "Engineering", "ENG"))
        await service.create_department(
            _request(organization, "Platform Engineering", "PLT", parent_department_id=eng.id)
        )
        await service.create_department(_request(organization, "Finance", "FIN"))

        roots = await service.get_root_departments(organization.id)
        children = await service.get_sub_departments(eng.id)
        found = await service.search_departments(organization.id, "engineering")

        assert {d.code for d in roots} == {"ENG", "FIN"}
        assert [d.code for d in children] == ["PLT"]
        assert {d.code for d in found} == {"ENG", "PLT"}

    async def test_list_pagination(self, service, organization) -> None:
        for i in range(5):
            await service.create_department(_request(organization, f"Dept {i}", f"D{i}"))

        page = await service.list_departments(organization.id, page=2, page_size=2)

        assert page.total == 5
        assert [d.name for d in page.items] == ["Dept 2", "Dept 3"]

    async def test_delete_refused_with_children(self, service, organization) -> None:
        parent = await service.create_department(_request(organization, "Parent", "P"))
        await service.create_department(
            _request(organization, "Child", "C", parent_department_id=parent.id)
        )

        with pytest.raises(ValidationError, match="sub-departments"):
            await service.delete_department(parent.id)

    async def test_delete_leaf(self, service, organization) -> None:
        from hrms_api.exceptions import DepartmentNotFoundError

        leaf = await service.create_department(_request(organization, "Leaf", "L"))

        await service.delete_department(leaf.id)

        with pytest.raises(DepartmentNotFoundError):
            await service.get_department(leaf.id)
