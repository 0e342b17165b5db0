"""Bank account and primary designation tests."""

from uuid import uuid4

import pytest
from sqlalchemy import select

from hrms_api.exceptions import (
    BankDetailNotFoundError,
    DuplicateError,
    EmployeeNotFoundError,
    ValidationError,
)
from hrms_api.models.domain.bank_detail import AccountType
from hrms_api.models.dto.bank_detail import BankAccountCreate, BankAccountUpdate
from hrms_api.models.orm.bank_detail import EmployeeBankDetailORM
from hrms_api.services.bank_details_service import BankDetailsService


@pytest.fixture
def service(session) -> BankDetailsService:
    return BankDetailsService(session)


def _account(number: str = "123456789012", **overrides) -> BankAccountCreate:
    values = {
        "bank_name": "State Bank of India",
        "account_number": number,
        "ifsc_code": "SBIN0001234",
        "branch_name": "MG Road",
        "account_type": AccountType.SAVINGS,
        "is_primary": False,
    }
    values.update(overrides)
    return BankAccountCreate(**values)


async def _primary_flags(session, employee_id) -> dict:
    result = await session.execute(
        select(EmployeeBankDetailORM).where(EmployeeBankDetailORM.employee_id == employee_id)
    )
    return {a.id: (a.is_primary, a.is_active) for a in result.scalars().all()}


class TestAddBankAccount:
    """Validation and primary handling on insert."""

    async def test_new_primary_replaces_old(self, service, session, make_employee) -> None:
        employee = await make_employee()
        a = await service.add_bank_account(employee.id, _account("111111111", is_primary=True))
        b = await service.add_bank_account(employee.id, _account("222222222", is_primary=True))

        flags = await _primary_flags(session, employee.id)

        assert flags[a.id] == (False, True)
        assert flags[b.id] == (True, True)
        assert sum(1 for primary, _ in flags.values() if primary) == 1

    async def test_non_primary_leaves_primary_alone(self, service, session, make_employee) -> None:
        employee = await make_employee()
        a = await service.add_bank_account(employee.id, _account("111111111", is_primary=True))
        await service.add_bank_account(employee.id, _account("222222222"))

        assert (await service.get_primary_bank_account(employee.id)).id == a.id

    async def test_primary_of_other_employee_untouched(self, service, session, make_employee) -> None:
        first = await make_employee()
        second = await make_employee()
        a = await service.add_bank_account(first.id, _account("111111111", is_primary=True))
        await service.add_bank_account(second.id, _account("111111111", is_primary=True))

        assert (await service.get_primary_bank_account(first.id)).id == a.id

    @pytest.mark.parametrize("number", ["12AB", "12345678", "1234567890123456789", "12345 6789", "", "123456789\n"])
    async def test_rejects_bad_account_number(self, service, make_employee, number) -> None:
        employee = await make_employee()

        with pytest.raises(ValidationError, match="Account number"):
            await service.add_bank_account(employee.id, _account(number))

    @pytest.mark.parametrize("ifsc", ["SBIN1001234", "sbin0001234", "SBI0001234", "SBIN00012345", "HDFC0001234\n"])
    async def test_rejects_bad_ifsc(self, service, make_employee, ifsc) -> None:
        employee = await make_employee()

        with pytest.raises(ValidationError, match="IFSC"):
            await service.add_bank_account(employee.id, _account(ifsc_code=ifsc))

    async def test_ifsc_is_optional(self, service, make_employee) -> None:
        employee = await make_employee()

        created = await service.add_bank_account(employee.id, _account(ifsc_code=""))

        assert created.ifsc_code is None

    @pytest.mark.parametrize("bank_name", ["", "   ", "B" * 256])
    async def test_rejects_bad_bank_name(self, service, make_employee, bank_name) -> None:
        employee = await make_employee()

        with pytest.raises(ValidationError, match="Bank name"):
            await service.add_bank_account(employee.id, _account(bank_name=bank_name))

    async def test_requires_account_type(self, service, make_employee) -> None:
        employee = await make_employee()

        with pytest.raises(ValidationError, match="Account type"):
            await service.add_bank_account(employee.id, _account(account_type=None))

    async def test_duplicate_account_number(self, service, make_employee) -> None:
        employee = await make_employee()
        await service.add_bank_account(employee.id, _account("111111111"))

        with pytest.raises(DuplicateError) as exc_info:
            await service.add_bank_account(employee.id, _account("111111111"))

        # The number itself is not echoed back
        assert "value" not in exc_info.value.details

    async def test_trailing_newline_is_not_a_second_account(
        self, service, session, make_employee
    ) -> None:
        employee = await make_employee()
        await service.add_bank_account(employee.id, _account("123456789"))

        with pytest.raises(ValidationError, match="9 to 18 digits"):
            await service.add_bank_account(employee.id, _account("123456789\n"))

        assert len(await _primary_flags(session, employee.id)) == 1

    async def test_unknown_employee(self, service) -> None:
        with pytest.raises(EmployeeNotFoundError):
            await service.add_bank_account(uuid4(), _account())

    async def test_response_is_masked(self, service, make_employee) -> None:
        employee = await make_employee()

        created = await service.add_bank_account(employee.id, _account("123456789012"))

        assert created.masked_account_number == "****9012"
        assert "account_number" not in created.model_dump()

    async def test_default_salary_account(self, service, make_employee) -> None:
        employee = await make_employee()
        await service.add_bank_account(employee.id, _account("111111111", is_primary=True))

        salary = await service.create_default_salary_account(
            employee.id, "HDFC Bank", "999999999", "HDFC0000001"
        )

        assert salary.account_type == AccountType.SALARY
        assert salary.is_primary is True
        assert (await service.get_primary_bank_account(employee.id)).id == salary.id


class TestPrimaryDesignation:
    """set_primary_account, deletion and reactivation."""

    async def test_set_primary(self, service, session, make_employee) -> None:
        employee = await make_employee()
        a = await service.add_bank_account(employee.id, _account("111111111", is_primary=True))
        b = await service.add_bank_account(employee.id, _account("222222222"))

        await service.set_primary_account(employee.id, b.id)

        flags = await _primary_flags(session, employee.id)
        assert flags[a.id][0] is False
        assert flags[b.id][0] is True

    async def test_set_primary_is_idempotent(self, service, make_employee) -> None:
        employee = await make_employee()
        a = await service.add_bank_account(employee.id, _account("111111111", is_primary=True))

        result = await service.set_primary_account(employee.id, a.id)

        assert result.is_primary is True

    async def test_set_primary_rejects_other_employees_account(self, service, make_employee) -> None:
        owner = await make_employee()
        other = await make_employee()
        account = await service.add_bank_account(owner.id, _account("111111111"))

        with pytest.raises(ValidationError, match="does not belong"):
            await service.set_primary_account(other.id, account.id)

    async def test_set_primary_rejects_inactive(self, service, make_employee) -> None:
        employee = await make_employee()
        account = await service.add_bank_account(employee.id, _account("111111111"))
        await service.delete_bank_account(employee.id, account.id)

        with pytest.raises(ValidationError, match="inactive"):
            await service.set_primary_account(employee.id, account.id)

    async def test_set_primary_unknown_account(self, service, make_employee) -> None:
        employee = await make_employee()

        with pytest.raises(BankDetailNotFoundError):
            await service.set_primary_account(employee.id, uuid4())

    async def test_delete_primary_leaves_no_primary(self, service, make_employee) -> None:
        employee = await make_employee()
        a = await service.add_bank_account(employee.id, _account("111111111", is_primary=True))
        await service.add_bank_account(employee.id, _account("222222222"))

        await service.delete_bank_account(employee.id, a.id)

        assert await service.has_primary_account(employee.id) is False
        assert await service.get_bank_account_count(employee.id) == 1
        with pytest.raises(BankDetailNotFoundError):
            await service.get_primary_bank_account(employee.id)

    async def test_reactivate_as_non_primary(self, service, make_employee) -> None:
        employee = await make_employee()
        a = await service.add_bank_account(employee.id, _account("111111111", is_primary=True))
        await service.delete_bank_account(employee.id, a.id)

        reactivated = await service.reactivate_bank_account(employee.id, a.id)

        assert reactivated.is_active is True
        assert reactivated.is_primary is False
        with pytest.raises(ValidationError, match="already active"):
            await service.reactivate_bank_account(employee.id, a.id)

    async def test_deactivate_all(self, service, make_employee) -> None:
        employee = await make_employee()
        await service.add_bank_account(employee.id, _account("111111111", is_primary=True))
        await service.add_bank_account(employee.id, _account("222222222"))

        await service.deactivate_all_accounts_for_employee(employee.id)

        summary = await service.get_account_summary(employee.id)
        assert summary.active_accounts == 0
        assert summary.has_primary_account is False


class TestBankQueries:
    """Listing, update and masking."""

    async def test_list_active_primary_first(self, service, make_employee) -> None:
        employee = await make_employee()
        await service.add_bank_account(employee.id, _account("111111111"))
        b = await service.add_bank_account(employee.id, _account("222222222", is_primary=True))
        c = await service.add_bank_account(employee.id, _account("333333333"))
        await service.delete_bank_account(employee.id, c.id)

        listing = await service.get_employee_bank_details(employee.id)

        assert listing.total == 2
        assert listing.items[0].id == b.id

    async def test_by_type(self, service, make_employee) -> None:
        employee = await make_employee()
        await service.add_bank_account(employee.id, _account("111111111"))
        salary = await service.add_bank_account(
            employee.id, _account("222222222", account_type=AccountType.SALARY)
        )

        listing = await service.get_bank_accounts_by_type(employee.id, AccountType.SALARY)

        assert [a.id for a in listing.items] == [salary.id]

    async def test_update_keeps_primary_flag(self, service, make_employee) -> None:
        employee = await make_employee()
        a = await service.add_bank_account(employee.id, _account("111111111", is_primary=True))

        updated = await service.update_bank_account(
            employee.id,
            a.id,
            BankAccountUpdate(
                bank_name="Axis Bank",
                account_number="111111111",
                ifsc_code="UTIB0000123",
                account_type=AccountType.CURRENT,
            ),
        )

        assert updated.bank_name == "Axis Bank"
        assert updated.account_type == AccountType.CURRENT
        assert updated.is_primary is True

    async def test_update_rejects_number_of_sibling(self, service, make_employee) -> None:
        employee = await make_employee()
        a = await service.add_bank_account(employee.id, _account("111111111"))
        await service.add_bank_account(employee.id, _account("222222222"))

        with pytest.raises(DuplicateError):
            await service.update_bank_account(
                employee.id,
                a.id,
                BankAccountUpdate(
                    bank_name="SBI", account_number="222222222", account_type=AccountType.SAVINGS
                ),
            )

    async def test_masked_account_number(self, service, make_employee) -> None:
        employee = await make_employee()
        a = await service.add_bank_account(employee.id, _account("000012345678"))

        masked = await service.get_masked_account_number(employee.id, a.id)

        assert masked.masked_account_number == "****5678"

    async def test_counts_require_known_employee(self, service) -> None:
        with pytest.raises(EmployeeNotFoundError):
            await service.has_primary_account(uuid4())
        with pytest.raises(EmployeeNotFoundError):
            await service.get_bank_account_count(uuid4())
