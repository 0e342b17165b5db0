"""Bank details service enforcing the single primary account rule."""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from hrms_api.constants.validation import MAX_BANK_NAME_LENGTH
from hrms_api.exceptions import (
    BankDetailNotFoundError,
    DuplicateError,
    EmployeeNotFoundError,
    ValidationError,
)
from hrms_api.models.domain.bank_detail import AccountType
from hrms_api.models.dto.bank_detail import (
    BankAccountCreate,
    BankAccountSummary,
    BankAccountUpdate,
    BankDetailListResponse,
    BankDetailResponse,
    MaskedAccountNumberResponse,
)
from hrms_api.models.orm.bank_detail import EmployeeBankDetailORM
from hrms_api.repositories.bank_detail_repository import BankDetailRepository
from hrms_api.repositories.employee_repository import EmployeeRepository
from hrms_api.utils.validation import is_valid_account_number, is_valid_ifsc_code

logger = logging.getLogger(__name__)


class BankDetailsService:
    """Service for employee bank accounts.

    Every active account set of an employee has at most one primary account.
    Whenever an account becomes primary, the flag is cleared on all other
    accounts of the employee first.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session."""
        self.session = session
        self.repo = BankDetailRepository(session)
        self.employee_repo = EmployeeRepository(session)

    @staticmethod
    def _build_response(account: EmployeeBankDetailORM) -> BankDetailResponse:
        """Build response from ORM model. The full number never leaves the service."""
        return BankDetailResponse(
            id=account.id,
            employee_id=account.employee_id,
            bank_name=account.bank_name,
            masked_account_number=account.masked_account_number,
            ifsc_code=account.ifsc_code,
            branch_name=account.branch_name,
            account_type=account.account_type,
            is_primary=account.is_primary,
            is_active=account.is_active,
            created_at=account.created_at,
            updated_at=account.updated_at,
        )

    @staticmethod
    def _validate_account_fields(
        bank_name: str | None,
        account_number: str | None,
        ifsc_code: str | None,
        account_type: AccountType | None,
    ) -> None:
        """Check format rules shared by add and update.

        Raises:
            ValidationError: On the first rule that fails
        """
        if bank_name is None or not bank_name.strip():
            raise ValidationError("Bank name is required", {"field": "bank_name"})
        if len(bank_name) > MAX_BANK_NAME_LENGTH:
            raise ValidationError(
                f"Bank name must not exceed {MAX_BANK_NAME_LENGTH} characters",
                {"field": "bank_name"},
            )
        if not is_valid_account_number(account_number):
            raise ValidationError(
                "Account number must be 9 to 18 digits", {"field": "account_number"}
            )
        if ifsc_code and not is_valid_ifsc_code(ifsc_code):
            raise ValidationError("Invalid IFSC code format", {"field": "ifsc_code"})
        if account_type is None:
            raise ValidationError("Account type is required", {"field": "account_type"})

    async def _ensure_employee(self, employee_id: UUID) -> None:
        if not await self.employee_repo.exists(employee_id):
            raise EmployeeNotFoundError(employee_id)

    async def _get_account(self, bank_detail_id: UUID) -> EmployeeBankDetailORM:
        account = await self.repo.get_by_id(bank_detail_id)
        if account is None:
            raise BankDetailNotFoundError(bank_detail_id)
        return account

    async def _get_employee_account(
        self, employee_id: UUID, bank_detail_id: UUID
    ) -> EmployeeBankDetailORM:
        """Load an account and check it belongs to ``employee_id``."""
        await self._ensure_employee(employee_id)
        account = await self._get_account(bank_detail_id)
        if account.employee_id != employee_id:
            raise ValidationError(
                "Bank account does not belong to this employee",
                {"bank_detail_id": str(bank_detail_id)},
            )
        return account

    async def add_bank_account(
        self, employee_id: UUID, request: BankAccountCreate
    ) -> BankDetailResponse:
        """Add a bank account to an employee.

        If the new account is primary, every other account of the employee
        loses the primary flag in the same transaction.

        Args:
            employee_id: Employee UUID
            request: Account data

        Returns:
            Created account

        Raises:
            EmployeeNotFoundError: If the employee does not exist
            ValidationError: If a format rule fails
            DuplicateError: If the employee already holds the account number
        """
        await self._ensure_employee(employee_id)
        self._validate_account_fields(
            request.bank_name, request.account_number, request.ifsc_code, request.account_type
        )
        if await self.repo.account_number_exists(employee_id, request.account_number):
            raise DuplicateError(
                "Account number already exists for this employee", field="account_number"
            )

        if request.is_primary:
            await self.repo.clear_primary(employee_id)

        account = await self.repo.create(
            employee_id=employee_id,
            bank_name=request.bank_name.strip(),
            account_number=request.account_number,
            ifsc_code=request.ifsc_code or None,
            branch_name=request.branch_name,
            account_type=request.account_type,
            is_primary=request.is_primary,
            is_active=True,
        )
        logger.info(
            f"Added bank account {account.id} ({account.masked_account_number}) "
            f"for employee {employee_id}, primary={account.is_primary}"
        )
        return self._build_response(account)

    async def create_default_salary_account(
        self,
        employee_id: UUID,
        bank_name: str,
        account_number: str,
        ifsc_code: str | None = None,
    ) -> BankDetailResponse:
        """Add a primary salary account."""
        return await self.add_bank_account(
            employee_id,
            BankAccountCreate(
                bank_name=bank_name,
                account_number=account_number,
                ifsc_code=ifsc_code,
                account_type=AccountType.SALARY,
                is_primary=True,
            ),
        )

    async def update_bank_account(
        self, employee_id: UUID, bank_detail_id: UUID, request: BankAccountUpdate
    ) -> BankDetailResponse:
        """Replace the details of an account. The primary flag is untouched.

        Raises:
            BankDetailNotFoundError: If the account does not exist
            ValidationError: If a format rule fails
            DuplicateError: If another account of the employee has the number
        """
        account = await self._get_employee_account(employee_id, bank_detail_id)
        self._validate_account_fields(
            request.bank_name, request.account_number, request.ifsc_code, request.account_type
        )
        existing = await self.repo.get_by_account_number(employee_id, request.account_number)
        if existing and existing.id != account.id:
            raise DuplicateError(
                "Account number already exists for this employee", field="account_number"
            )

        account.bank_name = request.bank_name.strip()
        account.account_number = request.account_number
        account.ifsc_code = request.ifsc_code or None
        account.branch_name = request.branch_name
        account.account_type = request.account_type
        account = await self.repo.save(account)
        logger.info(f"Updated bank account {account.id} for employee {employee_id}")
        return self._build_response(account)

    async def set_primary_account(self, employee_id: UUID, bank_detail_id: UUID) -> BankDetailResponse:
        """Make an active account the employee's only primary account.

        Raises:
            BankDetailNotFoundError: If the account does not exist
            ValidationError: If the account belongs to someone else or is inactive
        """
        account = await self._get_employee_account(employee_id, bank_detail_id)
        if not account.is_active:
            raise ValidationError(
                "Cannot set an inactive bank account as primary",
                {"bank_detail_id": str(bank_detail_id)},
            )

        await self.repo.clear_primary(employee_id)
        account.is_primary = True
        account = await self.repo.save(account)
        logger.info(f"Bank account {account.id} is now primary for employee {employee_id}")
        return self._build_response(account)

    async def delete_bank_account(self, employee_id: UUID, bank_detail_id: UUID) -> None:
        """Soft-delete an account.

        Deleting the primary account leaves the employee without one; no
        other account is promoted.
        """
        account = await self._get_employee_account(employee_id, bank_detail_id)
        was_primary = account.is_primary
        account.is_primary = False
        account.is_active = False
        await self.repo.save(account)
        logger.info(
            f"Deactivated bank account {account.id} for employee {employee_id}"
            + (", employee has no primary account now" if was_primary else "")
        )

    async def reactivate_bank_account(
        self, employee_id: UUID, bank_detail_id: UUID
    ) -> BankDetailResponse:
        """Reactivate a soft-deleted account as non-primary.

        Raises:
            ValidationError: If the account is already active
        """
        account = await self._get_employee_account(employee_id, bank_detail_id)
        if account.is_active:
            raise ValidationError(
                "Bank account is already active", {"bank_detail_id": str(bank_detail_id)}
            )
        account.is_active = True
        account.is_primary = False
        account = await self.repo.save(account)
        logger.info(f"Reactivated bank account {account.id} for employee {employee_id}")
        return self._build_response(account)

    async def deactivate_all_accounts_for_employee(self, employee_id: UUID) -> None:
        """Soft-delete every account of an employee."""
        await self._ensure_employee(employee_id)
        await self.repo.deactivate_all(employee_id)
        logger.info(f"Deactivated all bank accounts for employee {employee_id}")

    async def get_employee_bank_details(
        self, employee_id: UUID, account_type: AccountType | None = None
    ) -> BankDetailListResponse:
        """Active accounts of an employee, primary first."""
        await self._ensure_employee(employee_id)
        accounts = await self.repo.get_active_by_employee(employee_id, account_type)
        return BankDetailListResponse(
            items=[self._build_response(a) for a in accounts],
            total=len(accounts),
        )

    async def get_bank_accounts_by_type(
        self, employee_id: UUID, account_type: AccountType
    ) -> BankDetailListResponse:
        return await self.get_employee_bank_details(employee_id, account_type)

    async def get_primary_bank_account(self, employee_id: UUID) -> BankDetailResponse:
        """The employee's primary account.

        Raises:
            BankDetailNotFoundError: If the employee has no primary account
        """
        await self._ensure_employee(employee_id)
        account = await self.repo.get_primary(employee_id)
        if account is None:
            raise BankDetailNotFoundError()
        return self._build_response(account)

    async def has_primary_account(self, employee_id: UUID) -> bool:
        await self._ensure_employee(employee_id)
        return await self.repo.get_primary(employee_id) is not None

    async def get_bank_account_count(self, employee_id: UUID) -> int:
        await self._ensure_employee(employee_id)
        return await self.repo.count_active(employee_id)

    async def get_account_summary(self, employee_id: UUID) -> BankAccountSummary:
        """Number of active accounts and whether one is primary."""
        await self._ensure_employee(employee_id)
        return BankAccountSummary(
            employee_id=employee_id,
            active_accounts=await self.get_bank_account_count(employee_id),
            has_primary_account=await self.has_primary_account(employee_id),
        )

    async def get_masked_account_number(
        self, employee_id: UUID, bank_detail_id: UUID
    ) -> MaskedAccountNumberResponse:
        """Masked account number for display."""
        account = await self._get_employee_account(employee_id, bank_detail_id)
        return MaskedAccountNumberResponse(
            bank_detail_id=account.id,
            masked_account_number=account.masked_account_number,
        )
