"""Back-office facade: loads collections, applies the rules, saves the result.

The rule functions in the domain packages are pure; ``Backoffice`` is the
only place that reads and writes collections. Every mutating call persists
the collections it touched before returning.

Example:
    >>> from backoffice_core import Backoffice, Settings
    >>> from backoffice_core.storage import build_store
    >>>
    >>> office = Backoffice(build_store(Settings.from_env()))
    >>> office.run_migrations()
    >>> shift = office.open_cash_shift(5000, opened_by="Ana")
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from datetime import date, datetime
from decimal import Decimal

import pandas as pd

from backoffice_core import cash, finance, inventory, payroll, tasks
from backoffice_core.access import RoleAccess, User, upgrade_admin_permissions
from backoffice_core.cash import (
    CashCategory,
    CashShift,
    ShiftReconciliation,
    ShiftStatistics,
    StatsPeriod,
    TransactionMethod,
    TransactionType,
)
from backoffice_core.exceptions import NoOpenShiftError, ShiftAlreadyOpenError
from backoffice_core.finance import (
    CalculatorProjection,
    FixedExpense,
    Partner,
    PaymentAlert,
    PaymentMethod,
    Product,
    ProjectionCommit,
    PurchaseSimulation,
    WalletTransaction,
)
from backoffice_core.inventory import InventoryItem, InventorySession
from backoffice_core.money import Number
from backoffice_core.payroll import (
    AbsenceRecord,
    AttendanceRecord,
    Employee,
    HolidaySet,
    MonthlySummary,
    SanctionRecord,
    SanctionType,
)
from backoffice_core.storage import Document, KeyValueStore, Repository, StoreKey
from backoffice_core.tasks import AdminTask, ChecklistSnapshot, Task, TaskPriority

logger = logging.getLogger(__name__)


class Backoffice:
    """Orchestrates the back-office rules over one key-value store.

    Args:
        store: Backing store (see ``backoffice_core.storage.build_store``).
        clock: Callable returning the current time (default: ``datetime.now``).

    Attributes:
        employees, records, absences, sanctions, inventory_items,
        inventory_sessions, cash_shifts, products, wallet, fixed_expenses,
        partners, projections, users, checklist_tasks, checklist_snapshots,
        admin_tasks: Repositories, one per collection.
        holidays, role_access: Single-value documents.

    """

    def __init__(
        self,
        store: KeyValueStore,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.store = store
        self.clock = clock

        self.employees = Repository(store, StoreKey.EMPLOYEES, Employee)
        self.records = Repository(store, StoreKey.RECORDS, AttendanceRecord)
        self.absences = Repository(store, StoreKey.ABSENCES, AbsenceRecord)
        self.sanctions = Repository(store, StoreKey.SANCTIONS, SanctionRecord)
        self.holidays = Document(store, StoreKey.HOLIDAYS, HolidaySet, HolidaySet)
        self.inventory_items = Repository(
            store, StoreKey.INVENTORY_ITEMS, InventoryItem, inventory.default_items
        )
        self.inventory_sessions = Repository(
            store, StoreKey.INVENTORY_SESSIONS, InventorySession
        )
        self.cash_shifts = Repository(store, StoreKey.CASH_SHIFTS, CashShift)
        self.products = Repository(store, StoreKey.PRODUCTS, Product, finance.default_products)
        self.wallet = Repository(store, StoreKey.WALLET, WalletTransaction)
        self.fixed_expenses = Repository(store, StoreKey.FIXED_EXPENSES, FixedExpense)
        self.partners = Repository(store, StoreKey.PARTNERS, Partner, finance.default_partners)
        self.projections = Repository(store, StoreKey.PROJECTIONS, CalculatorProjection)
        self.role_access = Document(store, StoreKey.ROLE_ACCESS, RoleAccess, RoleAccess.default)
        self.users = Repository(store, StoreKey.USERS, User)
        self.checklist_tasks = Repository(store, StoreKey.TASKS, Task)
        self.checklist_snapshots = Repository(
            store, StoreKey.CHECKLIST_SNAPSHOTS, ChecklistSnapshot
        )
        self.admin_tasks = Repository(store, StoreKey.ADMIN_TASKS, AdminTask)

    # --- Startup ---

    def run_migrations(self) -> bool:
        """Apply one-time upgrades to stored data; returns True if anything changed."""
        users, changed = upgrade_admin_permissions(self.users.all())
        if changed:
            self.users.replace_all(users)
        return changed

    # --- Payroll ---

    def add_employee(self, employee: Employee) -> Employee:
        return self.employees.add(employee)

    def archive_employee(self, employee_id: str) -> Employee:
        return self.employees.update(payroll.archive_employee(self.employees.get(employee_id)))

    def record_attendance(
        self,
        employee_id: str,
        check_in: str,
        check_out: str,
        day: date,
        reason: str = "",
    ) -> AttendanceRecord | None:
        """Compute and store an attendance record.

        Returns:
            The stored record, or None when the employee is unknown or a
            time is empty or malformed (nothing is stored).

        """
        employee = self.employees.find(employee_id)
        record = payroll.create_attendance_record(
            employee, check_in, check_out, day, self.holidays.get(), reason=reason
        )
        if record is None:
            logger.debug("Attendance for %s on %s skipped", employee_id, day)
            return None
        return self.records.add(record)

    def record_absence(self, employee_id: str, day: date, reason: str) -> AbsenceRecord:
        """Store an absence.

        Raises:
            NotFoundError: If the employee does not exist.
            ValidationError: If the reason is empty.

        """
        self.employees.get(employee_id)
        return self.absences.add(payroll.create_absence_record(employee_id, day, reason))

    def toggle_attendance_paid(self, record_id: str) -> AttendanceRecord:
        return self.records.update(payroll.toggle_paid(self.records.get(record_id)))

    def toggle_holiday(self, day: date) -> bool:
        """Flip a date in or out of the holiday set; returns True if now a holiday.

        Existing attendance records keep the multiplier they were created with.
        """
        holidays = self.holidays.get()
        now_holiday = holidays.toggle(day)
        self.holidays.set(holidays)
        return now_holiday

    def employee_month_summary(self, employee_id: str, year: int, month: int) -> MonthlySummary:
        return payroll.monthly_summary(
            employee_id, year, month, self.records.all(), self.absences.all()
        )

    def payroll_report(self, year: int, month: int) -> pd.DataFrame:
        return payroll.monthly_payroll_frame(
            self.employees.all(), self.records.all(), self.absences.all(), year, month
        )

    def pay_salary(self, employee_id: str, created_by: str) -> WalletTransaction:
        """Pay an employee's salary out of the wallet.

        Raises:
            NotFoundError: If the employee does not exist.

        """
        employee, tx = payroll.pay_salary(self.employees.get(employee_id), created_by, self.clock())
        self.wallet.add(tx)
        self.employees.update(employee)
        return tx

    def add_sanction(
        self,
        employee_id: str,
        day: date,
        type: SanctionType,
        description: str,
        amount: Number | None = None,
        created_by: str | None = None,
    ) -> SanctionRecord:
        self.employees.get(employee_id)
        sanction = payroll.create_sanction(
            employee_id, day, type, description, amount=amount, created_by=created_by
        )
        return self.sanctions.add(sanction)

    def void_sanction(self, sanction_id: str, deleted_by: str) -> SanctionRecord:
        voided = payroll.void_sanction(self.sanctions.get(sanction_id), deleted_by, self.clock())
        return self.sanctions.update(voided)

    # --- Cash register ---

    def current_cash_shift(self) -> CashShift | None:
        return cash.find_open_shift(self.cash_shifts.all())

    def _require_cash_shift(self) -> CashShift:
        shift = self.current_cash_shift()
        if shift is None:
            raise NoOpenShiftError("There is no OPEN cash shift")
        return shift

    def open_cash_shift(self, initial_amount: Number, opened_by: str) -> CashShift:
        """Open a cash shift.

        Raises:
            ShiftAlreadyOpenError: If another shift is still OPEN.

        """
        existing = self.current_cash_shift()
        if existing is not None:
            raise ShiftAlreadyOpenError(f"Cash shift {existing.id} is still OPEN")
        return self.cash_shifts.add(cash.open_shift(initial_amount, opened_by, self.clock()))

    def add_cash_transaction(
        self,
        type: TransactionType,
        method: TransactionMethod,
        category: CashCategory,
        amount: Number,
        created_by: str,
        description: str = "",
    ) -> CashShift:
        """Record a movement in the OPEN shift.

        Raises:
            NoOpenShiftError: If no shift is OPEN.
            InvalidAmountError: If the amount is not strictly positive.

        """
        shift = cash.add_transaction(
            self._require_cash_shift(),
            type,
            method,
            category,
            amount,
            created_by,
            self.clock(),
            description=description,
        )
        return self.cash_shifts.update(shift)

    def close_cash_shift(
        self,
        final_cash: Number,
        final_transfer: Number,
        closed_by: str,
        orders_fudo: Number = 0,
        orders_pedidos_ya: Number = 0,
    ) -> tuple[CashShift, ShiftReconciliation]:
        """Close the OPEN shift and reconcile it.

        Raises:
            NoOpenShiftError: If no shift is OPEN.

        """
        shift = cash.close_shift(
            self._require_cash_shift(),
            final_cash,
            final_transfer,
            closed_by,
            self.clock(),
            orders_fudo=orders_fudo,
            orders_pedidos_ya=orders_pedidos_ya,
        )
        self.cash_shifts.update(shift)
        return shift, cash.reconcile_shift(shift)

    def cash_statistics(self, period: StatsPeriod) -> ShiftStatistics:
        return cash.shift_statistics(self.cash_shifts.all(), period, self.clock())

    # --- Inventory ---

    def current_inventory_session(self) -> InventorySession | None:
        return inventory.find_open_session(self.inventory_sessions.all())

    def open_inventory_session(
        self, initial_counts: Mapping[str, Number | None], opened_by: str
    ) -> InventorySession:
        """Open an inventory session over the current catalog.

        Raises:
            ShiftAlreadyOpenError: If another session is still OPEN.

        """
        existing = self.current_inventory_session()
        if existing is not None:
            raise ShiftAlreadyOpenError(f"Inventory session {existing.id} is still OPEN")
        session = inventory.open_session(
            self.inventory_items.all(), initial_counts, opened_by, self.clock()
        )
        return self.inventory_sessions.add(session)

    def close_inventory_session(
        self, final_counts: Mapping[str, Number | None], closed_by: str
    ) -> InventorySession:
        """Close the OPEN inventory session.

        Raises:
            NoOpenShiftError: If no session is OPEN.

        """
        session = self.current_inventory_session()
        if session is None:
            raise NoOpenShiftError("There is no OPEN inventory session")
        closed = inventory.close_session(session, final_counts, closed_by, self.clock())
        return self.inventory_sessions.update(closed)

    # --- Finance ---

    def calculator_totals(self, quantities: Mapping[str, Number | None]) -> finance.ProfitTotals:
        return finance.calculate_totals(quantities, self.products.all())

    def payable_costs(self, quantities: Mapping[str, Number | None]) -> finance.PayableCosts:
        """Labor and material still owed after the OPEN shift's cash payments."""
        deductions = cash.cash_deductions(self.current_cash_shift())
        return finance.payable_costs(self.calculator_totals(quantities), deductions)

    def commit_projection(
        self,
        quantities: Mapping[str, Number | None],
        created_by: str,
        real_sales: Number | None = None,
    ) -> ProjectionCommit:
        """Commit a calculation: wallet income, partner balances, projection."""
        commit = finance.commit_projection(
            quantities,
            self.products.all(),
            self.partners.all(),
            created_by,
            self.clock(),
            real_sales=real_sales,
        )
        self.wallet.add(commit.income)
        self.partners.replace_all(commit.partners)
        self.projections.add(commit.projection)
        return commit

    def pay_royalty(
        self,
        partner_id: str,
        created_by: str,
        amount: Number | None = None,
        method: PaymentMethod = PaymentMethod.TRANSFER,
    ) -> WalletTransaction:
        """Pay a partner; ``amount`` defaults to their full balance.

        Raises:
            NotFoundError: If the partner does not exist.
            InvalidAmountError: If the amount is not strictly positive.

        """
        partner, tx = finance.pay_royalty(
            self.partners.get(partner_id), amount, created_by, self.clock(), method=method
        )
        self.wallet.add(tx)
        self.partners.update(partner)
        return tx

    def royalty_pool(self) -> Decimal:
        return finance.royalty_pool(self.partners.all())

    def record_wallet_transaction(
        self,
        type: TransactionType,
        amount: Number,
        category: str,
        description: str,
        created_by: str,
        method: PaymentMethod | None = None,
    ) -> WalletTransaction:
        tx = finance.record_transaction(
            type, amount, category, description, created_by, self.clock(), method=method
        )
        return self.wallet.add(tx)

    def void_wallet_transaction(self, transaction_id: str, deleted_by: str) -> WalletTransaction:
        voided = finance.void_transaction(self.wallet.get(transaction_id), deleted_by, self.clock())
        return self.wallet.update(voided)

    def pay_fixed_expense(
        self, expense_id: str, created_by: str, amount: Number | None = None
    ) -> FixedExpense:
        expense, tx = finance.pay_fixed_expense(
            self.fixed_expenses.get(expense_id), amount, created_by, self.clock()
        )
        self.wallet.add(tx)
        return self.fixed_expenses.update(expense)

    def wallet_balance(self) -> Decimal:
        return finance.wallet_balance(self.wallet.all())

    def payment_alerts(self) -> list[PaymentAlert]:
        return finance.payment_alerts(
            self.fixed_expenses.all(), self.employees.all(), self.clock().date()
        )

    def simulate_purchase(self, cost: Number) -> PurchaseSimulation:
        return finance.simulate_purchase(
            cost, self.wallet_balance(), self.employees.all(), self.fixed_expenses.all()
        )

    # --- Tasks ---

    def assign_task(
        self,
        employee_id: str,
        description: str,
        assigned_by: str,
        details: str | None = None,
    ) -> Task:
        """Add a task to an employee's checklist for today.

        Raises:
            NotFoundError: If the employee does not exist.
            ValidationError: If the description is empty.

        """
        self.employees.get(employee_id)
        task = tasks.create_task(
            employee_id, description, self.clock().date(), assigned_by=assigned_by, details=details
        )
        return self.checklist_tasks.add(task)

    def complete_task(self, task_id: str, completed_by: str, at: str | None = None) -> Task:
        task = self.checklist_tasks.get(task_id)
        return self.checklist_tasks.update(
            tasks.complete_task(task, completed_by, self.clock(), at=at)
        )

    def skip_task(self, task_id: str, skipped_by: str) -> Task:
        task = self.checklist_tasks.get(task_id)
        return self.checklist_tasks.update(tasks.skip_task(task, skipped_by, self.clock()))

    def reset_task(self, task_id: str) -> Task:
        return self.checklist_tasks.update(tasks.reset_task(self.checklist_tasks.get(task_id)))

    def remove_task(self, task_id: str) -> Task:
        return self.checklist_tasks.remove(task_id)

    def checklist_progress(self, employee_id: str) -> float:
        return tasks.checklist_progress(self.checklist_tasks.all(), employee_id)

    def finalize_checklist(self, employee_id: str, finalized_by: str | None) -> ChecklistSnapshot:
        """Archive an employee's checklist and clear it from the board."""
        snapshot, remaining = tasks.finalize_checklist(
            self.checklist_tasks.all(), employee_id, finalized_by, self.clock()
        )
        self.checklist_snapshots.add(snapshot)
        self.checklist_tasks.replace_all(remaining)
        return snapshot

    def employee_checklists(self, employee_id: str) -> list[ChecklistSnapshot]:
        """Archived checklists of an employee, newest first."""
        snapshots = [s for s in self.checklist_snapshots.all() if s.employee_id == employee_id]
        return sorted(snapshots, key=lambda s: (s.date, s.finalized_at), reverse=True)

    def create_admin_task(
        self,
        title: str,
        created_by: str,
        assigned_to: str | None = None,
        description: str = "",
        priority: TaskPriority = TaskPriority.MEDIUM,
        estimated_time: str = "",
        due_date: date | None = None,
    ) -> AdminTask:
        task = tasks.create_admin_task(
            title,
            created_by,
            assigned_to=assigned_to,
            description=description,
            priority=priority,
            estimated_time=estimated_time,
            due_date=due_date,
        )
        return self.admin_tasks.add(task)

    def start_admin_task(self, task_id: str) -> AdminTask:
        return self.admin_tasks.update(tasks.start_task(self.admin_tasks.get(task_id)))

    def request_admin_review(self, task_id: str, user_id: str) -> AdminTask:
        return self.admin_tasks.update(tasks.request_review(self.admin_tasks.get(task_id), user_id))

    def verify_admin_task(self, task_id: str, user_id: str) -> AdminTask:
        """Close a task in REVIEW.

        Raises:
            TaskStateError: If it is not in REVIEW or ``user_id`` did the work.

        """
        verified = tasks.verify_task(self.admin_tasks.get(task_id), user_id, self.clock())
        return self.admin_tasks.update(verified)

    def remove_admin_task(self, task_id: str) -> AdminTask:
        return self.admin_tasks.remove(task_id)
