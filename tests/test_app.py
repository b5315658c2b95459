"""Tests for the Backoffice facade over an in-memory store."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from backoffice_core import Backoffice
from backoffice_core.access import Permissions, User, UserRole
from backoffice_core.cash import (
    CashCategory,
    ShiftStatus,
    StatsPeriod,
    TransactionMethod,
    TransactionType,
    open_shift,
)
from backoffice_core.exceptions import (
    NoOpenShiftError,
    NotFoundError,
    ShiftAlreadyOpenError,
    ShiftStateError,
    TaskStateError,
    ValidationError,
)
from backoffice_core.finance import FixedExpense, PurchaseVerdict
from backoffice_core.payroll import Employee, SanctionType
from backoffice_core.storage import MemoryStore, to_jsonable
from backoffice_core.tasks import AdminTaskStatus, TaskStatus

NOW = datetime(2025, 3, 10, 18, 0)


class FixedClock:
    """Clock whose time tests can move forward."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def office(store: MemoryStore, clock: FixedClock) -> Backoffice:
    """Facade with one employee."""
    office = Backoffice(store, clock=clock)
    office.add_employee(Employee("e1", "Ana", "Cocina", 300000, "17:00", "01:00"))
    return office


def test_attendance_and_holidays(office: Backoffice) -> None:
    """Test overtime with and without holidays, fixed at entry time."""
    regular = office.record_attendance("e1", "17:00", "02:30", date(2025, 3, 3))
    assert regular.overtime_amount == Decimal("3375.00")
    assert regular.overtime_hours == Decimal("1.50")
    assert not regular.paid

    assert office.toggle_holiday(date(2025, 3, 4)) is True
    holiday = office.record_attendance("e1", "17:00", "02:30", date(2025, 3, 4))
    assert holiday.overtime_amount == Decimal("4500.00")
    assert holiday.is_holiday

    assert office.toggle_holiday(date(2025, 3, 4)) is False
    assert office.records.get(holiday.id).overtime_amount == Decimal("4500.00")
    assert office.records.all()[0].id == holiday.id


def test_attendance_skips_unknown_employee_and_bad_times(office: Backoffice) -> None:
    """Test that nothing is stored when the entry cannot be computed."""
    assert office.record_attendance("nobody", "17:00", "02:30", date(2025, 3, 3)) is None
    assert office.record_attendance("e1", "", "02:30", date(2025, 3, 3)) is None
    assert office.record_attendance("e1", "17:00", "2x:30", date(2025, 3, 3)) is None
    assert len(office.records) == 0


def test_monthly_summary_and_payment(office: Backoffice) -> None:
    """Test the monthly summary and paying overtime records."""
    record = office.record_attendance("e1", "17:00", "02:30", date(2025, 3, 3))
    office.record_attendance("e1", "17:00", "01:00", date(2025, 3, 5))
    office.record_absence("e1", date(2025, 3, 6), "Enfermedad")

    summary = office.employee_month_summary("e1", 2025, 3)
    assert summary.total_debt == Decimal("3375.00")
    assert summary.total_paid == 0
    assert summary.absences == 1

    office.toggle_attendance_paid(record.id)
    summary = office.employee_month_summary("e1", 2025, 3)
    assert summary.total_debt == 0
    assert summary.total_paid == Decimal("3375.00")

    report = office.payroll_report(2025, 3)
    assert list(report["employee_id"]) == ["e1"]


def test_absence_validation(office: Backoffice) -> None:
    with pytest.raises(NotFoundError):
        office.record_absence("nobody", date(2025, 3, 6), "Enfermedad")
    with pytest.raises(ValidationError):
        office.record_absence("e1", date(2025, 3, 6), "  ")


def test_salary_and_archive(office: Backoffice) -> None:
    """Test that paying a salary writes the wallet and marks the employee."""
    tx = office.pay_salary("e1", "Admin")

    assert tx.amount == Decimal("300000.00")
    assert tx.category == "Sueldos"
    assert office.wallet_balance() == Decimal("-300000.00")
    assert office.employees.get("e1").last_payment_date == NOW

    archived = office.archive_employee("e1")
    assert not archived.active
    assert office.employees.get("e1").active is False


def test_sanctions(office: Backoffice) -> None:
    """Test adding and voiding a sanction."""
    sanction = office.add_sanction(
        "e1", date(2025, 3, 7), SanctionType.DISCOUNT, "Llegada tarde", amount="5000", created_by="Admin"
    )
    assert sanction.amount == Decimal("5000.00")

    voided = office.void_sanction(sanction.id, "Admin")
    assert voided.is_deleted
    assert office.sanctions.get(sanction.id).deleted_by == "Admin"

    with pytest.raises(NotFoundError):
        office.add_sanction("nobody", date(2025, 3, 7), SanctionType.WARNING, "x")


def test_cash_shift_lifecycle(office: Backoffice, clock: FixedClock) -> None:
    """Test one OPEN shift at a time, movements and reconciliation."""
    assert office.current_cash_shift() is None
    with pytest.raises(NoOpenShiftError):
        office.add_cash_transaction(
            TransactionType.INCOME, TransactionMethod.CASH, CashCategory.SALE, 100, "Ana"
        )

    office.open_cash_shift(5000, "Ana")
    with pytest.raises(ShiftAlreadyOpenError):
        office.open_cash_shift(1000, "Luis")

    office.add_cash_transaction(
        TransactionType.INCOME, TransactionMethod.CASH, CashCategory.SALE, 2000, "Ana"
    )
    office.add_cash_transaction(
        TransactionType.EXPENSE, TransactionMethod.CASH, CashCategory.SUPPLIES, 500, "Ana"
    )

    clock.now = datetime(2025, 3, 11, 1, 0)
    shift, rec = office.close_cash_shift("6500", "0", "Ana", orders_fudo=10, orders_pedidos_ya=5)

    assert shift.status == ShiftStatus.CLOSED
    assert rec.expected_cash == Decimal("6500.00")
    assert rec.is_balanced
    assert office.current_cash_shift() is None

    stats = office.cash_statistics(StatsPeriod.WEEK)
    assert stats.shifts == 1
    assert stats.total_orders == 15
    assert stats.avg_ticket == Decimal("133.33")

    with pytest.raises(NoOpenShiftError):
        office.close_cash_shift(0, 0, "Ana")


def test_duplicate_open_shifts_in_store(store: MemoryStore, clock: FixedClock) -> None:
    """Test that two OPEN shifts in stored data are reported, not guessed."""
    store.save(
        "cash_shifts",
        to_jsonable([open_shift(0, "Ana", NOW, shift_id="a"), open_shift(0, "Luis", NOW, shift_id="b")]),
    )
    office = Backoffice(store, clock=clock)
    with pytest.raises(ShiftStateError):
        office.current_cash_shift()


def test_inventory_session(office: Backoffice) -> None:
    """Test the inventory session lifecycle through the facade."""
    office.open_inventory_session({"1": 10}, "Ana")
    with pytest.raises(ShiftAlreadyOpenError):
        office.open_inventory_session({}, "Ana")

    closed = office.close_inventory_session({"1": 3}, "Ana")
    assert closed.count_for("1").consumption == Decimal("7")
    assert office.current_inventory_session() is None

    with pytest.raises(NoOpenShiftError):
        office.close_inventory_session({}, "Ana")


def test_calculator_commit_and_royalties(office: Backoffice) -> None:
    """Test committing a calculation and paying a partner from it."""
    totals = office.calculator_totals({"1": 2})
    assert totals.total == Decimal("13200.00")

    commit = office.commit_projection({"1": 2}, "Admin")
    assert commit.adjusted_partner_profit == Decimal("4268.00")
    assert office.partners.get("1").balance == Decimal("1067.00")
    assert office.royalty_pool() == Decimal("4268.00")
    assert len(office.projections) == 1

    tx = office.pay_royalty("1", "Admin")
    assert tx.amount == Decimal("1067.00")
    assert office.partners.get("1").balance == 0
    assert office.royalty_pool() == Decimal("3201.00")
    assert office.wallet_balance() == Decimal("12133.00")

    with pytest.raises(NotFoundError):
        office.pay_royalty("404", "Admin")


def test_payable_costs_use_open_shift(office: Backoffice) -> None:
    """Test that staff expenses of the OPEN shift reduce payable labor."""
    office.open_cash_shift(0, "Ana")
    office.add_cash_transaction(
        TransactionType.EXPENSE, TransactionMethod.CASH, CashCategory.STAFF, 1000, "Ana"
    )

    costs = office.payable_costs({"1": 1})
    assert costs.labor == Decimal("1200.00")
    assert costs.material == Decimal("1352.00")


def test_wallet_expenses_and_simulation(office: Backoffice) -> None:
    """Test wallet entries, voiding, fixed expenses and the purchase check."""
    office.record_wallet_transaction(TransactionType.INCOME, 500000, "Ventas", "Aporte", "Admin")
    typo = office.record_wallet_transaction(TransactionType.EXPENSE, 999, "Otros", "Error", "Admin")
    office.void_wallet_transaction(typo.id, "Admin")
    assert office.wallet_balance() == Decimal("500000.00")

    office.fixed_expenses.add(
        FixedExpense("f1", "Alquiler", Decimal("100000"), date(2025, 3, 12))
    )
    assert [a.title for a in office.payment_alerts()] == ["Vence pronto: Alquiler"]

    sim = office.simulate_purchase(50000)
    assert sim.obligations == Decimal("400000.00")
    assert sim.available == Decimal("100000.00")
    assert sim.verdict == PurchaseVerdict.SAFE

    expense = office.pay_fixed_expense("f1", "Admin", amount=40000)
    assert expense.paid_amount == Decimal("40000.00")
    assert not expense.is_paid
    expense = office.pay_fixed_expense("f1", "Admin")
    assert expense.is_paid
    assert office.wallet_balance() == Decimal("400000.00")
    assert office.payment_alerts() == []


def test_persistence_across_instances(office: Backoffice, store: MemoryStore) -> None:
    """Test that a new facade over the same store sees saved data."""
    office.record_attendance("e1", "17:00", "02:30", date(2025, 3, 3))
    office.toggle_holiday(date(2025, 5, 25))
    office.open_cash_shift(5000, "Ana")

    reopened = Backoffice(store, clock=lambda: NOW)
    assert reopened.employees.get("e1").monthly_salary == Decimal("300000.00")
    assert reopened.records.all()[0].overtime_amount == Decimal("3375.00")
    assert reopened.holidays.get().is_holiday(date(2025, 5, 25))
    assert reopened.current_cash_shift().initial_amount == Decimal("5000.00")


def test_run_migrations(store: MemoryStore) -> None:
    """Test that legacy ADMIN users are upgraded once."""
    office = Backoffice(store)
    office.users.add(User("u1", "root", "root@example.com", "Root", UserRole.ADMIN, Permissions(view_hr=True)))

    assert office.run_migrations() is True
    assert Backoffice(store).users.get("u1").permissions == Permissions.full()
    assert Backoffice(store).run_migrations() is False


def test_checklist_lifecycle(office: Backoffice, store: MemoryStore, clock: FixedClock) -> None:
    """Test assigning, completing and finalizing an employee checklist."""
    first = office.assign_task("e1", "Limpiar barra", assigned_by="Admin")
    second = office.assign_task("e1", "Cortar salmon", assigned_by="Admin")
    assert first.date == NOW.date()
    with pytest.raises(NotFoundError):
        office.assign_task("nobody", "Limpiar", assigned_by="Admin")

    done = office.complete_task(first.id, "Ana")
    assert done.completed_at == "18:00"
    assert office.checklist_progress("e1") == 50.0
    office.skip_task(second.id, "Ana")
    with pytest.raises(TaskStateError):
        office.complete_task(second.id, "Ana")
    assert office.reset_task(second.id).status == TaskStatus.PENDING

    clock.now = datetime(2025, 3, 10, 23, 15)
    snapshot = office.finalize_checklist("e1", "Ana")
    assert snapshot.finalized_at == "23:15"
    assert office.checklist_tasks.all() == []

    reopened = Backoffice(store, clock=clock)
    [archived] = reopened.employee_checklists("e1")
    assert archived == snapshot
    assert archived.tasks[1].status == TaskStatus.COMPLETED
    assert reopened.employee_checklists("e2") == []


def test_admin_task_board(office: Backoffice, store: MemoryStore) -> None:
    """Test the board workflow is persisted step by step."""
    task = office.create_admin_task("Renovar habilitacion", "u1", due_date=date(2025, 3, 20))
    office.start_admin_task(task.id)
    office.request_admin_review(task.id, "u1")
    with pytest.raises(TaskStateError):
        office.verify_admin_task(task.id, "u1")

    verified = office.verify_admin_task(task.id, "u2")
    assert verified.status == AdminTaskStatus.DONE
    assert verified.verified_at == NOW

    stored = Backoffice(store).admin_tasks.get(task.id)
    assert stored == verified
    office.remove_admin_task(task.id)
    with pytest.raises(NotFoundError):
        office.admin_tasks.get(task.id)
