"""Unit tests for loading the financial report from the database."""

from datetime import date

import pytest
import pytest_asyncio

from fleetdesk.core.database.entities import (
    FuelLog,
    Invoice,
    InvoiceStatus,
    LeaseInvoice,
    LeaseInvoiceStatus,
    Maintenance,
    MaintenanceStatus,
    SparePart,
    Trip,
)
from fleetdesk.server.services.finance_report import build_financial_report, load_lease_revenue

MARCH_START = date(2025, 3, 1)
MARCH_END = date(2025, 3, 31)


async def add_lease_invoice(repos, lease_id: str, amount: float, status, invoice_status) -> LeaseInvoice:
    invoice = await repos.invoices.create(
        Invoice(date=MARCH_START, due_date=MARCH_END, total_amount=amount, status=invoice_status)
    )
    return await repos.lease_invoices.create(
        LeaseInvoice(
            lease_id=lease_id,
            invoice_id=invoice.id,
            billing_period_start=MARCH_START,
            billing_period_end=MARCH_END,
            amount=amount,
            status=status,
        )
    )


@pytest_asyncio.fixture
async def ledger(repos, vehicle):
    for day, amount in ((date(2025, 2, 10), 500), (date(2025, 3, 5), 700), (date(2025, 4, 2), 900)):
        await repos.trips.create(Trip(date=day, amount=amount))

    for day, cost, status in (
        (date(2025, 3, 3), 150, MaintenanceStatus.COMPLETED),
        (date(2025, 3, 4), 999, MaintenanceStatus.SCHEDULED),
        (date(2025, 1, 20), 40, MaintenanceStatus.COMPLETED),
    ):
        await repos.maintenance.create(
            Maintenance(vehicle_id=vehicle.id, date=day, description="Service", cost=cost, status=status)
        )

    for day, cost in ((date(2025, 3, 6), 80), (date(2025, 2, 1), 20)):
        await repos.fuel_logs.create(FuelLog(vehicle_id=vehicle.id, date=day, volume=40, cost=cost))

    await repos.spare_parts.create(
        SparePart(name="Brake pad", quantity_used=2, unit_price=30, last_used_date=date(2025, 3, 8))
    )
    await repos.spare_parts.create(SparePart(name="Wiper", quantity_used=1, unit_price=10))
    await repos.spare_parts.create(SparePart(name="Bulb", quantity=4, unit_price=5, purchase_date=date(2025, 3, 2)))

    await add_lease_invoice(repos, "lease-1", 1000, LeaseInvoiceStatus.GENERATED, InvoiceStatus.PAID)
    await add_lease_invoice(repos, "lease-2", 500, LeaseInvoiceStatus.PAID, InvoiceStatus.DRAFT)
    await add_lease_invoice(repos, "lease-3", 300, LeaseInvoiceStatus.GENERATED, InvoiceStatus.SENT)


class TestLoadLeaseRevenue:
    async def test_joins_invoice_status(self, repos, ledger):
        entries = await load_lease_revenue(repos, MARCH_START, MARCH_END)

        by_amount = {entry.amount: entry for entry in entries}
        assert set(by_amount) == {1000, 500, 300}
        assert by_amount[1000].invoice_status == InvoiceStatus.PAID
        assert by_amount[500].status == LeaseInvoiceStatus.PAID
        assert by_amount[300].billing_period_start == MARCH_START

    async def test_missing_invoice_has_no_status(self, repos):
        await repos.lease_invoices.create(
            LeaseInvoice(
                lease_id="lease-9",
                invoice_id="gone",
                billing_period_start=MARCH_START,
                billing_period_end=MARCH_END,
                amount=100,
            )
        )

        (entry,) = await load_lease_revenue(repos)

        assert entry.invoice_status is None

    async def test_window_excludes_other_periods(self, repos, ledger):
        assert await load_lease_revenue(repos, date(2025, 4, 1), date(2025, 4, 30)) == []


class TestBuildFinancialReport:
    async def test_march_window(self, repos, ledger):
        report = await build_financial_report(repos, MARCH_START, MARCH_END)

        assert report.trip_revenue == pytest.approx(700)
        assert report.lease_revenue == pytest.approx(1500)
        assert report.total_revenue == pytest.approx(2200)
        assert report.maintenance_costs == pytest.approx(150)
        assert report.fuel_costs == pytest.approx(80)
        assert report.spare_parts_costs == pytest.approx(60)
        assert report.total_expenses == pytest.approx(290)
        assert report.profit == pytest.approx(1910)
        assert report.trip_count == 1
        assert [m.key for m in report.monthly] == ["2025-03"]

    async def test_without_window_includes_undated_parts(self, repos, ledger):
        report = await build_financial_report(repos)

        assert report.trip_revenue == pytest.approx(2100)
        assert report.maintenance_costs == pytest.approx(190)
        assert report.fuel_costs == pytest.approx(100)
        assert report.spare_parts_costs == pytest.approx(70)
        assert report.trip_count == 3
        assert [m.key for m in report.monthly] == ["2025-01", "2025-02", "2025-03", "2025-04"]

    async def test_empty_database(self, repos):
        report = await build_financial_report(repos, MARCH_START, MARCH_END)

        assert report.total_revenue == 0
        assert report.profit_margin == 0
        assert report.monthly == []
