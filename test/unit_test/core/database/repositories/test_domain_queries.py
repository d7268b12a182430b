"""Unit tests for the per-table repository queries."""

from __future__ import annotations

from datetime import date

from fleetdesk.core.database.entities import (
    Client,
    Driver,
    DriverStatus,
    FuelLog,
    IncidentReport,
    IncidentType,
    Invoice,
    InvoiceStatus,
    LeaseInvoice,
    LeaseStatus,
    Maintenance,
    MaintenanceStatus,
    PartStatus,
    PayrollEmployee,
    PayrollRecord,
    SparePart,
    Trip,
    TripStatus,
    Vehicle,
    VehicleLease,
    VehicleStatus,
    VehicleType,
)


class TestVehiclesAndDrivers:
    async def test_get_many_skips_unknown_ids(self, repos, vehicle):
        found = await repos.vehicles.get_many([vehicle.id, "missing", None])

        assert list(found) == [vehicle.id]
        assert await repos.vehicles.get_many([]) == {}

    async def test_list_by_status(self, repos, vehicle):
        await repos.vehicles.create(
            Vehicle(make="Ford", model="Ranger", registration="SO-2", type=VehicleType.SOFT_SKIN,
                    status=VehicleStatus.INACTIVE)
        )

        active = await repos.vehicles.list_by_status(VehicleStatus.ACTIVE)

        assert [v.id for v in active] == [vehicle.id]

    async def test_active_drivers_sorted_by_name(self, repos):
        await repos.drivers.create(Driver(name="Zahra"))
        await repos.drivers.create(Driver(name="Ali"))
        await repos.drivers.create(Driver(name="Omar", status=DriverStatus.ON_LEAVE))

        assert [d.name for d in await repos.drivers.list_active()] == ["Ali", "Zahra"]


class TestClients:
    async def test_search_is_case_insensitive_and_hides_archived(self, repos):
        await repos.clients.create(Client(name="Acme Logistics"))
        await repos.clients.create(Client(name="ACME Archive", is_archived=True))
        await repos.clients.create(Client(name="Other"))

        assert [c.name for c in await repos.clients.search("acme")] == ["Acme Logistics"]
        assert len(await repos.clients.search("acme", include_archived=True)) == 2


class TestTrips:
    async def test_list_between(self, repos):
        for day in (1, 10, 20):
            await repos.trips.create(Trip(date=date(2025, 3, day)))

        trips = await repos.trips.list_between(date(2025, 3, 5), date(2025, 3, 25))

        assert [t.date.day for t in trips] == [10, 20]
        assert len(await repos.trips.list_between()) == 3

    async def test_assignment_queries(self, repos, driver, vehicle):
        await repos.trips.create(Trip(date=date(2025, 3, 1), time="09:00", driver_id=driver.id))
        await repos.trips.create(Trip(date=date(2025, 3, 1), time="08:00", vehicle_id=vehicle.id))
        await repos.trips.create(
            Trip(date=date(2025, 3, 2), driver_id=driver.id, status=TripStatus.COMPLETED)
        )

        assert len(await repos.trips.list_for_driver(driver.id)) == 2
        assert len(await repos.trips.list_for_driver(driver.id, active_only=True)) == 1
        assert len(await repos.trips.list_for_vehicle(vehicle.id, active_only=True)) == 1
        on_day = await repos.trips.list_on_date(date(2025, 3, 1), driver_id=driver.id, vehicle_id=vehicle.id)
        assert [t.time for t in on_day] == ["08:00", "09:00"]

    async def test_crew_lists_count_as_assignments(self, repos, driver, vehicle):
        escorted = await repos.trips.create(
            Trip(date=date(2025, 3, 1), escort_vehicle_ids=[vehicle.id], assigned_driver_ids=[driver.id])
        )
        carried = await repos.trips.create(Trip(date=date(2025, 3, 2), assigned_vehicle_ids=[vehicle.id]))
        await repos.trips.create(Trip(date=date(2025, 3, 1), escort_vehicle_ids=["other-vehicle"]))
        escorted_id, carried_id = escorted.id, carried.id

        assert {t.id for t in await repos.trips.list_for_vehicle(vehicle.id)} == {escorted_id, carried_id}
        assert [t.id for t in await repos.trips.list_for_driver(driver.id)] == [escorted_id]
        assert [t.id for t in await repos.trips.list_on_date(date(2025, 3, 1), vehicle_id=vehicle.id)] == [escorted_id]
        assert await repos.trips.list_on_date(date(2025, 3, 2), driver_id=driver.id) == []


class TestBilling:
    async def test_overdue_candidates(self, repos):
        await repos.invoices.create(Invoice(id="late", date=date(2025, 1, 1), due_date=date(2025, 1, 31),
                                            status=InvoiceStatus.SENT))
        await repos.invoices.create(Invoice(id="draft", date=date(2025, 1, 1), due_date=date(2025, 1, 31)))
        await repos.invoices.create(Invoice(id="future", date=date(2025, 3, 1), due_date=date(2025, 4, 1),
                                            status=InvoiceStatus.SENT))

        candidates = await repos.invoices.list_overdue_candidates(date(2025, 3, 15))

        assert [i.id for i in candidates] == ["late"]

    async def test_lookup_helpers(self, repos):
        await repos.invoices.create(Invoice(id="a", date=date(2025, 1, 1), due_date=date(2025, 1, 31),
                                            quotation_id="q1"))

        assert (await repos.invoices.find_by_quotation("q1")).id == "a"
        assert await repos.invoices.find_by_quotation("q2") is None
        assert [i.id for i in await repos.invoices.list_by_ids(["a", "b", ""])] == ["a"]
        assert await repos.invoices.list_by_ids([]) == []
        assert [i.id for i in await repos.invoices.list_by_status(InvoiceStatus.DRAFT)] == ["a"]


class TestLeases:
    async def test_active_overlapping(self, repos, vehicle):
        def lease(contract, start, end, status=LeaseStatus.ACTIVE):
            return VehicleLease(vehicle_id=vehicle.id, contract_number=contract, lessee_name="UN",
                                lease_start_date=start, lease_end_date=end, lease_status=status)

        await repos.leases.create(lease("B", date(2025, 1, 1), date(2025, 12, 31)))
        await repos.leases.create(lease("A", date(2025, 3, 20), date(2025, 4, 30)))
        await repos.leases.create(lease("C", date(2025, 1, 1), date(2025, 2, 28)))
        await repos.leases.create(lease("D", date(2025, 1, 1), date(2025, 12, 31), LeaseStatus.TERMINATED))

        overlapping = await repos.leases.list_active_overlapping(date(2025, 3, 1), date(2025, 3, 31))

        assert [l.contract_number for l in overlapping] == ["A", "B"]

    async def test_lease_invoice_lookups(self, repos):
        for month in (1, 2, 3):
            await repos.lease_invoices.create(
                LeaseInvoice(lease_id="l1", invoice_id=f"i{month}", billing_period_start=date(2025, month, 1),
                             billing_period_end=date(2025, month, 28))
            )

        history = await repos.lease_invoices.list_for_lease("l1")
        found = await repos.lease_invoices.find_for_period("l1", date(2025, 2, 1), date(2025, 2, 28))
        between = await repos.lease_invoices.list_between(date(2025, 2, 1), date(2025, 3, 31))

        assert [li.invoice_id for li in history] == ["i3", "i2", "i1"]
        assert found.invoice_id == "i2"
        assert await repos.lease_invoices.find_for_period("l1", date(2025, 2, 1), date(2025, 2, 27)) is None
        assert [li.invoice_id for li in between] == ["i2", "i3"]


class TestWorkshop:
    async def test_maintenance_between_and_for_vehicle(self, repos, vehicle):
        await repos.maintenance.create(Maintenance(vehicle_id=vehicle.id, date=date(2025, 3, 1), description="A",
                                                   status=MaintenanceStatus.COMPLETED))
        await repos.maintenance.create(Maintenance(vehicle_id=vehicle.id, date=date(2025, 4, 1), description="B"))

        assert len(await repos.maintenance.list_between(date(2025, 3, 1), date(2025, 3, 31))) == 1
        assert len(await repos.maintenance.list_between(status=MaintenanceStatus.COMPLETED)) == 1
        assert [m.description for m in await repos.maintenance.list_for_vehicle(vehicle.id)] == ["B", "A"]

    async def test_spare_part_queries(self, repos):
        used = await repos.spare_parts.create(SparePart(name="Pads", quantity_used=2))
        low = await repos.spare_parts.create(SparePart(name="Filter", quantity=1, status=PartStatus.LOW_STOCK))
        out = await repos.spare_parts.create(SparePart(name="Belt", quantity=0, status=PartStatus.OUT_OF_STOCK))

        assert [p.id for p in await repos.spare_parts.list_used()] == [used.id]
        assert [p.id for p in await repos.spare_parts.list_needing_reorder()] == [out.id, low.id]
        assert set(await repos.spare_parts.get_many([used.id, low.id, "x"])) == {used.id, low.id}

    async def test_fuel_logs_between(self, repos, vehicle):
        for day in (1, 15):
            await repos.fuel_logs.create(FuelLog(vehicle_id=vehicle.id, date=date(2025, 3, day), volume=50, cost=60))

        assert len(await repos.fuel_logs.list_between(start=date(2025, 3, 10))) == 1


class TestPayrollAndIncidents:
    async def test_payroll_queries(self, repos):
        active = await repos.payroll_employees.create(PayrollEmployee(name="Ali"))
        await repos.payroll_employees.create(PayrollEmployee(name="Bashir", is_active=False))
        for month in (1, 2):
            await repos.payroll_records.create(
                PayrollRecord(employee_id=active.id, pay_period_start=date(2025, month, 1),
                              pay_period_end=date(2025, month, 28))
            )

        assert [e.name for e in await repos.payroll_employees.list_active()] == ["Ali"]
        records = await repos.payroll_records.list_for_employee(active.id)
        assert [r.pay_period_start.month for r in records] == [2, 1]

    async def test_incidents_for_vehicle(self, repos, vehicle):
        for day in (3, 7):
            await repos.incidents.create(
                IncidentReport(vehicle_id=vehicle.id, incident_date=date(2025, 3, day),
                               incident_type=IncidentType.BREAKDOWN, location="Road", description="Stalled",
                               reported_by="Ali")
            )

        incidents = await repos.incidents.list_for_vehicle(vehicle.id)

        assert [i.incident_date.day for i in incidents] == [7, 3]
