"""Initial fleet back office schema

Revision ID: 20261018_000000
Revises: None
Create Date: 2026-10-18 00:00:00.000000

Creates every table used by the fleetdesk service:
- Fleet tables (vehicles, drivers, trips, fuel logs, incident reports)
- Workshop tables (maintenance, spare parts)
- Finance tables (clients, invoices, quotations, vehicle leases, lease invoices)
- Payroll tables (employees, pay records)

Revision format: YYYYMMDD_HHMMSS_description

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20261018_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id() -> sa.Column:
    return sa.Column("id", sa.String(36), nullable=False)


def _timestamps() -> list:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    """Create all tables."""

    # Create vehicles table
    op.create_table(
        "vehicles",
        _id(),
        sa.Column("make", sa.String(), nullable=False),
        sa.Column("model", sa.String(), nullable=False),
        sa.Column("registration", sa.String(), nullable=False),
        sa.Column("type", sa.String(32), nullable=False),
        sa.Column("status", sa.String(32), nullable=False),
        sa.Column("fuel_type", sa.String(32), nullable=False),
        sa.Column("year", sa.Integer(), nullable=True),
        sa.Column("color", sa.String(), nullable=True),
        sa.Column("vin", sa.String(), nullable=True),
        sa.Column("insurance_expiry", sa.Date(), nullable=True),
        sa.Column("notes", sa.String(), nullable=True),
        sa.Column("image_url", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_vehicles_registration", "registration"),
        sa.Index("ix_vehicles_status", "status"),
        sa.Index("ix_vehicles_created_at", "created_at"),
    )

    # Create drivers table
    op.create_table(
        "drivers",
        _id(),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("license_number", sa.String(), nullable=True),
        sa.Column("license_type", sa.String(), nullable=True),
        sa.Column("license_expiry", sa.Date(), nullable=True),
        sa.Column("contact", sa.String(), nullable=True),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("status", sa.String(32), nullable=False),
        sa.Column("avatar_url", sa.String(), nullable=True),
        sa.Column("document_url", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_drivers_license_number", "license_number"),
        sa.Index("ix_drivers_status", "status"),
        sa.Index("ix_drivers_created_at", "created_at"),
    )

    # Create clients table
    op.create_table(
        "clients",
        _id(),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("type", sa.String(32), nullable=False),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("address", sa.String(), nullable=True),
        sa.Column("contact", sa.String(), nullable=True),
        sa.Column("website", sa.String(), nullable=True),
        sa.Column("is_archived", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_clients_name", "name"),
        sa.Index("ix_clients_is_archived", "is_archived"),
        sa.Index("ix_clients_created_at", "created_at"),
    )

    # Create trips table
    op.create_table(
        "trips",
        _id(),
        sa.Column("client_id", sa.String(36), nullable=True),
        sa.Column("driver_id", sa.String(36), nullable=True),
        sa.Column("vehicle_id", sa.String(36), nullable=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("time", sa.String(5), nullable=True),
        sa.Column("return_time", sa.String(5), nullable=True),
        sa.Column("service_type", sa.String(32), nullable=False),
        sa.Column("status", sa.String(32), nullable=False),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("vehicle_type", sa.String(32), nullable=True),
        sa.Column("pickup_location", sa.String(), nullable=True),
        sa.Column("dropoff_location", sa.String(), nullable=True),
        sa.Column("airline", sa.String(), nullable=True),
        sa.Column("flight_number", sa.String(), nullable=True),
        sa.Column("terminal", sa.String(), nullable=True),
        sa.Column("passengers", sa.Integer(), nullable=True),
        sa.Column("notes", sa.String(), nullable=True),
        sa.Column("special_instructions", sa.String(), nullable=True),
        sa.Column("invoice_id", sa.String(36), nullable=True),
        sa.Column("is_recurring", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("has_security_escort", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("escort_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("escort_vehicle_ids", sa.JSON(), nullable=False),
        sa.Column("assigned_vehicle_ids", sa.JSON(), nullable=False),
        sa.Column("assigned_driver_ids", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_trips_client_id", "client_id"),
        sa.Index("ix_trips_driver_id", "driver_id"),
        sa.Index("ix_trips_vehicle_id", "vehicle_id"),
        sa.Index("ix_trips_date", "date"),
        sa.Index("ix_trips_status", "status"),
        sa.Index("ix_trips_created_at", "created_at"),
    )

    # Create maintenance table
    op.create_table(
        "maintenance",
        _id(),
        sa.Column("vehicle_id", sa.String(36), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("description", sa.String(), nullable=False),
        sa.Column("cost", sa.Float(), nullable=False),
        sa.Column("status", sa.String(32), nullable=False),
        sa.Column("service_provider", sa.String(), nullable=True),
        sa.Column("notes", sa.String(), nullable=True),
        sa.Column("next_scheduled", sa.Date(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_maintenance_vehicle_id", "vehicle_id"),
        sa.Index("ix_maintenance_date", "date"),
        sa.Index("ix_maintenance_status", "status"),
        sa.Index("ix_maintenance_created_at", "created_at"),
    )

    # Create spare_parts table
    op.create_table(
        "spare_parts",
        _id(),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("part_number", sa.String(), nullable=True),
        sa.Column("category", sa.String(), nullable=True),
        sa.Column("manufacturer", sa.String(), nullable=True),
        sa.Column("location", sa.String(), nullable=True),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("quantity_used", sa.Integer(), nullable=False),
        sa.Column("unit_price", sa.Float(), nullable=False),
        sa.Column("min_stock_level", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(32), nullable=False),
        sa.Column("purchase_date", sa.Date(), nullable=True),
        sa.Column("last_used_date", sa.Date(), nullable=True),
        sa.Column("last_ordered", sa.Date(), nullable=True),
        sa.Column("maintenance_id", sa.String(36), nullable=True),
        sa.Column("compatibility", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_spare_parts_name", "name"),
        sa.Index("ix_spare_parts_part_number", "part_number"),
        sa.Index("ix_spare_parts_status", "status"),
        sa.Index("ix_spare_parts_created_at", "created_at"),
    )

    # Create fuel_logs table
    op.create_table(
        "fuel_logs",
        _id(),
        sa.Column("vehicle_id", sa.String(36), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("fuel_type", sa.String(32), nullable=False),
        sa.Column("volume", sa.Float(), nullable=False),
        sa.Column("cost", sa.Float(), nullable=False),
        sa.Column("price_per_liter", sa.Float(), nullable=True),
        sa.Column("mileage", sa.Float(), nullable=True),
        sa.Column("previous_mileage", sa.Float(), nullable=True),
        sa.Column("current_mileage", sa.Float(), nullable=True),
        sa.Column("notes", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_fuel_logs_vehicle_id", "vehicle_id"),
        sa.Index("ix_fuel_logs_date", "date"),
        sa.Index("ix_fuel_logs_created_at", "created_at"),
    )

    # Create invoices table
    op.create_table(
        "invoices",
        _id(),
        sa.Column("client_id", sa.String(36), nullable=True),
        sa.Column("quotation_id", sa.String(36), nullable=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("due_date", sa.Date(), nullable=False),
        sa.Column("status", sa.String(32), nullable=False),
        sa.Column("items", sa.JSON(), nullable=False),
        sa.Column("total_amount", sa.Float(), nullable=False),
        sa.Column("paid_amount", sa.Float(), nullable=False),
        sa.Column("payment_date", sa.Date(), nullable=True),
        sa.Column("payment_method", sa.String(), nullable=True),
        sa.Column("vat_percentage", sa.Float(), nullable=False),
        sa.Column("discount_percentage", sa.Float(), nullable=False),
        sa.Column("notes", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_invoices_client_id", "client_id"),
        sa.Index("ix_invoices_date", "date"),
        sa.Index("ix_invoices_status", "status"),
        sa.Index("ix_invoices_created_at", "created_at"),
    )

    # Create quotations table
    op.create_table(
        "quotations",
        _id(),
        sa.Column("client_id", sa.String(36), nullable=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("valid_until", sa.Date(), nullable=False),
        sa.Column("status", sa.String(32), nullable=False),
        sa.Column("items", sa.JSON(), nullable=False),
        sa.Column("total_amount", sa.Float(), nullable=False),
        sa.Column("vat_percentage", sa.Float(), nullable=False),
        sa.Column("discount_percentage", sa.Float(), nullable=False),
        sa.Column("notes", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_quotations_client_id", "client_id"),
        sa.Index("ix_quotations_date", "date"),
        sa.Index("ix_quotations_status", "status"),
        sa.Index("ix_quotations_created_at", "created_at"),
    )

    # Create vehicle_leases table
    op.create_table(
        "vehicle_leases",
        _id(),
        sa.Column("vehicle_id", sa.String(36), nullable=False),
        sa.Column("contract_number", sa.String(), nullable=False),
        sa.Column("lessee_name", sa.String(), nullable=False),
        sa.Column("lessee_email", sa.String(), nullable=True),
        sa.Column("lessee_phone", sa.String(), nullable=True),
        sa.Column("lessee_address", sa.String(), nullable=True),
        sa.Column("lease_start_date", sa.Date(), nullable=False),
        sa.Column("lease_end_date", sa.Date(), nullable=False),
        sa.Column("monthly_rate", sa.Float(), nullable=False),
        sa.Column("daily_rate", sa.Float(), nullable=False),
        sa.Column("mileage_limit", sa.Integer(), nullable=True),
        sa.Column("lease_status", sa.String(32), nullable=False),
        sa.Column("payment_status", sa.String(32), nullable=False),
        sa.Column("security_deposit", sa.Float(), nullable=False),
        sa.Column("early_termination_fee", sa.Float(), nullable=False),
        sa.Column("insurance_required", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("maintenance_included", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("driver_included", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("fuel_included", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("assigned_driver_id", sa.String(36), nullable=True),
        sa.Column("notes", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_vehicle_leases_vehicle_id", "vehicle_id"),
        sa.Index("ix_vehicle_leases_contract_number", "contract_number"),
        sa.Index("ix_vehicle_leases_lease_status", "lease_status"),
        sa.Index("ix_vehicle_leases_created_at", "created_at"),
    )

    # Create lease_invoices table
    op.create_table(
        "lease_invoices",
        _id(),
        sa.Column("lease_id", sa.String(36), nullable=False),
        sa.Column("invoice_id", sa.String(36), nullable=False),
        sa.Column("billing_period_start", sa.Date(), nullable=False),
        sa.Column("billing_period_end", sa.Date(), nullable=False),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("status", sa.String(32), nullable=False),
        sa.Column("auto_generated", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("lease_id", "billing_period_start", "billing_period_end"),
        sa.Index("ix_lease_invoices_lease_id", "lease_id"),
        sa.Index("ix_lease_invoices_invoice_id", "invoice_id"),
        sa.Index("ix_lease_invoices_billing_period_start", "billing_period_start"),
        sa.Index("ix_lease_invoices_created_at", "created_at"),
    )

    # Create payroll_employees table
    op.create_table(
        "payroll_employees",
        _id(),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("employee_id", sa.String(), nullable=True),
        sa.Column("role", sa.String(32), nullable=False),
        sa.Column("driver_id", sa.String(36), nullable=True),
        sa.Column("base_salary", sa.Float(), nullable=False),
        sa.Column("hourly_rate", sa.Float(), nullable=True),
        sa.Column("bank_account", sa.String(), nullable=True),
        sa.Column("bank_name", sa.String(), nullable=True),
        sa.Column("contact", sa.String(), nullable=True),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("notes", sa.String(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_payroll_employees_name", "name"),
        sa.Index("ix_payroll_employees_employee_id", "employee_id"),
        sa.Index("ix_payroll_employees_is_active", "is_active"),
        sa.Index("ix_payroll_employees_created_at", "created_at"),
    )

    # Create payroll_records table
    op.create_table(
        "payroll_records",
        _id(),
        sa.Column("employee_id", sa.String(36), nullable=False),
        sa.Column("pay_period_start", sa.Date(), nullable=False),
        sa.Column("pay_period_end", sa.Date(), nullable=False),
        sa.Column("base_salary", sa.Float(), nullable=False),
        sa.Column("hours_worked", sa.Float(), nullable=False),
        sa.Column("overtime_hours", sa.Float(), nullable=False),
        sa.Column("overtime_rate", sa.Float(), nullable=False),
        sa.Column("bonuses", sa.Float(), nullable=False),
        sa.Column("deductions", sa.Float(), nullable=False),
        sa.Column("allowances", sa.Float(), nullable=False),
        sa.Column("status", sa.String(32), nullable=False),
        sa.Column("payment_date", sa.Date(), nullable=True),
        sa.Column("payment_method", sa.String(), nullable=True),
        sa.Column("notes", sa.String(), nullable=True),
        sa.Column("gross_pay", sa.Float(), nullable=False),
        sa.Column("net_pay", sa.Float(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_payroll_records_employee_id", "employee_id"),
        sa.Index("ix_payroll_records_status", "status"),
        sa.Index("ix_payroll_records_created_at", "created_at"),
    )

    # Create vehicle_incident_reports table
    op.create_table(
        "vehicle_incident_reports",
        _id(),
        sa.Column("vehicle_id", sa.String(36), nullable=False),
        sa.Column("driver_id", sa.String(36), nullable=True),
        sa.Column("incident_date", sa.Date(), nullable=False),
        sa.Column("incident_time", sa.String(5), nullable=True),
        sa.Column("incident_type", sa.String(32), nullable=False),
        sa.Column("severity", sa.String(32), nullable=False),
        sa.Column("status", sa.String(32), nullable=False),
        sa.Column("location", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=False),
        sa.Column("reported_by", sa.String(), nullable=False),
        sa.Column("injuries_reported", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("third_party_involved", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("third_party_details", sa.String(), nullable=True),
        sa.Column("witness_details", sa.String(), nullable=True),
        sa.Column("police_report_number", sa.String(), nullable=True),
        sa.Column("insurance_claim_number", sa.String(), nullable=True),
        sa.Column("estimated_damage_cost", sa.Float(), nullable=True),
        sa.Column("actual_repair_cost", sa.Float(), nullable=True),
        sa.Column("photos_attached", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("follow_up_required", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("follow_up_date", sa.Date(), nullable=True),
        sa.Column("damage_details", sa.String(), nullable=True),
        sa.Column("notes", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_vehicle_incident_reports_vehicle_id", "vehicle_id"),
        sa.Index("ix_vehicle_incident_reports_driver_id", "driver_id"),
        sa.Index("ix_vehicle_incident_reports_incident_date", "incident_date"),
        sa.Index("ix_vehicle_incident_reports_status", "status"),
        sa.Index("ix_vehicle_incident_reports_created_at", "created_at"),
    )


def downgrade() -> None:
    """Drop all tables created in upgrade."""
    op.drop_table("vehicle_incident_reports")
    op.drop_table("payroll_records")
    op.drop_table("payroll_employees")
    op.drop_table("lease_invoices")
    op.drop_table("vehicle_leases")
    op.drop_table("quotations")
    op.drop_table("invoices")
    op.drop_table("fuel_logs")
    op.drop_table("spare_parts")
    op.drop_table("maintenance")
    op.drop_table("trips")
    op.drop_table("clients")
    op.drop_table("drivers")
    op.drop_table("vehicles")
