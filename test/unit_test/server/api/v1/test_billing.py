"""API tests for invoices and quotations."""

import json
from datetime import date

import pytest
import pytest_asyncio
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

ITEMS = [
    {"description": "Airport transfer", "quantity": 2, "unit_price": 100},
    {"description": "Escort vehicle", "quantity": 1, "unit_price": 50},
]


@pytest_asyncio.fixture
async def invoice(client: AsyncClient, api_client):
    response = await client.post(
        "/api/v1/invoices",
        json={
            "client_id": api_client["id"],
            "date": "2025-03-01",
            "due_date": "2025-03-31",
            "items": ITEMS,
            "vat_percentage": 10,
            "total_amount": 99999,
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest_asyncio.fixture
async def quotation(client: AsyncClient, api_client):
    response = await client.post(
        "/api/v1/quotations",
        json={
            "client_id": api_client["id"],
            "date": "2025-03-01",
            "valid_until": "2025-03-31",
            "items": ITEMS,
            "discount_percentage": 10,
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestInvoices:
    async def test_total_is_computed(self, invoice):
        assert invoice["total_amount"] == pytest.approx(275.0)
        assert invoice["status"] == "draft"
        assert [item["amount"] for item in invoice["items"]] == [200, 50]

    async def test_invalid_items_list_every_problem(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/invoices",
            json={
                "date": "2025-03-01",
                "due_date": "2025-03-31",
                "items": [{"description": "ok", "quantity": 1, "unit_price": -5}, {"quantity": 1}],
            },
        )

        assert response.status_code == 422
        assert response.json() == {
            "detail": "Invalid line items",
            "problems": ["Item 1: unit price cannot be negative", "Item 2: description is required"],
        }

    async def test_unknown_client(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/invoices",
            json={"client_id": "ghost", "date": "2025-03-01", "due_date": "2025-03-31", "items": ITEMS},
        )

        assert response.status_code == 404

    async def test_update_recomputes_total(self, client: AsyncClient, invoice):
        response = await client.patch(f"/api/v1/invoices/{invoice['id']}", json={"vat_percentage": 0})

        assert response.json()["total_amount"] == pytest.approx(250.0)

    async def test_payments(self, client: AsyncClient, invoice):
        partial = await client.post(
            f"/api/v1/invoices/{invoice['id']}/payments",
            json={"amount": 75, "payment_date": "2025-03-05", "payment_method": "bank_transfer"},
        )
        full = await client.post(f"/api/v1/invoices/{invoice['id']}/payments", json={"amount": 200})

        assert partial.json()["paid_amount"] == 75
        assert partial.json()["status"] == "draft"
        assert full.json()["paid_amount"] == 275
        assert full.json()["status"] == "paid"
        assert full.json()["payment_method"] == "bank_transfer"

    async def test_payment_must_be_positive(self, client: AsyncClient, invoice):
        response = await client.post(f"/api/v1/invoices/{invoice['id']}/payments", json={"amount": 0})

        assert response.status_code == 422

    async def test_mark_overdue(self, client: AsyncClient, invoice, set_today):
        await client.patch(f"/api/v1/invoices/{invoice['id']}", json={"status": "sent"})
        set_today(date(2025, 4, 2))

        response = await client.post("/api/v1/invoices/mark-overdue")

        assert response.json() == {"updated_count": 1, "invoice_ids": [invoice["id"]]}
        listed = await client.get("/api/v1/invoices", params={"invoice_status": "overdue"})
        assert [i["id"] for i in listed.json()] == [invoice["id"]]

    async def test_mark_overdue_ignores_client_date(self, client: AsyncClient, invoice, set_today):
        await client.patch(f"/api/v1/invoices/{invoice['id']}", json={"status": "sent"})
        set_today(date(2025, 3, 20))

        response = await client.post("/api/v1/invoices/mark-overdue", params={"today": "2099-01-01"})

        assert response.json() == {"updated_count": 0, "invoice_ids": []}
        assert (await client.get(f"/api/v1/invoices/{invoice['id']}")).json()["status"] == "sent"

    async def test_pdf_download(self, client: AsyncClient, invoice):
        response = await client.get(f"/api/v1/invoices/{invoice['id']}/pdf")

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.headers["content-disposition"] == (
            f'attachment; filename="Invoice-{invoice["id"][:8].upper()}.pdf"'
        )
        assert response.content.startswith(b"%PDF")

    async def test_send_to_client_email(self, client: AsyncClient, invoice, outbox):
        response = await client.post(f"/api/v1/invoices/{invoice['id']}/send")

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Invoice sent successfully", "email_id": "email_123"}
        (request,) = outbox
        assert str(request.url) == "http://mock/resend/emails"
        assert json.loads(request.content)["to"] == ["billing@acme.example"]
        assert (await client.get(f"/api/v1/invoices/{invoice['id']}")).json()["status"] == "sent"

    async def test_send_to_explicit_recipients(self, client: AsyncClient, invoice, outbox):
        await client.post(f"/api/v1/invoices/{invoice['id']}/send", json={"to": ["cfo@acme.example"]})

        assert json.loads(outbox[0].content)["to"] == ["cfo@acme.example"]

    async def test_send_without_recipient(self, client: AsyncClient):
        created = await client.post(
            "/api/v1/invoices", json={"date": "2025-03-01", "due_date": "2025-03-31", "items": ITEMS}
        )
        invoice_id = created.json()["id"]

        response = await client.post(f"/api/v1/invoices/{invoice_id}/send")

        assert response.status_code == 422
        assert response.json()["detail"] == f"Client email not found for invoice {invoice_id}"

    async def test_delete(self, client: AsyncClient, invoice):
        assert (await client.delete(f"/api/v1/invoices/{invoice['id']}")).status_code == 204
        assert (await client.get(f"/api/v1/invoices/{invoice['id']}/pdf")).status_code == 404


class TestQuotations:
    async def test_total_is_computed(self, quotation):
        assert quotation["total_amount"] == pytest.approx(225.0)

    async def test_convert_once(self, client: AsyncClient, quotation, set_today):
        set_today(date(2025, 3, 15))

        converted = await client.post(f"/api/v1/quotations/{quotation['id']}/convert")
        again = await client.post(f"/api/v1/quotations/{quotation['id']}/convert")

        assert converted.status_code == 201
        body = converted.json()
        assert body["quotation"]["status"] == "approved"
        assert body["invoice"]["quotation_id"] == quotation["id"]
        assert body["invoice"]["due_date"] == "2025-04-14"
        assert body["invoice"]["total_amount"] == pytest.approx(225.0)
        assert again.status_code == 422
        assert again.json()["detail"] == (
            f"Quotation {quotation['id']} was already converted to invoice {body['invoice']['id']}"
        )

    async def test_pdf_download(self, client: AsyncClient, quotation):
        response = await client.get(f"/api/v1/quotations/{quotation['id']}/pdf")

        assert response.headers["content-disposition"] == (
            f'attachment; filename="Quotation-{quotation["id"][:8].upper()}.pdf"'
        )

    async def test_send(self, client: AsyncClient, quotation, outbox):
        response = await client.post(f"/api/v1/quotations/{quotation['id']}/send")

        assert response.json()["message"] == "Quotation sent successfully"
        payload = json.loads(outbox[0].content)
        assert payload["subject"] == f"Quotation #{quotation['id'][:8].upper()} - Fleet Management Services"
        assert payload["attachments"][0]["filename"] == f"Quotation-{quotation['id'][:8].upper()}.pdf"
        assert (await client.get(f"/api/v1/quotations/{quotation['id']}")).json()["status"] == "sent"

    async def test_list_by_status(self, client: AsyncClient, quotation):
        await client.patch(f"/api/v1/quotations/{quotation['id']}", json={"status": "rejected"})

        rejected = await client.get("/api/v1/quotations", params={"quotation_status": "rejected"})
        drafts = await client.get("/api/v1/quotations", params={"quotation_status": "draft"})

        assert [q["id"] for q in rejected.json()] == [quotation["id"]]
        assert drafts.json() == []

    async def test_missing_quotation(self, client: AsyncClient):
        assert (await client.get("/api/v1/quotations/nope")).status_code == 404
        assert (await client.post("/api/v1/quotations/nope/convert")).status_code == 404
