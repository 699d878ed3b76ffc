"""Tests for the resource facades: method, path and body of every call."""

import json
from datetime import datetime

import pytest

from unit import Unit
from unit.errors import UnitValidationError
from unit.helpers import create_relationship
from unit.models import (
    AchPayment,
    BookPayment,
    CloseAccountRequest,
    CreateTokenVerificationRequest,
    CreateTokenVerificationAttributes,
    UnitEmptyResponse,
    UnitError,
    build_create_payment_request,
)

NOT_FOUND = {"errors": [{"status": "404", "title": "Not Found"}]}


def resource(type_, id_="1", **attributes):
    return {"data": {"id": id_, "type": type_, "attributes": attributes, "relationships": {}}}


class TestPayments:
    @pytest.mark.asyncio
    async def test_create_verified(self, unit, recorder, ach_payment_data, verified_request_data):
        recorder.reply(201, {"data": ach_payment_data})
        request = build_create_payment_request(
            amount=500,
            direction="Credit",
            description="Payroll",
            account_id="10001",
            plaid_processor_token="tok_abc",
            counterparty_name="Jane Doe",
        )
        resp = await unit.payments.create(request)
        assert isinstance(resp.data, AchPayment)
        assert recorder.last.method == "POST"
        assert recorder.last.url.path == "/payments"
        assert recorder.last_json() == {"data": verified_request_data}

    @pytest.mark.asyncio
    async def test_create_from_dict(self, unit, recorder, book_payment_data):
        recorder.reply(201, {"data": book_payment_data})
        body = {
            "type": "bookPayment",
            "attributes": {"amount": 125000, "description": "Rent", "idempotencyKey": "rent-march"},
            "relationships": {
                "account": {"data": {"type": "depositAccount", "id": "10001"}},
                "counterpartyAccount": {"data": {"type": "depositAccount", "id": "10002"}},
            },
        }
        resp = await unit.payments.create(body)
        assert isinstance(resp.data, BookPayment)
        assert recorder.last_json() == {"data": body}

    @pytest.mark.asyncio
    async def test_create_invalid_shape_sends_nothing(self, unit, recorder):
        with pytest.raises(UnitValidationError):
            await unit.payments.create({"type": "achPayment", "attributes": {"amount": 5}, "relationships": {}})
        with pytest.raises(UnitValidationError):
            await unit.payments.create("not a request")
        assert recorder.requests == []

    @pytest.mark.asyncio
    async def test_create_remote_error(self, unit, recorder, verified_request_data):
        recorder.reply(400, {"errors": [{"status": "400", "title": "Invalid processor token"}]})
        resp = await unit.payments.create(verified_request_data)
        assert isinstance(resp, UnitError)
        assert unit.is_error(resp)
        assert resp.title == "Invalid processor token"

    @pytest.mark.asyncio
    async def test_get(self, unit, recorder, ach_payment_data):
        recorder.reply(200, {"data": ach_payment_data, "included": [{"type": "individualCustomer", "id": "555"}]})
        resp = await unit.payments.get("1", include="customer")
        assert recorder.last.method == "GET"
        assert recorder.last.url.path == "/payments/1"
        assert recorder.last.url.params["include"] == "customer"
        assert resp.data.attributes.status == "Pending"
        assert resp.included[0]["id"] == "555"

    @pytest.mark.asyncio
    async def test_get_not_found(self, unit, recorder):
        recorder.reply(404, NOT_FOUND)
        resp = await unit.payments.get("9")
        assert isinstance(resp, UnitError)
        assert resp.status == "404"

    @pytest.mark.asyncio
    async def test_error_with_bare_string_entries(self, unit, recorder):
        recorder.reply(400, {"errors": ["amount is invalid"]})
        resp = await unit.payments.get("1")
        assert isinstance(resp, UnitError)
        assert resp.errors[0].detail == "amount is invalid"

    @pytest.mark.asyncio
    async def test_malformed_error_entry(self, unit, recorder):
        recorder.reply(400, {"errors": [{"status": "400", "title": ["not", "a", "string"]}]})
        with pytest.raises(UnitValidationError):
            await unit.payments.get("1")

    @pytest.mark.asyncio
    async def test_get_unexpected_body(self, unit, recorder, ach_payment_data):
        ach_payment_data["type"] = "wirePayment"
        recorder.reply(200, {"data": ach_payment_data})
        with pytest.raises(UnitValidationError):
            await unit.payments.get("1")

    @pytest.mark.asyncio
    async def test_get_empty_id(self, unit, recorder):
        with pytest.raises(UnitValidationError):
            await unit.payments.get("  ")
        assert recorder.requests == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payment_id", ["../accounts/1", "1?include=x", "1#frag"])
    async def test_get_rejects_path_characters(self, unit, recorder, payment_id):
        with pytest.raises(UnitValidationError):
            await unit.payments.get(payment_id)
        assert recorder.requests == []

    @pytest.mark.asyncio
    async def test_list(self, unit, recorder, ach_payment_data, book_payment_data):
        recorder.reply(
            200,
            {"data": [ach_payment_data, book_payment_data], "meta": {"pagination": {"total": 2, "limit": 10, "offset": 0}}},
        )
        resp = await unit.payments.list(
            account_id="10001",
            tags={"env": "test"},
            status=["Pending", "Sent"],
            limit=10,
            offset=0,
            sort="-createdAt",
        )
        params = recorder.last.url.params
        assert params["filter[accountId]"] == "10001"
        assert json.loads(params["filter[tags]"]) == {"env": "test"}
        assert params["filter[status][0]"] == "Pending"
        assert params["filter[status][1]"] == "Sent"
        assert params["page[limit]"] == "10"
        assert params["page[offset]"] == "0"
        assert params["sort"] == "-createdAt"
        assert "filter[customerId]" not in params
        assert len(resp) == 2
        assert resp.total == 2
        assert isinstance(resp.data[1], BookPayment)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("kwargs", [{"limit": 0}, {"limit": 1001}, {"offset": -1}])
    async def test_list_bad_paging(self, unit, recorder, kwargs):
        with pytest.raises(UnitValidationError):
            await unit.payments.list(**kwargs)
        assert recorder.requests == []

    @pytest.mark.asyncio
    async def test_update_tags(self, unit, recorder, ach_payment_data):
        recorder.reply(200, {"data": ach_payment_data})
        await unit.payments.update("1", {"type": "achPayment", "attributes": {"tags": {"env": "prod"}}})
        assert recorder.last.method == "PATCH"
        assert recorder.last.url.path == "/payments/1"
        assert recorder.last_json() == {"data": {"type": "achPayment", "attributes": {"tags": {"env": "prod"}}}}

    @pytest.mark.asyncio
    async def test_update_tags_shortcut(self, unit, recorder, book_payment_data):
        recorder.reply(200, {"data": book_payment_data})
        resp = await unit.payments.update_tags("2", {"k": "v"}, type="bookPayment")
        assert isinstance(resp.data, BookPayment)
        assert recorder.last_json()["data"]["type"] == "bookPayment"

    @pytest.mark.asyncio
    async def test_update_tags_needs_type(self, unit, recorder):
        with pytest.raises(TypeError):
            await unit.payments.update_tags("1", {"k": "v"})
        assert recorder.requests == []

    @pytest.mark.asyncio
    async def test_update_rejects_other_fields_before_sending(self, unit, recorder):
        with pytest.raises(UnitValidationError):
            await unit.payments.update("1", {"type": "achPayment", "attributes": {"tags": {}, "status": "Canceled"}})
        assert recorder.requests == []


class TestAccounts:
    @pytest.mark.asyncio
    async def test_create(self, unit, recorder):
        recorder.reply(201, resource("depositAccount", "10001", balance=0, available=0))
        resp = await unit.accounts.create(
            {
                "attributes": {"depositProduct": "checking", "tags": {"purpose": "payroll"}},
                "relationships": {"customer": create_relationship("individualCustomer", "555")},
            }
        )
        assert resp.data.balance == 0
        assert recorder.last.url.path == "/accounts"
        assert recorder.last_json() == {
            "data": {
                "type": "depositAccount",
                "attributes": {"depositProduct": "checking", "tags": {"purpose": "payroll"}},
                "relationships": {"customer": {"data": {"type": "individualCustomer", "id": "555"}}},
            }
        }

    @pytest.mark.asyncio
    async def test_get_and_list(self, unit, recorder):
        recorder.reply(200, resource("depositAccount", "10001", balance=1500))
        recorder.reply(200, {"data": [resource("depositAccount")["data"]]})
        resp = await unit.accounts.get("10001")
        assert resp.data.balance == 1500
        await unit.accounts.list(customer_id="555")
        assert recorder.last.url.path == "/accounts"
        assert recorder.last.url.params["filter[customerId]"] == "555"

    @pytest.mark.asyncio
    async def test_update(self, unit, recorder):
        recorder.reply(200, resource("depositAccount"))
        await unit.accounts.update("1", {"attributes": {"tags": {"a": "b"}}})
        assert recorder.last.method == "PATCH"
        assert recorder.last_json() == {"data": {"type": "depositAccount", "attributes": {"tags": {"a": "b"}}}}

    @pytest.mark.asyncio
    async def test_close_default_reason(self, unit, recorder):
        recorder.reply(200, resource("depositAccount", status="Closed"))
        resp = await unit.accounts.close_account("1")
        assert resp.data.status == "Closed"
        assert recorder.last.method == "POST"
        assert recorder.last.url.path == "/accounts/1/close"
        assert recorder.last_json() == {"data": {"type": "accountClose", "attributes": {"reason": "ByCustomer"}}}

    @pytest.mark.asyncio
    async def test_close_for_fraud(self, unit, recorder):
        recorder.reply(200, resource("depositAccount"))
        await unit.accounts.close_account("1", CloseAccountRequest(attributes={"reason": "Fraud"}))
        assert recorder.last_json()["data"]["attributes"] == {"reason": "Fraud"}

    @pytest.mark.asyncio
    async def test_reopen(self, unit, recorder):
        recorder.reply(200, resource("depositAccount"))
        await unit.accounts.reopen_account("1")
        assert recorder.last.url.path == "/accounts/1/reopen"
        assert recorder.last.content == b""


class TestCustomersAndApplications:
    @pytest.mark.asyncio
    async def test_customer_get_list_update(self, unit, recorder):
        recorder.reply(200, resource("individualCustomer", "555", email="jane@example.com"))
        recorder.reply(200, {"data": []})
        recorder.reply(200, resource("individualCustomer", "555"))

        resp = await unit.customers.get("555")
        assert resp.data.email == "jane@example.com"

        await unit.customers.list(query="jane", limit=5)
        assert recorder.last.url.params["filter[query]"] == "jane"

        await unit.customers.update("555", {"type": "individualCustomer", "attributes": {"tags": {"vip": "yes"}}})
        assert recorder.last.method == "PATCH"
        assert recorder.last.url.path == "/customers/555"

    @pytest.mark.asyncio
    async def test_create_individual_application(self, unit, recorder):
        recorder.reply(201, resource("individualApplication", "42", status="Approved"))
        body = {
            "type": "individualApplication",
            "attributes": {
                "ssn": "721074426",
                "fullName": {"first": "Jane", "last": "Doe"},
                "dateOfBirth": "1990-01-31",
                "address": {"street": "20 Ingram St", "city": "Forest Hills", "state": "NY", "postalCode": "11375", "country": "us"},
                "email": "jane@example.com",
                "phone": {"countryCode": "1", "number": "5555555555"},
            },
        }
        resp = await unit.applications.create(body)
        assert resp.data.status == "Approved"
        sent = recorder.last_json()["data"]
        assert recorder.last.url.path == "/applications"
        assert sent["attributes"]["address"]["country"] == "US"
        assert sent["attributes"]["dateOfBirth"] == "1990-01-31"

    @pytest.mark.asyncio
    async def test_application_with_ssn_and_passport(self, unit, recorder):
        body = {
            "type": "individualApplication",
            "attributes": {
                "ssn": "721074426",
                "passport": "X1234567",
                "fullName": {"first": "Jane", "last": "Doe"},
                "dateOfBirth": "1990-01-31",
                "address": {"street": "20 Ingram St", "city": "Forest Hills", "postalCode": "11375", "country": "US"},
                "email": "jane@example.com",
                "phone": {"countryCode": "1", "number": "5555555555"},
            },
        }
        with pytest.raises(UnitValidationError):
            await unit.applications.create(body)
        assert recorder.requests == []

    @pytest.mark.asyncio
    async def test_application_get_list_documents(self, unit, recorder):
        recorder.reply(200, resource("businessApplication", "42"))
        recorder.reply(200, {"data": [resource("document", "7")["data"]]})
        await unit.applications.get("42")
        resp = await unit.applications.list_documents("42")
        assert recorder.last.url.path == "/applications/42/documents"
        assert resp.data[0].id == "7"


class TestCards:
    @pytest.mark.asyncio
    async def test_create(self, unit, recorder):
        recorder.reply(201, resource("individualDebitCard", "9", last4Digits="1234"))
        resp = await unit.cards.create({"relationships": {"account": {"data": {"type": "depositAccount", "id": "10001"}}}})
        assert resp.data.last4_digits == "1234"
        assert recorder.last_json() == {
            "data": {
                "type": "individualDebitCard",
                "attributes": {},
                "relationships": {"account": {"data": {"type": "depositAccount", "id": "10001"}}},
            }
        }

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "action, segment",
        [
            ("freeze", "freeze"),
            ("unfreeze", "unfreeze"),
            ("close", "close"),
            ("report_lost", "report-lost"),
            ("report_stolen", "report-stolen"),
        ],
    )
    async def test_actions(self, unit, recorder, action, segment):
        recorder.reply(200, resource("individualDebitCard", "9"))
        await getattr(unit.cards, action)("9")
        assert recorder.last.method == "POST"
        assert recorder.last.url.path == f"/cards/9/{segment}"

    @pytest.mark.asyncio
    async def test_list(self, unit, recorder):
        recorder.reply(200, {"data": []})
        resp = await unit.cards.list(account_id="10001")
        assert len(resp) == 0
        assert resp.total is None
        assert recorder.last.url.params["filter[accountId]"] == "10001"


class TestTransactions:
    @pytest.mark.asyncio
    async def test_get(self, unit, recorder):
        recorder.reply(200, resource("originatedAchTransaction", "2", amount=500, direction="Credit"))
        resp = await unit.transactions.get("1", "2")
        assert recorder.last.url.path == "/accounts/1/transactions/2"
        assert resp.data.amount == 500

    @pytest.mark.asyncio
    async def test_get_rejects_traversal(self, unit, recorder):
        with pytest.raises(UnitValidationError):
            await unit.transactions.get("1", "../../customers/9")
        assert recorder.requests == []

    @pytest.mark.asyncio
    async def test_get_escapes_ids(self, unit, recorder):
        recorder.reply(200, resource("bookTransaction", "a b"))
        await unit.transactions.get("acc 1", "a b")
        assert recorder.last.url.raw_path == b"/accounts/acc%201/transactions/a%20b"

    @pytest.mark.asyncio
    async def test_list(self, unit, recorder):
        recorder.reply(200, {"data": []})
        await unit.transactions.list(account_id="1", since=datetime(2024, 1, 1), until="2024-02-01T00:00:00Z", type=["Fee"])
        params = recorder.last.url.params
        assert recorder.last.url.path == "/transactions"
        assert params["filter[since]"] == "2024-01-01T00:00:00Z"
        assert params["filter[until]"] == "2024-02-01T00:00:00Z"
        assert params["filter[type][0]"] == "Fee"

    @pytest.mark.asyncio
    async def test_update(self, unit, recorder):
        recorder.reply(200, resource("bookTransaction", "2"))
        await unit.transactions.update("1", "2", {"type": "bookTransaction", "attributes": {"tags": {"a": "b"}}})
        assert recorder.last.method == "PATCH"
        assert recorder.last.url.path == "/accounts/1/transactions/2"


class TestWebhooks:
    @pytest.mark.asyncio
    async def test_create(self, unit, recorder):
        recorder.reply(201, resource("webhook", "3", url="https://example.com/hooks"))
        resp = await unit.webhooks.create(
            {"attributes": {"label": "main", "url": "https://example.com/hooks", "token": "s3cret", "contentType": "JsonAPI"}}
        )
        assert resp.data.url == "https://example.com/hooks"
        assert recorder.last_json()["data"]["attributes"]["token"] == "s3cret"

    @pytest.mark.asyncio
    async def test_create_bad_url(self, unit, recorder):
        with pytest.raises(UnitValidationError):
            await unit.webhooks.create(
                {"attributes": {"label": "main", "url": "example.com", "token": "t", "contentType": "Json"}}
            )
        assert recorder.requests == []

    @pytest.mark.asyncio
    async def test_lifecycle(self, unit, recorder):
        recorder.reply(200, resource("webhook", "3"))
        recorder.reply(200, resource("webhook", "3"))
        recorder.reply(200, resource("webhook", "3"))
        recorder.reply(204)
        await unit.webhooks.update("3", {"attributes": {"label": "renamed"}})
        await unit.webhooks.enable("3")
        await unit.webhooks.disable("3")
        resp = await unit.webhooks.delete("3")
        assert isinstance(resp, UnitEmptyResponse)
        assert [(r.method, r.url.path) for r in recorder.requests] == [
            ("PATCH", "/webhooks/3"),
            ("POST", "/webhooks/3/enable"),
            ("POST", "/webhooks/3/disable"),
            ("DELETE", "/webhooks/3"),
        ]

    @pytest.mark.asyncio
    async def test_delete_remote_error(self, unit, recorder):
        recorder.reply(404, NOT_FOUND)
        assert unit.is_error(await unit.webhooks.delete("3"))

    @pytest.mark.asyncio
    async def test_delete_error_with_bare_string_entries(self, unit, recorder):
        recorder.reply(409, {"errors": ["webhook is in use"]})
        resp = await unit.webhooks.delete("3")
        assert isinstance(resp, UnitError)
        assert resp.errors[0].detail == "webhook is in use"


class TestCounterparties:
    @pytest.mark.asyncio
    async def test_create(self, unit, recorder):
        recorder.reply(201, resource("achCounterparty", "77", name="Jane Doe"))
        await unit.counterparties.create(
            {
                "attributes": {
                    "name": "Jane Doe",
                    "routingNumber": "812345678",
                    "accountNumber": "1000000001",
                    "accountType": "Checking",
                    "type": "Person",
                },
                "relationships": {"customer": {"data": {"type": "customer", "id": "555"}}},
            }
        )
        sent = recorder.last_json()["data"]
        assert sent["type"] == "achCounterparty"
        assert sent["attributes"]["type"] == "Person"

    @pytest.mark.asyncio
    async def test_get_list_update_delete(self, unit, recorder):
        recorder.reply(200, resource("achCounterparty", "77"))
        recorder.reply(200, {"data": []})
        recorder.reply(200, resource("achCounterparty", "77"))
        recorder.reply(204)
        await unit.counterparties.get("77")
        await unit.counterparties.list(customer_id="555")
        await unit.counterparties.update("77", {"attributes": {"permissions": "CreditOnly"}})
        await unit.counterparties.delete("77")
        assert [(r.method, r.url.path) for r in recorder.requests] == [
            ("GET", "/counterparties/77"),
            ("GET", "/counterparties"),
            ("PATCH", "/counterparties/77"),
            ("DELETE", "/counterparties/77"),
        ]


class TestAuthorizationsAndEvents:
    @pytest.mark.asyncio
    async def test_authorizations(self, unit, recorder):
        recorder.reply(200, resource("authorization", "8", merchant={"name": "Coffee"}, coordinates={"longitude": -73.9, "latitude": 40.7}))
        recorder.reply(200, {"data": []})
        resp = await unit.authorizations.get("8")
        assert resp.data.merchant["name"] == "Coffee"
        assert resp.data.coordinates.latitude == 40.7
        await unit.authorizations.list(card_id="9")
        assert recorder.last.url.params["filter[cardId]"] == "9"

    @pytest.mark.asyncio
    async def test_events(self, unit, recorder):
        recorder.reply(200, resource("payment.clearing", "5", createdAt="2024-03-01T10:20:30Z"))
        recorder.reply(200, {"data": []})
        recorder.reply(204)
        resp = await unit.events.get("5")
        assert resp.data.occurred_at.year == 2024
        await unit.events.list(type=["payment.clearing"])
        assert recorder.last.url.params["filter[type][0]"] == "payment.clearing"
        assert isinstance(await unit.events.fire("5"), UnitEmptyResponse)
        assert recorder.last.method == "POST"
        assert recorder.last.url.path == "/events/5"

    @pytest.mark.asyncio
    async def test_event_fractional_timestamp(self, unit, recorder):
        recorder.reply(200, resource("payment.clearing", "5", createdAt="2024-03-01T10:20:30.12Z"))
        resp = await unit.events.get("5")
        occurred = resp.data.occurred_at
        assert occurred.microsecond == 120000
        assert occurred.utcoffset().total_seconds() == 0


class TestCustomerTokens:
    @pytest.mark.asyncio
    async def test_verification_then_token(self, unit, recorder):
        recorder.reply(200, {"data": {"type": "customerTokenVerification", "attributes": {"verificationToken": "vt"}}})
        recorder.reply(200, {"data": {"type": "customerBearerToken", "attributes": {"token": "v2.public.x", "expiresIn": 3600}}})

        verification = await unit.customer_tokens.create_token_verification(
            "555", CreateTokenVerificationRequest(attributes=CreateTokenVerificationAttributes(channel="sms"))
        )
        assert recorder.last.url.path == "/customers/555/token/verification"
        assert verification.data.verification_token == "vt"

        token = await unit.customer_tokens.create_token(
            "555",
            {
                "attributes": {
                    "scope": "customers payments-write",
                    "verificationToken": verification.data.verification_token,
                    "verificationCode": "203130",
                }
            },
        )
        assert recorder.last.url.path == "/customers/555/token"
        assert recorder.last_json()["data"]["type"] == "customerToken"
        assert token.data.token == "v2.public.x"
        assert token.data.expires_in == 3600

    @pytest.mark.asyncio
    async def test_code_without_token(self, unit, recorder):
        with pytest.raises(UnitValidationError):
            await unit.customer_tokens.create_token("555", {"attributes": {"scope": "customers", "verificationCode": "1"}})
        assert recorder.requests == []


class TestUnit:
    def test_facades_share_one_client(self, unit):
        facades = [
            unit.applications,
            unit.customers,
            unit.accounts,
            unit.transactions,
            unit.cards,
            unit.webhooks,
            unit.customer_tokens,
            unit.counterparties,
            unit.events,
            unit.payments,
            unit.authorizations,
        ]
        assert all(f.client is unit.client for f in facades)
        assert unit.helpers.create_full_name("Jane", "Doe").first == "Jane"

    @pytest.mark.asyncio
    async def test_context_manager_closes(self, recorder):
        import httpx

        async with Unit("tok", transport=httpx.MockTransport(recorder)) as sdk:
            assert sdk.client.base_url == "https://api.s.unit.sh"
        assert sdk.client._client.is_closed
