"""HTTP API tests.

Each request runs in its own session that commits on success, so these tests
also cover the transaction boundary and the error response format.
"""

from uuid import uuid4

import pytest

API = "/api/v1"


async def _organization(client, name: str = "Acme Corp") -> dict:
    response = await client.post(f"{API}/organizations", json={"name": name})
    assert response.status_code == 201
    return response.json()


async def _employee(client, organization_id: str, number: str = "E001", **kwargs) -> dict:
    payload = {
        "organization_id": organization_id,
        "employee_number": number,
        "first_name": "Rahul",
        "last_name": "Mehta",
        **kwargs,
    }
    response = await client.post(f"{API}/employees", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestHealthAndErrors:
    """Health check and error mapping."""

    async def test_health(self, client) -> None:
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}
        assert response.headers["X-Content-Type-Options"] == "nosniff"

    async def test_not_found_shape(self, client) -> None:
        missing = uuid4()

        response = await client.get(f"{API}/employees/{missing}")

        assert response.status_code == 404
        assert response.json() == {
            "detail": "Employee not found",
            "details": {"employee_id": str(missing)},
        }

    async def test_request_validation_is_422(self, client) -> None:
        response = await client.post(f"{API}/organizations", json={})

        assert response.status_code == 422

    async def test_invalid_uuid_is_422(self, client) -> None:
        response = await client.get(f"{API}/employees/not-a-uuid")

        assert response.status_code == 422

    async def test_duplicate_is_400(self, client) -> None:
        await _organization(client)

        response = await client.post(f"{API}/organizations", json={"name": "Acme Corp"})

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "name"


class TestEmployeesApi:
    """Employee endpoints."""

    async def test_crud_and_transitions(self, client) -> None:
        org = await _organization(client)
        employee = await _employee(client, org["id"], work_email="rahul@acmecorp.com")

        listing = await client.get(f"{API}/employees", params={"organization_id": org["id"]})
        assert listing.json()["total"] == 1

        updated = await client.put(
            f"{API}/employees/{employee['id']}", json={"job_title": "Accountant"}
        )
        assert updated.json()["job_title"] == "Accountant"

        terminated = await client.post(
            f"{API}/employees/{employee['id']}/terminate",
            json={"termination_date": "2025-03-31", "reason": "Relocation"},
        )
        assert terminated.json()["employment_status"] == "terminated"

        again = await client.post(
            f"{API}/employees/{employee['id']}/terminate",
            json={"termination_date": "2025-04-01"},
        )
        assert again.status_code == 400
        assert again.json()["details"] == {"current_status": "terminated"}

        reactivated = await client.post(f"{API}/employees/{employee['id']}/reactivate")
        assert reactivated.json()["employment_status"] == "active"

        deleted = await client.delete(f"{API}/employees/{employee['id']}")
        assert deleted.status_code == 204

    async def test_bad_sort_falls_back(self, client) -> None:
        org = await _organization(client)
        await _employee(client, org["id"])

        response = await client.get(f"{API}/employees", params={"sort_by": "password; DROP"})

        assert response.status_code == 200
        assert response.json()["total"] == 1

    async def test_direct_reports(self, client) -> None:
        org = await _organization(client)
        boss = await _employee(client, org["id"], "E001")
        await _employee(client, org["id"], "E002", manager_id=boss["id"])

        response = await client.get(f"{API}/employees/{boss['id']}/direct-reports")

        assert [e["employee_number"] for e in response.json()] == ["E002"]

    async def test_update_does_not_change_status(self, client) -> None:
        org = await _organization(client)
        employee = await _employee(client, org["id"])

        response = await client.put(
            f"{API}/employees/{employee['id']}",
            json={"employment_status": "terminated", "job_title": "Analyst"},
        )

        assert response.status_code == 200
        assert response.json()["job_title"] == "Analyst"
        assert response.json()["employment_status"] == "active"
        assert response.json()["termination_date"] is None


class TestDepartmentsApi:
    """Department endpoints."""

    async def test_cycle_rejected(self, client) -> None:
        org = await _organization(client)
        d2 = (
            await client.post(
                f"{API}/departments",
                json={"organization_id": org["id"], "name": "D2", "code": "D2"},
            )
        ).json()
        d1 = (
            await client.post(
                f"{API}/departments",
                json={
                    "organization_id": org["id"],
                    "name": "D1",
                    "code": "D1",
                    "parent_department_id": d2["id"],
                },
            )
        ).json()

        response = await client.put(
            f"{API}/departments/{d2['id']}",
            json={
                "organization_id": org["id"],
                "name": "D2",
                "code": "D2",
                "parent_department_id": d1["id"],
            },
        )

        assert response.status_code == 400
        assert "circular hierarchy" in response.json()["detail"]

        hierarchy = await client.get(
            f"{API}/departments/hierarchy", params={"organization_id": org["id"]}
        )
        assert [n["code"] for n in hierarchy.json()] == ["D2"]
        assert [n["code"] for n in hierarchy.json()[0]["children"]] == ["D1"]

        subs = await client.get(f"{API}/departments/{d2['id']}/sub-departments")
        assert [d["code"] for d in subs.json()] == ["D1"]

        blocked = await client.delete(f"{API}/departments/{d2['id']}")
        assert blocked.status_code == 400


class TestBankAccountsApi:
    """Bank account endpoints."""

    async def test_primary_switch(self, client) -> None:
        org = await _organization(client)
        employee = await _employee(client, org["id"])
        base = f"{API}/employees/{employee['id']}/bank-accounts"
        account = {
            "bank_name": "ICICI Bank",
            "ifsc_code": "ICIC0000001",
            "account_type": "savings",
            "is_primary": True,
        }

        a = (await client.post(base, json={**account, "account_number": "111111111"})).json()
        b = (await client.post(base, json={**account, "account_number": "222222222"})).json()

        listing = (await client.get(base)).json()
        flags = {item["id"]: item["is_primary"] for item in listing["items"]}
        assert flags == {a["id"]: False, b["id"]: True}

        switched = await client.post(f"{base}/{a['id']}/primary")
        assert switched.json()["is_primary"] is True
        primary = await client.get(f"{base}/primary")
        assert primary.json()["id"] == a["id"]

        masked = await client.get(f"{base}/{a['id']}/masked")
        assert masked.json()["masked_account_number"] == "****1111"

        deleted = await client.delete(f"{base}/{a['id']}")
        assert deleted.status_code == 204
        assert (await client.get(f"{base}/primary")).status_code == 404

    @pytest.mark.parametrize(
        ("payload", "message"),
        [
            ({"account_number": "12AB"}, "Account number"),
            ({"account_number": "123456789", "ifsc_code": "BAD"}, "IFSC"),
            ({"account_number": "123456789", "account_type": None}, "Account type"),
        ],
    )
    async def test_validation_errors_are_400(self, client, payload, message) -> None:
        org = await _organization(client)
        employee = await _employee(client, org["id"])
        body = {"bank_name": "ICICI Bank", "account_type": "savings", **payload}

        response = await client.post(
            f"{API}/employees/{employee['id']}/bank-accounts", json=body
        )

        assert response.status_code == 400
        assert message in response.json()["detail"]


class TestEmploymentHistoryApi:
    """Employment history endpoints."""

    async def test_joining_then_promotion(self, client) -> None:
        org = await _organization(client)
        employee = await _employee(client, org["id"])
        base = f"{API}/employees/{employee['id']}/employment-history"

        joined = await client.post(
            f"{base}/joining",
            json={"joining_date": "2024-01-01", "job_title": "Engineer", "salary_amount": "50000"},
        )
        assert joined.status_code == 201

        promoted = await client.post(
            f"{base}/promotion",
            json={"effective_date": "2024-06-01", "job_title": "Senior Engineer"},
        )
        assert promoted.status_code == 201
        assert promoted.json()["is_current"] is True

        history = (await client.get(base)).json()
        assert history["total"] == 2
        newest, oldest = history["items"]
        assert newest["effective_date"] == "2024-06-01"
        assert oldest["end_date"] == "2024-05-31"
        assert oldest["is_current"] is False

        current = await client.get(f"{base}/current")
        assert current.json()["id"] == promoted.json()["id"]

        promotions = await client.get(f"{base}/by-change-type/promotion")
        assert promotions.json()["total"] == 1

    async def test_failed_change_is_not_partially_applied(self, client) -> None:
        org = await _organization(client)
        employee = await _employee(client, org["id"])
        base = f"{API}/employees/{employee['id']}/employment-history"
        await client.post(f"{base}/joining", json={"joining_date": "2024-01-01"})

        # Closing the current record succeeds, the unknown department then fails
        response = await client.post(
            f"{base}/transfer",
            json={"effective_date": "2024-06-01", "department_id": str(uuid4())},
        )
        assert response.status_code == 404

        current = (await client.get(f"{base}/current")).json()
        assert current["effective_date"] == "2024-01-01"
        assert current["end_date"] is None

    async def test_end_before_start_rejected(self, client) -> None:
        org = await _organization(client)
        employee = await _employee(client, org["id"])

        response = await client.post(
            f"{API}/employees/{employee['id']}/employment-history",
            json={
                "effective_date": "2024-03-01",
                "end_date": "2024-02-01",
                "change_type": "joining",
            },
        )

        assert response.status_code == 400

    async def test_summary(self, client) -> None:
        org = await _organization(client)
        employee = await _employee(client, org["id"])
        base = f"{API}/employees/{employee['id']}/employment-history"

        empty = await client.get(f"{base}/summary")
        assert empty.json() == {
            "employee_id": employee["id"],
            "record_count": 0,
            "has_history": False,
        }

        await client.post(f"{base}/joining", json={"joining_date": "2024-01-01"})
        summary = (await client.get(f"{base}/summary")).json()
        assert summary["record_count"] == 1
        assert summary["has_history"] is True

        unknown = await client.get(f"{API}/employees/{uuid4()}/employment-history/summary")
        assert unknown.status_code == 404
