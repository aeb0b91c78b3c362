"""Tests for application CRUD, filtering, sorting and search."""

from datetime import datetime
from uuid import uuid4

import pytest

from tests.helpers import application_payload, bearer, create_application, signup

BASE = "/api/v1/applications"


@pytest.fixture
async def two_users(client):
    alice = await signup(client, name="Alice", email="alice@example.com")
    bob = await signup(client, name="Bob", email="bob@example.com")
    return bearer(alice["token"]), bearer(bob["token"])


class TestCreateApplication:
    async def test_defaults(self, client, auth_headers):
        response = await client.post(BASE, json=application_payload(), headers=auth_headers)

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Application created successfully"
        application = body["data"]["application"]
        assert application["companyName"] == "Acme"
        assert application["status"] == "Applied"
        assert application["applicationDate"] == "2024-03-10T09:00:00"
        assert application["jobLink"] == ""
        assert application["notes"] == ""
        assert application["followUpDate"] is None
        assert application["interviewRounds"] == []
        assert application["offerDetails"] == {"stipend": "", "duration": "", "startDate": None}
        assert application["user"]["name"] == "Test User"
        assert application["user"]["email"] == "user@example.com"

    async def test_marks_user_as_having_applications(self, client, auth_headers):
        await create_application(client, auth_headers)

        response = await client.get("/api/v1/auth/me", headers=auth_headers)
        assert response.json()["data"]["user"]["hasApplicationCreated"] is True

    async def test_application_date_defaults_to_now(self, client, auth_headers):
        payload = application_payload()
        del payload["applicationDate"]

        response = await client.post(BASE, json=payload, headers=auth_headers)

        assert response.status_code == 201
        assert response.json()["data"]["application"]["applicationDate"]

    async def test_nested_details(self, client, auth_headers):
        application = await create_application(
            client,
            auth_headers,
            status="Accepted",
            interviewRounds=[
                {"round": "Phone screen", "date": "2024-03-12T10:00:00", "result": "Passed"},
                {"round": "Onsite", "date": "2024-03-20T10:00:00", "result": "Pending"},
            ],
            offerDetails={"stipend": "2000 EUR", "duration": "3 months", "startDate": "2024-06-01T00:00:00"},
        )

        assert [r["round"] for r in application["interviewRounds"]] == ["Phone screen", "Onsite"]
        assert application["interviewRounds"][0]["result"] == "Passed"
        assert application["offerDetails"]["stipend"] == "2000 EUR"
        assert application["offerDetails"]["startDate"] == "2024-06-01T00:00:00"

    async def test_aware_dates_are_stored_as_utc(self, client, auth_headers):
        application = await create_application(client, auth_headers, applicationDate="2024-03-10T09:00:00+02:00")
        assert application["applicationDate"] == "2024-03-10T07:00:00"

    async def test_missing_required_field(self, client, auth_headers):
        payload = application_payload()
        del payload["companyName"]

        response = await client.post(BASE, json=payload, headers=auth_headers)

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert any(error.startswith("companyName") for error in body["errors"])

    async def test_invalid_status(self, client, auth_headers):
        response = await client.post(BASE, json=application_payload(status="Ghosted"), headers=auth_headers)
        assert response.status_code == 400

    async def test_notes_too_long(self, client, auth_headers):
        response = await client.post(BASE, json=application_payload(notes="x" * 1001), headers=auth_headers)
        assert response.status_code == 400


class TestReadUpdateDelete:
    async def test_get_own_application(self, client, auth_headers):
        created = await create_application(client, auth_headers)

        response = await client.get(f"{BASE}/{created['id']}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["data"]["application"]["id"] == created["id"]

    async def test_other_users_application_is_not_found(self, client, two_users):
        alice, bob = two_users
        created = await create_application(client, alice)

        response = await client.get(f"{BASE}/{created['id']}", headers=bob)

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Application not found"}

    async def test_unknown_id(self, client, auth_headers):
        response = await client.get(f"{BASE}/{uuid4()}", headers=auth_headers)
        assert response.status_code == 404

    async def test_malformed_id(self, client, auth_headers):
        response = await client.get(f"{BASE}/not-a-uuid", headers=auth_headers)
        assert response.status_code == 400

    async def test_partial_update(self, client, auth_headers):
        created = await create_application(client, auth_headers, notes="first call")

        response = await client.put(
            f"{BASE}/{created['id']}",
            json={
                "status": "Interview",
                "interviewRounds": [{"round": "Technical", "date": "2024-03-15T14:00:00", "result": "Pending"}],
            },
            headers=auth_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Application updated successfully"
        application = body["data"]["application"]
        assert application["status"] == "Interview"
        assert application["notes"] == "first call"
        assert application["companyName"] == "Acme"
        assert [r["round"] for r in application["interviewRounds"]] == ["Technical"]

    async def test_update_replaces_rounds(self, client, auth_headers):
        created = await create_application(
            client,
            auth_headers,
            interviewRounds=[{"round": "HR", "date": "2024-03-12T10:00:00", "result": "Passed"}],
        )

        response = await client.put(f"{BASE}/{created['id']}", json={"interviewRounds": []}, headers=auth_headers)

        assert response.json()["data"]["application"]["interviewRounds"] == []

    async def test_update_cannot_null_required_field(self, client, auth_headers):
        created = await create_application(client, auth_headers)

        response = await client.put(f"{BASE}/{created['id']}", json={"companyName": None}, headers=auth_headers)

        assert response.status_code == 400

    async def test_update_refreshes_updated_at(self, client, auth_headers):
        created = await create_application(client, auth_headers)

        response = await client.put(f"{BASE}/{created['id']}", json={"notes": "followed up"}, headers=auth_headers)

        updated = response.json()["data"]["application"]
        assert datetime.fromisoformat(updated["updatedAt"]) > datetime.fromisoformat(created["updatedAt"])
        assert updated["createdAt"] == created["createdAt"]

    async def test_rounds_only_update_refreshes_updated_at(self, client, auth_headers):
        created = await create_application(client, auth_headers)

        response = await client.put(
            f"{BASE}/{created['id']}",
            json={"interviewRounds": [{"round": "HR", "date": "2024-03-12T10:00:00", "result": "Pending"}]},
            headers=auth_headers,
        )

        updated = response.json()["data"]["application"]
        assert datetime.fromisoformat(updated["updatedAt"]) > datetime.fromisoformat(created["updatedAt"])

    @pytest.mark.parametrize("field", ["interviewRounds", "offerDetails"])
    async def test_update_cannot_null_nested_parts(self, client, auth_headers, field):
        created = await create_application(
            client,
            auth_headers,
            interviewRounds=[{"round": "HR", "date": "2024-03-12T10:00:00", "result": "Passed"}],
            offerDetails={"stipend": "2000 EUR", "duration": "3 months"},
        )

        response = await client.put(f"{BASE}/{created['id']}", json={field: None}, headers=auth_headers)

        assert response.status_code == 400
        check = await client.get(f"{BASE}/{created['id']}", headers=auth_headers)
        application = check.json()["data"]["application"]
        assert len(application["interviewRounds"]) == 1
        assert application["offerDetails"]["stipend"] == "2000 EUR"

    async def test_empty_offer_clears_it(self, client, auth_headers):
        created = await create_application(
            client, auth_headers, offerDetails={"stipend": "2000 EUR", "duration": "3 months"}
        )

        response = await client.put(f"{BASE}/{created['id']}", json={"offerDetails": {}}, headers=auth_headers)

        assert response.json()["data"]["application"]["offerDetails"] == {
            "stipend": "",
            "duration": "",
            "startDate": None,
        }

    async def test_update_other_users_application(self, client, two_users):
        alice, bob = two_users
        created = await create_application(client, alice)

        response = await client.put(f"{BASE}/{created['id']}", json={"status": "Withdrawn"}, headers=bob)

        assert response.status_code == 404
        check = await client.get(f"{BASE}/{created['id']}", headers=alice)
        assert check.json()["data"]["application"]["status"] == "Applied"

    async def test_delete(self, client, auth_headers):
        created = await create_application(
            client,
            auth_headers,
            interviewRounds=[{"round": "HR", "date": "2024-03-12T10:00:00", "result": "Passed"}],
        )

        response = await client.delete(f"{BASE}/{created['id']}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["message"] == "Application deleted successfully"
        assert (await client.get(f"{BASE}/{created['id']}", headers=auth_headers)).status_code == 404

    async def test_delete_other_users_application(self, client, two_users):
        alice, bob = two_users
        created = await create_application(client, alice)

        response = await client.delete(f"{BASE}/{created['id']}", headers=bob)

        assert response.status_code == 404

    async def test_delete_all_only_touches_caller(self, client, two_users):
        alice, bob = two_users
        for company in ("Acme", "Globex", "Initech"):
            await create_application(client, alice, companyName=company)
        await create_application(client, bob)

        response = await client.delete(BASE, headers=alice)

        assert response.status_code == 200
        assert response.json()["message"] == "Successfully deleted 3 applications"
        alice_list = await client.get(BASE, headers=alice)
        bob_list = await client.get(BASE, headers=bob)
        assert alice_list.json()["data"]["pagination"]["totalItems"] == 0
        assert bob_list.json()["data"]["pagination"]["totalItems"] == 1


class TestListApplications:
    async def test_empty_list(self, client, auth_headers):
        response = await client.get(BASE, headers=auth_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["applications"] == []
        assert data["pagination"] == {"currentPage": 1, "totalPages": 0, "totalItems": 0, "itemsPerPage": 10}

    async def test_newest_first_by_default(self, client, auth_headers):
        await create_application(client, auth_headers, companyName="Old", applicationDate="2024-01-01T00:00:00")
        await create_application(client, auth_headers, companyName="New", applicationDate="2024-05-01T00:00:00")
        await create_application(client, auth_headers, companyName="Mid", applicationDate="2024-03-01T00:00:00")

        response = await client.get(BASE, headers=auth_headers)

        assert [a["companyName"] for a in response.json()["data"]["applications"]] == ["New", "Mid", "Old"]

    async def test_pagination(self, client, auth_headers):
        for day in range(1, 4):
            await create_application(client, auth_headers, applicationDate=f"2024-03-0{day}T00:00:00")

        response = await client.get(BASE, params={"page": "2", "limit": "2"}, headers=auth_headers)

        data = response.json()["data"]
        assert len(data["applications"]) == 1
        assert data["pagination"] == {"currentPage": 2, "totalPages": 2, "totalItems": 3, "itemsPerPage": 2}

    async def test_bad_pagination_falls_back(self, client, auth_headers):
        await create_application(client, auth_headers)

        response = await client.get(BASE, params={"page": "abc", "limit": "-4"}, headers=auth_headers)

        assert response.status_code == 200
        pagination = response.json()["data"]["pagination"]
        assert pagination["currentPage"] == 1
        assert pagination["itemsPerPage"] == 10

    async def test_huge_page_returns_empty_page(self, client, auth_headers):
        await create_application(client, auth_headers)

        response = await client.get(BASE, params={"page": "99999999999999999999"}, headers=auth_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["applications"] == []
        assert data["pagination"]["totalItems"] == 1
        assert data["pagination"]["itemsPerPage"] == 10

    async def test_status_filter(self, client, auth_headers):
        await create_application(client, auth_headers, status="Rejected")
        await create_application(client, auth_headers)

        response = await client.get(BASE, params={"status": "Rejected"}, headers=auth_headers)

        applications = response.json()["data"]["applications"]
        assert [a["status"] for a in applications] == ["Rejected"]

    async def test_invalid_status_filter(self, client, auth_headers):
        response = await client.get(BASE, params={"status": "Ghosted"}, headers=auth_headers)
        assert response.status_code == 400

    async def test_sort_params(self, client, auth_headers):
        for company in ("Globex", "Acme", "Initech"):
            await create_application(client, auth_headers, companyName=company)

        response = await client.get(BASE, params={"sortBy": "companyName", "sortOrder": "asc"}, headers=auth_headers)

        assert [a["companyName"] for a in response.json()["data"]["applications"]] == ["Acme", "Globex", "Initech"]


class TestFilterApplications:
    async def test_month_filter_is_owner_scoped(self, client, two_users):
        alice, bob = two_users
        alice_ids = set()
        for day, status in ((3, "Applied"), (15, "Applied"), (31, "Rejected")):
            created = await create_application(
                client, alice, status=status, applicationDate=f"2024-03-{day:02d}T12:00:00"
            )
            alice_ids.add(created["id"])
        await create_application(client, alice, applicationDate="2024-04-01T00:00:00")
        for day in (5, 20):
            await create_application(client, bob, applicationDate=f"2024-03-{day:02d}T12:00:00")

        response = await client.get(f"{BASE}/filter", params={"month": "3", "year": "2024"}, headers=alice)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["pagination"]["totalItems"] == 3
        assert {a["id"] for a in data["applications"]} == alice_ids
        assert data["filters"] == {"status": None, "month": "3", "year": "2024", "jobType": None, "location": None}

    async def test_month_end_is_inclusive(self, client, auth_headers):
        await create_application(client, auth_headers, applicationDate="2024-02-29T23:59:59")
        await create_application(client, auth_headers, applicationDate="2024-03-01T00:00:00")

        response = await client.get(f"{BASE}/filter", params={"month": "2", "year": "2024"}, headers=auth_headers)

        assert response.json()["data"]["pagination"]["totalItems"] == 1

    async def test_year_only(self, client, auth_headers):
        await create_application(client, auth_headers, applicationDate="2023-12-31T23:00:00")
        await create_application(client, auth_headers, applicationDate="2024-01-01T00:00:00")
        await create_application(client, auth_headers, applicationDate="2024-12-31T23:59:59")

        response = await client.get(f"{BASE}/filter", params={"year": "2024"}, headers=auth_headers)

        assert response.json()["data"]["pagination"]["totalItems"] == 2

    async def test_month_13_is_rejected(self, client, auth_headers):
        response = await client.get(f"{BASE}/filter", params={"month": "13", "year": "2024"}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "message": "Validation failed",
            "errors": ["month: must be between 1 and 12"],
        }

    async def test_type_and_location(self, client, auth_headers):
        await create_application(client, auth_headers, applicationType="Full-time", location="Remote - EU")
        await create_application(client, auth_headers, applicationType="Summer", location="Remote")
        await create_application(client, auth_headers, applicationType="Full-time", location="Berlin")

        response = await client.get(
            f"{BASE}/filter", params={"jobType": "Full-time", "location": "remote"}, headers=auth_headers
        )

        applications = response.json()["data"]["applications"]
        assert [a["location"] for a in applications] == ["Remote - EU"]

    async def test_invalid_job_type(self, client, auth_headers):
        response = await client.get(f"{BASE}/filter", params={"jobType": "Contract"}, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["errors"][0].startswith("jobType:")


class TestSortApplications:
    async def test_sort_by_company(self, client, auth_headers):
        for company in ("Globex", "Acme", "Initech"):
            await create_application(client, auth_headers, companyName=company)

        response = await client.get(f"{BASE}/sort", params={"by": "companyName", "order": "asc"}, headers=auth_headers)

        data = response.json()["data"]
        assert [a["companyName"] for a in data["applications"]] == ["Acme", "Globex", "Initech"]
        assert data["sort"] == {"by": "companyName", "order": "asc"}

    async def test_unknown_field_falls_back(self, client, auth_headers):
        await create_application(client, auth_headers)

        response = await client.get(f"{BASE}/sort", params={"by": "salary", "order": "up"}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["data"]["sort"] == {"by": "applicationDate", "order": "desc"}


class TestSearchApplications:
    async def test_keyword_matches_any_field(self, client, auth_headers):
        await create_application(client, auth_headers, companyName="Pythonic Labs")
        await create_application(client, auth_headers, companyName="Globex", notes="Uses python daily")
        await create_application(client, auth_headers, companyName="Initech", position="Java Intern")

        response = await client.get(f"{BASE}/search", params={"keyword": "PYTHON"}, headers=auth_headers)

        data = response.json()["data"]
        assert sorted(a["companyName"] for a in data["applications"]) == ["Globex", "Pythonic Labs"]
        assert data["search"] == {"company": None, "position": None, "location": None, "keyword": "PYTHON"}

    async def test_fields_must_all_match(self, client, auth_headers):
        await create_application(client, auth_headers, companyName="Acme Corp", position="Data Intern")
        await create_application(client, auth_headers, companyName="Acme Corp", position="Backend Intern")
        await create_application(client, auth_headers, companyName="Globex", position="Data Intern")

        response = await client.get(
            f"{BASE}/search", params={"company": "acme", "position": "data"}, headers=auth_headers
        )

        applications = response.json()["data"]["applications"]
        assert [(a["companyName"], a["position"]) for a in applications] == [("Acme Corp", "Data Intern")]

    async def test_wildcards_are_literal(self, client, auth_headers):
        await create_application(client, auth_headers, companyName="100% Remote")
        await create_application(client, auth_headers, companyName="Acme")

        response = await client.get(f"{BASE}/search", params={"keyword": "%"}, headers=auth_headers)

        assert [a["companyName"] for a in response.json()["data"]["applications"]] == ["100% Remote"]

    async def test_search_is_owner_scoped(self, client, two_users):
        alice, bob = two_users
        await create_application(client, bob, companyName="Acme")

        response = await client.get(f"{BASE}/search", params={"company": "acme"}, headers=alice)

        assert response.json()["data"]["pagination"]["totalItems"] == 0
