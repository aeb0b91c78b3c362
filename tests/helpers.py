"""Request helpers shared by the API tests."""

from typing import Dict

from httpx import AsyncClient


async def signup(
    client: AsyncClient,
    name: str = "Test User",
    email: str = "user@example.com",
    password: str = "secret123",
) -> Dict:
    response = await client.post(
        "/api/v1/auth/signup",
        json={"name": name, "email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


def bearer(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def application_payload(**overrides) -> Dict:
    payload = {
        "companyName": "Acme",
        "position": "Backend Intern",
        "location": "Berlin",
        "applicationDate": "2024-03-10T09:00:00",
        "applicationType": "Summer",
        "source": "LinkedIn",
    }
    payload.update(overrides)
    return payload


async def create_application(client: AsyncClient, headers: Dict[str, str], **overrides) -> Dict:
    response = await client.post("/api/v1/applications", json=application_payload(**overrides), headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]["application"]
