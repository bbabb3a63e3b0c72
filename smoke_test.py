#!/usr/bin/env python3
"""
Smoke test for a running Book Library API server.

Exercises every endpoint over HTTP and prints a PASS/FAIL line per check.
Exits with status 1 if any check fails or the server is unreachable.

Usage:
    python smoke_test.py [base_url]

The base URL defaults to the API_URL environment variable, then
http://localhost:3000.
"""

import asyncio
import os
import sys
from typing import Awaitable, Callable, Dict, List, Optional, Tuple

import httpx

DEFAULT_BASE_URL = "http://localhost:3000"
ADMIN_CREDENTIALS = {"username": "admin", "password": "test123"}


class SmokeTestFailure(Exception):
    """Raised when a smoke check does not see the expected response."""


def expect(condition: bool, message: str) -> None:
    if not condition:
        raise SmokeTestFailure(message)


def expect_status(response: httpx.Response, expected: int) -> None:
    expect(response.status_code == expected, f"Expected status {expected}, got {response.status_code}")


class SmokeSession:
    """Shared state between checks: the HTTP client, token and created book."""

    def __init__(self, client: httpx.AsyncClient):
        self.client = client
        self.token: Optional[str] = None
        self.created_id: Optional[str] = None

    def auth_headers(self) -> Dict[str, str]:
        expect(self.token is not None, "No token available; login check must pass first")
        return {"Authorization": f"Bearer {self.token}"}


async def check_health(session: SmokeSession) -> None:
    response = await session.client.get("/health")
    expect_status(response, 200)
    expect(response.json().get("status") == "healthy", "Health status is not 'healthy'")


async def check_list_books(session: SmokeSession) -> None:
    response = await session.client.get("/books")
    expect_status(response, 200)
    body = response.json()
    expect(body.get("success") is True, "Success flag not true")
    expect(isinstance(body.get("data"), list) and body["data"], "No books returned")
    expect(body.get("count") == len(body["data"]), "Count does not match data length")


async def check_get_book(session: SmokeSession) -> None:
    response = await session.client.get("/books/1")
    expect_status(response, 200)
    expect(response.json()["data"]["id"] == "1", "Book ID mismatch")


async def check_get_missing_book(session: SmokeSession) -> None:
    response = await session.client.get("/books/999999")
    expect_status(response, 404)
    expect("error" in response.json(), "Error label missing")


async def check_login(session: SmokeSession) -> None:
    response = await session.client.post("/auth/login", json=ADMIN_CREDENTIALS)
    expect_status(response, 200)
    token = response.json().get("token")
    expect(bool(token), "No token returned")
    session.token = token
    print(f"   Token received: {token[:20]}...")


async def check_login_invalid(session: SmokeSession) -> None:
    response = await session.client.post("/auth/login", json={"username": "wrong", "password": "wrong"})
    expect_status(response, 401)


async def check_create_without_auth(session: SmokeSession) -> None:
    before = (await session.client.get("/books")).json()["count"]
    response = await session.client.post(
        "/books", json={"title": "Smoke Test", "author": "Smoke", "isbn": "9780000000000"}
    )
    expect_status(response, 401)
    after = (await session.client.get("/books")).json()["count"]
    expect(before == after, "Book count changed after unauthorized create")


async def check_create_with_invalid_token(session: SmokeSession) -> None:
    response = await session.client.post(
        "/books",
        json={"title": "Smoke Test", "author": "Smoke", "isbn": "9780000000000"},
        headers={"Authorization": "Bearer invalid-token-here"}
    )
    expect_status(response, 401)


async def check_create_book(session: SmokeSession) -> None:
    response = await session.client.post(
        "/books",
        json={"title": "Smoke Test Book", "author": "Smoke Team", "isbn": "978-1234567890", "publishedYear": 2020},
        headers=session.auth_headers()
    )
    expect_status(response, 201)
    data = response.json()["data"]
    expect(bool(data.get("id")), "No ID in created book")
    expect(data.get("available") is True, "Created book is not available by default")
    session.created_id = data["id"]


async def check_create_missing_fields(session: SmokeSession) -> None:
    response = await session.client.post("/books", json={"title": "Incomplete"}, headers=session.auth_headers())
    expect_status(response, 400)


async def check_create_invalid_isbn(session: SmokeSession) -> None:
    response = await session.client.post(
        "/books",
        json={"title": "Bad ISBN", "author": "Author", "isbn": "invalid-isbn"},
        headers=session.auth_headers()
    )
    expect_status(response, 400)
    expect("ISBN" in response.json().get("message", ""), "Error should mention ISBN")


async def check_update_book(session: SmokeSession) -> None:
    expect(session.created_id is not None, "Create check must pass first")
    response = await session.client.put(
        f"/books/{session.created_id}", json={"available": False}, headers=session.auth_headers()
    )
    expect_status(response, 200)
    expect(response.json()["data"]["available"] is False, "Availability not updated")


async def check_update_missing_book(session: SmokeSession) -> None:
    response = await session.client.put("/books/999999", json={"available": False}, headers=session.auth_headers())
    expect_status(response, 404)


async def check_delete_book(session: SmokeSession) -> None:
    expect(session.created_id is not None, "Create check must pass first")
    response = await session.client.delete(f"/books/{session.created_id}", headers=session.auth_headers())
    expect_status(response, 200)
    expect(response.json().get("deletedId") == session.created_id, "Deleted ID mismatch")

    response = await session.client.get(f"/books/{session.created_id}")
    expect_status(response, 404)


async def check_delete_missing_book(session: SmokeSession) -> None:
    response = await session.client.delete("/books/999999", headers=session.auth_headers())
    expect_status(response, 404)


CHECKS: List[Tuple[str, Callable[[SmokeSession], Awaitable[None]]]] = [
    ("Health Check", check_health),
    ("Get All Books", check_list_books),
    ("Get Book by ID", check_get_book),
    ("Get Non-Existent Book (404)", check_get_missing_book),
    ("Login with Valid Credentials", check_login),
    ("Login with Invalid Credentials (401)", check_login_invalid),
    ("Create Book Without Auth (401)", check_create_without_auth),
    ("Create Book With Invalid Token (401)", check_create_with_invalid_token),
    ("Create Book With Auth", check_create_book),
    ("Create Book Missing Fields (400)", check_create_missing_fields),
    ("Create Book Invalid ISBN (400)", check_create_invalid_isbn),
    ("Update Book", check_update_book),
    ("Update Non-Existent Book (404)", check_update_missing_book),
    ("Delete Book", check_delete_book),
    ("Delete Non-Existent Book (404)", check_delete_missing_book),
]


async def run_checks(base_url: str, transport: Optional[httpx.AsyncBaseTransport] = None) -> int:
    """
    Run all checks against ``base_url``.

    Args:
        base_url: Root URL of the server
        transport: Optional httpx transport, e.g. to call an ASGI app in-process

    Returns:
        Number of failed checks
    """
    failures: List[Tuple[str, str]] = []

    async with httpx.AsyncClient(base_url=base_url, timeout=10.0, transport=transport) as client:
        try:
            await client.get("/health")
        except httpx.HTTPError as e:
            print(f"❌ Cannot connect to server at {base_url}: {e}")
            print("   Start it with: python run_api.py")
            return 1
        print(f"✓ Server is running at {base_url}")

        session = SmokeSession(client)
        for name, check in CHECKS:
            print(f"\n🧪 Testing: {name}")
            try:
                await check(session)
                print(f"✅ PASS: {name}")
            except (SmokeTestFailure, httpx.HTTPError, KeyError, ValueError) as e:
                failures.append((name, str(e)))
                print(f"❌ FAIL: {name}")
                print(f"   Error: {e}")

    print("\n" + "=" * 60)
    print(f"Total checks: {len(CHECKS)}")
    print(f"✅ Passed: {len(CHECKS) - len(failures)}")
    print(f"❌ Failed: {len(failures)}")
    for name, error in failures:
        print(f"  - {name}: {error}")
    print("\n" + ("🎉 All checks passed!" if not failures else "⚠️  Some checks failed."))
    return len(failures)


async def main():
    """Main function."""
    base_url = sys.argv[1] if len(sys.argv) > 1 else os.getenv("API_URL", DEFAULT_BASE_URL)
    failures = await run_checks(base_url)
    sys.exit(1 if failures else 0)


if __name__ == "__main__":
    asyncio.run(main())
