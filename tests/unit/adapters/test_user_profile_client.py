from uuid import uuid4

import httpx
import pytest

from auth_service.adapter.services.user_profile_client import HttpUserProfileClient
from auth_service.domain.entities import ErrorCode, UserStatus


def make_client(handler) -> HttpUserProfileClient:
    transport = httpx.MockTransport(handler)
    return HttpUserProfileClient(httpx.AsyncClient(transport=transport, base_url="http://users"))


@pytest.mark.asyncio
async def test_get_auth_details_by_email():
    user_id = uuid4()
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["email"] = request.url.params["email"]
        return httpx.Response(
            200,
            json={"userId": str(user_id), "roles": ["USER"], "authorities": [], "status": "ACTIVE"},
        )

    result = await make_client(handler).get_auth_details_by_email("u@x.com")

    assert result.is_ok()
    assert result.value.user_id == user_id
    assert result.value.status == UserStatus.active
    assert seen == {"path": "/user/auth-details/by-email", "email": "u@x.com"}


@pytest.mark.asyncio
async def test_get_auth_details_by_user_id_passes_query_param():
    user_id = uuid4()

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/user/auth-details/by-userid"
        assert request.url.params["userId"] == str(user_id)
        return httpx.Response(200, json={"userId": str(user_id), "status": "SUSPENDED"})

    result = await make_client(handler).get_auth_details_by_user_id(user_id)

    assert result.value.is_blocked


@pytest.mark.asyncio
async def test_get_user():
    user_id = uuid4()

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == f"/user/{user_id}"
        return httpx.Response(
            200, json={"firstName": "Ada", "lastName": "Lovelace", "email": "ada@example.com"}
        )

    result = await make_client(handler).get_user(user_id)

    assert result.value.first_name == "Ada"


@pytest.mark.asyncio
async def test_not_found_is_reported_as_not_found():
    result = await make_client(lambda request: httpx.Response(404)).get_user(uuid4())

    assert result.error.code == ErrorCode.NOT_FOUND


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [400, 500, 503])
async def test_other_errors_are_upstream_failures(status_code):
    result = await make_client(
        lambda request: httpx.Response(status_code, text="boom")
    ).get_auth_details_by_email("u@x.com")

    assert result.error.code == ErrorCode.UPSTREAM_UNAVAILABLE
    assert "boom" not in result.error.message


@pytest.mark.asyncio
async def test_transport_errors_are_upstream_failures():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    result = await make_client(handler).get_user(uuid4())

    assert result.error.code == ErrorCode.UPSTREAM_UNAVAILABLE


@pytest.mark.asyncio
async def test_malformed_body_is_an_upstream_failure():
    result = await make_client(lambda request: httpx.Response(200, json={"nope": 1})).get_user(uuid4())

    assert result.error.code == ErrorCode.UPSTREAM_UNAVAILABLE


@pytest.mark.asyncio
async def test_verify_user_email():
    user_id = uuid4()

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "PATCH"
        assert request.url.path == f"/user/{user_id}/verify"
        return httpx.Response(204)

    assert (await make_client(handler).verify_user_email(user_id)).is_ok()


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [404, 500])
async def test_verify_user_email_failure(status_code):
    result = await make_client(lambda request: httpx.Response(status_code)).verify_user_email(uuid4())

    assert result.error.code == ErrorCode.EMAIL_VERIFICATION_FAILED
