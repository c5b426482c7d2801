import httpx
import pytest
from drupal_api_python.error_translator import get_errors_from_response, raise_for_json_errors
from drupal_api_python.errors import UpstreamHttpError


@pytest.mark.asyncio
async def test_json_message_is_returned():
    response = httpx.Response(403, headers={"content-type": "application/json"}, json={"message": "Access denied."})

    assert await get_errors_from_response(response) == "Access denied."


@pytest.mark.asyncio
async def test_json_content_type_with_charset():
    response = httpx.Response(
        403,
        headers={"content-type": "application/json; charset=utf-8"},
        json={"message": "Access denied."},
    )

    assert await get_errors_from_response(response) == "Access denied."


@pytest.mark.asyncio
async def test_json_api_errors_are_returned():
    errors = [{"status": "404", "title": "Not Found", "detail": "The node does not exist."}]
    response = httpx.Response(404, headers={"content-type": "application/vnd.api+json"}, json={"errors": errors})

    assert await get_errors_from_response(response) == errors


@pytest.mark.asyncio
async def test_empty_json_api_errors_fall_back_to_status_text():
    response = httpx.Response(500, headers={"content-type": "application/vnd.api+json"}, json={"errors": []})

    assert await get_errors_from_response(response) == "Internal Server Error"


@pytest.mark.asyncio
async def test_json_without_message_falls_back_to_status_text():
    response = httpx.Response(400, headers={"content-type": "application/json"}, json={"error": "invalid_client"})

    assert await get_errors_from_response(response) == "Bad Request"


@pytest.mark.asyncio
async def test_invalid_json_falls_back_to_status_text():
    response = httpx.Response(502, headers={"content-type": "application/json"}, content=b"<html>oops</html>")

    assert await get_errors_from_response(response) == "Bad Gateway"


@pytest.mark.asyncio
async def test_unknown_content_type_falls_back_to_status_text():
    response = httpx.Response(404, headers={"content-type": "text/html"}, content=b"<h1>Not found</h1>")

    assert await get_errors_from_response(response) == "Not Found"


@pytest.mark.asyncio
async def test_raise_for_json_errors_with_json_api_errors():
    response = httpx.Response(
        422,
        headers={"content-type": "application/vnd.api+json"},
        json={"errors": [{"title": "Invalid"}]},
    )

    with pytest.raises(UpstreamHttpError) as exc:
        await raise_for_json_errors(response, "Error while saving: ")

    assert exc.value.errors == [{"title": "Invalid"}]
    assert exc.value.status_code == 422
    assert exc.value.message_prefix == "Error while saving: "
    assert str(exc.value) == "Error while saving: Invalid"


@pytest.mark.asyncio
async def test_raise_for_json_errors_formats_status_title_and_detail():
    response = httpx.Response(
        404,
        headers={"content-type": "application/vnd.api+json"},
        json={"errors": [{"status": "404", "title": "Not Found", "detail": "The node does not exist."}]},
    )

    with pytest.raises(UpstreamHttpError) as exc:
        await raise_for_json_errors(response)

    assert str(exc.value) == "404 Not Found\nThe node does not exist."


@pytest.mark.asyncio
async def test_raise_for_json_errors_ignores_success():
    response = httpx.Response(200, headers={"content-type": "application/json"}, json={"message": "ok"})

    await raise_for_json_errors(response)
