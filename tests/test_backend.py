import httpx
import pytest

from core.backend import TOOLS_CALL_PATH, ArticlesBackend, MalformedPayload
from core.config import DEFAULT_STRAPI_URL, AdapterConfig
from core.errors import TransportError, UpstreamAPIError, UpstreamHTTPError

from tests.fakes import BASE_URL, envelope


@pytest.mark.asyncio
async def test_call_posts_name_and_arguments(backend, upstream):
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["method"] = request.method
        return upstream.handler(request)

    backend._transport = httpx.MockTransport(handler)
    upstream.respond(envelope([{"id": 1}]))

    result = await backend.call("search_articles", {"query": "mcp", "limit": 5})

    assert result == [{"id": 1}]
    assert seen["method"] == "POST"
    assert seen["url"] == BASE_URL + TOOLS_CALL_PATH
    assert upstream.last_call == {"name": "search_articles", "arguments": {"query": "mcp", "limit": 5}}


@pytest.mark.asyncio
async def test_non_success_status_raises_http_error(backend, upstream):
    upstream.respond(status_code=502, text="bad gateway")

    with pytest.raises(UpstreamHTTPError) as excinfo:
        await backend.call("get_all_articles", {"limit": 1})

    assert excinfo.value.status_code == 502
    assert excinfo.value.body == "bad gateway"


@pytest.mark.asyncio
async def test_error_field_raises_api_error(backend, upstream):
    upstream.respond({"error": {"message": "boom"}})

    with pytest.raises(UpstreamAPIError) as excinfo:
        await backend.get_article_by_id(1)

    assert excinfo.value.message == "boom"


@pytest.mark.asyncio
async def test_string_error_field_raises_api_error(backend, upstream):
    upstream.respond({"error": "nope"})

    with pytest.raises(UpstreamAPIError, match="nope"):
        await backend.get_article_categories()


@pytest.mark.asyncio
async def test_network_failure_raises_transport_error(backend, upstream):
    upstream.fail(httpx.ConnectError("connection refused"))

    with pytest.raises(TransportError):
        await backend.get_all_articles(10)


@pytest.mark.asyncio
async def test_undecodable_inner_text_returns_sentinel(backend, upstream):
    upstream.respond({"content": [{"type": "text", "text": "not-json"}]})

    result = await backend.search_articles("x", 5)

    assert isinstance(result, MalformedPayload)
    assert result == []
    assert result.parse_failed
    assert result.raw_text == "not-json"


@pytest.mark.asyncio
async def test_non_json_body_returns_sentinel(backend, upstream):
    upstream.respond(text="<html>oops</html>")

    result = await backend.get_all_articles(10)

    assert result == [] and result.parse_failed


@pytest.mark.asyncio
async def test_unexpected_shape_is_returned_unmodified(backend, upstream):
    upstream.respond({"data": [{"id": 1}]})

    assert await backend.get_all_articles(10) == {"data": [{"id": 1}]}


@pytest.mark.asyncio
async def test_get_all_articles_forwards_category_only_when_set(backend, upstream):
    upstream.respond(envelope([]))
    upstream.respond(envelope([]))

    await backend.get_all_articles(20)
    assert upstream.last_call["arguments"] == {"limit": 20}

    await backend.get_all_articles(20, category="tech")
    assert upstream.last_call["arguments"] == {"limit": 20, "category": "tech"}


@pytest.mark.asyncio
async def test_get_article_by_id_sends_integer(backend, upstream):
    upstream.respond(envelope({"id": 5}))

    assert await backend.get_article_by_id(5) == {"id": 5}
    assert upstream.last_call == {"name": "get_article_by_id", "arguments": {"id": 5}}


def test_base_url_trailing_slash_is_normalized():
    backend = ArticlesBackend(AdapterConfig(base_url="https://x.test/"))
    assert backend.endpoint == "https://x.test" + TOOLS_CALL_PATH


def test_config_from_env():
    assert AdapterConfig.from_env({}).base_url == DEFAULT_STRAPI_URL
    assert AdapterConfig.from_env({"STRAPI_URL": ""}).base_url == DEFAULT_STRAPI_URL
    assert AdapterConfig.from_env({"STRAPI_URL": "https://cms.test/"}).base_url == "https://cms.test"


@pytest.mark.asyncio
async def test_empty_error_object_still_raises_api_error(backend, upstream):
    upstream.respond({"error": {}})

    with pytest.raises(UpstreamAPIError, match="Upstream reported an error"):
        await backend.get_article_by_id(5)


@pytest.mark.asyncio
@pytest.mark.parametrize("inner", ["", "   ", None, 42])
async def test_wrapper_with_empty_or_non_string_text_returns_sentinel(backend, upstream, inner):
    upstream.respond({"content": [{"type": "text", "text": inner}]})

    result = await backend.get_article_by_id(5)

    assert isinstance(result, MalformedPayload)
    assert result == []


@pytest.mark.asyncio
async def test_wrapper_without_text_key_is_returned_unmodified(backend, upstream):
    body = {"content": [{"type": "image", "data": "abc"}]}
    upstream.respond(body)

    assert await backend.get_all_articles(1) == body


@pytest.mark.asyncio
async def test_invalid_url_raises_transport_error(backend, upstream):
    upstream.fail(httpx.InvalidURL("Invalid non-printable ASCII character in URL"))

    with pytest.raises(TransportError):
        await backend.get_article_by_id(5)
