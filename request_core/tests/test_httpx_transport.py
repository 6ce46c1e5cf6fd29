import httpx
import pytest

from request_core import HttpStatusError, RequestTimeoutError, get_request
from request_core.client.config import CacheOptions
from request_core.domain.models import FailureKind, TransportFailure, TransportSuccess
from request_core.transport import HttpxTransport, ResponseCache, create_transport


def make_transport(handler, cache=None):
    return HttpxTransport(timeout_ms=1000, cache=cache, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_success_json_body():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["method"] = request.method
        captured["auth"] = request.headers.get("Authorization")
        captured["params"] = dict(request.url.params)
        return httpx.Response(200, json={"code": 200, "data": {"users": [1]}})

    t = make_transport(handler)
    outcome = await t.send(
        "http://api.test/users",
        {"params": {"page": "1"}, "headers": {"Authorization": "Bearer t"}},
    )
    assert isinstance(outcome, TransportSuccess)
    assert outcome.body == {"code": 200, "data": {"users": [1]}}
    assert captured == {"method": "GET", "auth": "Bearer t", "params": {"page": "1"}}


@pytest.mark.asyncio
async def test_text_and_empty_bodies():
    bodies = iter([b"plain text", b""])

    def handler(request):
        return httpx.Response(200, content=next(bodies))

    t = make_transport(handler)
    assert (await t.send("http://api.test/a")).body == "plain text"
    assert (await t.send("http://api.test/b")).body is None


@pytest.mark.asyncio
async def test_non_2xx_status():
    def handler(request):
        return httpx.Response(403, json={"errorMsg": "error!"})

    outcome = await make_transport(handler).send("http://api.test/users_with_status_403")
    assert isinstance(outcome, TransportFailure)
    assert outcome.kind is FailureKind.HTTP_STATUS_ERROR
    assert outcome.status == 403
    assert outcome.body == {"errorMsg": "error!"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error, kind",
    [
        (httpx.ReadTimeout, FailureKind.TIMEOUT),
        (httpx.ConnectTimeout, FailureKind.TIMEOUT),
        (httpx.ConnectError, FailureKind.NETWORK_FAILURE),
        (httpx.ProxyError, FailureKind.CORS_OR_OPAQUE),
        (httpx.RemoteProtocolError, FailureKind.CORS_OR_OPAQUE),
    ],
)
async def test_transport_errors_are_tagged(error, kind):
    def handler(request):
        raise error("boom", request=request)

    outcome = await make_transport(handler).send("http://api.test/x")
    assert isinstance(outcome, TransportFailure)
    assert outcome.kind is kind
    assert outcome.message == "boom"


@pytest.mark.asyncio
async def test_cache_serves_repeated_get():
    hits = []

    def handler(request):
        hits.append(request.method)
        return httpx.Response(200, json={"code": 200, "data": len(hits)})

    t = make_transport(handler, cache=ResponseCache(max_entries=10, ttl_ms=60000))
    first = await t.send("http://api.test/users")
    second = await t.send("http://api.test/users")
    await t.send("http://api.test/users", {"method": "POST", "json": {}})
    await t.send("http://api.test/users", {"method": "POST", "json": {}})
    assert first == second
    assert hits == ["GET", "POST", "POST"]


@pytest.mark.asyncio
async def test_cache_skips_failures():
    hits = []

    def handler(request):
        hits.append(1)
        return httpx.Response(500, json={"errorMsg": "x"})

    t = make_transport(handler, cache=ResponseCache())
    await t.send("http://api.test/users")
    await t.send("http://api.test/users")
    assert len(hits) == 2


def test_response_cache_eviction_and_ttl(monkeypatch):
    now = [100.0]
    monkeypatch.setattr("request_core.transport.cache.time.monotonic", lambda: now[0])
    cache = ResponseCache(max_entries=2, ttl_ms=1000)
    for key in ("a", "b", "c"):
        cache.set(key, TransportSuccess(body=key))
    assert len(cache) == 2
    assert cache.get("a") is None
    assert cache.get("c").body == "c"
    now[0] += 1.5
    assert cache.get("c") is None


def test_create_transport_cache_toggle():
    assert create_transport(15000).cache is None
    t = create_transport(15000, CacheOptions(max=5, ttl=1000))
    assert isinstance(t.cache, ResponseCache)


@pytest.mark.asyncio
async def test_end_to_end_with_mock_transport():
    def handler(request):
        if request.url.path == "/api/users":
            return httpx.Response(200, json={"code": 200, "data": {"users": [1]}})
        if request.url.path == "/api/forbidden":
            return httpx.Response(403, json={"errorCode": "NoAccess", "errorMsg": "error!"})
        raise httpx.ReadTimeout("timeout", request=request)

    request = get_request(
        prefix="http://api.test/api",
        set_token=lambda: {},
        get_msg_by_http_status=lambda code: "forbidden" if code == 403 else None,
        http_transport=httpx.MockTransport(handler),
    )
    result = await request("/users")
    assert result.data == {"users": [1]}

    with pytest.raises(HttpStatusError) as exc:
        await request("/forbidden")
    # normalize 后的 code 缺失，状态码查找拿到 None，退回到业务码查找与原始信息
    assert exc.value.result.to_dict() == {"code": 403, "errorCode": "NoAccess", "errorMsg": "error!"}

    with pytest.raises(RequestTimeoutError):
        await request("/slow")


@pytest.mark.asyncio
async def test_cached_results_do_not_share_data():
    def handler(request):
        return httpx.Response(200, json={"code": 200, "data": {"users": [1]}})

    request = get_request(
        prefix="http://api.test",
        set_token=lambda: {},
        cache={"max": 10, "ttl": 60000},
        http_transport=httpx.MockTransport(handler),
    )
    first = await request("/users")
    first.data["users"].append(99)
    second = await request("/users")
    third = await request("/users")
    assert second.data == {"users": [1]}
    assert second.data is not first.data
    assert third.data is not second.data


def test_response_cache_hands_out_copies():
    cache = ResponseCache(max_entries=2, ttl_ms=1000)
    body = {"code": 200, "data": {"users": [1]}}
    cache.set("k", TransportSuccess(body=body))
    body["data"]["users"].append(2)
    first = cache.get("k")
    first.body["data"]["users"].append(3)
    assert cache.get("k").body == {"code": 200, "data": {"users": [1]}}
