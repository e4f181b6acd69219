"""HTTP 入口。

chat-therapist 路由把原始请求体交给 MessageRelay，并在所有响应上附加
宽松的跨域头；OPTIONS 预检直接返回 200 空响应。
调用方鉴权由外层平台负责，这里不做校验。
"""

from fastapi import Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from relay_core import __version__
from relay_core.api.schemas import MoodSummaryRequest
from relay_core.config.settings import settings
from relay_core.domain.exceptions import BusinessError
from relay_core.infrastructure.logging.logger import logger
from relay_core.relay import MessageRelay, get_default_relay
from relay_core.resources import MOODS, crisis_resources_payload, summarize_moods


CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization, X-Client-Info, Apikey",
}

RELAY_PATHS = ("/chat-therapist", "/functions/v1/chat-therapist")


app = FastAPI(title="Mindful Relay", version=__version__)


def get_relay() -> MessageRelay:
    return get_default_relay()


@app.exception_handler(BusinessError)
async def business_error_handler(request: Request, exc: BusinessError):
    logger.info(f"Rejected request: {exc.code}", extra={"extra": {"path": request.url.path, "code": exc.code}})
    return JSONResponse({"error": exc.message}, status_code=exc.http_status, headers=CORS_HEADERS)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # 与业务错误保持同一种 400 {"error"} 形状
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = f"{loc}: {first.get('msg', 'invalid request')}" if loc else first.get("msg", "invalid request")
    logger.info("Rejected invalid request body", extra={"extra": {"path": request.url.path, "errors": len(errors)}})
    return JSONResponse({"error": message}, status_code=400, headers=CORS_HEADERS)


async def preflight() -> Response:
    return Response(status_code=200, headers=CORS_HEADERS)


async def chat_therapist(request: Request, relay: MessageRelay = Depends(get_relay)) -> JSONResponse:
    body = await request.body()
    # Provider 调用是同步阻塞的，放到线程池里执行
    result = await run_in_threadpool(relay.handle, body)
    return JSONResponse(result.body(), status_code=result.status_code, headers=CORS_HEADERS)


for _path in RELAY_PATHS:
    app.add_api_route(_path, preflight, methods=["OPTIONS"], tags=["Chat"])
    app.add_api_route(_path, chat_therapist, methods=["POST"], tags=["Chat"])


@app.get("/health", tags=["Status"])
def health():
    return JSONResponse(
        {
            "ok": True,
            "provider": settings.default_provider,
            "configured": settings.provider_configured,
        },
        headers=CORS_HEADERS,
    )


@app.get("/crisis-resources", tags=["Resources"])
def crisis_resources():
    return JSONResponse(crisis_resources_payload(), headers=CORS_HEADERS)


@app.get("/moods", tags=["Resources"])
def moods():
    return JSONResponse(
        [{"value": m.value, "label": m.label, "emoji": m.emoji, "color": m.color} for m in MOODS],
        headers=CORS_HEADERS,
    )


@app.post("/moods/summary", tags=["Resources"])
def mood_summary(req: MoodSummaryRequest):
    summary = summarize_moods(req.entries, days=req.days)
    return JSONResponse(summary.to_payload(), headers=CORS_HEADERS)
