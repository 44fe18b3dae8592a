import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn

from config import get_cors_origins
from exceptions import TextToPayError
from logging_config import get_logger, setup_logging
from routers import customers_router, payments_router, system_router, webhooks_router

setup_logging()
logger = get_logger(__name__)

# App instance
app = FastAPI(title="Text-to-Pay")

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(customers_router)
app.include_router(payments_router)
app.include_router(webhooks_router)
app.include_router(system_router)


@app.exception_handler(TextToPayError)
async def text_to_pay_error_handler(request: Request, exc: TextToPayError):
    logger.error(
        "request_failed",
        path=request.url.path,
        error_type=type(exc).__name__,
        error=exc.message,
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))
    message = "; ".join(messages) or "Invalid request body"
    logger.warning("request_invalid", path=request.url.path, error=message)
    return JSONResponse(status_code=400, content={"error": message})


# 404 fallback and last-resort error middleware
@app.middleware("http")
async def not_found_middleware(request: Request, call_next):
    try:
        response = await call_next(request)
        if response.status_code == 404:
            return JSONResponse(status_code=404, content={"error": "Route not found"})
        return response
    except Exception as e:
        logger.exception("unhandled_error", path=request.url.path)
        return JSONResponse(status_code=500, content={"error": str(e)})


if __name__ == "__main__":
    port = int(os.getenv("PORT", 3000))
    uvicorn.run("main:app", host="0.0.0.0", port=port, reload=True)
