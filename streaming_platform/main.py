import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from streaming_platform.api.v1 import api_v1_router
from streaming_platform.platform.config import settings
from streaming_platform.platform.errors import CallError, ContractError
from streaming_platform.platform.services.clarity import Err, UInt, render


async def _contract_error_handler(request: Request, exc: ContractError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.http_status,
        content={
            "detail": exc.code.label,
            "code": int(exc.code),
            "result": render(Err(UInt(int(exc.code)))),
        },
    )


async def _call_error_handler(request: Request, exc: CallError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": str(exc)})


def create_app() -> FastAPI:
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(title="Streaming Platform API")

    allowed_origins = [o.strip() for o in str(settings.allowed_origins).split(",") if o.strip()]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ContractError, _contract_error_handler)
    app.add_exception_handler(CallError, _call_error_handler)

    app.include_router(api_v1_router, prefix="/api/v1")
    return app


app = create_app()
