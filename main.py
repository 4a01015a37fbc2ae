import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from portfolio_api.core.config import Settings, settings
from portfolio_api.core.logging import setup_logging
from portfolio_api.database.contact_store import ContactStore, build_contact_store
from portfolio_api.routers import contacts
from portfolio_api.schemas.contacts import describe_errors
from portfolio_api.utils.contact_service import ContactSubmissionService
from portfolio_api.utils.email_service import EmailTransport, build_email_notifier

logger = logging.getLogger("portfolio_api")

CORS_ALLOW_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_ALLOW_HEADERS = ["Content-Type", "Authorization"]
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": ", ".join(CORS_ALLOW_METHODS),
    "Access-Control-Allow-Headers": ", ".join(CORS_ALLOW_HEADERS),
}


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = describe_errors(exc.errors())
    logger.info(f"Rejected {request.method} {request.url.path}: {[e['field'] for e in errors]}")
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": "Invalid form data", "errors": errors},
    )


def create_app(
    app_settings: Settings | None = None,
    store: ContactStore | None = None,
    transport: EmailTransport | None = None,
) -> FastAPI:
    """
    Build the API. The store and the mail transport are chosen once here from
    settings unless they are passed in.
    """
    app_settings = app_settings or settings
    setup_logging(app_settings.LOG_LEVEL)

    app = FastAPI(
        title=app_settings.PROJECT_NAME,
        description="Contact form API for the portfolio website.",
        version=app_settings.VERSION,
    )
    app.state.settings = app_settings
    app.state.contact_service = ContactSubmissionService(
        notifier=build_email_notifier(app_settings, transport),
        store=store or build_contact_store(app_settings),
        delivery_order=app_settings.CONTACT_DELIVERY_ORDER,
        store_timeout=app_settings.STORE_TIMEOUT_SECONDS,
    )

    # Adding CORS middleware for cross-origin requests
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origin_list,
        allow_credentials=False,
        allow_methods=CORS_ALLOW_METHODS,
        allow_headers=CORS_ALLOW_HEADERS,
    )
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(contacts.router, prefix="/api/contacts", tags=["Contacts"])

    # Root endpoint
    @app.get("/")
    def read_root():
        return {"message": f"Welcome to the {app_settings.PROJECT_NAME}"}

    # Registered after CORSMiddleware so it runs first: every OPTIONS request,
    # preflight or not, gets 200 with the fixed CORS headers
    @app.middleware("http")
    async def answer_options(request: Request, call_next):
        if request.method == "OPTIONS":
            return JSONResponse(content={"message": "OK"}, headers=CORS_HEADERS)
        return await call_next(request)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=5000, reload=False)
