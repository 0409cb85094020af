import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import CORS_ORIGINS, LOG_LEVEL
from errors import RateLimited, StoreUnavailable
from routes.blog_route import admin_blog_router, blog_router
from routes.contact_route import admin_contact_router, contact_router
from routes.event_route import admin_booking_router, event_router
from routes.location_route import admin_location_router, location_router
from routes.menu_route import menu_router
from routes.schedule_exception_route import admin_schedule_exception_router, schedule_exception_router
from routes.user_route import user_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Pizzas in Places")

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(location_router)
app.include_router(schedule_exception_router)
app.include_router(contact_router)
app.include_router(event_router)
app.include_router(blog_router)
app.include_router(menu_router)
app.include_router(user_router)
app.include_router(admin_location_router)
app.include_router(admin_schedule_exception_router)
app.include_router(admin_contact_router)
app.include_router(admin_booking_router)
app.include_router(admin_blog_router)

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Rejects malformed input with per-field messages.

    Returns:
        JSONResponse: 400 with {"detail": "Validation failed", "errors": {field: [messages]}}.
    """
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        # drop the "body"/"query"/"path" prefix
        field = ".".join(str(part) for part in error["loc"][1:]) or str(error["loc"][0])
        errors.setdefault(field, []).append(error["msg"])
    return JSONResponse(status_code=400, content={"detail": "Validation failed", "errors": errors})

@app.exception_handler(StoreUnavailable)
async def store_unavailable_handler(request: Request, exc: StoreUnavailable):
    return JSONResponse(status_code=503, content={"detail": exc.message})

@app.exception_handler(RateLimited)
async def rate_limited_handler(request: Request, exc: RateLimited):
    return JSONResponse(
        status_code=429,
        content={"detail": "Too many requests. Please try again later.", "retryAfter": exc.retry_after},
        headers={"Retry-After": str(exc.retry_after), "X-RateLimit-Remaining": "0"},
    )

@app.get("/")
def base_path():
    """
    Root endpoint to verify that the API is running.

    Returns:
        dict: A success message.
    """
    return {"success": True}
