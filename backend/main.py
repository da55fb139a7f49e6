# backend/main.py
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from dotenv import load_dotenv

load_dotenv()

from config import settings
from database import init_db
from utils.logging_config import setup_logging

# Routers
from routes.auth import router as auth_router
from routes.health import router as health_router
from routes.logs import router as logs_router
from routes.projects import router as projects_router
from routes.registrations import router as registrations_router
from routes.users import router as users_router

# Startup: logging first, then the one-time schema setup
setup_logging(settings.LOG_LEVEL, json_output=settings.LOG_JSON)
logger = logging.getLogger(__name__)
init_db()

app = FastAPI(title="RoadMaster Pro API", version="1.0.0")

# CORS Configuration
origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:3000",
]
if settings.FRONTEND_URL:
    origins.append(settings.FRONTEND_URL)

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["ETag"],
)


# ---- ERROR RESPONSES ----
# Every error body is {"error": ...}; server errors also carry "details".
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    content = {"error": exc.detail}
    details = getattr(exc, "details", None)
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


def _body_field(loc):
    # loc is ("body", <field>, ...); integer parts are list indexes or JSON parse offsets
    if not loc or loc[0] != "body":
        return None
    return next((part for part in reversed(loc[1:]) if isinstance(part, str)), None)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if any(err.get("type") == "json_invalid" for err in errors):
        message = "Invalid JSON body"
    else:
        fields = sorted({field for field in (_body_field(err.get("loc", ())) for err in errors) if field})
        message = f"Missing or invalid fields: {', '.join(fields)}" if fields else "Invalid request"
    details = [{"field": ".".join(str(part) for part in err.get("loc", ())), "message": err.get("msg")} for err in errors]
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message, "details": details})


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Unhandled database error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Database error", "details": str(exc)},
    )


# Route registration
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(registrations_router)
app.include_router(projects_router)
app.include_router(logs_router)


@app.get("/")
def read_root():
    return {"message": "RoadMaster Pro API is running"}
