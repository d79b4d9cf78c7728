from contextlib import asynccontextmanager
import os

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from src.resolution.bootstrap import ResolverRuntime
from src.routers import router as api_router
from src.utils.logger import logger
from src.utils.startup_validation import validate_startup


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the resolver runtime and create the context caches before serving."""
    logger.info("Entity Resolver starting up...")
    runtime = ResolverRuntime.build()

    if not validate_startup(runtime.registries):
        logger.error("Startup validation failed. Please check configuration.")
        # Keep serving so health checks can report the problem

    await runtime.start()
    app.state.resolver_runtime = runtime
    logger.info("✅ Resolver runtime ready (%s)", runtime.status()["caching"])
    yield
    logger.info("Shutting down Entity Resolver...")


app = FastAPI(title="Entity Resolver", version="0.1.0", lifespan=lifespan)

# CORS is optional for a service called mostly server-to-server
cors_origins_env = os.getenv("ALLOWED_ORIGINS")
if cors_origins_env:
    allowed_origins = [origin.strip() for origin in cors_origins_env.split(",")]
    logger.info(f"Allowed origins: {allowed_origins}")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    logger.info("✅ CORS middleware configured")


@app.get("/healthz")
def healthz(request: Request) -> dict:
    """Health check with context cache status."""
    runtime = getattr(request.app.state, "resolver_runtime", None)
    if runtime is None:
        return {"status": "starting"}

    status = runtime.status()
    health_status = {"status": "ok" if status["caching"] == "cached" else "degraded"}
    health_status.update(status)
    return health_status


# Mount API routes
app.include_router(api_router)
