import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from qudrat import config
from qudrat.certificates.certificate_router import router as certificate_router
from qudrat.certificates.template_router import router as template_router
from qudrat.challenges.challenge_day_router import router as challenge_day_router
from qudrat.challenges.challenge_router import router as challenge_router
from qudrat.core.database import close_client, create_indexes, get_client
from qudrat.core.errors import register_exception_handlers
from qudrat.courses.course_router import router as course_router
from qudrat.courses.lesson_router import router as lesson_router
from qudrat.mastery.ai_course_router import router as ai_course_router
from qudrat.mastery.ai_lesson_router import router as ai_lesson_router
from qudrat.payments.payment_router import router as payment_router
from qudrat.payments.spay_router import router as spay_router
from qudrat.prompts.prompt_router import router as prompt_router
from qudrat.system.health_router import router as health_router
from qudrat.users.user_router import router as user_router

logging.basicConfig(
    level=config.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # The API still serves (with 500s on data routes) when the database is down
    try:
        await create_indexes(get_client()[config.DB_NAME])
    except Exception as e:
        logger.error("Index creation skipped: %s", e)
    yield
    close_client()


app = FastAPI(title="Qudrat Academy Admin API", version=config.VERSION or "0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


# ==================== ROUTER REGISTRATION ====================
app.include_router(course_router, prefix="/api")
app.include_router(lesson_router, prefix="/api")
app.include_router(ai_course_router, prefix="/api")
app.include_router(ai_lesson_router, prefix="/api")
app.include_router(challenge_router, prefix="/api")
app.include_router(challenge_day_router, prefix="/api")
app.include_router(prompt_router, prefix="/api")
app.include_router(certificate_router, prefix="/api")
app.include_router(template_router, prefix="/api")
app.include_router(payment_router, prefix="/api")
app.include_router(spay_router, prefix="/api")
app.include_router(user_router, prefix="/api")
app.include_router(health_router)
# ============================================================


@app.get("/version")
def get_version():
    return {"version": config.VERSION or "unknown", "status": "stable"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=config.PORT)
