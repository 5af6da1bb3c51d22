import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from interview_engine import __version__
from interview_engine.api.errors import register_error_handlers
from interview_engine.api.routes import health, interviews, sessions
from interview_engine.core import config
from interview_engine.core.logging_config import sanitize_log_data, setup_logging
from interview_engine.llm.answer_grader import OpenAIAnswerGrader
from interview_engine.llm.openai_provider import OpenAIProvider
from interview_engine.llm.question_generator import OpenAIQuestionGenerator
from interview_engine.llm.router import is_model_available

logger = logging.getLogger(__name__)


# ============================================
# FASTAPI APP INIT
# ============================================

app = FastAPI(title="Interview Session Engine", version=__version__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Authorization", "Content-Type"],
)

register_error_handlers(app)


# ============================================
# ROUTERS
# ============================================

app.include_router(health.router)
app.include_router(interviews.router)
app.include_router(sessions.router)


# ============================================
# STARTUP
# ============================================

def build_collaborators(target: FastAPI):
    """Construct the generator and grader once and attach them to app.state."""
    target.state.question_generator = None
    target.state.answer_grader = None
    if not is_model_available():
        logger.error(
            "OpenAI API key not found. Interview generation and grading will not work. "
            "Set OPENAI_API_KEY or OPEN_AI_KEY."
        )
        return
    provider = OpenAIProvider()
    target.state.question_generator = OpenAIQuestionGenerator(provider)
    target.state.answer_grader = OpenAIAnswerGrader(provider)


@app.on_event("startup")
def on_startup():
    setup_logging(config.LOG_LEVEL)
    logger.info("Configuration: %s", sanitize_log_data({
        "database_url": config.DATABASE_URL,
        "run_migrations": config.RUN_MIGRATIONS,
        "generation_model": config.GENERATION_MODEL,
        "grading_model": config.GRADING_MODEL,
        "openai_api_key": config.OPENAI_API_KEY,
    }))

    if config.RUN_MIGRATIONS:
        from interview_engine.db.migrate import run_migrations
        run_migrations()
    else:
        from interview_engine.db.init_db import init_db
        init_db()
    
    build_collaborators(app)
    logger.info("Interview engine started")


@app.get("/")
def root():
    return {"status": "Interview engine API running"}
