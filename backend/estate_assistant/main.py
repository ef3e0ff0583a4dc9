"""
FastAPI main application for the Broker Assistant.

This is the entry point for the backend API server.
"""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from .config import get_settings
from .models.schemas import (
    AgentContext,
    ChatRequest,
    ChatResponse,
    ClientPreferences,
    HealthResponse,
    LeadScore,
)
from .services import (
    calculate_lead_score,
    get_performance_monitor,
    get_session_service,
    session_key,
)
from .workflow import RealEstateAssistant, get_workflow
from . import __version__

# Settings
settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler for startup/shutdown events.
    """
    # Startup
    logger.info("Starting Broker Assistant API...")
    logger.info(f"Version: {__version__}")
    logger.info(f"Router mode: {'llm' if settings.USE_LLM_ROUTER else 'rules'}")

    if settings.USE_LLM_ROUTER and not settings.OPENAI_API_KEY:
        logger.warning("USE_LLM_ROUTER is set but OPENAI_API_KEY is empty; chats will fall back")

    get_workflow()
    logger.info("Broker Assistant API started successfully")

    yield

    # Shutdown
    get_performance_monitor().log_metrics()
    logger.info("Shutting down Broker Assistant API...")


# Create FastAPI application
app = FastAPI(
    title="Broker Assistant API",
    description="""
    An AI chat assistant for real estate brokers and their clients.

    Features:
    - Property search, analysis and comparison
    - Market analysis
    - Showing scheduling
    - Lead scoring
    """,
    version=__version__,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify allowed origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================
# API Endpoints
# ============================================================

@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Broker Assistant API",
        "version": __version__,
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """
    Health check endpoint to verify service status.
    """
    llm_configured = bool(settings.OPENAI_API_KEY)
    router_mode = "llm" if settings.USE_LLM_ROUTER else "rules"

    return HealthResponse(
        status="healthy" if (llm_configured or router_mode == "rules") else "degraded",
        version=__version__,
        router_mode=router_mode,
        llm_configured=llm_configured,
    )


@app.post("/chat", response_model=ChatResponse, tags=["Chat"])
def chat(request: ChatRequest):
    """
    Main endpoint for chatting with the assistant.

    Send a message with the broker's and client's details and receive a
    reply plus the result of the tool the assistant used.
    """
    if not request.message.strip():
        raise HTTPException(status_code=400, detail="Message is required")

    context = AgentContext(
        broker_profile=request.broker_data,
        client_profile=request.client_data,
    )
    session_id = request.session_id or session_key(context.broker_id, context.client_id)

    logger.info(f"Chat from session {session_id}: {request.message[:50]}...")

    session_service = get_session_service()
    removed = session_service.cleanup_stale_sessions()
    if removed:
        logger.info(f"Removed {removed} stale session(s)")

    session = session_service.get_or_create_session(session_id)

    try:
        assistant = RealEstateAssistant(context=context, session=session)
        result = assistant.chat(request.message, request.selected_properties)

    except Exception as e:
        logger.error(f"Error processing chat: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Failed to process chat: {str(e)}"
        )

    return ChatResponse(
        success=True,
        response=result.response,
        tool_used=result.tool_used.value,
        tool_result=result.tool_result.model_dump(mode="json") if result.tool_result else None,
        session_id=session_id,
    )


@app.post("/leads/score", response_model=LeadScore, tags=["Leads"])
async def score_lead(preferences: ClientPreferences):
    """
    Score a lead from the client's preferences.
    """
    lead_score = calculate_lead_score(preferences)
    logger.info(
        f"Scored lead in {preferences.location!r}: {lead_score.total_score} ({lead_score.qualification})"
    )
    return lead_score


@app.get("/history/{session_id}", tags=["Session"])
async def get_history(session_id: str):
    """
    Get conversation history for a session.
    """
    session = get_session_service().get_session(session_id)
    history = session.history if session else []

    return {
        "session_id": session_id,
        "history": history,
        "count": len(history),
    }


@app.delete("/session/{session_id}", tags=["Session"])
async def delete_session(session_id: str):
    """
    Delete a session and all its data.
    """
    deleted = get_session_service().delete_session(session_id)

    return {
        "success": deleted,
        "message": "Session deleted" if deleted else "Session not found",
    }


@app.get("/stats", tags=["Debug"])
async def get_stats():
    """
    Get system statistics (for debugging/monitoring).
    """
    monitor = get_performance_monitor()
    session_service = get_session_service()

    return {
        "active_sessions": session_service.get_active_session_count(),
        "performance": monitor.get_metrics().to_dict(),
        "cache_hit_rate": round(monitor.get_cache_hit_rate(), 2),
    }


@app.post("/stats/reset", tags=["Debug"])
async def reset_stats():
    """
    Reset the performance metrics.
    """
    monitor = get_performance_monitor()
    monitor.log_metrics()
    monitor.reset()
    logger.info("Performance metrics reset")

    return {"success": True, "performance": monitor.get_metrics().to_dict()}


# ============================================================
# Run with Uvicorn (for development)
# ============================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "estate_assistant.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
