import logging
from contextlib import asynccontextmanager
from typing import List

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .db import settings
from .models import LeaderboardEntry, Question
from .repository import repository
from .schemas import ApiMessage, LeaderboardEntryIn

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    added = await repository.seed_questions()
    if added:
        logger.info("Seeded %s default questions", added)
    yield


app = FastAPI(title="UCL Quiz API", lifespan=lifespan)

origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()]
origin_regex = settings.CORS_ORIGIN_REGEX or None

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins or ["*"],
    allow_origin_regex=origin_regex,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        message = error.get("msg", "Invalid value")
        parts.append(f"{message} at \"{location}\"" if location else message)
    return "Validation error: " + "; ".join(parts)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(_: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"detail": _validation_message(exc)})


@app.get("/api/questions", response_model=List[Question])
async def list_questions():
    try:
        return await repository.list_questions()
    except Exception as exc:
        logger.exception("Error fetching questions")
        raise HTTPException(status_code=500, detail="Failed to fetch questions") from exc


@app.get("/api/questions/{question_id}", response_model=Question)
async def get_question(question_id: int):
    try:
        question = await repository.get_question(question_id)
    except Exception as exc:
        logger.exception("Error fetching question %s", question_id)
        raise HTTPException(status_code=500, detail="Failed to fetch question") from exc
    if not question:
        raise HTTPException(404, "Question not found")
    return question


@app.get("/api/leaderboard", response_model=List[LeaderboardEntry])
async def list_leaderboard():
    try:
        return await repository.list_leaderboard()
    except Exception as exc:
        logger.exception("Error fetching leaderboard")
        raise HTTPException(status_code=500, detail="Failed to fetch leaderboard") from exc


@app.post(
    "/api/leaderboard",
    response_model=LeaderboardEntry,
    status_code=201,
    responses={400: {"model": ApiMessage}, 500: {"model": ApiMessage}},
)
async def create_leaderboard_entry(payload: LeaderboardEntryIn):
    try:
        return await repository.create_leaderboard_entry(payload)
    except Exception as exc:
        logger.exception("Error creating leaderboard entry")
        raise HTTPException(status_code=500, detail="Failed to create leaderboard entry") from exc
