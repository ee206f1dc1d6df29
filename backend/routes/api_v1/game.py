"""Game API: upcoming matches, stage listing, single-match betting form."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Optional, Union

from fastapi import APIRouter, Depends, Form, HTTPException
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import AliasChoices, BaseModel, Field, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from betting.bet_validator import MAX_ID, AcceptedBet
from core.clock import app_timezone, get_now
from core.dependencies import get_db_session, require_user
from models.user import User
from services.game_service import (
    BetForm,
    MatchNotFoundError,
    list_playoff_stage,
    list_upcoming,
    load_bet_form,
    submit_bet,
)
from services.serializers import hidden_fields_for, player_to_dict, prediction_to_dict

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/game", tags=["game"])

INVALID_FORM_MESSAGE = "Form data is invalid, reload the page and try again."


class HiddenFields(BaseModel):
    """JSON bundle carried in the form's hidden input."""

    prediction_id: int = Field(
        gt=0, le=MAX_ID, validation_alias=AliasChoices("predictionId", "userMatchId")
    )
    home_team_id: Optional[Union[int, str]] = Field(default=None, validation_alias="homeTeamId")
    away_team_id: Optional[Union[int, str]] = Field(default=None, validation_alias="awayTeamId")
    match_start_date: Optional[datetime] = Field(default=None, validation_alias="matchStartDate")


def _stage_url(playoff_id: str) -> str:
    return f"/api/v1/game/playoff-stage/{playoff_id}"


def _load_error(match_slug: str) -> HTTPException:
    return HTTPException(
        status_code=500,
        detail=f"There was an error loading match by the id {match_slug}. Sorry.",
    )


def _bet_form_payload(form: BetForm) -> Dict[str, Any]:
    scorer_id = form.prediction.goal_scorer_id
    return {
        "prediction": prediction_to_dict(form.prediction),
        "home_team_players": [player_to_dict(p, scorer_id) for p in form.home_team_players],
        "away_team_players": [player_to_dict(p, scorer_id) for p in form.away_team_players],
        "hidden": hidden_fields_for(form.prediction),
    }


@router.get("", summary="Upcoming matches grouped by day")
async def get_upcoming(
    user: User = Depends(require_user),
    session: AsyncSession = Depends(get_db_session),
    now: datetime = Depends(get_now),
) -> dict:
    """Predictions of the user whose match starts between today's midnight and the end of the window."""
    groups = await list_upcoming(session, user.id, now, app_timezone())
    return {
        "groups": [
            {
                "key": g.key,
                "label": g.label,
                "predictions": [prediction_to_dict(p) for p in g.items],
            }
            for g in groups
        ]
    }


@router.get("/playoff-stage/{playoff_id}", summary="Predictions for one playoff stage")
async def get_playoff_stage(
    playoff_id: str,
    user: User = Depends(require_user),
    session: AsyncSession = Depends(get_db_session),
) -> dict:
    predictions = await list_playoff_stage(session, user.id, playoff_id)
    return {
        "playoff_id": playoff_id,
        "predictions": [prediction_to_dict(p) for p in predictions],
    }


@router.get("/playoff-stage/{playoff_id}/{match_slug}", summary="Betting form data for one match")
async def get_bet_form(
    playoff_id: str,
    match_slug: str,
    user: User = Depends(require_user),
    session: AsyncSession = Depends(get_db_session),
) -> dict:
    try:
        form = await load_bet_form(session, user.id, match_slug)
    except MatchNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except SQLAlchemyError as e:
        logger.exception("Loading bet form failed for match %s", match_slug)
        raise _load_error(match_slug) from e
    return _bet_form_payload(form)


@router.post("/playoff-stage/{playoff_id}/{match_slug}", summary="Submit a bet")
async def post_bet(
    playoff_id: str,
    match_slug: str,
    hidden: str = Form(...),
    home_team_score: Optional[str] = Form(None, alias="homeTeamScore"),
    away_team_score: Optional[str] = Form(None, alias="awayTeamScore"),
    goal_scorer_id: Optional[str] = Form(None, alias="goalScorerId"),
    user: User = Depends(require_user),
    session: AsyncSession = Depends(get_db_session),
    now: datetime = Depends(get_now),
):
    """
    Validate and store a bet.

    - 303 redirect to the stage listing when accepted.
    - 400 with the form data, form_error and the submitted fields when rejected.
    """
    fields = {
        "hidden": hidden,
        "homeTeamScore": home_team_score,
        "awayTeamScore": away_team_score,
        "goalScorerId": goal_scorer_id,
    }
    try:
        try:
            bundle = HiddenFields.model_validate_json(hidden)
        except ValidationError:
            form = await load_bet_form(session, user.id, match_slug)
            return JSONResponse(
                status_code=400,
                content={
                    **_bet_form_payload(form),
                    "form_error": INVALID_FORM_MESSAGE,
                    "reason": "invalid-form",
                    "fields": fields,
                },
            )

        decision = await submit_bet(
            session,
            user.id,
            match_slug,
            bundle.prediction_id,
            home_team_score,
            away_team_score,
            goal_scorer_id,
            now,
        )
        if isinstance(decision, AcceptedBet):
            return RedirectResponse(url=_stage_url(playoff_id), status_code=303)

        form = await load_bet_form(session, user.id, match_slug)
    except MatchNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except SQLAlchemyError as e:
        logger.exception("Submitting bet failed for match %s", match_slug)
        raise _load_error(match_slug) from e

    return JSONResponse(
        status_code=400,
        content={
            **_bet_form_payload(form),
            "form_error": decision.message,
            "reason": decision.reason,
            "fields": fields,
        },
    )
