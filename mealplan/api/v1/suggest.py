from __future__ import annotations

import logging
import time
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from mealplan.config import Settings
from mealplan.core.models import StrategyName, SuggestionEvent, SuggestionOptions, SuggestResponse
from mealplan.core.suggest import suggest_recipes
from mealplan.services.exceptions import RepoError
from mealplan.services.metrics import MetricsLogger
from mealplan.services.repo.json_repo import JSONEventRepo, JSONRecipeRepo

logger = logging.getLogger(__name__)

router = APIRouter(tags=["suggestions"])

# ---- Dependencies ------------------------------------------------------------

def get_settings() -> Settings:
    return Settings()

def get_repos(settings: Settings = Depends(get_settings)):
    return JSONRecipeRepo(settings), JSONEventRepo(settings)

def user_id_or_400(request: Request) -> str:
    uid = request.headers.get("X-User-Id")
    if not uid:
        raise HTTPException(status_code=400, detail="Missing X-User-Id header")
    return uid

# ---- Route ------------------------------------------------------------------

@router.get("/api/v1/recipes/suggestions", response_model=SuggestResponse)
def get_suggestions(
    count: Optional[int] = Query(None, ge=0, description="How many recipes to suggest"),
    strategy: StrategyName = Query("balanced"),
    exclude: List[str] = Query([], description="Recipe ids already shown"),
    seed: Optional[int] = Query(None, description="Fix the random source for repeatable output"),
    user_id: str = Depends(user_id_or_400),
    repos = Depends(get_repos),
    settings: Settings = Depends(get_settings),
):
    recipe_repo, event_repo = repos
    requested = settings.default_suggestion_count if count is None else min(count, settings.max_suggestion_count)

    try:
        recipes = recipe_repo.list_for_user(user_id)
    except RepoError as e:
        logger.error("Recipe lookup failed for user %s: %s", user_id, e)
        raise HTTPException(status_code=500, detail=str(e))

    options = SuggestionOptions(exclude_recipe_ids=exclude, strategy=strategy, random_seed=seed)
    t0 = time.perf_counter()
    suggestions = suggest_recipes(recipes, requested, options)
    dt_ms = (time.perf_counter() - t0) * 1000.0

    MetricsLogger(settings).log_latency(
        name="suggest_generate",
        duration_ms=dt_ms,
        origin="backend",
        extra={"strategy": strategy, "pool": len(recipes), "excluded": len(exclude)},
        user_id=user_id,
    )

    # Log the event (best-effort; if it fails, still return suggestions)
    try:
        event_repo.append(
            SuggestionEvent(
                type="suggest",
                payload={
                    "user_id": user_id,
                    "strategy": strategy,
                    "requested_count": requested,
                    "recipe_ids": [s.recipe.id for s in suggestions],
                },
            )
        )
    except RepoError as e:
        logger.warning("Could not record suggest event: %s", e)

    return SuggestResponse(
        suggestions=suggestions,
        total_recipes=len(recipes),
        requested_count=requested,
    )
