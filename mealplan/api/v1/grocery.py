from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from mealplan.core.consolidate import consolidate_ingredients, grocery_list_for
from mealplan.core.models import GroceryList, GroceryListRequest, Ingredient, SuggestionEvent
from mealplan.services.exceptions import RepoError
from mealplan.api.v1.suggest import get_repos, user_id_or_400

logger = logging.getLogger(__name__)

router = APIRouter(tags=["grocery"])

# ---- Routes ------------------------------------------------------------------

@router.post("/api/v1/grocery-list", response_model=GroceryList, status_code=status.HTTP_200_OK)
def build_grocery_list(
    body: GroceryListRequest,
    user_id: str = Depends(user_id_or_400),
    repos = Depends(get_repos),
):
    recipe_repo, event_repo = repos
    try:
        recipes = recipe_repo.list_for_user(user_id)
    except RepoError as e:
        raise HTTPException(status_code=500, detail=str(e))

    wanted = set(body.recipe_ids)
    chosen = [r for r in recipes if r.id in wanted]
    if not chosen:
        raise HTTPException(status_code=404, detail="None of the requested recipes were found")

    items = grocery_list_for(chosen)
    try:
        event_repo.append(SuggestionEvent(
            type="grocery_list",
            payload={"user_id": user_id, "recipe_ids": [r.id for r in chosen], "item_count": len(items)},
        ))
    except RepoError as e:
        logger.warning("Could not record grocery_list event: %s", e)
    return GroceryList(items=items)


@router.post("/api/v1/grocery-list/consolidate", response_model=GroceryList, status_code=status.HTTP_200_OK)
def consolidate(items: List[Ingredient]):
    return GroceryList(items=consolidate_ingredients(items))
