from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List
from mealplan.core.models import Recipe, SuggestionEvent

class RecipeRepo(ABC):
    @abstractmethod
    def list_for_user(self, user_id: str) -> List[Recipe]: ...

class EventRepo(ABC):
    @abstractmethod
    def append(self, event: SuggestionEvent) -> None: ...
