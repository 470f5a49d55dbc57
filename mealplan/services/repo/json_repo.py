from __future__ import annotations

import io
import json
import os
from contextlib import contextmanager
from datetime import timezone
from typing import Iterator, List, Optional, Tuple

from pydantic import ValidationError

from mealplan.config import Settings
from mealplan.core.models import Recipe, SuggestionEvent
from mealplan.services.exceptions import RepoError
from mealplan.services.repo.base import EventRepo, RecipeRepo


# Cross-platform file lock (fcntl for *nix; msvcrt for Windows)
@contextmanager
def _locked(path: str, shared: bool = False) -> Iterator[io.FileIO]:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    f = open(path, "a+b")  # create if missing
    locker: Optional[Tuple[str, int]] = None
    try:
        try:
            import fcntl  # type: ignore
            fcntl.flock(f.fileno(), fcntl.LOCK_SH if shared else fcntl.LOCK_EX)
            locker = ("fcntl", 0)
        except ImportError:
            try:
                import msvcrt  # type: ignore
                msvcrt.locking(f.fileno(), msvcrt.LK_LOCK, 1)
                locker = ("msvcrt", 1)
            except (ImportError, OSError) as e:
                raise RepoError(f"Could not lock file {path}: {e}") from e
        except OSError as e:
            raise RepoError(f"Could not lock file {path}: {e}") from e
        yield f
    finally:
        try:
            if locker and locker[0] == "fcntl":
                import fcntl  # type: ignore
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)
            elif locker:
                import msvcrt  # type: ignore
                msvcrt.locking(f.fileno(), msvcrt.LK_UNLCK, locker[1])
        except OSError:
            pass  # closing the file releases the lock anyway
        f.close()


def _created_key(recipe: Recipe) -> float:
    if recipe.created_at is None:
        return float("-inf")
    ts = recipe.created_at
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.timestamp()


class JSONRecipeRepo(RecipeRepo):
    """
    Read-only recipe store backed by one JSON file:
    {"recipes": [{...Recipe...}, ...]}

    Writing recipes belongs to the recipe CRUD layer, not to this service.
    """

    def __init__(self, settings: Settings):
        self.path = settings.recipes_file

    def _load_all(self) -> List[Recipe]:
        if not os.path.exists(self.path):
            return []
        try:
            with _locked(self.path, shared=True) as f:
                f.seek(0)
                raw = f.read() or b"{}"
            obj = json.loads(raw.decode("utf-8"))
            rows = obj.get("recipes", []) if isinstance(obj, dict) else obj
            return [Recipe(**row) for row in rows]
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, TypeError, ValidationError) as e:
            raise RepoError(f"Failed to load recipes from {self.path}: {e}") from e

    def list_for_user(self, user_id: str) -> List[Recipe]:
        """User's recipes, newest first."""
        recipes = [r for r in self._load_all() if r.user_id == user_id]
        recipes.sort(key=_created_key, reverse=True)
        return recipes


class JSONEventRepo(EventRepo):
    def __init__(self, settings: Settings):
        self.path = settings.events_file

    def append(self, event: SuggestionEvent) -> None:
        try:
            line = (json.dumps(event.model_dump(), ensure_ascii=False, separators=(",", ":"), default=str) + "\n").encode("utf-8")
            with _locked(self.path) as f:
                f.seek(0, os.SEEK_END)
                f.write(line)
                f.flush()
                os.fsync(f.fileno())
        except (OSError, TypeError, ValueError) as e:
            raise RepoError(f"Failed to append event to {self.path}: {e}") from e
