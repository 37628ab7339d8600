"""Translation of Supabase driver errors into domain failures."""

from collections.abc import Iterator
from contextlib import contextmanager

import httpx
from supabase import PostgrestAPIError

from tutoring_api.errors import PersistenceFailure


@contextmanager
def store_errors(action: str) -> Iterator[None]:
    """Re-raise store and transport errors as PersistenceFailure."""
    try:
        yield
    except PostgrestAPIError as exc:
        detail = exc.message or str(exc)
        raise PersistenceFailure(f"Failed to {action}: {detail}") from exc
    except httpx.HTTPError as exc:
        raise PersistenceFailure(f"Failed to {action}: {exc}") from exc
