"""Location suggestion endpoint.

Forwards file metadata to the external suggestion service. The response is
advisory only; the store is never changed by this route.
"""

from fastapi import APIRouter

from api.dependencies import LocationSuggesterDep
from models.suggestion import SuggestFileLocationInput, SuggestFileLocationOutput

router = APIRouter(
    prefix="/suggestions",
    tags=["suggestions"],
)


@router.post("/location", response_model=SuggestFileLocationOutput, response_model_by_alias=True)
async def suggest_location(request: SuggestFileLocationInput, suggester: LocationSuggesterDep):
    """Ask the suggestion service where a file should be stored.

    Accepts and returns camelCase keys (``fileName``, ``suggestedLocation``, ...).

    Raises:
        ValueError: If the suggestion service is not configured (400).
        SuggestionError: If the service fails (502).
    """
    return suggester.suggest(request)
