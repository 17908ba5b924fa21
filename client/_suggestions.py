"""Location suggestion sub-client for the /suggestions endpoints.

This is an internal module. Import from `client` instead.
"""

from typing import Any

from client._base import AsyncBaseClient, BaseClient
from client.models import SuggestFileLocationOutput


def _suggestion_body(
    file_name: str, file_type: str, file_description: str, current_location: str | None
) -> dict[str, Any]:
    body = {"fileName": file_name, "fileType": file_type, "fileDescription": file_description}
    if current_location is not None:
        body["currentLocation"] = current_location
    return body


class SuggestionsClient(BaseClient):
    """Synchronous client for the location suggestion endpoint."""

    _BASE_PATH = "/suggestions"

    def suggest_location(
        self,
        file_name: str,
        file_type: str,
        file_description: str,
        current_location: str | None = None,
    ) -> SuggestFileLocationOutput:
        """Ask the server where a file should be stored.

        The suggestion is advisory; nothing is moved.

        Raises:
            ValidationError: If the suggestion service is not configured.
            ServerError: If the suggestion service fails.
        """
        data = self._post(
            "/location",
            json=_suggestion_body(file_name, file_type, file_description, current_location),
        )
        return SuggestFileLocationOutput.model_validate(data)


class AsyncSuggestionsClient(AsyncBaseClient):
    """Asynchronous client for the location suggestion endpoint."""

    _BASE_PATH = "/suggestions"

    async def suggest_location(
        self,
        file_name: str,
        file_type: str,
        file_description: str,
        current_location: str | None = None,
    ) -> SuggestFileLocationOutput:
        """Ask the server where a file should be stored."""
        data = await self._post(
            "/location",
            json=_suggestion_body(file_name, file_type, file_description, current_location),
        )
        return SuggestFileLocationOutput.model_validate(data)
