"""Location suggestion collaborator.

Sends file metadata to a remote suggestion service and returns the
suggested folder with a short rationale. The exchange never touches the node
store; acting on a suggestion is a separate, explicit move or create.
"""

import logging
import os
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from models.errors import SuggestionError

logger = logging.getLogger(__name__)


class SuggestFileLocationInput(BaseModel):
    """File metadata sent to the suggestion service.

    Serialized with camelCase keys (``fileName``, ``fileType``, ...) on the wire.

    Args:
        file_name: Name of the file.
        file_type: Type of the file (document, image, ...).
        file_description: Free-text description of the file content.
        current_location: Current folder of the file, if any.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    file_name: str = Field(min_length=1, description="Name of the file")
    file_type: str = Field(min_length=1, description="Type of the file")
    file_description: str = Field(min_length=1, description="Description of the file content")
    current_location: Optional[str] = Field(
        default=None, description="Current location of the file, if any"
    )


class SuggestFileLocationOutput(BaseModel):
    """Suggestion returned by the service.

    Args:
        suggested_location: Absolute-like suggested path.
        reasoning: Short explanation of the choice.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    suggested_location: str = Field(description="Suggested location for the file")
    reasoning: str = Field(description="Why that location was chosen")


class LocationSuggester(BaseModel):
    """HTTP client for the location suggestion service.

    Args:
        api_url: Endpoint that accepts the input JSON and returns the output JSON.
        api_key: Optional bearer token for the service.
        timeout: Request timeout in seconds.
    """

    api_url: Optional[str] = Field(default=None, description="Suggestion endpoint URL")
    api_key: Optional[str] = Field(default=None, description="Suggestion service API key")
    timeout: float = Field(default=10.0, gt=0, description="Request timeout in seconds")

    def __init__(self, **data):
        """Initialize the suggester.

        Falls back to the FILE_SUGGESTION_API_URL and FILE_SUGGESTION_API_KEY
        environment variables for values that are not provided.

        Args:
            **data: Keyword arguments for Pydantic model initialization.
        """
        if data.get("api_url") is None:
            data["api_url"] = os.environ.get("FILE_SUGGESTION_API_URL")
        if data.get("api_key") is None:
            data["api_key"] = os.environ.get("FILE_SUGGESTION_API_KEY")
        super().__init__(**data)

    @property
    def is_configured(self) -> bool:
        """Return True if an endpoint URL is available."""
        return bool(self.api_url)

    def suggest(self, request: SuggestFileLocationInput) -> SuggestFileLocationOutput:
        """Ask the service where a file should live.

        Args:
            request: File metadata.

        Returns:
            The suggested location and reasoning.

        Raises:
            ValueError: If no endpoint URL is configured.
            SuggestionError: If the request fails or the response is malformed.
        """
        import requests

        if not self.api_url:
            raise ValueError(
                "Suggestion service not configured. Set FILE_SUGGESTION_API_URL environment variable."
            )

        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        try:
            response = requests.post(
                self.api_url,
                json=request.model_dump(by_alias=True, exclude_none=True),
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning(f"Suggestion request for {request.file_name} failed: {e}")
            raise SuggestionError(f"Suggestion service unreachable: {e}") from e

        if response.status_code != 200:
            raise SuggestionError(
                f"Suggestion service request failed: {response.status_code} {response.text}",
                status_code=response.status_code,
            )

        try:
            result = SuggestFileLocationOutput.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise SuggestionError(f"Suggestion service returned an invalid body: {e}") from e

        logger.info(f"Suggested {result.suggested_location} for {request.file_name}")
        return result
