"""Abstract provider adapter interface."""

from abc import ABC, abstractmethod
from typing import Any

from nagoyabae.images.types import EncodedImage
from nagoyabae.llm.errors import MissingCredentialError, UnsupportedModelError
from nagoyabae.llm.types import AnalysisRequest, GeneratedImage, RawPayload


class ProviderAdapter(ABC):
    """Translates normalized requests into one provider family's API calls.

    Credentials are captured at construction. The SDK client is only created
    once a call has passed the credential check, so a missing key never
    reaches the network.
    """

    credential_env_var: str = ""

    def __init__(self, api_key: str | None = None):
        self._api_key = api_key or None
        self._client: Any = None

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider family identifier (e.g., 'openai', 'anthropic')."""
        ...

    @property
    @abstractmethod
    def default_model(self) -> str:
        """Default scoring model for this family."""
        ...

    @property
    def has_credential(self) -> bool:
        return self._api_key is not None

    @abstractmethod
    def _create_client(self, api_key: str) -> Any:
        """Create the SDK client for this family."""
        ...

    def _require_credential(self) -> str:
        if self._api_key is None:
            raise MissingCredentialError(
                f"{self.name} API key is not configured (set {self.credential_env_var})"
            )
        return self._api_key

    def _get_client(self) -> Any:
        api_key = self._require_credential()
        if self._client is None:
            self._client = self._create_client(api_key)
        return self._client

    @abstractmethod
    async def score(
        self, request: AnalysisRequest, *, model: str | None = None
    ) -> RawPayload:
        """Ask the model to score an image against the rubric.

        Args:
            request: Image and selected provider.
            model: Model to use (defaults to the family's default).

        Returns:
            The provider's raw structured or textual payload.
        """
        ...

    async def describe(self, image: EncodedImage, *, model: str | None = None) -> str:
        """Produce a short natural-language description of an image."""
        raise UnsupportedModelError(f"{self.name} does not provide image description")

    async def generate_image(
        self, prompt: str, model_name: str | None = None
    ) -> GeneratedImage:
        """Generate an image from a prompt."""
        raise UnsupportedModelError(f"{self.name} does not provide image generation")
