"""
Image generation client
Posts a prompt to the Azure OpenAI image endpoint and returns the generated image URL
"""

import logging
from typing import Optional

import httpx

from ..exceptions import ImageGenerationError

logger = logging.getLogger(__name__)


class ImageGenerationClient:
    """HTTP client for the image generation endpoint"""

    def __init__(
        self,
        url: str,
        api_key: str,
        timeout: float = 60.0,
        size: str = "1024x1024",
        client: Optional[httpx.AsyncClient] = None
    ):
        self.url = url
        self.api_key = api_key
        self.timeout = timeout
        self.size = size
        self.client = client
        self._owns_client = client is None

    async def _get_client(self) -> httpx.AsyncClient:
        if self.client is None:
            self.client = httpx.AsyncClient(timeout=self.timeout)
        return self.client

    async def generate_image(self, prompt: str) -> str:
        """
        Generate one image for a prompt

        Args:
            prompt: Text prompt

        Returns:
            URL of the generated image

        Raises:
            ImageGenerationError: On bad status, network fault or a response without an image URL
        """
        body = {"prompt": prompt, "n": 1, "size": self.size}
        client = await self._get_client()

        logger.info(f"Submitting image generation request for prompt: {prompt}")
        try:
            response = await client.post(
                self.url,
                json=body,
                headers={"Authorization": f"Bearer {self.api_key}"},
                timeout=self.timeout
            )
        except httpx.RequestError as e:
            logger.error(f"Image generation request failed: {e}")
            raise ImageGenerationError(f"Image generation request failed: {e}") from e

        if response.is_error:
            logger.error(f"Image generation failed. Status: {response.status_code}, Error: {response.text}")
            raise ImageGenerationError(f"Image generation failed: {response.status_code}\n{response.text}")

        try:
            image_url = response.json()["data"][0]["url"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.error(f"Image generation response has no image URL: {e!r}")
            raise ImageGenerationError("Image generation response has no image URL") from e

        if not isinstance(image_url, str) or not image_url:
            raise ImageGenerationError("Image generation response has no image URL")

        logger.info(f"Image successfully generated: {image_url}")
        return image_url

    async def close(self):
        if self.client and self._owns_client:
            await self.client.aclose()
            self.client = None
            logger.info("Image client closed")
