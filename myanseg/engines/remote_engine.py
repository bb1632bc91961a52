"""Remote (ML service) segmentation engine."""

import logging

import requests

from .base import SegmentationEngine

logger = logging.getLogger(__name__)


class ProviderError(RuntimeError):
    """Raised when the external segmentation service fails or misbehaves."""


class RemoteSegmenter(SegmentationEngine):
    """Segmentation engine backed by an HTTP word-segmentation service.

    The service accepts ``{"text": ...}`` and answers with
    ``{"segmented_text": "w1 w2 ..."}``.
    """

    name = "remote"

    def __init__(self, url: str, timeout: float = 10.0, session=None):
        """Initialize remote segmenter.

        Args:
            url: Endpoint URL of the segmentation service
            timeout: Request timeout in seconds
            session: Optional requests.Session (a new one is created otherwise)
        """
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def _post(self, text: str) -> dict:
        try:
            response = self.session.post(
                self.url,
                json={"text": text},
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise ProviderError(f"Segmentation service request failed: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise ProviderError("Segmentation service returned invalid JSON") from e

    def segment(self, text: str) -> list[str]:
        """Segment text using the remote service.

        Args:
            text: Input text

        Returns:
            List of non-empty units

        Raises:
            ProviderError: On transport failure or a malformed response
        """
        if not text or not text.strip():
            return []

        data = self._post(text)
        segmented = data.get("segmented_text") if isinstance(data, dict) else None
        if not isinstance(segmented, str):
            raise ProviderError("Segmentation service response lacks 'segmented_text'")

        units = segmented.split()
        if not units:
            raise ProviderError("Segmentation service returned no units")
        return units

    def health_check(self) -> bool:
        """Check if the service is reachable. Never raises."""
        try:
            response = self.session.post(
                self.url, json={"text": "test"}, timeout=min(self.timeout, 3.0)
            )
            return response.ok
        except requests.RequestException:
            logger.debug(f"Health check failed for {self.url}")
            return False

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(url={self.url!r})"
