"""
Error taxonomy for Cloud Pipe clients
Transport, dispatch, catalog and image generation failures
"""

from typing import Optional


class CloudPipeError(Exception):
    """Base exception for all Cloud Pipe errors"""


class TransportError(CloudPipeError):
    """Raised when a completion round fails: bad status, network fault or unexpected response shape"""

    def __init__(self, message: str, status_code: Optional[int] = None, round: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.round = round

    def __str__(self):
        if self.status_code:
            return f"[{self.status_code}] {self.message}"
        return self.message


class TransportTimeoutError(TransportError):
    """Raised when a completion round exceeds its timeout"""


class DispatchError(CloudPipeError):
    """Raised while parsing arguments for, or running, a local function"""


class DuplicateNameError(CloudPipeError):
    """Raised when registering a function name twice"""


class FunctionNotFoundError(CloudPipeError):
    """Raised when looking up a function that is not in the catalog"""


class ImageGenerationError(CloudPipeError):
    """Raised when the image endpoint fails or returns no image URL"""
