"""
Transport module for Cloud Pipe

Issues completion requests against the Azure OpenAI chat endpoint.
"""

from .http_client import ChatTransport

__all__ = ["ChatTransport"]
