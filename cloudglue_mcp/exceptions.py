from typing import Dict


class CloudglueMCPException(Exception):
    """Base exception for the Cloudglue MCP server."""

    def __init__(self, message: str, error_code: str = None, details: Dict = None):
        super().__init__(message)
        self.error_code = error_code
        self.details = details or {}


class ProviderException(CloudglueMCPException):
    """Raised when the remote video platform fails."""
    pass


class ResourceNotFoundException(ProviderException):
    """Raised when requested resource is not found."""
    pass


class ConfigurationException(CloudglueMCPException):
    """Raised when configuration is invalid."""
    pass


class ValidationException(CloudglueMCPException):
    """Raised when tool input violates a precondition."""
    pass


class JobSubmissionException(ProviderException):
    """Raised when the platform rejects a new job."""
    pass


class JobFailedException(CloudglueMCPException):
    """Raised when a job reaches a terminal status other than completed."""
    pass


class JobTimeoutException(CloudglueMCPException):
    """Raised when waiting for a job exceeds its bound."""
    pass
