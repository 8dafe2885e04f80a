"""
Custom error classes for the application
"""


class AssistantError(Exception):
    """Base exception for assistant errors"""
    pass


class HostedModelError(AssistantError):
    """Hosted language model call failed or returned an unusable payload"""
    pass


class HostedModelQuotaError(HostedModelError):
    """Hosted language model rejected the call for quota/rate reasons"""
    pass


class StorageError(AssistantError):
    """Error in the storage layer"""
    pass


class ValidationError(AssistantError):
    """Error during validation"""
    pass


class ConflictError(StorageError):
    """Write would break a uniqueness constraint (duplicate SKU or order number)"""
    pass
