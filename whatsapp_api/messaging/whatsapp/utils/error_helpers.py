"""
WhatsApp error handling utilities.

Helpers to classify Graph API failures for logging.
"""

import aiohttp


def is_authentication_error(error: Exception) -> bool:
    """Check if an exception indicates an authentication failure.

    Args:
        error: The exception to check

    Returns:
        True if the error indicates authentication failure (401/Unauthorized)
    """
    if isinstance(error, aiohttp.ClientResponseError):
        return error.status == 401
    error_str = str(error)
    return "401" in error_str or "Unauthorized" in error_str