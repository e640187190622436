"""
Exception classes for the httpsig-jwk package
"""

from typing import Optional, Dict, Any


class HttpSigError(Exception):
    """Base exception for all httpsig-jwk errors"""
    
    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
    
    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (code: {self.error_code}, details: {self.details})"
        return f"{self.message} (code: {self.error_code})"


class ConfigurationError(HttpSigError):
    """Exception raised for missing or malformed caller input and configuration"""
    pass


class SigningError(HttpSigError):
    """Exception raised when a signature cannot be produced"""
    pass


class JWKError(SigningError):
    """Exception raised for unreadable JWKs or keys that do not determine an algorithm"""
    pass


class ErrorCodes:
    """Standard error codes for programmatic handling"""
    
    # Configuration errors
    INVALID_CONFIG = "INVALID_CONFIG"
    CONFIG_PARSE_ERROR = "CONFIG_PARSE_ERROR"
    INVALID_INTEGER = "INVALID_INTEGER"
    INVALID_PARAMETER = "INVALID_PARAMETER"
    
    # Key errors
    KEY_FILE_UNREADABLE = "KEY_FILE_UNREADABLE"
    KEY_PARSE_ERROR = "KEY_PARSE_ERROR"
    INSUFFICIENT_KEY_MATERIAL = "INSUFFICIENT_KEY_MATERIAL"
    UNSUPPORTED_KEY_TYPE = "UNSUPPORTED_KEY_TYPE"
    UNSUPPORTED_CURVE = "UNSUPPORTED_CURVE"
    ALGORITHM_KEY_MISMATCH = "ALGORITHM_KEY_MISMATCH"
    PRIVATE_KEY_REQUIRED = "PRIVATE_KEY_REQUIRED"
    
    # Signing errors
    SIGNING_FAILED = "SIGNING_FAILED"
    
    # Transport errors
    INVALID_SIGNATURE_HEADER = "INVALID_SIGNATURE_HEADER"
