"""
API Client Module

Provides the configured API client, its pipeline stages and the
error classifier, plus the basic transport used for contrast.
"""

from .client import APIClient
from .request import ApiRequest
from .stages import PipelineStage, AuthStage, LoggingStage
from .errors import (
    ClassifiedError,
    ErrorCategory,
    RequestCancelled,
    ResponseParseError,
    classify,
)
from .models import Post, User
from .basic import fetch_posts_basic

__all__ = [
    "APIClient",
    "ApiRequest",
    "PipelineStage",
    "AuthStage",
    "LoggingStage",
    "ClassifiedError",
    "ErrorCategory",
    "RequestCancelled",
    "ResponseParseError",
    "classify",
    "Post",
    "User",
    "fetch_posts_basic",
]
