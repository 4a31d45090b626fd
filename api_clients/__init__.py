"""API client exports."""

from .favqs_client import (
    ApiResponseError,
    DecodeError,
    FavQsClient,
    FavQsError,
    HTTPStatusError,
    MissingCredentialError,
    NoResultsError,
    SessionEstablishmentError,
    TransportError,
    random_filter_from_defaults,
)

__all__ = [
    "ApiResponseError",
    "DecodeError",
    "FavQsClient",
    "FavQsError",
    "HTTPStatusError",
    "MissingCredentialError",
    "NoResultsError",
    "SessionEstablishmentError",
    "TransportError",
    "random_filter_from_defaults",
]
