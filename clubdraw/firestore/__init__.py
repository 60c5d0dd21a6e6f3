"""Firestore REST collaborator used to load draw inputs."""

from .api import FirestoreClient
from .utils import confirmed_payment_filters, decode_document, decode_value

__all__ = [
    "FirestoreClient",
    "confirmed_payment_filters",
    "decode_document",
    "decode_value",
]
