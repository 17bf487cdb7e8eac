"""Payment-domain resource package."""

from .models import Card, Credit, Debit, Doc, Iban, Payment, User

__all__ = [
    "Payment",
    "Debit",
    "Credit",
    "User",
    "Iban",
    "Doc",
    "Card",
]
