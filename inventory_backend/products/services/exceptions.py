# products/services/exceptions.py

"""
INVENTORY SERVICE ERRORS

Centralized domain errors for product / batch services.

Note:
- A blocked deletion is NOT an error. It is a normal outcome
  (see products.services.deletion.Blocked) that the caller renders
  as operator guidance.
"""


class InventoryServiceError(Exception):
    """Base exception for all inventory service failures."""


class NotFound(InventoryServiceError):
    """Raised when a referenced product or batch does not exist."""


class InvalidInput(InventoryServiceError):
    """Raised on negative or non-numeric quantities / weights."""


class PartialCascadeFailure(InventoryServiceError):
    """
    Raised when a confirmed cascade delete could not complete.

    The transaction is rolled back, so the store is left untouched;
    `step` names the delete step that failed for reconciliation.
    """

    def __init__(self, message: str, *, product_id=None, step: str | None = None):
        super().__init__(message)
        self.product_id = product_id
        self.step = step
