# products/services/deletion.py

"""
PRODUCT DELETION SAFETY (CHECK + CASCADE)

check_deletable(product_id) -> Blocked | CascadeRequired | Safe
    1. Blocked          product appears on a sales invoice line (checked
                        first) or a delivery challan line. Never deleted;
                        the operator should deactivate it instead.
    2. CascadeRequired  no blocking references, but batches exist. Needs
                        explicit confirmation naming the batch count.
    3. Safe             no batches, no blocking references.

delete_product(product_id, confirmed=...) -> DeletionResult
    check -> Blocked                      -> BLOCKED (no mutation)
          -> CascadeRequired, unconfirmed -> ABORTED (no mutation)
          -> CascadeRequired, confirmed   -> cascade, then DELETED
          -> Safe                         -> direct delete, then DELETED

The delete runs in ONE transaction. Inside it the product row is locked and
the disposition is re-checked, so a sale or a new batch recorded after the
first check cannot slip through. Steps run dependents-first:

    batch_documents -> batch_transactions -> batch_expenses -> batches
    -> product_transactions -> product_files -> product

Any failing step rolls the whole transaction back and surfaces as
PartialCascadeFailure (step attached). Blocked / aborted are NOT errors.
"""

from __future__ import annotations

import logging
from contextlib import AbstractContextManager
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Protocol, Tuple, Union

from django.db import DatabaseError, transaction
from django.db.models import ProtectedError, RestrictedError

from accounting.models import FinanceExpense
from batches.models import Batch, BatchDocument, InventoryTransaction
from batches.services.records import BatchRecord, parse_id
from products.models import Product, ProductFile
from products.services.exceptions import NotFound, PartialCascadeFailure
from sales.models import DeliveryChallanItem, SalesInvoiceItem

logger = logging.getLogger(__name__)


# ============================================================
# STEPS
# ============================================================

STEP_BATCH_DOCUMENTS = "batch_documents"
STEP_BATCH_TRANSACTIONS = "batch_transactions"
STEP_BATCH_EXPENSES = "batch_expenses"
STEP_BATCHES = "batches"
STEP_PRODUCT_TRANSACTIONS = "product_transactions"
STEP_PRODUCT_FILES = "product_files"
STEP_PRODUCT = "product"

DIRECT_STEPS: Tuple[str, ...] = (
    STEP_PRODUCT_TRANSACTIONS,
    STEP_PRODUCT_FILES,
    STEP_PRODUCT,
)

CASCADE_STEPS: Tuple[str, ...] = (
    STEP_BATCH_DOCUMENTS,
    STEP_BATCH_TRANSACTIONS,
    STEP_BATCH_EXPENSES,
    STEP_BATCHES,
) + DIRECT_STEPS


# ============================================================
# DISPOSITIONS
# ============================================================

class BlockReason(str, Enum):
    SALES_INVOICE = "sales_invoice"
    DELIVERY_CHALLAN = "delivery_challan"


BLOCK_MESSAGES = {
    BlockReason.SALES_INVOICE: (
        "Cannot delete this product. It has been used in sales invoices. "
        "Deactivate it instead."
    ),
    BlockReason.DELIVERY_CHALLAN: (
        "Cannot delete this product. It has been used in delivery challans. "
        "Deactivate it instead."
    ),
}


@dataclass(frozen=True)
class Blocked:
    reason: BlockReason
    kind: str = field(default="blocked", init=False)

    @property
    def message(self) -> str:
        return BLOCK_MESSAGES[self.reason]


@dataclass(frozen=True)
class CascadeRequired:
    batches: Tuple[BatchRecord, ...]
    kind: str = field(default="cascade_required", init=False)

    @property
    def batch_count(self) -> int:
        return len(self.batches)

    @property
    def batch_ids(self) -> frozenset:
        return frozenset(b.id for b in self.batches)

    def confirmation_message(self) -> str:
        n = self.batch_count
        return (
            f"This product has {n} batch(es). Deleting it will permanently remove:\n"
            f"- {n} batches\n"
            "- All related inventory transactions\n"
            "- All related documents and batch expenses"
        )


@dataclass(frozen=True)
class Safe:
    kind: str = field(default="safe", init=False)


Disposition = Union[Blocked, CascadeRequired, Safe]


class DeletionStatus(str, Enum):
    DELETED = "deleted"
    ABORTED = "aborted"
    BLOCKED = "blocked"


@dataclass(frozen=True)
class DeletionResult:
    status: DeletionStatus
    product_id: Any
    disposition: Disposition
    deleted: Dict[str, int] = field(default_factory=dict)
    detail: str = ""

    @property
    def succeeded(self) -> bool:
        return self.status == DeletionStatus.DELETED


# ============================================================
# COLLABORATOR INTERFACES
# ============================================================

class ReferenceChecker(Protocol):
    def product_exists(self, product_id) -> bool: ...

    def has_sales_references(self, product_id) -> bool: ...

    def has_delivery_references(self, product_id) -> bool: ...

    def list_batches(self, product_id) -> List[BatchRecord]: ...


class DeletionStore(Protocol):
    def atomic(self) -> AbstractContextManager: ...

    def lock_product(self, product_id) -> bool: ...

    def delete_step(self, step: str, product_id) -> int: ...


class DjangoReferenceChecker:
    """Existence-only queries (EXISTS / LIMIT 1) over the ORM."""

    def product_exists(self, product_id) -> bool:
        pid = parse_id(product_id)
        return pid is not None and Product.objects.filter(id=pid).exists()

    def has_sales_references(self, product_id) -> bool:
        return SalesInvoiceItem.objects.filter(product_id=product_id).exists()

    def has_delivery_references(self, product_id) -> bool:
        return DeliveryChallanItem.objects.filter(product_id=product_id).exists()

    def list_batches(self, product_id) -> List[BatchRecord]:
        qs = Batch.objects.filter(product_id=product_id).order_by("batch_number", "id")
        return [BatchRecord.from_batch(b) for b in qs]


class DjangoDeletionStore:
    """Ordered, transactional deletes over the ORM."""

    def __init__(self, using: Optional[str] = None):
        self.using = using

    def atomic(self):
        return transaction.atomic(using=self.using)

    def lock_product(self, product_id) -> bool:
        pid = parse_id(product_id)
        if pid is None:
            return False
        return (
            Product.objects.select_for_update()
            .filter(id=pid)
            .values_list("id", flat=True)
            .first()
            is not None
        )

    def _querysets(self, product_id):
        return {
            STEP_BATCH_DOCUMENTS: BatchDocument.objects.filter(batch__product_id=product_id),
            STEP_BATCH_TRANSACTIONS: InventoryTransaction.objects.filter(
                batch__product_id=product_id
            ),
            STEP_BATCH_EXPENSES: FinanceExpense.objects.filter(batch__product_id=product_id),
            STEP_BATCHES: Batch.objects.filter(product_id=product_id),
            STEP_PRODUCT_TRANSACTIONS: InventoryTransaction.objects.filter(
                product_id=product_id
            ),
            STEP_PRODUCT_FILES: ProductFile.objects.filter(product_id=product_id),
            STEP_PRODUCT: Product.objects.filter(id=product_id),
        }

    def delete_step(self, step: str, product_id) -> int:
        qs = self._querysets(product_id)[step]
        if self.using:
            qs = qs.using(self.using)
        _, per_model = qs.delete()
        return int(per_model.get(qs.model._meta.label, 0))


# ============================================================
# CHECK
# ============================================================

def _disposition(product_id, references: ReferenceChecker) -> Disposition:
    if references.has_sales_references(product_id):
        return Blocked(BlockReason.SALES_INVOICE)

    if references.has_delivery_references(product_id):
        return Blocked(BlockReason.DELIVERY_CHALLAN)

    batches = references.list_batches(product_id)
    if batches:
        return CascadeRequired(tuple(batches))

    return Safe()


def check_deletable(product_id, *, references: Optional[ReferenceChecker] = None) -> Disposition:
    refs = references if references is not None else DjangoReferenceChecker()

    if not refs.product_exists(product_id):
        raise NotFound(f"Product {product_id} not found")

    return _disposition(product_id, refs)


# ============================================================
# DELETE
# ============================================================

def _run_steps(product_id, steps, store: DeletionStore) -> Dict[str, int]:
    deleted: Dict[str, int] = {}

    for step in steps:
        try:
            deleted[step] = store.delete_step(step, product_id)
        except (ProtectedError, RestrictedError, DatabaseError) as exc:
            logger.exception(
                "Product delete step failed; rolling back",
                extra={"product_id": str(product_id), "step": step},
            )
            raise PartialCascadeFailure(
                f"Deleting product {product_id} failed at step '{step}'; "
                "no rows were removed",
                product_id=product_id,
                step=step,
            ) from exc

    if deleted.get(STEP_PRODUCT, 0) != 1:
        raise PartialCascadeFailure(
            f"Product {product_id} row was not removed",
            product_id=product_id,
            step=STEP_PRODUCT,
        )

    return deleted


def delete_product(
    product_id,
    *,
    confirmed: bool = False,
    references: Optional[ReferenceChecker] = None,
    store: Optional[DeletionStore] = None,
) -> DeletionResult:
    refs = references if references is not None else DjangoReferenceChecker()
    store = store if store is not None else DjangoDeletionStore()

    disposition = check_deletable(product_id, references=refs)

    if isinstance(disposition, Blocked):
        logger.info(
            "Product delete blocked",
            extra={"product_id": str(product_id), "reason": disposition.reason.value},
        )
        return DeletionResult(
            status=DeletionStatus.BLOCKED,
            product_id=product_id,
            disposition=disposition,
            detail=disposition.message,
        )

    if isinstance(disposition, CascadeRequired) and not confirmed:
        logger.info(
            "Product delete awaiting confirmation",
            extra={"product_id": str(product_id), "batch_count": disposition.batch_count},
        )
        return DeletionResult(
            status=DeletionStatus.ABORTED,
            product_id=product_id,
            disposition=disposition,
            detail=disposition.confirmation_message(),
        )

    with store.atomic():
        if not store.lock_product(product_id):
            raise NotFound(f"Product {product_id} not found")

        current = _disposition(product_id, refs)

        if isinstance(current, Blocked):
            logger.warning(
                "Product became referenced before delete; blocked",
                extra={"product_id": str(product_id), "reason": current.reason.value},
            )
            return DeletionResult(
                status=DeletionStatus.BLOCKED,
                product_id=product_id,
                disposition=current,
                detail=current.message,
            )

        if isinstance(current, CascadeRequired):
            confirmed_ids = (
                disposition.batch_ids if isinstance(disposition, CascadeRequired) else frozenset()
            )
            if not confirmed or current.batch_ids != confirmed_ids:
                logger.warning(
                    "Product batches changed before delete; aborted",
                    extra={"product_id": str(product_id), "batch_count": current.batch_count},
                )
                return DeletionResult(
                    status=DeletionStatus.ABORTED,
                    product_id=product_id,
                    disposition=current,
                    detail="Batches changed since confirmation. "
                    + current.confirmation_message(),
                )
            steps = CASCADE_STEPS
        else:
            steps = DIRECT_STEPS

        deleted = _run_steps(product_id, steps, store)

    logger.info(
        "Product deleted",
        extra={"product_id": str(product_id), "disposition": current.kind, "deleted": deleted},
    )
    return DeletionResult(
        status=DeletionStatus.DELETED,
        product_id=product_id,
        disposition=current,
        deleted=deleted,
    )


def deactivate_product(product_id) -> Product:
    """The non-destructive alternative offered for blocked products."""
    pid = parse_id(product_id)
    product = Product.objects.filter(id=pid).first() if pid is not None else None
    if product is None:
        raise NotFound(f"Product {product_id} not found")

    if product.is_active:
        product.is_active = False
        product.save(update_fields=["is_active", "updated_at"])
        logger.info("Product deactivated", extra={"product_id": str(product_id)})

    return product
