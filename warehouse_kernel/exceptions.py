"""
Typed exception hierarchy for the warehouse kernel.

Every error raised by the kernel is a ``WarehouseKernelError`` subclass with
a machine-readable ``code`` class attribute. Context is kept as attributes
(``item_id``, ``available``, ``requested``...) so callers and the structured
log formatter never have to parse message strings.

    WarehouseKernelError (base)
    |
    +-- ValidationError
    |   +-- InvalidStatusError
    |   +-- InvalidTransactionTypeError
    |   +-- EmptyOrderError
    |   +-- ItemHasNoLocationError
    |   +-- InvalidThresholdError
    |
    +-- NotFoundError
    |   +-- ItemNotFoundError
    |   +-- LocationNotFoundError
    |   +-- LocationThresholdNotFoundError
    |   +-- InventoryLocationNotFoundError
    |   +-- TransactionNotFoundError
    |   +-- OrderNotFoundError
    |
    +-- ConflictError
    |   +-- DuplicateInventoryLocationError
    |   +-- DuplicateQrCodeError
    |   +-- DuplicateLocationCodeError
    |   +-- DuplicateOrderNumberError
    |   +-- ThresholdAlreadyExistsError
    |
    +-- InsufficientQuantityError
    +-- CapacityExceededError
    |
    +-- ConcurrencyError
    |   +-- OptimisticLockError
    |
    +-- ImmutabilityError
        +-- ImmutabilityViolationError

Category        | Code                          | When Raised
----------------|-------------------------------|----------------------------------
Validation      | VALIDATION_ERROR              | Missing/malformed input field
                | INVALID_STATUS                | Status not in TransactionStatus
                | INVALID_TRANSACTION_TYPE      | Type not in TransactionType
                | EMPTY_ORDER                   | Order has no lines
                | ITEM_HAS_NO_LOCATION          | Ordered item has no location
                | INVALID_THRESHOLD             | min/max out of range
----------------|-------------------------------|----------------------------------
Not found       | ITEM_NOT_FOUND, ...           | Referenced row does not exist
----------------|-------------------------------|----------------------------------
Conflict        | DUPLICATE_INVENTORY_LOCATION  | Item already linked to location
                | DUPLICATE_QR_CODE             | QR code already used
                | DUPLICATE_LOCATION_CODE       | Location code already used
                | DUPLICATE_ORDER_NUMBER        | Order number already used
                | THRESHOLD_ALREADY_EXISTS      | Location already has threshold
----------------|-------------------------------|----------------------------------
Stock           | INSUFFICIENT_QUANTITY         | Debit exceeds current quantity
Capacity        | CAPACITY_EXCEEDED             | Location max threshold reached
Concurrency     | OPTIMISTIC_LOCK_CONFLICT      | Item modified concurrently
Immutability    | IMMUTABILITY_VIOLATION        | Ledger/audit row modified
"""


class WarehouseKernelError(Exception):
    """
    Base exception for all warehouse kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "WAREHOUSE_KERNEL_ERROR"


# Validation exceptions


class ValidationError(WarehouseKernelError):
    """Input is missing or malformed. Raised before any write happens."""

    code: str = "VALIDATION_ERROR"

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid {field}: {reason}")


class InvalidStatusError(ValidationError):
    """Status value is not a recognized TransactionStatus."""

    code: str = "INVALID_STATUS"

    def __init__(self, value: str):
        self.value = value
        super().__init__("status", f"unrecognized status '{value}'")


class InvalidTransactionTypeError(ValidationError):
    """Transaction type is not a recognized TransactionType."""

    code: str = "INVALID_TRANSACTION_TYPE"

    def __init__(self, value: str):
        self.value = value
        super().__init__("transaction_type", f"unrecognized type '{value}'")


class EmptyOrderError(ValidationError):
    """Order must contain at least one line."""

    code: str = "EMPTY_ORDER"

    def __init__(self):
        super().__init__("lines", "order must contain at least one order line")


class ItemHasNoLocationError(ValidationError):
    """An ordered item has no location to be issued from."""

    code: str = "ITEM_HAS_NO_LOCATION"

    def __init__(self, item_id: str, item_name: str):
        self.item_id = item_id
        self.item_name = item_name
        super().__init__(
            "lines",
            f"item '{item_name}' ({item_id}) has no assigned location",
        )


class InvalidThresholdError(ValidationError):
    """Threshold bounds are negative or not strictly ordered."""

    code: str = "INVALID_THRESHOLD"

    def __init__(self, min_threshold: int, max_threshold: int):
        self.min_threshold = min_threshold
        self.max_threshold = max_threshold
        super().__init__(
            "threshold",
            f"expected 0 <= min < max, got min={min_threshold}, max={max_threshold}",
        )


# Not-found exceptions


class NotFoundError(WarehouseKernelError):
    """Base exception for references to rows that do not exist."""

    code: str = "NOT_FOUND"
    entity_type: str = "entity"

    def __init__(self, entity_id: str):
        self.entity_id = entity_id
        super().__init__(f"{self.entity_type} not found: {entity_id}")


class ItemNotFoundError(NotFoundError):
    code: str = "ITEM_NOT_FOUND"
    entity_type: str = "Item"


class LocationNotFoundError(NotFoundError):
    code: str = "LOCATION_NOT_FOUND"
    entity_type: str = "Location"


class LocationThresholdNotFoundError(NotFoundError):
    """Location has no configured threshold."""

    code: str = "LOCATION_THRESHOLD_NOT_FOUND"
    entity_type: str = "LocationThreshold for location"


class InventoryLocationNotFoundError(NotFoundError):
    """No association exists between the item and the location."""

    code: str = "INVENTORY_LOCATION_NOT_FOUND"

    def __init__(self, item_id: str, location_id: str):
        self.item_id = item_id
        self.location_id = location_id
        self.entity_id = f"{item_id}@{location_id}"
        WarehouseKernelError.__init__(
            self,
            f"Item {item_id} is not assigned to location {location_id}",
        )


class TransactionNotFoundError(NotFoundError):
    code: str = "TRANSACTION_NOT_FOUND"
    entity_type: str = "Transaction"


class OrderNotFoundError(NotFoundError):
    code: str = "ORDER_NOT_FOUND"
    entity_type: str = "Order"


# Conflict exceptions


class ConflictError(WarehouseKernelError):
    """Base exception for uniqueness conflicts."""

    code: str = "CONFLICT"


class DuplicateInventoryLocationError(ConflictError):
    """Item is already assigned to the location."""

    code: str = "DUPLICATE_INVENTORY_LOCATION"

    def __init__(self, item_id: str, location_id: str):
        self.item_id = item_id
        self.location_id = location_id
        super().__init__(
            f"Item {item_id} is already assigned to location {location_id}"
        )


class DuplicateQrCodeError(ConflictError):
    code: str = "DUPLICATE_QR_CODE"

    def __init__(self, qr_code: str):
        self.qr_code = qr_code
        super().__init__(f"QR code already in use: {qr_code}")


class DuplicateLocationCodeError(ConflictError):
    code: str = "DUPLICATE_LOCATION_CODE"

    def __init__(self, location_code: str):
        self.location_code = location_code
        super().__init__(f"Location code already in use: {location_code}")


class DuplicateOrderNumberError(ConflictError):
    code: str = "DUPLICATE_ORDER_NUMBER"

    def __init__(self, order_number: str):
        self.order_number = order_number
        super().__init__(f"Order number already in use: {order_number}")


class ThresholdAlreadyExistsError(ConflictError):
    code: str = "THRESHOLD_ALREADY_EXISTS"

    def __init__(self, location_id: str):
        self.location_id = location_id
        super().__init__(f"Location {location_id} already has a threshold")


# Business-rule exceptions


class InsufficientQuantityError(WarehouseKernelError):
    """A debit transaction asks for more than the item currently holds."""

    code: str = "INSUFFICIENT_QUANTITY"

    def __init__(self, item_id: str, available: int, requested: int):
        self.item_id = item_id
        self.available = available
        self.requested = requested
        super().__init__(
            f"Insufficient quantity for item {item_id}: "
            f"available={available}, requested={requested}"
        )


class CapacityExceededError(WarehouseKernelError):
    """Adding to the location would exceed its max threshold."""

    code: str = "CAPACITY_EXCEEDED"

    def __init__(
        self,
        location_id: str,
        item_id: str,
        occupancy: int,
        max_threshold: int,
    ):
        self.location_id = location_id
        self.item_id = item_id
        self.occupancy = occupancy
        self.max_threshold = max_threshold
        super().__init__(
            f"No capacity left in location {location_id} for item {item_id}: "
            f"occupancy={occupancy}, max={max_threshold}"
        )


# Concurrency exceptions


class ConcurrencyError(WarehouseKernelError):
    """Base exception for concurrency-related errors."""

    code: str = "CONCURRENCY_ERROR"


class OptimisticLockError(ConcurrencyError):
    """Optimistic locking conflict detected."""

    code: str = "OPTIMISTIC_LOCK_CONFLICT"

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(
            f"Optimistic lock conflict on {entity_type} {entity_id}: "
            "entity was modified by another transaction"
        )


# Immutability exceptions


class ImmutabilityError(WarehouseKernelError):
    """Base exception for immutability-related errors."""

    code: str = "IMMUTABILITY_ERROR"


class ImmutabilityViolationError(ImmutabilityError):
    """
    Attempted to modify or delete an append-only record.

    Transactions may only change status; status history rows never change.
    """

    code: str = "IMMUTABILITY_VIOLATION"

    def __init__(self, entity_type: str, entity_id: str, reason: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.reason = reason
        super().__init__(
            f"Cannot modify immutable {entity_type} {entity_id}: {reason}"
        )
