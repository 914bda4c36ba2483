"""Error taxonomy for stock operations."""


class StockError(ValueError):
    """Base class for every error raised by the stock domain."""


class ValidationError(StockError):
    """A required field is empty or a value is out of range."""


class NotFoundError(StockError):
    def __init__(self, kind: str, key: str):
        super().__init__(f"{kind} '{key}' not found")
        self.kind = kind
        self.key = key


class InsufficientStockError(StockError):
    def __init__(self, item_name: str, available: int, requested: int):
        super().__init__(
            f"Insufficient stock for '{item_name}': {available} available, {requested} requested"
        )
        self.item_name = item_name
        self.available = available
        self.requested = requested


class PersistenceError(StockError):
    """Loading or saving one stored collection failed. Never fatal."""

    def __init__(self, key: str, operation: str, cause: Exception):
        super().__init__(f"Failed to {operation} '{key}': {cause}")
        self.key = key
        self.operation = operation
        self.cause = cause

    def to_dict(self):
        return {"key": self.key, "operation": self.operation, "message": str(self)}
