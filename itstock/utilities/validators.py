"""
Input validation schemas using Pydantic for the JSON API.
"""
from pydantic import BaseModel, Field, field_validator
from typing import Dict, List, Optional

from itstock.domain.Movement import MovementKind
from itstock.utilities.constants import DEFAULT_MIN_THRESHOLD


def _strip(v):
    if isinstance(v, str):
        return v.strip()
    return v


class ItemInput(BaseModel):
    """Schema for item creation."""
    name: str = Field(..., min_length=1, max_length=200)
    category: str = Field(default="", max_length=100)
    quantity: int = Field(default=0, ge=0)
    min_threshold: int = Field(default=DEFAULT_MIN_THRESHOLD, ge=0)
    location: Optional[str] = None
    reference: Optional[str] = None
    initial_reason: Optional[str] = None

    @field_validator('name', 'category')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        return _strip(v)


class ItemPatch(BaseModel):
    """Schema for a partial item edit; only the fields sent are applied."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    category: Optional[str] = Field(default=None, max_length=100)
    quantity: Optional[int] = Field(default=None, ge=0)
    min_threshold: Optional[int] = Field(default=None, ge=0)
    location: Optional[str] = None
    reference: Optional[str] = None

    @field_validator('name', 'category')
    @classmethod
    def strip_whitespace(cls, v):
        return _strip(v)


class MovementInput(BaseModel):
    """Schema for a stock entry or exit against a known item id."""
    item_id: str = Field(..., min_length=1)
    kind: MovementKind
    quantity: int = Field(..., ge=1)
    reason: str = ""

    @field_validator('kind')
    @classmethod
    def entry_or_exit(cls, v):
        if v not in (MovementKind.ENTRY, MovementKind.EXIT):
            raise ValueError('Only ENTRY and EXIT movements can be recorded')
        return v


class NewItemDetails(BaseModel):
    category: Optional[str] = None
    min_threshold: int = Field(default=DEFAULT_MIN_THRESHOLD, ge=0)
    location: str = ""
    reference: str = ""


class NamedMovementInput(BaseModel):
    """Schema for a movement resolved by item name (creates the item on an unknown ENTRY)."""
    name: str = Field(..., min_length=1, max_length=200)
    kind: MovementKind
    quantity: int = Field(..., ge=1)
    reason: str = ""
    new_item: Optional[NewItemDetails] = None

    @field_validator('name')
    @classmethod
    def strip_whitespace(cls, v):
        return _strip(v)

    @field_validator('kind')
    @classmethod
    def entry_or_exit(cls, v):
        if v not in (MovementKind.ENTRY, MovementKind.EXIT):
            raise ValueError('Only ENTRY and EXIT movements can be recorded')
        return v


class CategoryInput(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)

    @field_validator('name')
    @classmethod
    def strip_whitespace(cls, v):
        return _strip(v)


class ManualShoppingItemInput(BaseModel):
    """Schema for a manual shopping list row."""
    name: str = Field(..., min_length=1, max_length=200)
    quantity: int = Field(default=1, ge=1)
    note: str = ""

    @field_validator('name')
    @classmethod
    def strip_whitespace(cls, v):
        return _strip(v)


class FinalListRequest(BaseModel):
    """Caller-side overrides for the derived shopping list, keyed by item id."""
    overrides: Dict[str, int] = Field(default_factory=dict)
    notes: Dict[str, str] = Field(default_factory=dict)

    @field_validator('overrides')
    @classmethod
    def no_negative_quantities(cls, v):
        """Clamp overrides at zero; zero drops the row."""
        return {k: max(0, int(q)) for k, q in v.items()}


class AdviceEntry(BaseModel):
    name: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=1)
    note: str = ""
    source: str = Field(..., pattern=r'^(low-stock|manual)$')


class AdviceRequest(BaseModel):
    """Either explicit entries, or overrides applied to the current lists."""
    entries: Optional[List[AdviceEntry]] = None
    overrides: Dict[str, int] = Field(default_factory=dict)
    notes: Dict[str, str] = Field(default_factory=dict)
