from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping, Optional

# Error kinds
MALFORMED_QUANTITY = "malformed_quantity"
MISSING_CUSTOMER_NAME = "missing_customer_name"


class MalformedQuantityError(ValueError):
    """Quantity is neither a recognized word number nor an integer."""

    def __init__(self, value: Any, order_id: Any = None):
        self.value = value
        self.order_id = order_id
        where = f" (order_id={order_id})" if order_id is not None else ""
        super().__init__(f"Malformed quantity {value!r}{where}")


@dataclass(frozen=True)
class QuantityParse:
    value: Optional[int] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class RawRecord:
    order_id: Any
    customer_name: Optional[str] = None
    email: Optional[str] = None
    product_name: Optional[str] = None
    quantity: Any = None
    price: Any = None
    country: Optional[str] = None
    order_status: Optional[str] = None

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any]) -> "RawRecord":
        return cls(**{f: row.get(f) for f in cls.__dataclass_fields__})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class CleanRecord:
    order_id: Any
    customer_name_normalized: str
    email: Optional[str]
    product_name_normalized: str
    quantity_normalized: int
    price: Any
    country_normalized: Optional[str]
    order_status_normalized: str

    def to_raw(self) -> RawRecord:
        """Map back onto the input schema so the pipeline can be re-applied."""
        return RawRecord(
            order_id=self.order_id,
            customer_name=self.customer_name_normalized,
            email=self.email,
            product_name=self.product_name_normalized,
            quantity=str(self.quantity_normalized),
            price=self.price,
            country=self.country_normalized,
            order_status=self.order_status_normalized,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class RecordError:
    row: int
    order_id: Any
    kind: str
    column: str
    value: Any
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
