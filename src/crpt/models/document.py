from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum


def _as_date(value: date | str | None) -> date | None:
    if value is None or isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


class DocumentType(Enum):
    LP_INTRODUCE_GOODS = "LP_INTRODUCE_GOODS"


class ProductionType(Enum):
    STRING = "STRING"


@dataclass(frozen=True)
class Description:
    participant_inn: str

    @classmethod
    def from_dict(cls, d: dict) -> Description:
        return cls(participant_inn=d["participant_inn"])


@dataclass(frozen=True)
class Product:
    """Line item of a goods introduction document."""

    certificate_document: str
    certificate_document_date: date | None
    certificate_document_number: str
    owner_inn: str
    producer_inn: str
    production_date: date | None
    tnved_code: str  # commodity classification code
    uit_code: str  # single unit identifier
    uitu_code: str  # aggregated unit identifier

    @classmethod
    def from_dict(cls, d: dict) -> Product:
        """Create a Product from a YAML-loaded dict, parsing ISO date strings."""
        return cls(
            certificate_document=d["certificate_document"],
            certificate_document_date=_as_date(d.get("certificate_document_date")),
            certificate_document_number=d["certificate_document_number"],
            owner_inn=d["owner_inn"],
            producer_inn=d["producer_inn"],
            production_date=_as_date(d.get("production_date")),
            tnved_code=str(d["tnved_code"]),
            uit_code=str(d["uit_code"]),
            uitu_code=str(d["uitu_code"]),
        )


@dataclass(frozen=True)
class Document:
    """Goods introduction document submitted to the registration endpoint."""

    description: Description
    doc_id: str
    doc_status: str
    doc_type: DocumentType
    import_request: bool
    owner_inn: str
    participant_inn: str
    producer_inn: str
    production_date: date | None
    production_type: ProductionType
    products: tuple[Product, ...]
    reg_date: date | None
    reg_number: str

    def __post_init__(self) -> None:
        # Callers may pass a list; freeze it so the document stays immutable.
        if not isinstance(self.products, tuple):
            object.__setattr__(self, "products", tuple(self.products))

    @classmethod
    def from_dict(cls, d: dict) -> Document:
        """Create a Document from a YAML-loaded dict, applying defaults for optional fields."""
        return cls(
            description=Description.from_dict(d["description"]),
            doc_id=str(d["doc_id"]),
            doc_status=d["doc_status"],
            doc_type=DocumentType[d.get("doc_type", "LP_INTRODUCE_GOODS")],
            import_request=bool(d.get("import_request", False)),
            owner_inn=d["owner_inn"],
            participant_inn=d["participant_inn"],
            producer_inn=d["producer_inn"],
            production_date=_as_date(d.get("production_date")),
            production_type=ProductionType[d.get("production_type", "STRING")],
            products=tuple(Product.from_dict(p) for p in d.get("products", [])),
            reg_date=_as_date(d.get("reg_date")),
            reg_number=str(d["reg_number"]),
        )
