from __future__ import annotations

import json
from datetime import date
from enum import Enum
from typing import Any

from crpt.models.document import Description, Document, Product
from crpt.services.exceptions import SerializationError

DATE_FORMAT = "%Y-%m-%d"


def _date(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, date):
        # datetime is a date subclass; only the calendar part goes on the wire
        return value.strftime(DATE_FORMAT)
    raise _unsupported(value)


def _unsupported(value: Any) -> SerializationError:
    name = type(value).__name__
    return SerializationError(f"Object of type {name} is not JSON serializable", type_name=name)


def _default(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.name
    raise _unsupported(value)


def _description(description: Description | None) -> dict | None:
    if description is None:
        return None
    return {"participantInn": description.participant_inn}


def _product(product: Product) -> dict:
    return {
        "certificate_document": product.certificate_document,
        "certificate_document_date": _date(product.certificate_document_date),
        "certificate_document_number": product.certificate_document_number,
        "owner_inn": product.owner_inn,
        "producer_inn": product.producer_inn,
        "production_date": _date(product.production_date),
        "tnved_code": product.tnved_code,
        "uit_code": product.uit_code,
        "uitu_code": product.uitu_code,
    }


def document_to_wire(document: Document) -> dict[str, Any]:
    """Map a Document to its wire dict, renaming fields and formatting dates.

    Key order is fixed so the encoded output is byte-stable.
    """
    try:
        return {
            "description": _description(document.description),
            "doc_id": document.doc_id,
            "doc_status": document.doc_status,
            "doc_type": document.doc_type,
            "importRequest": document.import_request,
            "owner_inn": document.owner_inn,
            "participant_inn": document.participant_inn,
            "producer_inn": document.producer_inn,
            "production_date": _date(document.production_date),
            "production_type": document.production_type,
            "products": [_product(p) for p in document.products or ()],
            "reg_date": _date(document.reg_date),
            "reg_number": document.reg_number,
        }
    except AttributeError as exc:
        name = type(document).__name__
        raise SerializationError(
            f"Failed to format object with class {name} to json string", type_name=name
        ) from exc


def encode_document(document: Document) -> bytes:
    """Encode the document as compact UTF-8 JSON ready for the request body."""
    wire = document_to_wire(document)
    try:
        text = json.dumps(wire, default=_default, ensure_ascii=False, separators=(",", ":"))
        return text.encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise SerializationError(
            f"Failed to format object with class {type(document).__name__} to json string: {exc}"
        ) from exc
