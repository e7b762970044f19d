from __future__ import annotations

from datetime import date

import pytest

from crpt.models.document import (
    Description,
    Document,
    DocumentType,
    Product,
    ProductionType,
)
from crpt.services.rate_limiter import RateLimiter

# --- Product fixtures ---


@pytest.fixture
def product_dict() -> dict:
    return {
        "certificate_document": "conformity-cert",
        "certificate_document_date": "2023-12-15",
        "certificate_document_number": "CERT-42",
        "owner_inn": "7700000000",
        "producer_inn": "7700000001",
        "production_date": "2024-01-01",
        "tnved_code": "6401100000",
        "uit_code": "010460406000600021N4N57RSCBUZTQ",
        "uitu_code": "046040600060002",
    }


@pytest.fixture
def product() -> Product:
    return Product(
        certificate_document="conformity-cert",
        certificate_document_date=date(2023, 12, 15),
        certificate_document_number="CERT-42",
        owner_inn="7700000000",
        producer_inn="7700000001",
        production_date=date(2024, 1, 1),
        tnved_code="6401100000",
        uit_code="010460406000600021N4N57RSCBUZTQ",
        uitu_code="046040600060002",
    )


# --- Document fixtures ---


@pytest.fixture
def document_dict(product_dict: dict) -> dict:
    return {
        "description": {"participant_inn": "7700000000"},
        "doc_id": "doc-0001",
        "doc_status": "DRAFT",
        "doc_type": "LP_INTRODUCE_GOODS",
        "import_request": True,
        "owner_inn": "7700000000",
        "participant_inn": "7700000000",
        "producer_inn": "7700000001",
        "production_date": "2024-01-01",
        "production_type": "STRING",
        "products": [product_dict],
        "reg_date": "2024-01-01",
        "reg_number": "REG-0001",
    }


@pytest.fixture
def document(product: Product) -> Document:
    return Document(
        description=Description(participant_inn="7700000000"),
        doc_id="doc-0001",
        doc_status="DRAFT",
        doc_type=DocumentType.LP_INTRODUCE_GOODS,
        import_request=True,
        owner_inn="7700000000",
        participant_inn="7700000000",
        producer_inn="7700000001",
        production_date=date(2024, 1, 1),
        production_type=ProductionType.STRING,
        products=(product,),
        reg_date=date(2024, 1, 1),
        reg_number="REG-0001",
    )


# --- Rate limiter fixtures ---


@pytest.fixture
def manual_limiter():
    """Limiter with limit 2 whose window only resets on explicit reset() calls."""
    limiter = RateLimiter(2, 1.0, autostart=False)
    yield limiter
    limiter.close()
