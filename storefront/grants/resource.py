"""
Единственный защищённый файл магазина — демо-PDF. Отдаётся для любого индекса.
"""
from __future__ import annotations

import base64

from storefront.grants.models import ProtectedResource

DEMO_PDF_BYTES = base64.b64decode("JVBERi0xLjQKJcTl8uXrp/Og0MTGCjEgMCBvYmoK")

DEMO_PDF = ProtectedResource(
    content=DEMO_PDF_BYTES,
    media_type="application/pdf",
    filename="demo.pdf",
)


def get_resource(index: int) -> ProtectedResource:
    return DEMO_PDF
