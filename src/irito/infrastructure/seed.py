"""Sample catalog loaded into an empty data directory."""

from __future__ import annotations

from irito.domain.model.product import Product

_SAMPLE_PRODUCTS = [
    # id, name, code, category, current, min, max, location
    ("1", "iPhone 14 Pro", "IPH14P-256", "電子機器", 8, 50, 500, "A区域"),
    ("2", "カジュアルTシャツ M", "TSH-CAS-M", "衣料品", 23, 30, 200, "B区域"),
    ("3", "有機コーヒー豆", "COF-ORG-500", "食品", 150, 20, 300, "C区域"),
    ("4", "ワイヤレスイヤホン", "WE-BT-001", "電子機器", 75, 25, 200, "A区域"),
    ("5", "ビジネススーツ L", "SUIT-BIZ-L", "衣料品", 45, 15, 100, "B区域"),
]


def sample_products() -> list[Product]:
    return [
        Product(
            id=pid,
            code=code,
            name=name,
            category=category,
            current_stock=current,
            min_stock=minimum,
            max_stock=maximum,
            location=location,
        )
        for pid, name, code, category, current, minimum, maximum, location in _SAMPLE_PRODUCTS
    ]
