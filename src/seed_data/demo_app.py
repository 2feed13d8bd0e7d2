"""Demo app with a small category tree and one registration form."""

import uuid

DEMO_APP: dict = {
    "id": uuid.UUID("6d1f3a2e-0c4b-4d8e-9a51-3f0b2c7e1a01"),
    "name": "Demo Marketplace",
    "locking": {"lockChildCategory": True},
}

# (id, parent_id, name, kind, sort_order)
DEMO_CATEGORIES: list[tuple] = [
    (uuid.UUID("a0000000-0000-4000-8000-000000000001"), None, "Sellers", None, 1),
    (uuid.UUID("a0000000-0000-4000-8000-000000000002"), None, "Service Partners", None, 2),
    (uuid.UUID("a0000000-0000-4000-8000-000000000003"), None, "Promotions", "addon", 3),
    (
        uuid.UUID("a0000000-0000-4000-8000-000000000011"),
        uuid.UUID("a0000000-0000-4000-8000-000000000001"),
        "Electronics",
        None,
        1,
    ),
    (
        uuid.UUID("a0000000-0000-4000-8000-000000000012"),
        uuid.UUID("a0000000-0000-4000-8000-000000000001"),
        "Apparel",
        None,
        2,
    ),
    (
        uuid.UUID("a0000000-0000-4000-8000-000000000021"),
        uuid.UUID("a0000000-0000-4000-8000-000000000011"),
        "Mobile Phones",
        None,
        1,
    ),
]

DEMO_FORM: dict = {
    "category_id": uuid.UUID("a0000000-0000-4000-8000-000000000021"),
    "form_name": "Phone Seller Registration",
    "fields": [
        {"field_id": "shop_name", "label": "Shop Name", "field_type": "text", "required": True, "order": 1},
        {"field_id": "contact_email", "label": "Email", "field_type": "email", "required": True, "order": 2},
        {"field_id": "country", "label": "Country", "field_type": "dropdown", "mapping": "country", "order": 3},
        {"field_id": "state", "label": "State", "field_type": "dropdown", "mapping": "state", "order": 4},
        {
            "field_id": "brands",
            "label": "Brands Sold",
            "field_type": "checkbox",
            "options": ["Samsung", "Apple", "Xiaomi", "OnePlus"],
            "order": 5,
        },
    ],
}
