"""Preset field catalogs that can be merged into a category form."""

from __future__ import annotations

from src.models.enums import FieldType
from src.modules.forms.schemas import FieldDefinition

COMMERCE_PRESETS: tuple[FieldDefinition, ...] = (
    FieldDefinition(
        field_id="product_name", label="Product Name", field_type=FieldType.TEXT,
        placeholder="Enter product name", required=True, order=1,
    ),
    FieldDefinition(
        field_id="product_description", label="Product Description", field_type=FieldType.TEXTAREA,
        placeholder="Enter product description", required=True, order=2,
    ),
    FieldDefinition(
        field_id="price", label="Price", field_type=FieldType.PRICE,
        placeholder="0.00", required=True, min=0, step=0.01, order=3,
    ),
    FieldDefinition(
        field_id="compare_price", label="Compare at Price (Original Price)", field_type=FieldType.PRICE,
        placeholder="0.00", min=0, step=0.01, order=4,
    ),
    FieldDefinition(
        field_id="sku", label="SKU (Stock Keeping Unit)", field_type=FieldType.SKU,
        placeholder="Enter SKU", order=5,
    ),
    FieldDefinition(
        field_id="stock_quantity", label="Stock Quantity", field_type=FieldType.STOCK,
        placeholder="0", min=0, order=6,
    ),
    FieldDefinition(
        field_id="product_images", label="Product Images", field_type=FieldType.IMAGE,
        placeholder="Upload product images", order=7,
    ),
    FieldDefinition(
        field_id="product_category", label="Product Category", field_type=FieldType.DROPDOWN,
        placeholder="Select category", options=[], order=8,
    ),
    FieldDefinition(
        field_id="product_tags", label="Product Tags", field_type=FieldType.TEXT,
        placeholder="Enter tags (comma-separated)", order=9,
    ),
    FieldDefinition(
        field_id="weight", label="Weight (kg)", field_type=FieldType.NUMBER,
        placeholder="0.00", min=0, step=0.01, order=10,
    ),
    FieldDefinition(
        field_id="dimensions", label="Dimensions (L x W x H in cm)", field_type=FieldType.TEXT,
        placeholder="e.g., 10 x 5 x 3", order=11,
    ),
    FieldDefinition(
        field_id="shipping_class", label="Shipping Class", field_type=FieldType.DROPDOWN,
        placeholder="Select shipping class",
        options=["Standard", "Express", "Overnight", "International"], order=12,
    ),
    FieldDefinition(
        field_id="product_status", label="Product Status", field_type=FieldType.RADIO,
        placeholder="", required=True, options=["Active", "Draft", "Archived"], order=13,
    ),
    FieldDefinition(
        field_id="variants", label="Product Variants", field_type=FieldType.VARIANT,
        placeholder="Add variants (Size, Color, etc.)", options=[], order=14,
    ),
)

PRESETS: dict[str, tuple[FieldDefinition, ...]] = {
    "commerce": COMMERCE_PRESETS,
}


def inject_presets(
    fields: list[FieldDefinition],
    presets: tuple[FieldDefinition, ...] = COMMERCE_PRESETS,
) -> tuple[list[FieldDefinition], list[str]]:
    """Merge *presets* into *fields* by ``field_id``.

    Existing fields are returned untouched and in place. Presets whose id is
    already present are skipped; the rest are appended with their catalog
    order shifted past the current highest order. Running it twice adds
    nothing the second time.

    Returns the merged list and the ids that were added.
    """
    existing_ids = {f.field_id for f in fields}
    offset = max((f.order for f in fields), default=0)

    merged = list(fields)
    added: list[str] = []
    for preset in presets:
        if preset.field_id in existing_ids:
            continue
        merged.append(preset.model_copy(update={"order": offset + preset.order}, deep=True))
        added.append(preset.field_id)
    return merged, added
