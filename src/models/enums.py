import enum


class AppStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class CategoryStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class RegistrationStatus(str, enum.Enum):
    PENDING = "PENDING"
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class FieldType(str, enum.Enum):
    TEXT = "text"
    NUMBER = "number"
    PRICE = "price"
    SKU = "sku"
    STOCK = "stock"
    EMAIL = "email"
    TEL = "tel"
    TEXTAREA = "textarea"
    RADIO = "radio"
    CHECKBOX = "checkbox"
    DROPDOWN = "dropdown"
    DATE = "date"
    FILE = "file"
    IMAGE = "image"
    VARIANT = "variant"
