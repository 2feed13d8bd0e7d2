# Import all models so SQLAlchemy metadata is populated for Alembic autogenerate
from src.models.category import AppCategory
from src.models.category_form import CategoryForm
from src.models.enums import AppStatus, CategoryStatus, FieldType, RegistrationStatus
from src.models.reference import Country, District, Education, Profession, State
from src.models.registrant import Registrant
from src.models.registration import Registration
from src.models.tenant_app import TenantApp

__all__ = [
    "AppCategory",
    "AppStatus",
    "CategoryForm",
    "CategoryStatus",
    "Country",
    "District",
    "Education",
    "FieldType",
    "Profession",
    "Registrant",
    "Registration",
    "RegistrationStatus",
    "State",
    "TenantApp",
]
