"""Forms module: category registration forms, field types, and presets."""

from src.modules.forms.service import FormSchemaService, load_fields

__all__ = ["FormSchemaService", "load_fields"]
