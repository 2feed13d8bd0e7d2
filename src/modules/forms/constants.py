"""Forms module constants: lookup tables available to mapped fields."""

# Reference tables a field may map its raw value into (raw value = table primary key)
LOOKUP_TABLES = ("country", "state", "district", "education", "profession")

# Cell shown in tabular views for a field a submission does not carry
MISSING_CELL = "-"
