"""Reference lookup rows: the targets of mapped form fields.

Ids are stable because submissions store them as raw values.
"""

COUNTRIES: list[dict] = [
    {"id": 1, "name": "India"},
    {"id": 2, "name": "Nepal"},
    {"id": 3, "name": "Sri Lanka"},
    {"id": 4, "name": "United Arab Emirates"},
    {"id": 5, "name": "United States"},
]

STATES: list[dict] = [
    {"id": 1, "country_id": 1, "name": "Andhra Pradesh"},
    {"id": 2, "country_id": 1, "name": "Karnataka"},
    {"id": 3, "country_id": 1, "name": "Kerala"},
    {"id": 4, "country_id": 1, "name": "Maharashtra"},
    {"id": 5, "country_id": 1, "name": "Tamil Nadu"},
    {"id": 6, "country_id": 1, "name": "Telangana"},
    {"id": 7, "country_id": 2, "name": "Bagmati"},
    {"id": 8, "country_id": 3, "name": "Western Province"},
    {"id": 9, "country_id": 4, "name": "Dubai"},
    {"id": 10, "country_id": 5, "name": "California"},
]

DISTRICTS: list[dict] = [
    {"id": 1, "state_id": 1, "name": "Visakhapatnam"},
    {"id": 2, "state_id": 1, "name": "Guntur"},
    {"id": 3, "state_id": 2, "name": "Bengaluru Urban"},
    {"id": 4, "state_id": 2, "name": "Mysuru"},
    {"id": 5, "state_id": 3, "name": "Ernakulam"},
    {"id": 6, "state_id": 3, "name": "Thiruvananthapuram"},
    {"id": 7, "state_id": 4, "name": "Mumbai"},
    {"id": 8, "state_id": 4, "name": "Pune"},
    {"id": 9, "state_id": 5, "name": "Chennai"},
    {"id": 10, "state_id": 5, "name": "Coimbatore"},
    {"id": 11, "state_id": 6, "name": "Hyderabad"},
    {"id": 12, "state_id": 7, "name": "Kathmandu"},
    {"id": 13, "state_id": 8, "name": "Colombo"},
    {"id": 14, "state_id": 9, "name": "Dubai"},
    {"id": 15, "state_id": 10, "name": "Los Angeles"},
]

EDUCATIONS: list[dict] = [
    {"id": 1, "name": "Secondary School"},
    {"id": 2, "name": "Higher Secondary"},
    {"id": 3, "name": "Diploma"},
    {"id": 4, "name": "Graduate"},
    {"id": 5, "name": "Post Graduate"},
    {"id": 6, "name": "Doctorate"},
]

PROFESSIONS: list[dict] = [
    {"id": 1, "name": "Software Engineer"},
    {"id": 2, "name": "Designer"},
    {"id": 3, "name": "Manager"},
    {"id": 4, "name": "Teacher"},
    {"id": 5, "name": "Doctor"},
    {"id": 6, "name": "Engineer"},
    {"id": 7, "name": "Other"},
]
