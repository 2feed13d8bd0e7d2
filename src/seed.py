"""Database seeder for AppDesk: reference lookup tables and a demo app.

Run via: python -m src.seed
"""

import json
import uuid

from sqlalchemy import text
from sqlalchemy.orm import Session

from src.database.engine import sync_engine
from src.modules.forms.field_types import ordered_fields
from src.modules.forms.schemas import FieldDefinition
from src.modules.tenancy.auth import AuthenticatedUser, issue_token
from src.seed_data.demo_app import DEMO_APP, DEMO_CATEGORIES, DEMO_FORM
from src.seed_data.reference import COUNTRIES, DISTRICTS, EDUCATIONS, PROFESSIONS, STATES

DEMO_OPERATOR_ID = uuid.UUID("0d3e5f60-7a8b-4c9d-8e0f-1a2b3c4d5e6f")


def _seed_named_rows(session: Session, table: str, rows: list[dict], extra_columns: tuple = ()) -> None:
    columns = ("id", "name", *extra_columns)
    updates = ", ".join(f"{c} = EXCLUDED.{c}" for c in columns if c != "id")
    for row in rows:
        session.execute(
            text(
                f"INSERT INTO {table} ({', '.join(columns)}) "
                f"VALUES ({', '.join(':' + c for c in columns)}) "
                f"ON CONFLICT (id) DO UPDATE SET {updates}"
            ),
            row,
        )
    print(f"  Seeded {len(rows)} {table}.")


def seed_reference_tables(session: Session) -> None:
    _seed_named_rows(session, "countries", COUNTRIES)
    _seed_named_rows(session, "states", STATES, ("country_id",))
    _seed_named_rows(session, "districts", DISTRICTS, ("state_id",))
    _seed_named_rows(session, "educations", EDUCATIONS)
    _seed_named_rows(session, "professions", PROFESSIONS)


def seed_demo_app(session: Session) -> None:
    session.execute(
        text(
            """
            INSERT INTO apps (id, name, status, locking_json)
            VALUES (:id, :name, 'ACTIVE', CAST(:locking AS jsonb))
            ON CONFLICT (id) DO UPDATE SET
                name = EXCLUDED.name, locking_json = EXCLUDED.locking_json
            """
        ),
        {"id": DEMO_APP["id"], "name": DEMO_APP["name"], "locking": json.dumps(DEMO_APP["locking"])},
    )

    # Parents are listed before their children
    for category_id, parent_id, name, kind, sort_order in DEMO_CATEGORIES:
        session.execute(
            text(
                """
                INSERT INTO app_categories (id, tenant_id, parent_id, name, kind, sort_order, status)
                VALUES (:id, :tenant_id, :parent_id, :name, :kind, :sort_order, 'ACTIVE')
                ON CONFLICT (id) DO UPDATE SET
                    name = EXCLUDED.name, kind = EXCLUDED.kind, sort_order = EXCLUDED.sort_order
                """
            ),
            {
                "id": category_id,
                "tenant_id": DEMO_APP["id"],
                "parent_id": parent_id,
                "name": name,
                "kind": kind,
                "sort_order": sort_order,
            },
        )

    fields = ordered_fields(FieldDefinition.model_validate(f) for f in DEMO_FORM["fields"])
    session.execute(
        text(
            """
            INSERT INTO category_forms (tenant_id, category_id, form_name, fields)
            VALUES (:tenant_id, :category_id, :form_name, CAST(:fields AS jsonb))
            ON CONFLICT (category_id) DO UPDATE SET
                form_name = EXCLUDED.form_name, fields = EXCLUDED.fields
            """
        ),
        {
            "tenant_id": DEMO_APP["id"],
            "category_id": DEMO_FORM["category_id"],
            "form_name": DEMO_FORM["form_name"],
            "fields": json.dumps([f.model_dump(mode="json") for f in fields]),
        },
    )
    print(f"  Seeded demo app with {len(DEMO_CATEGORIES)} categories and 1 form.")


def main() -> None:
    """Run all seed functions inside a single transaction."""
    print("Seeding AppDesk database...")

    with Session(sync_engine) as session:
        with session.begin():
            # 1. Lookup tables (targets of mapped fields)
            seed_reference_tables(session)

            # 2. Demo app, category tree, and form
            seed_demo_app(session)

    print("Seeding complete.")

    operator = AuthenticatedUser(
        id=DEMO_OPERATOR_ID, email="operator@demo.appdesk.local", app_id=DEMO_APP["id"]
    )
    print(f"Demo operator token (8h): {issue_token(operator)}")


if __name__ == "__main__":
    main()
