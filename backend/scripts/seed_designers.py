#!/usr/bin/env python
"""Seed script to create sample designers and a sample brief.

Populates a development database so the matching endpoints return results.
Designers whose email already exists are skipped, so the script can be run
repeatedly.

Usage:
    python backend/scripts/seed_designers.py

Environment Variables:
    DATABASE_URL: PostgreSQL connection string
    SEED_CLIENT_ID: Client UUID for the sample brief (random if not set)
"""

import os
import sys
from pathlib import Path
from uuid import UUID, uuid4

# Add backend/src to Python path
backend_src = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(backend_src))

from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from config import get_settings
from database import build_engine
from models.brief import Brief
from models.designer import Designer

SAMPLE_DESIGNERS = [
    {
        "first_name": "Maya",
        "last_name": "Lindqvist",
        "email": "maya@example.com",
        "title": "Brand Identity Designer",
        "bio": "Builds calm, minimal identities for fintech and healthcare startups.",
        "city": "Stockholm",
        "country": "Sweden",
        "primary_categories": ["brand-identity"],
        "secondary_categories": ["web-mobile"],
        "style_keywords": ["minimal", "modern", "corporate"],
        "industries": ["fintech", "healthcare"],
        "preferred_project_sizes": ["small", "medium"],
        "turnaround_times": {"brand-identity": 5, "web-mobile": 21},
        "availability": "available",
        "years_experience": 8,
        "rating": 4.9,
        "total_projects": 64,
        "on_time_delivery_rate": 97.0,
    },
    {
        "first_name": "Tomas",
        "last_name": "Ribeiro",
        "email": "tomas@example.com",
        "title": "Illustrator and Packaging Designer",
        "bio": "Playful illustration-led packaging for food and beverage brands.",
        "city": "Lisbon",
        "country": "Portugal",
        "primary_categories": ["packaging"],
        "secondary_categories": ["brand-identity"],
        "style_keywords": ["playful", "illustrative", "bold"],
        "industries": ["food", "beverage", "retail"],
        "preferred_project_sizes": ["medium", "large"],
        "turnaround_times": {"packaging": 20, "brand-identity": 14},
        "availability": "busy",
        "years_experience": 5,
        "rating": 4.6,
        "total_projects": 31,
        "on_time_delivery_rate": 91.0,
    },
    {
        "first_name": "Priya",
        "last_name": "Natarajan",
        "email": "priya@example.com",
        "title": "Product Designer",
        "bio": "Design systems and onboarding flows for B2B SaaS.",
        "city": "Bangalore",
        "country": "India",
        "primary_categories": ["web-mobile"],
        "secondary_categories": ["brand-identity"],
        "style_keywords": ["modern", "minimal", "tech"],
        "industries": ["saas", "fintech"],
        "preferred_project_sizes": ["small", "medium", "large"],
        "turnaround_times": {"web-mobile": 14, "brand-identity": 10},
        "availability": "available",
        "years_experience": 3,
        "rating": 4.4,
        "total_projects": 18,
        "on_time_delivery_rate": 94.0,
    },
]


def main():
    """Insert sample designers and one brief."""
    database_url = os.getenv("DATABASE_URL", get_settings().DATABASE_URL)

    client_id_str = os.getenv("SEED_CLIENT_ID")
    try:
        client_id = UUID(client_id_str) if client_id_str else uuid4()
    except ValueError:
        print(f"ERROR: Invalid SEED_CLIENT_ID format: {client_id_str}")
        sys.exit(1)

    engine = build_engine(database_url)
    Session = sessionmaker(bind=engine)
    session = Session()

    try:
        created = 0
        for data in SAMPLE_DESIGNERS:
            exists = session.execute(
                select(Designer.id).where(Designer.email == data["email"])
            ).first()
            if exists:
                print(f"Skipping {data['email']} (already exists)")
                continue
            session.add(Designer(is_approved=True, is_verified=True, **data))
            created += 1

        brief = Brief(
            client_id=client_id,
            company_name="Northwind Pay",
            design_category="brand-identity",
            industry="fintech",
            budget_range="mid",
            timeline_type="standard",
            description="New identity for a payments app launching in the Nordics.",
            styles=["minimal", "modern"],
            target_audience="Young professionals",
            brand_personality="Trustworthy and calm",
        )
        session.add(brief)
        session.commit()

        print(f"Created {created} designer(s)")
        print(f"Created brief {brief.id} for client {client_id}")
        print(f"Try: curl -X POST localhost:8000/api/v1/match/find -d '{{\"brief_id\": \"{brief.id}\"}}' "
              f"-H 'Content-Type: application/json'")
    except Exception as e:
        session.rollback()
        print(f"ERROR: Failed to seed database: {e}")
        sys.exit(1)
    finally:
        session.close()


if __name__ == "__main__":
    main()
