"""
Seed script for the kinship graph - populates the databases with a sample family.

This script:
1. Clears the configured SQLite (persons) and GraphLite (relationships) files
2. Creates three generations of the Johnson family with spouse and
   parent-child relationships, written through to both stores

Run this script to start with a clean slate:
    python seed_data.py
"""

from datetime import date
from pathlib import Path

from kinship.config import settings
from kinship.graph import FamilyGraph, GraphPersistence
from kinship.models import PersonAttributes


def clear_all_databases():
    """Remove all database files to start fresh."""
    print("=" * 80)
    print("CLEARING ALL DATABASES")
    print("=" * 80)

    for db_path in (settings.database.persons_db_path, settings.database.graph_db_path):
        path = Path(db_path)
        if path.exists():
            path.unlink()
            print(f"Deleted: {path}")
        else:
            print(f"Not found: {path}")

    print("\nAll databases cleared!\n")


def public(**fields) -> PersonAttributes:
    return PersonAttributes(is_public=True, visibility="PUBLIC", **fields)


def seed_sample_data(graph: FamilyGraph) -> dict[str, int]:
    """Create the sample family and return ids by first name."""
    print("=" * 80)
    print("SEEDING SAMPLE FAMILY DATA")
    print("=" * 80)

    ids = {}

    # Generation 1 - Grandparents
    ids["Robert"] = graph.add_person(public(
        first_name="Robert", last_name="Johnson", gender="MALE",
        birth_date=date(1930, 3, 15), death_date=date(2010, 8, 22),
        birth_place="Boston, MA, USA", occupation="Engineer",
    ))
    ids["Mary"] = graph.add_person(public(
        first_name="Mary", maiden_name="Smith", last_name="Johnson", gender="FEMALE",
        birth_date=date(1932, 7, 8), death_date=date(2015, 12, 5),
        birth_place="New York, NY, USA", occupation="Teacher",
    ))
    graph.add_spouse(ids["Robert"], ids["Mary"])

    # Generation 2 - Parents
    ids["John"] = graph.add_person(public(
        first_name="John", last_name="Johnson", gender="MALE",
        birth_date=date(1955, 5, 20), birth_place="Boston, MA, USA", occupation="Doctor",
    ))
    ids["Sarah"] = graph.add_person(public(
        first_name="Sarah", maiden_name="Williams", last_name="Johnson", gender="FEMALE",
        birth_date=date(1957, 9, 12), birth_place="Chicago, IL, USA", occupation="Lawyer",
    ))
    graph.add_parent_child(ids["Robert"], ids["John"])
    graph.add_parent_child(ids["Mary"], ids["John"])
    graph.add_spouse(ids["John"], ids["Sarah"])

    # Generation 3 - Children
    ids["Emily"] = graph.add_person(public(
        first_name="Emily", last_name="Johnson", gender="FEMALE",
        birth_date=date(1985, 2, 14), birth_place="San Francisco, CA, USA",
        occupation="Software Engineer",
    ))
    ids["Michael"] = graph.add_person(public(
        first_name="Michael", last_name="Johnson", gender="MALE",
        birth_date=date(1987, 11, 3), birth_place="San Francisco, CA, USA",
        occupation="Architect",
    ))
    for parent in ("John", "Sarah"):
        for child in ("Emily", "Michael"):
            graph.add_parent_child(ids[parent], ids[child])

    print(f"Created {len(ids)} persons across 3 generations")
    for name, person_id in ids.items():
        print(f"   [{person_id}] {name}")
    return ids


def main():
    clear_all_databases()
    settings.database.ensure_dirs()
    graph = FamilyGraph.from_persistence(GraphPersistence())
    ids = seed_sample_data(graph)

    report = graph.lineage(ids["Emily"], ancestor_depth=2)
    print(f"\nLineage of {report.display_name}:")
    for ancestor in report.ancestors:
        print(f"   - {ancestor.full_name}")
    print("\nSample family tree created successfully!")


if __name__ == "__main__":
    main()
