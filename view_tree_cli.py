"""Command-line family tree viewer - reads the persisted graph directly."""

import argparse
import sys

from kinship.exceptions import KinshipError
from kinship.graph import FamilyGraph, GraphPersistence
from kinship.models import Person


def describe(person: Person) -> str:
    years = ""
    if person.birth_date:
        years = f" ({person.birth_date.year}-{person.death_date.year if person.death_date else ''})"
    return f"[{person.id}] {person.full_name or '(unnamed)'}{years}"


def show_person(graph: FamilyGraph, person_id: int, up: int, down: int) -> None:
    tree = graph.get_family_tree(person_id)
    print("=" * 80)
    print(f"👤 {describe(tree.person)}")
    if tree.person.occupation:
        print(f"   Occupation: {tree.person.occupation}")
    if tree.person.birth_place:
        print(f"   Born: {tree.person.birth_place}")
    print("=" * 80)

    for label, people in (
        ("Parents", tree.parents),
        ("Spouses", tree.spouses),
        ("Siblings", tree.siblings),
        ("Children", tree.children),
    ):
        if people:
            print(f"\n   {label}:")
            for relative in people:
                print(f"      {describe(relative)}")

    report = graph.lineage(person_id, up, down)
    print(f"\n📜 Lineage ({report.ancestor_depth_used} up, {report.descendant_depth_used} down)")
    print(f"   Ancestors ({len(report.ancestors)}):")
    for ancestor in report.ancestors:
        print(f"      {describe(ancestor)}")
    print(f"   Descendants ({len(report.descendants)}):")
    for descendant in report.descendants:
        print(f"      {describe(descendant)}")


def show_path(graph: FamilyGraph, from_id: int, to_id: int) -> None:
    steps = graph.relationship_steps(from_id, to_id)
    start = graph.get_person(from_id)
    if from_id == to_id:
        print(f"{describe(start)} is the same person")
        return
    if not steps:
        print(f"No relationship path between {from_id} and {to_id}")
        return
    print(f"🔗 {describe(start)}")
    for step in steps:
        print(f"   -> {step.specific}: {describe(graph.get_person(step.to_id))}")


def main():
    parser = argparse.ArgumentParser(description="View the persisted family tree")
    parser.add_argument("person_id", type=int, nargs="?", help="Person to show")
    parser.add_argument("--up", type=int, default=None, help="Ancestor generations")
    parser.add_argument("--down", type=int, default=None, help="Descendant generations")
    parser.add_argument("--path-to", type=int, default=None, help="Show how person_id is related to this person")
    parser.add_argument("--search", default=None, help="Search persons by name")
    args = parser.parse_args()

    graph = FamilyGraph.from_persistence(GraphPersistence())

    try:
        if args.search is not None:
            for person in graph.search_persons(args.search):
                print(describe(person))
        elif args.person_id is None:
            persons = graph.get_all_persons()
            print(f"\n📊 {len(persons)} Persons, {len(graph.get_all_relationships())} Relationships\n")
            for person in persons:
                print(describe(person))
        elif args.path_to is not None:
            show_path(graph, args.person_id, args.path_to)
        else:
            show_person(graph, args.person_id, args.up, args.down)
    except KinshipError as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
