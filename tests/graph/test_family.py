"""Test person and relationship operations."""

import pytest
from pydantic import ValidationError

from kinship.config import SearchSettings
from kinship.exceptions import AlreadyExists, InvalidRelationship, PersonNotFound, RelationshipError
from kinship.graph.family.graph import FamilyGraph
from kinship.graph.models import GraphSnapshot, MutationKind
from kinship.models import Person, PersonAttributes, Relationship


class TestPersonOperations:
    """Tests for person operations."""

    def test_create_and_get(self, graph):
        """Created persons are retrievable with no edges."""
        person_id = graph.add_person(first_name="Robert", last_name="Johnson", gender="MALE")
        person = graph.get_person(person_id)
        assert person.id == person_id
        assert person.first_name == "Robert"
        assert person.gender.value == "MALE"
        assert person.parent_ids == frozenset()
        assert person.child_ids == frozenset()
        assert person.spouse_ids == frozenset()

    def test_ids_are_unique(self, add):
        """Identical attributes still get distinct identities."""
        assert add("Twin") != add("Twin")

    def test_get_unknown(self, graph):
        """Unknown ids raise PersonNotFound."""
        with pytest.raises(PersonNotFound):
            graph.get_person(999)

    def test_caller_supplied_id(self, graph, add):
        """A chosen id is used, collisions raise AlreadyExists, the counter moves past it."""
        assert graph.add_person(first_name="Chosen", person_id=10) == 10
        with pytest.raises(AlreadyExists):
            graph.add_person(first_name="Clash", person_id=10)
        assert add("Next") == 11

    def test_update_replaces_attributes(self, graph, add):
        """Update with a record replaces every attribute."""
        person_id = add("Sarah", occupation="Lawyer")
        updated = graph.update_person(person_id, PersonAttributes(first_name="Sarah", last_name="Johnson"))
        assert updated.last_name == "Johnson"
        assert updated.occupation is None

    def test_update_merges_changes(self, graph, add):
        """Keyword changes merge into the current attributes."""
        person_id = add("Sarah", occupation="Lawyer")
        updated = graph.update_person(person_id, current_location="Boston")
        assert updated.occupation == "Lawyer"
        assert updated.current_location == "Boston"
        assert graph.get_person(person_id).current_location == "Boston"

    def test_update_unknown(self, graph):
        """Updating an unknown id raises PersonNotFound."""
        with pytest.raises(PersonNotFound):
            graph.update_person(5, first_name="X")

    def test_update_from_snapshot(self, graph, add, events):
        """An edited Person snapshot is accepted as the new attribute record."""
        a, b = add("A"), add("B")
        graph.add_parent_child(a, b)
        edited = graph.get_person(a).model_copy(update={"occupation": "Mason"})
        updated = graph.update_person(a, edited)
        assert updated.id == a
        assert updated.occupation == "Mason"
        assert updated.child_ids == {b}
        assert events[-1].person.occupation == "Mason"
        assert [p.id for p in graph.get_all_persons()] == [a, b]
        assert [p.id for p in graph.search_persons("B")] == [b]

    def test_add_from_snapshot(self, graph, add):
        """Adding a Person snapshot copies its attributes, not its id or edges."""
        a, b = add("A", occupation="Baker"), add("B")
        graph.add_parent_child(a, b)
        copy_id = graph.add_person(graph.get_person(a))
        copy = graph.get_person(copy_id)
        assert copy_id == 3
        assert copy.occupation == "Baker"
        assert copy.child_ids == frozenset()
        assert [p.id for p in graph.get_all_persons()] == [a, b, copy_id]

    def test_add_merges_fields_over_attributes(self, graph):
        """Keyword fields override the given attribute record."""
        person_id = graph.add_person(PersonAttributes(first_name="Sarah", occupation="Lawyer"),
                                     occupation="Judge")
        person = graph.get_person(person_id)
        assert person.first_name == "Sarah"
        assert person.occupation == "Judge"

    def test_rejected_create_leaves_no_trace(self, graph, add):
        """A create that fails validation publishes nothing and uses no id."""
        add("A")
        with pytest.raises(ValidationError):
            graph.add_person(first_name="B", favourite_colour="blue")
        assert [p.id for p in graph.get_all_persons()] == [1]
        assert add("C") == 2

    def test_snapshot_does_not_change(self, graph, add):
        """A snapshot handed out earlier keeps its old adjacency."""
        a, b = add("A"), add("B")
        before = graph.get_person(a)
        graph.add_parent_child(a, b)
        assert before.child_ids == frozenset()
        assert graph.get_person(a).child_ids == {b}

    def test_delete(self, graph, add):
        """Deleted persons are gone."""
        person_id = add("Gone")
        graph.delete_person(person_id)
        with pytest.raises(PersonNotFound):
            graph.get_person(person_id)
        with pytest.raises(PersonNotFound):
            graph.delete_person(person_id)

    def test_delete_cascades_edges(self, graph, johnsons):
        """No other person keeps a reference to a deleted person."""
        john = johnsons["John"]
        graph.delete_person(john)
        for person in graph.get_all_persons():
            assert john not in person.parent_ids
            assert john not in person.child_ids
            assert john not in person.spouse_ids
        # Neighbors themselves survive
        assert graph.get_person(johnsons["Sarah"]).spouse_ids == frozenset()
        assert graph.get_person(johnsons["Emily"]).parent_ids == {johnsons["Sarah"]}

    def test_list_public(self, graph, add):
        """Only persons flagged public are listed."""
        shown = add("Shown", is_public=True, visibility="PUBLIC")
        add("Hidden")
        assert [p.id for p in graph.get_public_persons()] == [shown]

    def test_family_by_surname(self, graph, johnsons, add):
        """Exact last-name lookup."""
        add("Priya", last_name="Sharma")
        assert len(graph.get_family_by_surname("Johnson")) == 6
        assert graph.get_family_by_surname("johnson") == []


class TestSearch:
    """Tests for name search."""

    def test_partial_first_or_last_name(self, graph, add):
        """Matches substrings of first or last name."""
        add("Ramesh", last_name="Kumar")
        add("Suresh", last_name="Kumar")
        add("Priya", last_name="Sharma")
        assert len(graph.search_persons("Kumar")) == 2
        assert len(graph.search_persons("esh")) == 2
        assert [p.first_name for p in graph.search_persons("Shar")] == ["Priya"]

    def test_case_insensitive_by_default(self, graph, add):
        """Default search ignores case."""
        add("Emily", last_name="Johnson")
        assert len(graph.search_persons("JOHN")) == 1

    def test_case_sensitive_setting(self):
        """Case-sensitive search when configured."""
        graph = FamilyGraph(search=SearchSettings(case_sensitive=True))
        graph.add_person(first_name="Emily", last_name="Johnson")
        assert graph.search_persons("john") == []
        assert len(graph.search_persons("John")) == 1

    def test_result_cap(self):
        """Results are capped at max_results, lowest ids first."""
        graph = FamilyGraph(search=SearchSettings(max_results=3))
        ids = [graph.add_person(first_name=f"Kumar{i}") for i in range(10)]
        results = graph.search_persons("Kumar")
        assert [p.id for p in results] == ids[:3]
        assert len(graph.search_persons("Kumar", limit=5)) == 5

    def test_empty_term(self, graph, add):
        """An empty term matches nothing."""
        add("Anyone")
        assert graph.search_persons("") == []


class TestRelationships:
    """Tests for relationship operations."""

    def test_parent_child_both_sides(self, graph, add):
        """Parent-of edges appear on parent and child."""
        p, c = add("Parent"), add("Child")
        assert graph.add_parent_child(p, c) is True
        assert c in graph.get_children(p)
        assert p in graph.get_parents(c)

    def test_spouse_both_sides(self, graph, add):
        """Spouse edges are symmetric."""
        a, b = add("A"), add("B")
        assert graph.add_spouse(a, b) is True
        assert b in graph.get_spouses(a)
        assert a in graph.get_spouses(b)

    def test_readding_is_idempotent(self, graph, add, events):
        """Re-asserting an edge succeeds without a new event."""
        p, c = add("Parent"), add("Child")
        graph.add_parent_child(p, c)
        count = len(events)
        assert graph.add_parent_child(p, c) is False
        assert len(events) == count
        assert graph.get_children(p) == {c}

    def test_spouse_readd_reversed_is_idempotent(self, graph, add):
        """Spouse edge added from the other side is the same edge."""
        a, b = add("A"), add("B")
        graph.add_spouse(a, b)
        assert graph.add_spouse(b, a) is False

    def test_self_relationship_rejected(self, graph, add):
        """Nobody is their own parent or spouse."""
        a = add("A")
        with pytest.raises(InvalidRelationship) as exc:
            graph.add_parent_child(a, a)
        assert exc.value.reason == RelationshipError.SELF_RELATIONSHIP
        with pytest.raises(InvalidRelationship):
            graph.add_spouse(a, a)
        with pytest.raises(InvalidRelationship) as exc:
            graph.remove_parent_child(a, a)
        assert exc.value.reason == RelationshipError.SELF_RELATIONSHIP
        with pytest.raises(InvalidRelationship):
            graph.remove_spouse(a, a)
        assert graph.get_person(a).parent_ids == frozenset()

    def test_unknown_ids_rejected(self, graph, add):
        """Adding or removing edges with unknown persons raises PersonNotFound."""
        a = add("A")
        with pytest.raises(PersonNotFound):
            graph.add_parent_child(a, 404)
        with pytest.raises(PersonNotFound):
            graph.add_spouse(404, a)
        with pytest.raises(PersonNotFound):
            graph.remove_parent_child(404, a)
        with pytest.raises(PersonNotFound):
            graph.remove_spouse(a, 404)
        assert graph.get_children(a) == frozenset()

    def test_cycle_rejected(self, graph, chain):
        """A descendant cannot become an ancestor."""
        g1, g2, g3 = chain
        with pytest.raises(InvalidRelationship) as exc:
            graph.add_parent_child(g3, g1)
        assert exc.value.reason == RelationshipError.CYCLE_DETECTED
        with pytest.raises(InvalidRelationship):
            graph.add_parent_child(g2, g1)
        assert graph.get_parents(g1) == frozenset()
        assert graph.get_children(g3) == frozenset()

    def test_retry_fails_the_same_way(self, graph, chain):
        """Rejections are deterministic."""
        g1, _, g3 = chain
        for _ in range(2):
            with pytest.raises(InvalidRelationship):
                graph.add_parent_child(g3, g1)

    def test_spouse_cycles_allowed(self, graph, add):
        """Spouse edges may form any shape, including with relatives."""
        a, b, c = add("A"), add("B"), add("C")
        graph.add_spouse(a, b)
        graph.add_spouse(b, c)
        graph.add_spouse(c, a)
        graph.add_parent_child(a, c)
        assert graph.get_spouses(a) == {b, c}

    def test_no_arity_cap(self, graph, add):
        """Many parents, children and spouses are allowed."""
        child = add("Child")
        parents = [add(f"P{i}") for i in range(4)]
        spouses = [add(f"S{i}") for i in range(3)]
        for p in parents:
            graph.add_parent_child(p, child)
        for s in spouses:
            graph.add_spouse(child, s)
        assert graph.get_parents(child) == set(parents)
        assert graph.get_spouses(child) == set(spouses)

    def test_remove_parent_child(self, graph, add):
        """Removing clears both sides; removing again is a no-op."""
        p, c = add("Parent"), add("Child")
        graph.add_parent_child(p, c)
        assert graph.remove_parent_child(p, c) is True
        assert graph.get_children(p) == frozenset()
        assert graph.get_parents(c) == frozenset()
        assert graph.remove_parent_child(p, c) is False

    def test_remove_spouse(self, graph, add):
        """Removing a spouse edge clears both sides."""
        a, b = add("A"), add("B")
        graph.add_spouse(a, b)
        assert graph.remove_spouse(b, a) is True
        assert graph.get_spouses(a) == frozenset()
        assert graph.get_spouses(b) == frozenset()

    def test_remove_then_reverse_allowed(self, graph, add):
        """Once an edge is removed the reverse edge no longer forms a cycle."""
        p, c = add("P"), add("C")
        graph.add_parent_child(p, c)
        graph.remove_parent_child(p, c)
        assert graph.add_parent_child(c, p) is True

    def test_remove_all_edges(self, graph, johnsons):
        """Detaching a person leaves them in the graph without edges."""
        john = johnsons["John"]
        removed = graph.relationships.remove_all_edges_of(john)
        assert removed == 5
        person = graph.get_person(john)
        assert not (person.parent_ids or person.child_ids or person.spouse_ids)

    def test_get_all_relationships(self, graph, johnsons):
        """Each edge is listed once."""
        rels = graph.get_all_relationships()
        parent_of = [r for r in rels if r.relation_type == "parent_of"]
        spouse_of = [r for r in rels if r.relation_type == "spouse_of"]
        assert len(parent_of) == 6
        assert len(spouse_of) == 2
        assert all(r.from_id < r.to_id for r in spouse_of)


class TestMutationEvents:
    """Tests for write-through events."""

    def test_one_event_per_change(self, graph, add, events):
        """Creates, edges and deletes each emit one event."""
        a, b = add("A"), add("B")
        graph.add_spouse(a, b)
        graph.update_person(a, occupation="Baker")
        graph.delete_person(b)
        kinds = [e.kind for e in events]
        assert kinds == [
            MutationKind.PERSON_CREATED,
            MutationKind.PERSON_CREATED,
            MutationKind.SPOUSE_ADDED,
            MutationKind.PERSON_UPDATED,
            MutationKind.SPOUSE_REMOVED,
            MutationKind.PERSON_DELETED,
        ]
        assert events[3].person.occupation == "Baker"

    def test_no_event_on_rejection(self, graph, chain, events):
        """Rejected mutations emit nothing."""
        g1, _, g3 = chain
        count = len(events)
        with pytest.raises(InvalidRelationship):
            graph.add_parent_child(g3, g1)
        assert len(events) == count

    def test_failing_listener_does_not_undo_commit(self, graph, add):
        """A broken listener is logged; the mutation stands."""
        def broken(event):
            raise RuntimeError("disk full")

        graph.subscribe(broken)
        p, c = add("P"), add("C")
        assert graph.add_parent_child(p, c) is True
        assert graph.get_children(p) == {c}

    def test_load_skips_invalid_stored_edges(self, graph):
        """Dangling or cyclic stored edges are dropped; the rest load."""
        snapshot = GraphSnapshot(
            persons=[Person(id=1, first_name="A"), Person(id=2, first_name="B")],
            relationships=[
                Relationship(from_id=1, to_id=2, relation_type="parent_of"),
                Relationship(from_id=2, to_id=1, relation_type="parent_of"),
                Relationship(from_id=1, to_id=9, relation_type="spouse_of"),
            ],
        )
        graph.load(snapshot)
        assert graph.get_children(1) == {2}
        assert graph.get_parents(1) == frozenset()
        assert graph.get_spouses(1) == frozenset()
        assert graph.add_person(first_name="C") == 3

    def test_unsubscribe(self, graph, add):
        """Unsubscribed listeners receive nothing."""
        received = []
        graph.subscribe(received.append)
        graph.unsubscribe(received.append)
        add("A")
        assert received == []
