"""Behaviour every storage backend must share (runs once per backend)."""
import pytest

from promptcraft.storage import CollectionNotFoundError


def orders(storage, collection_id):
    return {p['id']: p['order'] for p in storage.list_prompts(collection_id)}


def listed_ids(storage, collection_id):
    return [p['id'] for p in storage.list_prompts(collection_id)]


class TestCollections:

    def test_create_and_get_collection(self, storage):
        created = storage.create_collection('Writing', 'Story starters')

        assert created['id'] is not None
        assert storage.get_collection(created['id']) == {
            'id': created['id'],
            'title': 'Writing',
            'description': 'Story starters',
        }

    def test_description_is_optional(self, storage):
        created = storage.create_collection('Research')
        assert created['description'] is None

    def test_list_collections_ordered_by_id(self, storage):
        a = storage.create_collection('A')
        b = storage.create_collection('B')
        assert [c['id'] for c in storage.list_collections()] == [a['id'], b['id']]

    def test_update_collection_is_partial(self, storage):
        created = storage.create_collection('Old', 'keep me')

        updated = storage.update_collection(created['id'], {'title': 'New'})

        assert updated['title'] == 'New'
        assert updated['description'] == 'keep me'

    def test_update_collection_can_clear_description(self, storage):
        created = storage.create_collection('T', 'desc')
        assert storage.update_collection(created['id'], {'description': None})['description'] is None

    def test_update_missing_collection_returns_none(self, storage):
        assert storage.update_collection(424242, {'title': 'x'}) is None

    def test_delete_collection_cascades_to_prompts(self, storage, writing):
        collection, prompt_ids = writing
        other = storage.create_collection('Other')
        survivor = storage.create_prompt(other['id'], 'stays')

        assert storage.delete_collection(collection['id']) is True

        assert storage.get_collection(collection['id']) is None
        assert storage.list_prompts(collection['id']) == []
        assert all(storage.get_prompt(pid) is None for pid in prompt_ids)
        assert storage.get_prompt(survivor['id']) is not None

    def test_delete_missing_collection_returns_false(self, storage):
        assert storage.delete_collection(424242) is False


class TestPrompts:

    def test_create_appends_when_order_omitted(self, storage, writing):
        collection, prompt_ids = writing
        assert list(orders(storage, collection['id']).values()) == [0, 1, 2]

        created = storage.create_prompt(collection['id'], 'fourth')

        assert created['order'] == 3
        assert created['collectionId'] == collection['id']

    def test_explicit_zero_inserts_at_front(self, storage, writing):
        collection, prompt_ids = writing

        created = storage.create_prompt(collection['id'], 'new first', order=0)

        assert created['order'] == 0
        assert listed_ids(storage, collection['id']) == [created['id'], *prompt_ids]
        assert sorted(orders(storage, collection['id']).values()) == [0, 1, 2, 3]

    def test_insert_in_the_middle_shifts_followers(self, storage, writing):
        collection, (p0, p1, p2) = writing

        created = storage.create_prompt(collection['id'], 'middle', order=1)

        assert listed_ids(storage, collection['id']) == [p0, created['id'], p1, p2]

    def test_insert_position_is_clamped_to_count(self, storage, writing):
        collection, _ = writing
        assert storage.create_prompt(collection['id'], 'far away', order=99)['order'] == 3

    def test_create_in_unknown_collection_raises(self, storage):
        with pytest.raises(CollectionNotFoundError):
            storage.create_prompt(424242, 'orphan')

    def test_collection_not_found_is_a_value_error(self):
        assert issubclass(CollectionNotFoundError, ValueError)

    def test_list_prompts_sorted_by_order(self, storage, writing):
        collection, (p0, p1, p2) = writing
        storage.reorder_prompts(collection['id'], [p2, p0, p1])

        listed = storage.list_prompts(collection['id'])

        assert [p['order'] for p in listed] == [0, 1, 2]
        assert [p['id'] for p in listed] == [p2, p0, p1]

    def test_list_prompts_of_unknown_collection_is_empty(self, storage):
        assert storage.list_prompts(424242) == []

    def test_update_content_leaves_order_unchanged(self, storage, writing):
        collection, (p0, p1, p2) = writing

        updated = storage.update_prompt(p1, {'content': 'edited'})

        assert updated['content'] == 'edited'
        assert updated['order'] == 1
        assert orders(storage, collection['id']) == {p0: 0, p1: 1, p2: 2}

    def test_move_prompt_down(self, storage, writing):
        collection, (p0, p1, p2) = writing

        moved = storage.update_prompt(p0, {'order': 2})

        assert moved['order'] == 2
        assert listed_ids(storage, collection['id']) == [p1, p2, p0]
        assert sorted(orders(storage, collection['id']).values()) == [0, 1, 2]

    def test_move_prompt_up(self, storage, writing):
        collection, (p0, p1, p2) = writing

        storage.update_prompt(p2, {'order': 0})

        assert listed_ids(storage, collection['id']) == [p2, p0, p1]

    def test_move_target_is_clamped(self, storage, writing):
        collection, (p0, p1, p2) = writing
        assert storage.update_prompt(p0, {'order': 50})['order'] == 2

    def test_update_missing_prompt_returns_none(self, storage):
        assert storage.update_prompt(424242, {'content': 'x'}) is None

    def test_delete_prompt_closes_the_gap(self, storage, writing):
        collection, (p0, p1, p2) = writing

        assert storage.delete_prompt(p1) is True

        assert storage.get_prompt(p1) is None
        assert orders(storage, collection['id']) == {p0: 0, p2: 1}
        # appending after a delete never duplicates an order
        assert storage.create_prompt(collection['id'], 'again')['order'] == 2

    def test_delete_missing_prompt_returns_false(self, storage):
        assert storage.delete_prompt(424242) is False


class TestReorder:

    def test_reorder_example_scenario(self, storage, writing):
        collection, (p10, p11, p12) = writing

        storage.reorder_prompts(collection['id'], [p12, p10, p11])

        assert orders(storage, collection['id']) == {p10: 1, p11: 2, p12: 0}
        assert listed_ids(storage, collection['id']) == [p12, p10, p11]

    def test_full_permutation_assigns_index(self, storage, writing):
        collection, prompt_ids = writing
        extra = [storage.create_prompt(collection['id'], f'extra {i}')['id'] for i in range(3)]
        permutation = [extra[1], prompt_ids[2], extra[0], prompt_ids[0], extra[2], prompt_ids[1]]

        updated = storage.reorder_prompts(collection['id'], permutation)

        assert updated == len(permutation)
        result = orders(storage, collection['id'])
        assert all(result[pid] == index for index, pid in enumerate(permutation))
        assert sorted(result.values()) == list(range(len(permutation)))

    def test_foreign_and_unknown_ids_are_ignored(self, storage, writing):
        collection, (p0, p1, p2) = writing
        other = storage.create_collection('Other')
        foreign = storage.create_prompt(other['id'], 'not yours')

        updated = storage.reorder_prompts(collection['id'], [foreign['id'], 424242])

        assert updated == 0
        assert orders(storage, collection['id']) == {p0: 0, p1: 1, p2: 2}
        assert storage.get_prompt(foreign['id'])['order'] == 0

    def test_omitted_prompts_keep_their_order(self, storage, writing):
        collection, (p0, p1, p2) = writing

        storage.reorder_prompts(collection['id'], [p2])

        assert orders(storage, collection['id']) == {p0: 0, p1: 1, p2: 0}

    def test_unknown_collection_is_a_noop(self, storage, writing):
        collection, (p0, p1, p2) = writing
        assert storage.reorder_prompts(424242, [p2, p1, p0]) == 0
        assert orders(storage, collection['id']) == {p0: 0, p1: 1, p2: 2}

    def test_failure_midway_changes_nothing(self, storage, writing):
        collection, (p0, p1, p2) = writing

        def ids():
            yield p2
            raise RuntimeError("client went away")

        with pytest.raises(RuntimeError):
            storage.reorder_prompts(collection['id'], ids())

        assert orders(storage, collection['id']) == {p0: 0, p1: 1, p2: 2}


class TestOversizedIds:
    """Ids no database column can hold behave like any other unknown id."""

    HUGE = 2 ** 70

    def test_lookups_find_nothing(self, storage):
        assert storage.get_collection(self.HUGE) is None
        assert storage.get_prompt(self.HUGE) is None
        assert storage.list_prompts(self.HUGE) == []

    def test_writes_report_absent(self, storage):
        assert storage.update_collection(self.HUGE, {'title': 'x'}) is None
        assert storage.delete_collection(self.HUGE) is False
        assert storage.update_prompt(self.HUGE, {'content': 'x'}) is None
        assert storage.delete_prompt(self.HUGE) is False
        assert storage.reorder_prompts(self.HUGE, [1, 2]) == 0

    def test_create_prompt_in_oversized_collection_raises(self, storage):
        with pytest.raises(CollectionNotFoundError):
            storage.create_prompt(self.HUGE, 'orphan')

    def test_oversized_ids_in_reorder_are_skipped(self, storage, writing):
        collection, (p0, p1, p2) = writing

        assert storage.reorder_prompts(collection['id'], [self.HUGE, p2]) == 1

        assert orders(storage, collection['id']) == {p0: 0, p1: 1, p2: 1}
