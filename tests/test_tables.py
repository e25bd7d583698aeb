from mkfkit.tables import (
    LEAF_COUNT,
    NODE_COUNT,
    ROOT,
    SENTINEL,
    fresh_tables,
)


def test_table_sizes():
    tables = fresh_tables()
    assert len(tables.freq) == NODE_COUNT + 1
    assert len(tables.son) == NODE_COUNT
    assert len(tables.parent) == NODE_COUNT + LEAF_COUNT


def test_sentinel_and_root():
    tables = fresh_tables()
    assert tables.freq[-1] == 0xFFFF
    assert tables.freq[-1] == SENTINEL
    assert tables.freq[ROOT] == 0x0141
    assert tables.parent[ROOT] == 0


def test_leaves_start_with_weight_one():
    tables = fresh_tables()
    for symbol in range(LEAF_COUNT):
        assert tables.freq[symbol] == 1
        assert tables.son[symbol] == NODE_COUNT + symbol
        assert tables.parent[NODE_COUNT + symbol] == symbol


def test_internal_nodes_sum_their_children():
    tables = fresh_tables()
    for node in range(LEAF_COUNT, NODE_COUNT):
        left = tables.son[node]
        assert left < NODE_COUNT
        assert left % 2 == 0
        assert tables.freq[node] == tables.freq[left] + tables.freq[left + 1]
        assert tables.parent[left] == node
        assert tables.parent[left + 1] == node


def test_weights_are_ordered():
    tables = fresh_tables()
    weights = tables.freq[:NODE_COUNT]
    assert weights == sorted(weights)


def test_pinned_source_values():
    tables = fresh_tables()
    assert tables.son[0] == 0x0502 // 2
    assert tables.son[LEAF_COUNT] == 0
    assert tables.parent[0] == 0x0282 // 2
    assert tables.parent[1] == 0x0282 // 2


def test_fresh_tables_are_independent():
    first = fresh_tables()
    first.freq[0] = 99
    first.son[0] = 0
    second = fresh_tables()
    assert second.freq[0] == 1
    assert second.son[0] == NODE_COUNT