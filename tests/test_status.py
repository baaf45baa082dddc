import itertools
import random

from conftest import branch, leaf
from status import LeafCount, compute_status, count_leaves, next_status, status_label


def test_leaf_returns_own_status():
    for s in ("todo", "doing", "review", "done"):
        assert compute_status(leaf(s)) == s


def test_all_done_is_done():
    assert compute_status(branch(leaf("done"), leaf("done", "b"))) == "done"


def test_doing_beats_review_and_todo():
    node = branch(leaf("todo"), leaf("review", "r"), leaf("doing", "d"), leaf("done", "x"))
    assert compute_status(node) == "doing"


def test_review_beats_todo():
    assert compute_status(branch(leaf("todo"), leaf("review", "r"))) == "review"


def test_done_mixed_with_todo_is_todo():
    assert compute_status(branch(leaf("done"), leaf("todo", "t"))) == "todo"


def test_internal_stored_status_is_ignored():
    # a stale cached "done" on an inner node must not leak upward
    inner = branch(leaf("todo", "a"), title="inner", status="done")
    assert compute_status(branch(inner, leaf("done", "b"))) == "todo"


def test_nested_derivation():
    tree = branch(
        branch(leaf("done", "a"), leaf("done", "b"), title="x"),
        branch(leaf("review", "c"), leaf("done", "d"), title="y"),
        title="root",
    )
    assert compute_status(tree) == "review"


def test_sibling_order_does_not_matter():
    rng = random.Random(7)
    for combo in itertools.product(("todo", "doing", "review", "done"), repeat=3):
        children = [leaf(s, f"n{i}") for i, s in enumerate(combo)]
        expected = compute_status(branch(*children))
        rng.shuffle(children)
        assert compute_status(branch(*children)) == expected


def test_compute_status_does_not_mutate():
    node = branch(leaf("done", "a"), title="p", status="todo")
    compute_status(node)
    assert node.status == "todo"


def test_count_leaves_on_leaf():
    assert count_leaves(leaf("done")) == LeafCount(1, 1)
    assert count_leaves(leaf("review")) == LeafCount(0, 1)


def test_count_leaves_is_additive():
    a = branch(leaf("done", "a1"), leaf("todo", "a2"), title="a")
    b = branch(branch(leaf("done", "b1"), title="b-inner"), leaf("done", "b2"), title="b")
    root = branch(a, b, title="root")
    ca, cb = count_leaves(a), count_leaves(b)
    assert count_leaves(root) == LeafCount(ca.done + cb.done, ca.total + cb.total)
    assert count_leaves(root) == LeafCount(3, 4)


def test_next_status_cycles_and_wraps():
    assert next_status("todo") == "doing"
    assert next_status("doing") == "review"
    assert next_status("review") == "done"
    assert next_status("done") == "todo"
    assert next_status("bogus") == "todo"


def test_status_label():
    assert status_label("todo") == "To Do"
    assert status_label("unknown") == "unknown"
