import pytest
from models import Node
from registry import Registry
from storage import Storage


def leaf(status="todo", title="leaf", node_id=None):
    return Node(id=node_id or f"{title}-{status}", title=title, status=status)


def branch(*children, title="branch", node_id=None, status="todo"):
    return Node(id=node_id or title, title=title, status=status, children=list(children))


@pytest.fixture
def storage(tmp_path):
    return Storage(tmp_path / "data")


@pytest.fixture
def registry(storage):
    return Registry(storage=storage)
