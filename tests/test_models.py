from models import Node, Project, generate_id


def test_generate_id_unique():
    ids = {generate_id() for _ in range(2000)}
    assert len(ids) == 2000


def test_new_project_root_mirrors_name():
    project = Project.new("Plan")
    assert project.root.title == "Plan"
    assert project.root.status == "todo"
    assert project.root.children == []
    assert project.id != project.root.id
    assert project.created_at


def test_node_round_trip():
    node = Node(id="a", title="A", description="d", status="review",
                children=[Node(id="b", title="B", status="done", collapsed=True)])
    assert Node.from_dict(node.to_dict()) == node


def test_node_from_dict_is_lenient():
    node = Node.from_dict({
        "title": "T",
        "status": "weird",
        "_collapsed": True,
        "children": [{"id": "x", "title": "ok"}, {"id": "y"}, "junk"],
    })
    assert node.id
    assert node.status == "todo"
    assert node.collapsed is True
    assert node.description == ""
    assert [c.id for c in node.children] == ["x"]


def test_node_from_dict_rejects_non_mapping():
    assert Node.from_dict(None) is None
    assert Node.from_dict({"id": "no-title"}) is None


def test_project_from_dict_keeps_name_and_root_in_sync():
    project = Project.from_dict({"id": "p", "name": "N", "createdAt": "2024-01-01T00:00:00",
                                 "root": {"id": "r", "title": "old"}})
    assert project.name == project.root.title == "N"
    assert project.created_at == "2024-01-01T00:00:00"


def test_project_to_dict_shape():
    data = Project.new("P").to_dict()
    assert set(data) == {"id", "name", "createdAt", "root"}
    assert set(data["root"]) == {"id", "title", "description", "status", "children", "collapsed"}
