from registry import Registry
from render import progress_bar, render_sidebar, render_tree, strip_ansi, wrap
from status import LeafCount
from theme import Theme


def _plain(lines):
    return [strip_ansi(line) for line in lines]


def _registry():
    registry = Registry()
    registry.create_project("Launch")
    design = registry.add_node("Design", "mockups first")
    registry.add_node("Wireframes", status="done", parent_id=design.id)
    registry.add_node("Review copy", status="review", parent_id=design.id)
    registry.add_node("Ship", status="todo")
    return registry, design


def test_wrap():
    assert wrap("one two three four", 9) == ["one two", "three", "four"]
    assert wrap("", 10) == []
    assert wrap("supercalifragilistic", 5) == ["supercalifragilistic"]


def test_progress_bar():
    assert progress_bar(LeafCount(1, 2), width=4) == "[##--] 1/2"
    assert progress_bar(LeafCount(0, 3), width=3) == "[---] 0/3"


def test_tree_outline_numbers_and_statuses():
    registry, design = _registry()
    lines, index = render_tree(registry.active_project(), Theme(), width=80)
    plain = _plain(lines)
    assert plain[0] == "Launch"
    assert plain[1] == "1 of 3 tasks done · overall: review"
    assert index[0] == design.id
    assert len(index) == 4
    assert any(line.startswith("▾ 1. [Review] Design") for line in plain)
    assert any("[#####-----] 1/2 (auto)" in line for line in plain)
    assert any("mockups first" in line for line in plain)
    assert any(line.startswith("     2. [Done] Wireframes") for line in plain)
    assert any(line.startswith("  4. [To Do] Ship") for line in plain)


def test_collapsed_nodes_hide_children():
    registry, design = _registry()
    registry.toggle_collapsed(design.id)
    lines, index = render_tree(registry.active_project(), Theme(), width=80)
    assert len(index) == 2
    assert any(line.startswith("▸ 1. [Review] Design") for line in _plain(lines))


def test_empty_project_hint():
    registry = Registry()
    registry.create_project("Empty")
    lines, index = render_tree(registry.active_project(), Theme(), width=80)
    assert index == []
    assert "no nodes yet" in _plain(lines)[-1]


def test_sidebar():
    registry, _ = _registry()
    registry.create_project("Other")
    plain = _plain(render_sidebar(registry, Theme()))
    assert plain[0].startswith("  1. ● Launch")
    assert plain[0].endswith("1/3")
    assert plain[1].startswith("> 2. ● Other")


def test_sidebar_empty():
    assert _plain(render_sidebar(Registry(), Theme())) == ["No projects yet."]


def test_theme_toggle_and_override(monkeypatch):
    monkeypatch.setenv("TREEFLOW_DONE", "#123456")
    theme = Theme()
    assert theme.name == "dark"
    assert theme.hexes["done"] == "#123456"
    assert theme.toggled().name == "light"
    assert Theme("neon").name == "dark"
