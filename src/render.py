"""Text rendering for the project list and the tree outline.

Nodes visible in the outline are numbered in pre-order starting at 1; the
returned index maps those numbers back to node ids for the CLI. Status
shown is always computed live, never read from the cached field.
"""
import re, shutil
from typing import List, Optional, Tuple
from models import Node, Project
from registry import Registry
from status import compute_status, count_leaves, status_label, LeafCount
from theme import Theme, color
from tree import iter_nodes

ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")
INDENT = "   "
BAR_WIDTH = 10
MIN_TEXT_WIDTH = 12

def strip_ansi(s: str) -> str:
    return ANSI_RE.sub('', s)

def terminal_width() -> int:
    return shutil.get_terminal_size((100, 30)).columns

def wrap(text: str, width: int) -> List[str]:
    """Greedy word wrap; words longer than ``width`` get their own line."""
    lines: List[str] = []
    current = ''
    limit = max(1, width)
    for w in text.split():
        candidate = w if not current else current + ' ' + w
        if len(candidate) <= limit:
            current = candidate
        else:
            if current:
                lines.append(current)
            current = w
    if current:
        lines.append(current)
    return lines

def progress_bar(leaves: LeafCount, width: int = BAR_WIDTH) -> str:
    filled = round(width * leaves.done / leaves.total) if leaves.total else 0
    return '[' + '#' * filled + '-' * (width - filled) + f'] {leaves.done}/{leaves.total}'

# -------------------- project list --------------------
def render_sidebar(registry: Registry, theme: Theme) -> List[str]:
    summaries = registry.summaries()
    if not summaries:
        return [color('No projects yet.', theme.muted)]
    lines: List[str] = []
    for n, summary in enumerate(summaries, start=1):
        marker = '>' if summary.active else ' '
        dot = color('●', theme.status_color.get(summary.status, ''))
        num = color(f"{n}.", theme.index)
        count = f"{summary.leaves.done}/{summary.leaves.total}"
        lines.append(f"{marker} {num} {dot} {summary.project.name}  {color(count, theme.muted)}")
    return lines

# -------------------- tree outline --------------------
def outline(project: Project) -> List[Tuple[Node, int]]:
    """Visible (node, depth) pairs in outline order; node n is at position n-1."""
    return list(iter_nodes(project.root, include_collapsed=False))

def render_tree(project: Project, theme: Theme, width: Optional[int] = None) -> Tuple[List[str], List[str]]:
    """Return (lines, index) for ``project``; ``index[n-1]`` is the id of node n."""
    width = width or terminal_width()
    leaves = count_leaves(project.root)
    overall = compute_status(project.root)
    lines: List[str] = [
        color(project.name, theme.header),
        color(f"{leaves.done} of {leaves.total} tasks done · overall: {overall}", theme.muted),
        '',
    ]
    index: List[str] = []
    for node, depth in outline(project):
        index.append(node.id)
        lines.extend(_node_lines(node, depth, len(index), theme, width))
    if not index:
        lines.append(color("(no nodes yet; 'add <title>' creates one)", theme.muted))
    return lines, index

def _node_lines(node: Node, depth: int, number: int, theme: Theme, width: int) -> List[str]:
    status = compute_status(node)
    status_col = theme.status_color.get(status, '')
    if node.is_leaf:
        marker = ' '
    else:
        marker = '▸' if node.collapsed else '▾'
    pill = f"[{status_label(status)}]"
    prefix_visible = f"{INDENT * depth}{marker} {number}. {pill} "
    prefix_colored = (INDENT * depth + marker + ' ' + color(f"{number}.", theme.index)
                      + ' ' + color(pill, status_col) + ' ')
    hang = ' ' * len(prefix_visible)
    text_width = max(MIN_TEXT_WIDTH, width - len(prefix_visible))

    title_lines = wrap(node.title, text_width) or ['<untitled>']
    out = [prefix_colored + title_lines[0]]
    out.extend(hang + line for line in title_lines[1:])
    if not node.is_leaf:
        bar = progress_bar(count_leaves(node))
        out.append(hang + color(bar + ' (auto)', theme.muted))
    if node.description:
        out.extend(hang + color(line, theme.muted) for line in wrap(node.description, text_width))
    return out
