# backend/wikihub/services/tree.py
from collections import defaultdict
from dataclasses import dataclass, field
from html import escape
from typing import Callable, Dict, Iterable, List, Optional, Set

from sqlalchemy.orm import Session

from ..config import settings
from ..models import Document

ROOT_ID = 0


@dataclass(frozen=True)
class TreeNode:
    id: int
    name: str
    parent_id: int = ROOT_ID


@dataclass
class NavItem:
    id: int
    name: str
    selected: bool = False
    open: bool = False
    children: List["NavItem"] = field(default_factory=list)


def load_nodes(db: Session, project_id: Optional[int]) -> List[TreeNode]:
    """Fetch a project's documents as tree nodes in display order"""
    if not project_id:
        return []

    rows = db.query(Document.id, Document.name, Document.parent_id) \
        .filter(Document.project_id == project_id) \
        .order_by(Document.sort.asc(), Document.id.asc()) \
        .all()
    return [TreeNode(id=row.id, name=row.name, parent_id=row.parent_id or ROOT_ID) for row in rows]


def build_nested_format(nodes: Iterable[TreeNode]) -> List[dict]:
    """Re-encode nodes as parent pointers, '#' marking a root"""
    return [
        {
            "id": str(node.id),
            "text": node.name,
            "parent": "#" if node.parent_id == ROOT_ID else str(node.parent_id),
        }
        for node in nodes
    ]


def resolve_open_ancestor(nodes: Iterable[TreeNode], candidate_id: Optional[int]) -> int:
    """Walk up from ``candidate_id`` and return its top-level ancestor.

    Returns 0 when the candidate is unknown, when a parent link points to a
    missing node, or when the chain loops back on itself.
    """
    if not candidate_id:
        return 0

    by_id: Dict[int, TreeNode] = {}
    for node in nodes:
        by_id.setdefault(node.id, node)

    visited: Set[int] = set()
    current = by_id.get(candidate_id)
    while current is not None:
        if current.id in visited:
            return 0
        visited.add(current.id)

        if current.parent_id == ROOT_ID:
            return current.id
        current = by_id.get(current.parent_id)

    return 0


def build_navigation(nodes: Iterable[TreeNode], selected_id: Optional[int] = 0) -> List[NavItem]:
    """Group nodes under their parents, starting from the roots.

    The selected node is flagged ``selected`` and its top-level ancestor is
    flagged ``open`` so the navigation path stays expanded.
    """
    nodes = list(nodes)
    open_id = resolve_open_ancestor(nodes, selected_id)

    children: Dict[int, List[TreeNode]] = defaultdict(list)
    for node in nodes:
        children[node.parent_id].append(node)

    return _collect_children(children, selected_id or 0, open_id)


def _collect_children(children: Dict[int, List[TreeNode]], selected_id: int, open_id: int) -> List[NavItem]:
    roots: List[NavItem] = []
    placed: Set[int] = set()
    # Each frame holds the list being filled and the siblings still to place
    stack = [(roots, iter(children.get(ROOT_ID, [])))]
    while stack:
        items, pending = stack[-1]
        node = next(pending, None)
        if node is None:
            stack.pop()
            continue

        # A duplicated id would otherwise descend into itself
        if node.id in placed:
            continue
        placed.add(node.id)

        item = NavItem(
            id=node.id,
            name=node.name,
            selected=node.id == selected_id,
            open=node.id == open_id,
        )
        items.append(item)
        if children.get(node.id):
            stack.append((item.children, iter(children[node.id])))
    return roots


def document_url(doc_id: int) -> str:
    return settings.DOCUMENT_URL_TEMPLATE.format(doc_id=doc_id)


def render_navigation_html(items: List[NavItem], url_for: Callable[[int], str] = document_url) -> str:
    """Render navigation items as nested jsTree markup"""
    if not items:
        return ""
    parts: List[str] = []
    _render_list(items, url_for, parts)
    return "".join(parts)


def _render_list(items: List[NavItem], url_for: Callable[[int], str], parts: List[str]) -> None:
    parts.append("<ul>")
    stack = [iter(items)]
    while stack:
        item = next(stack[-1], None)
        if item is None:
            stack.pop()
            parts.append("</ul>")
            if stack:
                parts.append("</li>")
            continue

        li_class = ' class="jstree-open"' if item.open else ""
        a_class = ' class="jstree-clicked"' if item.selected else ""
        name = escape(item.name)

        parts.append(
            f'<li id="{item.id}"{li_class}>'
            f'<a href="{escape(url_for(item.id))}" title="{name}"{a_class}>{name}</a>'
        )
        if item.children:
            parts.append("<ul>")
            stack.append(iter(item.children))
        else:
            parts.append("</li>")


def project_tree(db: Session, project_id: Optional[int]) -> List[dict]:
    return build_nested_format(load_nodes(db, project_id))


def project_navigation_html(
        db: Session,
        project_id: Optional[int],
        selected_id: Optional[int] = 0,
        url_for: Callable[[int], str] = document_url
) -> str:
    nodes = load_nodes(db, project_id)
    if not nodes:
        return ""
    return render_navigation_html(build_navigation(nodes, selected_id), url_for)
