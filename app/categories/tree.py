"""Pure helpers over a flat list of category rows.

Everything here works on any objects exposing ``id`` and ``parent_id`` so the
same code serves ORM rows and plain test doubles. None of the helpers follow
object references: the hierarchy is rebuilt from ids every time, which keeps
them terminating even when the stored rows contain a cycle.
"""

import re
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    """``"Windows & Doors"`` -> ``"windows-doors"``."""
    return _NON_ALNUM.sub("-", (name or "").strip().lower()).strip("-")


@dataclass
class TreeNode:
    id: Any
    item: Any
    children: list = field(default_factory=list)


def children_index(categories: Iterable) -> dict:
    index: dict = {}
    for c in categories:
        index.setdefault(c.parent_id, []).append(c.id)
    return index


def descendant_ids(categories: Iterable, category_id) -> set:
    """``category_id`` plus every id reachable through child links."""
    index = children_index(categories)
    seen = {category_id}
    queue = deque([category_id])
    while queue:
        current = queue.popleft()
        for child_id in index.get(current, ()):
            if child_id not in seen:
                seen.add(child_id)
                queue.append(child_id)
    return seen


def would_create_cycle(categories: Iterable, category_id, new_parent_id) -> bool:
    if new_parent_id is None:
        return False
    return new_parent_id in descendant_ids(categories, category_id)


def build_tree(categories: Iterable, render: Callable[[Any], dict] | None = None) -> list[dict]:
    """Nest a flat, already ordered category list.

    A node goes under its parent when the parent is part of ``categories``,
    otherwise it is a root. Nodes that can only be reached through a stored
    cycle are emitted as roots so nothing is dropped or repeated.
    """
    render = render or (lambda c: {"id": c.id})
    rows = list(categories)
    arena = {c.id: TreeNode(id=c.id, item=c) for c in rows}

    root_ids = []
    for c in rows:
        if c.parent_id is not None and c.parent_id in arena and c.parent_id != c.id:
            arena[c.parent_id].children.append(c.id)
        else:
            root_ids.append(c.id)

    visited: set = set()

    def _render(node_id) -> dict:
        visited.add(node_id)
        node = arena[node_id]
        out = dict(render(node.item))
        out["children"] = [_render(child) for child in node.children if child not in visited]
        return out

    tree = [_render(rid) for rid in root_ids]
    for c in rows:
        if c.id not in visited:
            tree.append(_render(c.id))
    return tree
