"""
Dependency graph between value paths.

Nodes are ValuePaths; an edge records that one path's template reads
another path. ``add_dependency(dependent, dependency)`` means the
dependency must be resolved first.

topological_sort() uses Kahn's algorithm over insertion-ordered nodes, so
the output is deterministic for a given build order. When a cycle
prevents a full ordering, a depth-first search reports one concrete
cycle, e.g. ``a -> b -> c -> a``.

Example:
    >>> graph = DependencyGraph()
    >>> graph.add_dependency(ValuePath("c"), ValuePath("b"))
    >>> graph.add_dependency(ValuePath("b"), ValuePath("a"))
    >>> [str(p) for p in graph.topological_sort()]
    ['a', 'b', 'c']
"""

from __future__ import annotations

import collections as _collections
import typing as _typing

import rigger.values.errors as errors
import rigger.values.tree as tree


class DependencyGraph:
    """
    Directed graph of "must resolve before" edges between value paths.

    Construction is purely additive. Nodes are created on first mention
    in either role; duplicate nodes and duplicate edges are ignored.
    """

    def __init__(self) -> None:
        # Dicts used as insertion-ordered sets
        self._dependencies: dict[tree.ValuePath, dict[tree.ValuePath, None]] = {}
        self._dependents: dict[tree.ValuePath, dict[tree.ValuePath, None]] = {}

    def add_node(self, path: tree.ValuePath) -> None:
        """Register a path as a node (idempotent)."""
        if path not in self._dependencies:
            self._dependencies[path] = {}
            self._dependents[path] = {}

    def add_dependency(self, dependent: tree.ValuePath, dependency: tree.ValuePath) -> None:
        """Record that `dependent` reads `dependency`, so it resolves after it."""
        self.add_node(dependent)
        self.add_node(dependency)
        self._dependencies[dependent][dependency] = None
        self._dependents[dependency][dependent] = None

    @property
    def nodes(self) -> list[tree.ValuePath]:
        """All nodes in insertion order."""
        return list(self._dependencies)

    @property
    def node_count(self) -> int:
        return len(self._dependencies)

    def is_empty(self) -> bool:
        return not self._dependencies

    def dependencies_of(self, path: tree.ValuePath) -> list[tree.ValuePath]:
        """Paths that `path` directly depends on."""
        return list(self._dependencies.get(path, ()))

    def __len__(self) -> int:
        return len(self._dependencies)

    def __contains__(self, path: object) -> bool:
        return path in self._dependencies

    def topological_sort(self) -> list[tree.ValuePath]:
        """
        Order all nodes so every dependency precedes its dependents.

        Returns:
            Nodes in resolution order (dependencies first).

        Raises:
            CircularDependencyError: If the graph has a cycle (including a
                node that depends on itself). The error names the cycle.
        """
        in_degree = {node: len(deps) for node, deps in self._dependencies.items()}
        ready = _collections.deque(node for node, degree in in_degree.items() if degree == 0)
        order: list[tree.ValuePath] = []

        while ready:
            node = ready.popleft()
            order.append(node)
            for dependent in self._dependents[node]:
                in_degree[dependent] -= 1
                if in_degree[dependent] == 0:
                    ready.append(dependent)

        if len(order) == len(self._dependencies):
            return order

        # Every node left with a positive in-degree is on a cycle or
        # downstream of one; start the search from the first of them.
        blocked = {node for node, degree in in_degree.items() if degree > 0}
        start = next(node for node in self._dependencies if node in blocked)
        cycle = self._find_cycle(start, blocked)
        raise errors.CircularDependencyError(cycle if cycle else [start])

    def _find_cycle(
        self,
        start: tree.ValuePath,
        candidates: _typing.Collection[tree.ValuePath],
    ) -> list[tree.ValuePath] | None:
        """
        Depth-first search from `start` for a cycle among `candidates`.

        Uses an explicit stack so long reference chains cannot hit the
        interpreter's recursion limit.

        Returns:
            The cycle as a path list that starts and ends on the same node
            (``[a, b, a]``), or None if no cycle is reachable.
        """
        finished: set[tree.ValuePath] = set()
        # node -> index in `trail` while the node is on the stack
        on_stack: dict[tree.ValuePath, int] = {start: 0}
        trail: list[tree.ValuePath] = [start]
        stack: list[_typing.Iterator[tree.ValuePath]] = [iter(self._dependencies[start])]

        while stack:
            advanced = False
            for dependency in stack[-1]:
                if dependency not in candidates or dependency in finished:
                    continue
                if dependency in on_stack:
                    return trail[on_stack[dependency] :] + [dependency]
                on_stack[dependency] = len(trail)
                trail.append(dependency)
                stack.append(iter(self._dependencies[dependency]))
                advanced = True
                break

            if not advanced:
                stack.pop()
                done = trail.pop()
                del on_stack[done]
                finished.add(done)

        return None
