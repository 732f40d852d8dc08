"""
graph.py

PrecedenceGraph: a mutable directed graph of Steps where an edge
required -> dependent means "required must finish before dependent starts".

Kept as explicit adjacency sets (successors and predecessors per node), so
the ready set is a scan over in-degrees and removing a node is O(degree).
"""


class PrecedenceGraph:
    """
    Attributes:
      - successors (dict[Step, set[Step]]): for each step, which steps depend on it
      - predecessors (dict[Step, set[Step]]): for each step, which steps it waits for
    """
    def __init__(self):
        self.successors = {}
        self.predecessors = {}

    def add_node(self, step):
        """Add `step` if it is not already present."""
        if step not in self.successors:
            self.successors[step] = set()
            self.predecessors[step] = set()

    def add_edge(self, required, step):
        """Add both endpoints and the edge required -> step. Repeated edges collapse."""
        self.add_node(required)
        self.add_node(step)
        self.successors[required].add(step)
        self.predecessors[step].add(required)

    def remove_node(self, step):
        """Remove `step` together with every edge into or out of it."""
        for nxt in self.successors.pop(step):
            self.predecessors[nxt].discard(step)
        for prev in self.predecessors.pop(step):
            self.successors[prev].discard(step)

    def in_degree(self, step):
        return len(self.predecessors[step])

    def ready(self):
        """Steps with no unmet prerequisites in the current graph."""
        return {s for s, preds in self.predecessors.items() if not preds}

    def nodes(self):
        return set(self.successors)

    def edges(self):
        """All (required, step) pairs, sorted."""
        return sorted((req, nxt) for req, nexts in self.successors.items() for nxt in nexts)

    def copy(self):
        clone = PrecedenceGraph()
        clone.successors = {s: set(nexts) for s, nexts in self.successors.items()}
        clone.predecessors = {s: set(prevs) for s, prevs in self.predecessors.items()}
        return clone

    def __len__(self):
        return len(self.successors)

    def __contains__(self, step):
        return step in self.successors

    def __eq__(self, other):
        if not isinstance(other, PrecedenceGraph):
            return NotImplemented
        return self.predecessors == other.predecessors

    def __repr__(self):
        return f"PrecedenceGraph(nodes={len(self)}, edges={len(self.edges())})"
