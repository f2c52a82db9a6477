"""
Graph store for DAG Canvas.

Holds the canonical list of task nodes and directed connections and all the
operations that mutate them. Nothing here knows about rendering or input.

Every invalid request (self-loop, duplicate edge, unknown node id) is a
silent no-op: the store is left untouched and a debug record is logged.
"""

import logging
import uuid
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional, Tuple

import networkx as nx

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Position:
    """Canvas-space coordinate of a node's top-left corner."""
    x: float
    y: float

    def offset(self, dx: float, dy: float) -> "Position":
        return Position(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class Node:
    id: str
    kind: str
    label: str
    position: Position
    color: str


@dataclass(frozen=True)
class Connection:
    id: str
    source: str
    target: str


def _new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex}"


class GraphStore:
    """
    Owns nodes and connections.

    Node order is append order, which the renderer uses as z-order.
    No derived state (adjacency, anchor geometry) is cached; use
    to_digraph() when adjacency is needed.
    """

    def __init__(self):
        self._nodes: List[Node] = []
        self._connections: List[Connection] = []

    @property
    def nodes(self) -> Tuple[Node, ...]:
        return tuple(self._nodes)

    @property
    def connections(self) -> Tuple[Connection, ...]:
        return tuple(self._connections)

    def get_node(self, node_id: str) -> Optional[Node]:
        for node in self._nodes:
            if node.id == node_id:
                return node
        return None

    def add_node(self, kind: str, label: str, color: str, position: Position) -> Node:
        node = Node(id=_new_id("node"), kind=kind, label=label, position=position, color=color)
        self._nodes = self._nodes + [node]
        logger.debug(f"Added node {node.id} ({kind}) at ({position.x}, {position.y})")
        return node

    def move_node(self, node_id: str, position: Position) -> None:
        if self.get_node(node_id) is None:
            logger.debug(f"move_node ignored: unknown node {node_id}")
            return
        self._nodes = [
            replace(node, position=position) if node.id == node_id else node
            for node in self._nodes
        ]

    def delete_node(self, node_id: str) -> None:
        """Remove a node together with every connection touching it."""
        if self.get_node(node_id) is None:
            logger.debug(f"delete_node ignored: unknown node {node_id}")
            return
        nodes = [node for node in self._nodes if node.id != node_id]
        connections = [
            conn for conn in self._connections
            if conn.source != node_id and conn.target != node_id
        ]
        # Both collections are swapped together so no connection dangles
        self._nodes, self._connections = nodes, connections
        logger.debug(f"Deleted node {node_id}")

    def add_connection(self, source: str, target: str) -> Optional[Connection]:
        """
        Append a directed connection source -> target.

        Returns None (and changes nothing) for self-loops, duplicate ordered
        pairs, or endpoints that are not live nodes. The reverse pair
        target -> source is a different connection and is allowed.
        """
        if source == target:
            logger.debug(f"add_connection ignored: self-loop on {source}")
            return None
        if self.get_node(source) is None or self.get_node(target) is None:
            logger.debug(f"add_connection ignored: unknown endpoint {source} -> {target}")
            return None
        if any(c.source == source and c.target == target for c in self._connections):
            logger.debug(f"add_connection ignored: duplicate {source} -> {target}")
            return None
        conn = Connection(id=_new_id("conn"), source=source, target=target)
        self._connections = self._connections + [conn]
        logger.debug(f"Connected {source} -> {target}")
        return conn

    def clear(self) -> None:
        self._nodes, self._connections = [], []
        logger.debug("Cleared graph")

    def to_digraph(self) -> nx.DiGraph:
        """Build a NetworkX view of the current graph (recomputed every call)."""
        G = nx.DiGraph()
        for node in self._nodes:
            G.add_node(node.id, kind=node.kind, label=node.label, color=node.color)
        for conn in self._connections:
            G.add_edge(conn.source, conn.target, id=conn.id)
        return G

    def summary(self) -> Dict[str, Any]:
        """Counts shown in the page status line."""
        G = self.to_digraph()
        roots = [n for n in G.nodes if G.in_degree(n) == 0]
        return {
            "nodes": G.number_of_nodes(),
            "connections": G.number_of_edges(),
            "roots": len(roots),
        }
