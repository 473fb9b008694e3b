"""Reference graph for a message tree.

Nodes are dotted string paths; an edge ``a -> b`` means the string at ``a``
contains a reference to ``b``. Useful to see which strings are shared the
most and to list every reference cycle at once (the resolver only reports
the first one it runs into).
"""

import networkx as nx

from i18nrefs.analyzers.references import (
    PathNotFoundError,
    extract_references,
    get_value_by_path,
)
from i18nrefs.models.messages import MessageTree
from i18nrefs.utils.tree import iter_strings


def build_reference_graph(messages: MessageTree) -> nx.DiGraph:
    """Build a directed graph of references between strings.

    Node attributes:
        missing: True when the path does not exist in the tree.
        is_string: True when the path holds a string leaf.

    Edge attributes:
        references: Raw tokens linking the two paths, in order.
    """
    G = nx.DiGraph()

    for string_path, value in iter_strings(messages):
        for ref in extract_references(value):
            if ref.path not in G:
                try:
                    target = get_value_by_path(messages, ref.path)
                except PathNotFoundError:
                    G.add_node(ref.path, missing=True, is_string=False)
                else:
                    G.add_node(ref.path, missing=False, is_string=isinstance(target, str))

            if string_path not in G:
                G.add_node(string_path, missing=False, is_string=True)

            if G.has_edge(string_path, ref.path):
                G.edges[string_path, ref.path]["references"].append(ref.match)
            else:
                G.add_edge(string_path, ref.path, references=[ref.match])

    return G


def find_reference_cycles(G: nx.DiGraph) -> list[list[str]]:
    """Find every elementary reference cycle, shortest first.

    Self-references show up as single-node cycles.
    """
    if not G.nodes():
        return []

    cycles = list(nx.simple_cycles(G))
    cycles.sort(key=lambda cycle: (len(cycle), cycle))
    return cycles


def most_referenced(G: nx.DiGraph, n: int = 10) -> list[tuple[str, int]]:
    """Return the ``n`` paths referenced by the most distinct strings."""
    ranked = sorted(
        ((node, G.in_degree(node)) for node in G.nodes() if G.in_degree(node) > 0),
        key=lambda item: (-item[1], item[0]),
    )
    return ranked[:n]


def graph_summary(G: nx.DiGraph) -> dict:
    """Summarize a reference graph for JSON output."""
    return {
        "node_count": G.number_of_nodes(),
        "edge_count": G.number_of_edges(),
        "missing_targets": sorted(n for n, data in G.nodes(data=True) if data.get("missing")),
        "cycles": find_reference_cycles(G),
        "most_referenced": [
            {"path": path, "referenced_by": count} for path, count in most_referenced(G)
        ],
    }
