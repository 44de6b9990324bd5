"""Dependency graph of a grammar's nonterminals.

Nodes are nonterminal names; there is an edge from `A` to `B` iff some
production of `A` has a child `B`. The edge attribute `operators` lists
the operators of those productions.
"""

import networkx as nx

def grammar_graph(nonterminals):
    """Build the dependency graph for a mapping from names to :class:`SemgusNonTerminal`."""
    g = nx.DiGraph()
    for name, nonterminal in nonterminals.items():
        g.add_node(name, term_type = nonterminal.term_type)
    for name, nonterminal in nonterminals.items():
        for operator, production in nonterminal.productions.items():
            for child in production.children:
                if g.has_edge(name, child.name):
                    operators = g[name][child.name]['operators']
                    if operator not in operators:
                        operators.append(operator)
                else:
                    g.add_edge(name, child.name, operators = [operator])
    return g

def problem_graph(problem):
    return grammar_graph(problem.nonterminals)

def reachable_nonterminals(g, root):
    return {root} | nx.descendants(g, root)

def unreachable_nonterminals(g, root):
    """Nonterminals that cannot occur in a term derived from `root`, sorted by name."""
    return sorted(set(g.nodes) - reachable_nonterminals(g, root))

def recursive_nonterminals(g):
    """Nonterminals that can (transitively) derive themselves, sorted by name."""
    res = set()
    for component in nx.strongly_connected_components(g):
        if len(component) > 1:
            res |= component
        else:
            node = next(iter(component))
            if g.has_edge(node, node):
                res.add(node)
    return sorted(res)

def unproductive_nonterminals(nonterminals):
    """Nonterminals that derive no finite term, sorted by name.

    A nonterminal is productive iff one of its productions has only
    productive children."""
    productive = set()
    changed = True
    while changed:
        changed = False
        for name, nonterminal in nonterminals.items():
            if name in productive:
                continue
            if any(all(child.name in productive for child in prod.children)
                   for prod in nonterminal.productions.values()):
                productive.add(name)
                changed = True
    return sorted(set(nonterminals) - productive)
