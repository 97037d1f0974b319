"""
Example script for relation graph analysis.

This script demonstrates how to:
1. Build relation graphs, including an equivalence relation
2. Check their relation properties and find roots and classes
3. Compare the breadth-first and depth-first traversals
4. Run the integrated pipeline and export the results
5. Visualize a graph and a traversal order
"""

import os
import sys
import matplotlib.pyplot as plt

# Add the parent directory to sys.path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from grapho_relations.core.graph import RelationGraph
from grapho_relations.analysis.metrics import RelationMetrics
from grapho_relations.pipeline import RelationPipeline
from grapho_relations.visualization.network import plot_relation_graph, plot_traversal_order


def create_sample_graphs():
    """Create a tree-like graph and an equivalence relation."""
    tree = RelationGraph(
        {"1", "2", "3", "4", "10", "11"},
        {("1", "2"), ("1", "3"), ("2", "4"), ("1", "10"), ("10", "11")},
        name="tree",
    )

    # Reflexive, symmetric and transitive closure of {(1, 2), (3, 10)}
    classes = [["1", "2"], ["3", "10"], ["4"]]
    edges = {(a, b) for members in classes for a in members for b in members}
    equivalence = RelationGraph({v for members in classes for v in members}, edges,
                                name="equivalence")
    return tree, equivalence


def main():
    print("1. Building sample graphs...")
    tree, equivalence = create_sample_graphs()
    print(f"  {tree!r}")
    print(f"  {equivalence!r}")

    print("\n2. Relation properties...")
    for graph in (tree, equivalence):
        properties = RelationMetrics(graph).relation_properties()
        print(f"  {graph.name}: {properties}")

    print("\n3. Roots and equivalence classes...")
    print(f"  tree roots: {tree.roots()}")
    print(f"  equivalence roots: {equivalence.roots()}")
    print(f"  classes: {equivalence.equivalence_classes()}")
    print(f"  class of '10': {equivalence.equivalence_class_of('10')}")

    print("\n4. Traversals of the tree...")
    print(f"  BFS (iterative): {tree.iterative_breadth_first_search()}")
    print(f"  BFS (recursive): {tree.recursive_breadth_first_search()}")
    print(f"  DFS (iterative): {tree.iterative_depth_first_search()}")
    print(f"  DFS (recursive): {tree.recursive_depth_first_search()}")

    print("\n5. Running the pipeline...")
    output_dir = os.path.join(os.path.dirname(__file__), "..", "output")
    config = {
        'steps': [
            {'name': 'export_results', 'enabled': True,
             'params': {'output_directory': output_dir, 'formats': ['csv', 'json']}}
        ],
        'stop_on_error': True,
    }
    context = RelationPipeline(config, graph=tree).run()
    print(f"  exported: {context['exports']}")

    print("\n6. Creating visualizations...")
    fig, axes = plt.subplots(1, 2, figsize=(14, 7))
    plot_relation_graph(tree, ax=axes[0], title="Tree (roots highlighted)")
    plot_traversal_order(tree, tree.iterative_depth_first_search(), ax=axes[1],
                         title="Depth-first order")
    plt.tight_layout()

    os.makedirs(output_dir, exist_ok=True)
    output_path = os.path.join(output_dir, "relation_analysis.png")
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    print(f"\nOutput saved to: {output_path}")

    print("\nExample completed successfully!")
    return tree, equivalence


if __name__ == "__main__":
    main()
