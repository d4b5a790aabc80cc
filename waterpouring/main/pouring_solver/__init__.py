"""Water pouring puzzle: state model, BFS solver and solution rendering."""
