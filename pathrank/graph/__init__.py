"""Graph store backends, name catalog and edge materialization."""
