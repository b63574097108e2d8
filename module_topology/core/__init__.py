"""
Core domain of the module topology engine.

Contains module descriptors, the catalog, the dependency resolver and the
error taxonomy. Nothing in this layer touches the filesystem.
"""
