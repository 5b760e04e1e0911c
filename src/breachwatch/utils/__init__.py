"""Support namespace for small, dependency-light helpers.

Helpers here are stateless (or trivially stateful), carry no business rules,
and never import from application packages. Import specific helpers from
their defining modules; nothing is re-exported at the package level.
"""
