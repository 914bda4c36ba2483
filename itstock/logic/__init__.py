"""Application logic layer.

Subpackages:
- shopping: low-stock shopping list and purchase list export
- stock: dashboard figures, inventory search and movement history

The controller module ties the domain aggregates to persistence.
"""
__all__ = ["shopping", "stock", "controller"]
