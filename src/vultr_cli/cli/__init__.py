"""CLI layer — the command table, handlers, rendering and error boundary.

Only this layer prints.  It may import from ``core`` and ``infra``;
neither of them imports from ``cli``.
"""
