"""Core (UI-agnostic) data-table logic.

This package contains:
- column model (value lookup vs. presentation)
- search / sort / pagination stages over in-memory records
- table state + transitions (reducer)
- evaluation into JSON-serializable payloads for host UIs
"""
