"""Unit synchronization — the core that reconciles a target root with a source root.

This package provides:
- Discovery: deterministic listing of the units under a root
- Comparison: injectable strategies deciding whether a unit changed
- Synchronizer: new/update/unchanged/remove reconciliation with a report
- Errors: the fail-fast error taxonomy
"""
