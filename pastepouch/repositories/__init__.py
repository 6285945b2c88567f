"""
Persistence adapters.

The repository owns every SQL statement the service issues; front ends and
services only see RowSets and the exceptions from pastepouch.core.errors.
"""
