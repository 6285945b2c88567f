"""
Core utilities shared across PastePouch.

This package hosts configuration helpers (env vars, storage target and front
end selection), the exception hierarchy and logging setup. Routers,
repositories and the CLI depend on these primitives instead of reading
os.environ or configuring logging themselves.
"""
