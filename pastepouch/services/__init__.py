"""
High-level use cases for PastePouch.

Both front ends (HTTP routers and the CLI menu) call PasteService instead of
touching the repository or the row projector directly.
"""
