"""PastePouch: store users and pastes, served over HTTP or a terminal menu."""

__version__ = "0.1.0"
