"""Chess engine building blocks: bitboards, a KPK bitbase, material terms, helpers and bench command lists."""

__version__ = "0.1.0"