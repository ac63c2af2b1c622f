"""Database access primitives: connection provider, transactions and schema."""
