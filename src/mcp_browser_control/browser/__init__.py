"""Browser identifiers, command table, process helpers and the process registry."""
