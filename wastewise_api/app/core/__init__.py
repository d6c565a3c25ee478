"""Cross-cutting infrastructure: settings, logging, security, storage primitives."""
