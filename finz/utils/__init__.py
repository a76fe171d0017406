"""Cross-cutting helpers (logging setup, filesystem paths)."""
