"""Core primitives: settings, logging, errors, identifiers, security and persistence."""
