"""Photo service: photos organized by category."""
